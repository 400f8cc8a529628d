"""Encoder for the PostgreSQL text COPY format."""

from __future__ import annotations

from typing import Optional

from .binary_writer import NULL_BYTE_ERROR_MESSAGE
from .conversion import PostgresCopyError
from .types import LogicalType, LogicalTypeId, PostgresCopyState

_ESCAPES = {
    ord("\n"): "\\n",
    ord("\r"): "\\r",
    ord("\b"): "\\b",
    ord("\f"): "\\f",
    ord("\t"): "\\t",
    ord("\v"): "\\v",
    ord("\\"): "\\\\",
    ord('"'): '\\"',
}

# Marker the COPY statement is told to read as NULL.
_NULL_MARKER = "\b"


class PostgresTextWriter:
    """Builds a tab-separated text COPY stream in memory."""

    def __init__(self, state: Optional[PostgresCopyState] = None) -> None:
        self.state = state if state is not None else PostgresCopyState()
        self._parts: list[str] = []

    def getvalue(self) -> bytes:
        """Everything written so far, UTF-8 encoded."""
        return "".join(self._parts).encode("utf-8")

    def _escape(self, text: str) -> str:
        if "\0" in text:
            replacement = self.state.null_byte_replacement
            if replacement is None:
                raise PostgresCopyError(NULL_BYTE_ERROR_MESSAGE)
            text = text.replace("\0", replacement)
        return text.translate(_ESCAPES)

    def write_null(self) -> None:
        self._parts.append(_NULL_MARKER)

    def write_char(self, c: str) -> None:
        if len(c) != 1:
            raise ValueError(f"expected a single character, got {c!r}")
        self._parts.append(self._escape(c))

    def write_varchar(self, value: str) -> None:
        self._parts.append(self._escape(value))

    def write_value(self, logical_type: LogicalType, value: Optional[str]) -> None:
        """Write one VARCHAR field; ``None`` is written as NULL."""
        if logical_type.id is not LogicalTypeId.VARCHAR:
            raise TypeError("Text format can only write VARCHAR columns")
        if value is None:
            self.write_null()
        else:
            self.write_varchar(value)

    def write_separator(self) -> None:
        self._parts.append("\t")

    def finish_row(self) -> None:
        self._parts.append("\n")

    def write_footer(self) -> None:
        self._parts.append("\\.\n")