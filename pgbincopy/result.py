"""Tabular query results addressed by row and column."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import Optional, Union

_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")


def _parse_leading_integer(text: str) -> int:
    """The integer at the start of ``text``, or 0 if there is none."""
    match = _LEADING_INTEGER.match(text)
    return int(match.group(1)) if match else 0


class PostgresResult:
    """Rows of text values as returned by a query; ``None`` marks SQL NULL."""

    def __init__(
        self,
        rows: Iterable[Sequence[Optional[str]]],
        affected: Optional[Union[str, int]] = None,
    ) -> None:
        self._rows = tuple(tuple(row) for row in rows)
        self._affected = affected

    def _value(self, row: int, col: int) -> Optional[str]:
        if not (0 <= row < len(self._rows) and 0 <= col < len(self._rows[row])):
            raise IndexError(f"Postgres scanner - failed to fetch value for row {row} col {col}")
        return self._rows[row][col]

    def get_string(self, row: int, col: int) -> str:
        """The value as text; NULL reads as the empty string."""
        value = self._value(row, col)
        return "" if value is None else value

    def get_int32(self, row: int, col: int) -> int:
        return _parse_leading_integer(self.get_string(row, col))

    def get_int64(self, row: int, col: int) -> int:
        return _parse_leading_integer(self.get_string(row, col))

    def get_bool(self, row: int, col: int) -> bool:
        return self.get_string(row, col) == "t"

    def is_null(self, row: int, col: int) -> bool:
        return self._value(row, col) is None

    def count(self) -> int:
        """Number of rows."""
        return len(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def affected_rows(self) -> int:
        """Number of rows the command touched."""
        if self._affected is None:
            raise RuntimeError("Postgres scanner - AffectedRows called but none were available")
        if isinstance(self._affected, int):
            return self._affected
        return _parse_leading_integer(self._affected)