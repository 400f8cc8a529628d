"""Decoder for values in the PostgreSQL binary COPY format."""

from __future__ import annotations

import struct
import uuid
from typing import Union

from .binary_writer import (
    DATE_INFINITY,
    DATE_NINFINITY,
    TIMESTAMP_INFINITY,
    TIMESTAMP_NINFINITY,
)
from .conversion import (
    DEC_DIGITS,
    DUCKDB_EPOCH_DATE,
    DUCKDB_EPOCH_TS,
    NBASE,
    POSTGRES_DATE_INF,
    POSTGRES_DATE_NINF,
    POSTGRES_EPOCH_JDATE,
    POSTGRES_EPOCH_TS,
    POSTGRES_INFINITY,
    POSTGRES_NINFINITY,
    PostgresCopyError,
    PostgresDecimalConfig,
)

_INTEGER_SIZES = frozenset({1, 2, 4, 8})


def _to_signed(value: int, bits: int) -> int:
    if value >= 1 << (bits - 1):
        return value - (1 << bits)
    return value


class PostgresBinaryReader:
    """Reads big-endian fields from a binary COPY buffer, front to back."""

    def __init__(self, data: Union[bytes, bytearray, memoryview]) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def position(self) -> int:
        """Offset of the next unread byte."""
        return self._pos

    def out_of_buffer(self) -> bool:
        """Whether every byte has been consumed."""
        return self._pos >= len(self._data)

    def _take(self, length: int, what: str) -> bytes:
        if length < 0 or self._pos + length > len(self._data):
            raise PostgresCopyError(f"Postgres scanner - out of buffer in {what}")
        chunk = self._data[self._pos : self._pos + length]
        self._pos += length
        return chunk

    def read_integer(self, size: int, signed: bool = False) -> int:
        """A big-endian integer of ``size`` bytes."""
        if size not in _INTEGER_SIZES:
            raise ValueError(f"integer size must be one of 1, 2, 4 or 8 bytes, got {size}")
        return int.from_bytes(self._take(size, "ReadInteger"), "big", signed=signed)

    def read_boolean(self) -> bool:
        return self.read_integer(1) > 0

    def read_float(self) -> float:
        return struct.unpack(">f", self._take(4, "ReadInteger"))[0]

    def read_double(self) -> float:
        return struct.unpack(">d", self._take(8, "ReadInteger"))[0]

    def read_date(self) -> int:
        """Days since 1970-01-01; infinities map to the writer's sentinels."""
        jd = self.read_integer(4)
        if jd == POSTGRES_DATE_INF:
            return DATE_INFINITY
        if jd == POSTGRES_DATE_NINF:
            return DATE_NINFINITY
        return _to_signed(jd, 32) + POSTGRES_EPOCH_JDATE - DUCKDB_EPOCH_DATE

    def read_time(self) -> int:
        """Microseconds since midnight."""
        return self.read_integer(8, signed=True)

    def read_time_tz(self) -> tuple[int, int]:
        """Microseconds since midnight and the offset in seconds east of UTC."""
        micros = self.read_integer(8, signed=True)
        tz_offset = self.read_integer(4, signed=True)
        return micros, -tz_offset

    def read_timestamp(self) -> int:
        """Microseconds since 1970-01-01; infinities map to the writer's sentinels."""
        usec = self.read_integer(8)
        if usec == POSTGRES_INFINITY:
            return TIMESTAMP_INFINITY
        if usec == POSTGRES_NINFINITY:
            return TIMESTAMP_NINFINITY
        return _to_signed(usec, 64) + (POSTGRES_EPOCH_TS - DUCKDB_EPOCH_TS)

    def read_interval(self) -> tuple[int, int, int]:
        """An interval as (months, days, microseconds)."""
        micros = self.read_integer(8, signed=True)
        days = self.read_integer(4, signed=True)
        months = self.read_integer(4, signed=True)
        return months, days, micros

    def read_uuid(self) -> uuid.UUID:
        return uuid.UUID(bytes=self._take(16, "ReadInteger"))

    def read_string(self, length: int) -> bytes:
        return self._take(length, "ReadString")

    def read_decimal(self, config: PostgresDecimalConfig) -> int:
        """The digit groups of a numeric, as an integer unscaled by ``config.scale``."""
        if config.ndigits == 0:
            return 0
        scale_power = 10**config.scale

        integral_part = 0
        if config.weight >= 0:
            integral_part = self.read_integer(2)
            for i in range(1, config.weight + 1):
                integral_part *= NBASE
                if i < config.ndigits:
                    integral_part += self.read_integer(2)
            integral_part *= scale_power

        # Fractional groups are left-aligned; the last one is shifted to match the scale.
        fractional_part = 0
        if config.ndigits > config.weight + 1:
            fractional_power = (config.ndigits - config.weight - 1) * DEC_DIGITS
            correction = fractional_power - config.scale
            for i in range(max(0, config.weight + 1), config.ndigits):
                digit = self.read_integer(2)
                if i + 1 < config.ndigits:
                    fractional_part = fractional_part * NBASE + digit
                    continue
                final_base = NBASE
                if correction >= 0:
                    compensation = 10**correction
                    final_base //= compensation
                    digit //= compensation
                else:
                    compensation = 10 ** (-correction)
                    final_base *= compensation
                    digit *= compensation
                fractional_part = fractional_part * final_base + digit

        result = integral_part + fractional_part
        return -result if config.is_negative else result