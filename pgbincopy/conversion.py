"""Constants and numeric helpers shared by the COPY readers and writers."""

from __future__ import annotations

from dataclasses import dataclass

# Julian day of 2000-01-01, the epoch PostgreSQL counts dates from.
POSTGRES_EPOCH_JDATE = 2451545
# Julian day of 1970-01-01, the epoch day counts are stored against here.
DUCKDB_EPOCH_DATE = 2440588
POSTGRES_MIN_DATE = -2440589
POSTGRES_MAX_DATE = 2145042906
POSTGRES_DATE_INF = 2147483647
POSTGRES_DATE_NINF = 2147483648
POSTGRES_EPOCH_TS = 211813488000000000
DUCKDB_EPOCH_TS = 210866803200000000
POSTGRES_INFINITY = 9223372036854775807
POSTGRES_NINFINITY = 9223372036854775808

# Base of a numeric digit group and the decimal digits it holds.
NBASE = 10000
DEC_DIGITS = 4

NUMERIC_SIGN_MASK = 0xC000
NUMERIC_POS = 0x0000
NUMERIC_NEG = 0x4000
NUMERIC_SHORT = 0x8000
NUMERIC_SPECIAL = 0xC000

NUMERIC_EXT_SIGN_MASK = 0xF000
NUMERIC_NAN = 0xC000
NUMERIC_PINF = 0xD000
NUMERIC_NINF = 0xF000
NUMERIC_INF_SIGN_MASK = 0x2000

NUMERIC_DSCALE_MASK = 0x3FFF
NUMERIC_SHORT_SIGN_MASK = 0x2000
NUMERIC_SHORT_DSCALE_MASK = 0x1F80
NUMERIC_SHORT_DSCALE_SHIFT = 7
NUMERIC_SHORT_DSCALE_MAX = NUMERIC_SHORT_DSCALE_MASK >> NUMERIC_SHORT_DSCALE_SHIFT
NUMERIC_SHORT_WEIGHT_SIGN_MASK = 0x0040
NUMERIC_SHORT_WEIGHT_MASK = 0x003F
NUMERIC_SHORT_WEIGHT_MAX = NUMERIC_SHORT_WEIGHT_MASK
NUMERIC_SHORT_WEIGHT_MIN = -(NUMERIC_SHORT_WEIGHT_MASK + 1)

# Signature that opens every binary COPY stream.
COPY_HEADER = b"PGCOPY\n\xff\r\n\x00"
COPY_HEADER_LENGTH = len(COPY_HEADER)

_MAX_INTEGER_POWER = 19
_MAX_HUGEINT_POWER = 39


class PostgresCopyError(Exception):
    """Raised when data cannot be encoded to or decoded from a COPY stream."""


@dataclass(frozen=True)
class PostgresDecimalConfig:
    """Header of a binary numeric value."""

    scale: int
    ndigits: int
    weight: int
    is_negative: bool


def integer_power_of_ten(index: int) -> int:
    """Return 10**index for the range a signed 64-bit integer can hold."""
    if not 0 <= index < _MAX_INTEGER_POWER:
        raise ValueError(f"power of ten {index} is out of range for a 64-bit integer")
    return 10**index


def hugeint_power_of_ten(index: int) -> int:
    """Return 10**index for the range a signed 128-bit integer can hold."""
    if not 0 <= index < _MAX_HUGEINT_POWER:
        raise ValueError(f"power of ten {index} is out of range for a 128-bit integer")
    return 10**index


def double_power_of_ten(index: int) -> float:
    """Return 10**index as a float."""
    return 10.0 ** float(index)