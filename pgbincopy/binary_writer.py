"""Encoder for the PostgreSQL binary COPY format."""

from __future__ import annotations

import datetime as _dt
import math
import struct
import uuid
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Optional, Sequence, Union

from .conversion import (
    COPY_HEADER,
    DEC_DIGITS,
    DUCKDB_EPOCH_DATE,
    DUCKDB_EPOCH_TS,
    NBASE,
    NUMERIC_NEG,
    NUMERIC_POS,
    POSTGRES_DATE_INF,
    POSTGRES_DATE_NINF,
    POSTGRES_EPOCH_JDATE,
    POSTGRES_EPOCH_TS,
    POSTGRES_INFINITY,
    POSTGRES_MAX_DATE,
    POSTGRES_MIN_DATE,
    POSTGRES_NINFINITY,
    PostgresCopyError,
)
from .typemap import to_postgres_oid
from .types import LogicalType, LogicalTypeId, PostgresCopyState

# Day and microsecond counts that stand for +/- infinity.
DATE_INFINITY = 2**31 - 1
DATE_NINFINITY = -(2**31 - 1)
TIMESTAMP_INFINITY = 2**63 - 1
TIMESTAMP_NINFINITY = -(2**63 - 1)

NULL_BYTE_ERROR_MESSAGE = (
    "Attempting to write a VARCHAR value with a NULL-byte. Postgres does not "
    "support NULL-bytes in VARCHAR values.\n* SET pg_null_byte_replacement='' "
    "to remove NULL bytes or replace them with another character"
)

_INTEGER_SIZES = frozenset({1, 2, 4, 8})
_INT32_MAX = 2**31 - 1
_UINT64_MASK = (1 << 64) - 1
_UNIX_EPOCH = _dt.datetime(1970, 1, 1)
_UNIX_EPOCH_UTC = _dt.datetime(1970, 1, 1, tzinfo=_dt.timezone.utc)
_UNIX_EPOCH_ORDINAL = _dt.date(1970, 1, 1).toordinal()
_ONE_MICROSECOND = _dt.timedelta(microseconds=1)
_MICROS_PER_SECOND = 1_000_000


def _pack(value: int, size: int) -> bytes:
    """Big-endian bytes of ``value``, accepting either a signed or unsigned range."""
    if size not in _INTEGER_SIZES:
        raise ValueError(f"integer size must be one of 1, 2, 4 or 8 bytes, got {size}")
    bits = size * 8
    if not -(1 << (bits - 1)) <= value < (1 << bits):
        raise ValueError(f"integer {value} does not fit in {size} bytes")
    return (value & ((1 << bits) - 1)).to_bytes(size, "big")


def _format_date(days: int) -> str:
    try:
        return (_dt.date(1970, 1, 1) + _dt.timedelta(days=days)).isoformat()
    except OverflowError:
        return f"{days} days from 1970-01-01"


def _date_to_days(value: Union[_dt.date, int, float]) -> Union[int, float]:
    if isinstance(value, _dt.date):
        return value.toordinal() - _UNIX_EPOCH_ORDINAL
    return value


def _time_to_micros(value: Union[_dt.time, int]) -> int:
    if isinstance(value, _dt.time):
        seconds = value.hour * 3600 + value.minute * 60 + value.second
        return seconds * _MICROS_PER_SECOND + value.microsecond
    return int(value)


def _timestamp_to_micros(value: Union[_dt.datetime, int, float]) -> Union[int, float]:
    if isinstance(value, _dt.datetime):
        epoch = _UNIX_EPOCH_UTC if value.tzinfo is not None else _UNIX_EPOCH
        return (value - epoch) // _ONE_MICROSECOND
    return value


def _to_uuid(value: Union[uuid.UUID, int, str, bytes]) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    if isinstance(value, int):
        return uuid.UUID(int=value)
    if isinstance(value, (bytes, bytearray)):
        return uuid.UUID(bytes=bytes(value))
    return uuid.UUID(str(value))


def _unscaled_decimal(value: Any, scale: int) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value * 10**scale
    number = value if isinstance(value, Decimal) else Decimal(str(value))
    if not number.is_finite():
        raise PostgresCopyError(f"cannot write {number} as a DECIMAL value")
    with localcontext() as ctx:
        ctx.prec = 100
        return int(number.scaleb(scale).to_integral_value(rounding=ROUND_HALF_UP))


class PostgresBinaryWriter:
    """Builds a binary COPY stream in memory."""

    def __init__(self, state: Optional[PostgresCopyState] = None) -> None:
        self.state = state if state is not None else PostgresCopyState()
        self._buffer = bytearray()

    def getvalue(self) -> bytes:
        """Everything written so far."""
        return bytes(self._buffer)

    def _raw(self, value: int, size: int) -> None:
        self._buffer += _pack(value, size)

    def _start_sized_field(self) -> int:
        start = len(self._buffer)
        self._raw(0, 4)
        return start

    def _finish_sized_field(self, start: int) -> None:
        size = len(self._buffer) - start - 4
        self._buffer[start : start + 4] = _pack(size, 4)

    def write_header(self) -> None:
        self._buffer += COPY_HEADER
        self._raw(0, 4)  # flags
        self._raw(0, 4)  # header extension length

    def write_footer(self) -> None:
        self._raw(-1, 2)

    def begin_row(self, column_count: int) -> None:
        self._raw(column_count, 2)

    def finish_row(self) -> None:
        """Rows need no terminator in the binary format."""

    def write_null(self) -> None:
        self._raw(-1, 4)

    def write_integer(self, value: int, size: int) -> None:
        """A length-prefixed big-endian integer of ``size`` bytes."""
        payload = _pack(value, size)
        self._raw(size, 4)
        self._buffer += payload

    def write_boolean(self, value: bool) -> None:
        self.write_integer(1 if value else 0, 1)

    def write_float(self, value: float) -> None:
        self._raw(4, 4)
        self._buffer += struct.pack(">f", value)

    def write_double(self, value: float) -> None:
        self._raw(8, 4)
        self._buffer += struct.pack(">d", value)

    @staticmethod
    def duckdb_date_to_postgres(days: Union[int, float]) -> int:
        """The wire value of a day count since 1970-01-01."""
        if days == DATE_INFINITY or days == math.inf:
            return POSTGRES_DATE_INF
        if days == DATE_NINFINITY or days == -math.inf:
            return POSTGRES_DATE_NINF
        days = int(days)
        if days <= POSTGRES_MIN_DATE or days >= POSTGRES_MAX_DATE:
            raise PostgresCopyError(
                f"DATE \"{_format_date(days)}\" is out of range for Postgres' DATE field"
            )
        return (days + DUCKDB_EPOCH_DATE - POSTGRES_EPOCH_JDATE) & 0xFFFFFFFF

    def write_date(self, days: Union[_dt.date, int, float]) -> None:
        self.write_integer(self.duckdb_date_to_postgres(_date_to_days(days)), 4)

    def write_time(self, micros: Union[_dt.time, int]) -> None:
        self.write_integer(_time_to_micros(micros), 8)

    def write_time_tz(self, micros: Union[_dt.time, int], offset: Optional[int] = None) -> None:
        """A time of day with its UTC offset in seconds east of Greenwich."""
        if offset is None:
            offset = 0
            if isinstance(micros, _dt.time):
                utc_offset = micros.utcoffset()
                if utc_offset is not None:
                    offset = int(utc_offset.total_seconds())
        self._raw(12, 4)
        self._raw(_time_to_micros(micros), 8)
        self._raw(-offset, 4)

    @staticmethod
    def duckdb_timestamp_to_postgres(micros: Union[int, float]) -> int:
        """The wire value of a microsecond count since 1970-01-01."""
        if micros == TIMESTAMP_INFINITY or micros == math.inf:
            return POSTGRES_INFINITY
        if micros == TIMESTAMP_NINFINITY or micros == -math.inf:
            return POSTGRES_NINFINITY
        return (int(micros) - (POSTGRES_EPOCH_TS - DUCKDB_EPOCH_TS)) & _UINT64_MASK

    def write_timestamp(self, micros: Union[_dt.datetime, int, float]) -> None:
        self.write_integer(self.duckdb_timestamp_to_postgres(_timestamp_to_micros(micros)), 8)

    def write_interval(self, months: int, days: int, micros: int) -> None:
        self._raw(16, 4)
        self._raw(micros, 8)
        self._raw(days, 4)
        self._raw(months, 4)

    def write_uuid(self, value: Union[uuid.UUID, int, str, bytes]) -> None:
        self._raw(16, 4)
        self._buffer += _to_uuid(value).bytes

    def write_decimal(self, value: int, scale: int) -> None:
        """A numeric given as an unscaled integer and its scale."""
        if value < 0:
            value = -value
            sign = NUMERIC_NEG
        else:
            sign = NUMERIC_POS
        if scale == 0:
            integer_part, fractional_part = value, 0
        else:
            integer_part, fractional_part = divmod(value, 10**scale)

        integral_digits: list[int] = []
        while integer_part > 0:
            integer_part, digit = divmod(integer_part, NBASE)
            integral_digits.append(digit)

        # Fractional digit groups are left-aligned, so pad the fraction to whole groups.
        fractional_ndigits = (scale + DEC_DIGITS - 1) // DEC_DIGITS
        fractional_part *= 10 ** (fractional_ndigits * DEC_DIGITS - scale)
        fractional_digits: list[int] = []
        for _ in range(fractional_ndigits):
            fractional_part, digit = divmod(fractional_part, NBASE)
            fractional_digits.append(digit)

        ndigits = len(integral_digits) + fractional_ndigits
        self._raw(2 * (4 + ndigits), 4)
        self._raw(ndigits, 2)
        self._raw(len(integral_digits) - 1, 2)
        self._raw(sign, 2)
        self._raw(scale, 2)
        for digit in reversed(integral_digits):
            self._raw(digit, 2)
        for digit in reversed(fractional_digits):
            self._raw(digit, 2)

    def write_raw_blob(self, value: Union[bytes, bytearray, memoryview]) -> None:
        data = bytes(value)
        if len(data) > _INT32_MAX:
            raise PostgresCopyError(f"value of {len(data)} bytes is too large for a COPY field")
        self._raw(len(data), 4)
        self._buffer += data

    def write_varchar(self, value: str) -> None:
        if "\0" in value:
            replacement = self.state.null_byte_replacement
            if replacement is None:
                raise PostgresCopyError(NULL_BYTE_ERROR_MESSAGE)
            value = value.replace("\0", replacement)
        self.write_raw_blob(value.encode("utf-8"))

    def _write_enum(self, logical_type: LogicalType, value: Union[int, str]) -> None:
        labels = logical_type.enum_values
        if isinstance(value, int) and not isinstance(value, bool):
            if not 0 <= value < len(labels):
                raise PostgresCopyError(f"enum index {value} is out of range for {logical_type}")
            label = labels[value]
        else:
            label = value
            if label not in labels:
                raise PostgresCopyError(f"{label!r} is not a value of {logical_type}")
        self.write_varchar(label)

    def _write_array(
        self,
        list_type: LogicalType,
        lists: Sequence[Optional[Sequence[Any]]],
        dimensions: Sequence[int],
        depth: int,
    ) -> None:
        child_type = list_type.child_type()
        for entry in lists:
            entries = [] if entry is None else entry
            if len(entries) != dimensions[depth]:
                raise PostgresCopyError(
                    "Postgres multidimensional arrays must all have matching dimensions - "
                    f"found a length mismatch (found {len(entries)} entries, expected {dimensions[depth]})"
                )
            if child_type.id is LogicalTypeId.LIST:
                self._write_array(child_type, entries, dimensions, depth + 1)
            else:
                for element in entries:
                    self.write_value(child_type, element)

    def _write_list(self, logical_type: LogicalType, value: Sequence[Any]) -> None:
        value_oid = to_postgres_oid(logical_type.child_type())
        if len(value) == 0:
            self._raw(12, 4)
            self._raw(0, 4)  # ndim
            self._raw(0, 4)  # has nulls
            self._raw(value_oid, 4)
            return

        dimensions: list[int] = []
        current_type: LogicalType = logical_type
        current: Any = value
        while current_type.id is LogicalTypeId.LIST:
            entries = [] if current is None else current
            dimensions.append(len(entries))
            if not entries:
                break
            current_type = current_type.child_type()
            current = entries[0]

        start = self._start_sized_field()
        self._raw(len(dimensions), 4)
        self._raw(1, 4)  # has nulls
        self._raw(value_oid, 4)
        for dimension in dimensions:
            self._raw(dimension, 4)
            self._raw(1, 4)  # lower bound
        self._write_array(logical_type, [value], dimensions, 0)
        self._finish_sized_field(start)

    def _write_struct(self, logical_type: LogicalType, value: Any) -> None:
        fields = logical_type.fields
        if isinstance(value, Mapping):
            try:
                values = [value[name] for name, _ in fields]
            except KeyError as missing:
                raise PostgresCopyError(f"struct value has no field {missing}") from None
        else:
            values = list(value)
            if len(values) != len(fields):
                raise PostgresCopyError(
                    f"struct value has {len(values)} fields, expected {len(fields)}"
                )
        start = self._start_sized_field()
        self._raw(len(fields), 4)
        for (_, child_type), child_value in zip(fields, values):
            self._raw(to_postgres_oid(child_type), 4)
            self.write_value(child_type, child_value)
        self._finish_sized_field(start)

    def write_value(self, logical_type: LogicalType, value: Any) -> None:
        """Write one field of ``logical_type``; ``None`` is written as NULL."""
        if value is None:
            self.write_null()
            return
        match logical_type.id:
            case LogicalTypeId.BOOLEAN:
                self.write_boolean(bool(value))
            case LogicalTypeId.SMALLINT:
                self.write_integer(value, 2)
            case LogicalTypeId.INTEGER:
                self.write_integer(value, 4)
            case LogicalTypeId.BIGINT:
                self.write_integer(value, 8)
            case LogicalTypeId.FLOAT:
                self.write_float(value)
            case LogicalTypeId.DOUBLE:
                self.write_double(value)
            case LogicalTypeId.DECIMAL:
                self.write_decimal(_unscaled_decimal(value, logical_type.scale), logical_type.scale)
            case LogicalTypeId.DATE:
                self.write_date(value)
            case LogicalTypeId.TIME:
                self.write_time(value)
            case LogicalTypeId.TIME_TZ:
                if isinstance(value, tuple):
                    self.write_time_tz(*value)
                else:
                    self.write_time_tz(value)
            case LogicalTypeId.TIMESTAMP | LogicalTypeId.TIMESTAMP_TZ:
                self.write_timestamp(value)
            case LogicalTypeId.INTERVAL:
                if isinstance(value, _dt.timedelta):
                    micros = value.seconds * _MICROS_PER_SECOND + value.microseconds
                    self.write_interval(0, value.days, micros)
                else:
                    self.write_interval(*value)
            case LogicalTypeId.UUID:
                self.write_uuid(value)
            case LogicalTypeId.VARCHAR:
                self.write_varchar(value)
            case LogicalTypeId.BLOB:
                self.write_raw_blob(value)
            case LogicalTypeId.ENUM:
                self._write_enum(logical_type, value)
            case LogicalTypeId.LIST:
                self._write_list(logical_type, value)
            case LogicalTypeId.STRUCT:
                self._write_struct(logical_type, value)
            case _:
                raise NotImplementedError(
                    f'Type "{logical_type}" is not supported for Postgres binary copy'
                )