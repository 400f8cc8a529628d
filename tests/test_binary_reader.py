import datetime as dt
import uuid

import pytest

from pgbincopy.binary_reader import PostgresBinaryReader
from pgbincopy.binary_writer import (
    DATE_INFINITY,
    DATE_NINFINITY,
    TIMESTAMP_INFINITY,
    TIMESTAMP_NINFINITY,
    PostgresBinaryWriter,
)
from pgbincopy.conversion import (
    COPY_HEADER,
    DUCKDB_EPOCH_DATE,
    NBASE,
    NUMERIC_NEG,
    POSTGRES_EPOCH_JDATE,
    PostgresCopyError,
    PostgresDecimalConfig,
)


def _reader_for(write):
    writer = PostgresBinaryWriter()
    write(writer)
    return PostgresBinaryReader(writer.getvalue())


def test_read_integer_big_endian():
    reader = PostgresBinaryReader(b"\x00\x01\xff\xff")
    assert reader.read_integer(2) == 1
    assert reader.read_integer(2, signed=True) == -1
    assert reader.out_of_buffer()


def test_read_integer_out_of_buffer():
    reader = PostgresBinaryReader(b"\x00\x01")
    with pytest.raises(PostgresCopyError):
        reader.read_integer(4)


def test_read_integer_rejects_odd_size():
    reader = PostgresBinaryReader(b"\x00\x00\x00")
    with pytest.raises(ValueError):
        reader.read_integer(3)


def test_read_header_string():
    reader = _reader_for(lambda w: w.write_header())
    assert reader.read_string(len(COPY_HEADER)) == COPY_HEADER
    assert reader.read_integer(4) == 0
    assert reader.read_integer(4) == 0
    assert reader.out_of_buffer()


def test_read_string_out_of_buffer():
    reader = PostgresBinaryReader(b"abc")
    with pytest.raises(PostgresCopyError):
        reader.read_string(4)


@pytest.mark.parametrize("value", [True, False])
def test_boolean_round_trip(value):
    reader = _reader_for(lambda w: w.write_boolean(value))
    assert reader.read_integer(4, signed=True) == 1
    assert reader.read_boolean() is value


def test_float_and_double_round_trip():
    def write(w):
        w.write_float(1.5)
        w.write_double(-2.25e100)

    reader = _reader_for(write)
    assert reader.read_integer(4) == 4
    assert reader.read_float() == 1.5
    assert reader.read_integer(4) == 8
    assert reader.read_double() == -2.25e100


def test_postgres_epoch_date():
    reader = PostgresBinaryReader(b"\x00\x00\x00\x00")
    days = reader.read_date()
    assert days == POSTGRES_EPOCH_JDATE - DUCKDB_EPOCH_DATE
    assert dt.date(1970, 1, 1) + dt.timedelta(days=days) == dt.date(2000, 1, 1)


@pytest.mark.parametrize("days", [0, 1, -1, 19000, -400000, DATE_INFINITY, DATE_NINFINITY])
def test_date_round_trip(days):
    reader = _reader_for(lambda w: w.write_date(days))
    assert reader.read_integer(4) == 4
    assert reader.read_date() == days


def test_time_round_trip():
    reader = _reader_for(lambda w: w.write_time(dt.time(13, 45, 30, 123)))
    assert reader.read_integer(4) == 8
    micros = reader.read_time()
    assert divmod(micros, 1_000_000) == (13 * 3600 + 45 * 60 + 30, 123)


@pytest.mark.parametrize("offset", [0, 3600, -19800])
def test_time_tz_round_trip(offset):
    reader = _reader_for(lambda w: w.write_time_tz(5_000_000, offset))
    assert reader.read_integer(4) == 12
    assert reader.read_time_tz() == (5_000_000, offset)


@pytest.mark.parametrize(
    "micros", [0, 1_700_000_000_123_456, -86_400_000_000, TIMESTAMP_INFINITY, TIMESTAMP_NINFINITY]
)
def test_timestamp_round_trip(micros):
    reader = _reader_for(lambda w: w.write_timestamp(micros))
    assert reader.read_integer(4) == 8
    assert reader.read_timestamp() == micros


def test_interval_round_trip():
    reader = _reader_for(lambda w: w.write_interval(14, -3, 7_200_000_001))
    assert reader.read_integer(4) == 16
    assert reader.read_interval() == (14, -3, 7_200_000_001)


def test_uuid_round_trip():
    value = uuid.UUID("12345678-1234-5678-1234-567812345678")
    reader = _reader_for(lambda w: w.write_uuid(value))
    assert reader.read_integer(4) == 16
    assert reader.read_uuid() == value


def _decimal_config(reader):
    reader.read_integer(4, signed=True)
    ndigits = reader.read_integer(2)
    weight = reader.read_integer(2, signed=True)
    sign = reader.read_integer(2)
    scale = reader.read_integer(2)
    return PostgresDecimalConfig(scale, ndigits, weight, sign == NUMERIC_NEG)


@pytest.mark.parametrize(
    ("value", "scale"),
    [
        (12345, 2),
        (-1, 0),
        (0, 3),
        (5, 2),
        (10**20, 0),
        (-987654321, 9),
        (123456789012345678901234567890, 5),
    ],
)
def test_decimal_round_trip(value, scale):
    reader = _reader_for(lambda w: w.write_decimal(value, scale))
    config = _decimal_config(reader)
    assert config.scale == scale
    assert reader.read_decimal(config) == value
    assert reader.out_of_buffer()


def test_decimal_with_suppressed_trailing_groups():
    reader = PostgresBinaryReader(b"\x00\x01")
    config = PostgresDecimalConfig(scale=0, ndigits=1, weight=1, is_negative=False)
    assert reader.read_decimal(config) == NBASE


def test_decimal_without_digits_reads_nothing():
    reader = PostgresBinaryReader(b"\x00\x07")
    config = PostgresDecimalConfig(scale=2, ndigits=0, weight=0, is_negative=True)
    assert reader.read_decimal(config) == 0
    assert reader.position == 0


def test_decimal_truncated_buffer():
    reader = PostgresBinaryReader(b"\x00\x01")
    config = PostgresDecimalConfig(scale=0, ndigits=2, weight=1, is_negative=False)
    with pytest.raises(PostgresCopyError):
        reader.read_decimal(config)