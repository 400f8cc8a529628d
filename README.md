# pgbincopy

Encode and decode values in PostgreSQL's `COPY` formats, and map column
types between PostgreSQL and a small logical type system.

## What it provides

- `pgbincopy.binary_writer.PostgresBinaryWriter` builds a binary `COPY`
  stream in memory. It writes the file header, row field counts, typed fields
  and the trailer. Fields can be integers, floats, dates, times, times with an
  offset, timestamps, intervals, UUIDs, numerics, strings, blobs, enums,
  arrays (including multidimensional ones) and composites. `write_value`
  picks the encoding from a `LogicalType` and writes `None` as NULL.
  `getvalue()` returns the bytes.
- `pgbincopy.text_writer.PostgresTextWriter` builds a tab-separated text
  `COPY` stream. It escapes newlines, carriage returns, backspace, form feed,
  tabs, vertical tabs, backslashes and double quotes. It writes NULL as a
  single backspace character and ends the stream with `\.`. It accepts only
  `VARCHAR` columns.
- `pgbincopy.binary_reader.PostgresBinaryReader` reads binary field values
  back from a buffer, front to back. Supported values are integers, booleans,
  floats, dates, times, timestamps, intervals, UUIDs, strings and numeric
  digit groups. Reading past the end raises
  `pgbincopy.conversion.PostgresCopyError`.
- `pgbincopy.typemap` maps between PostgreSQL type names, OIDs and
  `pgbincopy.types.LogicalType`:
  - `type_to_logical_type` resolves a type name and handles array dimensions,
    `numeric` precision and scale, geometric types and a fallback to
    `VARCHAR`.
  - `to_postgres_type` and `type_to_string` go the other way.
  - `to_postgres_oid`, `postgres_oid_to_name` and `supported_postgres_oid`
    work with the OIDs in `pgbincopy.oids`.
- `pgbincopy.version.extract_postgres_version` parses a server version
  string into a comparable `PostgresVersion`, with fields `major`, `minor`,
  `patch` and `instance_type`.
- `pgbincopy.result.PostgresResult` gives typed access, by row and column, to
  rows of text values.

## Installation

```
pip install .
```

## Examples

Write a binary COPY stream:

```python
from pgbincopy.binary_writer import PostgresBinaryWriter
from pgbincopy.types import LogicalType, LogicalTypeId, PostgresCopyState

writer = PostgresBinaryWriter(PostgresCopyState())
writer.write_header()
writer.begin_row(2)
writer.write_value(LogicalType(LogicalTypeId.INTEGER), 42)
writer.write_value(LogicalType(LogicalTypeId.VARCHAR), "hello")
writer.finish_row()
writer.write_footer()
payload = writer.getvalue()
```

Read a numeric back:

```python
from pgbincopy.binary_reader import PostgresBinaryReader
from pgbincopy.binary_writer import PostgresBinaryWriter
from pgbincopy.conversion import NUMERIC_NEG, PostgresDecimalConfig

writer = PostgresBinaryWriter()
writer.write_decimal(12345, 2)          # 123.45

reader = PostgresBinaryReader(writer.getvalue())
reader.read_integer(4)                  # field size
ndigits = reader.read_integer(2)
weight = reader.read_integer(2, signed=True)
sign = reader.read_integer(2)
scale = reader.read_integer(2)
config = PostgresDecimalConfig(scale, ndigits, weight, sign == NUMERIC_NEG)
assert reader.read_decimal(config) == 12345
```

Map types and parse a version string:

```python
from pgbincopy.typemap import type_to_logical_type
from pgbincopy.types import PostgresTypeData
from pgbincopy.version import extract_postgres_version

logical, annotations = type_to_logical_type(
    PostgresTypeData(type_name="_int4", array_dimensions=2)
)
assert str(logical) == "INTEGER[][]"

version = extract_postgres_version("PostgreSQL 15.13 on x86_64-pc-linux-gnu")
assert version.major == 15 and version.minor == 13
```

PostgreSQL does not accept NUL characters in `VARCHAR` values, so both
writers reject them with `PostgresCopyError`. To allow them, give the copy
state a replacement string:

```python
state = PostgresCopyState(null_byte_replacement="")
```

## What it does not do

The package only works on bytes and values in memory:

- It does not connect to a server, run queries or send `COPY` data.
- It does not parse whole binary `COPY` files. Header, row and field framing
  must be read by the caller with `PostgresBinaryReader`.
- `type_to_logical_type` resolves user-defined types only through the
  `lookup_type` callable it is given.

## Running the tests

```
pip install .[test]
pytest
```