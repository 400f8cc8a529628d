"""Mapping between PostgreSQL type names, oids and logical types."""

from __future__ import annotations

import copy
from collections.abc import Callable
from typing import Optional

from . import oids
from .types import (
    LogicalType,
    LogicalTypeId,
    PostgresType,
    PostgresTypeAnnotation,
    PostgresTypeData,
)

TypeLookup = Callable[[str], Optional[tuple[LogicalType, PostgresType]]]

_MAX_DECIMAL_WIDTH = 38
_UINT64_MASK = (1 << 64) - 1


def _simple(type_id: LogicalTypeId) -> LogicalType:
    return LogicalType(type_id)


_VARCHAR = _simple(LogicalTypeId.VARCHAR)
_DOUBLE = _simple(LogicalTypeId.DOUBLE)

_UNNAMED_TYPE_ERRORS = {
    LogicalTypeId.ENUM: "Enums in Postgres must be named - unnamed enums are not supported. "
    "Use CREATE TYPE to create a named enum.",
    LogicalTypeId.STRUCT: "Composite types in Postgres must be named - unnamed composite types are not "
    "supported. Use CREATE TYPE to create a named composite type.",
    LogicalTypeId.MAP: "MAP type not supported in Postgres",
    LogicalTypeId.UNION: "UNION type not supported in Postgres",
}

_TYPE_NAMES = {
    LogicalTypeId.FLOAT: "REAL",
    LogicalTypeId.DOUBLE: "FLOAT",
    LogicalTypeId.BLOB: "BYTEA",
}

_SIMPLE_PG_TYPES = {
    "bool": (LogicalTypeId.BOOLEAN, PostgresTypeAnnotation.STANDARD),
    "int2": (LogicalTypeId.SMALLINT, PostgresTypeAnnotation.STANDARD),
    "int4": (LogicalTypeId.INTEGER, PostgresTypeAnnotation.STANDARD),
    "int8": (LogicalTypeId.BIGINT, PostgresTypeAnnotation.STANDARD),
    # oid is an unsigned four-byte integer
    "oid": (LogicalTypeId.UINTEGER, PostgresTypeAnnotation.STANDARD),
    "float4": (LogicalTypeId.FLOAT, PostgresTypeAnnotation.STANDARD),
    "float8": (LogicalTypeId.DOUBLE, PostgresTypeAnnotation.STANDARD),
    "char": (LogicalTypeId.VARCHAR, PostgresTypeAnnotation.FIXED_LENGTH_CHAR),
    "bpchar": (LogicalTypeId.VARCHAR, PostgresTypeAnnotation.FIXED_LENGTH_CHAR),
    "varchar": (LogicalTypeId.VARCHAR, PostgresTypeAnnotation.STANDARD),
    "text": (LogicalTypeId.VARCHAR, PostgresTypeAnnotation.STANDARD),
    "json": (LogicalTypeId.VARCHAR, PostgresTypeAnnotation.STANDARD),
    "jsonb": (LogicalTypeId.VARCHAR, PostgresTypeAnnotation.JSONB),
    "date": (LogicalTypeId.DATE, PostgresTypeAnnotation.STANDARD),
    "bytea": (LogicalTypeId.BLOB, PostgresTypeAnnotation.STANDARD),
    "time": (LogicalTypeId.TIME, PostgresTypeAnnotation.STANDARD),
    "timetz": (LogicalTypeId.TIME_TZ, PostgresTypeAnnotation.STANDARD),
    "timestamp": (LogicalTypeId.TIMESTAMP, PostgresTypeAnnotation.STANDARD),
    "timestamptz": (LogicalTypeId.TIMESTAMP_TZ, PostgresTypeAnnotation.STANDARD),
    "interval": (LogicalTypeId.INTERVAL, PostgresTypeAnnotation.STANDARD),
    "uuid": (LogicalTypeId.UUID, PostgresTypeAnnotation.STANDARD),
}

_GEOMETRY_LIST_TYPES = {
    "line": PostgresTypeAnnotation.GEOM_LINE,
    "lseg": PostgresTypeAnnotation.GEOM_LINE_SEGMENT,
    "box": PostgresTypeAnnotation.GEOM_BOX,
    "path": PostgresTypeAnnotation.GEOM_PATH,
    "polygon": PostgresTypeAnnotation.GEOM_POLYGON,
    "circle": PostgresTypeAnnotation.GEOM_CIRCLE,
}

_PASSTHROUGH_IDS = frozenset(
    {
        LogicalTypeId.BOOLEAN,
        LogicalTypeId.SMALLINT,
        LogicalTypeId.INTEGER,
        LogicalTypeId.BIGINT,
        LogicalTypeId.FLOAT,
        LogicalTypeId.DOUBLE,
        LogicalTypeId.ENUM,
        LogicalTypeId.BLOB,
        LogicalTypeId.DATE,
        LogicalTypeId.DECIMAL,
        LogicalTypeId.INTERVAL,
        LogicalTypeId.TIME,
        LogicalTypeId.TIME_TZ,
        LogicalTypeId.TIMESTAMP,
        LogicalTypeId.TIMESTAMP_TZ,
        LogicalTypeId.UUID,
        LogicalTypeId.VARCHAR,
    }
)

_WIDENED_TYPES = {
    LogicalTypeId.TIMESTAMP_SEC: _simple(LogicalTypeId.TIMESTAMP),
    LogicalTypeId.TIMESTAMP_MS: _simple(LogicalTypeId.TIMESTAMP),
    LogicalTypeId.TIMESTAMP_NS: _simple(LogicalTypeId.TIMESTAMP),
    LogicalTypeId.TINYINT: _simple(LogicalTypeId.SMALLINT),
    LogicalTypeId.UTINYINT: _simple(LogicalTypeId.BIGINT),
    LogicalTypeId.USMALLINT: _simple(LogicalTypeId.BIGINT),
    LogicalTypeId.UINTEGER: _simple(LogicalTypeId.BIGINT),
    LogicalTypeId.UBIGINT: LogicalType.decimal(20, 0),
    LogicalTypeId.HUGEINT: _DOUBLE,
}

_TYPE_OIDS = {
    LogicalTypeId.BOOLEAN: oids.BOOLOID,
    LogicalTypeId.SMALLINT: oids.INT2OID,
    LogicalTypeId.INTEGER: oids.INT4OID,
    LogicalTypeId.BIGINT: oids.INT8OID,
    LogicalTypeId.FLOAT: oids.FLOAT4OID,
    LogicalTypeId.DOUBLE: oids.FLOAT8OID,
    LogicalTypeId.VARCHAR: oids.VARCHAROID,
    LogicalTypeId.BLOB: oids.BYTEAOID,
    LogicalTypeId.DATE: oids.DATEOID,
    LogicalTypeId.TIME: oids.TIMEOID,
    LogicalTypeId.TIMESTAMP: oids.TIMESTAMPOID,
    LogicalTypeId.INTERVAL: oids.INTERVALOID,
    LogicalTypeId.TIME_TZ: oids.TIMETZOID,
    LogicalTypeId.TIMESTAMP_TZ: oids.TIMESTAMPTZOID,
    LogicalTypeId.BIT: oids.BITOID,
    LogicalTypeId.UUID: oids.UUIDOID,
}

_OID_NAMES = {
    oids.BOOLOID: "bool",
    oids.INT2OID: "int2",
    oids.INT4OID: "int4",
    oids.INT8OID: "int8",
    oids.FLOAT4OID: "float4",
    oids.FLOAT8OID: "float8",
    oids.CHAROID: "char",
    oids.BPCHAROID: "char",
    oids.TEXTOID: "varchar",
    oids.VARCHAROID: "varchar",
    oids.JSONOID: "json",
    oids.BYTEAOID: "bytea",
    oids.DATEOID: "date",
    oids.TIMEOID: "time",
    oids.TIMESTAMPOID: "timestamp",
    oids.INTERVALOID: "interval",
    oids.TIMETZOID: "timetz",
    oids.TIMESTAMPTZOID: "timestamptz",
    oids.BITOID: "bit",
    oids.UUIDOID: "uuid",
    oids.NUMERICOID: "numeric",
    oids.JSONBOID: "jsonb",
    oids.BOOLARRAYOID: "_bool",
    oids.CHARARRAYOID: "_char",
    oids.BPCHARARRAYOID: "_char",
    oids.INT8ARRAYOID: "_int8",
    oids.INT2ARRAYOID: "_int2",
    oids.INT4ARRAYOID: "_int4",
    oids.FLOAT4ARRAYOID: "_float4",
    oids.FLOAT8ARRAYOID: "_float8",
    oids.TEXTARRAYOID: "_varchar",
    oids.VARCHARARRAYOID: "_varchar",
    oids.JSONARRAYOID: "_json",
    oids.JSONBARRAYOID: "_jsonb",
    oids.NUMERICARRAYOID: "_numeric",
    oids.UUIDARRAYOID: "_uuid",
    oids.DATEARRAYOID: "_date",
    oids.TIMEARRAYOID: "_time",
    oids.TIMESTAMPARRAYOID: "_timestamp",
    oids.TIMESTAMPTZARRAYOID: "_timestamptz",
    oids.INTERVALARRAYOID: "_interval",
    oids.TIMETZARRAYOID: "_timetz",
    oids.BITARRAYOID: "_bit",
}


def type_to_string(logical_type: LogicalType) -> str:
    """The PostgreSQL spelling of a logical type, for use in DDL."""
    if logical_type.alias:
        if logical_type.alias.lower() == "wkb_blob":
            return "GEOMETRY"
        return logical_type.alias
    type_id = logical_type.id
    if type_id in _TYPE_NAMES:
        return _TYPE_NAMES[type_id]
    if type_id is LogicalTypeId.LIST:
        return type_to_string(logical_type.child_type()) + "[]"
    if type_id in _UNNAMED_TYPE_ERRORS:
        raise NotImplementedError(_UNNAMED_TYPE_ERRORS[type_id])
    return str(logical_type)


def geometry_type() -> LogicalType:
    """The blob type used to carry geometry values."""
    return _simple(LogicalTypeId.BLOB).with_alias("WKB_BLOB")


def remove_alias(logical_type: LogicalType) -> LogicalType:
    """Strip a user-defined type name, keeping the structure it names."""
    alias = logical_type.alias
    if not alias:
        return logical_type
    if alias.lower() == "json":
        return logical_type
    if alias.lower() == "geometry":
        return geometry_type()
    if logical_type.id is LogicalTypeId.STRUCT:
        return LogicalType.struct_of(logical_type.fields)
    if logical_type.id is LogicalTypeId.ENUM:
        return LogicalType.enum_of(logical_type.enum_values)
    raise ValueError("Unsupported logical type for RemoveAlias")


def _numeric_type(type_modifier: int) -> tuple[LogicalType, PostgresType]:
    packed = (type_modifier - 4) & _UINT64_MASK
    width = (packed >> 16) & 0xFFFF
    scale = ((packed & 0x7FF) ^ 1024) - 1024
    if type_modifier == -1 or scale < 0 or width > _MAX_DECIMAL_WIDTH or width < 1 or scale > width:
        return _DOUBLE, PostgresType(info=PostgresTypeAnnotation.NUMERIC_AS_DOUBLE)
    return LogicalType.decimal(width, scale), PostgresType()


def type_to_logical_type(
    type_info: PostgresTypeData,
    array_as_varchar: bool = False,
    lookup_type: Optional[TypeLookup] = None,
) -> tuple[LogicalType, PostgresType]:
    """Resolve a PostgreSQL column type to a logical type and its annotations.

    ``lookup_type`` resolves user-defined types by name; unknown types are
    read as VARCHAR.
    """
    name = type_info.type_name

    # array type names start with an underscore
    if name.startswith("_"):
        if array_as_varchar:
            return _VARCHAR, PostgresType(info=PostgresTypeAnnotation.CAST_TO_VARCHAR)
        dimensions = max(type_info.array_dimensions, 1)
        child_info = PostgresTypeData(type_modifier=type_info.type_modifier, type_name=name[1:])
        child_type, child_pg_type = type_to_logical_type(child_info, array_as_varchar, lookup_type)
        for _ in range(1, dimensions):
            child_pg_type = PostgresType(children=[child_pg_type])
            child_type = LogicalType.list_of(child_type)
        return LogicalType.list_of(child_type), PostgresType(children=[child_pg_type])

    if name in _SIMPLE_PG_TYPES:
        type_id, annotation = _SIMPLE_PG_TYPES[name]
        return _simple(type_id), PostgresType(info=annotation)
    if name == "numeric":
        return _numeric_type(type_info.type_modifier)
    if name == "geometry":
        return geometry_type(), PostgresType()
    if name == "point":
        point = LogicalType.struct_of([("x", _DOUBLE), ("y", _DOUBLE)])
        return point, PostgresType(info=PostgresTypeAnnotation.GEOM_POINT)
    if name in _GEOMETRY_LIST_TYPES:
        return LogicalType.list_of(_DOUBLE), PostgresType(info=_GEOMETRY_LIST_TYPES[name])

    found = lookup_type(name) if lookup_type is not None else None
    if found is None:
        return _VARCHAR, PostgresType(info=PostgresTypeAnnotation.CAST_TO_VARCHAR)
    user_type, postgres_type = found
    return remove_alias(user_type), copy.deepcopy(postgres_type)


def to_postgres_type(logical_type: LogicalType) -> LogicalType:
    """The logical type a value is converted to before being stored in PostgreSQL."""
    type_id = logical_type.id
    if type_id in _PASSTHROUGH_IDS:
        return logical_type
    if type_id is LogicalTypeId.LIST:
        return LogicalType.list_of(to_postgres_type(logical_type.child_type()))
    if type_id is LogicalTypeId.STRUCT:
        fields = [(name, to_postgres_type(child)) for name, child in logical_type.fields]
        return LogicalType.struct_of(fields).with_alias(logical_type.alias)
    return _WIDENED_TYPES.get(type_id, _VARCHAR)


def create_empty_postgres_type(logical_type: LogicalType) -> PostgresType:
    """Standard annotations shaped like ``logical_type``."""
    if logical_type.id is LogicalTypeId.STRUCT:
        return PostgresType(children=[create_empty_postgres_type(child) for _, child in logical_type.fields])
    if logical_type.id is LogicalTypeId.LIST:
        return PostgresType(children=[create_empty_postgres_type(logical_type.child_type())])
    return PostgresType()


def supported_postgres_oid(logical_type: LogicalType) -> bool:
    """Whether the type has a built-in PostgreSQL oid."""
    return logical_type.id in _TYPE_OIDS


def postgres_oid_to_name(oid: int) -> str:
    """The type name for a built-in oid, or ``unsupported_type``."""
    return _OID_NAMES.get(oid, "unsupported_type")


def to_postgres_oid(logical_type: LogicalType) -> int:
    """The oid of a type's elements, as written in array and record headers."""
    while logical_type.id is LogicalTypeId.LIST:
        logical_type = logical_type.child_type()
    try:
        return _TYPE_OIDS[logical_type.id]
    except KeyError:
        raise NotImplementedError(f"Unsupported type for Postgres array copy: {logical_type}") from None