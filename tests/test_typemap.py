import pytest

from pgbincopy import oids
from pgbincopy.typemap import (
    create_empty_postgres_type,
    geometry_type,
    postgres_oid_to_name,
    remove_alias,
    supported_postgres_oid,
    to_postgres_oid,
    to_postgres_type,
    type_to_logical_type,
    type_to_string,
)
from pgbincopy.types import (
    LogicalType,
    LogicalTypeId,
    PostgresType,
    PostgresTypeAnnotation,
    PostgresTypeData,
)


def t(type_id):
    return LogicalType(type_id)


INTEGER = t(LogicalTypeId.INTEGER)
DOUBLE = t(LogicalTypeId.DOUBLE)
VARCHAR = t(LogicalTypeId.VARCHAR)


def resolve(name, **kwargs):
    return type_to_logical_type(PostgresTypeData(type_name=name, **kwargs))


def typmod(precision, scale):
    return ((precision << 16) | scale) + 4


# type_to_string


@pytest.mark.parametrize(
    "type_id,expected",
    [
        (LogicalTypeId.FLOAT, "REAL"),
        (LogicalTypeId.DOUBLE, "FLOAT"),
        (LogicalTypeId.BLOB, "BYTEA"),
        (LogicalTypeId.INTEGER, "INTEGER"),
    ],
)
def test_type_to_string_simple(type_id, expected):
    assert type_to_string(t(type_id)) == expected


def test_type_to_string_list_uses_postgres_element_name():
    assert type_to_string(LogicalType.list_of(DOUBLE)) == "FLOAT[]"


def test_type_to_string_geometry_alias():
    assert type_to_string(geometry_type()) == "GEOMETRY"


def test_type_to_string_other_alias():
    assert type_to_string(LogicalType.enum_of(["a"]).with_alias("mood")) == "mood"


@pytest.mark.parametrize(
    "logical_type",
    [
        LogicalType.enum_of(["a", "b"]),
        LogicalType.struct_of({"a": INTEGER}),
        t(LogicalTypeId.MAP),
        t(LogicalTypeId.UNION),
    ],
)
def test_type_to_string_unnamed_types_rejected(logical_type):
    with pytest.raises(NotImplementedError):
        type_to_string(logical_type)


# remove_alias


def test_remove_alias_without_alias_is_identity():
    assert remove_alias(INTEGER) == INTEGER


def test_remove_alias_keeps_json():
    json_type = VARCHAR.with_alias("JSON")
    assert remove_alias(json_type) == json_type


def test_remove_alias_geometry():
    assert remove_alias(t(LogicalTypeId.BLOB).with_alias("Geometry")) == geometry_type()


def test_remove_alias_struct_and_enum():
    struct = LogicalType.struct_of({"a": INTEGER})
    enum = LogicalType.enum_of(["x", "y"])
    assert remove_alias(struct.with_alias("pair")) == struct
    assert remove_alias(enum.with_alias("mood")) == enum


def test_remove_alias_unsupported():
    with pytest.raises(ValueError):
        remove_alias(INTEGER.with_alias("my_int"))


# type_to_logical_type


@pytest.mark.parametrize(
    "name,type_id",
    [
        ("bool", LogicalTypeId.BOOLEAN),
        ("int2", LogicalTypeId.SMALLINT),
        ("int4", LogicalTypeId.INTEGER),
        ("int8", LogicalTypeId.BIGINT),
        ("oid", LogicalTypeId.UINTEGER),
        ("float4", LogicalTypeId.FLOAT),
        ("float8", LogicalTypeId.DOUBLE),
        ("text", LogicalTypeId.VARCHAR),
        ("date", LogicalTypeId.DATE),
        ("bytea", LogicalTypeId.BLOB),
        ("timetz", LogicalTypeId.TIME_TZ),
        ("timestamptz", LogicalTypeId.TIMESTAMP_TZ),
        ("uuid", LogicalTypeId.UUID),
    ],
)
def test_builtin_types(name, type_id):
    logical_type, pg_type = resolve(name)
    assert logical_type == t(type_id)
    assert pg_type == PostgresType()


@pytest.mark.parametrize(
    "name,annotation",
    [
        ("bpchar", PostgresTypeAnnotation.FIXED_LENGTH_CHAR),
        ("char", PostgresTypeAnnotation.FIXED_LENGTH_CHAR),
        ("jsonb", PostgresTypeAnnotation.JSONB),
    ],
)
def test_annotated_varchar_types(name, annotation):
    logical_type, pg_type = resolve(name)
    assert logical_type == VARCHAR
    assert pg_type.info is annotation


def test_numeric_with_precision():
    logical_type, pg_type = resolve("numeric", type_modifier=typmod(10, 2))
    assert logical_type == LogicalType.decimal(10, 2)
    assert pg_type.info is PostgresTypeAnnotation.STANDARD


@pytest.mark.parametrize("modifier", [-1, typmod(39, 2)])
def test_numeric_falls_back_to_double(modifier):
    logical_type, pg_type = resolve("numeric", type_modifier=modifier)
    assert logical_type == DOUBLE
    assert pg_type.info is PostgresTypeAnnotation.NUMERIC_AS_DOUBLE


def test_point_is_struct():
    logical_type, pg_type = resolve("point")
    assert logical_type == LogicalType.struct_of([("x", DOUBLE), ("y", DOUBLE)])
    assert pg_type.info is PostgresTypeAnnotation.GEOM_POINT


@pytest.mark.parametrize(
    "name,annotation",
    [
        ("line", PostgresTypeAnnotation.GEOM_LINE),
        ("lseg", PostgresTypeAnnotation.GEOM_LINE_SEGMENT),
        ("box", PostgresTypeAnnotation.GEOM_BOX),
        ("path", PostgresTypeAnnotation.GEOM_PATH),
        ("polygon", PostgresTypeAnnotation.GEOM_POLYGON),
        ("circle", PostgresTypeAnnotation.GEOM_CIRCLE),
    ],
)
def test_geometric_list_types(name, annotation):
    logical_type, pg_type = resolve(name)
    assert logical_type == LogicalType.list_of(DOUBLE)
    assert pg_type.info is annotation


def test_geometry_type():
    logical_type, _ = resolve("geometry")
    assert logical_type == geometry_type()
    assert logical_type.id is LogicalTypeId.BLOB


def test_one_dimensional_array():
    logical_type, pg_type = resolve("_int4")
    assert logical_type == LogicalType.list_of(INTEGER)
    assert pg_type == PostgresType(children=[PostgresType()])


def test_multi_dimensional_array():
    logical_type, pg_type = resolve("_int4", array_dimensions=2)
    assert logical_type == LogicalType.list_of(LogicalType.list_of(INTEGER))
    assert pg_type == PostgresType(children=[PostgresType(children=[PostgresType()])])


def test_array_child_keeps_annotation():
    _, pg_type = resolve("_jsonb")
    assert pg_type.children[0].info is PostgresTypeAnnotation.JSONB


def test_array_as_varchar():
    logical_type, pg_type = type_to_logical_type(PostgresTypeData(type_name="_int4"), array_as_varchar=True)
    assert logical_type == VARCHAR
    assert pg_type.info is PostgresTypeAnnotation.CAST_TO_VARCHAR


def test_unknown_type_is_varchar():
    logical_type, pg_type = resolve("tsvector")
    assert logical_type == VARCHAR
    assert pg_type.info is PostgresTypeAnnotation.CAST_TO_VARCHAR


def test_user_type_through_lookup():
    mood = LogicalType.enum_of(["sad", "happy"])
    stored = PostgresType(oid=12345)

    def lookup(name):
        return (mood.with_alias("mood"), stored) if name == "mood" else None

    logical_type, pg_type = type_to_logical_type(PostgresTypeData(type_name="mood"), lookup_type=lookup)
    assert logical_type == mood
    assert pg_type == stored
    pg_type.children.append(PostgresType())
    assert stored.children == []

    missing, missing_pg = type_to_logical_type(PostgresTypeData(type_name="other"), lookup_type=lookup)
    assert missing == VARCHAR
    assert missing_pg.info is PostgresTypeAnnotation.CAST_TO_VARCHAR


# to_postgres_type


def test_to_postgres_type_passthrough():
    dec = LogicalType.decimal(12, 4)
    assert to_postgres_type(dec) == dec
    assert to_postgres_type(INTEGER) == INTEGER


@pytest.mark.parametrize(
    "source,expected",
    [
        (LogicalTypeId.TINYINT, t(LogicalTypeId.SMALLINT)),
        (LogicalTypeId.UTINYINT, t(LogicalTypeId.BIGINT)),
        (LogicalTypeId.UINTEGER, t(LogicalTypeId.BIGINT)),
        (LogicalTypeId.UBIGINT, LogicalType.decimal(20, 0)),
        (LogicalTypeId.HUGEINT, t(LogicalTypeId.DOUBLE)),
        (LogicalTypeId.TIMESTAMP_NS, t(LogicalTypeId.TIMESTAMP)),
        (LogicalTypeId.BIT, t(LogicalTypeId.VARCHAR)),
    ],
)
def test_to_postgres_type_widening(source, expected):
    assert to_postgres_type(t(source)) == expected


def test_to_postgres_type_nested():
    source = LogicalType.struct_of({"a": t(LogicalTypeId.TINYINT), "b": LogicalType.list_of(t(LogicalTypeId.UINTEGER))})
    result = to_postgres_type(source.with_alias("rec"))
    assert result.alias == "rec"
    assert result.fields == (
        ("a", t(LogicalTypeId.SMALLINT)),
        ("b", LogicalType.list_of(t(LogicalTypeId.BIGINT))),
    )


# create_empty_postgres_type


def test_create_empty_postgres_type_mirrors_nesting():
    source = LogicalType.struct_of({"a": INTEGER, "b": LogicalType.list_of(DOUBLE)})
    assert create_empty_postgres_type(source) == PostgresType(
        children=[PostgresType(), PostgresType(children=[PostgresType()])]
    )


# oids


def test_supported_postgres_oid():
    assert supported_postgres_oid(t(LogicalTypeId.BIT)) is True
    assert supported_postgres_oid(LogicalType.decimal(4, 1)) is False


def test_postgres_oid_to_name():
    assert postgres_oid_to_name(oids.BPCHAROID) == "char"
    assert postgres_oid_to_name(oids.TEXTOID) == "varchar"
    assert postgres_oid_to_name(oids.INT4ARRAYOID) == "_int4"
    assert postgres_oid_to_name(oids.POINTOID) == "unsupported_type"


def test_to_postgres_oid():
    assert to_postgres_oid(VARCHAR) == oids.VARCHAROID
    assert to_postgres_oid(LogicalType.list_of(LogicalType.list_of(INTEGER))) == oids.INT4OID


@pytest.mark.parametrize(
    "type_id,expected_name",
    [
        (LogicalTypeId.BOOLEAN, "bool"),
        (LogicalTypeId.SMALLINT, "int2"),
        (LogicalTypeId.INTEGER, "int4"),
        (LogicalTypeId.BIGINT, "int8"),
        (LogicalTypeId.FLOAT, "float4"),
        (LogicalTypeId.DOUBLE, "float8"),
        (LogicalTypeId.VARCHAR, "varchar"),
        (LogicalTypeId.BLOB, "bytea"),
        (LogicalTypeId.DATE, "date"),
        (LogicalTypeId.TIME, "time"),
        (LogicalTypeId.TIMESTAMP, "timestamp"),
        (LogicalTypeId.INTERVAL, "interval"),
        (LogicalTypeId.TIME_TZ, "timetz"),
        (LogicalTypeId.TIMESTAMP_TZ, "timestamptz"),
        (LogicalTypeId.BIT, "bit"),
        (LogicalTypeId.UUID, "uuid"),
    ],
)
def test_supported_types_have_oid_names(type_id, expected_name):
    logical_type = t(type_id)
    assert supported_postgres_oid(logical_type) is True
    assert postgres_oid_to_name(to_postgres_oid(logical_type)) == expected_name


def test_to_postgres_oid_unsupported():
    with pytest.raises(NotImplementedError):
        to_postgres_oid(LogicalType.decimal(4, 1))