"""Logical column types and the annotations kept for PostgreSQL columns."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Optional, Union

_MAX_DECIMAL_WIDTH = 38


class LogicalTypeId(enum.Enum):
    """Kinds of logical type; the value is the type's SQL name."""

    BOOLEAN = "BOOLEAN"
    TINYINT = "TINYINT"
    SMALLINT = "SMALLINT"
    INTEGER = "INTEGER"
    BIGINT = "BIGINT"
    HUGEINT = "HUGEINT"
    UTINYINT = "UTINYINT"
    USMALLINT = "USMALLINT"
    UINTEGER = "UINTEGER"
    UBIGINT = "UBIGINT"
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"
    DECIMAL = "DECIMAL"
    VARCHAR = "VARCHAR"
    BLOB = "BLOB"
    BIT = "BIT"
    DATE = "DATE"
    TIME = "TIME"
    TIME_TZ = "TIME WITH TIME ZONE"
    TIMESTAMP = "TIMESTAMP"
    TIMESTAMP_TZ = "TIMESTAMP WITH TIME ZONE"
    TIMESTAMP_SEC = "TIMESTAMP_S"
    TIMESTAMP_MS = "TIMESTAMP_MS"
    TIMESTAMP_NS = "TIMESTAMP_NS"
    INTERVAL = "INTERVAL"
    UUID = "UUID"
    LIST = "LIST"
    STRUCT = "STRUCT"
    MAP = "MAP"
    UNION = "UNION"
    ENUM = "ENUM"


@dataclass(frozen=True)
class LogicalType:
    """An immutable logical type, optionally carrying an alias name."""

    id: LogicalTypeId
    alias: Optional[str] = None
    child: Optional[LogicalType] = None
    fields: tuple[tuple[str, LogicalType], ...] = ()
    width: int = 0
    scale: int = 0
    enum_values: tuple[str, ...] = ()

    @classmethod
    def list_of(cls, child: LogicalType) -> LogicalType:
        """A list whose elements have type ``child``."""
        return cls(LogicalTypeId.LIST, child=child)

    @classmethod
    def struct_of(
        cls,
        fields: Union[Mapping[str, LogicalType], Iterable[tuple[str, LogicalType]]],
    ) -> LogicalType:
        """A struct with the given named fields, in order."""
        items = fields.items() if isinstance(fields, Mapping) else fields
        return cls(LogicalTypeId.STRUCT, fields=tuple((name, typ) for name, typ in items))

    @classmethod
    def decimal(cls, width: int, scale: int) -> LogicalType:
        """A fixed-point decimal of ``width`` digits, ``scale`` after the point."""
        if not 1 <= width <= _MAX_DECIMAL_WIDTH:
            raise ValueError(f"decimal width must be between 1 and {_MAX_DECIMAL_WIDTH}, got {width}")
        if not 0 <= scale <= width:
            raise ValueError(f"decimal scale must be between 0 and the width {width}, got {scale}")
        return cls(LogicalTypeId.DECIMAL, width=width, scale=scale)

    @classmethod
    def enum_of(cls, values: Iterable[str]) -> LogicalType:
        """An enum over ``values`` in insertion order."""
        return cls(LogicalTypeId.ENUM, enum_values=tuple(values))

    def with_alias(self, alias: Optional[str]) -> LogicalType:
        """A copy of this type carrying ``alias``."""
        return replace(self, alias=alias)

    def child_type(self) -> LogicalType:
        """The element type of a list."""
        if self.id is not LogicalTypeId.LIST or self.child is None:
            raise ValueError(f"type {self} is not a list")
        return self.child

    def __str__(self) -> str:
        if self.alias:
            return self.alias
        if self.id is LogicalTypeId.DECIMAL:
            return f"DECIMAL({self.width},{self.scale})"
        if self.id is LogicalTypeId.LIST and self.child is not None:
            return f"{self.child}[]"
        if self.id is LogicalTypeId.STRUCT:
            inner = ", ".join(f"{name} {typ}" for name, typ in self.fields)
            return f"STRUCT({inner})"
        if self.id is LogicalTypeId.ENUM:
            inner = ", ".join(f"'{value}'" for value in self.enum_values)
            return f"ENUM({inner})"
        return self.id.value


class PostgresTypeAnnotation(enum.Enum):
    """How a PostgreSQL column must be converted when it is read."""

    STANDARD = enum.auto()
    CAST_TO_VARCHAR = enum.auto()
    NUMERIC_AS_DOUBLE = enum.auto()
    CTID = enum.auto()
    JSONB = enum.auto()
    FIXED_LENGTH_CHAR = enum.auto()
    GEOM_POINT = enum.auto()
    GEOM_LINE = enum.auto()
    GEOM_LINE_SEGMENT = enum.auto()
    GEOM_BOX = enum.auto()
    GEOM_PATH = enum.auto()
    GEOM_POLYGON = enum.auto()
    GEOM_CIRCLE = enum.auto()


@dataclass
class PostgresType:
    """Annotations of a PostgreSQL column, nested like its logical type."""

    oid: int = 0
    info: PostgresTypeAnnotation = PostgresTypeAnnotation.STANDARD
    children: list[PostgresType] = field(default_factory=list)


@dataclass
class PostgresTypeData:
    """Catalog description of a PostgreSQL column type."""

    type_modifier: int = 0
    type_name: str = ""
    array_dimensions: int = 0


class PostgresCopyFormat(enum.Enum):
    """Format used for COPY data."""

    AUTO = 0
    BINARY = 1
    TEXT = 2


@dataclass
class PostgresCopyState:
    """Settings that shape how values are written during a COPY."""

    format: PostgresCopyFormat = PostgresCopyFormat.AUTO
    null_byte_replacement: Optional[str] = None

    @property
    def has_null_byte_replacement(self) -> bool:
        return self.null_byte_replacement is not None


class PostgresIsolationLevel(enum.Enum):
    """Transaction isolation levels."""

    READ_COMMITTED = enum.auto()
    REPEATABLE_READ = enum.auto()
    SERIALIZABLE = enum.auto()