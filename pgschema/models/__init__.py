"""Data models for pg-schema-provider."""

from pgschema.models.schema import (
    DbType,
    ParameterDirection,
    ExtendedProperty,
    SchemaObject,
    ColumnSchema,
    MemberColumn,
    IndexSchema,
    PrimaryKeySchema,
    TableKeySchema,
    TableSchema,
    ViewSchema,
    ParameterSchema,
    CommandSchema,
)
from pgschema.models.database import DatabaseSchema

__all__ = [
    "DbType",
    "ParameterDirection",
    "ExtendedProperty",
    "SchemaObject",
    "ColumnSchema",
    "MemberColumn",
    "IndexSchema",
    "PrimaryKeySchema",
    "TableKeySchema",
    "TableSchema",
    "ViewSchema",
    "ParameterSchema",
    "CommandSchema",
    "DatabaseSchema",
]
