# pgschema/models/schema.py
"""Schema-related data models."""

from pydantic import BaseModel, Field, ConfigDict
from typing import Any, Optional
from enum import Enum

from pgschema.utils.naming import format_full_name, format_key_name


class DbType(str, Enum):
    """Portable data type enumeration."""

    BOOLEAN = "Boolean"
    BINARY = "Binary"
    STRING = "String"
    DATE = "Date"
    SINGLE = "Single"
    DOUBLE = "Double"
    INT16 = "Int16"
    INT32 = "Int32"
    INT64 = "Int64"
    DECIMAL = "Decimal"
    TIME = "Time"
    DATETIME = "DateTime"
    DATETIME_OFFSET = "DateTimeOffset"
    GUID = "Guid"
    XML = "Xml"
    OBJECT = "Object"


class ParameterDirection(str, Enum):
    """Routine parameter direction."""

    INPUT = "Input"
    OUTPUT = "Output"
    INPUT_OUTPUT = "InputOutput"


class ExtendedProperty(BaseModel):
    """Read-only key/value metadata attached to a schema object."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: Any = None
    data_type: DbType = DbType.STRING
    read_only: bool = True


class SchemaObject(BaseModel):
    """Base for every named schema object."""

    name: str
    extended_properties: list[ExtendedProperty] = Field(default_factory=list)

    def get_extended_property(self, name: str) -> Optional[ExtendedProperty]:
        """Look up an extended property by key.

        Args:
            name: The property key.

        Returns:
            The property, or None when absent.
        """
        for prop in self.extended_properties:
            if prop.name == name:
                return prop
        return None


class ColumnSchema(SchemaObject):
    """Column of a table or view."""

    table_schema: str
    table_name: str
    ordinal: int
    data_type: DbType = DbType.OBJECT
    native_type: str = ""
    is_array: bool = False
    size: int = 0
    precision: int = 0
    scale: int = 0
    allow_db_null: bool = True
    default_value: str = ""
    is_identity: bool = False

    @property
    def table_key(self) -> str:
        return format_full_name(self.table_schema, self.table_name)


class MemberColumn(BaseModel):
    """Handle to a column taking part in an index or key."""

    model_config = ConfigDict(frozen=True)

    table_schema: str
    table_name: str
    column_name: str
    ordinal: int

    @property
    def table_key(self) -> str:
        return format_full_name(self.table_schema, self.table_name)

    @classmethod
    def of(cls, column: ColumnSchema) -> "MemberColumn":
        return cls(
            table_schema=column.table_schema,
            table_name=column.table_name,
            column_name=column.name,
            ordinal=column.ordinal,
        )


class IndexSchema(SchemaObject):
    """Index on a table."""

    table_schema: str
    table_name: str
    is_primary_key: bool = False
    is_unique: bool = False
    is_clustered: bool = False
    member_columns: list[MemberColumn] = Field(default_factory=list)

    @property
    def full_name(self) -> str:
        return format_key_name(self.table_schema, self.table_name, self.name)


class PrimaryKeySchema(SchemaObject):
    """Primary key derived from the table's primary index."""

    table_schema: str
    table_name: str
    member_columns: list[MemberColumn] = Field(default_factory=list)


class TableKeySchema(SchemaObject):
    """Foreign key constraint, seen from the referencing table."""

    foreign_key_table: str
    primary_key_table: str
    foreign_key_member_columns: list[MemberColumn] = Field(default_factory=list)
    primary_key_member_columns: list[MemberColumn] = Field(default_factory=list)
    cascade_delete: bool = False
    cascade_update: bool = False


class TabularSchema(SchemaObject):
    """Common part of tables and views."""

    table_schema: str = Field(alias="schema")
    columns: list[ColumnSchema] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @property
    def owner(self) -> str:
        return self.table_schema

    @property
    def full_name(self) -> str:
        return format_full_name(self.table_schema, self.name)

    def get_column(self, name: str) -> Optional[ColumnSchema]:
        for column in self.columns:
            if column.name == name:
                return column
        return None


class TableSchema(TabularSchema):
    """Base table."""

    indexes: list[IndexSchema] = Field(default_factory=list)
    keys: list[TableKeySchema] = Field(default_factory=list)
    primary_key: Optional[PrimaryKeySchema] = None

    @property
    def has_primary_key(self) -> bool:
        return self.primary_key is not None


class ViewSchema(TabularSchema):
    """View."""

    view_text: Optional[str] = None


class ParameterSchema(SchemaObject):
    """Routine parameter."""

    ordinal: int
    direction: ParameterDirection = ParameterDirection.INPUT
    data_type: DbType = DbType.OBJECT
    native_type: str = ""
    is_array: bool = False
    size: int = 0
    precision: int = 0
    scale: int = 0
    allow_db_null: bool = False


class CommandSchema(SchemaObject):
    """Stored routine (function or procedure)."""

    command_schema: str = Field(alias="schema")
    specific_schema: str
    specific_name: str
    routine_type: Optional[str] = None
    return_type: Optional[str] = None
    parameters: list[ParameterSchema] = Field(default_factory=list)
    command_text: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    @property
    def owner(self) -> str:
        return self.command_schema

    @property
    def full_name(self) -> str:
        return format_full_name(self.command_schema, self.name)

    @property
    def specific_full_name(self) -> str:
        return format_full_name(self.specific_schema, self.specific_name)

    @property
    def is_void(self) -> bool:
        return self.return_type is None or self.return_type.lower() == "void"
