"""Host-facing schema provider contract."""

from abc import ABC, abstractmethod
from typing import Optional

from pgschema.models.database import DatabaseSchema
from pgschema.models.schema import (
    ColumnSchema,
    CommandSchema,
    ExtendedProperty,
    IndexSchema,
    ParameterSchema,
    PrimaryKeySchema,
    SchemaObject,
    TableKeySchema,
    TableSchema,
    ViewSchema,
)


class DbSchemaProvider(ABC):
    """Operations a code-generation host calls to explore a database.

    The host fetches one kind of object at a time and is expected to go in
    dependency order: tables and their columns before indexes, indexes
    before primary keys, and all tables before foreign keys.
    """

    name: str = ""
    description: str = ""

    @abstractmethod
    async def get_tables(self, database: DatabaseSchema) -> list[TableSchema]:
        ...

    @abstractmethod
    async def get_table_columns(self, table: TableSchema) -> list[ColumnSchema]:
        ...

    @abstractmethod
    async def get_table_indexes(self, table: TableSchema) -> list[IndexSchema]:
        ...

    @abstractmethod
    async def get_table_keys(
        self,
        database: DatabaseSchema,
        table: TableSchema
    ) -> list[TableKeySchema]:
        ...

    @abstractmethod
    def get_table_primary_key(self, table: TableSchema) -> Optional[PrimaryKeySchema]:
        ...

    @abstractmethod
    async def get_views(self, database: DatabaseSchema) -> list[ViewSchema]:
        ...

    @abstractmethod
    async def get_view_columns(self, view: ViewSchema) -> list[ColumnSchema]:
        ...

    @abstractmethod
    async def get_view_text(self, view: ViewSchema) -> Optional[str]:
        ...

    @abstractmethod
    async def get_commands(self, database: DatabaseSchema) -> list[CommandSchema]:
        ...

    @abstractmethod
    async def get_command_parameters(self, command: CommandSchema) -> list[ParameterSchema]:
        ...

    @abstractmethod
    async def get_command_text(self, command: CommandSchema) -> Optional[str]:
        ...

    @abstractmethod
    def get_command_result_schemas(self, command: CommandSchema) -> list:
        ...

    @abstractmethod
    def get_extended_properties(self, schema_object: SchemaObject) -> list[ExtendedProperty]:
        ...

    @abstractmethod
    def set_extended_properties(self, schema_object: SchemaObject) -> None:
        ...

    @abstractmethod
    def get_database_name(self, connection_string: str) -> str:
        ...
