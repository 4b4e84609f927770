# pgschema/services/schema.py
"""PostgreSQL schema provider."""

import logging
from typing import Any, Mapping, Optional, Sequence

from pgschema.config import Settings
from pgschema.models.database import DatabaseSchema
from pgschema.models.schema import (
    ColumnSchema,
    CommandSchema,
    DbType,
    ExtendedProperty,
    IndexSchema,
    MemberColumn,
    ParameterDirection,
    ParameterSchema,
    PrimaryKeySchema,
    SchemaObject,
    TableKeySchema,
    TableSchema,
    TabularSchema,
    ViewSchema,
)
from pgschema.services import queries
from pgschema.services.aggregator import RowAggregator
from pgschema.services.base import DbSchemaProvider
from pgschema.services.database import RowSource
from pgschema.services.type_mapper import map_native_type, normalize_native_type
from pgschema.utils.connection import extract_database_name
from pgschema.utils.constants import (
    EXTENDED_PROPERTIES_TABLE,
    FK_ACTION_CASCADE,
    PROP_CASCADE_DELETE,
    PROP_CASCADE_UPDATE,
    PROP_DEFAULT,
    PROP_IS_IDENTITY,
    PROP_IS_PROCEDURE,
    PROP_IS_SCALAR_FUNCTION,
    PROP_SPECIFIC_NAME,
    PROP_SPECIFIC_SCHEMA,
    PROP_SYSTEM_TYPE,
    PROP_USER_DEFINED_TYPE,
    SYSTEM_SCHEMAS,
)
from pgschema.utils.exceptions import UnresolvedReferenceError, UnsupportedOperationError
from pgschema.utils.naming import format_foreign_key_name, format_full_name, format_key_name

logger = logging.getLogger("schema-provider")

Row = Mapping[str, Any]

_PARAMETER_DIRECTIONS = {
    "IN": ParameterDirection.INPUT,
    "OUT": ParameterDirection.OUTPUT,
}


def is_identity_default(
    table_name: str,
    column_name: str,
    default: Optional[str],
    schema: Optional[str] = None
) -> bool:
    """Check whether a column default is its serial sequence.

    PostgreSQL qualifies the sequence with its schema when that schema is
    not on the session search path, so the owning schema is accepted as a
    prefix too. This is wider than matching only the bare and quoted
    ``<table>_<column>_seq`` forms: such columns now report as identity
    with an empty default. Sequences in any other schema still do not
    count.

    Args:
        table_name: The owning table.
        column_name: The column.
        default: The column default expression.
        schema: The owning table's schema.

    Returns:
        True when the default is ``nextval`` on ``<table>_<column>_seq``.
    """
    if not default:
        return False
    sequence = f"{table_name}_{column_name}_seq"
    prefixes = [""]
    if schema:
        prefixes += [f"{schema}.", f'"{schema}".']
    return default in {
        f"nextval('{prefix}{name}'::regclass)"
        for prefix in prefixes
        for name in (sequence, f'"{sequence}"')
    }


def parameter_direction(mode: Optional[str]) -> ParameterDirection:
    """Map information_schema ``parameter_mode`` to a direction."""
    return _PARAMETER_DIRECTIONS.get((mode or "").upper(), ParameterDirection.INPUT_OUTPUT)


def _action_code(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("ascii", errors="replace")
    return value or ""


def _int(value: Any) -> int:
    return int(value) if value is not None else 0


def _type_properties(data_type: Optional[str]) -> list[ExtendedProperty]:
    return [
        ExtendedProperty(name=PROP_SYSTEM_TYPE, value=data_type),
        ExtendedProperty(name=PROP_USER_DEFINED_TYPE, value=data_type),
    ]


class PostgreSQLSchemaProvider(DbSchemaProvider):
    """Builds the schema model from the PostgreSQL catalog.

    Each operation runs one catalog query through the row source and turns
    the rows into model objects. Objects that other objects refer to are
    registered on the DatabaseSchema passed in, which is how foreign keys
    find their referenced table.
    """

    name = "PostgreSQLSchemaProvider"
    description = "PostgreSQL Schema Provider"

    def __init__(
        self,
        row_source: RowSource,
        excluded_schemas: Optional[Sequence[str]] = None,
        extended_properties_table: str = EXTENDED_PROPERTIES_TABLE,
        strict_references: bool = False
    ):
        """Initialize the schema provider.

        Args:
            row_source: Executes the catalog queries.
            excluded_schemas: Schemas never reported; defaults to the system schemas.
            extended_properties_table: Host bookkeeping table hidden from results.
            strict_references: Raise on unresolved references instead of skipping them.
        """
        self.row_source = row_source
        self.excluded_schemas = list(excluded_schemas or SYSTEM_SCHEMAS)
        self.extended_properties_table = extended_properties_table
        self.strict_references = strict_references

    @classmethod
    def from_settings(cls, row_source: RowSource, settings: Settings) -> "PostgreSQLSchemaProvider":
        """Create a provider configured from application settings."""
        return cls(
            row_source,
            excluded_schemas=settings.get_excluded_schemas(),
            extended_properties_table=settings.extended_properties_table,
            strict_references=settings.strict_references,
        )

    # Tables

    async def get_tables(self, database: DatabaseSchema) -> list[TableSchema]:
        """Fetch all user tables and register them on the database.

        Args:
            database: The database being introspected.

        Returns:
            The tables ordered by name.
        """
        rows = await self.row_source.fetch(
            queries.TABLES_SQL, self.excluded_schemas, self.extended_properties_table
        )
        tables = []
        for row in rows:
            table = TableSchema(name=row["table_name"], schema=row["table_schema"])
            database.add_table(table)
            tables.append(table)

        logger.info("Fetched %d tables from database '%s'", len(tables), database.name)
        return tables

    async def get_table_columns(self, table: TableSchema) -> list[ColumnSchema]:
        """Fetch the columns of a table in ordinal order.

        Serial columns (default ``nextval('<table>_<column>_seq'::regclass)``)
        are flagged as identity and reported with an empty default.

        Args:
            table: The owning table.

        Returns:
            The columns, also stored on ``table.columns``.
        """
        rows = await self.row_source.fetch(queries.COLUMNS_SQL, table.table_schema, table.name)
        table.columns = [self._build_column(table, row, detect_identity=True) for row in rows]
        logger.info("Fetched %d columns for table %s", len(table.columns), table.full_name)
        return table.columns

    async def get_table_indexes(self, table: TableSchema) -> list[IndexSchema]:
        """Fetch the indexes of a table.

        The table's columns must already be loaded; index members are
        resolved against them.

        Args:
            table: The owning table.

        Returns:
            The indexes in catalog order, also stored on ``table.indexes``.
        """
        rows = await self.row_source.fetch(queries.INDEXES_SQL, table.table_schema, table.name)

        def create(row: Row) -> IndexSchema:
            return IndexSchema(
                name=row["index_name"],
                table_schema=table.table_schema,
                table_name=table.name,
                is_primary_key=bool(row["is_primary"]),
                is_unique=bool(row["is_unique"]),
                is_clustered=bool(row["is_clustered"]),
            )

        def add_member(index: IndexSchema, row: Row) -> None:
            column = self._resolve_member(table, row["column_name"], index.name)
            if column is not None:
                index.member_columns.append(MemberColumn.of(column))

        aggregator = RowAggregator(
            key_for=lambda row: format_key_name(
                row["table_schema"], row["table_name"], row["index_name"]
            ),
            create=create,
            add_member=add_member,
        )
        table.indexes = aggregator.fold(rows)
        logger.info("Fetched %d indexes for table %s", len(table.indexes), table.full_name)
        return table.indexes

    def get_table_primary_key(self, table: TableSchema) -> Optional[PrimaryKeySchema]:
        """Derive the primary key from the table's loaded indexes.

        Args:
            table: A table whose indexes have been fetched.

        Returns:
            The primary key, or None when no index is flagged primary.
        """
        table.primary_key = None
        for index in table.indexes:
            if not index.is_primary_key:
                continue
            table.primary_key = PrimaryKeySchema(
                name=index.name,
                table_schema=table.table_schema,
                table_name=table.name,
                member_columns=list(index.member_columns),
            )
            break
        return table.primary_key

    async def get_table_keys(
        self,
        database: DatabaseSchema,
        table: TableSchema
    ) -> list[TableKeySchema]:
        """Fetch the foreign keys declared on a table.

        A key is only built when its referenced table is already registered
        on ``database``. Keys pointing outside the introspected schemas are
        dropped unless the provider is strict.

        Args:
            database: The database holding the referenced tables.
            table: The referencing table.

        Returns:
            The foreign keys, also stored on ``table.keys``.
        """
        rows = await self.row_source.fetch(
            queries.FOREIGN_KEYS_SQL, table.table_schema, table.name
        )

        def referenced_table(row: Row) -> Optional[TableSchema]:
            return database.get_table(row["reference_table_schema"], row["reference_table_name"])

        def accept(row: Row) -> bool:
            if referenced_table(row) is not None:
                return True
            name = format_full_name(row["reference_table_schema"], row["reference_table_name"])
            if self.strict_references:
                raise UnresolvedReferenceError("table", name, row["constraint_name"])
            logger.debug(
                "Skipping foreign key %s on %s: table %s is not loaded",
                row["constraint_name"], table.full_name, name
            )
            return False

        def create(row: Row) -> TableKeySchema:
            cascade_delete = _action_code(row["on_delete"]) == FK_ACTION_CASCADE
            cascade_update = _action_code(row["on_update"]) == FK_ACTION_CASCADE
            return TableKeySchema(
                name=row["constraint_name"],
                foreign_key_table=table.full_name,
                primary_key_table=referenced_table(row).full_name,
                cascade_delete=cascade_delete,
                cascade_update=cascade_update,
                extended_properties=[
                    ExtendedProperty(
                        name=PROP_CASCADE_DELETE, value=cascade_delete, data_type=DbType.BOOLEAN
                    ),
                    ExtendedProperty(
                        name=PROP_CASCADE_UPDATE, value=cascade_update, data_type=DbType.BOOLEAN
                    ),
                ],
            )

        def add_member(key: TableKeySchema, row: Row) -> None:
            primary = self._resolve_member(
                referenced_table(row), row["reference_column_name"], key.name
            )
            foreign = self._resolve_member(table, row["column_name"], key.name)
            # Both sides or neither, so the two lists stay aligned.
            if primary is None or foreign is None:
                return
            key.primary_key_member_columns.append(MemberColumn.of(primary))
            key.foreign_key_member_columns.append(MemberColumn.of(foreign))

        aggregator = RowAggregator(
            key_for=lambda row: format_foreign_key_name(
                row["reference_table_schema"],
                row["reference_table_name"],
                row["constraint_name"],
                row["table_schema"],
                row["table_name"],
            ),
            create=create,
            add_member=add_member,
            accept=accept,
        )
        table.keys = aggregator.fold(rows)
        logger.info("Fetched %d foreign keys for table %s", len(table.keys), table.full_name)
        return table.keys

    # Views

    async def get_views(self, database: DatabaseSchema) -> list[ViewSchema]:
        rows = await self.row_source.fetch(queries.VIEWS_SQL, self.excluded_schemas)
        views = []
        for row in rows:
            view = ViewSchema(name=row["table_name"], schema=row["table_schema"])
            database.add_view(view)
            views.append(view)

        logger.info("Fetched %d views from database '%s'", len(views), database.name)
        return views

    async def get_view_columns(self, view: ViewSchema) -> list[ColumnSchema]:
        rows = await self.row_source.fetch(queries.COLUMNS_SQL, view.table_schema, view.name)
        view.columns = [self._build_column(view, row, detect_identity=False) for row in rows]
        return view.columns

    async def get_view_text(self, view: ViewSchema) -> Optional[str]:
        """Fetch the defining query of a view."""
        view.view_text = await self.row_source.fetchval(
            queries.VIEW_TEXT_SQL, view.table_schema, view.name
        )
        return view.view_text

    # Routines

    async def get_commands(self, database: DatabaseSchema) -> list[CommandSchema]:
        """Fetch stored routines.

        Routines without a result (``void`` functions and procedures) are
        skipped unless ``database.include_functions`` is set.

        Args:
            database: The database being introspected.

        Returns:
            The routines, each registered on the database.
        """
        rows = await self.row_source.fetch(queries.COMMANDS_SQL, self.excluded_schemas)
        commands = []
        for row in rows:
            command = CommandSchema(
                name=row["routine_name"],
                schema=row["routine_schema"],
                specific_schema=row["specific_schema"],
                specific_name=row["specific_name"],
                routine_type=row["routine_type"],
                return_type=row["data_type"],
            )
            if command.is_void and not database.include_functions:
                continue
            command.extended_properties = [
                ExtendedProperty(
                    name=PROP_IS_SCALAR_FUNCTION, value=not command.is_void, data_type=DbType.BOOLEAN
                ),
                ExtendedProperty(
                    name=PROP_IS_PROCEDURE, value=command.is_void, data_type=DbType.BOOLEAN
                ),
                ExtendedProperty(name=PROP_SPECIFIC_NAME, value=command.specific_name),
                ExtendedProperty(name=PROP_SPECIFIC_SCHEMA, value=command.specific_schema),
            ]
            database.add_command(command)
            commands.append(command)

        logger.info(
            "Fetched %d routines from database '%s' (of %d in catalog)",
            len(commands), database.name, len(rows)
        )
        return commands

    async def get_command_parameters(self, command: CommandSchema) -> list[ParameterSchema]:
        """Fetch the parameters of a routine by its specific name.

        Args:
            command: The routine.

        Returns:
            The parameters in ordinal order, also stored on ``command.parameters``.
        """
        rows = await self.row_source.fetch(
            queries.PARAMETERS_SQL, command.specific_schema, command.specific_name
        )
        parameters = []
        for row in rows:
            native_type = normalize_native_type(row["udt_name"])
            data_type, is_array = map_native_type(native_type)
            parameters.append(ParameterSchema(
                name=row["parameter_name"] or "",
                ordinal=_int(row["ordinal_position"]),
                direction=parameter_direction(row["parameter_mode"]),
                data_type=data_type,
                native_type=native_type,
                is_array=is_array,
                size=_int(row["character_maximum_length"]),
                precision=_int(row["numeric_precision"]),
                scale=_int(row["numeric_scale"]),
                extended_properties=_type_properties(row["data_type"]),
            ))

        command.parameters = parameters
        return parameters

    async def get_command_text(self, command: CommandSchema) -> Optional[str]:
        command.command_text = await self.row_source.fetchval(
            queries.COMMAND_TEXT_SQL, command.specific_schema, command.specific_name
        )
        return command.command_text

    def get_command_result_schemas(self, command: CommandSchema) -> list:
        # Result sets of routines are not described by the catalog.
        return []

    # Extended properties

    def get_extended_properties(self, schema_object: SchemaObject) -> list[ExtendedProperty]:
        return []

    def set_extended_properties(self, schema_object: SchemaObject) -> None:
        raise UnsupportedOperationError("set_extended_properties")

    def get_database_name(self, connection_string: str) -> str:
        return extract_database_name(connection_string)

    async def load_database(self, database: DatabaseSchema) -> DatabaseSchema:
        """Populate a database model with every object kind.

        Objects are fetched in dependency order so that index members and
        foreign keys always find what they refer to.

        Args:
            database: An empty or partially loaded database model.

        Returns:
            The same database, populated.
        """
        tables = await self.get_tables(database)
        for table in tables:
            await self.get_table_columns(table)
            await self.get_table_indexes(table)
            self.get_table_primary_key(table)
        for table in tables:
            await self.get_table_keys(database, table)

        for view in await self.get_views(database):
            await self.get_view_columns(view)
            await self.get_view_text(view)

        for command in await self.get_commands(database):
            await self.get_command_parameters(command)
            await self.get_command_text(command)

        logger.info(
            "Loaded database '%s': %d tables, %d views, %d routines",
            database.name, len(database.tables), len(database.views), len(database.commands)
        )
        return database

    # Helpers

    def _build_column(self, owner: TabularSchema, row: Row, detect_identity: bool) -> ColumnSchema:
        column_name = row["column_name"]
        data_type = row["data_type"]
        column_default = row["column_default"]
        native_type = normalize_native_type(row["udt_name"])
        db_type, is_array = map_native_type(native_type)

        is_identity = detect_identity and is_identity_default(
            owner.name, column_name, column_default, owner.table_schema
        )
        default_value = "" if is_identity else (column_default or "")

        properties = []
        if detect_identity:
            properties = [
                ExtendedProperty(name=PROP_DEFAULT, value=default_value),
                ExtendedProperty(name=PROP_IS_IDENTITY, value=is_identity, data_type=DbType.BOOLEAN),
            ]
        properties.extend(_type_properties(data_type))

        return ColumnSchema(
            name=column_name,
            table_schema=owner.table_schema,
            table_name=owner.name,
            ordinal=_int(row["ordinal_position"]),
            data_type=db_type,
            native_type=native_type,
            is_array=is_array,
            size=_int(row["character_maximum_length"]),
            precision=_int(row["numeric_precision"]),
            scale=_int(row["numeric_scale"]),
            allow_db_null=row["is_nullable"] != "NO",
            default_value=default_value,
            is_identity=is_identity,
            extended_properties=properties,
        )

    def _resolve_member(
        self,
        table: TableSchema,
        column_name: str,
        referenced_by: str
    ) -> Optional[ColumnSchema]:
        column = table.get_column(column_name)
        if column is not None:
            return column
        name = f"{table.full_name}.{column_name}"
        if self.strict_references:
            raise UnresolvedReferenceError("column", name, referenced_by)
        logger.warning("Skipping member column %s of %s: column is not loaded", name, referenced_by)
        return None
