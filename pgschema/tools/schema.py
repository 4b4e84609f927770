"""MCP schema tools."""

import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from pgschema.models.database import DatabaseSchema
from pgschema.models.schema import TableSchema
from pgschema.services.schema import PostgreSQLSchemaProvider
from pgschema.utils.constants import ErrorCode
from pgschema.utils.exceptions import ObjectNotFoundError, SchemaProviderError

logger = logging.getLogger("schema-tools")


def _error(e: Exception) -> dict:
    if isinstance(e, SchemaProviderError):
        return e.to_dict()
    return SchemaProviderError(ErrorCode.CATALOG_QUERY_FAILED, str(e)).to_dict()


def register_schema_tools(
    mcp: FastMCP,
    provider: PostgreSQLSchemaProvider,
    database_name: str,
    include_functions: bool = False
) -> None:
    """Register the schema tools with the MCP server.

    Every tool call starts from an empty DatabaseSchema and queries the
    catalog again; nothing is cached between calls.

    Args:
        mcp: The FastMCP server instance.
        provider: The schema provider.
        database_name: Name reported for the introspected database.
        include_functions: Whether void-returning routines are listed.
    """

    def new_database() -> DatabaseSchema:
        return DatabaseSchema(name=database_name, include_functions=include_functions)

    async def find_table(database: DatabaseSchema, schema: str, name: str) -> TableSchema:
        await provider.get_tables(database)
        table = database.get_table(schema, name)
        if table is None:
            raise ObjectNotFoundError("table", f"{schema}.{name}")
        return table

    @mcp.tool()
    async def list_tables() -> dict:
        """
        List the user tables of the database.

        Returns:
            Schema and name of every table.
        """
        try:
            tables = await provider.get_tables(new_database())
            return {
                "status": "success",
                "data": [{"schema": t.table_schema, "name": t.name} for t in tables],
                "count": len(tables)
            }
        except Exception as e:
            logger.error("list_tables failed: %s", e)
            return _error(e)

    @mcp.tool()
    async def describe_table(name: str, schema: str = "public") -> dict:
        """
        Describe a table: columns, indexes, primary key and foreign keys.

        Args:
            name: Table name.
            schema: Schema name.

        Returns:
            The table model.
        """
        try:
            database = new_database()
            table = await find_table(database, schema, name)
            # Foreign key members resolve against the referenced tables' columns.
            for other in database.tables.values():
                await provider.get_table_columns(other)
            await provider.get_table_indexes(table)
            provider.get_table_primary_key(table)
            await provider.get_table_keys(database, table)
            return {"status": "success", "data": table.model_dump(mode="json")}
        except Exception as e:
            logger.error("describe_table failed for %s.%s: %s", schema, name, e)
            return _error(e)

    @mcp.tool()
    async def list_views() -> dict:
        """
        List the views of the database.

        Returns:
            Schema and name of every view.
        """
        try:
            views = await provider.get_views(new_database())
            return {
                "status": "success",
                "data": [{"schema": v.table_schema, "name": v.name} for v in views],
                "count": len(views)
            }
        except Exception as e:
            logger.error("list_views failed: %s", e)
            return _error(e)

    @mcp.tool()
    async def describe_view(name: str, schema: str = "public") -> dict:
        """
        Describe a view: columns and defining query.

        Args:
            name: View name.
            schema: Schema name.

        Returns:
            The view model.
        """
        try:
            database = new_database()
            await provider.get_views(database)
            view = database.get_view(schema, name)
            if view is None:
                raise ObjectNotFoundError("view", f"{schema}.{name}")
            await provider.get_view_columns(view)
            await provider.get_view_text(view)
            return {"status": "success", "data": view.model_dump(mode="json")}
        except Exception as e:
            logger.error("describe_view failed for %s.%s: %s", schema, name, e)
            return _error(e)

    @mcp.tool()
    async def list_commands() -> dict:
        """
        List the stored routines of the database.

        Returns:
            Schema, name and specific name of every routine.
        """
        try:
            commands = await provider.get_commands(new_database())
            return {
                "status": "success",
                "data": [
                    {
                        "schema": c.command_schema,
                        "name": c.name,
                        "specific_name": c.specific_name,
                        "return_type": c.return_type
                    }
                    for c in commands
                ],
                "count": len(commands)
            }
        except Exception as e:
            logger.error("list_commands failed: %s", e)
            return _error(e)

    @mcp.tool()
    async def describe_command(
        name: str,
        schema: str = "public",
        specific_name: Optional[str] = None
    ) -> dict:
        """
        Describe a routine: parameters and definition.

        Args:
            name: Routine name.
            schema: Schema name.
            specific_name: Picks one overload; all overloads are returned when omitted.

        Returns:
            The routine models.
        """
        try:
            database = new_database()
            await provider.get_commands(database)
            commands = database.get_command(schema, name)
            if specific_name:
                commands = [c for c in commands if c.specific_name == specific_name]
            if not commands:
                raise ObjectNotFoundError("routine", f"{schema}.{name}")
            for command in commands:
                await provider.get_command_parameters(command)
                await provider.get_command_text(command)
            return {"status": "success", "data": [c.model_dump(mode="json") for c in commands]}
        except Exception as e:
            logger.error("describe_command failed for %s.%s: %s", schema, name, e)
            return _error(e)

    @mcp.tool()
    async def load_schema() -> dict:
        """
        Load the complete schema model of the database.

        Returns:
            Tables, views and routines with all their details.
        """
        try:
            database = await provider.load_database(new_database())
            return {"status": "success", "data": database.model_dump(mode="json")}
        except Exception as e:
            logger.error("load_schema failed: %s", e)
            return _error(e)
