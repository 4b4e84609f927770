# pgschema/models/database.py
"""Database-level data models."""

from pydantic import BaseModel, Field
from typing import Optional

from pgschema.models.schema import (
    ColumnSchema,
    CommandSchema,
    MemberColumn,
    TableSchema,
    ViewSchema,
)
from pgschema.utils.naming import format_full_name


class DatabaseSchema(BaseModel):
    """Root container of one introspection session.

    Tables, views and commands are stored by their full name so other
    objects can refer to them by key instead of embedding them.
    """

    name: str
    connection_string: str = ""
    include_functions: bool = False
    tables: dict[str, TableSchema] = Field(default_factory=dict)
    views: dict[str, ViewSchema] = Field(default_factory=dict)
    commands: dict[str, CommandSchema] = Field(default_factory=dict)

    def add_table(self, table: TableSchema) -> TableSchema:
        """Register a table, replacing any previous table with the same key."""
        self.tables[table.full_name] = table
        return table

    def add_view(self, view: ViewSchema) -> ViewSchema:
        self.views[view.full_name] = view
        return view

    def add_command(self, command: CommandSchema) -> CommandSchema:
        # Overloads share a display name, so commands are keyed by specific name.
        self.commands[command.specific_full_name] = command
        return command

    def get_table(self, schema: Optional[str], name: str) -> Optional[TableSchema]:
        return self.tables.get(format_full_name(schema, name))

    def get_view(self, schema: Optional[str], name: str) -> Optional[ViewSchema]:
        return self.views.get(format_full_name(schema, name))

    def get_command(self, schema: Optional[str], name: str) -> list[CommandSchema]:
        """Return every overload of the named routine."""
        return [
            command for command in self.commands.values()
            if command.command_schema == schema and command.name == name
        ]

    def resolve_column(self, member: MemberColumn) -> Optional[ColumnSchema]:
        """Follow a member column handle back to its column.

        Args:
            member: The handle stored on an index or key.

        Returns:
            The column, or None when its table or the column is not loaded.
        """
        owner = self.tables.get(member.table_key) or self.views.get(member.table_key)
        if owner is None:
            return None
        return owner.get_column(member.column_name)
