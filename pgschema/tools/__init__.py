# pgschema/tools/__init__.py
"""MCP tools for pg-schema-provider."""

from pgschema.tools.schema import register_schema_tools

__all__ = [
    "register_schema_tools",
]
