"""Canonical identity strings for schema objects.

The same names key the DatabaseSchema collections and the aggregation of
multi-row catalog results, so every lookup must go through these helpers.
"""

from typing import Optional


def _quote(part: Optional[str]) -> str:
    """Quote a name component when it would make the joined key ambiguous."""
    text = part or ""
    if "." in text or '"' in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def format_full_name(schema: Optional[str], name: str) -> str:
    """Format a (schema, name) identity.

    Args:
        schema: The owning schema; may be empty.
        name: The object name.

    Returns:
        ``schema.name``, or just ``name`` when no schema is given.
    """
    if not schema:
        return _quote(name)
    return f"{_quote(schema)}.{_quote(name)}"


def format_key_name(schema: Optional[str], table: str, name: str) -> str:
    """Format a (schema, table, name) identity for indexes and keys."""
    return f"{format_full_name(schema, table)}.{_quote(name)}"


def format_foreign_key_name(
    reference_schema: Optional[str],
    reference_table: str,
    constraint_name: str,
    table_schema: Optional[str],
    table_name: str
) -> str:
    """Format the identity of a foreign key.

    Constraint names are only unique per referencing table, so the key
    combines the referenced side with the referencing table.
    """
    return (
        format_key_name(reference_schema, reference_table, constraint_name)
        + "."
        + format_full_name(table_schema, table_name)
    )
