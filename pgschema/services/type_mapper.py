"""Mapping of PostgreSQL type names to portable types."""

from typing import Optional

from pgschema.models.schema import DbType

ARRAY_PREFIX = "_"
ARRAY_SUFFIX = "[]"

_TYPE_NAMES: dict[DbType, tuple[str, ...]] = {
    DbType.BOOLEAN: ("bit", "bool", "boolean"),
    DbType.BINARY: ("bytea",),
    DbType.STRING: (
        "bpchar", "char", "character", "text", "varchar",
        "character varying", "json", "jsonb", "citext", "name",
    ),
    DbType.DATE: ("date",),
    DbType.SINGLE: ("float4", "real", "single precision"),
    DbType.DOUBLE: ("float8", "double precision"),
    DbType.INT16: ("int2", "smallint"),
    DbType.INT32: ("int4", "integer", "int", "serial"),
    DbType.INT64: ("int8", "bigint", "bigserial"),
    DbType.DECIMAL: ("numeric", "decimal", "money"),
    DbType.TIME: (
        "time", "timetz",
        "time without time zone", "time without timezone",
        "time with time zone", "time with timezone",
    ),
    DbType.DATETIME: (
        "interval", "timestamp",
        "timestamp without time zone", "timestamp without timezone",
    ),
    DbType.DATETIME_OFFSET: (
        "timestamptz", "timestamp with time zone", "timestamp with timezone",
    ),
    DbType.GUID: ("uuid",),
    DbType.XML: ("xml",),
    DbType.OBJECT: (
        "box", "circle", "inet", "cidr", "line", "lseg",
        "path", "point", "polygon", "refcursor",
    ),
}

TYPE_MAP: dict[str, DbType] = {
    name: db_type
    for db_type, names in _TYPE_NAMES.items()
    for name in names
}


def normalize_native_type(udt_name: Optional[str]) -> str:
    """Rewrite a catalog array type name into ``element[]`` form.

    Args:
        udt_name: The ``udt_name`` reported by information_schema.

    Returns:
        ``int4[]`` for ``_int4``; other names unchanged.
    """
    if not udt_name:
        return ""
    if udt_name.startswith(ARRAY_PREFIX):
        return udt_name[len(ARRAY_PREFIX):] + ARRAY_SUFFIX
    return udt_name


def map_native_type(native_type: Optional[str]) -> tuple[DbType, bool]:
    """Map a native type name to a portable type.

    Both ``_int4`` and ``int4[]`` are recognised as arrays of ``int4``.
    Unknown names map to ``DbType.OBJECT``; this never raises.

    Args:
        native_type: The native type name.

    Returns:
        A tuple of (portable type, is_array).
    """
    text = (native_type or "").strip().lower()
    is_array = False
    if text.endswith(ARRAY_SUFFIX):
        text = text[:-len(ARRAY_SUFFIX)].rstrip()
        is_array = True
    elif text.startswith(ARRAY_PREFIX):
        text = text[len(ARRAY_PREFIX):]
        is_array = True
    return TYPE_MAP.get(text, DbType.OBJECT), is_array
