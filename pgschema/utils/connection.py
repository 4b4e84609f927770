"""Connection string helpers."""

import re
from urllib.parse import unquote, urlsplit

_DATABASE_KEY = re.compile(r"Database\W*=\W*(?P<database>[^;]*)", re.IGNORECASE)
_URL_SCHEMES = ("postgres", "postgresql")


def extract_database_name(connection_string: str) -> str:
    """Extract the database name from a connection string.

    Understands ``Key=Value;`` descriptors (``Database=sales;Host=...``) and
    ``postgresql://`` URLs. Anything else is returned unchanged.

    Args:
        connection_string: The connection descriptor.

    Returns:
        The database name, or the whole descriptor when none is found.
    """
    match = _DATABASE_KEY.search(connection_string)
    if match:
        return match.group("database")

    parts = urlsplit(connection_string)
    if parts.scheme in _URL_SCHEMES:
        name = unquote(parts.path.lstrip("/"))
        if name:
            return name

    return connection_string
