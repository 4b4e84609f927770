"""Utility modules for pg-schema-provider."""

from pgschema.utils.constants import ErrorCode, ERROR_MESSAGES
from pgschema.utils.exceptions import (
    SchemaProviderError,
    UnsupportedOperationError,
    UnresolvedReferenceError,
    ObjectNotFoundError,
)

__all__ = [
    "ErrorCode",
    "ERROR_MESSAGES",
    "SchemaProviderError",
    "UnsupportedOperationError",
    "UnresolvedReferenceError",
    "ObjectNotFoundError",
]
