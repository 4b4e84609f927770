"""Service modules for pg-schema-provider."""

from pgschema.services.database import (
    RowSource,
    PoolRowSource,
    create_pool,
    close_pool,
)
from pgschema.services.type_mapper import map_native_type, normalize_native_type
from pgschema.services.aggregator import RowAggregator
from pgschema.services.base import DbSchemaProvider
from pgschema.services.schema import PostgreSQLSchemaProvider

__all__ = [
    # Database
    "RowSource",
    "PoolRowSource",
    "create_pool",
    "close_pool",
    # Normalization
    "map_native_type",
    "normalize_native_type",
    "RowAggregator",
    # Provider
    "DbSchemaProvider",
    "PostgreSQLSchemaProvider",
]
