"""Pytest configuration and fixtures for pg-schema-provider tests."""

from typing import Any, Optional

import pytest

from pgschema.models.database import DatabaseSchema
from pgschema.services import queries
from pgschema.services.schema import PostgreSQLSchemaProvider


# Markers for test categorization
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (deselect with '-m \"not integration\"')"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow running tests"
    )


@pytest.fixture(scope="session")
def anyio_backend():
    """Set the async backend for anyio."""
    return "asyncio"


def pytest_collection_modifyitems(config, items):
    """Run unit tests before integration tests."""
    items.sort(key=lambda item: (item.get_closest_marker("integration") is not None, item.name))


def _args_key(args: tuple) -> tuple:
    return tuple(tuple(a) if isinstance(a, list) else a for a in args)


class FakeRowSource:
    """In-memory row source keyed by query text and scope arguments.

    Results registered without arguments answer the query for any arguments.
    Every call is recorded in ``calls``.
    """

    def __init__(self):
        self.results: dict[tuple, Any] = {}
        self.calls: list[tuple[str, tuple]] = []
        self.error: Optional[Exception] = None

    def add(self, query: str, result: Any, *args: Any) -> None:
        self.results[(query, _args_key(args))] = result

    def _lookup(self, query: str, args: tuple) -> Any:
        self.calls.append((query, args))
        if self.error is not None:
            raise self.error
        key = (query, _args_key(args))
        if key in self.results:
            return self.results[key]
        return self.results.get((query, ()))

    async def fetch(self, query: str, *args: Any) -> list[dict]:
        return list(self._lookup(query, args) or [])

    async def fetchval(self, query: str, *args: Any) -> Any:
        return self._lookup(query, args)

    def queries_for(self, query: str) -> list[tuple]:
        return [args for q, args in self.calls if q == query]


def table_row(schema: str, name: str) -> dict:
    return {"table_schema": schema, "table_name": name}


def column_row(
    schema: str,
    table: str,
    name: str,
    ordinal: int,
    udt_name: str = "int4",
    data_type: str = "integer",
    default: Optional[str] = None,
    nullable: str = "YES",
    length: Optional[int] = None,
    precision: Optional[int] = None,
    scale: Optional[int] = None
) -> dict:
    return {
        "table_schema": schema,
        "table_name": table,
        "column_name": name,
        "ordinal_position": ordinal,
        "column_default": default,
        "is_nullable": nullable,
        "data_type": data_type,
        "character_maximum_length": length,
        "numeric_precision": precision,
        "numeric_scale": scale,
        "udt_name": udt_name,
    }


def index_row(
    schema: str,
    table: str,
    index: str,
    column: str,
    unique: bool = False,
    primary: bool = False,
    clustered: bool = False
) -> dict:
    return {
        "table_schema": schema,
        "table_name": table,
        "index_name": index,
        "column_name": column,
        "is_unique": unique,
        "is_primary": primary,
        "is_clustered": clustered,
    }


def fk_row(
    constraint: str,
    schema: str,
    table: str,
    column: str,
    ref_schema: str,
    ref_table: str,
    ref_column: str,
    on_update: str = "a",
    on_delete: str = "a"
) -> dict:
    return {
        "constraint_name": constraint,
        "table_schema": schema,
        "table_name": table,
        "column_name": column,
        "reference_table_schema": ref_schema,
        "reference_table_name": ref_table,
        "reference_column_name": ref_column,
        "on_update": on_update,
        "on_delete": on_delete,
    }


@pytest.fixture
def row_source() -> FakeRowSource:
    """A row source describing a small shop database.

    ``public.customers`` and ``public.orders`` are visible; orders also
    references ``audit.users``, which lives outside the introspected schemas.
    """
    source = FakeRowSource()
    source.add(queries.TABLES_SQL, [
        table_row("public", "customers"),
        table_row("public", "orders"),
    ])
    source.add(queries.COLUMNS_SQL, [
        column_row("public", "customers", "id", 1,
                   default="nextval('customers_id_seq'::regclass)", nullable="NO"),
        column_row("public", "customers", "email", 2, udt_name="varchar",
                   data_type="character varying", length=255),
    ], "public", "customers")
    source.add(queries.COLUMNS_SQL, [
        column_row("public", "orders", "id", 1,
                   default="nextval('orders_id_seq'::regclass)", nullable="NO"),
        column_row("public", "orders", "customer_id", 2, nullable="NO"),
        column_row("public", "orders", "created_by", 3),
        column_row("public", "orders", "total", 4, udt_name="numeric",
                   data_type="numeric", precision=10, scale=2, default="0"),
        column_row("public", "orders", "tags", 5, udt_name="_text", data_type="ARRAY"),
    ], "public", "orders")
    source.add(queries.INDEXES_SQL, [
        index_row("public", "customers", "customers_pkey", "id", unique=True, primary=True),
    ], "public", "customers")
    source.add(queries.INDEXES_SQL, [
        index_row("public", "orders", "orders_customer_total_idx", "customer_id"),
        index_row("public", "orders", "orders_customer_total_idx", "total"),
        index_row("public", "orders", "orders_pkey", "id", unique=True, primary=True, clustered=True),
    ], "public", "orders")
    source.add(queries.FOREIGN_KEYS_SQL, [], "public", "customers")
    source.add(queries.FOREIGN_KEYS_SQL, [
        fk_row("orders_created_by_fkey", "public", "orders", "created_by",
               "audit", "users", "id"),
        fk_row("orders_customer_id_fkey", "public", "orders", "customer_id",
               "public", "customers", "id", on_delete="c"),
    ], "public", "orders")
    source.add(queries.VIEWS_SQL, [table_row("public", "big_orders")])
    source.add(queries.COLUMNS_SQL, [
        column_row("public", "big_orders", "id", 1),
        column_row("public", "big_orders", "total", 2, udt_name="numeric", data_type="numeric"),
    ], "public", "big_orders")
    source.add(queries.VIEW_TEXT_SQL, " SELECT id, total FROM orders WHERE total > 100;",
               "public", "big_orders")
    source.add(queries.COMMANDS_SQL, [
        {
            "specific_schema": "public",
            "specific_name": "order_total_16401",
            "routine_schema": "public",
            "routine_name": "order_total",
            "routine_type": "FUNCTION",
            "data_type": "numeric",
            "type_udt_name": "numeric",
        },
        {
            "specific_schema": "public",
            "specific_name": "purge_orders_16402",
            "routine_schema": "public",
            "routine_name": "purge_orders",
            "routine_type": "FUNCTION",
            "data_type": "void",
            "type_udt_name": "void",
        },
    ])
    source.add(queries.PARAMETERS_SQL, [
        {
            "specific_schema": "public",
            "specific_name": "order_total_16401",
            "ordinal_position": 1,
            "parameter_mode": "IN",
            "parameter_name": "order_id",
            "data_type": "integer",
            "udt_name": "int4",
            "character_maximum_length": None,
            "numeric_precision": None,
            "numeric_scale": None,
        },
        {
            "specific_schema": "public",
            "specific_name": "order_total_16401",
            "ordinal_position": 2,
            "parameter_mode": "OUT",
            "parameter_name": "total",
            "data_type": "numeric",
            "udt_name": "numeric",
            "character_maximum_length": None,
            "numeric_precision": None,
            "numeric_scale": None,
        },
    ], "public", "order_total_16401")
    source.add(queries.COMMAND_TEXT_SQL, "SELECT total FROM orders WHERE id = order_id",
               "public", "order_total_16401")
    return source


@pytest.fixture
def provider(row_source) -> PostgreSQLSchemaProvider:
    """Provider in the default lenient mode."""
    return PostgreSQLSchemaProvider(row_source)


@pytest.fixture
def database() -> DatabaseSchema:
    """An empty database model."""
    return DatabaseSchema(name="shop")
