"""Main entry point for the pg-schema-provider MCP server."""

import asyncio
import logging

from mcp.server.fastmcp import FastMCP

from pgschema.config import Settings
from pgschema.services.database import PoolRowSource, create_pool, close_pool
from pgschema.services.schema import PostgreSQLSchemaProvider
from pgschema.tools.schema import register_schema_tools
from pgschema.utils.connection import extract_database_name


logger = logging.getLogger("pg_schema")


def main() -> None:
    """Main entry point for the server."""
    import argparse

    parser = argparse.ArgumentParser(description="PostgreSQL schema provider MCP server")
    parser.add_argument(
        "--dsn",
        type=str,
        help="Database DSN"
    )
    parser.add_argument(
        "--include-functions",
        action="store_true",
        help="Also report routines that return void"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on foreign keys or members that do not resolve"
    )
    parser.add_argument(
        "--port",
        type=int,
        help="MCP server port"
    )

    args = parser.parse_args()

    # Load settings
    settings = Settings()
    if args.dsn:
        settings.postgres_dsn = args.dsn
    if args.include_functions:
        settings.include_functions = True
    if args.strict:
        settings.strict_references = True
    if args.port:
        settings.mcp_port = args.port

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )

    logger.info("Starting pg-schema server initialization")

    asyncio.run(run_server(settings))


def create_mcp_app(settings: Settings, provider: PostgreSQLSchemaProvider) -> FastMCP:
    """Create the MCP application with the schema tools registered.

    Args:
        settings: Application settings.
        provider: The schema provider serving the tools.

    Returns:
        Configured FastMCP instance.
    """
    mcp = FastMCP("pg-schema", host=settings.mcp_host, port=settings.mcp_port)
    register_schema_tools(
        mcp,
        provider,
        database_name=extract_database_name(settings.get_dsn()),
        include_functions=settings.include_functions
    )
    return mcp


async def run_server(settings: Settings) -> None:
    """Run the MCP server until it stops, then release the pool.

    Args:
        settings: Application settings.
    """
    pool = await create_pool(
        dsn=settings.get_dsn(),
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        ssl=settings.postgres_ssl,
        timeout=settings.query_timeout
    )
    try:
        provider = PostgreSQLSchemaProvider.from_settings(PoolRowSource(pool), settings)
        mcp = create_mcp_app(settings, provider)
        logger.info("pg-schema server ready on %s:%d", settings.mcp_host, settings.mcp_port)
        await mcp.run_sse_async()
    finally:
        await close_pool(pool)


if __name__ == "__main__":
    main()
