# pgschema/config.py
"""Configuration management for pg-schema-provider."""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import List
import json

from pgschema.utils.constants import EXTENDED_PROPERTIES_TABLE, SYSTEM_SCHEMAS


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # PostgreSQL connection configuration
    postgres_dsn: str = "postgresql://localhost:5432/postgres"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_database: str = "postgres"
    postgres_user: str = "postgres"
    postgres_password: str = ""
    postgres_ssl: bool = False

    # Pool configuration
    pool_min_size: int = 1
    pool_max_size: int = 5
    query_timeout: int = 30

    # Introspection behaviour
    include_functions: bool = False
    strict_references: bool = False
    excluded_schemas: str = Field(
        default="[]",
        description="JSON array of extra schema names to hide"
    )
    extended_properties_table: str = EXTENDED_PROPERTIES_TABLE

    # MCP configuration
    mcp_host: str = "0.0.0.0"
    mcp_port: int = 8990

    log_level: str = "INFO"

    class Config:
        env_prefix = "PG_SCHEMA_"

    def get_dsn(self) -> str:
        """Get the database connection string.

        Returns:
            The DSN string for connecting to PostgreSQL.
        """
        if self.postgres_dsn and not self.postgres_dsn.startswith("${"):
            return self.postgres_dsn
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_database}"
        )

    def get_excluded_schemas(self) -> List[str]:
        """Parse excluded schemas from JSON and add the system schemas.

        Returns:
            List of schema names that are never introspected.
        """
        try:
            extra = json.loads(self.excluded_schemas)
        except json.JSONDecodeError:
            extra = []
        if not isinstance(extra, list):
            extra = []
        schemas = list(SYSTEM_SCHEMAS)
        for name in extra:
            if isinstance(name, str) and name not in schemas:
                schemas.append(name)
        return schemas
