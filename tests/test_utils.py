"""Tests for exceptions and connection string helpers."""

from pgschema.utils.connection import extract_database_name
from pgschema.utils.constants import ErrorCode
from pgschema.utils.exceptions import (
    ObjectNotFoundError,
    SchemaProviderError,
    UnresolvedReferenceError,
    UnsupportedOperationError,
)


class TestExceptions:
    """Exception tests."""

    def test_default_message(self):
        """Test that the error code supplies a default message."""
        error = SchemaProviderError(ErrorCode.CATALOG_QUERY_FAILED)
        assert error.message == "Catalog query failed"
        assert str(error) == "Catalog query failed"

    def test_to_dict(self):
        """Test the serialized error shape."""
        data = UnsupportedOperationError("set_extended_properties").to_dict()
        assert data["status"] == "error"
        assert data["error"]["code"] == ErrorCode.UNSUPPORTED_OPERATION.value
        assert data["error"]["details"] == {"operation": "set_extended_properties"}

    def test_unresolved_reference(self):
        """Test unresolved reference details."""
        error = UnresolvedReferenceError("table", "audit.users", "orders_created_by_fkey")
        assert error.code == ErrorCode.UNRESOLVED_REFERENCE
        assert "audit.users" in error.message
        assert isinstance(error, SchemaProviderError)

    def test_not_found(self):
        """Test not found message."""
        assert ObjectNotFoundError("table", "public.x").message == "Table not found: public.x"


class TestExtractDatabaseName:
    """extract_database_name test suite."""

    def test_key_value(self):
        """Test the Database= key."""
        assert extract_database_name("Server=db;Port=5432;Database=sales;User Id=app") == "sales"

    def test_key_case_insensitive(self):
        """Test that the key is matched case-insensitively."""
        assert extract_database_name("host=db;database = sales") == "sales"

    def test_url(self):
        """Test URL-style DSNs."""
        assert extract_database_name("postgresql://user:pw@db:5432/sales?sslmode=require") == "sales"

    def test_fallback(self):
        """Test that unknown descriptors are returned unchanged."""
        assert extract_database_name("Host=db;Port=5432") == "Host=db;Port=5432"
        assert extract_database_name("postgresql://db:5432") == "postgresql://db:5432"
