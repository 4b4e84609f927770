"""Tests for schema object identity keys."""

from pgschema.utils.naming import format_foreign_key_name, format_full_name, format_key_name


class TestFormatFullName:
    """format_full_name test suite."""

    def test_schema_and_name(self):
        """Test the plain schema.name form."""
        assert format_full_name("public", "orders") == "public.orders"

    def test_no_schema(self):
        """Test that an empty schema yields just the name."""
        assert format_full_name("", "orders") == "orders"
        assert format_full_name(None, "orders") == "orders"

    def test_dotted_names_are_quoted(self):
        """Test that dots inside names cannot produce collisions."""
        assert format_full_name("a.b", "c") != format_full_name("a", "b.c")
        assert format_full_name("a", "b.c") == 'a."b.c"'

    def test_embedded_quotes_doubled(self):
        """Test quoting of names containing double quotes."""
        assert format_full_name("public", 'my"table') == 'public."my""table"'


class TestFormatKeyName:
    """format_key_name and format_foreign_key_name test suite."""

    def test_key_name(self):
        """Test the schema.table.name form."""
        assert format_key_name("public", "orders", "orders_pkey") == "public.orders.orders_pkey"

    def test_same_constraint_on_different_tables(self):
        """Test that equal constraint names on different tables stay distinct."""
        first = format_foreign_key_name("public", "customers", "fk_customer", "public", "orders")
        second = format_foreign_key_name("public", "customers", "fk_customer", "public", "invoices")
        assert first != second

    def test_foreign_key_name(self):
        """Test the full foreign key identity."""
        key = format_foreign_key_name("public", "customers", "fk", "sales", "orders")
        assert key == "public.customers.fk.sales.orders"
