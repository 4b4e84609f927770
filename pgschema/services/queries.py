"""Catalog queries used by the schema provider.

All queries take asyncpg positional parameters. ``$1`` is always the array of
schemas to exclude for database-wide queries, or the owning schema for
object-scoped ones.
"""

TABLES_SQL = """
    SELECT table_schema, table_name
    FROM information_schema.tables
    WHERE table_schema <> ALL($1::text[])
        AND table_type = 'BASE TABLE'
        AND table_name <> $2
    ORDER BY table_name, table_schema
"""

COLUMNS_SQL = """
    SELECT table_schema,
        table_name,
        column_name,
        ordinal_position,
        column_default,
        is_nullable,
        data_type,
        character_maximum_length,
        numeric_precision,
        numeric_scale,
        udt_name
    FROM information_schema.columns
    WHERE table_schema = $1 AND table_name = $2
    ORDER BY ordinal_position
"""

INDEXES_SQL = """
    SELECT n.nspname AS table_schema,
        c.relname AS table_name,
        i.relname AS index_name,
        a.attname AS column_name,
        x.indisunique AS is_unique,
        x.indisprimary AS is_primary,
        x.indisclustered AS is_clustered
    FROM pg_catalog.pg_index x
    JOIN pg_catalog.pg_class c ON c.oid = x.indrelid
    JOIN pg_catalog.pg_class i ON i.oid = x.indexrelid
    JOIN pg_catalog.pg_attribute a ON a.attrelid = i.oid AND a.attnum > 0
    JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace
    WHERE c.relkind IN ('r', 'p') AND i.relkind IN ('i', 'I')
        AND n.nspname = $1
        AND c.relname = $2
    ORDER BY i.relname, a.attnum
"""

FOREIGN_KEYS_SQL = """
    SELECT px.conname AS constraint_name,
        fn.nspname AS table_schema,
        fc.relname AS table_name,
        fa.attname AS column_name,
        rn.nspname AS reference_table_schema,
        rc.relname AS reference_table_name,
        ra.attname AS reference_column_name,
        px.confupdtype AS on_update,
        px.confdeltype AS on_delete
    FROM pg_catalog.pg_constraint px
    CROSS JOIN LATERAL unnest(px.conkey, px.confkey)
        WITH ORDINALITY AS k(conkey, confkey, member_position)
    JOIN pg_catalog.pg_class fc ON fc.oid = px.conrelid
    JOIN pg_catalog.pg_class rc ON rc.oid = px.confrelid
    JOIN pg_catalog.pg_namespace fn ON fn.oid = fc.relnamespace
    JOIN pg_catalog.pg_namespace rn ON rn.oid = rc.relnamespace
    JOIN pg_catalog.pg_attribute fa
        ON fa.attrelid = px.conrelid AND fa.attnum = k.conkey
    JOIN pg_catalog.pg_attribute ra
        ON ra.attrelid = px.confrelid AND ra.attnum = k.confkey
    WHERE px.contype = 'f'
        AND px.conparentid = 0
        AND fn.nspname = $1
        AND fc.relname = $2
    ORDER BY px.conname, k.member_position
"""

VIEWS_SQL = """
    SELECT table_schema, table_name
    FROM information_schema.views
    WHERE table_schema <> ALL($1::text[])
    ORDER BY table_name, table_schema
"""

VIEW_TEXT_SQL = """
    SELECT view_definition
    FROM information_schema.views
    WHERE table_schema = $1 AND table_name = $2
"""

COMMANDS_SQL = """
    SELECT specific_schema,
        specific_name,
        routine_schema,
        routine_name,
        routine_type,
        data_type,
        type_udt_name
    FROM information_schema.routines
    WHERE routine_schema <> ALL($1::text[])
    ORDER BY routine_name, specific_name
"""

COMMAND_TEXT_SQL = """
    SELECT routine_definition
    FROM information_schema.routines
    WHERE specific_schema = $1 AND specific_name = $2
"""

PARAMETERS_SQL = """
    SELECT specific_schema,
        specific_name,
        ordinal_position,
        parameter_mode,
        parameter_name,
        data_type,
        udt_name,
        character_maximum_length,
        numeric_precision,
        numeric_scale
    FROM information_schema.parameters
    WHERE specific_schema = $1 AND specific_name = $2
    ORDER BY ordinal_position
"""
