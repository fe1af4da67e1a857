from sqlcraft.dialects import (
    MYSQL_DIALECT,
    POSTGRES_DIALECT,
    SQLITE_DIALECT,
    EnumSyntax,
    TriggerCreateFeature,
    UnionFeature,
    UpsertSyntax,
    get_mysql_dialect,
    get_postgres_dialect,
    get_sqlite_dialect,
)


def test_sqlite_dialect():
    dialect = get_sqlite_dialect()
    assert dialect is SQLITE_DIALECT
    assert dialect.quote_identifier('bad"name') == '"bad""name"'
    assert dialect.bind_placeholder(2) == "?"
    assert dialect.supports_returning is True
    assert dialect.upsert_syntax is UpsertSyntax.STANDARD
    assert dialect.alter_table_syntax.allows_batch is False
    assert dialect.offset_without_limit == "-1"
    assert UnionFeature.INTERSECT_ALL not in dialect.union_features


def test_postgres_dialect_placeholders():
    assert get_postgres_dialect() is POSTGRES_DIALECT
    assert POSTGRES_DIALECT.bind_placeholder(1) == "$1"
    assert POSTGRES_DIALECT.bind_placeholder(12) == "$12"
    psycopg = get_postgres_dialect(param_style="format")
    assert psycopg.param_style == "format"
    assert psycopg.bind_placeholder(12) == "%s"
    assert psycopg.name == "postgresql"


def test_postgres_dialect_capabilities():
    assert POSTGRES_DIALECT.enum_syntax is EnumSyntax.TYPE_NAME
    assert POSTGRES_DIALECT.supports_drop_behavior is True
    assert TriggerCreateFeature.POSTGRESQL_CHECKS in POSTGRES_DIALECT.trigger_syntax.create
    assert UnionFeature.EXPLICIT_DISTINCT in POSTGRES_DIALECT.union_features
    assert POSTGRES_DIALECT.shared_select_lock == "FOR SHARE"


def test_mysql_dialect():
    assert get_mysql_dialect() is MYSQL_DIALECT
    assert MYSQL_DIALECT.quote_identifier("table") == "`table`"
    assert MYSQL_DIALECT.bind_placeholder(3) == "%s"
    assert get_mysql_dialect(param_style="qmark").bind_placeholder(3) == "?"
    assert MYSQL_DIALECT.upsert_syntax is UpsertSyntax.MYSQL_LIKE
    assert MYSQL_DIALECT.enum_syntax is EnumSyntax.INLINE
    assert MYSQL_DIALECT.supports_returning is False
    assert TriggerCreateFeature.REQUIRES_FOR_EACH_ROW in MYSQL_DIALECT.trigger_syntax.create
