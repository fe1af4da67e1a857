import pytest

from sqlcraft import Database
from sqlcraft.dialects import (
    MYSQL_DIALECT,
    POSTGRES_DIALECT,
    SQLITE_DIALECT,
    Dialect,
    EnumSyntax,
    TriggerCreateFeature,
    TriggerDropFeature,
    TriggerSyntax,
    UnionFeature,
    UpsertSyntax,
)

# Generic dialect with distinctive placeholders and most features switched on.
TEST_DIALECT = Dialect(
    name="test",
    placeholder=lambda position: f"&{position}",
    enum_syntax=EnumSyntax.INLINE,
    supports_drop_behavior=True,
    supports_returning=True,
    trigger_syntax=TriggerSyntax(
        create=TriggerCreateFeature.SUPPORTS_BODY
        | TriggerCreateFeature.SUPPORTS_CONDITION
        | TriggerCreateFeature.SUPPORTS_FOR_EACH
        | TriggerCreateFeature.SUPPORTS_UPDATE_COLUMNS
        | TriggerCreateFeature.SUPPORTS_ORDER
        | TriggerCreateFeature.SUPPORTS_DEFINER,
        drop=TriggerDropFeature.SUPPORTS_TABLE_NAME | TriggerDropFeature.SUPPORTS_CASCADE,
    ),
    upsert_syntax=UpsertSyntax.STANDARD,
    union_features=(
        UnionFeature.UNION
        | UnionFeature.UNION_ALL
        | UnionFeature.INTERSECT
        | UnionFeature.INTERSECT_ALL
        | UnionFeature.EXCEPT
        | UnionFeature.EXCEPT_ALL
    ),
    shared_select_lock="FOR SHARE",
    exclusive_select_lock="FOR UPDATE",
)


@pytest.fixture
def db():
    return Database(TEST_DIALECT)


@pytest.fixture
def sqlite_db():
    return Database(SQLITE_DIALECT)


@pytest.fixture
def postgres_db():
    return Database(POSTGRES_DIALECT)


@pytest.fixture
def mysql_db():
    return Database(MYSQL_DIALECT)
