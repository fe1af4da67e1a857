import hashlib
import logging

import pytest

from sqlcraft import ContractViolation, Database
from sqlcraft.dialects import GENERIC_DIALECT
from sqlcraft.expressions import (
    BinaryExpression,
    BinaryOperator,
    Column,
    ColumnAssignment,
    ColumnConstraint,
    ColumnDefinition,
    CommonTableExpression,
    CommonTableExpressionGroup,
    ConflictAction,
    ConflictStrategy,
    Constraint,
    DataType,
    Direction,
    ExcludedColumn,
    ForeignKey,
    ForeignKeyAction,
    Join,
    JoinMethod,
    Literal,
    LockingClause,
    NestedSubpath,
    OrderBy,
    Raw,
    Returning,
    TableConstraint,
)
from sqlcraft.queries import Select


def sql_of(db, expression):
    return db.serialize(expression).sql


def test_column_constraints(db):
    assert sql_of(db, ColumnConstraint.not_null()) == "NOT NULL"
    assert sql_of(db, ColumnConstraint.unique()) == "UNIQUE"
    assert sql_of(db, ColumnConstraint.default("draft")) == "DEFAULT 'draft'"
    assert sql_of(db, ColumnConstraint.default(True)) == "DEFAULT true"
    assert sql_of(db, ColumnConstraint.default(0)) == "DEFAULT 0"
    assert sql_of(db, ColumnConstraint.collate("nocase")) == 'COLLATE "nocase"'
    assert sql_of(db, ColumnConstraint.check(Raw("age > 0"))) == "CHECK (age > 0)"
    generated = ColumnConstraint.generated(
        BinaryExpression("price", BinaryOperator.MULTIPLY, Literal.numeric(2))
    )
    assert sql_of(db, generated) == 'GENERATED ALWAYS AS ("price" * 2) STORED'


def test_primary_key_auto_increment_per_dialect(sqlite_db, postgres_db, mysql_db):
    key = ColumnConstraint.primary_key()
    assert sql_of(sqlite_db, key) == "PRIMARY KEY AUTOINCREMENT"
    assert sql_of(postgres_db, key) == "PRIMARY KEY GENERATED BY DEFAULT AS IDENTITY"
    assert sql_of(mysql_db, key) == "PRIMARY KEY AUTO_INCREMENT"
    assert sql_of(sqlite_db, ColumnConstraint.primary_key(auto_increment=False)) == "PRIMARY KEY"


def test_primary_key_with_auto_increment_function():
    db = Database(GENERIC_DIALECT.replace(auto_increment_function="nextval('seq')"))
    assert sql_of(db, ColumnConstraint.primary_key()) == "DEFAULT nextval('seq') PRIMARY KEY"


def test_primary_key_without_auto_increment_support_warns(caplog):
    caplog.set_level(logging.WARNING, logger="sqlcraft.database")
    db = Database(GENERIC_DIALECT.replace(supports_auto_increment=False))
    assert sql_of(db, ColumnConstraint.primary_key()) == "PRIMARY KEY"
    assert any("auto-increment" in record.message for record in caplog.records)


def test_foreign_keys(db):
    reference = ColumnConstraint.references("users", "id", on_delete=ForeignKeyAction.CASCADE)
    assert sql_of(db, reference) == 'REFERENCES "users" ("id") ON DELETE CASCADE'
    constraint = TableConstraint.foreign_key(
        ["user_id"], ForeignKey("users", ["id"], on_update=ForeignKeyAction.SET_NULL)
    )
    assert sql_of(db, constraint) == (
        'FOREIGN KEY ("user_id") REFERENCES "users" ("id") ON UPDATE SET NULL'
    )


def test_named_table_constraints(db):
    named = Constraint(TableConstraint.primary_key("a", "b"), name="pk_pairs")
    assert sql_of(db, named) == 'CONSTRAINT "pk_pairs" PRIMARY KEY ("a", "b")'
    assert sql_of(db, TableConstraint.check(Raw("a < b"))) == "CHECK (a < b)"


def test_mysql_shortens_long_constraint_names(mysql_db):
    name = "uq_" + "x" * 70
    digest = hashlib.sha1(name.encode("utf-8")).hexdigest()
    rendered = sql_of(mysql_db, Constraint(TableConstraint.unique("email"), name=name))
    assert rendered == f"CONSTRAINT `{digest}` UNIQUE (`email`)"
    short = sql_of(mysql_db, Constraint(TableConstraint.unique("email"), name="uq_email"))
    assert short == "CONSTRAINT `uq_email` UNIQUE (`email`)"


def test_column_definition_and_data_type_overrides(db, postgres_db, mysql_db):
    definition = ColumnDefinition("body", DataType.TEXT, [ColumnConstraint.not_null()])
    assert sql_of(db, definition) == '"body" TEXT NOT NULL'
    assert sql_of(mysql_db, definition) == "`body` VARCHAR(255) NOT NULL"
    assert sql_of(postgres_db, ColumnDefinition("data", DataType.BLOB)) == '"data" BYTEA'
    assert sql_of(db, DataType.of("NUMERIC(10, 2)")) == "NUMERIC(10, 2)"
    assert sql_of(db, DataType.TIMESTAMP) == "TIMESTAMP"


def test_enum_data_type_per_dialect(sqlite_db, postgres_db, mysql_db, caplog):
    caplog.set_level(logging.WARNING, logger="sqlcraft.database")
    enum = DataType.enum("draft", "published")
    assert sql_of(mysql_db, enum) == "ENUM('draft', 'published')"
    assert sql_of(sqlite_db, enum) == "TEXT"
    assert not caplog.records
    assert sql_of(postgres_db, enum) == "TEXT"
    assert any("CreateEnum" in record.message for record in caplog.records)


def test_join_and_order_by(db):
    join = Join(
        JoinMethod.LEFT,
        "posts",
        BinaryExpression(Column("id", "users"), BinaryOperator.EQUAL, Column("user_id", "posts")),
    )
    assert sql_of(db, join) == 'LEFT JOIN "posts" ON "users"."id" = "posts"."user_id"'
    assert sql_of(db, OrderBy("name")) == '"name"'
    assert sql_of(db, OrderBy("name", Direction.DESCENDING)) == '"name" DESC'


def test_locking_clause_dropped_without_dialect_support(sqlite_db, mysql_db):
    assert sql_of(sqlite_db, LockingClause.UPDATE) == ""
    assert sql_of(mysql_db, LockingClause.SHARE) == "LOCK IN SHARE MODE"


def test_returning(db, mysql_db, caplog):
    assert sql_of(db, Returning(["id", "name"])) == 'RETURNING "id", "name"'
    assert sql_of(db, Returning([])) == ""
    caplog.set_level(logging.WARNING, logger="sqlcraft.database")
    assert sql_of(mysql_db, Returning(["id"])) == ""
    assert any("RETURNING" in record.message for record in caplog.records)


def test_common_table_expressions(db):
    recent = CommonTableExpression("recent", Select(["id"], ["posts"]))
    numbers = CommonTableExpression("nums", Raw("SELECT 1"), columns=["n"], recursive=True)
    assert sql_of(db, CommonTableExpressionGroup([recent])) == (
        'WITH "recent" AS (SELECT "id" FROM "posts")'
    )
    assert sql_of(db, CommonTableExpressionGroup([numbers, recent])) == (
        'WITH RECURSIVE "nums" ("n") AS (SELECT 1), "recent" AS (SELECT "id" FROM "posts")'
    )
    assert sql_of(db, CommonTableExpressionGroup([])) == ""


def test_excluded_column_per_upsert_syntax(sqlite_db, mysql_db):
    assert sql_of(sqlite_db, ExcludedColumn("name")) == 'EXCLUDED."name"'
    assert sql_of(mysql_db, ExcludedColumn("name")) == "VALUES(`name`)"
    assert sql_of(Database(), ExcludedColumn("name")) == ""


def test_conflict_strategy_standard(sqlite_db):
    strategy = ConflictStrategy(
        ["id"],
        ConflictAction.update(
            [ColumnAssignment.excluded("name")],
            predicate=BinaryExpression("locked", BinaryOperator.EQUAL, Literal.boolean(False)),
        ),
    )
    assert sql_of(sqlite_db, strategy) == (
        'ON CONFLICT ("id") DO UPDATE SET "name" = EXCLUDED."name" WHERE "locked" = false'
    )
    assert sql_of(sqlite_db, ConflictStrategy([])) == "ON CONFLICT DO NOTHING"


def test_conflict_strategy_without_upsert_support_warns(caplog):
    caplog.set_level(logging.WARNING, logger="sqlcraft.database")
    assert sql_of(Database(), ConflictStrategy(["id"])) == ""
    assert any("upserts" in record.message for record in caplog.records)


def test_empty_update_assignments_violate_contract(sqlite_db, mysql_db):
    strategy = ConflictStrategy(["id"], ConflictAction.update([]))
    with pytest.raises(ContractViolation):
        sqlite_db.serialize(strategy)
    with pytest.raises(ContractViolation):
        mysql_db.serialize(strategy)


def test_nested_subpath_per_dialect(sqlite_db, postgres_db, mysql_db):
    path = NestedSubpath("data", ["a", "b"])
    assert sql_of(sqlite_db, path) == "json_extract(\"data\", '$.a.b')"
    assert sql_of(postgres_db, path) == "(\"data\"->'a'->>'b')"
    assert sql_of(mysql_db, path) == "(`data`->>'$.a.b')"
    assert sql_of(postgres_db, NestedSubpath("data", ["a"])) == "(\"data\"->>'a')"


def test_nested_subpath_requires_a_path(sqlite_db):
    with pytest.raises(ContractViolation):
        sqlite_db.serialize(NestedSubpath("data", []))


def test_unknown_data_type_is_rejected_at_construction():
    with pytest.raises(ContractViolation):
        DataType("uuid")
    with pytest.raises(ContractViolation):
        DataType("custom")
    assert DataType("custom", Raw("UUID")) == DataType.of("UUID")


def test_unknown_column_constraint_is_rejected_at_construction():
    with pytest.raises(ContractViolation):
        ColumnConstraint("primary")


def test_unknown_table_constraint_is_rejected_at_construction():
    with pytest.raises(ContractViolation):
        TableConstraint("index", ["id"])
