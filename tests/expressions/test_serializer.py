import pytest

from sqlcraft.expressions import (
    BinaryExpression,
    BinaryOperator,
    Bind,
    Identifier,
    Raw,
    Serializer,
    Subquery,
)
from sqlcraft.queries import Select


def test_write_bind_numbers_placeholders_in_order(db):
    serializer = Serializer(db)
    for value in ("a", "b", "c"):
        serializer.write_bind(value)
        serializer.write(" ")
    assert serializer.sql == "&1 &2 &3 "
    assert serializer.binds == ["a", "b", "c"]


def test_write_ignores_empty_text(db):
    serializer = Serializer(db)
    serializer.write("")
    serializer.write("x")
    assert serializer.sql == "x"


def test_capture_keeps_binds_but_not_text(db):
    serializer = Serializer(db)
    serializer.write("before ")
    with serializer.capture() as chunks:
        serializer.write_bind(42)
    assert "".join(chunks) == "&1"
    assert serializer.sql == "before "
    assert serializer.binds == [42]


def test_render_returns_text_without_emitting(db):
    serializer = Serializer(db)
    assert serializer.render(Identifier("users")) == '"users"'
    assert serializer.sql == ""


def test_statement_joins_with_single_spaces_and_skips_empty_parts(db):
    serializer = Serializer(db)
    with serializer.statement() as stmt:
        stmt.append("SELECT", None, Raw(""), "1")
        stmt.append(None)
        stmt.append_clause("WHERE", Raw(""))
        stmt.append_clause("FROM", None)
        stmt.extend(["AS", Identifier("x")])
    assert serializer.sql == 'SELECT 1 AS "x"'


def test_statement_discarded_when_block_raises(db):
    serializer = Serializer(db)
    with pytest.raises(RuntimeError):
        with serializer.statement() as stmt:
            stmt.append("SELECT 1")
            raise RuntimeError("boom")
    assert serializer.sql == ""


def test_binds_match_placeholders_under_nesting(postgres_db):
    inner = Select(
        ["user_id"],
        ["posts"],
        predicate=BinaryExpression("score", BinaryOperator.GREATER_THAN, 5),
    )
    outer = Select(
        ["id"],
        ["users"],
        predicate=BinaryExpression(
            BinaryExpression("age", BinaryOperator.GREATER_THAN, 18),
            BinaryOperator.AND,
            BinaryExpression("id", BinaryOperator.IN, Bind.group([7, 8])),
        ),
    )
    query = Select(
        ["id"],
        [Subquery(outer)],
        predicate=BinaryExpression("id", BinaryOperator.IN, Subquery(inner)),
    )
    sql, binds = postgres_db.serialize(query)
    assert sql == (
        'SELECT "id" FROM (SELECT "id" FROM "users" WHERE "age" > $1 AND "id" IN ($2, $3)) '
        'WHERE "id" IN (SELECT "user_id" FROM "posts" WHERE "score" > $4)'
    )
    assert binds == [18, 7, 8, 5]


def test_rendering_is_deterministic(db):
    query = Select(
        ["id", "name"],
        ["users"],
        predicate=BinaryExpression("name", BinaryOperator.LIKE, "a%"),
        limit=3,
    )
    assert db.serialize(query) == db.serialize(query)
