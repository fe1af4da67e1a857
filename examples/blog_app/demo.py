"""
Runs the blog example end-to-end: sqlcraft renders, the stdlib sqlite3
driver executes.
"""

from __future__ import annotations

import sqlite3
from typing import Any, Dict, List, Tuple

from sqlcraft import Database
from sqlcraft.expressions import (
    Alias,
    BinaryExpression,
    BinaryOperator,
    Column,
    ConflictStrategy,
    Direction,
    Join,
    JoinMethod,
    OrderBy,
)
from sqlcraft.queries import Insert, Select
from sqlcraft.security import parse_dsn

from .schema import AUTHORS, POSTS, schema


def bootstrap(dsn: str = "sqlite:///:memory:") -> Tuple[sqlite3.Connection, Database]:
    """
    Open a SQLite connection for ``dsn`` and create the blog schema.
    """
    config = parse_dsn(dsn)
    db = Database.from_dsn(config)
    # sqlite:///relative.db and sqlite:////absolute.db
    connection = sqlite3.connect(config.path[1:] or ":memory:")
    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA foreign_keys = ON")
    for statement in schema():
        connection.execute(*db.serialize(statement))
    return connection, db


def seed_sample_data(connection: sqlite3.Connection, db: Database) -> Dict[str, int]:
    authors = [
        ("Alice Carter", "alice@example.com"),
        ("Brian Kim", "brian@example.com"),
    ]
    author_ids: List[int] = []
    with connection:
        for name, email in authors:
            # re-running the seed must not duplicate authors
            insert = Insert(
                AUTHORS,
                ["name", "email"],
                [[name, email]],
                conflict_strategy=ConflictStrategy(["email"]),
            )
            connection.execute(*db.serialize(insert))
            lookup = Select(
                ["id"], [AUTHORS], predicate=BinaryExpression("email", BinaryOperator.EQUAL, email)
            )
            author_ids.append(connection.execute(*db.serialize(lookup)).fetchone()["id"])

        posts = Insert(
            POSTS,
            ["author_id", "title", "body", "published"],
            [
                [author_ids[0], "Introducing sqlcraft", "One tree, three dialects.", True],
                [author_ids[1], "Binding values safely", "Placeholders, never quotes.", True],
                [author_ids[1], "Unfinished draft", None, False],
            ],
        )
        connection.execute(*db.serialize(posts))
    return {"authors": len(author_ids), "posts": 3}


def recent_posts_query(limit: int = 5) -> Select:
    return Select(
        columns=[
            Column("id", POSTS),
            Column("title", POSTS),
            Column("published", POSTS),
            Alias(Column("name", AUTHORS), "author_name"),
        ],
        tables=[POSTS],
        joins=[
            Join(
                JoinMethod.INNER,
                AUTHORS,
                BinaryExpression(
                    Column("author_id", POSTS), BinaryOperator.EQUAL, Column("id", AUTHORS)
                ),
            )
        ],
        predicate=BinaryExpression(Column("published", POSTS), BinaryOperator.EQUAL, True),
        order_by=[OrderBy(Column("id", POSTS), Direction.DESCENDING)],
        limit=limit,
    )


def fetch_recent_posts(
    connection: sqlite3.Connection, db: Database, limit: int = 5
) -> List[Dict[str, Any]]:
    rows = connection.execute(*db.serialize(recent_posts_query(limit))).fetchall()
    return [dict(row) for row in rows]


def run_demo() -> List[Dict[str, Any]]:
    connection, db = bootstrap()
    try:
        seed_sample_data(connection, db)
        return fetch_recent_posts(connection, db)
    finally:
        connection.close()


if __name__ == "__main__":
    for entry in run_demo():
        print(entry)
