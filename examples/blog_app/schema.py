"""
Blog schema expressed as sqlcraft DDL trees.
"""

from __future__ import annotations

from typing import List

from sqlcraft.expressions import (
    ColumnConstraint,
    ColumnDefinition,
    DataType,
    ForeignKeyAction,
)
from sqlcraft.queries import CreateIndex, CreateTable

AUTHORS = "authors"
POSTS = "posts"

BOOLEAN = DataType.of("BOOLEAN")


def schema() -> List[object]:
    authors = CreateTable(
        AUTHORS,
        columns=[
            ColumnDefinition("id", DataType.INT, [ColumnConstraint.primary_key()]),
            ColumnDefinition("name", DataType.TEXT, [ColumnConstraint.not_null()]),
            ColumnDefinition("email", DataType.TEXT, [ColumnConstraint.unique()]),
        ],
        if_not_exists=True,
    )
    posts = CreateTable(
        POSTS,
        columns=[
            ColumnDefinition("id", DataType.INT, [ColumnConstraint.primary_key()]),
            ColumnDefinition(
                "author_id",
                DataType.INT,
                [
                    ColumnConstraint.not_null(),
                    ColumnConstraint.references(
                        AUTHORS, "id", on_delete=ForeignKeyAction.CASCADE
                    ),
                ],
            ),
            ColumnDefinition("title", DataType.TEXT, [ColumnConstraint.not_null()]),
            ColumnDefinition("body", DataType.TEXT),
            ColumnDefinition("published", BOOLEAN, [ColumnConstraint.default(False)]),
        ],
        if_not_exists=True,
    )
    index = CreateIndex("idx_posts_author", POSTS, ["author_id"])
    return [authors, posts, index]
