from examples.blog_app import (
    bootstrap,
    fetch_recent_posts,
    recent_posts_query,
    run_demo,
    seed_sample_data,
)


def test_blog_example_bootstrap_and_seed(tmp_path):
    db_path = tmp_path / "blog_example.db"
    connection, db = bootstrap(dsn=f"sqlite:///{db_path}")
    try:
        seeded = seed_sample_data(connection, db)
        assert seeded == {"authors": 2, "posts": 3}

        # seeding twice keeps authors unique through the conflict clause
        seed_sample_data(connection, db)
        assert connection.execute("SELECT COUNT(*) FROM authors").fetchone()[0] == 2

        feed = fetch_recent_posts(connection, db, limit=5)
        assert len(feed) == 4
        assert {"id", "title", "published", "author_name"} <= feed[0].keys()
        assert [entry["id"] for entry in feed] == sorted((entry["id"] for entry in feed), reverse=True)
    finally:
        connection.close()
    assert db_path.exists()


def test_recent_posts_query_renders_for_sqlite(sqlite_db):
    sql, binds = sqlite_db.serialize(recent_posts_query(limit=3))
    assert sql == (
        'SELECT "posts"."id", "posts"."title", "posts"."published", '
        '"authors"."name" AS "author_name" FROM "posts" '
        'INNER JOIN "authors" ON "posts"."author_id" = "authors"."id" '
        'WHERE "posts"."published" = ? ORDER BY "posts"."id" DESC LIMIT 3'
    )
    assert binds == [True]


def test_run_demo_returns_feed():
    feed = run_demo()
    assert len(feed) == 2
    assert all(entry["published"] for entry in feed)
    assert feed[0]["author_name"] == "Brian Kim"
