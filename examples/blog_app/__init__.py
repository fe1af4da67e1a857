"""
Blog-style sample application rendering its SQL with sqlcraft.
"""

from .demo import bootstrap, fetch_recent_posts, recent_posts_query, run_demo, seed_sample_data
from .schema import schema

__all__ = [
    "bootstrap",
    "fetch_recent_posts",
    "recent_posts_query",
    "run_demo",
    "schema",
    "seed_sample_data",
]
