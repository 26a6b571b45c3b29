"""Ranking helpers for post listings."""
from __future__ import annotations

import math
from datetime import datetime

from forum_stage.db.time import as_utc, utcnow

HOT_RANK_SCALE = 10_000
HOT_RANK_GRAVITY = 1.8
SECONDS_PER_HOUR = 3600


def hot_rank(score: int, published: datetime, now: datetime | None = None) -> int:
    """Return the time-decayed rank used by the Hot sort.

    Args:
        score: Net vote score of the post.
        published: When the post was created.
        now: Reference time; defaults to the current UTC time.

    Returns:
        ``10000 * log10(max(1, score + 3)) / (hours + 2) ** 1.8`` truncated to an int.
    """
    reference = now or utcnow()
    hours = max(0.0, (reference - as_utc(published)).total_seconds() / SECONDS_PER_HOUR)
    rank = HOT_RANK_SCALE * math.log10(max(1, score + 3)) / math.pow(hours + 2, HOT_RANK_GRAVITY)
    return int(rank)


# SQL twin of hot_rank for PostgreSQL, so listings can sort and page in the database.
HOT_RANK_POSTGRES_FUNCTION = """
CREATE OR REPLACE FUNCTION hot_rank(score numeric, published timestamptz)
RETURNS integer AS $$
BEGIN
  RETURN floor(
    10000 * log(greatest(1, score + 3))
    / power(greatest(0, extract(epoch FROM (now() - published)) / 3600) + 2, 1.8)
  )::integer;
END;
$$ LANGUAGE plpgsql;
"""


def sqlite_hot_rank(score: int | None, published: str | None) -> int:
    """``hot_rank`` as a SQLite user function; timestamps arrive as ISO strings."""
    if published is None:
        return 0
    return hot_rank(int(score or 0), datetime.fromisoformat(published))
