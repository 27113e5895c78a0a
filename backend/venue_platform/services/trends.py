"""
Per-month bucketing for dashboard and stats trends.

Grouping happens in Python so the same code runs on PostgreSQL and SQLite.
"""

from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional


def monthly_counts(
    timestamps: Iterable[datetime],
    months: int = 12,
    now: Optional[datetime] = None,
) -> list[dict]:
    """Group timestamps into (year, month) buckets over the last `months` months, oldest first."""
    now = now or datetime.now(timezone.utc)
    since = now - timedelta(days=30 * months)
    buckets = Counter((ts.year, ts.month) for ts in timestamps if ts >= since)
    return [
        {"year": year, "month": month, "count": count}
        for (year, month), count in sorted(buckets.items())
    ]
