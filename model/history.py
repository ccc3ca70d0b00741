"""
model/history.py — Summary statistics over past measurements
=============================================================
Pure aggregation over a list of MeasurementResult records supplied by the
caller (the records themselves live wherever the caller keeps them).
"""

import math
from collections import Counter
from datetime import datetime, timedelta, timezone

from model.stress import StressBucket, parse_bucket


def _round_half_up(value: float) -> int:
    # 72.5 → 73 (builtin round() would give 72)
    return math.floor(value + 0.5)


def average_heart_rate(results) -> int:
    """Mean heart rate, rounded half up; 0 for an empty history."""
    if not results:
        return 0
    return _round_half_up(sum(r.heart_rate for r in results) / len(results))


def bucket_counts(results) -> dict[str, int]:
    counts = Counter(parse_bucket(r.stress_level) for r in results)
    return {bucket.value: counts.get(bucket, 0) for bucket in StressBucket}


def dominant_level(results) -> StressBucket | None:
    """
    Most frequent bucket.  Ties go to the calmer bucket (low beats medium,
    medium beats high).  None for an empty history.
    """
    if not results:
        return None
    counts = bucket_counts(results)
    low, medium, high = counts["low"], counts["medium"], counts["high"]
    if low >= medium and low >= high:
        return StressBucket.LOW
    if medium >= high:
        return StressBucket.MEDIUM
    return StressBucket.HIGH


def daily_stats(results, days: int = 7, now: datetime | None = None) -> list[dict]:
    """
    Per-day count and average heart rate for results in the last `days` days.

    Days are grouped by the UTC calendar date of each timestamp and returned
    oldest first.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    cutoff = now - timedelta(days=days)

    grouped: dict[str, list[float]] = {}
    for result in results:
        ts = result.timestamp
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        if ts < cutoff:
            continue
        key = ts.astimezone(timezone.utc).date().isoformat()
        grouped.setdefault(key, []).append(result.heart_rate)

    return [
        {
            "date": day,
            "count": len(rates),
            "average_heart_rate": _round_half_up(sum(rates) / len(rates)),
        }
        for day, rates in sorted(grouped.items())
    ]


def summarize_history(results, days: int = 7, now: datetime | None = None) -> dict:
    """Everything the history screen shows, in one dict."""
    results = list(results)
    return {
        "count": len(results),
        "average_heart_rate": average_heart_rate(results),
        "counts": bucket_counts(results),
        "dominant_level": dominant_level(results),
        "daily": daily_stats(results, days=days, now=now),
    }
