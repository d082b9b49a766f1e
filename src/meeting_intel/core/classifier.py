# src/meeting_intel/core/classifier.py
"""
Deadline Classifier

Assigns a single Bucket to a deadline relative to `now`. Checks run in a fixed
order and the first match wins:

    no deadline          -> NO_DEADLINE
    deadline <  now      -> OVERDUE
    deadline <= end of today                      -> TODAY
    deadline <= Sunday end of the Monday week     -> THIS_WEEK
    otherwise            -> LATER

A deadline equal to `now` is not overdue.
"""

from datetime import tzinfo
from typing import Optional

from .clock import UTC, end_of_today, end_of_week_monday_aligned
from .models import Bucket


def classify(deadline: Optional[int], now: int, tz: tzinfo = UTC) -> Bucket:
    """Classify a deadline (epoch ms, or None) against `now`."""
    if deadline is None:
        return Bucket.NO_DEADLINE
    if deadline < now:
        return Bucket.OVERDUE
    if deadline <= end_of_today(now, tz):
        return Bucket.TODAY
    if deadline <= end_of_week_monday_aligned(now, tz):
        return Bucket.THIS_WEEK
    return Bucket.LATER
