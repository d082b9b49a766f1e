"""
Core deadline logic: clock boundaries, classifier, dedup guard and models.

Usage:
    from src.meeting_intel.core import classify, already_notified
"""

from .classifier import classify
from .clock import (
    DAY_MS,
    HOUR_MS,
    WEEK_MS,
    end_of_today,
    end_of_week,
    end_of_week_monday_aligned,
    has_elapsed,
    start_of_today,
)
from .dedup import already_notified
from .models import (
    ActionItem,
    ActionItemStatus,
    Bucket,
    Notification,
    NotificationDraft,
    NotificationType,
    OwnerById,
    OwnerByName,
    Unassigned,
)

__all__ = [
    "classify",
    "already_notified",
    "start_of_today",
    "end_of_today",
    "end_of_week",
    "end_of_week_monday_aligned",
    "has_elapsed",
    "DAY_MS",
    "HOUR_MS",
    "WEEK_MS",
    "ActionItem",
    "ActionItemStatus",
    "Bucket",
    "Notification",
    "NotificationDraft",
    "NotificationType",
    "OwnerById",
    "OwnerByName",
    "Unassigned",
]
