# src/meeting_intel/core/dedup.py
"""
Notification Dedup Guard

Decides whether a notification of a given type was already issued for an
action item within the rolling dedup window (24 hours by default).
"""

from typing import Iterable, Optional

from .clock import DAY_MS
from .models import Notification, NotificationType


def already_notified(
    existing: Iterable[Notification],
    notification_type: NotificationType,
    action_item_id: Optional[str],
    now: int,
    window_ms: int = DAY_MS,
) -> bool:
    """
    True iff `existing` holds a notification with the same type and action item
    created strictly after `now - window_ms`.

    A notification exactly `window_ms` old has expired. The caller fetches
    `existing`; this function does no I/O.
    """
    cutoff = now - window_ms
    return any(
        n.notification_type is notification_type
        and n.action_item_id == action_item_id
        and n.created_at > cutoff
        for n in existing
    )
