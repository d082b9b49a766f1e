# src/meeting_intel/services/deadline_sweep.py
"""
Deadline Sweep Engine

One sweep:
1. Upcoming: owned items with now < deadline <= now + 24h
2. Overdue: owned items with deadline < now
3. For each candidate, read the owner's notification history and insert a
   notification unless one of the same type for the same item exists within
   the rolling dedup window.

The engine does no I/O of its own; the caller injects the history read and the
insert. Each item is processed independently: a failing read or insert is
recorded on the result and the sweep moves on.

Concurrency: check-then-insert is not atomic. Callers must serialize sweeps
(see services/jobs/deadline_sweep.py for the single-writer lock).
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Sequence

from ..core.clock import DAY_MS
from ..core.dedup import already_notified
from ..core.models import ActionItem, Notification, NotificationDraft, NotificationType, OwnerById
from .notification_service import BUILDERS

logger = logging.getLogger(__name__)

FetchNotifications = Callable[[str], Sequence[Notification]]
InsertNotification = Callable[[NotificationDraft], str]


@dataclass
class ItemFailure:
    """A candidate whose notification attempt raised."""
    action_item_id: str
    notification_type: NotificationType
    error: Exception

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action_item_id": self.action_item_id,
            "type": self.notification_type.value,
            "error": f"{type(self.error).__name__}: {self.error}",
        }


@dataclass
class SweepResult:
    """Outcome of one sweep."""
    created_count: int = 0
    created_ids: List[str] = field(default_factory=list)
    candidates: int = 0
    already_notified: int = 0
    skipped_done: int = 0
    failures: List[ItemFailure] = field(default_factory=list)

    @property
    def failed_item_ids(self) -> List[str]:
        return [f.action_item_id for f in self.failures]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "created_count": self.created_count,
            "created_ids": list(self.created_ids),
            "candidates": self.candidates,
            "already_notified": self.already_notified,
            "skipped_done": self.skipped_done,
            "failures": [f.to_dict() for f in self.failures],
        }


def select_upcoming(items: Sequence[ActionItem], now: int, window_ms: int = DAY_MS) -> List[ActionItem]:
    """Owned items whose deadline lies in (now, now + window_ms]."""
    tomorrow = now + window_ms
    return [
        item for item in items
        if item.deadline is not None
        and now < item.deadline <= tomorrow
        and isinstance(item.owner, OwnerById)
    ]


def select_overdue(items: Sequence[ActionItem], now: int) -> List[ActionItem]:
    """Owned items whose deadline is strictly before now."""
    return [
        item for item in items
        if item.deadline is not None
        and item.deadline < now
        and isinstance(item.owner, OwnerById)
    ]


def run_sweep(
    open_items: Sequence[ActionItem],
    now: int,
    fetch_notifications_for_user: FetchNotifications,
    insert_notification: InsertNotification,
    upcoming_window_ms: int = DAY_MS,
    dedup_window_ms: int = DAY_MS,
) -> SweepResult:
    """
    Run one deadline sweep.

    Args:
        open_items: Items not marked done (done items are skipped with a warning)
        now: Current instant, epoch ms
        fetch_notifications_for_user: Returns a user's existing notifications
        insert_notification: Persists a draft and returns its ID
        upcoming_window_ms: How far ahead a deadline counts as upcoming
        dedup_window_ms: Rolling window for the dedup guard

    Returns:
        SweepResult with the number of notifications actually inserted
    """
    result = SweepResult()

    items = []
    for item in open_items:
        if item.is_done:
            logger.warning(f"Done action item {item.id} passed to deadline sweep, skipping")
            result.skipped_done += 1
            continue
        items.append(item)

    batches = (
        (NotificationType.ACTION_ITEM_DEADLINE, select_upcoming(items, now, upcoming_window_ms)),
        (NotificationType.ACTION_ITEM_OVERDUE, select_overdue(items, now)),
    )

    for notification_type, candidates in batches:
        build = BUILDERS[notification_type]
        for item in candidates:
            result.candidates += 1
            user_id = item.owner.user_id
            try:
                existing = fetch_notifications_for_user(user_id)
                if already_notified(existing, notification_type, item.id, now, window_ms=dedup_window_ms):
                    result.already_notified += 1
                    continue
                notification_id = insert_notification(build(item, user_id, now))
            except Exception as e:
                logger.error(f"Deadline sweep failed for action item {item.id} ({notification_type.value}): {e}")
                result.failures.append(ItemFailure(item.id, notification_type, e))
                continue
            result.created_count += 1
            result.created_ids.append(notification_id)

    logger.info(
        f"Deadline sweep done: created={result.created_count} candidates={result.candidates} "
        f"deduped={result.already_notified} failed={len(result.failures)}"
    )
    return result
