# tests/fixtures/data.py
"""
Test data fixtures for Meeting Intelligence tests.

Provides factory functions and fixed instants for creating test entities.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from src.meeting_intel.core.clock import DAY_MS, HOUR_MS, MINUTE_MS, to_instant
from src.meeting_intel.core.models import (
    ActionItem,
    ActionItemStatus,
    Notification,
    NotificationType,
    owner_from_fields,
)


def utc(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0, ms: int = 0) -> int:
    """Epoch milliseconds for a UTC wall-clock time."""
    return to_instant(datetime(year, month, day, hour, minute, second, ms * 1000, tzinfo=timezone.utc))


# Wednesday 21 January 2026, 10:00 UTC
NOW = utc(2026, 1, 21, 10)
END_OF_TODAY = utc(2026, 1, 21, 23, 59, 59, 999)
# Sunday of the Monday-start week
END_OF_MONDAY_WEEK = utc(2026, 1, 25, 23, 59, 59, 999)
# Wednesday a week later
END_OF_ROLLING_WEEK = utc(2026, 1, 28, 23, 59, 59, 999)

__all__ = [
    "DAY_MS",
    "HOUR_MS",
    "MINUTE_MS",
    "NOW",
    "END_OF_TODAY",
    "END_OF_MONDAY_WEEK",
    "END_OF_ROLLING_WEEK",
    "utc",
    "make_item",
    "make_item_row",
    "make_notification",
]


# ============== Action Item Fixtures ==============

def make_item(
    id: str = "item-1",
    deadline: Optional[int] = None,
    owner_id: Optional[str] = None,
    owner_name: Optional[str] = None,
    status: ActionItemStatus = ActionItemStatus.OPEN,
    meeting_id: str = "meeting-1",
    description: Optional[str] = None,
    created_at: int = NOW - DAY_MS,
) -> ActionItem:
    """Create an ActionItem for testing."""
    return ActionItem(
        id=id,
        meeting_id=meeting_id,
        description=description or f"Action {id}",
        owner=owner_from_fields(owner_id, owner_name),
        deadline=deadline,
        status=status,
        created_at=created_at,
        updated_at=created_at,
    )


def make_item_row(
    id: str = "item-1",
    deadline: Optional[int] = None,
    owner_id: Optional[str] = None,
    owner_name: Optional[str] = None,
    status: str = "open",
    meeting_id: str = "meeting-1",
    created_at: int = NOW - DAY_MS,
    **kwargs
) -> Dict[str, Any]:
    """Create an action_items table row for testing."""
    return {
        "id": id,
        "meeting_id": meeting_id,
        "description": f"Action {id}",
        "owner_id": owner_id,
        "owner_name": owner_name,
        "deadline": deadline,
        "status": status,
        "priority": "medium",
        "created_at": created_at,
        "updated_at": created_at,
        **kwargs
    }


# ============== Notification Fixtures ==============

def make_notification(
    id: str = "notif-1",
    user_id: str = "user-a",
    notification_type: NotificationType = NotificationType.ACTION_ITEM_OVERDUE,
    action_item_id: Optional[str] = "item-1",
    created_at: int = NOW,
    read: bool = False,
) -> Notification:
    """Create a Notification for testing."""
    return Notification(
        id=id,
        user_id=user_id,
        notification_type=notification_type,
        action_item_id=action_item_id,
        created_at=created_at,
        title="Test",
        message="Test notification",
        read=read,
    )
