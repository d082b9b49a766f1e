# src/meeting_intel/services/notification_service.py
"""
Notification Builders

Builds notification drafts for action-item events:
- Deadline approaching (within the next day)
- Deadline passed
- Action item assigned to a user

Titles and messages are the Dutch strings shown in the app and in reminder emails.
"""

import logging
from typing import Callable, Optional

from ..core.models import ActionItem, NotificationDraft, NotificationType

logger = logging.getLogger(__name__)

UNKNOWN_MEETING_TITLE = "Onbekende vergadering"

InsertNotification = Callable[[NotificationDraft], str]


def build_deadline_notification(item: ActionItem, user_id: str, now: int) -> NotificationDraft:
    """Draft for an item whose deadline falls within the next day."""
    return NotificationDraft(
        user_id=user_id,
        notification_type=NotificationType.ACTION_ITEM_DEADLINE,
        title="Deadline morgen",
        message=f'Actiepunt "{item.description}" heeft morgen een deadline',
        action_item_id=item.id,
        meeting_id=item.meeting_id or None,
        created_at=now,
    )


def build_overdue_notification(item: ActionItem, user_id: str, now: int) -> NotificationDraft:
    """Draft for an item past its deadline."""
    return NotificationDraft(
        user_id=user_id,
        notification_type=NotificationType.ACTION_ITEM_OVERDUE,
        title="Actiepunt verlopen",
        message=f'Actiepunt "{item.description}" is over de deadline',
        action_item_id=item.id,
        meeting_id=item.meeting_id or None,
        created_at=now,
    )


def build_assigned_notification(
    item: ActionItem,
    user_id: str,
    now: int,
    meeting_title: Optional[str] = None,
) -> NotificationDraft:
    """Draft for a newly assigned action item."""
    title = meeting_title or UNKNOWN_MEETING_TITLE
    return NotificationDraft(
        user_id=user_id,
        notification_type=NotificationType.ACTION_ITEM_ASSIGNED,
        title="Nieuw actiepunt toegewezen",
        message=f'Je hebt een nieuw actiepunt uit "{title}": {item.description}',
        action_item_id=item.id,
        meeting_id=item.meeting_id or None,
        created_at=now,
    )


BUILDERS = {
    NotificationType.ACTION_ITEM_DEADLINE: build_deadline_notification,
    NotificationType.ACTION_ITEM_OVERDUE: build_overdue_notification,
}


def notify_action_item_assigned(
    item: ActionItem,
    user_id: str,
    now: int,
    insert_notification: InsertNotification,
    meeting_title: Optional[str] = None,
) -> str:
    """
    Emit an assignment notification.

    Assignment is an explicit event, so there is no dedup check here.

    Returns:
        ID of the inserted notification
    """
    draft = build_assigned_notification(item, user_id, now, meeting_title=meeting_title)
    notification_id = insert_notification(draft)
    logger.info(f"Assignment notification {notification_id} for action item {item.id} -> user {user_id}")
    return notification_id
