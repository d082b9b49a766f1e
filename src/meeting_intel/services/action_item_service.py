# src/meeting_intel/services/action_item_service.py
"""
Action Item Service

Create and edit action items, notifying the owner whenever an item is
assigned to a registered user: on creation with an owner_id, and on an
update that sets a different owner_id.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.models import ActionItem
from ..repositories import (
    ActionItemsRepository,
    NotificationsRepository,
    RelatedRecordsRepository,
    get_action_items_repository,
    get_notifications_repository,
    get_related_records_repository,
)
from .notification_service import notify_action_item_assigned

logger = logging.getLogger(__name__)


class ActionItemService:
    """Action-item writes plus the assignment notification."""

    def __init__(
        self,
        action_items: Optional[ActionItemsRepository] = None,
        notifications: Optional[NotificationsRepository] = None,
        related: Optional[RelatedRecordsRepository] = None,
    ):
        self.action_items = action_items or get_action_items_repository()
        self.notifications = notifications or get_notifications_repository()
        self.related = related or get_related_records_repository()

    def create(self, data: Dict[str, Any], now: int) -> ActionItem:
        """Create one item; raises ValueError on an empty description."""
        item_id = self.action_items.create(data, now)
        item = self.action_items.get_by_id(item_id)
        if item is None:
            raise RuntimeError(f"Action item {item_id} missing after insert")

        self._notify_if_assigned([item], now)
        return item

    def create_batch(self, meeting_id: str, items: List[Dict[str, Any]], now: int) -> List[str]:
        """Create extracted items for one meeting; blank descriptions are skipped."""
        ids = self.action_items.create_batch(meeting_id, items, now)
        if ids:
            created = set(ids)
            assigned = [i for i in self.action_items.list_by_meeting(meeting_id) if i.id in created]
            self._notify_if_assigned(assigned, now)
        return ids

    def update(self, item_id: str, fields: Dict[str, Any], now: int) -> Optional[ActionItem]:
        """
        Patch an item.

        Returns:
            The updated item, or None when it does not exist
        """
        before = self.action_items.get_by_id(item_id)
        if before is None:
            return None
        if not self.action_items.update(item_id, fields, now):
            return None

        after = self.action_items.get_by_id(item_id)
        if after is None:
            return None
        if after.owner_user_id and after.owner_user_id != before.owner_user_id:
            self._notify_if_assigned([after], now)
        return after

    def _notify_if_assigned(self, items: List[ActionItem], now: int) -> int:
        """Send assignment notifications for items owned by a user."""
        assigned = [i for i in items if i.owner_user_id and not i.is_done]
        if not assigned:
            return 0

        meetings = self.related.get_meetings(i.meeting_id for i in assigned)
        sent = 0
        for item in assigned:
            meeting = meetings.get(item.meeting_id) or {}
            try:
                notify_action_item_assigned(
                    item,
                    item.owner_user_id,
                    now,
                    self.notifications.insert,
                    meeting_title=meeting.get("title"),
                )
                sent += 1
            except Exception as e:
                # Item is already saved; report and continue
                logger.error(f"Assignment notification failed for action item {item.id}: {e}")
        return sent
