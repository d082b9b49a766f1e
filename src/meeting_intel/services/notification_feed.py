# src/meeting_intel/services/notification_feed.py
"""
Notification Feed

Shapes stored notifications for their two readers:
- the in-app feed, where each notification carries short summaries of the
  meeting, action item and report it points at
- the email dispatcher, which needs the recipient's address and skips
  notifications whose user no longer exists
"""

import logging
from typing import Any, Dict, List, Sequence

from ..core.models import Notification
from ..repositories import NotificationsRepository, RelatedRecordsRepository

logger = logging.getLogger(__name__)


def enrich_notifications(
    notifications: Sequence[Notification],
    related: RelatedRecordsRepository,
) -> List[Dict[str, Any]]:
    """
    Attach meeting / action_item / report summaries (None when absent).

    Linked records are loaded in one batch per kind, not per notification.
    """
    meetings = related.get_meetings(n.meeting_id for n in notifications)
    action_items = related.get_action_items(n.action_item_id for n in notifications)
    reports = related.get_reports(n.report_id for n in notifications)

    enriched = []
    for n in notifications:
        enriched.append({
            **n.to_dict(),
            "meeting": meetings.get(n.meeting_id) if n.meeting_id else None,
            "action_item": action_items.get(n.action_item_id) if n.action_item_id else None,
            "report": reports.get(n.report_id) if n.report_id else None,
        })
    return enriched


def pending_email_notifications(
    notifications: NotificationsRepository,
    related: RelatedRecordsRepository,
) -> List[Dict[str, Any]]:
    """Unsent-email notifications with their recipient; orphaned ones are dropped."""
    unsent = notifications.list_unsent_email()
    users = related.get_users(n.user_id for n in unsent)

    pending = []
    for n in unsent:
        user = users.get(n.user_id)
        if user is None:
            continue
        pending.append({**n.to_dict(), "user": {"email": user.get("email"), "name": user.get("name")}})

    skipped = len(unsent) - len(pending)
    if skipped:
        logger.warning(f"Skipped {skipped} unsent notifications whose user no longer exists")
    return pending
