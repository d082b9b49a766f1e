"""
Services Layer

Deadline sweep, action-item grouping and writes, notification builders,
the notification feed and background jobs.
"""

from .action_item_grouping import GroupedActionItems, group_by_deadline
from .action_item_service import ActionItemService
from .deadline_sweep import ItemFailure, SweepResult, run_sweep
from .notification_feed import enrich_notifications, pending_email_notifications
from .notification_service import notify_action_item_assigned

__all__ = [
    "GroupedActionItems",
    "group_by_deadline",
    "ActionItemService",
    "ItemFailure",
    "SweepResult",
    "run_sweep",
    "enrich_notifications",
    "pending_email_notifications",
    "notify_action_item_assigned",
]
