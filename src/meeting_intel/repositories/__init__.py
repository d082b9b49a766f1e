"""
Repository Layer - Ports and Adapters Pattern

Data access for action items, notifications, notification preferences and
the linked records notifications point at. The abstract classes are the
ports; the Supabase classes are the adapters.

Usage:
    from src.meeting_intel.repositories import (
        get_action_items_repository,
        get_notifications_repository,
    )

    items = get_action_items_repository().list_open()
    history = get_notifications_repository().list_recent_for_user(user_id, since)
"""

from .action_items_repository import (
    ActionItemsRepository,
    SupabaseActionItemsRepository,
    get_action_items_repository,
    reset_action_items_repository,
)
from .notifications_repository import (
    NotificationsRepository,
    SupabaseNotificationsRepository,
    get_notifications_repository,
    reset_notifications_repository,
)
from .preferences_repository import (
    PreferencesRepository,
    SupabasePreferencesRepository,
    get_preferences_repository,
    reset_preferences_repository,
)
from .related_records_repository import (
    RelatedRecordsRepository,
    SupabaseRelatedRecordsRepository,
    get_related_records_repository,
    reset_related_records_repository,
)

__all__ = [
    # Action items
    "ActionItemsRepository",
    "SupabaseActionItemsRepository",
    "get_action_items_repository",
    "reset_action_items_repository",
    # Notifications
    "NotificationsRepository",
    "SupabaseNotificationsRepository",
    "get_notifications_repository",
    "reset_notifications_repository",
    # Preferences
    "PreferencesRepository",
    "SupabasePreferencesRepository",
    "get_preferences_repository",
    "reset_preferences_repository",
    # Linked records
    "RelatedRecordsRepository",
    "SupabaseRelatedRecordsRepository",
    "get_related_records_repository",
    "reset_related_records_repository",
]
