# src/meeting_intel/repositories/preferences_repository.py
"""
Notification Preferences Repository

One row per user in notification_preferences. Reads fall back to defaults;
the first update creates the row.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..core.models import NotificationPreferences

TABLE = "notification_preferences"


class PreferencesRepository(ABC):
    """
    Abstract interface (Port) for notification preferences.
    """

    @abstractmethod
    def get(self, user_id: str) -> NotificationPreferences:
        """Stored preferences, or the defaults when the user has none."""
        pass

    @abstractmethod
    def update(self, user_id: str, fields: Dict[str, Any], now: int) -> NotificationPreferences:
        """
        Patch settings; None values and unknown keys are ignored.

        Creates the row (defaults + fields) when the user has none.

        Returns:
            The preferences after the update
        """
        pass


class SupabasePreferencesRepository(PreferencesRepository):
    """
    Supabase implementation of PreferencesRepository.
    """

    def __init__(self, client):
        self._client = client

    def _get_row(self, user_id: str) -> Optional[Dict[str, Any]]:
        result = self._client.table(TABLE).select("*").eq("user_id", user_id).limit(1).execute()
        return result.data[0] if result.data else None

    def get(self, user_id: str) -> NotificationPreferences:
        row = self._get_row(user_id)
        if row:
            return NotificationPreferences.from_row(row)
        return NotificationPreferences.defaults(user_id)

    def update(self, user_id: str, fields: Dict[str, Any], now: int) -> NotificationPreferences:
        updates = {
            k: v for k, v in fields.items()
            if k in NotificationPreferences.SETTINGS and v is not None
        }
        updates["updated_at"] = now

        existing = self._get_row(user_id)
        if existing:
            result = self._client.table(TABLE).update(updates).eq("id", existing["id"]).execute()
        else:
            row = {
                "user_id": user_id,
                **NotificationPreferences.defaults(user_id).settings(),
                **updates,
            }
            result = self._client.table(TABLE).insert(row).execute()

        if not result.data:
            raise RuntimeError("Failed to save notification preferences")
        return NotificationPreferences.from_row(result.data[0])


# --- Factory Function ---

_preferences_repository: Optional[PreferencesRepository] = None


def get_preferences_repository() -> PreferencesRepository:
    """
    Factory function to get the preferences repository instance.
    Uses lazy initialization with Supabase.
    """
    global _preferences_repository

    if _preferences_repository is None:
        from ..infrastructure.supabase_client import get_supabase_client
        client = get_supabase_client()
        if client:
            _preferences_repository = SupabasePreferencesRepository(client)
        else:
            raise RuntimeError("Supabase client not available for PreferencesRepository")

    return _preferences_repository


def reset_preferences_repository():
    """Reset the singleton for testing purposes."""
    global _preferences_repository
    _preferences_repository = None
