# src/meeting_intel/repositories/notifications_repository.py
"""
Notifications Repository - Data Access for User Notifications

Handles persistence for:
- Notification creation (deadline sweep, assignment events)
- Per-user history reads (dedup guard input)
- Read/unread and email-sent status tracking
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..core.models import Notification, NotificationDraft
from .base import fetch_all_pages

TABLE = "notifications"


class NotificationsRepository(ABC):
    """
    Abstract interface (Port) for notification data access.
    """

    # --- Create ---

    @abstractmethod
    def insert(self, draft: NotificationDraft) -> str:
        """
        Insert a new notification.

        Args:
            draft: The notification to insert

        Returns:
            The ID of the created notification
        """
        pass

    # --- Read ---

    @abstractmethod
    def get_by_id(self, notification_id: str) -> Optional[Notification]:
        """
        Get a notification by ID.

        Args:
            notification_id: The notification ID

        Returns:
            The notification or None if not found
        """
        pass

    @abstractmethod
    def list_for_user(
        self,
        user_id: str,
        unread_only: bool = False,
        limit: Optional[int] = None,
    ) -> List[Notification]:
        """
        Get a user's notifications, newest first.

        Args:
            user_id: Target user
            unread_only: Only return unread notifications
            limit: Maximum number of results

        Returns:
            List of notifications
        """
        pass

    @abstractmethod
    def list_recent_for_user(self, user_id: str, since: int) -> List[Notification]:
        """
        A user's notifications created at or after `since`, newest first.

        Complete (paged past the row cap); this is the dedup history read.
        """
        pass

    @abstractmethod
    def get_unread_count(self, user_id: str) -> int:
        """Count of a user's unread notifications."""
        pass

    @abstractmethod
    def list_unsent_email(self) -> List[Notification]:
        """Notifications whose email has not been sent yet."""
        pass

    # --- Update ---

    @abstractmethod
    def mark_read(self, notification_id: str) -> bool:
        """Mark a notification as read."""
        pass

    @abstractmethod
    def mark_all_read(self, user_id: str) -> int:
        """
        Mark all of a user's unread notifications as read.

        Returns:
            Number of notifications updated
        """
        pass

    @abstractmethod
    def mark_email_sent(self, notification_id: str) -> bool:
        """Flag a notification's email as sent."""
        pass

    # --- Delete ---

    @abstractmethod
    def delete(self, notification_id: str) -> bool:
        """Delete a notification."""
        pass


class SupabaseNotificationsRepository(NotificationsRepository):
    """
    Supabase implementation of NotificationsRepository.
    """

    def __init__(self, client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance
        """
        self._client = client

    def insert(self, draft: NotificationDraft) -> str:
        """Insert a new notification."""
        result = self._client.table(TABLE).insert(draft.to_row()).execute()

        if result.data:
            return str(result.data[0]["id"])
        raise RuntimeError("Failed to insert notification")

    def get_by_id(self, notification_id: str) -> Optional[Notification]:
        """Get a notification by ID."""
        result = self._client.table(TABLE).select("*").eq("id", notification_id).execute()

        if result.data:
            return Notification.from_row(result.data[0])
        return None

    def list_for_user(
        self,
        user_id: str,
        unread_only: bool = False,
        limit: Optional[int] = None,
    ) -> List[Notification]:
        """Get a user's notifications, newest first."""
        query = self._client.table(TABLE).select("*").eq("user_id", user_id)

        if unread_only:
            query = query.eq("read", False)

        query = query.order("created_at", desc=True)
        if limit:
            query = query.limit(limit)

        result = query.execute()
        return [Notification.from_row(row) for row in (result.data or [])]

    def list_recent_for_user(self, user_id: str, since: int) -> List[Notification]:
        """A user's notifications since an instant, newest first."""
        rows = fetch_all_pages(
            lambda: self._client.table(TABLE).select("*")
            .eq("user_id", user_id)
            .gte("created_at", since)
            .order("created_at", desc=True)
            .order("id")
        )
        return [Notification.from_row(row) for row in rows]

    def get_unread_count(self, user_id: str) -> int:
        """Count of a user's unread notifications."""
        result = self._client.table(TABLE).select(
            "id", count="exact"
        ).eq("user_id", user_id).eq("read", False).execute()
        return result.count or 0

    def list_unsent_email(self) -> List[Notification]:
        """Notifications whose email has not been sent yet, oldest first."""
        rows = fetch_all_pages(
            lambda: self._client.table(TABLE).select("*")
            .eq("email_sent", False)
            .order("created_at")
            .order("id")
        )
        return [Notification.from_row(row) for row in rows]

    def mark_read(self, notification_id: str) -> bool:
        """Mark a notification as read."""
        result = self._client.table(TABLE).update({"read": True}).eq("id", notification_id).execute()
        return bool(result.data)

    def mark_all_read(self, user_id: str) -> int:
        """Mark all of a user's unread notifications as read."""
        result = self._client.table(TABLE).update(
            {"read": True}
        ).eq("user_id", user_id).eq("read", False).execute()
        return len(result.data) if result.data else 0

    def mark_email_sent(self, notification_id: str) -> bool:
        """Flag a notification's email as sent."""
        result = self._client.table(TABLE).update({"email_sent": True}).eq("id", notification_id).execute()
        return bool(result.data)

    def delete(self, notification_id: str) -> bool:
        """Delete a notification."""
        result = self._client.table(TABLE).delete().eq("id", notification_id).execute()
        return bool(result.data)


# --- Factory Function ---

_notifications_repository: Optional[NotificationsRepository] = None


def get_notifications_repository() -> NotificationsRepository:
    """
    Factory function to get the notifications repository instance.
    Uses lazy initialization with Supabase.

    Returns:
        NotificationsRepository instance
    """
    global _notifications_repository

    if _notifications_repository is None:
        from ..infrastructure.supabase_client import get_supabase_client
        client = get_supabase_client()
        if client:
            _notifications_repository = SupabaseNotificationsRepository(client)
        else:
            raise RuntimeError("Supabase client not available for NotificationsRepository")

    return _notifications_repository


def reset_notifications_repository():
    """Reset the singleton for testing purposes."""
    global _notifications_repository
    _notifications_repository = None
