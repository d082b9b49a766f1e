# src/meeting_intel/repositories/action_items_repository.py
"""
Action Items Repository - Data Access for Meeting Action Items

Handles persistence for:
- Open-item queries (deadline sweep and grouping input)
- Per-meeting and per-owner listings
- Creation (manual and batch from extraction)
- Status, deadline and notes updates

"Open" means status open or in_progress; done items never leave list_open().
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..core.models import ActionItem, ActionItemStatus
from .base import fetch_all_pages

TABLE = "action_items"

OPEN_STATUSES = [ActionItemStatus.OPEN.value, ActionItemStatus.IN_PROGRESS.value]


def sort_by_deadline(items: List[ActionItem]) -> List[ActionItem]:
    """Ascending by deadline; items without a deadline go last."""
    return sorted(items, key=lambda i: (i.deadline is None, i.deadline or 0))


class ActionItemsRepository(ABC):
    """
    Abstract interface (Port) for action item data access.
    """

    # --- Read ---

    @abstractmethod
    def get_by_id(self, item_id: str) -> Optional[ActionItem]:
        """Get an action item by ID, or None."""
        pass

    @abstractmethod
    def list_open(self, owner_id: Optional[str] = None, limit: Optional[int] = None) -> List[ActionItem]:
        """
        Get items that are not done, sorted by deadline (missing last).

        Args:
            owner_id: Only items owned by this user
            limit: Maximum number of results
        """
        pass

    @abstractmethod
    def list_overdue(self, now: int, owner_id: Optional[str] = None) -> List[ActionItem]:
        """Open items whose deadline is before `now`."""
        pass

    @abstractmethod
    def list_by_meeting(self, meeting_id: str) -> List[ActionItem]:
        pass

    @abstractmethod
    def list_by_owner(self, owner_id: str) -> List[ActionItem]:
        pass

    # --- Create ---

    @abstractmethod
    def create(self, data: Dict[str, Any], now: int) -> str:
        """
        Create one action item with status open.

        Returns:
            The new item's ID
        """
        pass

    @abstractmethod
    def create_batch(self, meeting_id: str, items: List[Dict[str, Any]], now: int) -> List[str]:
        """Create several items for one meeting (LLM extraction output)."""
        pass

    # --- Update ---

    @abstractmethod
    def update_status(self, item_id: str, status: ActionItemStatus, now: int) -> bool:
        """Set the status; marking done stamps completed_at."""
        pass

    @abstractmethod
    def update(self, item_id: str, fields: Dict[str, Any], now: int) -> bool:
        """Patch description/owner/deadline/notes; None values are ignored."""
        pass

    # --- Delete ---

    @abstractmethod
    def delete(self, item_id: str) -> bool:
        pass


class SupabaseActionItemsRepository(ActionItemsRepository):
    """
    Supabase implementation of ActionItemsRepository.
    """

    UPDATABLE_FIELDS = ("description", "owner_id", "owner_name", "deadline", "notes", "priority")

    def __init__(self, client):
        self._client = client

    def _rows_to_items(self, rows) -> List[ActionItem]:
        return [ActionItem.from_row(row) for row in (rows or [])]

    def get_by_id(self, item_id: str) -> Optional[ActionItem]:
        result = self._client.table(TABLE).select("*").eq("id", item_id).execute()
        if result.data:
            return ActionItem.from_row(result.data[0])
        return None

    def list_open(self, owner_id: Optional[str] = None, limit: Optional[int] = None) -> List[ActionItem]:
        def build_query():
            query = self._client.table(TABLE).select("*").in_("status", OPEN_STATUSES)
            if owner_id:
                query = query.eq("owner_id", owner_id)
            return query.order("id")

        items = sort_by_deadline(self._rows_to_items(fetch_all_pages(build_query)))
        if limit:
            items = items[:limit]
        return items

    def list_overdue(self, now: int, owner_id: Optional[str] = None) -> List[ActionItem]:
        def build_query():
            query = self._client.table(TABLE).select("*").in_("status", OPEN_STATUSES).lt("deadline", now)
            if owner_id:
                query = query.eq("owner_id", owner_id)
            return query.order("id")

        items = self._rows_to_items(fetch_all_pages(build_query))
        # lt() drops null deadlines server-side
        return sort_by_deadline([i for i in items if i.deadline is not None and i.deadline < now])

    def list_by_meeting(self, meeting_id: str) -> List[ActionItem]:
        rows = fetch_all_pages(
            lambda: self._client.table(TABLE).select("*").eq("meeting_id", meeting_id).order("created_at").order("id")
        )
        return self._rows_to_items(rows)

    def list_by_owner(self, owner_id: str) -> List[ActionItem]:
        rows = fetch_all_pages(
            lambda: self._client.table(TABLE).select("*").eq("owner_id", owner_id).order("created_at").order("id")
        )
        return sort_by_deadline(self._rows_to_items(rows))

    def create(self, data: Dict[str, Any], now: int) -> str:
        if not (data.get("description") or "").strip():
            raise ValueError("Action item description must not be empty")

        row = {
            "meeting_id": data["meeting_id"],
            "description": data["description"],
            "owner_id": data.get("owner_id"),
            "owner_name": data.get("owner_name"),
            "deadline": data.get("deadline"),
            "priority": data.get("priority") or "medium",
            "status": ActionItemStatus.OPEN.value,
            "created_at": now,
            "updated_at": now,
        }
        result = self._client.table(TABLE).insert(row).execute()
        if result.data:
            return str(result.data[0]["id"])
        raise RuntimeError("Failed to insert action item")

    def create_batch(self, meeting_id: str, items: List[Dict[str, Any]], now: int) -> List[str]:
        rows = []
        for item in items:
            if not (item.get("description") or "").strip():
                continue
            rows.append({
                "meeting_id": meeting_id,
                "description": item["description"],
                "owner_id": item.get("owner_id"),
                "owner_name": item.get("owner_name"),
                "deadline": item.get("deadline"),
                "status": ActionItemStatus.OPEN.value,
                "created_at": now,
                "updated_at": now,
            })
        if not rows:
            return []

        result = self._client.table(TABLE).insert(rows).execute()
        if not result.data:
            raise RuntimeError("Failed to insert action items")
        return [str(row["id"]) for row in result.data]

    def update_status(self, item_id: str, status: ActionItemStatus, now: int) -> bool:
        updates: Dict[str, Any] = {"status": status.value, "updated_at": now}
        if status is ActionItemStatus.DONE:
            updates["completed_at"] = now

        result = self._client.table(TABLE).update(updates).eq("id", item_id).execute()
        return bool(result.data)

    def update(self, item_id: str, fields: Dict[str, Any], now: int) -> bool:
        updates = {
            k: v for k, v in fields.items()
            if k in self.UPDATABLE_FIELDS and v is not None
        }
        updates["updated_at"] = now

        result = self._client.table(TABLE).update(updates).eq("id", item_id).execute()
        return bool(result.data)

    def delete(self, item_id: str) -> bool:
        result = self._client.table(TABLE).delete().eq("id", item_id).execute()
        return bool(result.data)


# --- Factory Function ---

_action_items_repository: Optional[ActionItemsRepository] = None


def get_action_items_repository() -> ActionItemsRepository:
    """
    Factory function to get the action items repository instance.
    Uses lazy initialization with Supabase.
    """
    global _action_items_repository

    if _action_items_repository is None:
        from ..infrastructure.supabase_client import get_supabase_client
        client = get_supabase_client()
        if client:
            _action_items_repository = SupabaseActionItemsRepository(client)
        else:
            raise RuntimeError("Supabase client not available for ActionItemsRepository")

    return _action_items_repository


def reset_action_items_repository():
    """Reset the singleton for testing purposes."""
    global _action_items_repository
    _action_items_repository = None
