# src/meeting_intel/repositories/related_records_repository.py
"""
Related Records Repository - Read-only summaries of linked entities

Notifications point at meetings, action items, reports and users that other
parts of the system own. This repository batch-loads the small summaries the
notification feed and the email queue attach:

- meeting: id, title, date
- action item: id, description
- report: id, type
- user: id, email, name
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional

from .base import chunked, unique_ids

# Ids per in_() filter, keeps the request URL bounded
ID_BATCH_SIZE = 200

Summaries = Dict[str, Dict[str, Any]]


class RelatedRecordsRepository(ABC):
    """
    Abstract interface (Port) for linked-entity lookups.

    Every method returns {id: summary}; unknown ids are absent.
    """

    @abstractmethod
    def get_meetings(self, ids: Iterable[str]) -> Summaries:
        pass

    @abstractmethod
    def get_action_items(self, ids: Iterable[str]) -> Summaries:
        pass

    @abstractmethod
    def get_reports(self, ids: Iterable[str]) -> Summaries:
        pass

    @abstractmethod
    def get_users(self, ids: Iterable[str]) -> Summaries:
        pass


class SupabaseRelatedRecordsRepository(RelatedRecordsRepository):
    """
    Supabase implementation of RelatedRecordsRepository.
    """

    def __init__(self, client):
        self._client = client

    def _load(self, table: str, ids: Iterable[str], columns: tuple) -> Summaries:
        summaries: Summaries = {}
        for batch in chunked(unique_ids(ids), ID_BATCH_SIZE):
            result = self._client.table(table).select(",".join(columns)).in_("id", batch).execute()
            for row in result.data or []:
                summaries[str(row["id"])] = {
                    column: str(row["id"]) if column == "id" else row.get(column)
                    for column in columns
                }
        return summaries

    def get_meetings(self, ids: Iterable[str]) -> Summaries:
        return self._load("meetings", ids, ("id", "title", "date"))

    def get_action_items(self, ids: Iterable[str]) -> Summaries:
        return self._load("action_items", ids, ("id", "description"))

    def get_reports(self, ids: Iterable[str]) -> Summaries:
        return self._load("reports", ids, ("id", "type"))

    def get_users(self, ids: Iterable[str]) -> Summaries:
        return self._load("users", ids, ("id", "email", "name"))


# --- Factory Function ---

_related_records_repository: Optional[RelatedRecordsRepository] = None


def get_related_records_repository() -> RelatedRecordsRepository:
    """
    Factory function to get the related-records repository instance.
    Uses lazy initialization with Supabase.
    """
    global _related_records_repository

    if _related_records_repository is None:
        from ..infrastructure.supabase_client import get_supabase_client
        client = get_supabase_client()
        if client:
            _related_records_repository = SupabaseRelatedRecordsRepository(client)
        else:
            raise RuntimeError("Supabase client not available for RelatedRecordsRepository")

    return _related_records_repository


def reset_related_records_repository():
    """Reset the singleton for testing purposes."""
    global _related_records_repository
    _related_records_repository = None
