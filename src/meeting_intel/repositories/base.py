# src/meeting_intel/repositories/base.py
"""
Base Repository Helpers

Shared query plumbing for the Supabase adapters.

PostgREST caps every select at the project's max-rows setting (1000 by
default), so reads that must see every matching row go through
fetch_all_pages() instead of a single execute().
"""

from typing import Any, Callable, Dict, Iterable, Iterator, List, Sequence

PAGE_SIZE = 1000


def fetch_all_pages(build_query: Callable[[], Any], page_size: int = PAGE_SIZE) -> List[Dict[str, Any]]:
    """
    Read every row of a query, one range() page at a time.

    Args:
        build_query: Returns a fresh, deterministically ordered query builder
        page_size: Rows per request; must not exceed the server's max-rows

    Returns:
        All rows, in query order
    """
    rows: List[Dict[str, Any]] = []
    offset = 0
    while True:
        result = build_query().range(offset, offset + page_size - 1).execute()
        page = result.data or []
        rows.extend(page)
        if len(page) < page_size:
            return rows
        offset += page_size


def chunked(values: Sequence[Any], size: int) -> Iterator[List[Any]]:
    """Split values into lists of at most `size` (for in_() filters)."""
    for start in range(0, len(values), size):
        yield list(values[start:start + size])


def unique_ids(values: Iterable[Any]) -> List[str]:
    """Distinct, non-empty ids as strings, first occurrence order."""
    seen: Dict[str, None] = {}
    for value in values:
        if value:
            seen.setdefault(str(value), None)
    return list(seen)
