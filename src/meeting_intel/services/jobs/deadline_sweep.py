# src/meeting_intel/services/jobs/deadline_sweep.py
"""
Deadline Sweep Job

Loads all open action items and runs the deadline sweep against the
notifications repository.

Single-writer policy: dedup is check-then-insert with no store-side uniqueness,
so two overlapping sweeps could both insert. Sweeps are therefore serialized:
- the scheduler runs the job with max_instances=1 in a single designated process
- every entry point (scheduler, HTTP trigger, CLI) takes _sweep_lock without
  blocking; an overlapping call returns status "skipped"

Schedule: hourly by default (config.deadline_sweep_schedule)
"""

import logging
import threading
from typing import Any, Dict, Optional

from ...config import MeetingIntelConfig, get_config
from ...core.clock import HOUR_MS, now_ms
from ...repositories import (
    ActionItemsRepository,
    NotificationsRepository,
    get_action_items_repository,
    get_notifications_repository,
)
from ..deadline_sweep import run_sweep

logger = logging.getLogger(__name__)

_sweep_lock = threading.Lock()


class DeadlineSweepJob:
    """
    Emit deadline-approaching and overdue notifications for open action items.

    At most one notification per item per type per rolling dedup window.
    """

    def __init__(
        self,
        action_items: Optional[ActionItemsRepository] = None,
        notifications: Optional[NotificationsRepository] = None,
        config: Optional[MeetingIntelConfig] = None,
    ):
        self.action_items = action_items or get_action_items_repository()
        self.notifications = notifications or get_notifications_repository()
        self.config = config or get_config()

    def run(self, now: Optional[int] = None) -> Dict[str, Any]:
        """Run one sweep; `now` defaults to the wall clock."""
        now = now if now is not None else now_ms()
        logger.info(f"Running DeadlineSweepJob (now={now})")

        result: Dict[str, Any] = {
            "status": "completed",
            "notifications_created": 0,
            "candidates": 0,
            "failures": [],
            "now": now,
        }

        if not _sweep_lock.acquire(blocking=False):
            logger.warning("DeadlineSweepJob already running, skipping this invocation")
            result["status"] = "skipped"
            return result

        try:
            dedup_window_ms = self.config.dedup_window_hours * HOUR_MS
            since = now - dedup_window_ms

            def fetch_history(user_id: str):
                return self.notifications.list_recent_for_user(user_id, since)

            open_items = self.action_items.list_open()
            sweep = run_sweep(
                open_items,
                now,
                fetch_notifications_for_user=fetch_history,
                insert_notification=self.notifications.insert,
                upcoming_window_ms=self.config.upcoming_window_hours * HOUR_MS,
                dedup_window_ms=dedup_window_ms,
            )
            result["notifications_created"] = sweep.created_count
            result["candidates"] = sweep.candidates
            result["already_notified"] = sweep.already_notified
            result["failures"] = [f.to_dict() for f in sweep.failures]
            if sweep.failures:
                result["status"] = "completed_with_errors"
        except Exception as e:
            logger.error(f"DeadlineSweepJob error: {e}")
            result["status"] = "failed"
            result["error"] = str(e)
        finally:
            _sweep_lock.release()

        return result
