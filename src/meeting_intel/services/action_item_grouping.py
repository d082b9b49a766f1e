# src/meeting_intel/services/action_item_grouping.py
"""
Action-Item Grouping

Partitions open action items into overdue / today / this week / later /
no deadline for the "my action items" view.

"This week" here is the rolling window (now + 7 days, end of that day), not the
Monday-aligned week the deadline classifier uses.
"""

import logging
from dataclasses import dataclass, field
from datetime import tzinfo
from typing import Any, Dict, List, Optional, Sequence

from ..core.clock import UTC, end_of_today, end_of_week
from ..core.models import ActionItem

logger = logging.getLogger(__name__)


@dataclass
class GroupedActionItems:
    """Five mutually exclusive buckets."""
    overdue: List[ActionItem] = field(default_factory=list)
    today: List[ActionItem] = field(default_factory=list)
    this_week: List[ActionItem] = field(default_factory=list)
    later: List[ActionItem] = field(default_factory=list)
    no_deadline: List[ActionItem] = field(default_factory=list)

    @property
    def total(self) -> int:
        return (
            len(self.overdue) + len(self.today) + len(self.this_week)
            + len(self.later) + len(self.no_deadline)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Bucket keys as the dashboard expects them."""
        return {
            "overdue": [i.to_dict() for i in self.overdue],
            "today": [i.to_dict() for i in self.today],
            "thisWeek": [i.to_dict() for i in self.this_week],
            "later": [i.to_dict() for i in self.later],
            "noDeadline": [i.to_dict() for i in self.no_deadline],
        }


def _matches_owner_name(item: ActionItem, owner_name_filter: str) -> bool:
    name = item.owner.name
    if not name:
        return False
    return owner_name_filter.lower() in name.lower()


def group_by_deadline(
    open_items: Sequence[ActionItem],
    now: int,
    owner_name_filter: Optional[str] = None,
    tz: tzinfo = UTC,
) -> GroupedActionItems:
    """
    Group items by deadline proximity.

    Args:
        open_items: Candidate items; done items are dropped
        now: Current instant, epoch ms
        owner_name_filter: Case-insensitive substring of the owner name
        tz: Deployment time zone for the day boundaries

    Returns:
        GroupedActionItems, dated buckets ascending by deadline,
        no-deadline bucket newest first
    """
    today_end = end_of_today(now, tz)
    week_end = end_of_week(now, tz)
    groups = GroupedActionItems()

    for item in open_items:
        if item.is_done:
            continue
        if owner_name_filter and not _matches_owner_name(item, owner_name_filter):
            continue

        if item.deadline is None:
            groups.no_deadline.append(item)
        elif item.deadline < now:
            groups.overdue.append(item)
        elif item.deadline <= today_end:
            groups.today.append(item)
        elif item.deadline <= week_end:
            groups.this_week.append(item)
        else:
            groups.later.append(item)

    for bucket in (groups.overdue, groups.today, groups.this_week, groups.later):
        bucket.sort(key=lambda i: i.deadline)
    groups.no_deadline.sort(key=lambda i: i.created_at, reverse=True)

    logger.debug(
        f"Grouped {groups.total} action items: overdue={len(groups.overdue)} today={len(groups.today)} "
        f"this_week={len(groups.this_week)} later={len(groups.later)} no_deadline={len(groups.no_deadline)}"
    )
    return groups
