# tests/test_action_item_grouping.py
"""
Tests for action-item grouping by deadline.

Covers:
- Bucket boundaries (rolling 7-day week)
- Owner-name filter
- Exhaustive, mutually exclusive partition
- Per-bucket sort order
"""

import random

import pytest

from src.meeting_intel.core.classifier import classify
from src.meeting_intel.core.models import ActionItemStatus, Bucket
from src.meeting_intel.services.action_item_grouping import group_by_deadline
from tests.fixtures.data import (
    DAY_MS,
    END_OF_ROLLING_WEEK,
    END_OF_TODAY,
    HOUR_MS,
    MINUTE_MS,
    NOW,
    make_item,
    utc,
)


def ids(bucket):
    return [item.id for item in bucket]


# =============================================================================
# BOUNDARIES
# =============================================================================

class TestBucketBoundaries:

    def test_scenario_owners_a_b_c(self):
        items = [
            make_item("a", deadline=NOW - HOUR_MS, owner_name="A"),
            make_item("b", deadline=NOW + 30 * MINUTE_MS, owner_name="B"),
            make_item("c", deadline=None, owner_name="C"),
        ]
        groups = group_by_deadline(items, NOW)

        assert ids(groups.overdue) == ["a"]
        assert ids(groups.today) == ["b"]
        assert ids(groups.no_deadline) == ["c"]
        assert groups.this_week == []
        assert groups.later == []

    def test_deadline_equal_to_now_is_today(self):
        groups = group_by_deadline([make_item("x", deadline=NOW)], NOW)
        assert ids(groups.today) == ["x"]

    def test_end_of_today_then_this_week(self):
        items = [
            make_item("end", deadline=END_OF_TODAY),
            make_item("next", deadline=END_OF_TODAY + 1),
        ]
        groups = group_by_deadline(items, NOW)
        assert ids(groups.today) == ["end"]
        assert ids(groups.this_week) == ["next"]

    def test_rolling_week_end_is_inclusive(self):
        items = [
            make_item("edge", deadline=END_OF_ROLLING_WEEK),
            make_item("past", deadline=END_OF_ROLLING_WEEK + 1),
        ]
        groups = group_by_deadline(items, NOW)
        assert ids(groups.this_week) == ["edge"]
        assert ids(groups.later) == ["past"]

    def test_eight_days_out_is_later_in_both(self):
        deadline = NOW + 8 * DAY_MS
        groups = group_by_deadline([make_item("far", deadline=deadline)], NOW)

        assert ids(groups.later) == ["far"]
        assert classify(deadline, NOW) is Bucket.LATER

    def test_rolling_week_differs_from_classifier_week(self):
        """Next Tuesday: this week for grouping, later for the classifier."""
        deadline = utc(2026, 1, 27, 12)
        groups = group_by_deadline([make_item("tue", deadline=deadline)], NOW)

        assert ids(groups.this_week) == ["tue"]
        assert classify(deadline, NOW) is Bucket.LATER


# =============================================================================
# FILTERING
# =============================================================================

class TestFiltering:

    def test_done_items_are_dropped(self):
        items = [
            make_item("open", deadline=NOW - HOUR_MS),
            make_item("done", deadline=NOW - HOUR_MS, status=ActionItemStatus.DONE),
        ]
        groups = group_by_deadline(items, NOW)
        assert ids(groups.overdue) == ["open"]
        assert groups.total == 1

    def test_in_progress_counts_as_open(self):
        item = make_item("wip", deadline=NOW + HOUR_MS, status=ActionItemStatus.IN_PROGRESS)
        assert ids(group_by_deadline([item], NOW).today) == ["wip"]

    def test_owner_name_filter_is_case_insensitive_substring(self):
        items = [
            make_item("1", owner_name="Jan de Vries"),
            make_item("2", owner_name="Marieke Jansen"),
            make_item("3", owner_name="Piet"),
        ]
        groups = group_by_deadline(items, NOW, owner_name_filter="JAN")
        assert sorted(ids(groups.no_deadline)) == ["1", "2"]

    def test_owner_name_filter_matches_user_display_name(self):
        item = make_item("u", owner_id="user-1", owner_name="Sanne")
        groups = group_by_deadline([item], NOW, owner_name_filter="san")
        assert ids(groups.no_deadline) == ["u"]

    def test_filter_excludes_items_without_owner_name(self):
        items = [
            make_item("unassigned"),
            make_item("id-only", owner_id="user-1"),
            make_item("named", owner_name="Anna"),
        ]
        groups = group_by_deadline(items, NOW, owner_name_filter="a")
        assert ids(groups.no_deadline) == ["named"]

    def test_unfiltered_includes_unassigned(self):
        groups = group_by_deadline([make_item("unassigned")], NOW)
        assert ids(groups.no_deadline) == ["unassigned"]


# =============================================================================
# ORDERING AND PARTITION
# =============================================================================

class TestOrdering:

    def test_dated_buckets_sorted_ascending(self):
        items = [
            make_item("o2", deadline=NOW - HOUR_MS),
            make_item("o1", deadline=NOW - 2 * DAY_MS),
            make_item("t2", deadline=NOW + 5 * HOUR_MS),
            make_item("t1", deadline=NOW + HOUR_MS),
            make_item("w2", deadline=NOW + 5 * DAY_MS),
            make_item("w1", deadline=NOW + 2 * DAY_MS),
            make_item("l2", deadline=NOW + 30 * DAY_MS),
            make_item("l1", deadline=NOW + 10 * DAY_MS),
        ]
        groups = group_by_deadline(items, NOW)

        assert ids(groups.overdue) == ["o1", "o2"]
        assert ids(groups.today) == ["t1", "t2"]
        assert ids(groups.this_week) == ["w1", "w2"]
        assert ids(groups.later) == ["l1", "l2"]

    def test_no_deadline_newest_first(self):
        items = [
            make_item("old", created_at=NOW - 3 * DAY_MS),
            make_item("new", created_at=NOW - HOUR_MS),
            make_item("mid", created_at=NOW - DAY_MS),
        ]
        groups = group_by_deadline(items, NOW)
        assert ids(groups.no_deadline) == ["new", "mid", "old"]

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_random_items_partition_exhaustively(self, seed):
        rng = random.Random(seed)
        names = ["Anna", "Bram", "Cees", None]
        statuses = list(ActionItemStatus)
        items = []
        for i in range(200):
            deadline = None if rng.random() < 0.2 else NOW + rng.randint(-15 * DAY_MS, 15 * DAY_MS)
            items.append(make_item(
                f"item-{i}",
                deadline=deadline,
                owner_name=rng.choice(names),
                status=rng.choice(statuses),
                created_at=NOW - rng.randint(0, 30 * DAY_MS),
            ))

        for owner_filter in (None, "an"):
            groups = group_by_deadline(items, NOW, owner_name_filter=owner_filter)
            expected = [
                i for i in items
                if i.status is not ActionItemStatus.DONE
                and (owner_filter is None or (i.owner.name and owner_filter in i.owner.name.lower()))
            ]
            buckets = [groups.overdue, groups.today, groups.this_week, groups.later, groups.no_deadline]
            all_ids = [item.id for bucket in buckets for item in bucket]

            assert groups.total == len(expected)
            assert len(all_ids) == len(set(all_ids))
            assert set(all_ids) == {i.id for i in expected}

            for bucket in buckets[:4]:
                deadlines = [i.deadline for i in bucket]
                assert deadlines == sorted(deadlines)
            created = [i.created_at for i in groups.no_deadline]
            assert created == sorted(created, reverse=True)

    def test_to_dict_uses_dashboard_keys(self):
        groups = group_by_deadline([make_item("x", deadline=NOW + 2 * DAY_MS)], NOW)
        data = groups.to_dict()

        assert set(data) == {"overdue", "today", "thisWeek", "later", "noDeadline"}
        assert data["thisWeek"][0]["id"] == "x"
