# src/meeting_intel/core/models.py
"""
Domain Models

Action items, notifications and the owner variant the deadline logic matches on.
Instants (deadline, created_at, updated_at) are epoch milliseconds.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union


class ActionItemStatus(Enum):
    """Lifecycle states of an action item."""
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class ActionItemPriority(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class NotificationType(Enum):
    """Notification kinds stored in the notifications collection."""
    ACTION_ITEM_ASSIGNED = "action_item_assigned"
    ACTION_ITEM_DEADLINE = "action_item_deadline"    # Deadline within the next day
    ACTION_ITEM_OVERDUE = "action_item_overdue"      # Deadline has passed
    MEETING_SCHEDULED = "meeting_scheduled"
    MEETING_REMINDER = "meeting_reminder"
    TRANSCRIPTION_COMPLETED = "transcription_completed"
    REPORT_READY = "report_ready"


class Bucket(Enum):
    """Deadline-proximity classes."""
    NO_DEADLINE = "no_deadline"
    OVERDUE = "overdue"
    TODAY = "today"
    THIS_WEEK = "this_week"
    LATER = "later"


# =============================================================================
# OWNER VARIANT
# =============================================================================

@dataclass(frozen=True)
class Unassigned:
    """Item has no owner."""

    @property
    def name(self) -> Optional[str]:
        return None


@dataclass(frozen=True)
class OwnerById:
    """Owner is a registered user; display_name is the denormalized fallback."""
    user_id: str
    display_name: Optional[str] = None

    @property
    def name(self) -> Optional[str]:
        return self.display_name


@dataclass(frozen=True)
class OwnerByName:
    """Owner is known only by free text (not a user in the system)."""
    owner_name: str

    @property
    def name(self) -> Optional[str]:
        return self.owner_name


Owner = Union[Unassigned, OwnerById, OwnerByName]


def owner_from_fields(owner_id: Optional[str], owner_name: Optional[str]) -> Owner:
    """Build the owner variant from the stored owner_id/owner_name columns."""
    if owner_id:
        return OwnerById(user_id=str(owner_id), display_name=owner_name or None)
    if owner_name:
        return OwnerByName(owner_name=owner_name)
    return Unassigned()


def owner_to_fields(owner: Owner) -> Dict[str, Optional[str]]:
    """Inverse of owner_from_fields."""
    if isinstance(owner, OwnerById):
        return {"owner_id": owner.user_id, "owner_name": owner.display_name}
    if isinstance(owner, OwnerByName):
        return {"owner_id": None, "owner_name": owner.owner_name}
    return {"owner_id": None, "owner_name": None}


# =============================================================================
# ENTITIES
# =============================================================================

@dataclass
class ActionItem:
    """A tracked task attached to a meeting."""
    id: str
    meeting_id: str
    description: str
    owner: Owner = field(default_factory=Unassigned)
    deadline: Optional[int] = None
    status: ActionItemStatus = ActionItemStatus.OPEN
    priority: Optional[ActionItemPriority] = None
    notes: Optional[str] = None
    completed_at: Optional[int] = None
    created_at: int = 0
    updated_at: int = 0

    @property
    def is_done(self) -> bool:
        return self.status is ActionItemStatus.DONE

    @property
    def owner_user_id(self) -> Optional[str]:
        if isinstance(self.owner, OwnerById):
            return self.owner.user_id
        return None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "ActionItem":
        """Create from a database row."""
        priority = row.get("priority")
        return cls(
            id=str(row["id"]),
            meeting_id=str(row.get("meeting_id") or ""),
            description=row.get("description") or "",
            owner=owner_from_fields(row.get("owner_id"), row.get("owner_name")),
            deadline=row.get("deadline"),
            status=ActionItemStatus(row.get("status") or "open"),
            priority=ActionItemPriority(priority) if priority else None,
            notes=row.get("notes"),
            completed_at=row.get("completed_at"),
            created_at=row.get("created_at") or 0,
            updated_at=row.get("updated_at") or 0,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage and API responses."""
        return {
            "id": self.id,
            "meeting_id": self.meeting_id,
            "description": self.description,
            **owner_to_fields(self.owner),
            "deadline": self.deadline,
            "status": self.status.value,
            "priority": self.priority.value if self.priority else None,
            "notes": self.notes,
            "completed_at": self.completed_at,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass
class NotificationDraft:
    """A notification not yet inserted (no id)."""
    user_id: str
    notification_type: NotificationType
    title: str
    message: str
    created_at: int
    action_item_id: Optional[str] = None
    meeting_id: Optional[str] = None
    report_id: Optional[str] = None
    read: bool = False
    email_sent: bool = False

    def to_row(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "type": self.notification_type.value,
            "title": self.title,
            "message": self.message,
            "action_item_id": self.action_item_id,
            "meeting_id": self.meeting_id,
            "report_id": self.report_id,
            "read": self.read,
            "email_sent": self.email_sent,
            "created_at": self.created_at,
        }


@dataclass
class Notification:
    """A stored notification."""
    id: str
    user_id: str
    notification_type: NotificationType
    created_at: int
    title: str = ""
    message: str = ""
    action_item_id: Optional[str] = None
    meeting_id: Optional[str] = None
    report_id: Optional[str] = None
    read: bool = False
    email_sent: bool = False

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Notification":
        """Create from a database row."""
        action_item_id = row.get("action_item_id")
        meeting_id = row.get("meeting_id")
        report_id = row.get("report_id")
        return cls(
            id=str(row["id"]),
            user_id=str(row.get("user_id") or ""),
            notification_type=NotificationType(row.get("type") or row.get("notification_type")),
            created_at=row.get("created_at") or 0,
            title=row.get("title") or "",
            message=row.get("message") or "",
            action_item_id=str(action_item_id) if action_item_id else None,
            meeting_id=str(meeting_id) if meeting_id else None,
            report_id=str(report_id) if report_id else None,
            read=bool(row.get("read", False)),
            email_sent=bool(row.get("email_sent", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "type": self.notification_type.value,
            "title": self.title,
            "message": self.message,
            "action_item_id": self.action_item_id,
            "meeting_id": self.meeting_id,
            "report_id": self.report_id,
            "read": self.read,
            "email_sent": self.email_sent,
            "created_at": self.created_at,
        }


@dataclass
class NotificationPreferences:
    """
    Per-user notification settings.

    Users without a stored row get these defaults (id is None until the first
    update creates the row).
    """
    user_id: str
    id: Optional[str] = None
    email_action_item_assigned: bool = True
    email_action_item_deadline: bool = True
    email_action_item_overdue: bool = True
    email_meeting_reminder: bool = True
    email_weekly_digest: bool = True
    in_app_action_item_assigned: bool = True
    in_app_action_item_deadline: bool = True
    in_app_action_item_overdue: bool = True
    in_app_meeting_reminder: bool = True
    deadline_reminder_days: int = 1      # Days before deadline to send reminder
    meeting_reminder_minutes: int = 30   # Minutes before meeting to send reminder
    updated_at: Optional[int] = None

    SETTINGS = (
        "email_action_item_assigned",
        "email_action_item_deadline",
        "email_action_item_overdue",
        "email_meeting_reminder",
        "email_weekly_digest",
        "in_app_action_item_assigned",
        "in_app_action_item_deadline",
        "in_app_action_item_overdue",
        "in_app_meeting_reminder",
        "deadline_reminder_days",
        "meeting_reminder_minutes",
    )

    @classmethod
    def defaults(cls, user_id: str) -> "NotificationPreferences":
        return cls(user_id=user_id)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "NotificationPreferences":
        """Create from a database row; missing settings take their defaults."""
        prefs = cls(user_id=str(row["user_id"]), id=str(row["id"]) if row.get("id") else None)
        for name in cls.SETTINGS:
            if row.get(name) is not None:
                setattr(prefs, name, row[name])
        prefs.updated_at = row.get("updated_at")
        return prefs

    def settings(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.SETTINGS}

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "user_id": self.user_id, **self.settings(), "updated_at": self.updated_at}
