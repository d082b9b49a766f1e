# src/meeting_intel/api/v1/notifications.py
"""
Notification API

REST endpoints for the notification system:
- GET /notifications - List a user's notifications with linked summaries
- GET /notifications/unread-count - Badge count for UI
- PATCH /notifications/{id}/read - Mark as read
- POST /notifications/read-all - Mark all of a user's notifications read
- DELETE /notifications/{id} - Remove notification
- GET/PATCH /notifications/preferences - Per-user notification settings
- GET /notifications/unsent-email - Email queue for the dispatcher (cron key)
- POST /notifications/{id}/email-sent - Dispatcher acknowledgement (cron key)
"""

from fastapi import APIRouter, Header, HTTPException, Query
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from ...core.clock import now_ms
from ...repositories import (
    NotificationsRepository,
    PreferencesRepository,
    RelatedRecordsRepository,
    get_notifications_repository,
    get_preferences_repository,
    get_related_records_repository,
)
from ...services.notification_feed import enrich_notifications, pending_email_notifications
from .auth import check_cron_api_key

router = APIRouter()


def get_repository() -> NotificationsRepository:
    """Get the notifications repository, 503 when the store is unavailable."""
    try:
        return get_notifications_repository()
    except RuntimeError as e:
        raise HTTPException(status_code=503, detail=str(e))


def get_related() -> RelatedRecordsRepository:
    try:
        return get_related_records_repository()
    except RuntimeError as e:
        raise HTTPException(status_code=503, detail=str(e))


def get_preferences() -> PreferencesRepository:
    try:
        return get_preferences_repository()
    except RuntimeError as e:
        raise HTTPException(status_code=503, detail=str(e))


# =============================================================================
# REQUEST / RESPONSE MODELS
# =============================================================================

class NotificationResponse(BaseModel):
    """Notification with summaries of the records it points at."""
    id: str
    user_id: str
    type: str
    title: str
    message: str
    action_item_id: Optional[str] = None
    meeting_id: Optional[str] = None
    report_id: Optional[str] = None
    read: bool
    email_sent: bool
    created_at: int
    meeting: Optional[Dict[str, Any]] = None
    action_item: Optional[Dict[str, Any]] = None
    report: Optional[Dict[str, Any]] = None


class UnreadCountResponse(BaseModel):
    """Unread count response."""
    count: int


class PreferencesResponse(BaseModel):
    id: Optional[str] = None
    user_id: str
    email_action_item_assigned: bool
    email_action_item_deadline: bool
    email_action_item_overdue: bool
    email_meeting_reminder: bool
    email_weekly_digest: bool
    in_app_action_item_assigned: bool
    in_app_action_item_deadline: bool
    in_app_action_item_overdue: bool
    in_app_meeting_reminder: bool
    deadline_reminder_days: int
    meeting_reminder_minutes: int
    updated_at: Optional[int] = None


class PreferencesUpdate(BaseModel):
    """Partial preferences update; omitted fields keep their value."""
    email_action_item_assigned: Optional[bool] = None
    email_action_item_deadline: Optional[bool] = None
    email_action_item_overdue: Optional[bool] = None
    email_meeting_reminder: Optional[bool] = None
    email_weekly_digest: Optional[bool] = None
    in_app_action_item_assigned: Optional[bool] = None
    in_app_action_item_deadline: Optional[bool] = None
    in_app_action_item_overdue: Optional[bool] = None
    in_app_meeting_reminder: Optional[bool] = None
    deadline_reminder_days: Optional[int] = Field(None, ge=0, le=30)
    meeting_reminder_minutes: Optional[int] = Field(None, ge=0, le=24 * 60)


class EmailRecipient(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None


class PendingEmailResponse(NotificationResponse):
    user: EmailRecipient


# =============================================================================
# FEED ENDPOINTS
# =============================================================================

@router.get("", response_model=List[NotificationResponse])
async def list_notifications(
    user_id: str = Query(..., description="Target user"),
    unread_only: bool = Query(False, description="Only show unread notifications"),
    limit: int = Query(20, ge=1, le=100, description="Maximum notifications to return"),
):
    """List a user's notifications, newest first."""
    repo = get_repository()
    notifications = repo.list_for_user(user_id, unread_only=unread_only, limit=limit)
    return enrich_notifications(notifications, get_related())


@router.get("/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(user_id: str = Query(...)):
    """Get count of unread notifications for the badge."""
    repo = get_repository()
    return UnreadCountResponse(count=repo.get_unread_count(user_id))


# =============================================================================
# PREFERENCES
# =============================================================================

@router.get("/preferences", response_model=PreferencesResponse)
async def get_notification_preferences(user_id: str = Query(...)):
    """Stored preferences, or the defaults for a user who never saved any."""
    return get_preferences().get(user_id).to_dict()


@router.patch("/preferences", response_model=PreferencesResponse)
async def update_notification_preferences(request: PreferencesUpdate, user_id: str = Query(...)):
    """Update preferences; the first update stores defaults plus the changes."""
    prefs = get_preferences().update(user_id, request.model_dump(exclude_none=True), now_ms())
    return prefs.to_dict()


# =============================================================================
# EMAIL QUEUE (machine callers)
# =============================================================================

@router.get("/unsent-email", response_model=List[PendingEmailResponse])
async def list_unsent_email_notifications(x_api_key: Optional[str] = Header(None)):
    """Notifications still to be emailed, with the recipient's address."""
    check_cron_api_key(x_api_key)
    return pending_email_notifications(get_repository(), get_related())


@router.post("/{notification_id}/email-sent")
async def mark_notification_email_sent(notification_id: str, x_api_key: Optional[str] = Header(None)):
    """Record that the dispatcher emailed this notification."""
    check_cron_api_key(x_api_key)
    repo = get_repository()
    if not repo.mark_email_sent(notification_id):
        raise HTTPException(status_code=404, detail="Notification not found")
    return {"success": True, "notification_id": notification_id}


# =============================================================================
# READ STATE / DELETE
# =============================================================================

@router.patch("/{notification_id}/read")
async def mark_notification_read(notification_id: str):
    """Mark a notification as read."""
    repo = get_repository()
    if not repo.mark_read(notification_id):
        raise HTTPException(status_code=404, detail="Notification not found")
    return {"success": True, "notification_id": notification_id}


@router.post("/read-all")
async def mark_all_read(user_id: str = Query(...)):
    """Mark all of a user's notifications as read."""
    repo = get_repository()
    count = repo.mark_all_read(user_id)
    return {"success": True, "updated": count}


@router.delete("/{notification_id}")
async def delete_notification(notification_id: str):
    """Delete a notification."""
    repo = get_repository()
    if not repo.delete(notification_id):
        raise HTTPException(status_code=404, detail="Notification not found")
    return {"success": True, "notification_id": notification_id}
