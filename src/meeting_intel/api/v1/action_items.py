# src/meeting_intel/api/v1/action_items.py
"""
Action Items API

REST endpoints for action items:
- GET /action-items?meeting_id=&owner_id= - Items of a meeting or an owner
- POST /action-items - Create one item (notifies an assigned owner)
- POST /action-items/batch - Create a meeting's extracted items
- GET /action-items/grouped - Open items bucketed by deadline
- GET /action-items/overdue - Open items past their deadline
- GET /action-items/{id} - One item
- GET /action-items/{id}/bucket - Deadline class of one item
- PATCH /action-items/{id} - Edit fields (notifies a newly assigned owner)
- PATCH /action-items/{id}/status - Update status
- DELETE /action-items/{id} - Remove item
"""

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from ...config import get_config
from ...core.classifier import classify
from ...core.clock import now_ms, resolve_timezone
from ...core.models import ActionItemPriority, ActionItemStatus
from ...repositories import ActionItemsRepository, get_action_items_repository
from ...services.action_item_grouping import group_by_deadline
from ...services.action_item_service import ActionItemService

router = APIRouter()


def get_repository() -> ActionItemsRepository:
    """Get the action items repository, 503 when the store is unavailable."""
    try:
        return get_action_items_repository()
    except RuntimeError as e:
        raise HTTPException(status_code=503, detail=str(e))


def get_service() -> ActionItemService:
    try:
        return ActionItemService()
    except RuntimeError as e:
        raise HTTPException(status_code=503, detail=str(e))


def check_priority(priority: Optional[str]):
    if priority is None:
        return
    try:
        ActionItemPriority(priority)
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid priority. Must be one of: {[p.value for p in ActionItemPriority]}",
        )


# =============================================================================
# REQUEST / RESPONSE MODELS
# =============================================================================

class GroupedResponse(BaseModel):
    """Open action items bucketed by deadline proximity."""
    overdue: List[Dict[str, Any]]
    today: List[Dict[str, Any]]
    thisWeek: List[Dict[str, Any]]
    later: List[Dict[str, Any]]
    noDeadline: List[Dict[str, Any]]
    total: int


class BucketResponse(BaseModel):
    id: str
    bucket: str


class StatusUpdateRequest(BaseModel):
    status: str  # 'open', 'in_progress', 'done'


class ExtractedItem(BaseModel):
    description: str
    owner_id: Optional[str] = None
    owner_name: Optional[str] = None
    deadline: Optional[int] = Field(None, description="Epoch milliseconds")


class ActionItemCreate(ExtractedItem):
    meeting_id: str
    priority: Optional[str] = None  # 'high', 'medium', 'low'


class ActionItemBatchCreate(BaseModel):
    meeting_id: str
    items: List[ExtractedItem]


class ActionItemUpdate(BaseModel):
    """Partial update; omitted fields keep their value."""
    description: Optional[str] = None
    owner_id: Optional[str] = None
    owner_name: Optional[str] = None
    deadline: Optional[int] = None
    notes: Optional[str] = None
    priority: Optional[str] = None


# =============================================================================
# API ENDPOINTS
# =============================================================================

@router.get("")
async def list_action_items(
    meeting_id: Optional[str] = Query(None, description="Items extracted from this meeting"),
    owner_id: Optional[str] = Query(None, description="Items owned by this user"),
):
    """List a meeting's items, an owner's items, or a meeting's items for one owner."""
    if not meeting_id and not owner_id:
        raise HTTPException(status_code=400, detail="meeting_id or owner_id is required")

    repo = get_repository()
    if meeting_id:
        items = repo.list_by_meeting(meeting_id)
        if owner_id:
            items = [i for i in items if i.owner_user_id == owner_id]
    else:
        items = repo.list_by_owner(owner_id)
    return [item.to_dict() for item in items]


@router.post("", status_code=201)
async def create_action_item(request: ActionItemCreate):
    """Create an action item; an owner_id triggers an assignment notification."""
    check_priority(request.priority)
    service = get_service()
    try:
        item = service.create(request.model_dump(), now_ms())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return item.to_dict()


@router.post("/batch", status_code=201)
async def create_action_items_batch(request: ActionItemBatchCreate):
    """Create the items extracted from one meeting; blank descriptions are skipped."""
    service = get_service()
    ids = service.create_batch(
        request.meeting_id,
        [item.model_dump() for item in request.items],
        now_ms(),
    )
    return {"success": True, "ids": ids, "created": len(ids)}


@router.get("/grouped", response_model=GroupedResponse)
async def get_grouped_action_items(
    owner_name: Optional[str] = Query(None, description="Case-insensitive owner name filter"),
    owner_id: Optional[str] = Query(None, description="Only items owned by this user"),
):
    """
    Group open action items into overdue, today, this week, later and no deadline.
    """
    repo = get_repository()
    tz = resolve_timezone(get_config().timezone)

    items = repo.list_open(owner_id=owner_id)
    groups = group_by_deadline(items, now_ms(), owner_name_filter=owner_name, tz=tz)

    return GroupedResponse(**groups.to_dict(), total=groups.total)


@router.get("/overdue")
async def list_overdue_action_items(owner_id: Optional[str] = Query(None)):
    """Open action items whose deadline has passed."""
    repo = get_repository()
    return [item.to_dict() for item in repo.list_overdue(now_ms(), owner_id=owner_id)]


@router.get("/{item_id}/bucket", response_model=BucketResponse)
async def get_action_item_bucket(item_id: str):
    """Classify one action item's deadline (Monday-aligned week)."""
    repo = get_repository()
    item = repo.get_by_id(item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Action item not found")

    tz = resolve_timezone(get_config().timezone)
    return BucketResponse(id=item.id, bucket=classify(item.deadline, now_ms(), tz).value)


@router.patch("/{item_id}/status")
async def update_action_item_status(item_id: str, request: StatusUpdateRequest):
    """Update an action item's status."""
    try:
        status = ActionItemStatus(request.status)
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid status. Must be one of: {[s.value for s in ActionItemStatus]}",
        )

    repo = get_repository()
    if not repo.update_status(item_id, status, now_ms()):
        raise HTTPException(status_code=404, detail="Action item not found")

    return {"success": True, "id": item_id, "status": status.value}


@router.get("/{item_id}")
async def get_action_item(item_id: str):
    """Get one action item."""
    repo = get_repository()
    item = repo.get_by_id(item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Action item not found")
    return item.to_dict()


@router.patch("/{item_id}")
async def update_action_item(item_id: str, request: ActionItemUpdate):
    """Edit an action item; setting a new owner_id notifies that user."""
    check_priority(request.priority)
    service = get_service()
    item = service.update(item_id, request.model_dump(exclude_none=True), now_ms())
    if not item:
        raise HTTPException(status_code=404, detail="Action item not found")
    return item.to_dict()


@router.delete("/{item_id}")
async def delete_action_item(item_id: str):
    """Delete an action item."""
    repo = get_repository()
    if not repo.delete(item_id):
        raise HTTPException(status_code=404, detail="Action item not found")
    return {"success": True, "id": item_id}
