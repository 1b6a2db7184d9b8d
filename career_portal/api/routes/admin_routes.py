"""
Admin Console Routes (admin role only)

GET /admin/analytics - Collection totals, pending events, interactions, growth
GET /admin/moderation - Pending event submissions
POST /admin/moderation/{event_id}/approve - Publish a pending event
POST /admin/moderation/{event_id}/reject - Delete a pending event
GET /admin/users - Users with search
PUT /admin/users/{uid}/role - Change role
PUT /admin/users/{uid}/block - Block or unblock
DELETE /admin/users/{uid} - Delete profile and credentials
GET /admin/interactions - All interactions, optionally by type
POST /admin/events, PUT /admin/events/{id} - Admin-authored events (published directly)
GET /admin/{collection} - jobs, internships, events or courses
POST /admin/{collection}, PUT /admin/{collection}/{id} - jobs, internships or courses
DELETE /admin/{collection}/{id} - any managed collection
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends, Query

from career_portal.core.auth import get_current_admin, delete_account
from career_portal.core.config import get_settings
from career_portal.services.analytics_service import get_dashboard_analytics
from career_portal.services.document_service import (
    DocumentService, EventService, InteractionService, ListingService, UserService, clean_payload
)
from career_portal.services.event_moderation import InvalidTransition, ModerationAction
from career_portal.services.listing_filters import event_time_status, paginate
from career_portal.schemas.schemas import (
    AnalyticsResponse, EventCreate, EventPage, EventResponse, EventUpdate, InteractionPage, InteractionType,
    ListingCreate, ListingResponse, ListingUpdate, MessageResponse, UserBlockUpdate,
    UserListResponse, UserResponse, UserRoleUpdate
)

router = APIRouter(prefix="/admin", tags=["Admin"])
settings = get_settings()
logger = logging.getLogger(__name__)


class ManagedCollection(str, Enum):
    jobs = "jobs"
    internships = "internships"
    events = "events"
    courses = "courses"


class ListingCollection(str, Enum):
    jobs = "jobs"
    internships = "internships"
    courses = "courses"


def _page(items: list, page: int) -> dict:
    return paginate(items, page, settings.admin_page_size).to_dict()


# ============================================================
# ANALYTICS
# ============================================================

@router.get("/analytics", response_model=AnalyticsResponse)
async def analytics(admin: dict = Depends(get_current_admin)):
    return get_dashboard_analytics()


# ============================================================
# MODERATION
# ============================================================

@router.get("/moderation", response_model=EventPage)
async def list_pending_events(page: int = Query(1, ge=1), admin: dict = Depends(get_current_admin)):
    return _page(EventService().list_pending(), page)


def _moderate(event_id: str, action: ModerationAction, admin: dict) -> Optional[dict]:
    try:
        event = EventService().moderate(event_id, action)
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    if event is None:
        raise HTTPException(status_code=404, detail="Event not found")
    logger.info("Admin %s moderation: %s %s", admin["id"], action.value, event_id)
    return event


@router.post("/moderation/{event_id}/approve", response_model=EventResponse)
async def approve_event(event_id: str, admin: dict = Depends(get_current_admin)):
    return _moderate(event_id, ModerationAction.approve, admin)


@router.post("/moderation/{event_id}/reject", response_model=MessageResponse)
async def reject_event(event_id: str, admin: dict = Depends(get_current_admin)):
    _moderate(event_id, ModerationAction.reject, admin)
    return MessageResponse(message="Event rejected and removed")


# ============================================================
# USERS
# ============================================================

@router.get("/users", response_model=UserListResponse)
async def list_users(
    search: str = Query(""),
    page: int = Query(1, ge=1),
    admin: dict = Depends(get_current_admin)
):
    result = _page(UserService().list_users(search), page)
    result["users"] = result.pop("items")
    return result


def _not_self(uid: str, admin: dict) -> None:
    if uid == admin["id"]:
        raise HTTPException(status_code=400, detail="You cannot modify your own account")


@router.put("/users/{uid}/role", response_model=UserResponse)
async def set_user_role(uid: str, request: UserRoleUpdate, admin: dict = Depends(get_current_admin)):
    _not_self(uid, admin)
    user = UserService().set_role(uid, request.role.value)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    logger.info("Admin %s set role of %s to %s", admin["id"], uid, request.role.value)
    return user


@router.put("/users/{uid}/block", response_model=UserResponse)
async def set_user_blocked(uid: str, request: UserBlockUpdate, admin: dict = Depends(get_current_admin)):
    _not_self(uid, admin)
    user = UserService().set_blocked(uid, request.is_blocked)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    logger.info("Admin %s %s %s", admin["id"], "blocked" if request.is_blocked else "unblocked", uid)
    return user


@router.delete("/users/{uid}", response_model=MessageResponse)
async def delete_user(uid: str, admin: dict = Depends(get_current_admin)):
    _not_self(uid, admin)
    deleted_profile = UserService().delete_user(uid)
    deleted_account = delete_account(uid)
    if not (deleted_profile or deleted_account):
        raise HTTPException(status_code=404, detail="User not found")
    logger.info("Admin %s deleted user %s", admin["id"], uid)
    return MessageResponse(message="User deleted")


# ============================================================
# INTERACTIONS
# ============================================================

@router.get("/interactions", response_model=InteractionPage)
async def list_interactions(
    type: Optional[InteractionType] = Query(None),
    page: int = Query(1, ge=1),
    admin: dict = Depends(get_current_admin)
):
    items = InteractionService().list_all(type.value if type else None)
    return _page(items, page)


# ============================================================
# EVENTS (admin-authored)
# ============================================================

@router.post("/events", response_model=EventResponse, status_code=201)
async def create_event(request: EventCreate, admin: dict = Depends(get_current_admin)):
    data = clean_payload(request.model_dump(mode="json"))
    event = EventService().create_published(data, created_by=admin["id"])
    logger.info("Admin %s created event %s", admin["id"], event["id"])
    return event


@router.put("/events/{event_id}", response_model=EventResponse)
async def update_event(event_id: str, request: EventUpdate, admin: dict = Depends(get_current_admin)):
    changes = request.model_dump(mode="json", exclude_unset=True)
    event = EventService().update(event_id, changes)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


# ============================================================
# CATALOG CRUD
# ============================================================

@router.get("/{collection}")
async def list_collection(
    collection: ManagedCollection,
    page: int = Query(1, ge=1),
    admin: dict = Depends(get_current_admin)
):
    """Every document, newest first. Events include pending ones."""
    items = DocumentService(collection.value).list()
    if collection is ManagedCollection.events:
        now = datetime.utcnow()
        items = [{**e, "time_status": event_time_status(e, now)} for e in items]
    return _page(items, page)


@router.post("/{collection}", response_model=ListingResponse, status_code=201)
async def create_listing(
    collection: ListingCollection,
    request: ListingCreate,
    admin: dict = Depends(get_current_admin)
):
    data = clean_payload(request.model_dump(mode="json"))
    item = ListingService(collection.value).insert(data, created_by=admin["id"])
    logger.info("Admin %s created %s %s", admin["id"], collection.value, item["id"])
    return item


@router.put("/{collection}/{item_id}", response_model=ListingResponse)
async def update_listing(
    collection: ListingCollection,
    item_id: str,
    request: ListingUpdate,
    admin: dict = Depends(get_current_admin)
):
    changes = request.model_dump(mode="json", exclude_unset=True)
    item = ListingService(collection.value).update(item_id, changes)
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")
    return item


@router.delete("/{collection}/{item_id}", response_model=MessageResponse)
async def delete_item(
    collection: ManagedCollection,
    item_id: str,
    admin: dict = Depends(get_current_admin)
):
    if not DocumentService(collection.value).delete(item_id):
        raise HTTPException(status_code=404, detail="Item not found")
    logger.info("Admin %s deleted %s %s", admin["id"], collection.value, item_id)
    return MessageResponse(message="Deleted")
