"""
Event Routes

GET /events - Approved events with search, category and time status filters
GET /events/options - Categories, types and wizard steps for the submission form
GET /events/{event_id} - Approved event details
POST /events/submissions/validate - Validate one wizard step
POST /events/submissions - Submit an event for moderation (starts pending)
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends, Query

from career_portal.core.auth import get_optional_user
from career_portal.core.config import get_settings
from career_portal.services.document_service import EventService
from career_portal.services.event_submission import (
    STEPS, build_event_record, next_step, validate_submission
)
from career_portal.services.listing_filters import event_time_status, filter_events, paginate
from career_portal.schemas.schemas import (
    EVENT_CATEGORIES, EVENT_TYPES, EventPage, EventResponse, EventSubmission,
    StepValidationResponse
)

router = APIRouter(prefix="/events", tags=["Events"])
settings = get_settings()
logger = logging.getLogger(__name__)


def with_time_status(event: dict, now: datetime) -> dict:
    return {**event, "time_status": event_time_status(event, now)}


@router.get("", response_model=EventPage)
async def list_events(
    search: str = Query("", description="Title or tag"),
    category: str = Query("all"),
    status: str = Query("all", description="all, upcoming, ongoing or past"),
    page: int = Query(1, ge=1)
):
    """List approved events. Pending submissions never appear here."""
    now = datetime.utcnow()
    snapshot = EventService().list_approved()
    items = filter_events(snapshot, search, category, status, now=now)
    result = paginate(items, page, settings.catalog_page_size)
    result.items = [with_time_status(e, now) for e in result.items]
    return result.to_dict()


@router.get("/options")
async def get_event_options():
    return {"categories": EVENT_CATEGORIES, "types": EVENT_TYPES, "steps": STEPS}


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: str):
    event = EventService().get_public(event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return with_time_status(event, datetime.utcnow())


# ============================================================
# SUBMISSION WIZARD
# ============================================================

@router.post("/submissions/validate", response_model=StepValidationResponse)
async def validate_event_step(form: EventSubmission, step: int = Query(..., ge=1, le=len(STEPS))):
    """Check one step of the wizard; next_step stays put when the step is invalid."""
    new_step, error = next_step(step, form)
    return StepValidationResponse(step=step, valid=error is None, error=error, next_step=new_step)


@router.post("/submissions", response_model=EventResponse, status_code=201)
async def submit_event(form: EventSubmission, user: Optional[dict] = Depends(get_optional_user)):
    """
    Submit an event. It is stored as pending and stays hidden until an admin
    approves it.
    """
    errors = validate_submission(form)
    if errors:
        raise HTTPException(status_code=400, detail=errors[0])

    record = build_event_record(form)
    if user:
        record["submitted_by"] = user["id"]
    return EventService().submit(record)
