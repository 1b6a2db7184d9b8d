"""
Interaction Routes

POST /interactions - Record an apply / register / course waitlist action

Apply returns the company's application URL, register returns the event's
registration link, so the client can redirect after recording.
"""

import logging

from fastapi import APIRouter, HTTPException, Depends

from career_portal.core.auth import get_current_user
from career_portal.services.document_service import (
    EventService, InteractionService, ListingService
)
from career_portal.schemas.schemas import InteractionCreate, InteractionRecorded, InteractionType

router = APIRouter(prefix="/interactions", tags=["Interactions"])
logger = logging.getLogger(__name__)

WAITLIST_ITEM = {"title": "Next-Gen Course Access", "location": "Waitlist"}


@router.post("", response_model=InteractionRecorded, status_code=201)
async def record_interaction(request: InteractionCreate, user: dict = Depends(get_current_user)):
    if request.type is InteractionType.course_waitlist:
        interaction = InteractionService().record(user, request.type.value, WAITLIST_ITEM)
        return InteractionRecorded(
            interaction=interaction,
            message="You're on the waitlist! We'll notify you when courses launch."
        )

    if not request.item_id:
        raise HTTPException(status_code=400, detail="item_id is required")

    if request.type is InteractionType.event:
        # Pending events cannot be registered for
        item = EventService().get_public(request.item_id)
        if not item:
            raise HTTPException(status_code=404, detail="Event not found")
        redirect_url = item.get("registration_link")
    else:
        collection_key = "jobs" if request.type is InteractionType.job else "internships"
        item = ListingService(collection_key).get_by_id(request.item_id)
        if not item:
            raise HTTPException(status_code=404, detail="Listing not found")
        redirect_url = item.get("company_url")

    interaction = InteractionService().record(user, request.type.value, item)
    logger.info("Interaction %s on %s by %s", request.type.value, request.item_id, user["id"])

    if redirect_url:
        message = "Recorded. Redirecting you now."
    elif request.type is InteractionType.event:
        message = "Registration link not available."
    else:
        message = "Application link not available."

    return InteractionRecorded(interaction=interaction, redirect_url=redirect_url, message=message)
