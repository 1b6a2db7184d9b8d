"""
Profile Routes

PUT /users/me - Update display name
GET /users/me/interactions - Own apply / register / waitlist history
"""

from fastapi import APIRouter, HTTPException, Depends, Query

from career_portal.core.auth import get_current_user
from career_portal.core.config import get_settings
from career_portal.services.document_service import InteractionService, UserService
from career_portal.services.listing_filters import filter_interactions, paginate
from career_portal.schemas.schemas import (
    DisplayNameUpdate, InteractionPage, InteractionTab, UserResponse
)

router = APIRouter(prefix="/users", tags=["Profile"])
settings = get_settings()


@router.put("/me", response_model=UserResponse)
async def update_profile(request: DisplayNameUpdate, user: dict = Depends(get_current_user)):
    display_name = request.display_name.strip()
    if not display_name:
        raise HTTPException(status_code=400, detail="Display name cannot be empty")
    return UserService().update_display_name(user["id"], display_name)


@router.get("/me/interactions", response_model=InteractionPage)
async def my_interactions(
    tab: InteractionTab = Query(InteractionTab.all),
    page: int = Query(1, ge=1),
    user: dict = Depends(get_current_user)
):
    """History newest first; the `course` tab shows waitlist entries."""
    snapshot = InteractionService().list_for_user(user["id"])
    items = filter_interactions(snapshot, tab.value)
    return paginate(items, page, settings.profile_page_size).to_dict()
