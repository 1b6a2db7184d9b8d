"""
Catalog Routes (public)

GET /jobs, /internships, /courses - List with search, office type, experience filters
GET /jobs/{id}, /internships/{id}, /courses/{id} - Item details

Featured items come first, then newest first.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from career_portal.core.config import get_settings
from career_portal.services.document_service import ListingService
from career_portal.services.listing_filters import featured_first, filter_listings, paginate
from career_portal.schemas.schemas import ListingPage, ListingResponse

router = APIRouter(tags=["Catalog"])
settings = get_settings()


def _list_catalog(collection_key: str, search: str, office_type: str,
                  min_experience: Optional[int], page: int) -> dict:
    snapshot = ListingService(collection_key).list()
    items = featured_first(filter_listings(snapshot, search, office_type, min_experience))
    return paginate(items, page, settings.catalog_page_size).to_dict()


def _get_item(collection_key: str, item_id: str) -> dict:
    item = ListingService(collection_key).get_by_id(item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Listing not found")
    return item


# ============================================================
# JOBS
# ============================================================

@router.get("/jobs", response_model=ListingPage)
async def list_jobs(
    search: str = Query("", description="Title, company, skill or location"),
    office_type: str = Query("all", description="all, in-office, remote or hybrid"),
    min_experience: Optional[int] = Query(None, ge=0, description="Minimum years"),
    page: int = Query(1, ge=1)
):
    return _list_catalog("jobs", search, office_type, min_experience, page)


@router.get("/jobs/{item_id}", response_model=ListingResponse)
async def get_job(item_id: str):
    return _get_item("jobs", item_id)


# ============================================================
# INTERNSHIPS
# ============================================================

@router.get("/internships", response_model=ListingPage)
async def list_internships(
    search: str = Query(""),
    office_type: str = Query("all"),
    page: int = Query(1, ge=1)
):
    return _list_catalog("internships", search, office_type, None, page)


@router.get("/internships/{item_id}", response_model=ListingResponse)
async def get_internship(item_id: str):
    return _get_item("internships", item_id)


# ============================================================
# COURSES
# ============================================================

@router.get("/courses", response_model=ListingPage)
async def list_courses(
    search: str = Query(""),
    page: int = Query(1, ge=1)
):
    return _list_catalog("courses", search, "all", None, page)


@router.get("/courses/{item_id}", response_model=ListingResponse)
async def get_course(item_id: str):
    return _get_item("courses", item_id)
