"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from career_portal.api.routes.auth_routes import router as auth_router
from career_portal.api.routes.listing_routes import router as listing_router
from career_portal.api.routes.event_routes import router as event_router
from career_portal.api.routes.interaction_routes import router as interaction_router
from career_portal.api.routes.user_routes import router as user_router
from career_portal.api.routes.resume_routes import router as resume_router
from career_portal.api.routes.ai_routes import router as ai_router
from career_portal.api.routes.admin_routes import router as admin_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(listing_router)
api_router.include_router(event_router)
api_router.include_router(interaction_router)
api_router.include_router(user_router)
api_router.include_router(resume_router)
api_router.include_router(ai_router)
api_router.include_router(admin_router)
