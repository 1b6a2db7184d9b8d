"""
Student Career Portal - Main Application

FastAPI backend with:
- MongoDB for every portal collection
- SQL credential store + JWT authentication (password and Google sign-in)
- Event submission with admin moderation
- Resume builder with PDF templates
- AI career tools (OpenAI-compatible API)

Run: uvicorn career_portal.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from sqlalchemy.exc import SQLAlchemyError

from career_portal import __version__
from career_portal.api.routes import api_router
from career_portal.core.config import get_settings
from career_portal.core.logging_config import setup_logging
from career_portal.db.mongodb import init_mongo_indexes, test_mongo_connection
from career_portal.db.postgres import init_auth_schema, test_postgres_connection

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()

    try:
        init_auth_schema()
    except SQLAlchemyError as e:
        logger.warning("Auth schema initialization failed: %s", e)

    try:
        init_mongo_indexes()
    except PyMongoError as e:
        logger.warning("MongoDB index initialization failed: %s", e)

    yield


app = FastAPI(
    title="Student Career Portal",
    description="""
    Career portal API for students.

    ## Features
    - **Catalog**: Jobs, internships and courses with search and filters
    - **Events**: Public submission wizard; events go live after admin approval
    - **Profile**: Apply / register / waitlist history
    - **Resume Builder**: Saved resumes rendered to PDF in six templates
    - **AI Tools**: Resume writing, skill gap, cover letter, ATS checks
    - **Admin**: Catalog CRUD, moderation, users, analytics
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.exception_handler(PyMongoError)
async def document_store_exception_handler(request: Request, exc: PyMongoError):
    logger.error("Document store error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Document store unavailable"})


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "auth_db": "connected" if test_postgres_connection() else "disconnected",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
