"""
Resume Builder Routes

GET /resumes/templates - Available PDF templates
GET /resumes/sample - Sample content to prefill the builder
GET /resumes/me - Saved resume
PUT /resumes/me - Save resume (one per user)
GET /resumes/me/pdf - Download the saved resume as PDF
POST /resumes/preview/pdf - Render unsaved content as PDF
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Depends, Query
from fastapi.responses import Response

from career_portal.core.auth import get_current_user
from career_portal.services.document_service import ResumeService
from career_portal.services.pdf_service import (
    TEMPLATES, SAMPLE_RESUME, PDFGenerationError, render_resume_pdf
)
from career_portal.schemas.schemas import (
    ResumeContent, ResumeResponse, ResumeSave, ResumeTemplateResponse
)

router = APIRouter(prefix="/resumes", tags=["Resume Builder"])
logger = logging.getLogger(__name__)

TEMPLATE_IDS = {t["id"] for t in TEMPLATES}


def _check_template(template_id: Optional[int]) -> None:
    if template_id is not None and template_id not in TEMPLATE_IDS:
        raise HTTPException(status_code=400, detail=f"Unknown template: {template_id}")


def _pdf_response(content: dict, template_id: Optional[int]) -> Response:
    _check_template(template_id)
    try:
        pdf = render_resume_pdf(content, template_id)
    except PDFGenerationError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="resume.pdf"'}
    )


@router.get("/templates", response_model=List[ResumeTemplateResponse])
async def list_templates():
    return TEMPLATES


@router.get("/sample", response_model=ResumeContent)
async def get_sample_resume():
    return SAMPLE_RESUME


@router.get("/me", response_model=ResumeResponse)
async def get_my_resume(user: dict = Depends(get_current_user)):
    resume = ResumeService().get_by_user(user["id"])
    if not resume:
        raise HTTPException(status_code=404, detail="No saved resume yet")
    return resume


@router.put("/me", response_model=ResumeResponse)
async def save_my_resume(request: ResumeSave, user: dict = Depends(get_current_user)):
    _check_template(request.template_id)
    resume = ResumeService().save(user["id"], request.content.model_dump(), request.template_id)
    logger.info("Resume saved for %s", user["id"])
    return resume


@router.get("/me/pdf")
async def download_my_resume(
    template_id: Optional[int] = Query(None, description="Defaults to the saved template"),
    user: dict = Depends(get_current_user)
):
    resume = ResumeService().get_by_user(user["id"])
    if not resume:
        raise HTTPException(status_code=404, detail="No saved resume yet")
    return _pdf_response(resume["content"], template_id or resume.get("template_id"))


@router.post("/preview/pdf")
async def preview_resume(request: ResumeSave):
    return _pdf_response(request.content.model_dump(), request.template_id)
