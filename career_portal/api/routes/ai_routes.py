"""
AI Career Tool Routes

GET /ai/tools - Tools with price and unlock state
POST /ai/tools/{tool_id}/purchase - Unlock a tool (simulated checkout)
GET /ai/purchases - Purchase history
POST /ai/resume-content - Write a resume section (free)
POST /ai/skill-gap - Skill gap analysis (skill-gap unlock)
POST /ai/cover-letter - Cover letter (cover-letter unlock)
POST /ai/ats - AI ATS report (ats-checker unlock)
POST /ai/ats/keywords - Keyword ATS score, no AI
POST /ai/ats/upload - Keyword ATS score from an uploaded resume file
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Depends, File, Form, UploadFile

from career_portal.core.auth import get_current_user
from career_portal.services.ai_client import AIServiceError, AIResponseError
from career_portal.services.ai_career_service import AICareerService
from career_portal.services.ats_service import keyword_ats_score
from career_portal.services.purchase_service import PurchaseService
from career_portal.utils.file_upload import extract_text_from_file
from career_portal.schemas.schemas import (
    AIToolResponse, ATSRequest, CoverLetterRequest, KeywordATSRequest, KeywordATSResponse,
    PurchaseResponse, ResumeContentRequest, ResumeContentResponse, SkillGapRequest
)

router = APIRouter(prefix="/ai", tags=["AI Tools"])
logger = logging.getLogger(__name__)


def require_tool(tool_id: str):
    """Dependency factory - signed-in user who has unlocked `tool_id`."""
    async def dependency(user: dict = Depends(get_current_user)) -> dict:
        if not PurchaseService().is_tool_purchased(user["id"], tool_id):
            raise HTTPException(status_code=402, detail=f"Unlock '{tool_id}' to use this tool")
        return user
    return dependency


def _run_ai(call):
    """Run an AI call, translating client failures into HTTP errors."""
    try:
        return call(AICareerService())
    except AIResponseError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except AIServiceError as e:
        raise HTTPException(status_code=503, detail=str(e))


# ============================================================
# TOOL UNLOCKS
# ============================================================

@router.get("/tools", response_model=List[AIToolResponse])
async def list_tools(user: dict = Depends(get_current_user)):
    return PurchaseService().list_tools(user["id"])


@router.post("/tools/{tool_id}/purchase", response_model=PurchaseResponse, status_code=201)
async def purchase_tool(tool_id: str, user: dict = Depends(get_current_user)):
    purchase = PurchaseService().purchase_tool(user["id"], tool_id)
    if purchase is None:
        raise HTTPException(status_code=404, detail="Unknown AI tool")
    return purchase


@router.get("/purchases", response_model=List[PurchaseResponse])
async def purchase_history(user: dict = Depends(get_current_user)):
    return PurchaseService().get_purchase_history(user["id"])


# ============================================================
# AI TOOLS
# ============================================================

@router.post("/resume-content", response_model=ResumeContentResponse)
def generate_resume_content(
    request: ResumeContentRequest,
    user: dict = Depends(require_tool("ai-resume"))
):
    data = request.model_dump(exclude={"type"})
    content = _run_ai(lambda ai: ai.resume_content(request.type.value, data))
    return ResumeContentResponse(type=request.type.value, content=content)


@router.post("/skill-gap")
def analyze_skill_gap(request: SkillGapRequest, user: dict = Depends(require_tool("skill-gap"))):
    return _run_ai(lambda ai: ai.skill_gap(request.current_skills, request.target_role))


@router.post("/cover-letter")
def generate_cover_letter(request: CoverLetterRequest, user: dict = Depends(require_tool("cover-letter"))):
    data = request.model_dump(mode="json")
    return _run_ai(lambda ai: ai.cover_letter(data))


@router.post("/ats")
def analyze_ats(request: ATSRequest, user: dict = Depends(require_tool("ats-checker"))):
    return _run_ai(lambda ai: ai.ats_report(request.resume_text, request.jd_text))


# ============================================================
# KEYWORD ATS (no AI)
# ============================================================

@router.post("/ats/keywords", response_model=KeywordATSResponse)
async def keyword_ats(request: KeywordATSRequest):
    try:
        return keyword_ats_score(request.resume_text, request.jd_text)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/ats/upload", response_model=KeywordATSResponse)
async def keyword_ats_upload(file: UploadFile = File(...), jd_text: str = Form(...)):
    """Score an uploaded PDF, DOCX or TXT resume against a job description."""
    resume_text, filename = await extract_text_from_file(file)
    logger.info("ATS upload parsed: %s (%d chars)", filename, len(resume_text))
    try:
        return keyword_ats_score(resume_text, jd_text)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
