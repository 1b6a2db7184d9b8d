"""
AI Career Service - calls the AI client and sanitises what comes back.

The model is asked for strict JSON, but the shape is never trusted:
scores are clamped to 0-100, lists are coerced to lists of the expected
dicts, and missing keys get defaults, so the API always returns the same
structure.
"""

import logging
from typing import Any, List

from career_portal.services.ai_client import get_ai_client, AIClient

logger = logging.getLogger(__name__)


# ============================================================
# JSON VALIDATION HELPERS
# ============================================================

def clamp_score(value: Any) -> int:
    """Coerce to an int in 0-100; anything unparseable is 0."""
    try:
        return max(0, min(100, int(round(float(value)))))
    except (ValueError, TypeError, OverflowError):
        return 0


def _text(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def _str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [_text(v) for v in value if _text(v)]


def _dict_list(value: Any, fields: dict) -> List[dict]:
    """
    Keep only dict entries and project them onto `fields`.
    `fields` maps key -> converter.
    """
    if not isinstance(value, list):
        return []
    return [
        {key: convert(item.get(key)) for key, convert in fields.items()}
        for item in value if isinstance(item, dict)
    ]


def validate_skill_gap(data: dict) -> dict:
    return {
        "matchScore": clamp_score(data.get("matchScore")),
        "matchedSkills": _dict_list(data.get("matchedSkills"), {"name": _text, "level": _text}),
        "missingSkills": _dict_list(
            data.get("missingSkills"), {"name": _text, "priority": _text, "reason": _text}
        ),
        "roadmap": _dict_list(
            data.get("roadmap"), {"week": _text, "title": _text, "tasks": _str_list, "goal": _text}
        ),
        "projectIdeas": _dict_list(
            data.get("projectIdeas"),
            {"title": _text, "description": _text, "skillsCovered": _str_list, "difficulty": _text}
        ),
        "topRecommendation": _text(data.get("topRecommendation")),
    }


def validate_cover_letter(data: dict) -> dict:
    return {
        "letter": _text(data.get("letter")),
        "analysis": _dict_list(data.get("analysis"), {"point": _text, "how": _text}),
        "competitiveEdge": _text(data.get("competitiveEdge")),
    }


def validate_ats_report(data: dict) -> dict:
    audit = data.get("formattingAudit")
    if not isinstance(audit, dict):
        audit = {}
    return {
        "score": clamp_score(data.get("score")),
        "semanticMatches": _dict_list(
            data.get("semanticMatches"), {"concept": _text, "relevance": _text, "detail": _text}
        ),
        "keywordGap": _dict_list(
            data.get("keywordGap"), {"keyword": _text, "importance": _text, "fix": _text}
        ),
        "formattingAudit": {
            "score": clamp_score(audit.get("score")),
            "issues": _str_list(audit.get("issues")),
            "isSafe": bool(audit.get("isSafe", False)),
        },
        "impactScore": clamp_score(data.get("impactScore")),
        "boostMyScore": _dict_list(
            data.get("boostMyScore"), {"original": _text, "suggested": _text, "reason": _text}
        ),
        "summary": _text(data.get("summary")),
    }


# ============================================================
# CAREER TOOLS
# ============================================================

class AICareerService:
    """
    One entry point per AI tool.
    AIServiceError / AIResponseError from the client propagate to the route.
    """

    def __init__(self, client: AIClient = None):
        self.client = client or get_ai_client()

    def resume_content(self, content_type: str, data: dict) -> str:
        return self.client.generate_resume_content(content_type, data)

    def skill_gap(self, current_skills: str, target_role: str) -> dict:
        result = validate_skill_gap(self.client.analyze_skill_gap(current_skills, target_role))
        logger.info("Skill gap analysed for %r: score %d", target_role, result["matchScore"])
        return result

    def cover_letter(self, data: dict) -> dict:
        return validate_cover_letter(self.client.generate_cover_letter(data))

    def ats_report(self, resume_text: str, jd_text: str = "") -> dict:
        result = validate_ats_report(self.client.analyze_ats(resume_text, jd_text))
        logger.info("ATS report generated: score %d", result["score"])
        return result
