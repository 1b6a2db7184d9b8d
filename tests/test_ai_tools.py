"""
AI tool tests (no network).

Tests:
1. Keyword ATS scoring
2. JSON extraction from model output
3. Sanitisers for skill gap, cover letter and ATS answers
4. AICareerService with a stub client
5. Tool unlocks
"""
import pytest

from career_portal.services.ai_career_service import (
    AICareerService, clamp_score, validate_ats_report, validate_cover_letter, validate_skill_gap
)
from career_portal.services.ai_client import AIClient, AIResponseError
from career_portal.services.ats_service import keyword_ats_score, tokenize
from career_portal.services.purchase_service import PurchaseService


# ============================================================
# KEYWORD ATS
# ============================================================

def test_tokenize_drops_short_words_and_punctuation():
    assert tokenize("We use Go, C# and Python3!") == ["use", "and", "python3"]


def test_keyword_score():
    result = keyword_ats_score(
        "Built REST APIs in Python with Django.",
        "Python developer with Django and AWS experience"
    )
    # keywords: python, developer, django, aws
    assert result["matched"] == ["python", "django"]
    assert result["missing"] == ["developer", "aws"]
    assert result["score"] == 50


def test_keyword_score_rounds_half_up():
    # 1 of 8 keywords = 12.5%
    result = keyword_ats_score("alpha", "alpha bravo charlie delta echo foxtrot golf hotel")
    assert result["score"] == 13


def test_keyword_score_lists_are_capped():
    jd = " ".join(f"word{i:02d}" for i in range(30))
    result = keyword_ats_score("nothing relevant", jd)
    assert result["score"] == 0
    assert len(result["missing"]) == 15


def test_keyword_score_needs_keywords():
    with pytest.raises(ValueError, match="too short"):
        keyword_ats_score("python", "the and for")


# ============================================================
# JSON EXTRACTION
# ============================================================

def _bare_client() -> AIClient:
    return AIClient.__new__(AIClient)


def test_extract_json_strips_fences():
    client = _bare_client()
    assert client._extract_json('```json\n{"score": 80}\n```') == {"score": 80}
    assert client._extract_json('{"a": 1}') == {"a": 1}


def test_extract_json_rejects_garbage():
    client = _bare_client()
    with pytest.raises(AIResponseError):
        client._extract_json("Sure! Here is your analysis")
    with pytest.raises(AIResponseError):
        client._extract_json("[1, 2, 3]")


# ============================================================
# SANITISERS
# ============================================================

def test_clamp_score():
    assert clamp_score(150) == 100
    assert clamp_score(-3) == 0
    assert clamp_score("72.6") == 73
    assert clamp_score(None) == 0
    assert clamp_score(float("inf")) == 0
    assert clamp_score(float("nan")) == 0


def test_validate_skill_gap_fills_defaults():
    result = validate_skill_gap({
        "matchScore": "120",
        "matchedSkills": [{"name": "Python", "level": "Advanced"}, "junk"],
        "roadmap": [{"week": "Week 1-2", "title": "Basics", "tasks": "not a list"}],
    })
    assert result["matchScore"] == 100
    assert result["matchedSkills"] == [{"name": "Python", "level": "Advanced"}]
    assert result["missingSkills"] == []
    assert result["roadmap"][0]["tasks"] == []
    assert result["roadmap"][0]["goal"] == ""
    assert result["topRecommendation"] == ""


def test_validate_cover_letter():
    result = validate_cover_letter({"letter": " Dear team ", "analysis": None})
    assert result == {"letter": "Dear team", "analysis": [], "competitiveEdge": ""}


def test_validate_ats_report():
    result = validate_ats_report({"score": 88, "formattingAudit": "bad", "impactScore": 500})
    assert result["score"] == 88
    assert result["impactScore"] == 100
    assert result["formattingAudit"] == {"score": 0, "issues": [], "isSafe": False}


class StubClient:
    def analyze_skill_gap(self, current_skills, target_role):
        return {"matchScore": 64.4, "topRecommendation": "Learn Docker"}

    def generate_cover_letter(self, data):
        return {"letter": f"Hello {data['company']}"}

    def analyze_ats(self, resume_text, jd_text):
        return {"score": -5}

    def generate_resume_content(self, content_type, data):
        return "Seasoned engineer."


def test_career_service_sanitises_client_output():
    service = AICareerService(client=StubClient())
    assert service.skill_gap("python", "DevOps Engineer")["matchScore"] == 64
    assert service.cover_letter({"company": "Acme"})["letter"] == "Hello Acme"
    assert service.ats_report("resume")["score"] == 0
    assert service.resume_content("summary", {}) == "Seasoned engineer."


# ============================================================
# UNLOCKS
# ============================================================

def test_purchase_unlocks_tool_once():
    service = PurchaseService()
    assert not service.is_tool_purchased("u1", "skill-gap")
    assert service.is_tool_purchased("u1", "ai-resume")

    first = service.purchase_tool("u1", "skill-gap")
    second = service.purchase_tool("u1", "skill-gap")

    assert first["transaction_id"].startswith("TXN-")
    assert len(first["transaction_id"]) == 13
    assert second["transaction_id"] == first["transaction_id"]
    assert service.is_tool_purchased("u1", "skill-gap")
    assert not service.is_tool_purchased("u2", "skill-gap")
    assert len(service.get_purchase_history("u1")) == 1


def test_unknown_tool_cannot_be_purchased():
    assert PurchaseService().purchase_tool("u1", "mind-reader") is None
