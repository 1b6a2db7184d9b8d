"""
AI Client for the career tools.

Any OpenAI-compatible chat-completions API works (DeepSeek by default), so we
use the openai library with a configurable base URL and model.

AI is used ONLY for:
- resume section writing (summary, experience bullets, project blurbs, skills)
- skill gap analysis
- cover letters
- ATS analysis against a job description
"""
import json
import logging
from datetime import datetime

from openai import OpenAI, OpenAIError
from career_portal.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


class AIServiceError(Exception):
    """The AI backend is not configured or the call failed."""


class AIResponseError(AIServiceError):
    """The AI answered, but not with the JSON we asked for."""


class AIClient:
    """
    Wrapper around the chat-completions API with one method per tool.
    """

    def __init__(self):
        if not settings.ai_api_key:
            raise AIServiceError("AI API key is not configured")
        self.client = OpenAI(
            api_key=settings.ai_api_key,
            base_url=settings.ai_base_url
        )
        self.model = settings.ai_model

    def _call_api(self, system_prompt: str, user_content: str, max_tokens: int = 1000,
                  temperature: float = 0.4) -> str:
        """
        Internal method to call the API.
        Returns raw text response.
        """
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_content}
                ],
                max_tokens=max_tokens,
                temperature=temperature
            )
        except OpenAIError as e:
            logger.warning("AI call failed: %s", e)
            raise AIServiceError("Failed to generate content.") from e
        return response.choices[0].message.content or ""

    def _extract_json(self, text: str) -> dict:
        """
        Extract JSON from API response.
        Handles cases where model wraps JSON in markdown code blocks.
        """
        text = text.strip()
        if text.lower().startswith("```json"):
            text = text[7:]
        if text.startswith("```"):
            text = text[3:]
        if text.endswith("```"):
            text = text[:-3]

        try:
            data = json.loads(text.strip())
        except json.JSONDecodeError as e:
            logger.warning("AI returned invalid JSON: %s", e)
            raise AIResponseError("AI returned an invalid response. Please try again.") from e
        if not isinstance(data, dict):
            raise AIResponseError("AI returned an invalid response. Please try again.")
        return data

    def generate_resume_content(self, content_type: str, data: dict) -> str:
        """
        Write one resume section. Plain text, no markdown.
        """
        if content_type == "summary":
            prompt = (
                "Write a professional resume summary for a candidate with the following details:\n"
                f"Job Title/Education: {data.get('title') or ''}\n"
                f"Experience Level: {data.get('level') or ''}\n"
                f"Key Skills: {data.get('skills') or 'relevant industry skills'}\n\n"
                "Keep it concise (2-3 sentences), impactful, and ATS-friendly. No markdown."
            )
        elif content_type == "experience":
            prompt = (
                f"Write 3-4 powerful, action-oriented bullet points for a {data.get('role') or ''} "
                f"role at {data.get('company') or ''}.\n"
                f"Focus on these keywords/achievements: {data.get('keywords') or 'general responsibilities'}.\n"
                "Use robust action verbs and quantify results where possible. "
                "Return ONLY the bullet points as a plain text list (no markdown bullets)."
            )
        elif content_type == "project":
            prompt = (
                f"Write a compelling 2-sentence description for a project titled \"{data.get('title') or ''}\" "
                f"built using {data.get('tech') or 'modern technologies'}.\n"
                "Focus on the technical implementation and the impact/solution. No markdown."
            )
        elif content_type == "skills":
            prompt = (
                f"Suggest 10 relevant technical and soft skills for a {data.get('role') or ''} role.\n"
                "Return them as a comma-separated list. No markdown."
            )
        else:
            raise ValueError(f"Unknown resume content type: {content_type}")

        return self._call_api("You are an expert resume writer.", prompt, max_tokens=400).strip()

    def analyze_skill_gap(self, current_skills: str, target_role: str) -> dict:
        system_prompt = """You are an expert career coach and technical recruiter.
Respond ONLY with a valid JSON object (no markdown, no code fences, no extra text):
{
  "matchScore": <number 0-100>,
  "matchedSkills": [{"name": "<skill>", "level": "<Beginner|Intermediate|Advanced>"}],
  "missingSkills": [{"name": "<skill>", "priority": "<Critical|Important|Nice to Have>", "reason": "<why>"}],
  "roadmap": [{"week": "Week 1-2", "title": "<phase>", "tasks": ["<task>"], "goal": "<goal>"}],
  "projectIdeas": [{"title": "<name>", "description": "<1 line>", "skillsCovered": ["<skill>"], "difficulty": "<Beginner|Intermediate|Advanced>"}],
  "topRecommendation": "<one sentence>"
}
RULES:
- matchedSkills: only skills from the user's list that are relevant to the target role.
- missingSkills: 4-8 specific skills the candidate lacks.
- roadmap: 4-8 phases.
- projectIdeas: 3-6 real-world projects that fill the gap."""

        user_content = f"CURRENT SKILLS: {current_skills}\nTARGET ROLE: {target_role}"
        response = self._call_api(system_prompt, user_content, max_tokens=2000)
        return self._extract_json(response)

    def generate_cover_letter(self, data: dict) -> dict:
        system_prompt = """You are an elite career strategist and expert copywriter.
Write a cover letter that tells a compelling story and makes the candidate the obvious choice.
Respond ONLY with a valid JSON object (no markdown, no code fences, no extra text):
{
  "letter": "<full letter, use \\n for new lines>",
  "analysis": [{"point": "<JD requirement addressed>", "how": "<how the letter mirrors it>"}],
  "competitiveEdge": "<one paragraph>"
}
RULES:
1. Do not open with "I am writing to apply for". Start with a hook.
2. If a JD is provided, address its specific requirements directly.
3. Mirror the requested TONE.
4. Focus on impact (numbers, results) rather than duties.
5. Approx 250-400 words."""

        user_content = (
            f"CANDIDATE NAME: {data.get('name')}\n"
            f"TARGET COMPANY: {data.get('company')}\n"
            f"TARGET ROLE: {data.get('role')}\n"
            f"USER EXPERIENCE/ACHIEVEMENTS: {data.get('experience')}\n"
            f"JOB DESCRIPTION (JD): {data.get('jd')}\n"
            f"TONE: {data.get('tone')}"
        )
        response = self._call_api(system_prompt, user_content, max_tokens=1500)
        return self._extract_json(response)

    def analyze_ats(self, resume_text: str, jd_text: str) -> dict:
        year = datetime.utcnow().year
        system_prompt = f"""You are an Applicant Tracking System and a senior technical recruiter for the {year} job market.
Audit the resume against the job description honestly.
Respond ONLY with a valid JSON object (no markdown, no code fences, no extra text):
{{
  "score": <number 0-100>,
  "semanticMatches": [{{"concept": "<concept>", "relevance": "<High|Medium|Low>", "detail": "<insight>"}}],
  "keywordGap": [{{"keyword": "<keyword>", "importance": "<Critical|Optional>", "fix": "<advice>"}}],
  "formattingAudit": {{"score": <0-100>, "issues": ["<issue>"], "isSafe": <boolean>}},
  "impactScore": <0-100>,
  "boostMyScore": [{{"original": "<weak line>", "suggested": "<rewrite>", "reason": "<why>"}}],
  "summary": "<overall compatibility analysis>"
}}
If the job description is empty, audit the resume against general industry standards for {year}."""

        user_content = f"RESUME TEXT: {resume_text}\nJOB DESCRIPTION: {jd_text}"
        response = self._call_api(system_prompt, user_content, max_tokens=2000, temperature=0.2)
        return self._extract_json(response)

    def test_connection(self) -> bool:
        """Test if the AI API is reachable"""
        try:
            response = self._call_api(
                "You are a test assistant.",
                "Reply with exactly: OK",
                max_tokens=10
            )
            return "OK" in response.upper()
        except AIServiceError:
            return False


# Singleton instance
_ai_client: AIClient = None


def get_ai_client() -> AIClient:
    """Get or create the AI client (singleton pattern)"""
    global _ai_client
    if _ai_client is None:
        _ai_client = AIClient()
    return _ai_client
