"""
Keyword ATS checker - scores a resume against a job description without AI.

score = round(100 * matched JD keywords / all JD keywords)
"""

import math
import re
from typing import List


STOP_WORDS = {
    "the", "and", "for", "that", "with", "this", "from", "have",
    "are", "was", "will", "your", "experience"
}

MAX_LISTED = 15


def tokenize(text: str) -> List[str]:
    """Lowercase alphanumeric words longer than two characters, in order."""
    cleaned = re.sub(r"[^a-z0-9\s]", "", (text or "").lower())
    return [word for word in cleaned.split() if len(word) > 2]


def keyword_ats_score(resume_text: str, jd_text: str) -> dict:
    """
    Compare resume words against the job description's keywords.

    Raises ValueError when the job description has no usable keywords.
    """
    # dict keeps first-seen order
    jd_keywords = [k for k in dict.fromkeys(tokenize(jd_text)) if k not in STOP_WORDS]
    if not jd_keywords:
        raise ValueError("Job description is too short or lacks keywords.")

    resume_keywords = set(tokenize(resume_text))
    matched = [k for k in jd_keywords if k in resume_keywords]
    missing = [k for k in jd_keywords if k not in resume_keywords]

    return {
        # half rounds up
        "score": math.floor(len(matched) * 100 / len(jd_keywords) + 0.5),
        "matched": matched[:MAX_LISTED],
        "missing": missing[:MAX_LISTED],
    }
