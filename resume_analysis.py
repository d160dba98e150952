"""
Resume analysis: parse Gemini's free-text review, or fall back to a fixed local review.
"""

import re
from typing import List
from schemas import ResumeAnalysisResponse
from gemini_client import GeminiClient
import logging

logger = logging.getLogger(__name__)

DEFAULT_SCORE = 75
MAX_ITEMS = 4

SCORE_PATTERN = re.compile(r"(\d{1,3})(?:\s*/\s*100|\s*%|\s*out of 100)", re.IGNORECASE)

# A heading is a non-bullet line where the keyword is followed by a colon,
# or ends the line, e.g. "Strengths:", "**Top 3 Areas for Improvement:**"
NOT_BULLET = r"(?![ \t]*(?:\d+\.|[-*•])[ \t])"
HEADING_END = r"s?\b[^\n:.]{0,40}(?::|$)[ \t]*\**"
IMPROVEMENTS_HEADING = rf"^{NOT_BULLET}[^\n]*?(?:improvement|recommendation){HEADING_END}"

STRENGTHS_PATTERN = re.compile(
    rf"^{NOT_BULLET}[^\n]*?strength{HEADING_END}(.*?)(?={IMPROVEMENTS_HEADING}|\Z)",
    re.IGNORECASE | re.DOTALL | re.MULTILINE,
)
IMPROVEMENTS_PATTERN = re.compile(
    rf"{IMPROVEMENTS_HEADING}(.*)\Z",
    re.IGNORECASE | re.DOTALL | re.MULTILINE,
)
# Bullets at line start, numbered items anywhere after whitespace
ITEM_SPLIT = re.compile(r"^[ \t]*[-*•][ \t]+|(?<!\S)\d+\.[ \t]+", re.MULTILINE)

LOCAL_ANALYSIS = ResumeAnalysisResponse(
    score=78,
    strengths=[
        "Strong technical skills section with relevant technologies",
        "Clear work experience with quantifiable achievements",
        "Well-structured layout with good organization",
        "Appropriate length and conciseness",
    ],
    improvements=[
        "Add more action verbs to describe accomplishments",
        "Tailor resume more specifically to target roles",
        "Include more quantitative results and metrics",
        "Add relevant certifications or continuing education",
    ],
    feedback=[
        "Your resume demonstrates solid experience but could benefit from more specific achievements",
        "Consider adding a brief professional summary at the top",
        "Tailor your skills section more specifically to the job descriptions you're targeting",
        "Use more powerful action verbs throughout your experience descriptions",
    ],
    source="local",
)

def _split_items(section: str) -> List[str]:
    items = [item.replace("**", "").strip(" \t\n*") for item in ITEM_SPLIT.split(section)]
    return [item for item in items if len(item) > 10][:MAX_ITEMS]

def parse_resume_analysis(analysis_text: str) -> ResumeAnalysisResponse:
    """
    Pull a score, strengths and improvements out of a free-text review.

    The score is the first number written as "N/100", "N%" or "N out of 100",
    clamped to 0-100; 75 when none is found.
    """
    score_match = SCORE_PATTERN.search(analysis_text)
    score = min(100, max(0, int(score_match.group(1)))) if score_match else DEFAULT_SCORE

    strengths_match = STRENGTHS_PATTERN.search(analysis_text)
    improvements_match = IMPROVEMENTS_PATTERN.search(analysis_text)

    return ResumeAnalysisResponse(
        score=score,
        strengths=_split_items(strengths_match.group(1)) if strengths_match else [],
        improvements=_split_items(improvements_match.group(1)) if improvements_match else [],
        feedback=[analysis_text],
        source="gemini",
    )

def analyze_resume(resume_content: str, client: GeminiClient) -> ResumeAnalysisResponse:
    """Analyze with Gemini when configured, otherwise return the local review."""
    if not client.is_available():
        logger.info("[LOGIC] Gemini unavailable, using local resume analysis")
        return LOCAL_ANALYSIS.model_copy(deep=True)

    reply = client.analyze_resume(resume_content)
    if reply.error:
        logger.warning(f"[LOGIC] Resume analysis failed ({reply.error}), using local analysis")
        return LOCAL_ANALYSIS.model_copy(deep=True)

    return parse_resume_analysis(reply.text)
