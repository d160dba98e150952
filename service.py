import asyncio
import logging
from typing import Callable, Dict, List, Optional
from schemas import Profile, Career, Course, RecommendationsResponse
from models import IntentEnum
from classifier import classify_intent, assessment_prompt, LOGIN_REQUIRED_MESSAGE
from database import RecordStore, fetch_profile, fetch_careers, fetch_courses
from scoring import rank_careers, rank_courses
from advice import (
    CAPABILITIES_MESSAGE,
    generate_career_advice,
    generate_course_recommendations,
    interview_tips,
    resume_advice,
    skill_development_plan,
)

logger = logging.getLogger(__name__)

DATA_ACCESS_ERROR_MESSAGE = (
    "I'm having trouble accessing your profile data. "
    "Please try again or check your connection."
)

Handler = Callable[[Profile, List[Career], List[Course]], str]

RESPONDERS: Dict[IntentEnum, Handler] = {
    IntentEnum.CAREER: lambda profile, careers, courses: generate_career_advice(careers, profile),
    IntentEnum.SKILL: lambda profile, careers, courses: skill_development_plan(profile, courses),
    IntentEnum.COURSE: lambda profile, careers, courses: generate_course_recommendations(courses, profile, careers),
    IntentEnum.INTERVIEW: lambda profile, careers, courses: interview_tips(profile),
    IntentEnum.RESUME: lambda profile, careers, courses: resume_advice(profile),
    IntentEnum.HELP: lambda profile, careers, courses: CAPABILITIES_MESSAGE,
    IntentEnum.DEFAULT: lambda profile, careers, courses: generate_career_advice(careers, profile),
}

def classify_and_respond(
    message: str,
    profile: Optional[Profile],
    careers: List[Career],
    courses: List[Course]
) -> str:
    """
    Route a chat message to the matching response generator.

    Args:
        message: Raw user message
        profile: User's assessment profile, None if not taken yet
        careers: Career catalog
        courses: Course catalog

    Returns:
        Display-ready reply text
    """
    if profile is None:
        return assessment_prompt(message)

    intent = classify_intent(message)
    logger.info(f"[LOGIC] Intent classified: {intent.value}")

    return RESPONDERS[intent](profile, careers or [], courses or [])

async def generate_smart_response(message: str, user_id: Optional[str], store: RecordStore) -> str:
    """
    Answer a chat-widget message for a user.

    Profile and both catalogs are read concurrently. Any read failure
    collapses into a single generic message, the cause is only logged.
    """
    if not user_id:
        return LOGIN_REQUIRED_MESSAGE

    try:
        profile, careers, courses = await asyncio.gather(
            asyncio.to_thread(fetch_profile, store, user_id),
            asyncio.to_thread(fetch_careers, store),
            asyncio.to_thread(fetch_courses, store),
        )
        return classify_and_respond(message, profile, careers, courses)
    except Exception as e:
        logger.error(f"[ERROR] Error generating response: {str(e)}")
        return DATA_ACCESS_ERROR_MESSAGE

def build_recommendations(
    profile: Profile,
    careers: List[Career],
    courses: List[Course]
) -> RecommendationsResponse:
    """Structured top careers and courses for a profile."""
    return RecommendationsResponse(
        careers=rank_careers(careers, profile),
        courses=rank_courses(courses, profile, careers),
    )
