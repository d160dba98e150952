from typing import Callable, List, Tuple
from models import IntentEnum

LOGIN_REQUIRED_MESSAGE = (
    "To get personalized career advice, please log in. "
    "This will help me understand your skills, interests, and goals better."
)

CAREER_ASSESSMENT_PROMPT = (
    "I'd love to help you find the right career! Please complete your assessment first "
    "so I can understand your skills, interests, and preferences. "
    "Visit the Assessment page to get started."
)

COURSE_ASSESSMENT_PROMPT = (
    "To recommend courses tailored to your goals, I need to know more about you. "
    "Complete your assessment to receive personalized learning recommendations."
)

GENERIC_ASSESSMENT_PROMPT = (
    "I can provide personalized career guidance once you complete your assessment. "
    "This helps me understand your unique background and goals."
)

def _contains_any(*keywords: str) -> Callable[[str], bool]:
    return lambda text: any(keyword in text for keyword in keywords)

def _course_intent(text: str) -> IntentEnum:
    # "skill" wins over "course"/"learn" inside the same rule
    return IntentEnum.SKILL if "skill" in text else IntentEnum.COURSE

# Evaluated top to bottom, first match wins
INTENT_RULES: List[Tuple[Callable[[str], bool], Callable[[str], IntentEnum]]] = [
    (_contains_any("career", "path", "job"), lambda text: IntentEnum.CAREER),
    (_contains_any("course", "learn", "skill"), _course_intent),
    (_contains_any("interview", "prepare"), lambda text: IntentEnum.INTERVIEW),
    (_contains_any("resume", "cv"), lambda text: IntentEnum.RESUME),
    (_contains_any("help", "what can"), lambda text: IntentEnum.HELP),
]

def classify_intent(message: str) -> IntentEnum:
    """
    Classify a chat message into an intent by keyword containment.

    Args:
        message: Raw user message

    Returns:
        The first matching intent, or DEFAULT when no rule matches
    """
    text = message.lower()

    for predicate, intent_for in INTENT_RULES:
        if predicate(text):
            return intent_for(text)

    return IntentEnum.DEFAULT

def assessment_prompt(message: str) -> str:
    """Pick the prompt shown to a user who has not completed the assessment."""
    text = message.lower()

    if "career" in text or "job" in text:
        return CAREER_ASSESSMENT_PROMPT
    elif "course" in text or "learn" in text:
        return COURSE_ASSESSMENT_PROMPT
    else:
        return GENERIC_ASSESSMENT_PROMPT
