# Career Counsellor Context Builder
# =================================
# Builds the prompt and chat history sent to Gemini from stored user data

from typing import Dict, List, Optional
from schemas import Profile

NOT_SPECIFIED = "Not specified"

def describe_education(profile: Profile) -> str:
    """Collapse education into one line, e.g. "Bachelor's in Computer Science"."""
    education = profile.education
    if education.level and education.field:
        return f"{education.level} in {education.field}"
    return education.level or education.field

def build_profile_prompt(question: str, profile: Optional[Profile] = None, experience: str = "") -> str:
    """
    Prefix a question with the user's profile.

    Args:
        question: The user's question
        profile: Assessment profile (optional)
        experience: Free-text work experience (optional)

    Returns:
        Prompt text; the bare question when no profile is given
    """
    if profile is None:
        return question

    return (
        "User Profile:\n"
        f"- Skills: {', '.join(profile.skills) or NOT_SPECIFIED}\n"
        f"- Interests: {', '.join(profile.interests) or NOT_SPECIFIED}\n"
        f"- Experience: {experience or NOT_SPECIFIED}\n"
        f"- Education: {describe_education(profile) or NOT_SPECIFIED}\n"
        "\n"
        f"Question: {question}"
    )


def build_chat_history(messages: List[Dict[str, str]]) -> List[Dict]:
    """
    Map stored {role, content} messages to Gemini chat history.

    Gemini calls the assistant side "model".
    """
    return [
        {
            "role": "model" if message["role"] == "assistant" else "user",
            "parts": [message["content"]],
        }
        for message in messages
    ]
