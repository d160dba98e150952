import google.generativeai as genai
from dataclasses import dataclass
from typing import Dict, List, Optional
from config import settings
from prompts import get_system_prompt, get_resume_prompt
from ai_context import build_profile_prompt, build_chat_history
from schemas import Profile
import logging

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "I'm sorry, but the AI service is currently unavailable. Please check your API configuration."
CONFIG_ERROR_MESSAGE = "There's an issue with the AI service configuration. Please try again later."
RATE_LIMITED_MESSAGE = "The AI service is currently experiencing high demand. Please try again in a few moments."

@dataclass
class GeminiReply:
    text: str
    error: Optional[str] = None  # API_KEY_MISSING | API_KEY_INVALID | RATE_LIMITED | UNKNOWN_ERROR | ANALYSIS_FAILED

def classify_error(exc: Exception, fallback_text: str) -> GeminiReply:
    """Map a Gemini exception to a user-facing reply."""
    message = str(exc)
    lowered = message.lower()

    if "API_KEY" in message:
        return GeminiReply(text=CONFIG_ERROR_MESSAGE, error="API_KEY_INVALID")
    if "quota" in lowered or "rate limit" in lowered:
        return GeminiReply(text=RATE_LIMITED_MESSAGE, error="RATE_LIMITED")
    return GeminiReply(text=fallback_text, error="UNKNOWN_ERROR")

class GeminiClient:
    """
    Gemini-backed career counsellor.

    Never raises: failures come back as a GeminiReply with `error` set.
    """

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        self.api_key = settings.GEMINI_API_KEY if api_key is None else api_key
        self.model_name = model_name or settings.GEMINI_MODEL

    def is_available(self) -> bool:
        return bool(self.api_key) and self.api_key != "YOUR_GEMINI_API_KEY"

    def _model(self, system_instruction: Optional[str] = None):
        genai.configure(api_key=self.api_key)
        return genai.GenerativeModel(self.model_name, system_instruction=system_instruction)

    def generate_career_advice(self, question: str, profile: Optional[Profile] = None, experience: str = "") -> GeminiReply:
        """Single-shot answer, prefixed with the user's profile when one is given."""
        if not self.is_available():
            return GeminiReply(text=UNAVAILABLE_MESSAGE, error="API_KEY_MISSING")

        try:
            model = self._model(get_system_prompt())
            response = model.generate_content(build_profile_prompt(question, profile, experience))
            return GeminiReply(text=response.text.strip())
        except Exception as e:
            logger.error(f"Gemini API Error: {str(e)}")
            return classify_error(
                e, "I'm experiencing technical difficulties. Please try rephrasing your question or try again later."
            )

    def generate_chat_reply(self, message: str, history: List[Dict[str, str]]) -> GeminiReply:
        """
        Continue a conversation.

        Args:
            message: New user message
            history: Earlier messages as {"role": "user"|"assistant", "content": ...}
        """
        if not self.is_available():
            return GeminiReply(text=UNAVAILABLE_MESSAGE, error="API_KEY_MISSING")

        try:
            chat = self._model(get_system_prompt()).start_chat(history=build_chat_history(history))
            response = chat.send_message(message)
            return GeminiReply(text=response.text.strip())
        except Exception as e:
            logger.error(f"Gemini Chat Error: {str(e)}")
            return classify_error(e, "I'm experiencing technical difficulties. Please try again later.")

    def analyze_resume(self, resume_content: str) -> GeminiReply:
        if not self.is_available():
            return GeminiReply(text="AI resume analysis is currently unavailable.", error="API_KEY_MISSING")

        try:
            response = self._model().generate_content(get_resume_prompt(resume_content))
            return GeminiReply(text=response.text.strip())
        except Exception as e:
            logger.error(f"Gemini Resume Analysis Error: {str(e)}")
            return GeminiReply(text="Unable to analyze resume at this time. Please try again later.", error="ANALYSIS_FAILED")

def get_gemini_client() -> GeminiClient:
    """Dependency to get the Gemini client."""
    return GeminiClient()
