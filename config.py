import os
import logging
from typing import List

logger = logging.getLogger(__name__)

DEFAULT_ORIGINS = "http://localhost:3000,http://localhost:5173"

class Settings:
    """Application settings loaded from environment variables."""

    # API Keys
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-pro")

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./career_guidance.db")

    # Server
    PORT: int = int(os.getenv("PORT", "8000"))
    HOST: str = os.getenv("HOST", "0.0.0.0")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv("ALLOWED_ORIGINS", DEFAULT_ORIGINS).split(",")
        if origin.strip()
    ]

    @classmethod
    def validate(cls):
        """Validate environment variables. Gemini is optional, the rule-based assistant works without it."""
        if not cls.GEMINI_API_KEY or cls.GEMINI_API_KEY == "YOUR_GEMINI_API_KEY":
            logger.warning("GEMINI_API_KEY not set. AI chat and resume analysis will be disabled.")
        if not cls.DATABASE_URL:
            raise ValueError("DATABASE_URL environment variable is required")

settings = Settings()
