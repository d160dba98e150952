"""
Pydantic schemas for API requests and responses.
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime
from models import IntentEnum, RoleEnum


def _none_to_list(value):
    return [] if value is None else value


def _none_to_str(value):
    return "" if value is None else value


# Assessment / Profile Schemas
class Education(BaseModel):
    level: str = ""
    field: str = ""
    gpa: str = ""

    @field_validator("level", "field", "gpa", mode="before")
    @classmethod
    def coerce_strings(cls, value):
        return _none_to_str(value)

class Preferences(BaseModel):
    work_environment: List[str] = []
    work_style: List[str] = []
    salary: str = ""
    location: str = ""

    @field_validator("work_environment", "work_style", mode="before")
    @classmethod
    def coerce_lists(cls, value):
        return _none_to_list(value)

    @field_validator("salary", "location", mode="before")
    @classmethod
    def coerce_strings(cls, value):
        return _none_to_str(value)

class Profile(BaseModel):
    """A user's self-reported skills, interests, education and work preferences."""
    skills: List[str] = []
    interests: List[str] = []
    education: Education = Field(default_factory=Education)
    preferences: Preferences = Field(default_factory=Preferences)

    @field_validator("skills", "interests", mode="before")
    @classmethod
    def coerce_lists(cls, value):
        return _none_to_list(value)

class AssessmentCreate(Profile):
    user_id: str

class AssessmentResponse(Profile):
    user_id: str
    updated_at: Optional[datetime] = None

# Catalog Schemas
class Career(BaseModel):
    id: str
    title: str
    description: str = ""
    required_skills: List[str] = []
    interests: List[str] = []

    @field_validator("required_skills", "interests", mode="before")
    @classmethod
    def coerce_lists(cls, value):
        return _none_to_list(value)

    @field_validator("description", mode="before")
    @classmethod
    def coerce_strings(cls, value):
        return _none_to_str(value)

    class Config:
        from_attributes = True

class Course(BaseModel):
    id: str
    title: str
    description: str = ""
    level: str = ""
    skills_gained: List[str] = []

    @field_validator("skills_gained", mode="before")
    @classmethod
    def coerce_lists(cls, value):
        return _none_to_list(value)

    @field_validator("description", "level", mode="before")
    @classmethod
    def coerce_strings(cls, value):
        return _none_to_str(value)

    class Config:
        from_attributes = True

class ScoredCareer(Career):
    score: float = 0.0

class ScoredCourse(Course):
    score: float = 0.0

class RecommendationsResponse(BaseModel):
    careers: List[ScoredCareer] = []
    courses: List[ScoredCourse] = []

# User Profile Schemas
class UserProfileUpdate(BaseModel):
    full_name: str

class UserProfileResponse(BaseModel):
    user_id: str
    full_name: Optional[str] = None

    class Config:
        from_attributes = True

# Saved item Schema
class SaveResponse(BaseModel):
    success: bool
    message: str

# Assistant Schema
class AssistantRequest(BaseModel):
    message: str = Field(..., min_length=1)
    user_id: Optional[str] = None

class AssistantResponse(BaseModel):
    message: str

# Conversation Schemas
class ConversationCreate(BaseModel):
    user_id: str
    title: Optional[str] = None

class MessageCreate(BaseModel):
    user_id: str
    content: str = Field(..., min_length=1)

class MessageResponse(BaseModel):
    id: int
    role: RoleEnum
    content: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class ConversationResponse(BaseModel):
    id: str
    title: str = "Untitled Conversation"
    messages: List[MessageResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("title", mode="before")
    @classmethod
    def default_title(cls, value):
        return value or "Untitled Conversation"

    class Config:
        from_attributes = True

# Resume Schemas
class ResumeAnalysisRequest(BaseModel):
    content: str = Field(..., min_length=1)

class ResumeAnalysisResponse(BaseModel):
    score: int
    strengths: List[str] = []
    improvements: List[str] = []
    feedback: List[str] = []
    source: str = "local"  # gemini | local

# Error Schema
class ErrorResponse(BaseModel):
    error: str
    message: str
