from sqlalchemy import Column, Integer, String, Enum, JSON, ForeignKey, DateTime, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func
import enum
import uuid

Base = declarative_base()

def new_id() -> str:
    return str(uuid.uuid4())

# Enums
class IntentEnum(str, enum.Enum):
    CAREER = "CAREER"
    COURSE = "COURSE"
    SKILL = "SKILL"
    INTERVIEW = "INTERVIEW"
    RESUME = "RESUME"
    HELP = "HELP"
    DEFAULT = "DEFAULT"

class RoleEnum(str, enum.Enum):
    USER = "user"
    ASSISTANT = "assistant"

# Models
class UserProfile(Base):
    __tablename__ = "user_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), unique=True, nullable=False, index=True)
    full_name = Column(String(255))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

class Assessment(Base):
    __tablename__ = "assessments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), unique=True, nullable=False, index=True)
    skills = Column(JSON, default=list)
    interests = Column(JSON, default=list)
    education_level = Column(String(100))
    education_field = Column(String(255))
    education_gpa = Column(String(20))
    work_environment = Column(JSON, default=list)
    work_style = Column(JSON, default=list)
    salary_preference = Column(String(100))
    location_preference = Column(String(255))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

class Career(Base):
    __tablename__ = "career_recommendations"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    required_skills = Column(JSON, default=list)
    interests = Column(JSON, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class Course(Base):
    __tablename__ = "courses"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    level = Column(String(50))
    skills_gained = Column(JSON, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class UserSavedCareer(Base):
    __tablename__ = "user_saved_careers"
    __table_args__ = (UniqueConstraint("user_id", "career_id"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    career_id = Column(String(36), ForeignKey("career_recommendations.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class UserSavedCourse(Base):
    __tablename__ = "user_saved_courses"
    __table_args__ = (UniqueConstraint("user_id", "course_id"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    course_id = Column(String(36), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class ChatConversation(Base):
    __tablename__ = "chat_conversations"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(64), nullable=False, index=True)
    title = Column(String(255))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    messages = relationship(
        "ChatMessage",
        order_by="ChatMessage.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

class ChatMessage(Base):
    __tablename__ = "chat_messages"

    id = Column(Integer, primary_key=True, index=True)
    conversation_id = Column(String(36), ForeignKey("chat_conversations.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(64), nullable=False)
    role = Column(Enum(RoleEnum), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
