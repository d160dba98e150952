"""
CRUD operations for database models.
"""

from sqlalchemy.orm import Session
from sqlalchemy import and_, func
from models import (
    Assessment, Career, Course, UserProfile,
    UserSavedCareer, UserSavedCourse, ChatConversation, ChatMessage, RoleEnum,
)
from schemas import Profile
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

DEFAULT_CONVERSATION_TITLE = "New Career Conversation"

# Assessment operations
def save_assessment(db: Session, user_id: str, profile: Profile) -> Assessment:
    """
    Save a user's assessment (UPSERT pattern).
    A resubmission overwrites every field, it never patches.
    """
    values = {
        "skills": list(profile.skills),
        "interests": list(profile.interests),
        "education_level": profile.education.level,
        "education_field": profile.education.field,
        "education_gpa": profile.education.gpa,
        "work_environment": list(profile.preferences.work_environment),
        "work_style": list(profile.preferences.work_style),
        "salary_preference": profile.preferences.salary,
        "location_preference": profile.preferences.location,
    }

    try:
        assessment = db.query(Assessment).filter(Assessment.user_id == user_id).first()
        if assessment:
            for key, value in values.items():
                setattr(assessment, key, value)
            assessment.updated_at = func.now()
        else:
            assessment = Assessment(user_id=user_id, **values)
            db.add(assessment)
        db.commit()
        db.refresh(assessment)
        return assessment
    except Exception as e:
        logger.error(f"[ERROR] save_assessment failed: {str(e)}")
        db.rollback()
        raise

def get_assessment(db: Session, user_id: str) -> Optional[Assessment]:
    """Get a user's assessment."""
    return db.query(Assessment).filter(Assessment.user_id == user_id).first()

def reset_assessment(db: Session, user_id: str) -> bool:
    """Delete a user's assessment. Returns False if there was none."""
    deleted = db.query(Assessment).filter(Assessment.user_id == user_id).delete()
    db.commit()
    return deleted > 0

# Career operations
def get_careers(db: Session) -> List[Career]:
    """All careers, newest first."""
    return db.query(Career).order_by(Career.created_at.desc()).all()

def get_career(db: Session, career_id: str) -> Optional[Career]:
    return db.query(Career).filter(Career.id == career_id).first()

def get_saved_careers(db: Session, user_id: str) -> List[Career]:
    return (
        db.query(Career)
        .join(UserSavedCareer, UserSavedCareer.career_id == Career.id)
        .filter(UserSavedCareer.user_id == user_id)
        .order_by(UserSavedCareer.id)
        .all()
    )

def save_career(db: Session, user_id: str, career_id: str) -> UserSavedCareer:
    """Save a career for a user. Saving twice is a no-op."""
    existing = db.query(UserSavedCareer).filter(
        and_(
            UserSavedCareer.user_id == user_id,
            UserSavedCareer.career_id == career_id
        )
    ).first()
    if existing:
        return existing

    saved = UserSavedCareer(user_id=user_id, career_id=career_id)
    db.add(saved)
    db.commit()
    db.refresh(saved)
    return saved

def unsave_career(db: Session, user_id: str, career_id: str) -> bool:
    deleted = db.query(UserSavedCareer).filter(
        and_(
            UserSavedCareer.user_id == user_id,
            UserSavedCareer.career_id == career_id
        )
    ).delete()
    db.commit()
    return deleted > 0

# Course operations
def get_courses(db: Session) -> List[Course]:
    """All courses, newest first."""
    return db.query(Course).order_by(Course.created_at.desc()).all()

def get_course(db: Session, course_id: str) -> Optional[Course]:
    return db.query(Course).filter(Course.id == course_id).first()

def get_saved_courses(db: Session, user_id: str) -> List[Course]:
    return (
        db.query(Course)
        .join(UserSavedCourse, UserSavedCourse.course_id == Course.id)
        .filter(UserSavedCourse.user_id == user_id)
        .order_by(UserSavedCourse.id)
        .all()
    )

def save_course(db: Session, user_id: str, course_id: str) -> UserSavedCourse:
    """Save a course for a user. Saving twice is a no-op."""
    existing = db.query(UserSavedCourse).filter(
        and_(
            UserSavedCourse.user_id == user_id,
            UserSavedCourse.course_id == course_id
        )
    ).first()
    if existing:
        return existing

    saved = UserSavedCourse(user_id=user_id, course_id=course_id)
    db.add(saved)
    db.commit()
    db.refresh(saved)
    return saved

def unsave_course(db: Session, user_id: str, course_id: str) -> bool:
    deleted = db.query(UserSavedCourse).filter(
        and_(
            UserSavedCourse.user_id == user_id,
            UserSavedCourse.course_id == course_id
        )
    ).delete()
    db.commit()
    return deleted > 0

# User Profile operations
def create_or_update_profile(db: Session, user_id: str, full_name: str) -> UserProfile:
    """Create or update a user profile (UPSERT pattern)."""
    try:
        profile = db.query(UserProfile).filter(UserProfile.user_id == user_id).first()
        if profile:
            profile.full_name = full_name
            profile.updated_at = func.now()
        else:
            profile = UserProfile(user_id=user_id, full_name=full_name)
            db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile
    except Exception as e:
        logger.error(f"[ERROR] create_or_update_profile failed: {str(e)}")
        db.rollback()
        raise

def get_profile(db: Session, user_id: str) -> Optional[UserProfile]:
    return db.query(UserProfile).filter(UserProfile.user_id == user_id).first()

# Conversation operations
def create_conversation(db: Session, user_id: str, title: Optional[str] = None) -> ChatConversation:
    conversation = ChatConversation(user_id=user_id, title=title or DEFAULT_CONVERSATION_TITLE)
    db.add(conversation)
    db.commit()
    db.refresh(conversation)
    return conversation

def list_conversations(db: Session, user_id: str) -> List[ChatConversation]:
    """User's conversations, most recently updated first."""
    return (
        db.query(ChatConversation)
        .filter(ChatConversation.user_id == user_id)
        .order_by(ChatConversation.updated_at.desc())
        .all()
    )

def get_conversation(db: Session, conversation_id: str, user_id: str) -> Optional[ChatConversation]:
    """Get a conversation, only if it belongs to the user."""
    return db.query(ChatConversation).filter(
        and_(
            ChatConversation.id == conversation_id,
            ChatConversation.user_id == user_id
        )
    ).first()

def add_message(db: Session, conversation: ChatConversation, role: RoleEnum, content: str) -> ChatMessage:
    message = ChatMessage(
        conversation_id=conversation.id,
        user_id=conversation.user_id,
        role=role,
        content=content
    )
    db.add(message)
    db.commit()
    db.refresh(message)
    return message

def touch_conversation(db: Session, conversation: ChatConversation):
    """Bump updated_at so the conversation sorts first."""
    try:
        conversation.updated_at = func.now()
        db.commit()
        db.refresh(conversation)
    except Exception as e:
        logger.warning(f"[WARNING] touch_conversation failed: {str(e)}")
        db.rollback()

def delete_conversation(db: Session, conversation_id: str, user_id: str) -> bool:
    conversation = get_conversation(db, conversation_id, user_id)
    if not conversation:
        return False

    db.delete(conversation)
    db.commit()
    return True
