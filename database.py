from sqlalchemy import create_engine, inspect, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from typing import Any, Dict, List, Optional
from config import settings
from models import (
    Base, Assessment, Career, Course, UserProfile,
    UserSavedCareer, UserSavedCourse, ChatConversation, ChatMessage,
)
import schemas
import logging

# Configure logger
logger = logging.getLogger(__name__)

# Entity name -> model mapping for the record store
ENTITIES = {
    "assessments": Assessment,
    "careers": Career,
    "courses": Course,
    "user_profiles": UserProfile,
    "user_saved_careers": UserSavedCareer,
    "user_saved_courses": UserSavedCourse,
    "chat_conversations": ChatConversation,
    "chat_messages": ChatMessage,
}

def get_db_connection(database_url: Optional[str] = None):
    """Create and return database engine."""
    url = database_url or settings.DATABASE_URL
    if not url:
        raise ValueError("DATABASE_URL environment variable not set")

    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)

engine = get_db_connection()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_db():
    """Dependency to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def verify_tables_exist(bind=None):
    """Ensure required tables exist, create if missing."""
    bind = bind or engine
    existing_tables = set(inspect(bind).get_table_names())
    missing = [table for table in Base.metadata.tables if table not in existing_tables]

    if missing:
        logger.info(f"Creating missing tables: {missing}")
        Base.metadata.create_all(bind=bind)

class RecordStoreError(Exception):
    """Raised when a record store operation fails."""

def _to_dict(row) -> Dict[str, Any]:
    return {column.key: getattr(row, column.key) for column in inspect(row).mapper.column_attrs}

class RecordStore:
    """
    Entity-name based access to the database.

    Each call opens and closes its own session, so independent reads can
    run concurrently from worker threads. Every SQLAlchemy failure is
    re-raised as RecordStoreError, there are no retries.
    """

    def __init__(self, session_factory=None):
        self.session_factory = session_factory or SessionLocal

    def _model(self, entity: str):
        try:
            return ENTITIES[entity]
        except KeyError:
            raise RecordStoreError(f"Unknown entity: {entity}")

    def _select(self, model, filters: Optional[Dict[str, Any]]):
        query = select(model)
        for key, value in (filters or {}).items():
            if key not in model.__table__.columns:
                raise RecordStoreError(f"Unknown field: {key}")
            query = query.where(getattr(model, key) == value)
        return query

    def get(self, entity: str, filters: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        model = self._model(entity)
        try:
            with self.session_factory() as db:
                row = db.execute(self._select(model, filters)).scalars().first()
                return _to_dict(row) if row else None
        except SQLAlchemyError as e:
            logger.error(f"Record store get failed: entity={entity}, error={str(e)}")
            raise RecordStoreError(str(e)) from e

    def list(self, entity: str, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Rows in insertion order."""
        model = self._model(entity)
        primary_key = inspect(model).primary_key
        try:
            with self.session_factory() as db:
                query = self._select(model, filters)
                if "created_at" in model.__table__.columns:
                    query = query.order_by(model.created_at)
                query = query.order_by(*primary_key)
                return [_to_dict(row) for row in db.execute(query).scalars()]
        except SQLAlchemyError as e:
            logger.error(f"Record store list failed: entity={entity}, error={str(e)}")
            raise RecordStoreError(str(e)) from e

    def insert(self, entity: str, record: Dict[str, Any]) -> Dict[str, Any]:
        model = self._model(entity)
        try:
            with self.session_factory() as db:
                row = model(**record)
                db.add(row)
                db.commit()
                db.refresh(row)
                return _to_dict(row)
        except SQLAlchemyError as e:
            logger.error(f"Record store insert failed: entity={entity}, error={str(e)}")
            raise RecordStoreError(str(e)) from e

    def update(self, entity: str, filters: Dict[str, Any], values: Dict[str, Any]) -> int:
        model = self._model(entity)
        try:
            with self.session_factory() as db:
                rows = db.execute(self._select(model, filters)).scalars().all()
                for row in rows:
                    for key, value in values.items():
                        setattr(row, key, value)
                db.commit()
                return len(rows)
        except SQLAlchemyError as e:
            logger.error(f"Record store update failed: entity={entity}, error={str(e)}")
            raise RecordStoreError(str(e)) from e

    def delete(self, entity: str, filters: Dict[str, Any]) -> int:
        model = self._model(entity)
        try:
            with self.session_factory() as db:
                rows = db.execute(self._select(model, filters)).scalars().all()
                for row in rows:
                    db.delete(row)
                db.commit()
                return len(rows)
        except SQLAlchemyError as e:
            logger.error(f"Record store delete failed: entity={entity}, error={str(e)}")
            raise RecordStoreError(str(e)) from e

def get_store() -> RecordStore:
    """Dependency to get the record store."""
    return RecordStore(SessionLocal)

# ========================================
# Assistant reads
# ========================================

def assessment_to_profile(record: Dict[str, Any]) -> schemas.Profile:
    """Convert a flat assessment row into a Profile."""
    return schemas.Profile(
        skills=record.get("skills"),
        interests=record.get("interests"),
        education=schemas.Education(
            level=record.get("education_level"),
            field=record.get("education_field"),
            gpa=record.get("education_gpa"),
        ),
        preferences=schemas.Preferences(
            work_environment=record.get("work_environment"),
            work_style=record.get("work_style"),
            salary=record.get("salary_preference"),
            location=record.get("location_preference"),
        ),
    )

def fetch_profile(store: RecordStore, user_id: str) -> Optional[schemas.Profile]:
    record = store.get("assessments", {"user_id": user_id})
    return assessment_to_profile(record) if record else None

def fetch_careers(store: RecordStore) -> List[schemas.Career]:
    return [schemas.Career(**record) for record in store.list("careers")]

def fetch_courses(store: RecordStore) -> List[schemas.Course]:
    return [schemas.Course(**record) for record in store.list("courses")]
