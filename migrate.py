"""
Database migration script.
Creates tables: user_profiles, assessments, career_recommendations, courses,
user_saved_careers, user_saved_courses, chat_conversations, chat_messages
"""

import logging
from models import Base
from database import get_db_connection

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def create_tables(database_url=None):
    """Create all tables defined in models."""
    engine = get_db_connection(database_url)
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created successfully")
    return engine

if __name__ == "__main__":
    create_tables()
