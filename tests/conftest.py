import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from models import Base
from database import RecordStore
from schemas import Profile, Education, Preferences, Career, Course


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    return RecordStore(session_factory)


@pytest.fixture
def profile():
    return Profile(
        skills=["Python", "SQL", "Git"],
        interests=["Data", "AI"],
        education=Education(level="Bachelor's", field="Computer Science", gpa="3.6"),
        preferences=Preferences(
            work_environment=["Remote"],
            work_style=["Independent", "Analytical"],
            salary="80k-100k",
            location="Berlin",
        ),
    )


@pytest.fixture
def empty_profile():
    return Profile()


@pytest.fixture
def careers():
    return [
        Career(
            id="c1",
            title="Data Scientist",
            description="Turn data into insight.",
            required_skills=["Python", "Statistics", "SQL"],
            interests=["Data", "AI", "Research"],
        ),
        Career(
            id="c2",
            title="UX Designer",
            description="",
            required_skills=["Figma", "User Research"],
            interests=["Design", "Art"],
        ),
        Career(
            id="c3",
            title="Software Engineer",
            description="Build software systems.",
            required_skills=["Python", "JavaScript", "Git", "Testing"],
            interests=["Technology", "Programming"],
        ),
    ]


@pytest.fixture
def courses():
    return [
        Course(
            id="k1",
            title="Intro to Cooking",
            description="Knife skills.",
            level="Beginner",
            skills_gained=["Knife Work"],
        ),
        Course(
            id="k2",
            title="Machine Learning Foundations",
            description="",
            level="",
            skills_gained=["Python", "Statistics"],
        ),
        Course(
            id="k3",
            title="Effective Communication at Work",
            description="Write and present clearly.",
            level="Beginner",
            skills_gained=["Business Communication", "Presentation"],
        ),
        Course(
            id="k4",
            title="Leading Teams",
            description="Practical leadership.",
            level="Intermediate",
            skills_gained=["Leadership", "Time Management"],
        ),
    ]
