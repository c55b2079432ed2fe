# tests/conftest.py
"""
Pytest configuration.

Every test gets its own SQLite database file, so tests never share state and
never touch the database configured for the running application.
"""

import os

# Set testing mode BEFORE any app imports
os.environ["CI"] = "true"
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SEED_SAMPLE_DATA"] = "false"

from typing import Callable, Iterator

from fastapi.testclient import TestClient
import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from afterschool.database import build_engine, get_db, init_db
from afterschool.main import fastapi_app as app
from afterschool.models.lesson import Lesson


@pytest.fixture
def engine(tmp_path) -> Iterator[Engine]:
    test_engine = build_engine(f"sqlite:///{tmp_path / 'afterschool_test.db'}")
    init_db(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


@pytest.fixture
def db(session_factory: sessionmaker) -> Iterator[Session]:
    """Create a new database session for each test."""
    session = session_factory()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def make_lesson(db: Session) -> Callable[..., Lesson]:
    """Factory that inserts and commits a lesson."""

    def _make_lesson(
        subject: str = "Mathematics",
        location: str = "London",
        price: float = 100,
        space: int = 5,
        icon: str = "fa-calculator",
    ) -> Lesson:
        lesson = Lesson(subject=subject, location=location, price=price, space=space, icon=icon)
        db.add(lesson)
        db.commit()
        return lesson

    return _make_lesson


@pytest.fixture
def sample_lessons(make_lesson) -> dict[str, Lesson]:
    """A small catalogue covering text and numeric search cases."""
    return {
        "maths": make_lesson("Mathematics", "London", 100, 5, "fa-calculator"),
        "english": make_lesson("English Literature", "Manchester", 90, 8, "fa-book"),
        "science": make_lesson("Science", "London", 110, 3, "fa-flask"),
        "art": make_lesson("Art & Design", "Birmingham", 85, 100, "fa-palette"),
        "history": make_lesson("History", "Birmingham", 80, 7, "fa-landmark"),
        "cooking": make_lesson("Cooking 100", "Leeds", 10.5, 4, "fa-utensils"),
    }


@pytest.fixture
def client(db: Session) -> Iterator[TestClient]:
    """Create a test client bound to the test database session."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    test_client = TestClient(app)

    yield test_client

    app.dependency_overrides.clear()
    test_client.close()
