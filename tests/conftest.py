# tests/conftest.py

import os

# Keep the app's own engine off the developer database
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from badminton_squad.main import app
from unittest.mock import MagicMock
from badminton_squad.database import Base, get_db, get_supabase, enable_sqlite_foreign_keys
from badminton_squad.dependencies.permissions import get_current_user
from badminton_squad.models import BadmintonSession, Profile, SessionResponse, Comment
from badminton_squad.models.enums import UserRole
from badminton_squad.utils.date_helpers import DateHelpers, IST


engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


# --- Data helpers ---
def ist_time(days_ahead: int, hour: int, minute: int = 0) -> datetime:
    """An aware datetime at hour:minute IST, days_ahead IST days from today"""
    day = DateHelpers.ist_date(DateHelpers.utcnow()) + timedelta(days=days_ahead)
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=IST)


@pytest.fixture
def make_profile(db_session):
    counter = {"n": 0}

    def _make(
        name: str = None,
        approved: bool = True,
        role: UserRole = UserRole.NORMAL_USER,
    ) -> Profile:
        counter["n"] += 1
        n = counter["n"]
        profile = Profile(
            id=f"00000000-0000-0000-0000-{n:012d}",
            name=name or f"Player {n}",
            email=f"player{n}@example.com",
            role=role.value,
            approved=approved,
        )
        db_session.add(profile)
        db_session.commit()
        return profile

    return _make


@pytest.fixture
def make_session(db_session):
    """Insert a session row directly, bypassing the scheduling rules"""

    def _make(creator: Profile, start: datetime = None, hours: int = 2, **kwargs):
        start = start or ist_time(days_ahead=3, hour=18)
        session = BadmintonSession(
            title=kwargs.pop("title", "Evening doubles"),
            location=kwargs.pop("location", "Koramangala Indoor Stadium"),
            start_time=DateHelpers.to_utc(start),
            end_time=DateHelpers.to_utc(start + timedelta(hours=hours)),
            created_by=creator.id,
            **kwargs,
        )
        db_session.add(session)
        db_session.commit()
        return session

    return _make


@pytest.fixture
def make_response(db_session):
    def _make(session: BadmintonSession, user: Profile, status: str = "COMING"):
        response = SessionResponse(session_id=session.id, user_id=user.id, status=status)
        db_session.add(response)
        db_session.commit()
        return response

    return _make


@pytest.fixture
def make_comment(db_session):
    def _make(
        session: BadmintonSession,
        user: Profile,
        content: str = "See you there",
        parent: Comment = None,
        created_at: datetime = None,
    ):
        comment = Comment(
            session_id=session.id,
            user_id=user.id,
            content=content,
            parent_comment_id=parent.id if parent else None,
            created_at=created_at or datetime.now(timezone.utc),
        )
        db_session.add(comment)
        db_session.commit()
        return comment

    return _make


# --- Test Client Fixtures ---
@pytest.fixture
def fake_supabase():
    """Stand-in for the Supabase client; tests set auth return values on it"""
    return MagicMock()


@pytest.fixture
def client_for(db_session, fake_supabase):
    """
    Returns a factory building a TestClient authenticated as the given
    profile, backed by the per-test SQLite database.
    """

    def override_get_db():
        yield db_session

    def _client(profile: Profile = None) -> TestClient:
        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_supabase] = lambda: fake_supabase
        if profile is not None:
            app.dependency_overrides[get_current_user] = lambda: profile
        else:
            app.dependency_overrides.pop(get_current_user, None)
        return TestClient(app)

    yield _client

    app.dependency_overrides.clear()
