# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - In-memory editor session store and a controllable clock
# - A TestClient with auth, store and clock dependencies overridden
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from datetime import datetime, timedelta
from uuid import UUID

import pytest
from fastapi.testclient import TestClient

from app.auth import get_current_user, AuthUser
from app.dependencies import get_clock, get_editor_session_store
from app.main import app
from core.models.editor_session import EditorSession
from lib.supabase_client import SupabaseClientError
from lib.timezone import IST

TEST_USER_ID = UUID("550e8400-e29b-41d4-a716-446655440000")
OTHER_USER_ID = UUID("660e8400-e29b-41d4-a716-446655440001")


def ist(*args) -> datetime:
    """Aware datetime in Indian Standard Time."""
    return datetime(*args, tzinfo=IST)


# =============================================================================
# Fakes
# =============================================================================

class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now

    def set(self, now: datetime) -> None:
        self.now = now


class FakeEditorSessionStore:
    """
    In-memory stand-in for EditorSessionStore.

    Set `fail = True` to make every operation raise SupabaseClientError.
    """

    def __init__(self):
        self.sessions: list[EditorSession] = []
        self.fail = False
        self.calls: list[str] = []
        self._next_id = 1

    def _check(self, name: str) -> None:
        self.calls.append(name)
        if self.fail:
            raise SupabaseClientError(
                message="connection refused by db.internal:5432",
                code="FAKE_FAILURE",
            )

    def create(self, user_id, start_time, date):
        self._check("create")
        session = EditorSession(
            id=self._next_id, user_id=user_id, date=date, start_time=start_time
        )
        self._next_id += 1
        self.sessions.append(session)
        return session

    def close(self, session_id, end_time):
        self._check("close")
        for session in self.sessions:
            if session.id == session_id and session.end_time is None:
                session.end_time = end_time
                return session
        return None

    def close_latest_open(self, user_id, date, end_time):
        self._check("close_latest_open")
        latest = self._latest_open(user_id, date)
        if latest is None:
            return None
        latest.end_time = end_time
        return latest

    def find_latest_open(self, user_id, date):
        self._check("find_latest_open")
        return self._latest_open(user_id, date)

    def find_for_day(self, user_id, date):
        self._check("find_for_day")
        return [s for s in self.sessions if s.user_id == user_id and s.date == date]

    def _latest_open(self, user_id, date):
        candidates = [
            s for s in self.sessions
            if s.user_id == user_id and s.date == date and s.end_time is None
        ]
        if not candidates:
            return None
        return max(candidates, key=lambda s: s.start_time)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def store():
    """Empty in-memory editor session store."""
    return FakeEditorSessionStore()


@pytest.fixture
def clock():
    """Clock frozen at 10:00:00 IST on 2024-03-15."""
    return FakeClock(ist(2024, 3, 15, 10, 0, 0))


@pytest.fixture
def auth_user():
    return AuthUser(id=TEST_USER_ID, email="atiksha@example.com", username="atiksha")


@pytest.fixture
def client(store, clock, auth_user):
    """TestClient with the store, clock and caller identity overridden."""
    app.dependency_overrides[get_editor_session_store] = lambda: store
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_current_user] = lambda: auth_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(store, clock):
    """TestClient with real authentication but a fake store."""
    app.dependency_overrides[get_editor_session_store] = lambda: store
    app.dependency_overrides[get_clock] = lambda: clock
    yield TestClient(app)
    app.dependency_overrides.clear()
