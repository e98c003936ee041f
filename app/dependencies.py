# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends(), and replaced in
# tests through app.dependency_overrides.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from app.config import settings
from core.services.activity_service import ActivityService, Clock
from lib.editor_session_store import EditorSessionStore
from lib.supabase_client import DatabaseConnection
from lib.timezone import utc_now


def get_database(request: Request) -> DatabaseConnection:
    """
    Get the database handle created during application startup.
    """
    return request.app.state.database


def get_editor_session_store(
    database: Annotated[DatabaseConnection, Depends(get_database)],
) -> EditorSessionStore:
    """Store for editor activity intervals, bound to the app's database."""
    return EditorSessionStore(database, table=settings.EDITOR_SESSIONS_TABLE)


def get_clock() -> Clock:
    """Source of "now" for activity tracking."""
    return utc_now


def get_activity_service(
    store: Annotated[EditorSessionStore, Depends(get_editor_session_store)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> ActivityService:
    return ActivityService(
        store,
        clock=clock,
        tz=settings.activity_timezone,
        atomic_close=settings.EDITOR_ATOMIC_CLOSE,
    )


# Type aliases for dependency injection
DatabaseDep = Annotated[DatabaseConnection, Depends(get_database)]
ActivityServiceDep = Annotated[ActivityService, Depends(get_activity_service)]
