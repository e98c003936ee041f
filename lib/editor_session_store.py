# =============================================================================
# lib/editor_session_store.py - Editor Session Persistence
# =============================================================================
# Supabase-backed store for day-scoped activity intervals.
#
# Operations:
# - create: append a new open interval
# - find_latest_open: newest open interval for a user/day (find-one, sorted)
# - find_for_day: every interval for a user/day (find-many)
# - close: set end_time on one interval, only if it is still open (update)
# - close_latest_open: atomic "close the newest open interval" via RPC
#
# Every write that sets end_time is guarded by `end_time IS NULL`, so an
# interval's end is never overwritten once recorded.
#
# Usage:
#   store = EditorSessionStore(connection)
#   record = store.create(user_id, start_time=now, date="2024-03-15")
# =============================================================================

from __future__ import annotations

import logging
from datetime import datetime

from pydantic import ValidationError

from core.models.editor_session import EditorSession
from lib.supabase_client import DatabaseConnection, SupabaseClientError

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "editor_sessions"
CLOSE_LATEST_FUNCTION = "close_latest_editor_session"


def _to_session(row: dict) -> EditorSession:
    """Map a database row, reporting malformed rows as store errors."""
    try:
        return EditorSession.from_db_row(row)
    except (KeyError, ValidationError) as e:
        raise SupabaseClientError(
            message=f"Malformed editor session row: {e}",
            code="INVALID_SESSION_ROW",
            suggestion="Check the editor_sessions schema against sql/migrations",
            details={"id": row.get("id")},
        ) from e


class EditorSessionStore:
    """
    Persistence for EditorSession records.

    The database handle is injected; the store calls `ensure_connected()`
    lazily so constructing a store never touches the network.

    Example:
        store = EditorSessionStore(connection, table="editor_sessions")
        store.create("user-1", start_time=now, date="2024-03-15")
        open_record = store.find_latest_open("user-1", "2024-03-15")
    """

    def __init__(self, connection: DatabaseConnection, table: str = DEFAULT_TABLE):
        self._connection = connection
        self._table = table

    def _query(self):
        return self._connection.ensure_connected().table(self._table)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create(self, user_id: str, start_time: datetime, date: str) -> EditorSession:
        """
        Insert a new open interval.

        Args:
            user_id: Owner of the interval
            start_time: When the interval opened
            date: Local calendar day derived from start_time

        Returns:
            The stored EditorSession (with its generated id)

        Raises:
            SupabaseClientError: If the insert fails or returns nothing
        """
        data = {
            "user_id": user_id,
            "date": date,
            "start_time": start_time.isoformat(),
        }

        try:
            response = self._query().insert(data).execute()
        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create editor session: {e}",
                code="CREATE_SESSION_FAILED",
                details={"user_id": user_id, "date": date},
            ) from e

        if not response.data:
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA",
                details={"user_id": user_id, "date": date},
            )

        record = _to_session(response.data[0])
        logger.debug(f"Opened editor session {record.id} for user {user_id} on {date}")
        return record

    def close(self, session_id: int | str, end_time: datetime) -> EditorSession | None:
        """
        Set end_time on a single interval if it is still open.

        Returns:
            The updated EditorSession, or None if it was already closed
            (or no longer exists)

        Raises:
            SupabaseClientError: If the update fails
        """
        try:
            response = (
                self._query()
                .update({"end_time": end_time.isoformat()})
                .eq("id", session_id)
                .is_("end_time", "null")
                .execute()
            )
        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to close editor session: {e}",
                code="CLOSE_SESSION_FAILED",
                details={"session_id": session_id},
            ) from e

        if not response.data:
            return None
        return _to_session(response.data[0])

    def close_latest_open(
        self, user_id: str, date: str, end_time: datetime
    ) -> EditorSession | None:
        """
        Atomically close the most recently started open interval.

        Runs as a single conditional UPDATE inside the database (see
        sql/migrations/001_editor_sessions.sql), so two concurrent calls
        can never close the same interval twice.

        Returns:
            The closed EditorSession, or None if nothing was open

        Raises:
            SupabaseClientError: If the RPC fails
        """
        client = self._connection.ensure_connected()
        params = {
            "p_user_id": user_id,
            "p_date": date,
            "p_end": end_time.isoformat(),
        }

        try:
            response = client.rpc(CLOSE_LATEST_FUNCTION, params).execute()
        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to close latest editor session: {e}",
                code="CLOSE_LATEST_FAILED",
                suggestion=f"Check that the {CLOSE_LATEST_FUNCTION} function has been migrated",
                details={"user_id": user_id, "date": date},
            ) from e

        rows = response.data or []
        if isinstance(rows, dict):
            rows = [rows]
        if not rows:
            return None
        return _to_session(rows[0])

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def find_latest_open(self, user_id: str, date: str) -> EditorSession | None:
        """
        Fetch the newest open interval for a user on a given day.

        Ties on start_time are broken by the database.

        Raises:
            SupabaseClientError: If the query fails
        """
        try:
            response = (
                self._query()
                .select("*")
                .eq("user_id", user_id)
                .eq("date", date)
                .is_("end_time", "null")
                .order("start_time", desc=True)
                .limit(1)
                .execute()
            )
        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch open editor session: {e}",
                code="FETCH_OPEN_SESSION_FAILED",
                details={"user_id": user_id, "date": date},
            ) from e

        rows = response.data or []
        if not rows:
            return None
        return _to_session(rows[0])

    def find_for_day(self, user_id: str, date: str) -> list[EditorSession]:
        """
        Fetch every interval (open and closed) for a user on a given day.

        Raises:
            SupabaseClientError: If the query fails
        """
        try:
            response = (
                self._query()
                .select("*")
                .eq("user_id", user_id)
                .eq("date", date)
                .execute()
            )
        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch editor sessions: {e}",
                code="FETCH_SESSIONS_FAILED",
                details={"user_id": user_id, "date": date},
            ) from e

        sessions = [_to_session(row) for row in response.data or []]
        logger.debug(f"Fetched {len(sessions)} editor sessions for user {user_id} on {date}")
        return sessions
