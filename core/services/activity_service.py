# =============================================================================
# core/services/activity_service.py - Editor Activity Business Logic
# =============================================================================
# Records editing intervals and totals them per local calendar day.
#
# - record_activity: "start" opens a new interval, "end" closes the most
#   recently started open interval for today (no-op if there is none)
# - total_seconds_today: sums today's intervals, counting open ones up to now
#
# "Today" is always the calendar day in a fixed UTC offset (IST by default),
# never the server's local day.
# =============================================================================

import logging
import math
from datetime import datetime, timezone
from typing import Callable

from app.exceptions import ActivityStoreError, InvalidActivityActionError
from core.models.editor_session import ActivityAction, ActivityStatus, EditorSession
from lib.editor_session_store import EditorSessionStore
from lib.supabase_client import SupabaseClientError
from lib.timezone import IST, local_date_string, utc_now

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class ActivityService:
    """
    Service for editor activity tracking.

    Stateless apart from its collaborators: the store, a clock returning
    aware datetimes, and the timezone that defines "today".

    Example:
        service = ActivityService(store)
        service.record_activity(user_id, "start")
        ...
        service.record_activity(user_id, "end")
        seconds = service.total_seconds_today(user_id)
    """

    def __init__(
        self,
        store: EditorSessionStore,
        clock: Clock = utc_now,
        tz: timezone = IST,
        atomic_close: bool = True,
    ):
        self.store = store
        self.clock = clock
        self.tz = tz
        self.atomic_close = atomic_close

    def today(self, now: datetime | None = None) -> str:
        """Local calendar day (YYYY-MM-DD) for `now` (defaults to the clock)."""
        return local_date_string(now if now is not None else self.clock(), self.tz)

    # -------------------------------------------------------------------------
    # Recorder
    # -------------------------------------------------------------------------

    def record_activity(self, user_id: str, action: str | None) -> ActivityStatus:
        """
        Open or close an editing interval.

        Args:
            user_id: Authenticated caller identity
            action: "start" or "end"

        Returns:
            ActivityStatus.STARTED or ActivityStatus.ENDED

        Raises:
            InvalidActivityActionError: If action is anything else (no write)
            ActivityStoreError: If the store fails
        """
        try:
            parsed = ActivityAction(action)
        except ValueError:
            logger.info(f"Rejected activity action {action!r} for user {user_id}")
            raise InvalidActivityActionError() from None

        now = self.clock()
        date = self.today(now)

        try:
            if parsed is ActivityAction.START:
                self.store.create(user_id, start_time=now, date=date)
                return ActivityStatus.STARTED

            closed = self._close_latest(user_id, date, now)
            if closed is None:
                logger.debug(f"No open editor session to close for user {user_id} on {date}")
            return ActivityStatus.ENDED

        except SupabaseClientError as e:
            logger.error(f"Failed to record activity '{parsed.value}' for user {user_id}: {e}")
            raise ActivityStoreError("Failed to record activity") from e

    def _close_latest(self, user_id: str, date: str, now: datetime) -> EditorSession | None:
        if self.atomic_close:
            return self.store.close_latest_open(user_id, date, now)

        latest = self.store.find_latest_open(user_id, date)
        if latest is None:
            return None
        return self.store.close(latest.id, now)

    # -------------------------------------------------------------------------
    # Aggregator
    # -------------------------------------------------------------------------

    def total_seconds_today(self, user_id: str) -> int:
        """
        Total editing time for the caller's current local day.

        Closed intervals contribute end - start; open intervals contribute
        time up to a fresh clock reading taken after the fetch.

        Returns:
            Whole seconds, rounded half-up

        Raises:
            ActivityStoreError: If the store fails
        """
        date = self.today()

        try:
            sessions = self.store.find_for_day(user_id, date)
        except SupabaseClientError as e:
            logger.error(f"Failed to load editor sessions for user {user_id} on {date}: {e}")
            raise ActivityStoreError("Failed to get time") from e

        now = self.clock()
        total = sum(session.elapsed_seconds(now) for session in sessions)
        return int(math.floor(total + 0.5))
