# =============================================================================
# core/models/editor_session.py - Editor Activity Schemas
# =============================================================================
# These models define the activity-tracking contract:
# - EditorSession: one stored interval of editing activity
# - ActivityAction: the two recognised actions ("start" / "end")
# - ActivityRequest / ActivityResponse: POST /api/editor/activity
# - TodayResponse: GET /api/editor/today
#
# An interval is "open" while end_time is null. It is closed at most once.
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ActivityAction(str, Enum):
    """
    Actions a client can record.

    - start: open a new interval
    - end: close the most recently started open interval for today
    """
    START = "start"
    END = "end"


class ActivityStatus(str, Enum):
    """Status reported back for each action."""
    STARTED = "started"
    ENDED = "ended"


class EditorSession(BaseModel):
    """
    A stored interval of editing activity.

    `date` is the local calendar day of `start_time`, so an interval that
    runs past midnight still belongs to the day it started on.

    Example:
        {
            "id": 42,
            "user_id": "550e8400-e29b-41d4-a716-446655440000",
            "date": "2024-03-15",
            "start_time": "2024-03-15T04:30:00+00:00",
            "end_time": null
        }
    """

    id: int | str | None = Field(
        default=None,
        description="Primary key assigned by the database"
    )

    user_id: str = Field(
        ...,
        min_length=1,
        description="Identity of the user who owns this interval"
    )

    date: str = Field(
        ...,
        pattern=r"^\d{4}-\d{2}-\d{2}$",
        description="Local calendar day (YYYY-MM-DD) the interval started on"
    )

    start_time: datetime = Field(
        ...,
        description="When the interval was opened"
    )

    end_time: datetime | None = Field(
        default=None,
        description="When the interval was closed (null while open)"
    )

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "EditorSession":
        """Build from a database row, ignoring unknown columns."""
        return cls(
            id=row.get("id"),
            user_id=row["user_id"],
            date=row["date"],
            start_time=row["start_time"],
            end_time=row.get("end_time"),
        )

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    def elapsed_seconds(self, now: datetime) -> float:
        """
        Seconds covered by this interval.

        Closed intervals report end - start. Open intervals count up to `now`.
        """
        end = self.end_time if self.end_time is not None else now
        return (end - self.start_time).total_seconds()


# =============================================================================
# API Request/Response Models
# =============================================================================

class ActivityRequest(BaseModel):
    """
    Body for POST /api/editor/activity.

    `action` is kept as a plain string so unrecognised values reach the
    service and are reported as a 400, not a schema error.
    """
    action: str | None = Field(
        default=None,
        examples=["start", "end"],
        description="Either 'start' or 'end'"
    )


class ActivityResponse(BaseModel):
    """Response for POST /api/editor/activity."""
    status: ActivityStatus = Field(..., examples=["started"])


class TodayResponse(BaseModel):
    """Response for GET /api/editor/today."""
    seconds: int = Field(
        ...,
        examples=[3600],
        description="Total editing time today, rounded to whole seconds"
    )
