# =============================================================================
# app/routers/editor.py - Editor Activity Endpoints
# =============================================================================
# Tracks how long a user spends in the editor:
# - POST /activity: record the start or end of an editing interval
# - GET /today: total editing seconds for the caller's current local day
#
# Both endpoints require authentication. Handlers are plain functions so the
# blocking Supabase calls run in the threadpool, off the event loop.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth import get_current_user, AuthUser
from app.dependencies import ActivityServiceDep
from core.models.editor_session import ActivityRequest, ActivityResponse, TodayResponse

router = APIRouter()


@router.post("/activity", response_model=ActivityResponse)
def record_activity(
    request: ActivityRequest,
    service: ActivityServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Record the start or end of an editing interval.

    - `start` always opens a new interval.
    - `end` closes the most recently started open interval for today.
      If there is none, nothing changes and the response is still `ended`.

    Any other action returns 400.
    """
    status = service.record_activity(user.identity, request.action)
    return ActivityResponse(status=status)


@router.get("/today", response_model=TodayResponse)
def time_today(
    service: ActivityServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Get total time spent in the editor today, in whole seconds.

    Open intervals count up to the moment of the request, so repeated calls
    grow while an interval is open.
    """
    return TodayResponse(seconds=service.total_seconds_today(user.identity))
