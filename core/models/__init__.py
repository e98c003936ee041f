# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - editor_session.py: activity intervals and the editor API contract
#
# These models define the "contract" between API and clients.
# =============================================================================

from .editor_session import (
    ActivityAction,
    ActivityRequest,
    ActivityResponse,
    ActivityStatus,
    EditorSession,
    TodayResponse,
)

__all__ = [
    "ActivityAction",
    "ActivityRequest",
    "ActivityResponse",
    "ActivityStatus",
    "EditorSession",
    "TodayResponse",
]
