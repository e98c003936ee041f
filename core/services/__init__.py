# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .activity_service import ActivityService

__all__ = [
    "ActivityService",
]
