# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - editor.py: Editor activity tracking endpoints
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import editor

__all__ = [
    "health",
    "editor",
]
