# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Owned Supabase connection handle
# - editor_session_store.py: Persistence for editor activity intervals
# - timezone.py: Fixed-offset calendar-day helpers
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import DatabaseConnection, SupabaseClientError
from lib.timezone import IST, local_date_string, utc_now

__all__ = [
    # Supabase
    "DatabaseConnection",
    "SupabaseClientError",
    # Dates
    "IST",
    "local_date_string",
    "utc_now",
]
