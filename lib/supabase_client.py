# =============================================================================
# lib/supabase_client.py - Supabase Connection Handle
# =============================================================================
# Owns the Supabase client used by the persistence layer.
#
# Instead of a process-wide "is connected" flag, the application creates one
# DatabaseConnection during startup and hands it to whatever needs the
# database. `ensure_connected()` is idempotent: the first call builds the
# client, later calls return the same one.
#
# Usage:
#   from lib.supabase_client import DatabaseConnection
#   connection = DatabaseConnection(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
#   client = connection.ensure_connected()
# =============================================================================

from __future__ import annotations

import logging
import threading
from typing import Any

from supabase import create_client, Client

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries a machine-readable code plus a suggestion for logs. These errors
    are converted to generic API responses at the service boundary, so the
    message itself never reaches a client.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class DatabaseConnection:
    """
    Explicitly owned handle to the Supabase database.

    Uses the service_role key, which bypasses Row Level Security (RLS).
    This is appropriate for server-side operations where the API itself
    scopes every query to the authenticated user.

    Example:
        connection = DatabaseConnection(url, key)
        connection.is_connected          # False
        client = connection.ensure_connected()
        connection.is_connected          # True
    """

    def __init__(self, url: str, service_key: str):
        self._url = url
        self._service_key = service_key
        self._client: Client | None = None
        self._lock = threading.Lock()

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    def ensure_connected(self) -> Client:
        """
        Create the client on first use and return it.

        Safe to call from every request: only the first successful call
        does any work.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if self._client is not None:
            return self._client

        with self._lock:
            if self._client is None:
                try:
                    self._client = create_client(self._url, self._service_key)
                    logger.info("Supabase client initialized successfully")
                except Exception as e:
                    raise SupabaseClientError(
                        message=f"Failed to create Supabase client: {e}",
                        code="CLIENT_INIT_FAILED",
                        suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file",
                    ) from e
        return self._client
