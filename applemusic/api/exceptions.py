"""
Exception class for applemusic-api.

A single exception type is surfaced to callers for every failure mode:
pre-flight validation (unknown relationship, invalid resource, malformed
album response) and failures reported by the HTTP layer (transport errors,
non-2xx responses, undecodable bodies). The message is the only way to tell
these apart; ``details`` carries extra context for logging.
"""

from typing import Any, Dict, Optional


class AppleMusicAPIException(Exception):
    """
    Raised for every error produced by the Apple Music API client.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context. Common keys:
                 - 'status_code': HTTP status of a failed response
                 - 'url': URL of the failed request
                 - 'original_error': The underlying exception when wrapping another error

    Example:
        try:
            api.get_catalog_album('us', '1440857781')
        except AppleMusicAPIException as e:
            logger.error(f"Request failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message

    @property
    def status_code(self) -> Optional[int]:
        """HTTP status of the failed response, if the error came from one"""
        return self.details.get('status_code')
