"""
HTTP layer for the Apple Music API

APIClient is the only component that talks to the network. It is responsible for:
- Prefixing request paths with the API base URL
- Attaching credentials: ``Authorization: Bearer <developer token>`` and,
  when set, ``Music-User-Token: <music user token>``
- Performing the call through a ``requests.Session``
- Decoding JSON responses into plain dicts/lists
- Turning transport failures, non-2xx responses and undecodable bodies into
  AppleMusicAPIException

Credentials are plain mutable attributes without synchronization. Code that
issues requests concurrently with different credentials should use one
APIClient per credential pair.
"""

from typing import Any, Dict, Optional, Union

import requests

from .exceptions import AppleMusicAPIException
from ..config.settings import DEFAULT_API_URL
from ..utils.logger import get_logger

DEFAULT_TIMEOUT = 30
DEFAULT_USER_AGENT = "applemusic-api/1.0"


class APIClient:
    """
    Authenticated HTTP client for the Apple Music API

    Attributes:
        developer_token: Service credential sent with every request
        music_user_token: Per-user credential required by "me/..." endpoints
        base_url: API base URL every request path is appended to
        timeout: Default request timeout in seconds
    """

    def __init__(
        self,
        developer_token: str = "",
        music_user_token: str = "",
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None
    ):
        self.developer_token = developer_token
        self.music_user_token = music_user_token
        self.base_url = base_url.rstrip('/') + '/'
        self.timeout = timeout
        self.user_agent = user_agent
        self.session = session or requests.Session()
        self.logger = get_logger(__name__)

    @classmethod
    def from_settings(cls, settings) -> 'APIClient':
        """
        Create a client from application settings

        Args:
            settings: Settings instance (see applemusic.config.settings)

        Returns:
            Configured APIClient
        """
        return cls(
            developer_token=settings.apple_music.developer_token,
            music_user_token=settings.apple_music.music_user_token,
            base_url=settings.network.base_url,
            timeout=settings.network.request_timeout,
            user_agent=settings.network.user_agent,
        )

    def set_developer_token(self, developer_token: str) -> None:
        self.developer_token = developer_token

    def get_developer_token(self) -> str:
        return self.developer_token

    def set_music_user_token(self, music_user_token: str) -> None:
        self.music_user_token = music_user_token

    def get_music_user_token(self) -> str:
        return self.music_user_token

    def _build_headers(self, headers: Optional[Dict[str, str]]) -> Dict[str, str]:
        request_headers = {
            'Accept': 'application/json',
            'User-Agent': self.user_agent,
        }
        if self.developer_token:
            request_headers['Authorization'] = f"Bearer {self.developer_token}"
        if self.music_user_token:
            request_headers['Music-User-Token'] = self.music_user_token

        # Caller headers win over defaults
        request_headers.update(headers or {})
        return request_headers

    def api_request(
        self,
        method: str,
        path: str,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[Union[str, bytes]] = None,
        timeout: Optional[float] = None
    ) -> Any:
        """
        Perform an API request and decode the JSON response

        Args:
            method: HTTP verb (GET, POST, ...)
            path: Request path and query string relative to the base URL
            headers: Extra request headers
            body: Raw request body
            timeout: Request timeout in seconds, defaults to the client timeout

        Returns:
            Decoded JSON document (dict or list), {} for an empty response body

        Raises:
            AppleMusicAPIException: On transport failure, non-2xx status or
                                    undecodable response
        """
        url = f"{self.base_url}{path.lstrip('/')}"
        self.logger.debug(f"{method} {url}")

        try:
            response = self.session.request(
                method,
                url,
                headers=self._build_headers(headers),
                data=body,
                timeout=timeout if timeout is not None else self.timeout
            )
        except requests.RequestException as e:
            self.logger.warning(f"{method} {url} failed: {e}")
            raise AppleMusicAPIException(
                f"API request failed: {e}",
                details={'url': url, 'original_error': str(e)}
            ) from e

        if not 200 <= response.status_code < 300:
            message = self._error_message(response)
            self.logger.warning(f"{method} {url} returned {response.status_code}: {message}")
            raise AppleMusicAPIException(
                f"API request failed with status {response.status_code}: {message}",
                details={'status_code': response.status_code, 'url': url}
            )

        if not response.content or not response.content.strip():
            return {}

        try:
            return response.json()
        except ValueError as e:
            raise AppleMusicAPIException(
                f"Failed to decode API response from {url}: {e}",
                details={'status_code': response.status_code, 'url': url, 'original_error': str(e)}
            ) from e

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """
        Extract a readable message from an error response

        Apple Music error documents look like
        ``{"errors": [{"status": "404", "title": "...", "detail": "..."}]}``.
        Falls back to the HTTP reason phrase when the body has no such entry.
        """
        try:
            errors = response.json().get('errors') or []
        except (ValueError, AttributeError):
            errors = []

        if errors and isinstance(errors[0], dict):
            message = errors[0].get('detail') or errors[0].get('title')
            if message:
                return message

        return response.reason or 'Unknown error'
