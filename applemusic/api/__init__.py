"""
Apple Music API package - request construction and HTTP access for the Apple Music REST API

The package is organized into:

1. Client (client.py):
   - AppleMusicAPI: one method per catalog, storefront and library endpoint
   - get_apple_music_api()/reset_apple_music_api(): settings-backed global instance

2. HTTP layer (http.py):
   - APIClient: base URL, credentials, requests session, JSON decoding, error mapping

3. Models (models.py):
   - ResourceType, LibraryResource: addressable resources
   - LibraryResourceAddRequest, LibraryPlaylistCreationRequest: write payloads

4. Query construction (query.py) and the AppleMusicAPIException error type

Usage Example:

    from applemusic.api import AppleMusicAPI, APIClient

    api = AppleMusicAPI(APIClient(developer_token="..."))
    results = api.search_catalog("us", "caldonia", "songs")
"""

from .client import AppleMusicAPI, get_apple_music_api, reset_apple_music_api
from .exceptions import AppleMusicAPIException
from .http import APIClient
from .models import (
    ResourceType,
    LibraryResource,
    LibraryResourceAddRequest,
    LibraryPlaylistCreationRequest,
)
from .query import QueryString

__all__ = [
    # === CLIENT COMPONENTS ===
    'AppleMusicAPI',
    'APIClient',
    'get_apple_music_api',
    'reset_apple_music_api',

    # === MODELS ===
    'ResourceType',
    'LibraryResource',
    'LibraryResourceAddRequest',
    'LibraryPlaylistCreationRequest',

    # === SUPPORT ===
    'QueryString',
    'AppleMusicAPIException',
]
