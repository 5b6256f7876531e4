"""
applemusic-api: typed client for the Apple Music REST API

Covers storefronts, catalog resources (albums, songs, artists, playlists,
curators, charts, search) and the signed-in user's library (library
collections, recently played, adding resources, creating and filling
playlists).

## Core Architecture

**API (`applemusic/api/`)**
- AppleMusicAPI turns typed method calls into paths, query strings and JSON bodies
- APIClient performs the HTTP call with the developer and music user tokens
- Library resource models and write request payloads

**Configuration (`applemusic/config/`)**
- YAML and environment variable settings for tokens, storefront and network

**Utilities (`applemusic/utils/`)**
- Colored console logging with optional rotating log files
- Input validation for the command-line interface

**Command line (`applemusic/main.py`)**
- `applemusic` command exposing the API operations

## Authentication

Token acquisition is outside the scope of this package. Provide an existing
developer token (and a music user token for "me/..." endpoints) through
``APPLE_MUSIC_DEVELOPER_TOKEN`` / ``APPLE_MUSIC_USER_TOKEN`` or directly:

    from applemusic import AppleMusicAPI, APIClient

    api = AppleMusicAPI(APIClient(developer_token="...", music_user_token="..."))
    playlists = api.get_all_library_playlists(limit=50)
"""

__version__ = "1.0.0"
__title__ = "applemusic-api"
__description__ = "Typed client for the Apple Music REST API"

from .api import (
    AppleMusicAPI,
    APIClient,
    AppleMusicAPIException,
    LibraryPlaylistCreationRequest,
    LibraryResource,
    LibraryResourceAddRequest,
    ResourceType,
)

__all__ = [
    'AppleMusicAPI',
    'APIClient',
    'AppleMusicAPIException',
    'LibraryPlaylistCreationRequest',
    'LibraryResource',
    'LibraryResourceAddRequest',
    'ResourceType',
    '__version__',
]
