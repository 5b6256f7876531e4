"""
Apple Music API client for catalog, storefront and library operations

This module maps every supported Apple Music endpoint to one method. Each method
follows the same steps:

1. Normalize inputs (lists are comma-joined, enums and relationships checked)
2. Build the request path from static segments and caller identifiers.
   Identifiers are inserted as given and are expected to be URL-safe.
3. Build the query string with QueryString. Read endpoints always send
   ``include=`` even when nothing is included, and paginated endpoints send
   ``offset=<n>&limit=<n>`` with the limit clamped to the endpoint maximum
4. Build a JSON body for write endpoints
5. Delegate to APIClient.api_request() and return the decoded response unchanged

Validation errors are raised before any request is sent, so rejected batches
never reach the network.

Usage:

    api = AppleMusicAPI(APIClient(developer_token="..."))
    album = api.get_catalog_album("us", "1440857781", include="tracks")

    api.set_music_user_token("...")
    api.add_resource_to_library(
        LibraryResourceAddRequest().add_song(LibraryResource("songs", "203709340"))
    )
"""

import json
from typing import Any, Dict, List, Optional, Sequence, Union

from .exceptions import AppleMusicAPIException
from .http import APIClient
from .models import (
    LibraryPlaylistCreationRequest,
    LibraryResource,
    LibraryResourceAddRequest,
)
from .query import QueryString
from ..config.settings import get_settings
from ..utils.logger import get_logger

StrOrList = Union[str, Sequence[str]]

JSON_HEADERS = {'Content-Type': 'application/json'}

# Raw body sent with add-to-library requests; the ids travel in the query string
LIBRARY_ADD_BODY = ' '

# Only relationship the curator endpoint accepts
CURATOR_RELATIONSHIPS = ('playlists',)

# Page size ceilings per endpoint family
DEFAULT_LIMIT_CEILING = 100
RECENTLY_PLAYED_LIMIT_CEILING = 10

# Fixed order in which the add request's lists are aggregated
_ADD_REQUEST_GROUPS = ('songs', 'albums', 'music_videos', 'playlists')


class AppleMusicAPI:
    """
    Typed client for the Apple Music REST API

    Holds no state besides the APIClient, whose two credentials can be changed
    between calls through the token setters below.
    """

    def __init__(self, client: APIClient):
        self.client = client
        self.logger = get_logger(__name__)

    def get_api_client(self) -> APIClient:
        return self.client

    def set_developer_token(self, developer_token: str) -> None:
        self.client.set_developer_token(developer_token)

    def get_developer_token(self) -> str:
        return self.client.get_developer_token()

    def set_music_user_token(self, music_user_token: str) -> None:
        self.client.set_music_user_token(music_user_token)

    def get_music_user_token(self) -> str:
        return self.client.get_music_user_token()

    def _get(self, path: str, query: QueryString, timeout: Optional[float]) -> Any:
        return self.client.api_request('GET', query.build(path), timeout=timeout)

    def _post_json(self, path: str, payload: Dict[str, Any], timeout: Optional[float]) -> Any:
        return self.client.api_request(
            'POST',
            path,
            headers=dict(JSON_HEADERS),
            body=json.dumps(payload),
            timeout=timeout
        )

    # Storefronts

    def get_storefront(self, storefront_id: str, include: StrOrList = '',
                       timeout: Optional[float] = None) -> Any:
        """
        Fetch a single storefront by its identifier
        https://developer.apple.com/documentation/applemusicapi/get_a_storefront

        Args:
            storefront_id: ISO 3166 alpha-2 country code of the storefront
            include: Relationships to include in the response
            timeout: Request timeout forwarded to the HTTP client
        """
        return self._get(f"storefronts/{storefront_id}", QueryString().add_include(include), timeout)

    def get_all_storefronts(self, include: StrOrList = '', timeout: Optional[float] = None) -> Any:
        """
        Fetch all storefronts in alphabetical order
        https://developer.apple.com/documentation/applemusicapi/get_all_storefronts
        """
        return self._get("storefronts", QueryString().add_include(include), timeout)

    def get_users_storefront(self, include: StrOrList = '', timeout: Optional[float] = None) -> Any:
        """
        Fetch the signed-in user's storefront (requires a music user token)
        https://developer.apple.com/documentation/applemusicapi/get_a_user_s_storefront
        """
        return self._get("me/storefront", QueryString().add_include(include), timeout)

    # Catalog

    def get_catalog_charts(
        self,
        storefront: str,
        types: StrOrList = (),
        genre: str = '',
        limit: int = 20,
        offset: int = 0,
        timeout: Optional[float] = None
    ) -> Any:
        """
        Fetch one or more charts from the catalog
        https://developer.apple.com/documentation/applemusicapi/get_catalog_charts

        Args:
            storefront: ISO 3166 alpha-2 country code
            types: Chart types: albums, songs, music-videos, playlists
            genre: Genre identifier, omitted from the query when empty
            limit: Resources per chart. Sent as given, the API enforces its own maximum
            offset: Next page of resources to fetch
        """
        query = QueryString()
        query.add('types', types)
        query.add_page(limit, offset)
        query.add_if('genre', genre)
        return self._get(f"catalog/{storefront}/charts", query, timeout)

    def _get_catalog_resource(self, storefront: str, kind: str, resource_id: str,
                              include: StrOrList, timeout: Optional[float]) -> Any:
        return self._get(
            f"catalog/{storefront}/{kind}/{resource_id}",
            QueryString().add_include(include),
            timeout
        )

    def get_catalog_playlist(self, storefront: str, playlist_id: str, include: StrOrList = '',
                             timeout: Optional[float] = None) -> Any:
        """
        Fetch a catalog playlist by its identifier
        https://developer.apple.com/documentation/applemusicapi/get_a_catalog_playlist
        """
        return self._get_catalog_resource(storefront, 'playlists', playlist_id, include, timeout)

    def get_catalog_album(self, storefront: str, album_id: str, include: StrOrList = '',
                          timeout: Optional[float] = None) -> Any:
        """
        Fetch a catalog album by its identifier
        https://developer.apple.com/documentation/applemusicapi/get_a_catalog_album
        """
        return self._get_catalog_resource(storefront, 'albums', album_id, include, timeout)

    def get_catalog_song(self, storefront: str, song_id: str, include: StrOrList = '',
                         timeout: Optional[float] = None) -> Any:
        """
        Fetch a catalog song by its identifier
        https://developer.apple.com/documentation/applemusicapi/get_a_catalog_song
        """
        return self._get_catalog_resource(storefront, 'songs', song_id, include, timeout)

    def get_catalog_artist(self, storefront: str, artist_id: str, include: StrOrList = '',
                           timeout: Optional[float] = None) -> Any:
        """
        Fetch a catalog artist by its identifier
        https://developer.apple.com/documentation/applemusicapi/get_a_catalog_artist
        """
        return self._get_catalog_resource(storefront, 'artists', artist_id, include, timeout)

    def get_catalog_curator(self, storefront: str, curator_id: str, include: StrOrList = '',
                            timeout: Optional[float] = None) -> Any:
        """
        Fetch a catalog curator by its identifier
        https://developer.apple.com/documentation/applemusicapi/get_a_catalog_curator
        """
        return self._get_catalog_resource(storefront, 'curators', curator_id, include, timeout)

    def get_multiple_catalog_albums_by_upc(self, storefront: str, upc: str, include: StrOrList = '',
                                           timeout: Optional[float] = None) -> Any:
        """
        Fetch catalog albums by Universal Product Code
        https://developer.apple.com/documentation/applemusicapi/get_multiple_catalog_albums_by_upc
        """
        query = QueryString().add('filter[upc]', upc).add_include(include)
        return self._get(f"catalog/{storefront}/albums", query, timeout)

    def get_multiple_catalog_songs_by_isrc(self, storefront: str, isrc: str, include: StrOrList = '',
                                           timeout: Optional[float] = None) -> Any:
        """
        Fetch catalog songs by International Standard Recording Code
        https://developer.apple.com/documentation/applemusicapi/get_multiple_catalog_songs_by_isrc
        """
        query = QueryString().add('filter[isrc]', isrc).add_include(include)
        return self._get(f"catalog/{storefront}/songs", query, timeout)

    def get_catalog_curator_relationship(
        self,
        storefront: str,
        curator_id: str,
        relationship: str = 'playlists',
        limit: int = 10,
        offset: int = 0,
        include: StrOrList = '',
        timeout: Optional[float] = None
    ) -> Any:
        """
        Fetch a curator's relationship directly by name
        https://developer.apple.com/documentation/applemusicapi/get_a_catalog_curator_s_relationship_directly_by_name

        Args:
            storefront: ISO 3166 alpha-2 country code
            curator_id: Curator identifier
            relationship: Relationship name, only 'playlists' is accepted
            limit: Page size, at most 100
            offset: Next page of resources to fetch
            include: Relationships to include in the response

        Raises:
            AppleMusicAPIException: If the relationship is not 'playlists'
        """
        if relationship not in CURATOR_RELATIONSHIPS:
            raise AppleMusicAPIException(
                "Invalid relationship given, only 'playlists' is allowed at the moment.",
                details={'relationship': relationship}
            )

        query = QueryString().add_page(limit, offset, DEFAULT_LIMIT_CEILING).add_include(include)
        return self._get(f"catalog/{storefront}/curators/{curator_id}/{relationship}", query, timeout)

    def search_catalog(self, storefront: str, term: str, types: StrOrList,
                       timeout: Optional[float] = None) -> Any:
        """
        Search the catalog
        https://developer.apple.com/documentation/applemusicapi/search_for_catalog_resources

        Args:
            storefront: ISO 3166 alpha-2 country code
            term: Search text with '+' between words instead of spaces
                  (spaces and quotes are percent-encoded, '+' is sent as is)
            types: Resource types to search for, e.g. "artists,albums,songs"
        """
        query = QueryString().add('term', term).add('types', types)
        return self._get(f"catalog/{storefront}/search", query, timeout)

    def get_song_ids_for_album(self, storefront: str, album_id: str,
                               timeout: Optional[float] = None) -> List[str]:
        """
        Return the song identifiers of a catalog album in track order

        Tracks without an identifier, or with a null one, are skipped.

        Raises:
            AppleMusicAPIException: If the response has no
                                    data[0].relationships.tracks.data list
        """
        album = self.get_catalog_album(storefront, album_id, timeout=timeout)

        try:
            tracks = album['data'][0]['relationships']['tracks']['data']
        except (KeyError, IndexError, TypeError):
            tracks = None

        if not isinstance(tracks, list):
            raise AppleMusicAPIException(
                f'Invalid response for album with id "{album_id}".',
                details={'album_id': album_id, 'storefront': storefront}
            )

        return [
            track['id'] for track in tracks
            if isinstance(track, dict) and track.get('id') is not None
        ]

    # Library

    def get_recently_played_resources(self, limit: int = 5, offset: int = 0, include: StrOrList = '',
                                      timeout: Optional[float] = None) -> Any:
        """
        Fetch the user's recently played resources, at most 10 per page
        https://developer.apple.com/documentation/applemusicapi/get_recently_played_resources
        """
        query = QueryString().add_page(limit, offset, RECENTLY_PLAYED_LIMIT_CEILING).add_include(include)
        return self._get("me/recent/played", query, timeout)

    def _get_library_collection(self, kind: str, limit: int, offset: int, include: StrOrList,
                                timeout: Optional[float]) -> Any:
        query = QueryString().add_page(limit, offset, DEFAULT_LIMIT_CEILING).add_include(include)
        return self._get(f"me/library/{kind}", query, timeout)

    def get_all_library_playlists(self, limit: int = 25, offset: int = 0, include: StrOrList = '',
                                  timeout: Optional[float] = None) -> Any:
        """
        Fetch all library playlists in alphabetical order
        https://developer.apple.com/documentation/applemusicapi/get_all_library_playlists
        """
        return self._get_library_collection('playlists', limit, offset, include, timeout)

    def get_all_library_albums(self, limit: int = 25, offset: int = 0, include: StrOrList = '',
                               timeout: Optional[float] = None) -> Any:
        """
        Fetch all library albums in alphabetical order
        https://developer.apple.com/documentation/applemusicapi/get_all_library_albums
        """
        return self._get_library_collection('albums', limit, offset, include, timeout)

    def get_all_library_artists(self, limit: int = 25, offset: int = 0, include: StrOrList = '',
                                timeout: Optional[float] = None) -> Any:
        """
        Fetch all library artists in alphabetical order
        https://developer.apple.com/documentation/applemusicapi/get_all_library_artists
        """
        return self._get_library_collection('artists', limit, offset, include, timeout)

    def get_all_library_music_videos(self, limit: int = 25, offset: int = 0, include: StrOrList = '',
                                     timeout: Optional[float] = None) -> Any:
        """
        Fetch all library music videos in alphabetical order
        https://developer.apple.com/documentation/applemusicapi/get_all_library_music_videos
        """
        return self._get_library_collection('music-videos', limit, offset, include, timeout)

    def add_resource_to_library(self, add_request: LibraryResourceAddRequest,
                                timeout: Optional[float] = None) -> Any:
        """
        Add catalog resources to the user's library in one request
        https://developer.apple.com/documentation/applemusicapi/add_a_resource_to_a_library

        Resources are grouped by type into one ``ids[<type>]`` parameter per
        type, in the order types are first seen while walking songs, albums,
        music videos and playlists. Ids of a type are comma-joined in insertion
        order, e.g. ``me/library?ids[songs]=1&ids[albums]=2,3``. An empty request is
        sent as ``me/library`` with no ids.

        Raises:
            AppleMusicAPIException: If the request contains an element that is
                                    not a LibraryResource
        """
        ids_by_type = self._group_ids_by_type(add_request)

        query = QueryString()
        for resource_type, ids in ids_by_type.items():
            query.add(f"ids[{resource_type}]", ids)

        self.logger.debug(f"Adding {', '.join(ids_by_type)} resources to the library")
        return self.client.api_request('POST', query.build("me/library"), {}, LIBRARY_ADD_BODY, timeout=timeout)

    @staticmethod
    def _group_ids_by_type(add_request: LibraryResourceAddRequest) -> Dict[str, str]:
        ids_by_type: Dict[str, str] = {}

        for group in _ADD_REQUEST_GROUPS:
            for resource in getattr(add_request, group):
                if not isinstance(resource, LibraryResource):
                    raise AppleMusicAPIException(
                        f"Invalid resource in {group}",
                        details={'resource': repr(resource)}
                    )

                key = resource.type.value
                if key in ids_by_type:
                    ids_by_type[key] += f",{resource.id}"
                else:
                    ids_by_type[key] = resource.id

        return ids_by_type

    def create_library_playlist(self, playlist: LibraryPlaylistCreationRequest,
                                timeout: Optional[float] = None) -> Any:
        """
        Create a new library playlist
        https://developer.apple.com/documentation/applemusicapi/create_a_new_library_playlist

        The body carries the playlist attributes and, when at least one track
        was added, ``relationships.tracks.data`` with the tracks in order.

        Raises:
            AppleMusicAPIException: If a track is not a LibraryResource
        """
        request_body: Dict[str, Any] = {'attributes': playlist.get_attributes()}

        if playlist.tracks:
            request_body['relationships'] = {
                'tracks': {'data': self._resource_data(playlist.tracks)}
            }

        return self._post_json("me/library/playlists", request_body, timeout)

    def add_tracks_to_library_playlist(self, playlist_id: str, tracks: Sequence[LibraryResource],
                                       timeout: Optional[float] = None) -> Any:
        """
        Add tracks to a library playlist
        https://developer.apple.com/documentation/applemusicapi/add_tracks_to_a_library_playlist

        Raises:
            AppleMusicAPIException: If any track is not a LibraryResource.
                                    Nothing is sent in that case.
        """
        request_body = {'data': self._resource_data(tracks)}
        return self._post_json(f"me/library/playlists/{playlist_id}/tracks", request_body, timeout)

    @staticmethod
    def _resource_data(tracks: Sequence[LibraryResource]) -> List[Dict[str, str]]:
        data = []
        for track in tracks:
            if not isinstance(track, LibraryResource):
                raise AppleMusicAPIException('Invalid track', details={'track': repr(track)})
            data.append(track.to_dict())
        return data


# Global API instance for the command-line interface and simple scripts
_apple_music_api: Optional[AppleMusicAPI] = None


def get_apple_music_api() -> AppleMusicAPI:
    """
    Return the global AppleMusicAPI instance, creating it from settings on first use

    The instance shares one APIClient, so token changes made through it are seen
    by every caller. Build separate AppleMusicAPI/APIClient pairs instead when
    different credentials are used concurrently.
    """
    global _apple_music_api
    if _apple_music_api is None:
        _apple_music_api = AppleMusicAPI(APIClient.from_settings(get_settings()))
    return _apple_music_api


def reset_apple_music_api() -> None:
    """Drop the global instance so the next call picks up reloaded settings"""
    global _apple_music_api
    _apple_music_api = None
