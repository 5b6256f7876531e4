"""
Data models for Apple Music library resources and write requests

This module defines the value types callers hand to the Apple Music client when
addressing resources in a user's library:

1. **ResourceType**: Closed set of resource type strings recognized by the API.
   The enum value is used verbatim as the JSON ``type`` field and as the
   grouping key when resources are batched into an add-to-library request.

2. **LibraryResource**: Immutable ``(type, id)`` reference to a single resource.

3. **Request payloads**: Mutable holders the caller fills before a call
   - LibraryResourceAddRequest: songs, albums, music videos and playlists to add
   - LibraryPlaylistCreationRequest: name, description and ordered tracks

The request payloads only accumulate and expose their contents. Turning them
into query strings and JSON bodies is done by ``AppleMusicAPI``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Union

from .exceptions import AppleMusicAPIException


class ResourceType(Enum):
    """
    Resource types that can be referenced in library write requests

    Catalog types address items in the shared catalog, library types address
    items already in the signed-in user's library (for example tracks of a
    library playlist).
    """
    SONGS = "songs"
    ALBUMS = "albums"
    MUSIC_VIDEOS = "music-videos"
    PLAYLISTS = "playlists"
    LIBRARY_SONGS = "library-songs"
    LIBRARY_ALBUMS = "library-albums"
    LIBRARY_MUSIC_VIDEOS = "library-music-videos"
    LIBRARY_PLAYLISTS = "library-playlists"

    @classmethod
    def parse(cls, value: Union['ResourceType', str]) -> 'ResourceType':
        """
        Coerce a type string into a ResourceType

        Args:
            value: ResourceType member or its wire string (e.g. "music-videos")

        Returns:
            Matching ResourceType member

        Raises:
            AppleMusicAPIException: If the value is empty or not a recognized type
        """
        if isinstance(value, cls):
            return value
        if not value:
            raise AppleMusicAPIException("Resource type must not be empty")
        try:
            return cls(value)
        except ValueError:
            raise AppleMusicAPIException(
                f"Unknown resource type '{value}'",
                details={'allowed': [member.value for member in cls]}
            ) from None


@dataclass(frozen=True)
class LibraryResource:
    """
    Reference to a single resource by type and identifier

    Instances are immutable. The type may be given as a ResourceType or as its
    wire string; it is always stored as a ResourceType.

    Attributes:
        type: Kind of the resource
        id: Apple Music identifier of the resource
    """
    type: ResourceType
    id: str

    def __post_init__(self):
        object.__setattr__(self, 'type', ResourceType.parse(self.type))
        if not self.id:
            raise AppleMusicAPIException("Resource id must not be empty")
        object.__setattr__(self, 'id', str(self.id))

    def to_dict(self) -> Dict[str, str]:
        """Wire representation used in JSON request bodies"""
        return {'id': self.id, 'type': self.type.value}


@dataclass
class LibraryResourceAddRequest:
    """
    Resources to add to the user's library in a single request

    The four lists exist for convenience only. On the wire, resources are
    regrouped by their own type regardless of the list they were added to.
    """
    songs: List[LibraryResource] = field(default_factory=list)
    albums: List[LibraryResource] = field(default_factory=list)
    music_videos: List[LibraryResource] = field(default_factory=list)
    playlists: List[LibraryResource] = field(default_factory=list)

    def add_song(self, song: LibraryResource) -> 'LibraryResourceAddRequest':
        self.songs.append(song)
        return self

    def add_album(self, album: LibraryResource) -> 'LibraryResourceAddRequest':
        self.albums.append(album)
        return self

    def add_music_video(self, music_video: LibraryResource) -> 'LibraryResourceAddRequest':
        self.music_videos.append(music_video)
        return self

    def add_playlist(self, playlist: LibraryResource) -> 'LibraryResourceAddRequest':
        self.playlists.append(playlist)
        return self

    def is_empty(self) -> bool:
        """True when no resource has been added to any list"""
        return not (self.songs or self.albums or self.music_videos or self.playlists)


@dataclass
class LibraryPlaylistCreationRequest:
    """
    Attributes and initial tracks of a new library playlist

    Attributes:
        name: Playlist name
        description: Playlist description
        tracks: Tracks to add, in playlist order
    """
    name: str
    description: str
    tracks: List[LibraryResource] = field(default_factory=list)

    def add_track(self, track: LibraryResource) -> 'LibraryPlaylistCreationRequest':
        self.tracks.append(track)
        return self

    def get_attributes(self) -> Dict[str, Any]:
        return {'name': self.name, 'description': self.description}
