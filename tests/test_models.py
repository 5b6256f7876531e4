"""Test library resource models and request payloads"""

import dataclasses
import pytest

from applemusic.api.exceptions import AppleMusicAPIException
from applemusic.api.models import (
    LibraryPlaylistCreationRequest,
    LibraryResource,
    LibraryResourceAddRequest,
    ResourceType,
)


class TestLibraryResource:
    """Test LibraryResource construction and accessors"""

    def test_type_string_is_coerced_to_enum(self):
        resource = LibraryResource('music-videos', '639032181')

        assert resource.type is ResourceType.MUSIC_VIDEOS
        assert resource.id == '639032181'

    def test_enum_type_is_kept(self):
        resource = LibraryResource(ResourceType.LIBRARY_SONGS, 'i.abc123')
        assert resource.type is ResourceType.LIBRARY_SONGS

    def test_to_dict_uses_wire_type(self):
        resource = LibraryResource(ResourceType.SONGS, '203709340')
        assert resource.to_dict() == {'id': '203709340', 'type': 'songs'}

    @pytest.mark.parametrize('resource_type', ['', 'song', 'SONGS', 'stations'])
    def test_unknown_type_is_rejected(self, resource_type):
        with pytest.raises(AppleMusicAPIException):
            LibraryResource(resource_type, '1')

    def test_empty_id_is_rejected(self):
        with pytest.raises(AppleMusicAPIException, match="id must not be empty"):
            LibraryResource('songs', '')

    def test_resource_is_immutable(self):
        resource = LibraryResource('songs', '1')
        with pytest.raises(dataclasses.FrozenInstanceError):
            resource.id = '2'

    def test_equal_resources_compare_equal(self):
        assert LibraryResource('albums', '5') == LibraryResource(ResourceType.ALBUMS, '5')


class TestLibraryResourceAddRequest:
    """Test accumulation in the add-to-library request"""

    def test_new_request_is_empty(self):
        assert LibraryResourceAddRequest().is_empty()

    def test_add_methods_append_in_order_and_chain(self):
        request = (
            LibraryResourceAddRequest()
            .add_song(LibraryResource('songs', '1'))
            .add_song(LibraryResource('songs', '2'))
            .add_album(LibraryResource('albums', '3'))
            .add_music_video(LibraryResource('music-videos', '4'))
            .add_playlist(LibraryResource('playlists', 'pl.5'))
        )

        assert [song.id for song in request.songs] == ['1', '2']
        assert [album.id for album in request.albums] == ['3']
        assert [video.id for video in request.music_videos] == ['4']
        assert [playlist.id for playlist in request.playlists] == ['pl.5']
        assert not request.is_empty()

    def test_lists_do_not_check_resource_type(self):
        request = LibraryResourceAddRequest().add_song(LibraryResource('albums', '9'))
        assert request.songs[0].type is ResourceType.ALBUMS


class TestLibraryPlaylistCreationRequest:
    """Test the playlist creation payload holder"""

    def test_tracks_keep_insertion_order(self):
        playlist = LibraryPlaylistCreationRequest(name='Road trip', description='Summer')
        playlist.add_track(LibraryResource('songs', '3')).add_track(LibraryResource('songs', '1'))

        assert [track.id for track in playlist.tracks] == ['3', '1']

    def test_attributes(self):
        playlist = LibraryPlaylistCreationRequest(name='Road trip', description='Summer')
        assert playlist.get_attributes() == {'name': 'Road trip', 'description': 'Summer'}
        assert playlist.tracks == []
