"""
Main CLI interface for applemusic-api

Command-line access to the Apple Music API operations. Every command prints the
decoded JSON response. The CLI is built using Click and provides:
- Storefront lookups (storefront, me-storefront)
- Catalog operations (catalog, charts, upc, isrc, search, song-ids, curator-playlists)
- Library operations (recent, library list/add/create-playlist/add-tracks)
- Configuration management (config show/validate/save)

Tokens are read from settings, i.e. APPLE_MUSIC_DEVELOPER_TOKEN and
APPLE_MUSIC_USER_TOKEN or the YAML configuration file.
"""

import functools
import json
import sys
import click

from . import __version__
from .api.client import get_apple_music_api, reset_apple_music_api
from .api.exceptions import AppleMusicAPIException
from .api.models import (
    LibraryPlaylistCreationRequest,
    LibraryResource,
    LibraryResourceAddRequest,
    ResourceType,
)
from .config.settings import get_settings, reload_settings
from .utils.logger import configure_from_settings, get_logger
from .utils.validation import validate_storefront, validate_resource_id, validate_page

logger = get_logger(__name__)

CATALOG_KINDS = ['albums', 'songs', 'artists', 'playlists', 'curators']
LIBRARY_KINDS = ['playlists', 'albums', 'artists', 'music-videos']
RESOURCE_TYPES = [member.value for member in ResourceType]


def handle_error(func):
    """
    Decorator to handle common CLI errors gracefully

    API errors are shown as a red message with exit code 1, user cancellation
    exits with 130.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            click.echo(click.style("\n\nOperation cancelled by user", fg='yellow'))
            sys.exit(130)
        except AppleMusicAPIException as e:
            logger.error(f"Command failed: {e}")
            if e.details:
                logger.debug(f"Details: {e.details}")
            click.echo(click.style(f"Error: {e}", fg='red'), err=True)
            sys.exit(1)
    return wrapper


def echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def fail(message: str) -> None:
    click.echo(click.style(message, fg='red'), err=True)
    sys.exit(1)


def check_ids(*resource_ids: str) -> None:
    for resource_id in resource_ids:
        is_valid, error_msg = validate_resource_id(resource_id)
        if not is_valid:
            fail(f"Invalid identifier: {error_msg}")


def check_page(limit: int, offset: int) -> None:
    is_valid, error_msg = validate_page(limit, offset)
    if not is_valid:
        fail(f"Invalid pagination: {error_msg}")


def current_storefront(ctx) -> str:
    """Storefront from --storefront or settings, validated"""
    storefront = ctx.obj.get('storefront') or get_settings().apple_music.storefront
    is_valid, error_msg = validate_storefront(storefront)
    if not is_valid:
        fail(f"Invalid storefront: {error_msg}")
    return storefront.lower()


@click.group(invoke_without_command=True)
@click.option('--version', is_flag=True, help='Show version information')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--config', type=click.Path(), help='Path to config file')
@click.option('--storefront', '-s', help='Storefront country code (overrides config)')
@click.pass_context
def cli(ctx, version, verbose, config, storefront):
    """
    applemusic - query the Apple Music catalog and manage your library
    """
    ctx.ensure_object(dict)

    if version:
        click.echo(f"applemusic-api v{__version__}")
        return

    if config:
        reload_settings(config)
        reset_apple_music_api()

    configure_from_settings(verbose=verbose)

    ctx.obj['verbose'] = verbose
    ctx.obj['storefront'] = storefront

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Storefront commands

@cli.command()
@click.argument('storefront_id', required=False)
@click.option('--include', default='', help='Comma separated relationships to include')
@handle_error
def storefront(storefront_id, include):
    """Show one storefront, or all storefronts when no ID is given"""
    api = get_apple_music_api()
    if storefront_id:
        is_valid, error_msg = validate_storefront(storefront_id)
        if not is_valid:
            fail(f"Invalid storefront: {error_msg}")
        echo_json(api.get_storefront(storefront_id.lower(), include))
    else:
        echo_json(api.get_all_storefronts(include))


@cli.command('me-storefront')
@click.option('--include', default='', help='Comma separated relationships to include')
@handle_error
def me_storefront(include):
    """Show the signed-in user's storefront"""
    echo_json(get_apple_music_api().get_users_storefront(include))


# Catalog commands

@cli.command()
@click.argument('kind', type=click.Choice(CATALOG_KINDS))
@click.argument('resource_id')
@click.option('--include', default='', help='Comma separated relationships to include')
@click.pass_context
@handle_error
def catalog(ctx, kind, resource_id, include):
    """Fetch a catalog album, song, artist, playlist or curator"""
    check_ids(resource_id)
    api = get_apple_music_api()
    fetchers = {
        'albums': api.get_catalog_album,
        'songs': api.get_catalog_song,
        'artists': api.get_catalog_artist,
        'playlists': api.get_catalog_playlist,
        'curators': api.get_catalog_curator,
    }
    echo_json(fetchers[kind](current_storefront(ctx), resource_id, include))


@cli.command()
@click.option('--type', 'types', multiple=True,
              type=click.Choice(['albums', 'songs', 'music-videos', 'playlists']),
              help='Chart type (repeatable)')
@click.option('--genre', default='', help='Genre identifier')
@click.option('--limit', type=int, default=20, show_default=True, help='Resources per chart')
@click.option('--offset', type=int, default=0, show_default=True, help='Offset of the page to fetch')
@click.pass_context
@handle_error
def charts(ctx, types, genre, limit, offset):
    """Show catalog charts"""
    check_page(limit, offset)
    echo_json(get_apple_music_api().get_catalog_charts(
        current_storefront(ctx), list(types), genre, limit, offset
    ))


@cli.command()
@click.argument('upc_code')
@click.option('--include', default='', help='Comma separated relationships to include')
@click.pass_context
@handle_error
def upc(ctx, upc_code, include):
    """Find catalog albums by UPC"""
    check_ids(upc_code)
    echo_json(get_apple_music_api().get_multiple_catalog_albums_by_upc(
        current_storefront(ctx), upc_code, include
    ))


@cli.command()
@click.argument('isrc_code')
@click.option('--include', default='', help='Comma separated relationships to include')
@click.pass_context
@handle_error
def isrc(ctx, isrc_code, include):
    """Find catalog songs by ISRC"""
    check_ids(isrc_code)
    echo_json(get_apple_music_api().get_multiple_catalog_songs_by_isrc(
        current_storefront(ctx), isrc_code, include
    ))


@cli.command()
@click.argument('term', nargs=-1, required=True)
@click.option('--types', default='songs,albums,artists', show_default=True,
              help='Comma separated resource types to search')
@click.pass_context
@handle_error
def search(ctx, term, types):
    """Search the catalog"""
    # The API expects '+' between words
    search_term = '+'.join(word for part in term for word in part.split())
    echo_json(get_apple_music_api().search_catalog(current_storefront(ctx), search_term, types))


@cli.command('song-ids')
@click.argument('album_id')
@click.pass_context
@handle_error
def song_ids(ctx, album_id):
    """List the song IDs of a catalog album"""
    check_ids(album_id)
    for song_id in get_apple_music_api().get_song_ids_for_album(current_storefront(ctx), album_id):
        click.echo(song_id)


@cli.command('curator-playlists')
@click.argument('curator_id')
@click.option('--limit', type=int, default=10, show_default=True, help='Page size (max 100)')
@click.option('--offset', type=int, default=0, show_default=True, help='Offset of the page to fetch')
@click.option('--include', default='', help='Comma separated relationships to include')
@click.pass_context
@handle_error
def curator_playlists(ctx, curator_id, limit, offset, include):
    """List the playlists of a catalog curator"""
    check_ids(curator_id)
    check_page(limit, offset)
    echo_json(get_apple_music_api().get_catalog_curator_relationship(
        current_storefront(ctx), curator_id, 'playlists', limit, offset, include
    ))


# Library commands

@cli.command()
@click.option('--limit', type=int, default=5, show_default=True, help='Page size (max 10)')
@click.option('--offset', type=int, default=0, show_default=True, help='Offset of the page to fetch')
@click.option('--include', default='', help='Comma separated relationships to include')
@handle_error
def recent(limit, offset, include):
    """Show recently played resources"""
    check_page(limit, offset)
    echo_json(get_apple_music_api().get_recently_played_resources(limit, offset, include))


@cli.group()
def library():
    """
    Library management commands

    All library commands require a music user token.
    """
    pass


@library.command('list')
@click.argument('kind', type=click.Choice(LIBRARY_KINDS))
@click.option('--limit', type=int, default=25, show_default=True, help='Page size (max 100)')
@click.option('--offset', type=int, default=0, show_default=True, help='Offset of the page to fetch')
@click.option('--include', default='', help='Comma separated relationships to include')
@handle_error
def library_list(kind, limit, offset, include):
    """List library playlists, albums, artists or music videos"""
    check_page(limit, offset)
    api = get_apple_music_api()
    fetchers = {
        'playlists': api.get_all_library_playlists,
        'albums': api.get_all_library_albums,
        'artists': api.get_all_library_artists,
        'music-videos': api.get_all_library_music_videos,
    }
    echo_json(fetchers[kind](limit, offset, include))


@library.command('add')
@click.option('--song', 'songs', multiple=True, help='Catalog song ID (repeatable)')
@click.option('--album', 'albums', multiple=True, help='Catalog album ID (repeatable)')
@click.option('--music-video', 'music_videos', multiple=True, help='Catalog music video ID (repeatable)')
@click.option('--playlist', 'playlists', multiple=True, help='Catalog playlist ID (repeatable)')
@handle_error
def library_add(songs, albums, music_videos, playlists):
    """Add catalog resources to the library"""
    check_ids(*songs, *albums, *music_videos, *playlists)

    add_request = LibraryResourceAddRequest()
    for song_id in songs:
        add_request.add_song(LibraryResource(ResourceType.SONGS, song_id))
    for album_id in albums:
        add_request.add_album(LibraryResource(ResourceType.ALBUMS, album_id))
    for video_id in music_videos:
        add_request.add_music_video(LibraryResource(ResourceType.MUSIC_VIDEOS, video_id))
    for playlist_id in playlists:
        add_request.add_playlist(LibraryResource(ResourceType.PLAYLISTS, playlist_id))

    if add_request.is_empty():
        fail("Nothing to add: pass at least one --song, --album, --music-video or --playlist")

    result = get_apple_music_api().add_resource_to_library(add_request)
    click.echo(click.style("Resources added to library", fg='green'))
    if result:
        echo_json(result)


@library.command('create-playlist')
@click.argument('name')
@click.option('--description', default='', help='Playlist description')
@click.option('--track', 'tracks', multiple=True, help='Track ID (repeatable, keeps order)')
@click.option('--track-type', type=click.Choice(RESOURCE_TYPES), default='songs', show_default=True,
              help='Resource type of the given track IDs')
@handle_error
def library_create_playlist(name, description, tracks, track_type):
    """Create a library playlist"""
    check_ids(*tracks)

    playlist = LibraryPlaylistCreationRequest(name=name, description=description)
    for track_id in tracks:
        playlist.add_track(LibraryResource(track_type, track_id))

    echo_json(get_apple_music_api().create_library_playlist(playlist))


@library.command('add-tracks')
@click.argument('playlist_id')
@click.argument('track_ids', nargs=-1, required=True)
@click.option('--track-type', type=click.Choice(RESOURCE_TYPES), default='songs', show_default=True,
              help='Resource type of the given track IDs')
@handle_error
def library_add_tracks(playlist_id, track_ids, track_type):
    """Append tracks to a library playlist"""
    check_ids(playlist_id, *track_ids)

    tracks = [LibraryResource(track_type, track_id) for track_id in track_ids]
    result = get_apple_music_api().add_tracks_to_library_playlist(playlist_id, tracks)
    click.echo(click.style(f"Added {len(tracks)} track(s) to {playlist_id}", fg='green'))
    if result:
        echo_json(result)


# Configuration commands

@cli.group()
def config():
    """Configuration management commands"""
    pass


@config.command()
def show():
    """Show current configuration (tokens are masked)"""
    settings = get_settings()

    def mask(token: str) -> str:
        return f"{token[:4]}...{token[-4:]}" if len(token) > 12 else ("set" if token else "not set")

    click.echo(f"Config file:      {settings.config_path or 'none'}")
    click.echo(f"Storefront:       {settings.apple_music.storefront}")
    click.echo(f"Developer token:  {mask(settings.apple_music.developer_token)}")
    click.echo(f"User token:       {mask(settings.apple_music.music_user_token)}")
    click.echo(f"API base URL:     {settings.network.base_url}")
    click.echo(f"Request timeout:  {settings.network.request_timeout}s")
    click.echo(f"Log level:        {settings.logging.level}")


@config.command()
def validate():
    """Validate the current configuration"""
    is_valid, errors = get_settings().validate()
    if is_valid:
        click.echo(click.style("Configuration is valid", fg='green'))
        return

    click.echo(click.style("Configuration validation errors:", fg='red'))
    for error in errors:
        click.echo(f"  - {error}")
    sys.exit(1)


@config.command()
@click.option('--path', type=click.Path(), help='Destination file (defaults to the user config directory)')
def save(path):
    """Write the current configuration to YAML (tokens are not saved)"""
    target = get_settings().save_config(path)
    click.echo(click.style(f"Configuration saved to {target}", fg='green'))


if __name__ == '__main__':
    cli()
