"""
Configuration package for applemusic-api

Settings are read from YAML files and overridden by environment variables
(``APPLE_MUSIC_DEVELOPER_TOKEN``, ``APPLE_MUSIC_USER_TOKEN``, ...). The most
common usage is:

    from applemusic.config import get_settings

    settings = get_settings()
    token = settings.apple_music.developer_token
"""

from .settings import get_settings, reload_settings, Settings

__all__ = [
    'get_settings',      # Singleton settings access
    'reload_settings',   # Reload settings from files and environment
    'Settings',          # Settings class for direct instantiation
]
