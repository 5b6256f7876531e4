"""
Configuration management for applemusic-api

This module handles loading, validation, and management of settings from YAML
files and environment variables. It is used by the command-line interface and
by the ``get_apple_music_api()`` factory; ``AppleMusicAPI`` itself never reads
configuration and only works with the credentials it is given.

The configuration is organized into sections using dataclasses:
- Apple Music credentials and default storefront
- Network settings (API base URL, timeout, user agent)
- Logging options

Tokens can be loaded from environment variables (or a ``.env`` file) so they
never need to be stored in YAML files.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional, Tuple
from dataclasses import dataclass, asdict
from dotenv import load_dotenv

# Load environment variables from .env file if present
load_dotenv()

DEFAULT_API_URL = "https://api.music.apple.com/v1/"


@dataclass
class AppleMusicConfig:
    """
    Apple Music credentials and defaults

    developer_token authorizes catalog access, music_user_token authorizes
    access to the signed-in user's library ("me/..." endpoints).
    """
    developer_token: str = ""
    music_user_token: str = ""
    storefront: str = "us"


@dataclass
class NetworkConfig:
    """HTTP settings for the API client"""
    base_url: str = DEFAULT_API_URL
    request_timeout: int = 30
    user_agent: str = "applemusic-api/1.0"


@dataclass
class LoggingConfig:
    """
    Logging configuration and output settings

    Controls log levels, optional file output with rotation, and console
    formatting.
    """
    level: str = "WARNING"
    file: str = ""
    max_size: str = "10MB"
    backup_count: int = 3
    console_output: bool = True
    colored_output: bool = True


class Settings:
    """
    Main settings class that manages all configuration

    Loads settings from YAML files, then overrides them with environment
    variables, and exposes one dataclass per section.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize settings from config file and environment variables

        Args:
            config_path: Path to custom config file, if None uses default locations
        """
        self.config_path = config_path
        self.config_dir = Path.home() / ".applemusic-api"

        self.apple_music = AppleMusicConfig()
        self.network = NetworkConfig()
        self.logging = LoggingConfig()

        self._load_config()
        self._load_environment_variables()

    def _sections(self) -> Dict[str, Any]:
        return {
            'apple_music': self.apple_music,
            'network': self.network,
            'logging': self.logging,
        }

    def _load_config(self) -> None:
        """
        Load configuration from the first YAML file found

        Search order: explicit path, user config directory, ./config/config.yaml,
        ./config.yaml.
        """
        config_paths = [
            self.config_path,
            self.config_dir / "config.yaml",
            Path("config/config.yaml"),
            Path("config.yaml")
        ]

        config_data = {}
        for path in config_paths:
            if path and Path(path).exists():
                try:
                    with open(path, 'r', encoding='utf-8') as f:
                        config_data = yaml.safe_load(f) or {}
                    self.config_path = str(path)
                    break
                except (OSError, yaml.YAMLError) as e:
                    print(f"Warning: Failed to load config from {path}: {e}")

        self._apply_config(config_data)

    def _apply_config(self, config_data: Dict[str, Any]) -> None:
        """
        Apply configuration data to dataclass instances

        Only attributes that exist on the matching dataclass are updated,
        unknown sections and keys are ignored.

        Args:
            config_data: Dictionary containing configuration sections
        """
        config_mapping = self._sections()

        for section_name, section_data in config_data.items():
            if section_name in config_mapping and isinstance(section_data, dict):
                config_obj = config_mapping[section_name]
                for key, value in section_data.items():
                    if hasattr(config_obj, key):
                        setattr(config_obj, key, value)

    def _load_environment_variables(self) -> None:
        """
        Load sensitive configuration from environment variables

        Environment variables take precedence over file-based configuration.
        """
        env_mappings = {
            'APPLE_MUSIC_DEVELOPER_TOKEN': lambda v: setattr(self.apple_music, 'developer_token', v),
            'APPLE_MUSIC_USER_TOKEN': lambda v: setattr(self.apple_music, 'music_user_token', v),
            'APPLE_MUSIC_STOREFRONT': lambda v: setattr(self.apple_music, 'storefront', v),
            'APPLE_MUSIC_API_URL': lambda v: setattr(self.network, 'base_url', v),
            'APPLE_MUSIC_LOG_LEVEL': lambda v: setattr(self.logging, 'level', v),
        }

        for env_var, setter in env_mappings.items():
            value = os.getenv(env_var)
            if value:
                setter(value)

    def get_config_directory(self) -> Path:
        """Return the user configuration directory"""
        return self.config_dir

    def save_config(self, path: Optional[str] = None) -> Path:
        """
        Save current configuration to a YAML file

        Tokens are blanked before writing so credentials never end up on disk.

        Args:
            path: Custom path to save config, defaults to user config directory

        Returns:
            Path the configuration was written to
        """
        target = Path(path) if path else self.get_config_directory() / "config.yaml"

        config_data = {name: asdict(section) for name, section in self._sections().items()}

        config_data['apple_music']['developer_token'] = ""
        config_data['apple_music']['music_user_token'] = ""

        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, 'w', encoding='utf-8') as f:
            yaml.dump(config_data, f, default_flow_style=False, indent=2)
        return target

    def validate(self) -> Tuple[bool, List[str]]:
        """
        Validate current configuration

        Returns:
            Tuple of (is_valid, list of error messages)
        """
        errors = []

        if not self.apple_music.developer_token:
            errors.append("Apple Music developer token is required (APPLE_MUSIC_DEVELOPER_TOKEN)")

        storefront = self.apple_music.storefront
        if not (isinstance(storefront, str) and len(storefront) == 2 and storefront.isalpha()):
            errors.append(f"Invalid storefront: {storefront}")

        if not str(self.network.base_url).startswith(("http://", "https://")):
            errors.append(f"Invalid API base URL: {self.network.base_url}")

        try:
            if int(self.network.request_timeout) <= 0:
                errors.append("Request timeout must be positive")
        except (TypeError, ValueError):
            errors.append(f"Invalid request timeout: {self.network.request_timeout}")

        return not errors, errors

    def __str__(self) -> str:
        sections = [
            f"Storefront: {self.apple_music.storefront}",
            f"API: {self.network.base_url}",
            f"Developer token: {'set' if self.apple_music.developer_token else 'missing'}",
            f"User token: {'set' if self.apple_music.music_user_token else 'missing'}",
        ]
        return f"Settings({', '.join(sections)})"


# Global settings instance for singleton pattern
settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance"""
    return settings


def reload_settings(config_path: Optional[str] = None) -> Settings:
    """
    Reload settings from configuration files and the environment

    Args:
        config_path: Optional path to specific config file

    Returns:
        New Settings instance with reloaded configuration
    """
    global settings
    settings = Settings(config_path)
    return settings
