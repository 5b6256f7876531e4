"""Test configuration loading and validation"""

import pytest
import yaml

from applemusic.config import settings as settings_module
from applemusic.config.settings import DEFAULT_API_URL, Settings, reload_settings

ENV_VARS = (
    'APPLE_MUSIC_DEVELOPER_TOKEN',
    'APPLE_MUSIC_USER_TOKEN',
    'APPLE_MUSIC_STOREFRONT',
    'APPLE_MUSIC_API_URL',
    'APPLE_MUSIC_LOG_LEVEL',
)


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Run with an empty home, working directory and environment"""
    home = tmp_path / 'home'
    work = tmp_path / 'work'
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv('HOME', str(home))
    monkeypatch.chdir(work)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return tmp_path


def write_yaml(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.dump(data), encoding='utf-8')
    return path


class TestLoading:
    """Test the defaults, YAML and environment layers"""

    def test_defaults(self, isolated):
        settings = Settings()

        assert settings.apple_music.developer_token == ''
        assert settings.apple_music.storefront == 'us'
        assert settings.network.base_url == DEFAULT_API_URL
        assert settings.network.request_timeout == 30
        assert settings.logging.level == 'WARNING'
        assert settings.config_path is None

    def test_explicit_yaml_file(self, isolated):
        path = write_yaml(isolated / 'custom.yaml', {
            'apple_music': {'storefront': 'gb', 'developer_token': 'from-file'},
            'network': {'request_timeout': 10},
        })

        settings = Settings(str(path))

        assert settings.apple_music.storefront == 'gb'
        assert settings.apple_music.developer_token == 'from-file'
        assert settings.network.request_timeout == 10
        assert settings.config_path == str(path)

    def test_user_config_directory_is_searched(self, isolated):
        write_yaml(isolated / 'home' / '.applemusic-api' / 'config.yaml', {'apple_music': {'storefront': 'jp'}})

        assert Settings().apple_music.storefront == 'jp'

    def test_working_directory_config(self, isolated):
        write_yaml(isolated / 'work' / 'config.yaml', {'logging': {'level': 'INFO'}})

        assert Settings().logging.level == 'INFO'

    def test_unknown_sections_and_keys_are_ignored(self, isolated):
        path = write_yaml(isolated / 'custom.yaml', {
            'spotify': {'client_id': 'x'},
            'apple_music': {'unknown': 1, 'storefront': 'fr'},
            'network': 'not a mapping',
        })

        settings = Settings(str(path))

        assert settings.apple_music.storefront == 'fr'
        assert not hasattr(settings.apple_music, 'unknown')
        assert settings.network.base_url == DEFAULT_API_URL

    def test_environment_overrides_file(self, isolated, monkeypatch):
        path = write_yaml(isolated / 'custom.yaml', {'apple_music': {'storefront': 'gb'}})
        monkeypatch.setenv('APPLE_MUSIC_DEVELOPER_TOKEN', 'env-dev')
        monkeypatch.setenv('APPLE_MUSIC_USER_TOKEN', 'env-user')
        monkeypatch.setenv('APPLE_MUSIC_STOREFRONT', 'de')
        monkeypatch.setenv('APPLE_MUSIC_API_URL', 'https://example.test/v1/')
        monkeypatch.setenv('APPLE_MUSIC_LOG_LEVEL', 'DEBUG')

        settings = Settings(str(path))

        assert settings.apple_music.developer_token == 'env-dev'
        assert settings.apple_music.music_user_token == 'env-user'
        assert settings.apple_music.storefront == 'de'
        assert settings.network.base_url == 'https://example.test/v1/'
        assert settings.logging.level == 'DEBUG'

    def test_invalid_yaml_falls_back_to_defaults(self, isolated, capsys):
        path = isolated / 'broken.yaml'
        path.write_text('apple_music: [unclosed', encoding='utf-8')

        settings = Settings(str(path))

        assert settings.apple_music.storefront == 'us'
        assert 'Failed to load config' in capsys.readouterr().out

    def test_reload_replaces_global_instance(self, isolated, monkeypatch):
        monkeypatch.setattr(settings_module, 'settings', settings_module.settings)
        path = write_yaml(isolated / 'custom.yaml', {'apple_music': {'storefront': 'ca'}})

        reloaded = reload_settings(str(path))

        assert settings_module.get_settings() is reloaded
        assert reloaded.apple_music.storefront == 'ca'


class TestValidation:
    """Test Settings.validate"""

    def test_missing_developer_token(self, isolated):
        is_valid, errors = Settings().validate()

        assert not is_valid
        assert any('developer token' in error for error in errors)

    def test_valid_settings(self, isolated, monkeypatch):
        monkeypatch.setenv('APPLE_MUSIC_DEVELOPER_TOKEN', 'dev')

        assert Settings().validate() == (True, [])

    @pytest.mark.parametrize('section,key,value,fragment', [
        ('apple_music', 'storefront', 'usa', 'storefront'),
        ('apple_music', 'storefront', '1a', 'storefront'),
        ('network', 'base_url', 'ftp://example.test', 'base URL'),
        ('network', 'request_timeout', 0, 'timeout'),
        ('network', 'request_timeout', 'soon', 'timeout'),
    ])
    def test_invalid_values(self, isolated, monkeypatch, section, key, value, fragment):
        monkeypatch.setenv('APPLE_MUSIC_DEVELOPER_TOKEN', 'dev')
        settings = Settings()
        setattr(getattr(settings, section), key, value)

        is_valid, errors = settings.validate()

        assert not is_valid
        assert len(errors) == 1
        assert fragment in errors[0]


class TestSaving:
    """Test Settings.save_config"""

    def test_tokens_are_not_written(self, isolated, monkeypatch):
        monkeypatch.setenv('APPLE_MUSIC_DEVELOPER_TOKEN', 'secret-dev')
        monkeypatch.setenv('APPLE_MUSIC_USER_TOKEN', 'secret-user')
        settings = Settings()
        settings.apple_music.storefront = 'nl'

        target = settings.save_config(str(isolated / 'out' / 'config.yaml'))

        saved = yaml.safe_load(target.read_text(encoding='utf-8'))
        assert saved['apple_music'] == {'developer_token': '', 'music_user_token': '', 'storefront': 'nl'}
        assert saved['network']['base_url'] == DEFAULT_API_URL
        assert 'secret' not in target.read_text(encoding='utf-8')
        assert settings.apple_music.developer_token == 'secret-dev'

    def test_default_location(self, isolated):
        target = Settings().save_config()

        assert target == isolated / 'home' / '.applemusic-api' / 'config.yaml'
        assert target.exists()
