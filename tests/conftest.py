"""Test configuration and fixtures"""

import logging
import pytest
from unittest.mock import Mock

from applemusic.api.client import AppleMusicAPI
from applemusic.api.http import APIClient


@pytest.fixture
def http_client():
    """APIClient stand-in that records requests instead of sending them"""
    client = Mock(spec=APIClient)
    client.api_request.return_value = {'data': []}
    return client


@pytest.fixture
def api(http_client):
    """AppleMusicAPI wired to the recording HTTP client"""
    return AppleMusicAPI(http_client)


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way it was after a logging test"""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            handler.close()
            root_logger.removeHandler(handler)
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)


@pytest.fixture
def album_response():
    """Trimmed catalog album response with a tracks relationship"""
    return {
        'data': [
            {
                'id': '1440857781',
                'type': 'albums',
                'attributes': {'name': 'Test Album', 'artistName': 'Test Artist'},
                'relationships': {
                    'tracks': {
                        'href': '/v1/catalog/us/albums/1440857781/tracks',
                        'data': [
                            {'id': '1440857782', 'type': 'songs'},
                            {'type': 'songs'},
                            {'id': '1440857790', 'type': 'music-videos'},
                        ]
                    }
                }
            }
        ]
    }
