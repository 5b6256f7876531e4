"""
Utilities package for applemusic-api

- logger: console/file logging configuration
- validation: input checks used by the command-line interface
"""

from .logger import (
    setup_logging,
    configure_from_settings,
    get_logger,
)

from .validation import (
    validate_storefront,
    validate_resource_id,
    validate_page,
)

__all__ = [
    # Logging
    'setup_logging',
    'configure_from_settings',
    'get_logger',

    # Validation
    'validate_storefront',
    'validate_resource_id',
    'validate_page',
]
