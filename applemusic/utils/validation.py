"""Input validation utilities for the command-line interface"""

import re
from typing import Optional, Tuple

STOREFRONT_PATTERN = re.compile(r'^[A-Za-z]{2}$')


def validate_storefront(storefront: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a storefront identifier (ISO 3166 alpha-2 country code)

    Args:
        storefront: Storefront code to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not storefront:
        return False, "Storefront cannot be empty"

    if not STOREFRONT_PATTERN.match(storefront):
        return False, f"Storefront must be a two-letter country code, got '{storefront}'"

    return True, None


def validate_resource_id(resource_id: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a catalog or library identifier

    Identifiers are inserted into request paths unescaped, so only characters
    that are safe in a path segment are accepted.

    Args:
        resource_id: Identifier to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not resource_id:
        return False, "Identifier cannot be empty"

    if not re.match(r'^[A-Za-z0-9._~-]+$', resource_id):
        return False, f"Identifier contains unsupported characters: '{resource_id}'"

    return True, None


def validate_page(limit: int, offset: int) -> Tuple[bool, Optional[str]]:
    """
    Validate pagination options

    Limits above an endpoint's maximum are clamped by the client, so only
    non-positive limits and negative offsets are rejected here.

    Args:
        limit: Requested page size
        offset: Requested offset

    Returns:
        Tuple of (is_valid, error_message)
    """
    if limit < 1:
        return False, "Limit must be at least 1"

    if offset < 0:
        return False, "Offset cannot be negative"

    return True, None
