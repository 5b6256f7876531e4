"""
Query string construction for Apple Music API requests

QueryString keeps parameters in insertion order and renders them the way the
API expects them:
- Bracketed keys such as ``filter[upc]`` and ``ids[songs]`` stay literal
- Comma-joined lists and '+'-joined search terms are not escaped
- Anything else outside the unreserved set is percent-encoded

Free-text values therefore differ from raw interpolation: a search term such
as ``don't stop`` goes out as ``term=don%27t%20stop``, not with a literal quote
and space. Pass ``+`` between words to keep the term readable on the wire.

Most read endpoints send ``include=`` even when nothing is included;
``add_include()`` reproduces that explicitly.
"""

from typing import Iterable, List, Optional, Tuple, Union
from urllib.parse import quote

# Characters left untouched in keys and values
KEY_SAFE_CHARS = "[]"
VALUE_SAFE_CHARS = ",+:"

QueryValue = Union[str, int, Iterable[str], None]


def join_values(value: QueryValue) -> str:
    """
    Normalize a parameter value to its wire string

    Args:
        value: String, integer or sequence of strings

    Returns:
        The value as a string, sequences joined with commas
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    return ",".join(str(item) for item in value)


class QueryString:
    """Ordered query string builder"""

    def __init__(self):
        self._pairs: List[Tuple[str, str]] = []

    def add(self, key: str, value: QueryValue) -> 'QueryString':
        """Append a parameter; None values are skipped"""
        if value is None:
            return self
        self._pairs.append((key, join_values(value)))
        return self

    def add_if(self, key: str, value: QueryValue) -> 'QueryString':
        """Append a parameter only when its value is non-empty"""
        if join_values(value):
            self._pairs.append((key, join_values(value)))
        return self

    def add_include(self, include: QueryValue = "") -> 'QueryString':
        """Append ``include``, always, even when empty"""
        self._pairs.append(("include", join_values(include)))
        return self

    def add_page(self, limit: int, offset: int, ceiling: Optional[int] = None) -> 'QueryString':
        """
        Append ``offset`` and ``limit``

        Args:
            limit: Requested page size
            offset: Page offset, sent unchanged
            ceiling: Maximum page size of the endpoint, None to send limit as is
        """
        if ceiling is not None:
            limit = min(limit, ceiling)
        self._pairs.append(("offset", str(offset)))
        self._pairs.append(("limit", str(limit)))
        return self

    def render(self) -> str:
        return "&".join(
            f"{quote(key, safe=KEY_SAFE_CHARS)}={quote(value, safe=VALUE_SAFE_CHARS)}"
            for key, value in self._pairs
        )

    def build(self, path: str) -> str:
        """Return ``path?query``, or the bare path when no parameter was added"""
        query = self.render()
        return f"{path}?{query}" if query else path

    def __len__(self) -> int:
        return len(self._pairs)

    def __str__(self) -> str:
        return self.render()
