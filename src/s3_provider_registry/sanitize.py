"""Sanitizers applied to raw provider and region data."""

import html
import re
from typing import Any
from urllib.parse import urlparse

_KEY_PATTERN = re.compile(r"[^a-z0-9_\-]")
# Characters that survive URL sanitizing (RFC 3986 reserved/unreserved plus %).
_URL_STRIP_PATTERN = re.compile(r"[^A-Za-z0-9$\-_.+!*'(),{}|\\^~\[\]`<>#%\";/?:@&=]")

_TRUE_VALUES = frozenset({"1", "true", "on", "yes"})


def key(value: Any) -> str:
    """Lower-case, trim and strip everything outside ``[a-z0-9_-]``.

    Non-scalar values sanitize to an empty string.
    """
    if not isinstance(value, (str, int, float, bool)):
        return ""
    return _KEY_PATTERN.sub("", str(value).strip().lower())


def escape(value: Any) -> str:
    """HTML-escape a value, quotes included."""
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


def unescape(value: str) -> str:
    """Reverse :func:`escape`."""
    return html.unescape(value)


def url(value: Any) -> str:
    """Return a cleaned absolute URL, or an empty string if it is not valid."""
    if not isinstance(value, str):
        return ""
    cleaned = _URL_STRIP_PATTERN.sub("", value)
    parsed = urlparse(cleaned)
    if not parsed.scheme or not parsed.netloc:
        return ""
    return cleaned


def boolean(value: Any) -> bool:
    """Interpret booleans, numbers and strings like ``"yes"``/``"off"`` as a bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_VALUES
    return False
