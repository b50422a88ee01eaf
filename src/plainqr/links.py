"""Recognition and display helpers for scanned web links."""
from __future__ import annotations

import re
from typing import Collection, Optional
from urllib.parse import SplitResult, urlsplit

DEFAULT_SCHEMES = ("http", "https")
"""Schemes accepted as navigable web links."""

_ILLEGAL_CHARS = re.compile(r'[\x00-\x20\x7f<>"{}|\\^`]')
"""Characters a strict RFC 3986 parser refuses anywhere in a URI."""

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
"""A ``%`` that does not start a two digit hex escape."""


def _parse(text: str) -> Optional[SplitResult]:
    """Return the split form of ``text`` or ``None`` when it is not a URI.

    :func:`urllib.parse.urlsplit` is lenient: it silently strips whitespace,
    tolerates characters that may never appear in a URI and does not look at
    the port until asked.  Those inputs are rejected here so that
    ``"http://exa mple.com"`` or ``"http://example.com:abc/"`` are malformed
    rather than links to a mangled host.
    """

    if not isinstance(text, str) or _ILLEGAL_CHARS.search(text) or _BAD_ESCAPE.search(text):
        return None

    try:
        parts = urlsplit(text)
        parts.port
    except ValueError:
        return None
    return parts


def _host(parts: SplitResult) -> Optional[str]:
    """Return the host exactly as written, without userinfo or port."""

    hostport = parts.netloc.rpartition("@")[2]
    if hostport.startswith("["):
        host = hostport[: hostport.find("]") + 1]
    else:
        host = hostport.partition(":")[0]
    return host or None


def _scheme(text: str, parts: SplitResult) -> str:
    # urlsplit lowercases the scheme; compare the characters as scanned.
    if not parts.scheme:
        return ""
    return text.partition(":")[0]


def is_valid_url(text: str, schemes: Collection[str] = DEFAULT_SCHEMES) -> bool:
    """Return ``True`` if ``text`` is an HTTP(S) URL with a host.

    The scheme must match one of ``schemes`` exactly and case-sensitively, so
    neither ``httpfoo`` nor ``HTTP`` is accepted.  Malformed input yields
    ``False``.
    """

    parts = _parse(text)
    if parts is None:
        return False

    if _scheme(text, parts) not in schemes:
        return False

    return _host(parts) is not None


def format_host(text: str) -> str:
    """Return the host of ``text`` for display, or ``text`` itself.

    >>> format_host("https://Example.com/page?x=1")
    'Example.com'
    >>> format_host("not a url")
    'not a url'
    """

    parts = _parse(text)
    if parts is None:
        return text

    return _host(parts) or text


__all__ = ["DEFAULT_SCHEMES", "format_host", "is_valid_url"]
