"""Resolve content-addressable mirrors into sharded ware URLs.

A mirror such as ``ca+https://example.org/wares`` serves a ware with
hash ``abcdefgh`` at ``https://example.org/wares/abc/def/abcdefgh``.
The ``ca+`` prefix and the ``+ca`` suffix on the scheme are equivalent.
"""
from __future__ import annotations

from typing import Optional, Tuple
from urllib.parse import quote, urlsplit, urlunsplit

from .errors import MirrorLocationError


CA_PREFIX = "ca+"
CA_SUFFIX = "+ca"
MIN_HASH_LENGTH = 7

# Printable ASCII left unescaped in a path segment of a URL with a non-special scheme.
_SEGMENT_SAFE = "".join(chr(code) for code in range(0x21, 0x7F) if chr(code) not in "\"#<>?`{}/%")


def normalize_scheme(scheme: str) -> Tuple[bool, str]:
    """Return ``(is_content_addressable, bare_scheme)`` for ``scheme``."""

    if scheme.startswith(CA_PREFIX):
        return True, scheme[len(CA_PREFIX) :]
    if scheme.endswith(CA_SUFFIX):
        return True, scheme[: -len(CA_SUFFIX)]
    return False, scheme


def _append_segment(path: str, segment: str) -> str:
    if len(path) != 1:
        path += "/"
    return path + quote(segment, safe=_SEGMENT_SAFE)


def resolve_ca_link(mirror: str, ware_hash: str) -> Optional[str]:
    """Return the URL of ``ware_hash`` on ``mirror``.

    Returns ``None`` when the mirror is not content-addressable. Every
    URL component other than the scheme marker and the appended path
    segments is kept as written.

    Raises:
        MirrorLocationError: If ``mirror`` is not an absolute URL that can
            carry a path, or ``ware_hash`` is shorter than seven characters.
    """

    try:
        parts = urlsplit(mirror)
    except ValueError as exc:
        raise MirrorLocationError(f"invalid mirror {mirror!r}: {exc}") from exc
    if not parts.scheme:
        raise MirrorLocationError(f"relative URL without a base: {mirror!r}")

    content_addressable, scheme = normalize_scheme(parts.scheme)
    if not content_addressable:
        return None
    if len(ware_hash) < MIN_HASH_LENGTH:
        raise MirrorLocationError(f"ware_hash must be at least {MIN_HASH_LENGTH} characters")
    if not scheme:
        raise MirrorLocationError(f"mirror {mirror!r} has no scheme besides the content-addressable marker")
    if not parts.netloc and not parts.path.startswith("/"):
        raise MirrorLocationError(f"cannot be base: {mirror!r}")

    path = parts.path
    for segment in (ware_hash[0:3], ware_hash[3:6], ware_hash):
        path = _append_segment(path, segment)
    return urlunsplit(parts._replace(scheme=scheme, path=path))
