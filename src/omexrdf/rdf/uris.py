"""URI canonicalization and blank-node scoping helpers.

Canonicalization is intentionally narrow: it only irons out the differences
annotation producers are known to introduce (identifiers.org scheme, trailing
slashes, scheme case).  No percent-decoding or path normalization is applied.
"""

from __future__ import annotations

import re
import zlib

_IDENTIFIERS_ORG_RE = re.compile(r"^(?i:http)://identifiers\.org/")
_HTTP_SCHEME_RE = re.compile(r"^(?i:https?):")
_UNSAFE_ID_CHARS_RE = re.compile(r"[^A-Za-z0-9]")


def canonicalize_uri(uri: str | None) -> str | None:
    """Return the canonical comparable form of *uri* (``None`` passes through)."""
    if uri is None:
        return None

    canonical = _IDENTIFIERS_ORG_RE.sub("https://identifiers.org/", uri, count=1)
    canonical = canonical.rstrip("/")
    scheme = _HTTP_SCHEME_RE.match(canonical)
    if scheme:
        canonical = scheme.group(0).lower() + canonical[scheme.end():]
    return canonical


def is_local_uri(uri: str | None) -> bool:
    """Return True for archive-relative references (``./x``, ``#x``, ``file:``)."""
    if not uri:
        return False
    return uri.startswith("./") or uri.startswith("#") or uri.startswith("file:")


def _source_hash(source_id: str) -> str:
    return format(zlib.crc32(source_id.encode("utf-8")), "08x")


def normalize_blank_node(source_id: str | None, original_id: str) -> str:
    """Scope a graph-local blank node label to the document it came from.

    Without a *source_id* there is nothing to scope against, so the label is
    returned unchanged.
    """
    if source_id is None:
        return original_id
    sanitized = _UNSAFE_ID_CHARS_RE.sub("_", original_id)
    return f"_:b{_source_hash(source_id)}_{sanitized}"
