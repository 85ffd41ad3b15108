"""Metastore URI normalization.

Users may pass either a fully qualified URI (`file:///data/indexes`,
`http://localhost:7280`) or a plain local path. Everything downstream
works with the normalized, scheme-qualified form only.
"""

from __future__ import annotations

import os
import re

PROTOCOL_SEPARATOR = "://"

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")


def _strip_trailing_slashes(uri: str) -> str:
    """Remove trailing slashes while keeping something after `scheme://`."""
    scheme, rest = uri.split(PROTOCOL_SEPARATOR, 1)
    stripped = rest.rstrip("/")
    return f"{scheme}{PROTOCOL_SEPARATOR}{stripped or rest}"


def normalize_uri(uri: str) -> str:
    """
    Normalize a metastore URI.

    - `scheme://rest` keeps its location, with the scheme lower-cased
    - `file://` URIs must carry an absolute path (no host part)
    - a bare path becomes `file://<absolute path>` (`~` is expanded)
    - trailing slashes are removed

    Raises:
        ValueError: If the URI is empty or malformed.
    """
    value = (uri or "").strip()
    if not value:
        raise ValueError("Metastore URI is empty.")

    if PROTOCOL_SEPARATOR in value:
        scheme, rest = value.split(PROTOCOL_SEPARATOR, 1)
        if not _SCHEME_RE.match(scheme):
            raise ValueError(f"Invalid URI scheme in `{uri}`.")
        if not rest.strip("/") and rest != "/":
            raise ValueError(f"URI `{uri}` has no location after the scheme.")
        scheme = scheme.lower()
        if scheme == "file" and not rest.startswith("/"):
            raise ValueError(
                f"URI `{uri}` has a host part; use `file:///absolute/path` "
                "or a plain local path."
            )
        return _strip_trailing_slashes(f"{scheme}{PROTOCOL_SEPARATOR}{rest}")

    head = value.split("/", 1)[0]
    if ":" in head:
        raise ValueError(f"Malformed URI `{uri}`.")

    path = os.path.abspath(os.path.expanduser(value))
    return _strip_trailing_slashes(f"file{PROTOCOL_SEPARATOR}{path}")
