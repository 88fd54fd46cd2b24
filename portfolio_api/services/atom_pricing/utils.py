"""Utilities shared by the marketplace price lookup."""

from __future__ import annotations

import re
from urllib.parse import quote

ATOM_SITE = "Atom"
ATOM_BASE_URL = "https://www.atom.com"

DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

# Characters JavaScript's encodeURIComponent leaves untouched besides [A-Za-z0-9_.-].
_URI_COMPONENT_SAFE = "!~*'()"
_COM_SUFFIX = re.compile(r"\.com$", re.IGNORECASE)


def domain_slug(domain: str | None) -> str:
    """``ChicDrift.com`` -> ``ChicDrift``; other names are only trimmed."""
    clean = (domain or "").strip()
    return _COM_SUFFIX.sub("", clean)


def derive_item_url(domain: str | None, base_url: str = ATOM_BASE_URL) -> str:
    """Build the marketplace "name" page URL for a domain."""
    slug = quote(domain_slug(domain), safe=_URI_COMPONENT_SAFE)
    return f"{base_url.rstrip('/')}/name/{slug}"


def ensure_dollar_prefix(raw: str) -> str:
    return raw if raw.startswith("$") else f"${raw}"
