"""
core/slugs.py
-------------
URL slug codec compatible with the legacy DFDA site.

    "Heart Rate"                 -> "Heart_Rate"
    'Body "Mass" Index: Total'   -> "Body_Mass_Index-_Total"

Decoding only turns underscores back into spaces. Quotes, dashes, colons and
ellipses are dropped on the way in, so a decoded slug must always be matched
against the stored name rather than trusted as the original.
"""

from __future__ import annotations

import re

_DASHES = re.compile("[–—]")
_RESERVED = re.compile(r"[<>|?*]")


def name_to_slug(name: str) -> str:
    """Convert a display name to a URL path segment."""
    slug = name.replace(" ", "_")
    slug = slug.replace('"', "")
    slug = _DASHES.sub("-", slug)
    slug = slug.replace(":", "-")
    slug = _RESERVED.sub("_", slug)
    # truncated upstream names end in "..."
    slug = slug.replace("...", "")
    return slug


def slug_to_name(slug: str) -> str:
    """Convert a slug back to a candidate display name (underscores -> spaces)."""
    return slug.replace("_", " ")
