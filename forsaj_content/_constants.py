"""Common literal values used across forsaj_content.

These constants keep the closed view set, fallback vocabularies, and CMS key
names centralized so resolvers, builders, and tests import the same values
without drifting.

Examples
--------
>>> from forsaj_content import _constants
>>> "rules" in _constants.VIEW_IDS
True
>>> _constants.EXTERNAL
'external'
"""

from __future__ import annotations

import typing as typ

ViewIdentifier = typ.Literal[
    "home",
    "about",
    "news",
    "events",
    "drivers",
    "rules",
    "contact",
    "gallery",
    "privacy",
    "terms",
]

VIEW_IDS: tuple[ViewIdentifier, ...] = typ.get_args(ViewIdentifier)
EXTERNAL = "external"
DEFAULT_VIEW: ViewIdentifier = "home"

TRUSTED_DOMAINS: tuple[str, ...] = ("forsaj",)

DEFAULT_ALBUM_KEYS = frozenset({"", "umumiarxiv", "generalarchive", "default"})

YOUTUBE_ID_LENGTH = 11
