"""Load and model the inputs handed to the content layer.

This subpackage describes the CMS content snapshot (ordered
:class:`ContentSection` records per page with fallback-aware getters) and the
:class:`SiteSettings` the view resolver consults. The loaders read YAML or JSON
exports with ruamel.yaml and return frozen dataclasses that the pure
normalizers consume.

Examples
--------
>>> from pathlib import Path
>>> from forsaj_content.config import load_content_snapshot
>>> snapshot = load_content_snapshot(Path("content.yaml"))  # doctest: +SKIP
>>> snapshot.page("rulespage").get_text("RULES_PILOT_TITLE", "PİLOT")  # doctest: +SKIP
'PİLOT PROTOKOLU'
"""

from .helpers import first_non_empty, is_blank
from .loader import load_content_snapshot, load_site_settings
from .models import (
    ContentConfigError,
    ContentSection,
    ContentSnapshot,
    ImageRef,
    PageContent,
    SiteSettings,
)

__all__ = [
    "ContentConfigError",
    "ContentSection",
    "ContentSnapshot",
    "ImageRef",
    "PageContent",
    "SiteSettings",
    "first_non_empty",
    "is_blank",
    "load_content_snapshot",
    "load_site_settings",
]
