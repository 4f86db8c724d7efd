"""Load site settings and CMS content exports into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import structlog
from ruamel.yaml import YAML

from forsaj_content._constants import DEFAULT_VIEW, TRUSTED_DOMAINS, VIEW_IDS

from .helpers import _build_sections, _optional_str
from .models import ContentConfigError, ContentSnapshot, PageContent, SiteSettings

if typ.TYPE_CHECKING:
    from forsaj_content._constants import ViewIdentifier

logger = structlog.get_logger(__name__)


def _load_mapping(path: Path) -> dict[str, typ.Any]:
    """Read ``path`` as YAML 1.2 (and therefore JSON) and return its mapping."""
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    return dict(loaded)


def load_site_settings(path: Path) -> SiteSettings:
    """Load the settings the view resolver uses to classify link targets.

    Parameters
    ----------
    path : Path
        YAML file with optional ``origin``, ``trusted_domains`` and
        ``default_view`` keys.

    Returns
    -------
    SiteSettings
        Parsed settings; omitted keys keep their defaults.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    ContentConfigError
        If ``trusted_domains`` is not a list or ``default_view`` is not a
        known view.

    Examples
    --------
    >>> from pathlib import Path
    >>> settings = load_site_settings(Path("config/site.yaml"))  # doctest: +SKIP
    >>> settings.trusted_domains  # doctest: +SKIP
    ('forsaj',)
    """
    raw = _load_mapping(path)
    origin = _optional_str(raw.get("origin")) or ""

    domains_raw = raw.get("trusted_domains", list(TRUSTED_DOMAINS))
    match domains_raw:
        case list() as items:
            trusted = tuple(
                domain.lower()
                for item in items
                if (domain := _optional_str(item)) is not None
            )
        case None:
            trusted = ()
        case _:
            msg = "'trusted_domains' must be a list of host substrings."
            raise ContentConfigError(msg)

    default_view = _optional_str(raw.get("default_view")) or DEFAULT_VIEW
    if default_view not in VIEW_IDS:
        known = ", ".join(VIEW_IDS)
        msg = f"Unknown default_view '{default_view}'. Known views: {known}"
        raise ContentConfigError(msg)

    return SiteSettings(
        origin=origin.rstrip("/"),
        trusted_domains=trusted,
        default_view=typ.cast("ViewIdentifier", default_view),
    )


def load_content_snapshot(path: Path) -> ContentSnapshot:
    """Load a CMS export mapping page names to ordered section lists.

    The export may nest pages under a ``pages`` key or list them at the top
    level. Each section needs an ``id``; ``label``, ``value`` and ``url`` are
    optional. Sections without an id are skipped.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    TypeError
        If the top-level structure is not a mapping.
    ContentConfigError
        If a page entry is neither a list of sections nor a mapping with a
        ``sections`` list.
    """
    raw = _load_mapping(path)
    pages_raw = raw.get("pages", raw)
    if not isinstance(pages_raw, dict):
        msg = "'pages' must map page names to section lists."
        raise ContentConfigError(msg)

    pages: dict[str, PageContent] = {}
    for name, payload in pages_raw.items():
        match payload:
            case list() as entries:
                sections = _build_sections(entries)
            case {"sections": list() as entries}:
                sections = _build_sections(entries)
            case _:
                msg = f"Page '{name}' must be a list of sections."
                raise ContentConfigError(msg)
        pages[str(name)] = PageContent(name=str(name), sections=sections)

    logger.info(
        "Loaded content snapshot",
        path=str(path),
        pages=len(pages),
        sections=sum(len(page.sections) for page in pages.values()),
    )
    return ContentSnapshot(pages=pages)


__all__ = ["load_content_snapshot", "load_site_settings"]
