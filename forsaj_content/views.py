"""Resolve CMS-authored link targets and labels to internal views.

Editors type navigation targets freely: canonical view names, historical
Azerbaijani slugs, absolute URLs on the club's own domains, third-party links,
or nothing at all with only a button label to go on. :func:`resolve_view`
maps all of these onto the closed :data:`VIEW_IDS` set, the ``"external"``
marker, or ``None`` with a fixed precedence:

1. ``#`` means "no navigation"; an empty target falls back to the label hint.
2. The normalized target is a view id.
3. The normalized target is a known alias slug.
4. The normalized label hint matches a keyword rule.
5. URLs on a trusted host are searched (path, fragment, ``view``, ``tab``);
   URLs on any other host are external.
6. Unresolved ``http(s)`` targets are external.
7. Everything else gets the default view.

Examples
--------
>>> resolve_view("rules")
'rules'
>>> resolve_view("#") is None
True
>>> resolve_view("", "Əlaqə")
'contact'
>>> resolve_view("https://www.forsaj.az/qaydalar")
'rules'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from urllib.parse import parse_qs, urlsplit

import structlog

from ._constants import DEFAULT_VIEW, EXTERNAL, VIEW_IDS
from .config.helpers import first_non_empty
from .config.models import SiteSettings
from .normalizer import normalize

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from ._constants import ViewIdentifier
    from .config.models import ContentSection

logger = structlog.get_logger(__name__)

ResolvedView = str | None

VIEW_ALIASES: dict[str, ViewIdentifier] = {
    "ana": "home",
    "anasehife": "home",
    "haqqimizda": "about",
    "xeberler": "news",
    "tedbirler": "events",
    "eventstab": "events",
    "suruculer": "drivers",
    "qalereya": "gallery",
    "qaydalar": "rules",
    "elaqe": "contact",
    "privacypolicy": "privacy",
    "mexfiliksiyaseti": "privacy",
    "termsofservice": "terms",
    "xidmetsertleri": "terms",
}

# Evaluated top to bottom; the first rule with a matching substring wins.
# Short tokens such as "laq" and "src" stay below the longer page names they
# could otherwise shadow. Changing the order changes navigation behaviour.
KEYWORD_RULES: tuple[tuple[ViewIdentifier, tuple[str, ...]], ...] = (
    ("home", ("anasehife", "anashe", "anasif")),
    ("about", ("haqqimizda",)),
    ("news", ("xeber", "xber", "xbr")),
    ("events", ("tedbir", "tdbir", "tebdir")),
    ("drivers", ("surucu", "srucu", "src")),
    ("gallery", ("qalereya", "galereya")),
    ("rules", ("qayda",)),
    ("contact", ("elaqe", "laq", "elaq")),
    ("privacy", ("privacy", "mexfilik")),
    ("terms", ("terms", "xidmetsert")),
)

DEFAULT_NAV_ITEMS: tuple[tuple[str, ViewIdentifier], ...] = (
    ("ANA SƏHİFƏ", "home"),
    ("HAQQIMIZDA", "about"),
    ("XƏBƏRLƏR", "news"),
    ("TƏDBİRLƏR", "events"),
    ("SÜRÜCÜLƏR", "drivers"),
    ("QALEREYA", "gallery"),
    ("QAYDALAR", "rules"),
    ("ƏLAQƏ", "contact"),
)

_LOGO_MARKERS = ("SITE_LOGO", "ALT:")
_LOGO_VALUE_MARKERS = ("SITE_LOGO", "FORSAJ LOGO")


@dc.dataclass(frozen=True, slots=True)
class NavItem:
    """Navigation entry with its resolved destination.

    Attributes
    ----------
    label : str
        Text shown in the menu.
    view : str
        A view identifier, or ``"external"`` when ``url`` leaves the site.
    url : str
        Original target URL; only meaningful for external items.
    """

    label: str
    view: str
    url: str = ""

    @property
    def is_external(self) -> bool:
        """Return True when the item opens an external URL."""
        return self.view == EXTERNAL


def _match_view_token(token: str) -> ResolvedView:
    if token in VIEW_IDS:
        return token
    return VIEW_ALIASES.get(token)


def _infer_from_token(token: str) -> ResolvedView:
    if not token:
        return None
    for view, keywords in KEYWORD_RULES:
        if any(keyword in token for keyword in keywords):
            return view
    return None


def infer_view_from_text(text: object) -> ResolvedView:
    """Return the view whose keyword rule matches ``text`` first, if any."""
    return _infer_from_token(normalize(text))


def _resolve_candidate(candidate: str) -> ResolvedView:
    """Apply the id, alias, and keyword steps to one URL component."""
    token = normalize(candidate)
    if not token:
        return None
    return _match_view_token(token) or _infer_from_token(token)


def _strip_www(host: str) -> str:
    return host[4:] if host.startswith("www.") else host


def _is_trusted_host(host: str, settings: SiteSettings) -> bool:
    host = _strip_www(host.lower())
    if not host:
        return True
    if settings.origin:
        try:
            origin_host = urlsplit(settings.origin).hostname or ""
        except ValueError:
            origin_host = ""
        if origin_host and host == _strip_www(origin_host.lower()):
            return True
    return any(domain and domain in host for domain in settings.trusted_domains)


def _resolve_from_url(target: str, settings: SiteSettings) -> ResolvedView:
    """Return a view, ``"external"``, or None when ``target`` is not a URL."""
    is_absolute = target.lower().startswith(("http://", "https://"))
    is_relative = target.startswith(("/", "?", "#")) and not target.startswith("//")
    if not (is_absolute or is_relative):
        return None
    try:
        parsed = urlsplit(target)
        host = parsed.hostname or ""
    except ValueError:
        logger.debug("Unparseable navigation URL", target=target)
        return None
    if is_absolute and not _is_trusted_host(host, settings):
        logger.debug("Navigation target on untrusted host", target=target, host=host)
        return EXTERNAL
    query = parse_qs(parsed.query)
    candidates = (
        parsed.path.strip("/"),
        parsed.fragment,
        first_non_empty(*query.get("view", [])),
        first_non_empty(*query.get("tab", [])),
    )
    for candidate in candidates:
        resolved = _resolve_candidate(candidate)
        if resolved:
            return resolved
    return None


def resolve_view(
    raw_target: object,
    label_hint: object = None,
    default_view: ViewIdentifier = DEFAULT_VIEW,
    *,
    settings: SiteSettings | None = None,
) -> ResolvedView:
    """Resolve a CMS navigation target to a view, ``"external"``, or None.

    Parameters
    ----------
    raw_target : object
        URL, slug, or view name authored in the CMS.
    label_hint : object, optional
        Visible label of the link; used for keyword inference.
    default_view : ViewIdentifier, optional
        Returned when the target is neither internal nor an http(s) URL.
    settings : SiteSettings, optional
        Site origin and trusted brand domains. Defaults to
        :class:`SiteSettings` with no origin and the built-in brand domains.

    Returns
    -------
    str or None
        One of :data:`VIEW_IDS`, ``"external"``, or None for "no navigation".
    """
    settings = settings or SiteSettings()
    target = "" if raw_target is None else str(raw_target).strip()
    if target == "#":
        return None
    hinted = infer_view_from_text(label_hint)
    if not target:
        return hinted

    token = normalize(target)
    direct = _match_view_token(token)
    if direct:
        return direct
    if hinted:
        return hinted

    from_url = _resolve_from_url(target, settings)
    if from_url:
        return from_url
    if target.lower().startswith(("http://", "https://")):
        return EXTERNAL
    return default_view


def _is_navigable(section: ContentSection) -> bool:
    label = section.label.upper()
    value = section.value.upper()
    if any(marker in label for marker in _LOGO_MARKERS):
        return False
    if any(marker in value for marker in _LOGO_VALUE_MARKERS):
        return False
    return bool(section.value.strip() or section.label.strip())


def build_nav_items(
    sections: cabc.Iterable[ContentSection],
    *,
    settings: SiteSettings | None = None,
    get_text: cabc.Callable[[str, str], str] | None = None,
) -> list[NavItem]:
    """Build deduplicated navigation items from navbar CMS sections.

    Label inference takes precedence over the section URL so a renamed menu
    entry keeps pointing at its page. Entries without a usable target point
    at the default view, duplicates keep their first occurrence, and an empty
    result falls back to the default menu.
    """
    settings = settings or SiteSettings()
    items: list[NavItem] = []
    seen: set[tuple[str, str]] = set()
    for section in sections:
        if not _is_navigable(section):
            continue
        fallback_name = first_non_empty(section.value, section.label).strip()
        label = get_text(section.id, fallback_name) if get_text else fallback_name
        view = (
            infer_view_from_text(fallback_name)
            or resolve_view(
                section.url,
                section.label,
                settings.default_view,
                settings=settings,
            )
            or settings.default_view
        )
        url = section.url.strip() if view == EXTERNAL else ""
        key = (view, url)
        if key in seen:
            continue
        seen.add(key)
        items.append(NavItem(label=label, view=view, url=url))

    if items:
        return items
    return [NavItem(label=label, view=view) for label, view in DEFAULT_NAV_ITEMS]


__all__ = [
    "DEFAULT_NAV_ITEMS",
    "KEYWORD_RULES",
    "VIEW_ALIASES",
    "NavItem",
    "build_nav_items",
    "infer_view_from_text",
    "resolve_view",
]
