"""Coerce loosely-typed CMS and API values into statuses, flags, and URLs.

Examples
--------
>>> normalize_event_status("Keçmiş", None)
'past'
>>> normalize_booleanish("Yox", default=True)
False
>>> resolve_social_url("//instagram.com/forsaj")
'https://instagram.com/forsaj'
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import re
import typing as typ

import structlog

from .normalizer import normalize

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config.models import ContentSection

logger = structlog.get_logger(__name__)

EventStatus = typ.Literal["planned", "past"]
SocialPlatform = typ.Literal["instagram", "youtube", "facebook"]

PAST_STATUS_TOKENS = frozenset(
    {"past", "kecmis", "bitib", "bitmis", "basacatib", "completed", "finished"}
)
PLANNED_STATUS_TOKENS = frozenset(
    {"planned", "upcoming", "gelecek", "planlasdirilib", "planlanib", "scheduled"}
)
DISABLED_TOKENS = frozenset(
    {
        "false",
        "0",
        "no",
        "off",
        "disabled",
        "inactive",
        "yox",
        "xeyr",
        "deaktiv",
        "qeyriaktiv",
        "passiv",
        "sonduruldu",
        "baglidir",
    }
)
DAY_FIRST_FORMATS = ("%d.%m.%Y", "%d/%m/%Y")

SOCIAL_ORDER: tuple[SocialPlatform, ...] = ("instagram", "youtube", "facebook")
SOCIAL_SETTING_KEYS: dict[SocialPlatform, str] = {
    "instagram": "SOCIAL_INSTAGRAM",
    "youtube": "SOCIAL_YOUTUBE",
    "facebook": "SOCIAL_FACEBOOK",
}

_KEY_LIKE_VALUE = re.compile(r"^[A-Z0-9_]+$")
_HAS_SCHEME = re.compile(r"^[a-z][a-z0-9+.-]*:", re.IGNORECASE)
_BARE_DOMAIN = re.compile(r"^[\w.-]+\.[a-z]{2,}(?:[/?#]|$)", re.IGNORECASE)


@dc.dataclass(frozen=True, slots=True)
class SocialLink:
    """Footer or contact-page link to one of the club's social profiles."""

    platform: SocialPlatform
    url: str


def _local_today() -> dt.date:
    return dt.date.today()  # noqa: DTZ011


def _parse_day_first(text: str) -> dt.date | None:
    for fmt in DAY_FIRST_FORMATS:
        try:
            return dt.datetime.strptime(text, fmt).date()  # noqa: DTZ007
        except ValueError:
            continue
    logger.debug("Unparseable event date", raw_date=text)
    return None


def parse_event_date(raw_date: object) -> dt.date | None:
    """Return the local calendar date of ``raw_date`` or None.

    Accepts ``date``/``datetime`` objects, ISO 8601 strings, and the
    day-first ``DD.MM.YYYY`` and ``DD/MM/YYYY`` forms. Aware datetimes are
    converted to local time before the time of day is dropped.
    """
    match raw_date:
        case dt.datetime():
            moment = raw_date
        case dt.date():
            return raw_date
        case str() as text:
            sanitized = text.strip()
            if not sanitized:
                return None
            if sanitized.endswith("Z"):
                sanitized = sanitized[:-1] + "+00:00"
            try:
                moment = dt.datetime.fromisoformat(sanitized)
            except ValueError:
                return _parse_day_first(sanitized)
        case _:
            return None
    if moment.tzinfo is not None:
        try:
            moment = moment.astimezone()
        except (OverflowError, ValueError):
            logger.debug("Event date outside local range", date=str(raw_date))
    return moment.date()


def normalize_event_status(
    raw_status: object,
    raw_date: object,
    *,
    today: dt.date | None = None,
) -> EventStatus:
    """Return ``"past"`` or ``"planned"`` for an event.

    Parameters
    ----------
    raw_status : object
        Status as authored, in English or Azerbaijani, any case.
    raw_date : object
        Event date used when the status is missing or unrecognized.
    today : datetime.date, optional
        Reference day; defaults to the local current date.

    Returns
    -------
    str
        ``"past"`` when the status says so or the date is strictly before
        ``today``; ``"planned"`` otherwise, including unparseable dates.
    """
    token = normalize(raw_status)
    if token in PAST_STATUS_TOKENS:
        return "past"
    if token in PLANNED_STATUS_TOKENS:
        return "planned"
    event_date = parse_event_date(raw_date)
    if event_date is None:
        return "planned"
    reference = today or _local_today()
    return "past" if event_date < reference else "planned"


def normalize_booleanish(raw: object, default: bool = True) -> bool:  # noqa: FBT001, FBT002
    """Return False for recognized "off" values, ``default`` for the rest.

    Booleans pass through unchanged. Strings and integers are folded with
    :func:`~forsaj_content.normalizer.normalize` before the lookup, so
    ``"Söndürüldü"`` and ``0`` both disable.
    """
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (str, int)) and normalize(raw) in DISABLED_TOKENS:
        return False
    return default


def resolve_social_url(raw: object) -> str:
    """Return a usable absolute social URL, or ``""`` for placeholders.

    Examples
    --------
    >>> resolve_social_url("SOCIAL_INSTAGRAM")
    ''
    >>> resolve_social_url("youtube.com/@forsaj")
    'https://youtube.com/@forsaj'
    """
    value = "" if raw is None else str(raw).strip()
    if not value or value == "#" or _KEY_LIKE_VALUE.match(value):
        return ""
    if _HAS_SCHEME.match(value):
        return value
    if value.startswith("//"):
        return f"https:{value}"
    if _BARE_DOMAIN.match(value):
        return f"https://{value}"
    return value


def detect_social_platform(section: ContentSection) -> SocialPlatform | None:
    """Return the platform named in a section's id or label."""
    haystack = f"{section.id} {section.label}".lower()
    if "insta" in haystack:
        return "instagram"
    if "youtube" in haystack:
        return "youtube"
    if "facebook" in haystack or "fb" in haystack:
        return "facebook"
    return None


def resolve_social_links(
    sections: cabc.Iterable[ContentSection],
    get_general_text: cabc.Callable[[str], str] | None = None,
) -> list[SocialLink]:
    """Return the club's social links in a fixed platform order.

    The last non-empty URL per platform in ``sections`` wins; missing
    platforms fall back to the ``SOCIAL_*`` general settings. Platforms
    without any usable URL are omitted.
    """
    by_platform: dict[SocialPlatform, str] = {}
    for section in sections:
        platform = detect_social_platform(section)
        if platform is None:
            continue
        url = resolve_social_url(section.value)
        if url:
            by_platform[platform] = url

    links: list[SocialLink] = []
    for platform in SOCIAL_ORDER:
        url = by_platform.get(platform, "")
        if not url and get_general_text is not None:
            url = resolve_social_url(get_general_text(SOCIAL_SETTING_KEYS[platform]))
        if url:
            links.append(SocialLink(platform=platform, url=url))
    return links


__all__ = [
    "DISABLED_TOKENS",
    "PAST_STATUS_TOKENS",
    "PLANNED_STATUS_TOKENS",
    "EventStatus",
    "SocialLink",
    "detect_social_platform",
    "normalize_booleanish",
    "normalize_event_status",
    "parse_event_date",
    "resolve_social_links",
    "resolve_social_url",
]
