"""Shape raw ``/api/events``, ``/api/news`` and ``/api/videos`` payloads.

The REST endpoints return loosely-typed JSON arrays edited by hand in the
admin panel. These helpers skip entries that are not objects, derive the
fields pages rely on (event status, registration flag, video id and
thumbnail, news previews) and apply the listing order each page uses.
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import typing as typ

import structlog

from .config.helpers import _as_text, first_non_empty
from .flags import EventStatus, normalize_booleanish, normalize_event_status, parse_event_date
from .media import extract_youtube_id, youtube_thumbnail_url
from .richtext import normalize_rich_text_spacing, preview_text

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = structlog.get_logger(__name__)

RecordId = int | str | None

PUBLISHED_STATUS = "published"
PDF_URL_KEYS = ("pdfUrl", "pdf_url", "pdfURL")
REGISTRATION_KEYS = ("registration_enabled", "registrationEnabled")
VIDEO_ID_KEYS = ("videoId", "video_id")
VIDEO_URL_KEYS = ("youtubeUrl", "url")

_EPOCH = dt.datetime.min.replace(tzinfo=dt.UTC)


@dc.dataclass(slots=True)
class EventRecord:
    """An event with its derived status and registration flag."""

    id: RecordId
    title: str
    date: str
    location: str = ""
    category: str = ""
    img: str = ""
    description: str = ""
    rules: str = ""
    pdf_url: str = ""
    status: EventStatus = "planned"
    registration_enabled: bool = True


@dc.dataclass(slots=True)
class NewsRecord:
    """A published news article."""

    id: RecordId
    title: str
    date: str
    img: str = ""
    description: str = ""
    status: str = PUBLISHED_STATUS


@dc.dataclass(slots=True)
class VideoRecord:
    """A video archive entry with a playable YouTube id."""

    id: RecordId
    title: str
    url: str
    video_id: str
    thumbnail: str = ""
    created_at: str = ""


def _record_id(value: object) -> RecordId:
    match value:
        case bool():
            return str(value)
        case int() | str() | None:
            return value
        case _:
            return str(value)


def _first_key(raw: cabc.Mapping[str, object], keys: cabc.Iterable[str]) -> str:
    return first_non_empty(*(_as_text(raw.get(key)).strip() for key in keys))


def _mappings(raws: object, kind: str) -> list[cabc.Mapping[str, object]]:
    if not isinstance(raws, list):
        return []
    entries = [raw for raw in raws if isinstance(raw, dict)]
    if len(entries) != len(raws):
        logger.debug("Skipped non-object records", kind=kind, skipped=len(raws) - len(entries))
    return entries


def _parse_moment(value: object) -> dt.datetime | None:
    """Return a timezone-aware UTC datetime parsed from ``value``, or None."""
    match value:
        case dt.datetime():
            parsed = value
        case str() as text:
            sanitized = text.strip()
            if not sanitized:
                return None
            if sanitized.endswith("Z"):
                sanitized = sanitized[:-1] + "+00:00"
            try:
                parsed = dt.datetime.fromisoformat(sanitized)
            except ValueError:
                return None
        case _:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.UTC)
    try:
        return parsed.astimezone(dt.UTC)
    except (OverflowError, ValueError):
        logger.debug("Timestamp outside UTC range", value=str(value))
        return None


def _date_key(value: object) -> dt.date:
    return parse_event_date(value) or dt.date.min


def normalize_event(
    raw: cabc.Mapping[str, object], *, today: dt.date | None = None
) -> EventRecord:
    """Return a typed event from one ``/api/events`` entry.

    ``pdf_url`` reads ``pdfUrl``, ``pdf_url`` or ``pdfURL``; registration stays
    enabled unless ``registration_enabled`` holds a recognized "off" value.
    """
    date = _as_text(raw.get("date"))
    registration = next(
        (raw[key] for key in REGISTRATION_KEYS if raw.get(key) is not None), None
    )
    return EventRecord(
        id=_record_id(raw.get("id")),
        title=_as_text(raw.get("title")),
        date=date,
        location=_as_text(raw.get("location")),
        category=_as_text(raw.get("category")),
        img=_as_text(raw.get("img")),
        description=_as_text(raw.get("description")),
        rules=_as_text(raw.get("rules")),
        pdf_url=_first_key(raw, PDF_URL_KEYS),
        status=normalize_event_status(raw.get("status"), raw.get("date"), today=today),
        registration_enabled=normalize_booleanish(registration, default=True),
    )


def normalize_events(raws: object, *, today: dt.date | None = None) -> list[EventRecord]:
    """Return all events, newest date first; undated events go last."""
    events = [normalize_event(raw, today=today) for raw in _mappings(raws, "event")]
    return sorted(events, key=lambda event: _date_key(event.date), reverse=True)


def upcoming_events(events: cabc.Iterable[EventRecord]) -> list[EventRecord]:
    """Return planned events, soonest first."""
    planned = [event for event in events if event.status == "planned"]
    return sorted(
        planned,
        key=lambda event: (parse_event_date(event.date) is None, _date_key(event.date)),
    )


def normalize_news(
    raws: object,
    *,
    limit: int | None = None,
    preview_limit: int | None = None,
) -> list[NewsRecord]:
    """Return published articles, newest first.

    Parameters
    ----------
    raws : object
        Decoded ``/api/news`` payload.
    limit : int, optional
        Keep at most this many articles (the home page shows three).
    preview_limit : int, optional
        Replace each description with a plain-text preview of this length.
    """
    published = [
        raw for raw in _mappings(raws, "news") if raw.get("status") == PUBLISHED_STATUS
    ]
    published.sort(key=lambda raw: _date_key(raw.get("date")), reverse=True)
    if limit is not None:
        published = published[: max(limit, 0)]
    records: list[NewsRecord] = []
    for raw in published:
        description = normalize_rich_text_spacing(raw.get("description"))
        if preview_limit is not None:
            description = preview_text(description, preview_limit)
        records.append(
            NewsRecord(
                id=_record_id(raw.get("id")),
                title=_as_text(raw.get("title")),
                date=_as_text(raw.get("date")),
                img=_as_text(raw.get("img")),
                description=description,
            )
        )
    return records


def normalize_video(raw: cabc.Mapping[str, object]) -> VideoRecord | None:
    """Return a playable video, or None when no YouTube id can be found."""
    url = _first_key(raw, VIDEO_URL_KEYS)
    video_id = _first_key(raw, VIDEO_ID_KEYS) or extract_youtube_id(url) or ""
    if not video_id:
        logger.debug("Skipped video without YouTube id", id=raw.get("id"), url=url)
        return None
    return VideoRecord(
        id=_record_id(raw.get("id")),
        title=_as_text(raw.get("title")),
        url=url,
        video_id=video_id,
        thumbnail=first_non_empty(
            _as_text(raw.get("thumbnail")), default=youtube_thumbnail_url(video_id)
        ),
        created_at=_as_text(raw.get("created_at")),
    )


def normalize_videos(raws: object) -> list[VideoRecord]:
    """Return playable videos, most recently created first."""
    entries = sorted(
        _mappings(raws, "video"),
        key=lambda raw: _parse_moment(raw.get("created_at")) or _EPOCH,
        reverse=True,
    )
    videos: list[VideoRecord] = []
    for raw in entries:
        video = normalize_video(raw)
        if video is not None:
            videos.append(video)
    return videos


__all__ = [
    "EventRecord",
    "NewsRecord",
    "VideoRecord",
    "normalize_event",
    "normalize_events",
    "normalize_news",
    "normalize_video",
    "normalize_videos",
    "upcoming_events",
]
