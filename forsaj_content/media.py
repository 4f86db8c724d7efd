"""Extract YouTube video ids from the URL dialects editors paste into the CMS.

Videos arrive as ``youtu.be`` short links, ``watch?v=`` URLs, ``/embed/`` and
``/shorts/`` paths, or as free text that merely contains one of those. The
extractor tries a structured parse first and falls back to a single regex scan
so it never raises on malformed input.

Examples
--------
>>> extract_youtube_id("https://youtu.be/dQw4w9WgXcQ")
'dQw4w9WgXcQ'
>>> extract_youtube_id("https://youtube.com/watch?v=dQw4w9WgXcQ&t=10")
'dQw4w9WgXcQ'
"""

from __future__ import annotations

import re
from urllib.parse import parse_qs, urlencode, urlsplit

import structlog

from ._constants import YOUTUBE_ID_LENGTH

logger = structlog.get_logger(__name__)

YOUTUBE_ID_PATTERN = re.compile(
    r"(?:youtu\.be/|youtube\.com/(?:watch\?.*v=|embed/|shorts/))([A-Za-z0-9_-]{11})"
)
THUMBNAIL_TEMPLATE = "https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"
EMBED_TEMPLATE = "https://www.youtube-nocookie.com/embed/{video_id}?{query}"


def _valid(candidate: str | None) -> str | None:
    if candidate and len(candidate) == YOUTUBE_ID_LENGTH:
        return candidate
    return None


def _from_parsed_url(url: str) -> tuple[bool, str | None]:
    """Return ``(handled, video_id)`` for URLs on a recognised YouTube host."""
    try:
        parsed = urlsplit(url)
    except ValueError:
        return False, None
    if not parsed.scheme or not parsed.netloc:
        return False, None
    host = (parsed.hostname or "").lower()
    segments = [segment for segment in parsed.path.split("/") if segment]
    if "youtu.be" in host:
        return True, _valid(segments[0] if segments else None)
    if "youtube.com" in host:
        by_query = parse_qs(parsed.query).get("v", [])
        if by_query and _valid(by_query[0]):
            return True, by_query[0]
        if len(segments) > 1:
            candidate = segments[1]
        elif segments:
            candidate = segments[0]
        else:
            candidate = None
        return True, _valid(candidate)
    return False, None


def extract_youtube_id(url: object) -> str | None:
    """Return the 11-character YouTube id referenced by ``url``, or ``None``.

    Parameters
    ----------
    url : object
        Any CMS or API value. Non-strings and blank strings yield ``None``.

    Returns
    -------
    str or None
        Exactly an 11-character id, or ``None`` when nothing usable is found.
    """
    if not isinstance(url, str):
        return None
    text = url.strip()
    if not text:
        return None
    handled, video_id = _from_parsed_url(text)
    if handled:
        return video_id
    match = YOUTUBE_ID_PATTERN.search(text)
    if match is None:
        logger.debug("No YouTube id found", url=text)
        return None
    return match.group(1)


def youtube_thumbnail_url(video_id: str | None) -> str:
    """Return the max-resolution thumbnail URL for ``video_id`` or ``""``."""
    if not video_id:
        return ""
    return THUMBNAIL_TEMPLATE.format(video_id=video_id)


def youtube_embed_url(video_id: str | None, *, autoplay: bool = False) -> str:
    """Return a privacy-enhanced embed URL for ``video_id`` or ``""``."""
    if not video_id:
        return ""
    query = urlencode(
        {
            "autoplay": 1 if autoplay else 0,
            "rel": 0,
            "modestbranding": 1,
            "playsinline": 1,
        }
    )
    return EMBED_TEMPLATE.format(video_id=video_id, query=query)


__all__ = [
    "YOUTUBE_ID_PATTERN",
    "extract_youtube_id",
    "youtube_embed_url",
    "youtube_thumbnail_url",
]
