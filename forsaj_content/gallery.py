"""Prepare gallery photos and group them into a photo grid.

Photos from ``/api/gallery-photos`` either stand alone or belong to a named
album. Photos in the catch-all archive stay individual tiles; every named
album collapses into one tile placed where its first photo appeared.

Examples
--------
>>> photos = prepare_photos(
...     [
...         {"url": "/a.jpg", "album": "Rally 2024"},
...         {"url": "/b.jpg"},
...         {"url": "/c.jpg", "album": "rally  2024"},
...     ]
... )
>>> [type(item).__name__ for item in build_photo_grid(photos)]
['Album', 'SinglePhoto']
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import structlog

from ._constants import DEFAULT_ALBUM_KEYS
from .config.helpers import first_non_empty
from .normalizer import normalize

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = structlog.get_logger(__name__)


@dc.dataclass(frozen=True, slots=True)
class Photo:
    """A gallery photo with a guaranteed source and title."""

    id: str
    src: str
    title: str
    album: str = ""


@dc.dataclass(slots=True)
class SinglePhoto:
    """Grid tile showing one photo."""

    key: str
    photo: Photo


@dc.dataclass(slots=True)
class Album:
    """Grid tile collecting the photos of one named album."""

    key: str
    title: str
    photos: list[Photo] = dc.field(default_factory=list)


PhotoGridItem = SinglePhoto | Album


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def album_key(album: object) -> str:
    """Return the grouping key of an album name."""
    return normalize(album)


def is_named_album(album: object) -> bool:
    """Return True unless ``album`` is empty or the general archive."""
    return album_key(album) not in DEFAULT_ALBUM_KEYS


def prepare_photos(raw_photos: object) -> list[Photo]:
    """Return displayable photos from a raw ``/api/gallery-photos`` payload.

    Entries without ``url`` or ``path`` are dropped. Titles fall back to
    ``alt`` and then to ``Şəkil <n>``; ids fall back to ``<index>-<src>``.
    """
    if not isinstance(raw_photos, list):
        return []
    photos: list[Photo] = []
    for index, raw in enumerate(raw_photos):
        if not isinstance(raw, dict):
            continue
        src = _text(first_non_empty(_text(raw.get("url")), _text(raw.get("path"))))
        if not src:
            logger.debug("Skipped gallery photo without source", index=index)
            continue
        album = first_non_empty(_text(raw.get("album")), _text(raw.get("event")))
        title = first_non_empty(
            _text(raw.get("title")),
            _text(raw.get("alt")),
            default=f"Şəkil {index + 1}",
        )
        raw_id = raw.get("id")
        photo_id = f"{index}-{src}" if raw_id is None else str(raw_id)
        photos.append(Photo(id=photo_id, src=src, title=title, album=album))
    return photos


def build_photo_grid(photos: cabc.Iterable[Photo]) -> list[PhotoGridItem]:
    """Group ``photos`` into grid tiles, keeping first-seen order."""
    items: list[PhotoGridItem] = []
    albums: dict[str, Album] = {}
    for index, photo in enumerate(photos):
        if not is_named_album(photo.album):
            items.append(SinglePhoto(key=f"photo-{photo.id}-{index}", photo=photo))
            continue
        key = album_key(photo.album)
        existing = albums.get(key)
        if existing is not None:
            existing.photos.append(photo)
            continue
        album = Album(key=f"album-{key}", title=photo.album, photos=[photo])
        albums[key] = album
        items.append(album)
    return items


__all__ = [
    "Album",
    "Photo",
    "PhotoGridItem",
    "SinglePhoto",
    "album_key",
    "build_photo_grid",
    "is_named_album",
    "prepare_photos",
]
