"""Utility helpers shared by the loaders and the section builders."""

from __future__ import annotations

import typing as typ

from .models import ContentSection

if typ.TYPE_CHECKING:
    import collections.abc as cabc


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_text(value: object | None) -> str:
    """Return ``value`` as a string, mapping ``None`` to ``""``."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def is_blank(value: object | None) -> bool:
    """Return True when ``value`` is None or whitespace-only text."""
    return _optional_str(value) is None


def first_non_empty(*candidates: object | None, default: str = "") -> str:
    """Return the first candidate that is a non-blank string.

    Replaces ``a or b or c`` chains so precedence can be read and tested in
    one place.

    Examples
    --------
    >>> first_non_empty(None, "  ", "pilot", "safety")
    'pilot'
    >>> first_non_empty("", default="home")
    'home'
    """
    for candidate in candidates:
        if isinstance(candidate, str) and candidate.strip():
            return candidate
    return default


def _build_section(payload: object) -> ContentSection | None:
    """Build a ContentSection from a raw mapping, skipping entries without id."""
    match payload:
        case {"id": raw_id, **rest}:
            pass
        case _:
            return None
    section_id = _optional_str(raw_id)
    if section_id is None:
        return None
    return ContentSection(
        id=section_id,
        label=_as_text(rest.get("label")),
        value=_as_text(rest.get("value")),
        url=_as_text(rest.get("url")),
    )


def _build_sections(
    entries: cabc.Iterable[object] | None,
) -> tuple[ContentSection, ...]:
    """Build the ordered section tuple for one page."""
    if not isinstance(entries, list):
        return ()
    sections: list[ContentSection] = []
    for entry in entries:
        section = _build_section(entry)
        if section is not None:
            sections.append(section)
    return tuple(sections)


__all__ = [
    "_as_text",
    "_build_section",
    "_build_sections",
    "_optional_str",
    "first_non_empty",
    "is_blank",
]
