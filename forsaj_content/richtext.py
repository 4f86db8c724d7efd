"""Plain-text helpers for CMS rich text.

CMS values are often HTML that has been entity-encoded more than once
(``&amp;lt;P&amp;gt;``) or BBCode meant for the markup transformer. Cards and
stat tiles need the bare text, so these helpers peel the encoding layers off
with BeautifulSoup and collapse whitespace.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup

MAX_DECODE_ROUNDS = 4
ELLIPSIS = "…"

_NBSP_ENTITY = re.compile(r"&nbsp;", re.IGNORECASE)
_BBCODE_TAG = re.compile(r"\[[^\]]+\]")
_WHITESPACE = re.compile(r"\s+")


def _text_content(markup: str) -> str:
    return BeautifulSoup(markup, "html.parser").get_text()


def normalize_rich_text_spacing(value: object) -> str:
    """Replace ``&nbsp;`` entities and NBSP characters with plain spaces."""
    text = "" if value is None else str(value)
    return _NBSP_ENTITY.sub(" ", text).replace("\u00a0", " ")


def to_plain_text(value: object) -> str:
    """Return ``value`` as single-spaced plain text.

    Nested entity encodings are decoded for up to four rounds, then residual
    HTML and BBCode tags are stripped.
    """
    if value is None:
        return ""
    current = str(value)
    if not current.strip():
        return ""
    for _ in range(MAX_DECODE_ROUNDS):
        decoded = _text_content(current).strip()
        if not decoded or decoded == current:
            break
        current = decoded
    text = _BBCODE_TAG.sub(" ", _text_content(current))
    return _WHITESPACE.sub(" ", text.replace("\u00a0", " ")).strip()


def preview_text(value: object, limit: int) -> str:
    """Return plain text truncated to ``limit`` characters with an ellipsis."""
    plain = to_plain_text(value)
    if not plain or limit <= 0 or len(plain) <= limit:
        return plain
    return f"{plain[: limit - 1].rstrip()}{ELLIPSIS}"


__all__ = ["normalize_rich_text_spacing", "preview_text", "to_plain_text"]
