"""Unit tests for plain-text extraction from CMS rich text."""

from __future__ import annotations

import pytest

from forsaj_content.richtext import normalize_rich_text_spacing, preview_text, to_plain_text


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("<p>PİLOTLAR</p>", "PİLOTLAR"),
        ("&lt;b&gt;YARIŞLAR&lt;/b&gt;", "YARIŞLAR"),
        ("&amp;lt;P&amp;gt;Nested&amp;lt;/P&amp;gt;", "Nested"),
        ("[B]Qalın[/B] mətn", "Qalın mətn"),
        ("Bir&nbsp;iki  üç\n\tdörd", "Bir iki üç dörd"),
        ("Tom &amp; Jerry", "Tom & Jerry"),
        ("   ", ""),
        (None, ""),
        (140, "140"),
    ],
)
def test_to_plain_text(raw: object, expected: str) -> None:
    assert to_plain_text(raw) == expected


def test_normalize_rich_text_spacing_keeps_markup() -> None:
    raw = "<p>Start&NBSP;vaxtı: <b>10:00</b></p>"
    assert normalize_rich_text_spacing(raw) == "<p>Start vaxtı: <b>10:00</b></p>"
    assert normalize_rich_text_spacing(None) == ""


@pytest.mark.parametrize(
    ("raw", "limit", "expected"),
    [
        ("Qısa", 10, "Qısa"),
        ("<p>Offroad mövsümü açılır</p>", 10, "Offroad m…"),
        ("Bir iki üç", 5, "Bir…"),
        ("Mətn", 0, "Mətn"),
        ("", 5, ""),
    ],
)
def test_preview_text(raw: str, limit: int, expected: str) -> None:
    assert preview_text(raw, limit) == expected
