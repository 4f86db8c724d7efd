"""Unit tests for YouTube id extraction and the derived media URLs."""

from __future__ import annotations

import pytest

from forsaj_content.media import (
    extract_youtube_id,
    youtube_embed_url,
    youtube_thumbnail_url,
)

VIDEO_ID = "dQw4w9WgXcQ"


@pytest.mark.parametrize(
    "url",
    [
        f"https://youtu.be/{VIDEO_ID}",
        f"https://youtu.be/{VIDEO_ID}?si=share",
        f"https://youtube.com/watch?v={VIDEO_ID}&t=10",
        f"https://www.youtube.com/watch?feature=share&v={VIDEO_ID}",
        f"https://www.youtube.com/embed/{VIDEO_ID}",
        f"https://youtube.com/shorts/{VIDEO_ID}",
        f"https://m.youtube.com/{VIDEO_ID}",
        f"  https://youtu.be/{VIDEO_ID}  ",
    ],
)
def test_extracts_id_from_youtube_urls(url: str) -> None:
    assert extract_youtube_id(url) == VIDEO_ID, f"Expected {VIDEO_ID} from {url!r}"


@pytest.mark.parametrize(
    "url",
    [
        "not a url",
        "",
        "https://youtu.be/short",
        "https://youtube.com/watch?v=abc",
        "https://youtube.com/",
        "https://example.com/watch?v=dQw4w9WgXcQ",
        "http://[::1",
    ],
)
def test_returns_none_without_a_valid_id(url: str) -> None:
    assert extract_youtube_id(url) is None, f"Expected no id for {url!r}"


@pytest.mark.parametrize("value", [None, 42, ["https://youtu.be/dQw4w9WgXcQ"]])
def test_non_string_input_returns_none(value: object) -> None:
    assert extract_youtube_id(value) is None


def test_regex_fallback_finds_id_in_free_text() -> None:
    """Text without a scheme still yields an id through the regex scan."""
    text = f"Bax: youtube.com/embed/{VIDEO_ID} və paylaş"
    assert extract_youtube_id(text) == VIDEO_ID


def test_thumbnail_and_embed_urls() -> None:
    assert youtube_thumbnail_url(VIDEO_ID) == (
        f"https://img.youtube.com/vi/{VIDEO_ID}/maxresdefault.jpg"
    )
    assert youtube_thumbnail_url(None) == ""
    embed = youtube_embed_url(VIDEO_ID, autoplay=True)
    assert embed.startswith(f"https://www.youtube-nocookie.com/embed/{VIDEO_ID}?"), (
        "Embeds should use the privacy-enhanced host"
    )
    assert "autoplay=1" in embed
    assert "rel=0" in embed
    assert youtube_embed_url("") == ""
