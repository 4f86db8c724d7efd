"""Unit tests for shaping events, news, and video payloads."""

from __future__ import annotations

import datetime as dt

from forsaj_content.records import (
    EventRecord,
    normalize_event,
    normalize_events,
    normalize_news,
    normalize_videos,
    upcoming_events,
)

TODAY = dt.date(2026, 5, 17)


def test_normalize_event_derives_status_pdf_and_registration() -> None:
    event = normalize_event(
        {
            "id": 3,
            "title": "Qobustan Offroad",
            "date": "2026-06-01",
            "location": "Qobustan",
            "pdfURL": "/uploads/qobustan.pdf",
            "registrationEnabled": "Yox",
        },
        today=TODAY,
    )
    assert event == EventRecord(
        id=3,
        title="Qobustan Offroad",
        date="2026-06-01",
        location="Qobustan",
        pdf_url="/uploads/qobustan.pdf",
        status="planned",
        registration_enabled=False,
    )


def test_pdf_url_key_precedence_and_registration_default() -> None:
    event = normalize_event(
        {"title": "x", "date": "2020-01-01", "pdf_url": "/b.pdf", "pdfUrl": " ", "pdfURL": "/c.pdf"},
        today=TODAY,
    )
    assert event.pdf_url == "/b.pdf", "Blank pdfUrl must fall through to pdf_url"
    assert event.registration_enabled is True
    assert event.status == "past"
    assert event.id is None


def test_normalize_events_sorts_newest_first_and_skips_junk() -> None:
    raws = [
        {"id": 1, "date": "2025-03-01"},
        "broken",
        {"id": 2, "date": "2026-09-10"},
        {"id": 3, "date": "tezliklə"},
        {"id": 4, "date": "01.01.2026"},
    ]
    events = normalize_events(raws, today=TODAY)
    assert [event.id for event in events] == [2, 4, 1, 3], (
        "Expected date-descending order with undated events last"
    )


def test_upcoming_events_are_planned_and_soonest_first() -> None:
    events = normalize_events(
        [
            {"id": "a", "date": "2026-08-01"},
            {"id": "b", "date": "2026-06-01"},
            {"id": "c", "date": "2026-01-01"},
            {"id": "d", "date": "2027-01-01", "status": "bitib"},
            {"id": "e", "date": ""},
        ],
        today=TODAY,
    )
    assert [event.id for event in upcoming_events(events)] == ["b", "a", "e"]


def test_normalize_news_filters_sorts_and_previews() -> None:
    raws = [
        {"id": 1, "title": "Köhnə", "date": "2025-01-01", "status": "published", "description": "a"},
        {"id": 2, "title": "Qaralama", "date": "2026-01-01", "status": "draft"},
        {
            "id": 3,
            "title": "Yeni",
            "date": "2026-02-01",
            "status": "published",
            "description": "<p>Mövsüm&nbsp;başlayır [B]bu gün[/B] saat 10-da</p>",
        },
        {"id": 4, "title": "Orta", "date": "2025-06-01", "status": "published"},
    ]

    news = normalize_news(raws, limit=2, preview_limit=20)

    assert [item.id for item in news] == [3, 4]
    assert news[0].description == "Mövsüm başlayır bu…", (
        "Preview should be plain text cut to the limit with an ellipsis"
    )
    assert news[1].description == ""


def test_normalize_news_keeps_rich_text_without_preview() -> None:
    news = normalize_news(
        [{"id": 1, "date": "2026-01-01", "status": "published", "description": "a&nbsp;<b>b</b>"}]
    )
    assert news[0].description == "a <b>b</b>"


def test_normalize_videos() -> None:
    raws = [
        {"id": 1, "title": "Köhnə", "url": "https://youtu.be/aaaaaaaaaaa", "created_at": "2025-01-01T10:00:00Z"},
        {"id": 2, "title": "ID ilə", "videoId": "bbbbbbbbbbb", "thumbnail": "/t.jpg", "created_at": "2026-01-01"},
        {"id": 3, "title": "Link yoxdur", "url": "https://vimeo.com/1", "created_at": "2027-01-01"},
        {"id": 4, "title": "Tarixsiz", "youtubeUrl": "https://www.youtube.com/watch?v=ccccccccccc"},
        None,
    ]

    videos = normalize_videos(raws)

    assert [video.id for video in videos] == [2, 1, 4]
    assert videos[0].thumbnail == "/t.jpg"
    assert videos[1].video_id == "aaaaaaaaaaa"
    assert videos[1].thumbnail == "https://img.youtube.com/vi/aaaaaaaaaaa/maxresdefault.jpg"
    assert videos[2].url == "https://www.youtube.com/watch?v=ccccccccccc"


def test_non_list_payloads_yield_nothing() -> None:
    assert normalize_events({"id": 1}) == []
    assert normalize_news(None) == []
    assert normalize_videos("videos") == []


def test_events_and_videos_survive_out_of_range_offsets() -> None:
    events = normalize_events(
        [{"id": 1, "date": "9999-12-31T23:59:59-14:00"}, {"id": 2, "date": "2026-01-01"}],
        today=TODAY,
    )
    assert [event.id for event in events] == [1, 2]

    videos = normalize_videos(
        [
            {"id": 1, "videoId": "aaaaaaaaaaa", "created_at": "9999-12-31T23:59:59-14:00"},
            {"id": 2, "videoId": "bbbbbbbbbbb", "created_at": "2026-01-01"},
        ]
    )
    assert [video.id for video in videos] == [2, 1], (
        "Timestamps that cannot convert to UTC sort as undated"
    )
