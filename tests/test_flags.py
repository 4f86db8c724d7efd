"""Unit tests for event status, booleanish flags, and social links.

Date-dependent cases pass ``today`` explicitly so they hold on any day; one
test patches the clock with pytest-mock to cover the default reference day.
"""

from __future__ import annotations

import datetime as dt
import typing as typ

import pytest

from forsaj_content import flags
from forsaj_content.config import ContentSection
from forsaj_content.flags import (
    SocialLink,
    normalize_booleanish,
    normalize_event_status,
    parse_event_date,
    resolve_social_links,
    resolve_social_url,
)

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture

TODAY = dt.date(2026, 5, 17)


def test_date_fallback_for_missing_status() -> None:
    assert normalize_event_status(None, "2000-01-01") == "past"
    assert normalize_event_status(None, "2999-01-01") == "planned"


def test_event_dated_today_is_planned() -> None:
    assert normalize_event_status(None, "2026-05-17", today=TODAY) == "planned"
    assert normalize_event_status(None, "2026-05-17T00:00:00", today=TODAY) == "planned"
    assert normalize_event_status(None, "2026-05-16T23:59:59", today=TODAY) == "past", (
        "Any time on the previous day is strictly before today"
    )


@pytest.mark.parametrize(
    "status", ["past", "Keçmiş", "BİTİB", "bitmiş", "Başa çatıb", "COMPLETED", "finished"]
)
def test_past_tokens(status: str) -> None:
    assert normalize_event_status(status, "2999-01-01", today=TODAY) == "past"


@pytest.mark.parametrize(
    "status", ["planned", "Upcoming", "GƏLƏCƏK", "planlaşdırılıb", "Planlanıb", "scheduled"]
)
def test_planned_tokens(status: str) -> None:
    assert normalize_event_status(status, "2000-01-01", today=TODAY) == "planned"


def test_unrecognized_status_falls_through_to_date() -> None:
    assert normalize_event_status("BAĞLI", "2000-01-01", today=TODAY) == "past"
    assert normalize_event_status("BAĞLI", "2999-01-01", today=TODAY) == "planned"


@pytest.mark.parametrize("raw_date", [None, "", "sabah", "32.13.2026", 20260101])
def test_unparseable_dates_are_planned(raw_date: object) -> None:
    assert normalize_event_status(None, raw_date, today=TODAY) == "planned"


@pytest.mark.parametrize(
    ("raw_date", "expected"),
    [
        ("16.05.2026", dt.date(2026, 5, 16)),
        ("16/05/2026", dt.date(2026, 5, 16)),
        ("2026-05-16", dt.date(2026, 5, 16)),
        (dt.date(2026, 1, 2), dt.date(2026, 1, 2)),
        (dt.datetime(2026, 1, 2, 15, 30), dt.date(2026, 1, 2)),
    ],
)
def test_parse_event_date_formats(raw_date: object, expected: dt.date) -> None:
    assert parse_event_date(raw_date) == expected


def test_default_reference_day_is_local_today(mocker: MockerFixture) -> None:
    mocker.patch.object(flags, "_local_today", return_value=dt.date(2030, 1, 1))
    assert normalize_event_status(None, "2029-12-31") == "past"


@pytest.mark.parametrize(
    "raw",
    ["false", "0", "No", "OFF", "disabled", "inactive", "Yox", "xeyr", "Deaktiv",
     "Qeyri-aktiv", "passiv", "Söndürüldü", "Bağlıdır", 0],
)
def test_booleanish_disabling_vocabulary(raw: object) -> None:
    assert normalize_booleanish(raw, default=True) is False


@pytest.mark.parametrize(
    ("raw", "default", "expected"),
    [
        (True, False, True),
        (False, True, False),
        ("", True, True),
        (None, True, True),
        ("bəli", False, False),
        ("yes", True, True),
        (1, False, False),
        (0.0, True, True),
    ],
)
def test_booleanish_defaults(raw: object, default: bool, expected: bool) -> None:  # noqa: FBT001
    assert normalize_booleanish(raw, default=default) is expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("", ""),
        (None, ""),
        ("#", ""),
        ("SOCIAL_INSTAGRAM", ""),
        ("https://instagram.com/forsaj", "https://instagram.com/forsaj"),
        ("mailto:info@forsaj.az", "mailto:info@forsaj.az"),
        ("//youtube.com/@forsaj", "https://youtube.com/@forsaj"),
        ("facebook.com/forsaj", "https://facebook.com/forsaj"),
        ("www.instagram.com", "https://www.instagram.com"),
        ("@forsaj", "@forsaj"),
    ],
)
def test_resolve_social_url(raw: str | None, expected: str) -> None:
    assert resolve_social_url(raw) == expected


def test_social_links_last_value_wins_and_general_fallback() -> None:
    sections = [
        ContentSection("SOCIAL_1", label="Instagram", value="instagram.com/old"),
        ContentSection("SOCIAL_2", label="Instagram", value="instagram.com/new"),
        ContentSection("SOCIAL_3", label="Instagram", value="#"),
        ContentSection("FB_LINK", value="FB_LINK"),
        ContentSection("PHONE", label="Telefon", value="+994"),
    ]
    general = {"SOCIAL_FACEBOOK": "facebook.com/forsaj", "SOCIAL_YOUTUBE": "SOCIAL_YOUTUBE"}

    links = resolve_social_links(sections, lambda key: general.get(key, ""))

    assert links == [
        SocialLink("instagram", "https://instagram.com/new"),
        SocialLink("facebook", "https://facebook.com/forsaj"),
    ], "Expected fixed platform order with unfilled keys omitted"


def test_social_links_without_fallback() -> None:
    sections = [ContentSection("yt", label="YouTube kanalı", value="https://youtube.com/@forsaj")]
    assert resolve_social_links(sections) == [
        SocialLink("youtube", "https://youtube.com/@forsaj")
    ]


@pytest.mark.parametrize(
    ("raw_date", "expected_status"),
    [
        ("0001-01-01T00:00:00+14:00", "past"),
        ("9999-12-31T23:59:59-14:00", "planned"),
    ],
)
def test_offsets_at_the_calendar_limits_keep_their_written_date(
    raw_date: str, expected_status: str
) -> None:
    assert parse_event_date(raw_date) == dt.date.fromisoformat(raw_date[:10]), (
        "Dates that cannot shift into local time keep the written calendar day"
    )
    assert normalize_event_status(None, raw_date, today=TODAY) == expected_status
