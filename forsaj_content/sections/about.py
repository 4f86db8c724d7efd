"""About-page stats and value cards."""

from __future__ import annotations

import typing as typ

from forsaj_content.config.helpers import first_non_empty
from forsaj_content.config.models import PageContent
from forsaj_content.richtext import to_plain_text

from .merger import merge_sections
from .models import AboutStat, AboutValue, MergedRecord
from .patterns import ABOUT_STAT_PATTERN, ABOUT_VALUE_PATTERN

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from forsaj_content.config.models import ContentSection

DEFAULT_VALUE_ICON = "shield"
VALUE_ICONS = ("users", "leaf", "zap")

# (label key, label, general-settings key, value key, value)
LEGACY_STATS: tuple[tuple[str, str, str, str, str], ...] = (
    ("txt-pi-lotlar-label-123", "PİLOTLAR", "STATS_PILOTS", "txt-pi-lotlar-value-123", "140+"),
    ("txt-yari-lar-label-123", "YARIŞLAR", "STATS_RACES", "txt-yari-lar-value-123", "50+"),
    ("txt-g-ncl-r-label-123", "GƏNCLƏR", "STATS_YOUTH", "txt-g-ncl-r-value-123", "20+"),
)

# (icon, key stem, title, description)
LEGACY_VALUES: tuple[tuple[str, str, str, str], ...] = (
    (
        "shield",
        "txt-val-safety",
        "TƏHLÜKƏSİZLİK",
        "EKSTREMAL İDMANDA CAN SAĞLIĞI BİZİM BİR NÖMRƏLİ QAYDAMIZDIR. BÜTÜN "
        "TEXNİKALARIMIZ FIA STANDARTLARINA UYĞUN YOXLANILIR.",
    ),
    (
        "users",
        "txt-val-community",
        "İCMA RUHU",
        "FORSAJ BİR KLUBDAN DAHA ÇOX, SADİQ VƏ BÖYÜK BİR AİLƏDİR. BİRİMİZ "
        "HAMIMIZ, HAMIMIZ BİRİMİZ ÜÇÜN!",
    ),
    (
        "leaf",
        "txt-val-nature",
        "TƏBİƏTİ QORU",
        "BİZ OFFROAD EDƏRKƏN TƏBİƏTƏ ZƏRƏR VERMƏMƏYİ ÖZÜMÜZƏ BORC BİLİRİK. "
        "EKOLOJİ BALANS BİZİM ÜÇÜN MÜQƏDDƏSDİR.",
    ),
    (
        "zap",
        "txt-val-excellence",
        "MÜKƏMMƏLLİK",
        "HƏR YARIŞDA, HƏR DÖNGƏDƏ DAHA YAXŞI OLMAĞA ÇALIŞIRIQ. TƏLİMLƏRİMİZ "
        "PEŞƏKAR İNSTRUKTORLAR TƏRƏFİNDƏN İDARƏ OLUNUR.",
    ),
)


def resolve_value_icon(raw_icon: object) -> str:
    """Map a free-form icon name onto one of the value-card icons.

    Examples
    --------
    >>> resolve_value_icon("lucide:Users")
    'users'
    >>> resolve_value_icon("star")
    'shield'
    """
    key = "" if raw_icon is None else str(raw_icon).lower()
    for icon in VALUE_ICONS:
        if icon in key:
            return icon
    return DEFAULT_VALUE_ICON


def legacy_about_stats(
    content: PageContent | None = None, general: PageContent | None = None
) -> list[MergedRecord]:
    """Return the default stat tiles; values prefer the general settings page."""
    content = content or PageContent(name="about")
    general = general or PageContent(name="general")
    return [
        MergedRecord(
            key=label,
            fields={
                "label": content.get_text(label_key, label),
                "value": first_non_empty(
                    general.get_text(general_key),
                    content.get_text(value_key, value),
                ),
            },
        )
        for label_key, label, general_key, value_key, value in LEGACY_STATS
    ]


def legacy_about_values(content: PageContent | None = None) -> list[MergedRecord]:
    """Return the four default value cards with CMS text overrides."""
    content = content or PageContent(name="about")
    return [
        MergedRecord(
            key=title,
            fields={
                "icon": icon,
                "title": content.get_text(f"{stem}-title-123", title),
                "desc": content.get_text(f"{stem}-desc-123", desc),
            },
        )
        for icon, stem, title, desc in LEGACY_VALUES
    ]


def build_about_stats(
    sections: cabc.Iterable[ContentSection],
    content: PageContent | None = None,
    general: PageContent | None = None,
) -> list[AboutStat]:
    """Return the about-page stat tiles.

    ``label-stat-<s>`` / ``value-stat-<s>`` pairs from ``sections`` replace the
    legacy tiles wholesale once at least one complete pair exists.
    """
    records = merge_sections(
        sections,
        ABOUT_STAT_PATTERN,
        legacy_about_stats(content, general),
        overlay_defaults=False,
    )
    return [
        AboutStat(
            label=to_plain_text(record.get("label")),
            value=to_plain_text(record.get("value")),
        )
        for record in records
    ]


def build_about_values(
    sections: cabc.Iterable[ContentSection],
    content: PageContent | None = None,
) -> list[AboutValue]:
    """Return the value cards from the about and values page sections."""
    records = merge_sections(
        sections,
        ABOUT_VALUE_PATTERN,
        legacy_about_values(content),
        overlay_defaults=False,
    )
    return [
        AboutValue(
            icon=resolve_value_icon(record.get("icon")),
            title=to_plain_text(record.get("title")),
            desc=to_plain_text(record.get("desc")),
        )
        for record in records
    ]


__all__ = [
    "LEGACY_STATS",
    "LEGACY_VALUES",
    "build_about_stats",
    "build_about_values",
    "legacy_about_stats",
    "legacy_about_values",
    "resolve_value_icon",
]
