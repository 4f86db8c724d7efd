"""Unit tests for rules page tab assembly, deep links, and document URLs."""

from __future__ import annotations

import pytest

from forsaj_content.config import ContentSection, PageContent
from forsaj_content.sections.models import RuleItem, RuleTab
from forsaj_content.sections.rules import (
    build_rule_tabs,
    find_rule_tab,
    legacy_rule_tabs,
    resolve_doc_url,
    resolve_rule_icon,
)


def _page(*sections: ContentSection) -> PageContent:
    return PageContent(name="rulespage", sections=sections)


def test_legacy_tabs_without_cms_content() -> None:
    tabs = build_rule_tabs([])
    assert [tab.id for tab in tabs] == ["pilot", "technical", "safety", "eco"]
    assert [tab.icon for tab in tabs] == ["Info", "Settings", "ShieldAlert", "Leaf"]
    assert all(len(tab.items) == 3 for tab in tabs), "Every default tab ships three rules"
    assert tabs[0].doc_button == "PDF YÜKLƏ"
    assert tabs[3].doc_name == "EKOLOJI_MESULIYYET.PDF"


def test_legacy_tabs_take_scalar_overrides() -> None:
    page = _page(
        ContentSection("RULES_TECH_TITLE", value="TEXNİKA"),
        ContentSection("RULES_TECH_SUB2", value="MOTOR"),
        ContentSection("RULES_TECH_DESC2", value="   "),
        ContentSection("BTN_DOWNLOAD_PDF", value="YÜKLƏ", url="/uploads/rules.pdf"),
    )

    records = legacy_rule_tabs(page)
    technical = records[1]

    assert technical.fields["title"] == "TEXNİKA"
    assert technical.items[1]["subtitle"] == "MOTOR"
    assert technical.items[1]["description"].startswith("MÜHƏRRİK ÜZƏRİNDƏ"), (
        "Blank overrides must keep the default description"
    )
    assert {record.fields["doc_button"] for record in records} == {"YÜKLƏ"}
    assert {record.fields["doc_url"] for record in records} == {"/uploads/rules.pdf"}


def test_dynamic_tab_overlays_legacy_and_new_tab_is_appended() -> None:
    sections = [
        ContentSection("RULE_TAB_1_ID", value="safety"),
        ContentSection("RULE_TAB_1_TITLE", value="TƏHLÜKƏSİZLİK 2025"),
        ContentSection("RULE_TAB_1_ITEM_1_TITLE", value="DƏBİLQƏ"),
        ContentSection("RULE_TAB_1_ITEM_1_DESC", value="Məcburidir."),
        ContentSection("RULE_TAB_2_TITLE", value="Tibbi yoxlama"),
        ContentSection("RULE_TAB_2_ICON", value="FileText"),
        ContentSection("RULE_TAB_2_DOC_URL", url="docs/tibbi.pdf"),
        ContentSection("RULE_TAB_2_ITEM_1_DESC", value="Yarışdan əvvəl."),
        ContentSection("RULE_TAB_3_TITLE", value="Boş ikon"),
        ContentSection("RULE_TAB_3_ICON", value="Rocket"),
        ContentSection("RULE_TAB_3_ITEM_1_TITLE", value="x"),
    ]

    tabs = build_rule_tabs(sections, _page(*sections))

    assert [tab.id for tab in tabs] == [
        "pilot",
        "technical",
        "safety",
        "eco",
        "tab-2",
        "tab-3",
    ], "Legacy order first, then new tabs by index"
    safety = tabs[2]
    assert safety.title == "TƏHLÜKƏSİZLİK 2025"
    assert safety.icon == "ShieldAlert", "Icon falls back to the legacy tab's icon"
    assert safety.items == [RuleItem(subtitle="DƏBİLQƏ", description="Məcburidir.")]
    assert tabs[4].icon == "FileText"
    assert tabs[4].doc_url == "docs/tibbi.pdf"
    assert tabs[5].icon == "Info", "Unknown icons resolve to the default"


@pytest.mark.parametrize(
    ("name", "expected"),
    [("Settings", "Settings"), (" Leaf ", "Leaf"), ("settings", "Info"), (None, "Info")],
)
def test_resolve_rule_icon(name: str | None, expected: str) -> None:
    assert resolve_rule_icon(name) == expected


@pytest.mark.parametrize(
    ("target", "expected_id"),
    [
        ("technical", "technical"),
        ("TEXNİKİ NORMATİVLƏR", "technical"),
        ("normativ", "technical"),
        ("Təhlükəsizlik", "safety"),
        ("ekoloji", "eco"),
        ("pilot-protokolu", "pilot"),
    ],
)
def test_find_rule_tab(target: str, expected_id: str) -> None:
    tab = find_rule_tab(build_rule_tabs([]), target)
    assert tab is not None, f"Expected a tab for {target!r}"
    assert tab.id == expected_id


@pytest.mark.parametrize("target", ["", None, "naməlum"])
def test_find_rule_tab_without_match(target: str | None) -> None:
    assert find_rule_tab(build_rule_tabs([]), target) is None


def test_find_rule_tab_matches_custom_titles() -> None:
    tabs = [RuleTab("tab-5", "Tibbi yoxlama", "Info", "", "", "")]
    assert find_rule_tab(tabs, "tibbi-yoxlama") is tabs[0]


@pytest.mark.parametrize(
    ("raw", "origin", "expected"),
    [
        (
            "https://admin.forsaj.az/uploads/a.pdf?v=2#p1",
            "https://forsaj.az",
            "https://forsaj.az/uploads/a.pdf?v=2#p1",
        ),
        ("https://cdn.example.com/files/a.pdf", "https://forsaj.az", "https://cdn.example.com/files/a.pdf"),
        ("https://admin.forsaj.az/uploads/a.pdf", "", "https://admin.forsaj.az/uploads/a.pdf"),
        (
            "https://admin.forsaj.az/uploads/a.pdf",
            "http://[x",
            "https://admin.forsaj.az/uploads/a.pdf",
        ),
        ("uploads/a.pdf", "https://forsaj.az", "/uploads/a.pdf"),
        ("/uploads/a.pdf", "", "/uploads/a.pdf"),
        ("  ", "https://forsaj.az", ""),
        (None, "", ""),
    ],
)
def test_resolve_doc_url(raw: str | None, origin: str, expected: str) -> None:
    assert resolve_doc_url(raw, origin) == expected
