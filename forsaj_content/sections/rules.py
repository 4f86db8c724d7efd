"""Rule-tab assembly for the rules page.

Four tabs (pilot protocol, technical norms, safety, ecology) ship as legacy
defaults whose copy can be overridden through scalar CMS keys. Editors can also
author tabs as ``RULE_TAB_<n>_*`` sections; those overlay a legacy tab sharing
their normalized id or title, and new ones are appended.
"""

from __future__ import annotations

import typing as typ
from urllib.parse import urlsplit, urlunsplit

import structlog

from forsaj_content.config.helpers import first_non_empty
from forsaj_content.config.models import PageContent
from forsaj_content.normalizer import normalize

from .merger import merge_sections
from .models import MergedRecord, RuleItem, RuleTab
from .patterns import RULE_TAB_PATTERN

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from forsaj_content.config.models import ContentSection

logger = structlog.get_logger(__name__)

RULE_ICONS = frozenset({"Info", "Settings", "ShieldAlert", "Leaf", "FileText"})
DEFAULT_RULE_ICON = "Info"
DOC_BUTTON_KEY = "BTN_DOWNLOAD_PDF"
DOC_BUTTON_TEXT = "PDF YÜKLƏ"
UPLOADS_PREFIX = "/uploads/"

# (id, icon, doc name, CMS key stem, title, [(subtitle, description), ...])
LEGACY_RULE_TABS: tuple[tuple[str, str, str, str, str, tuple[tuple[str, str], ...]], ...] = (
    (
        "pilot",
        "Info",
        "PILOT_PROTOKOLU.PDF",
        "RULES_PILOT",
        "PİLOT PROTOKOLU",
        (
            (
                "İSTİFADƏÇİ ÖHDƏLİKLƏRİ",
                "HƏR BİR İŞTİRAKÇI FEDERASİYANIN MÜƏYYƏN ETDİYİ BÜTÜN TEXNİKİ VƏ "
                "ETİK NORMALARI QEYD-ŞƏRTSİZ QƏBUL EDİR.",
            ),
            (
                "DİSKVALİFİKASİYA",
                "PROTOKOLDAN KƏNARA ÇIXMAQ VƏ YA HAKİM QƏRARLARINA ETİRAZ ETMƏK "
                "DƏRHAL DİSKVALİFİKASİYA İLƏ NƏTİCƏLƏNƏ BİLƏR.",
            ),
            (
                "TEXNİKİ TƏLƏBLƏR",
                "BÜTÜN AVADANLIQLAR YARIŞDAN 24 SAAT ƏVVƏL TEXNİKİ KOMİSSİYA "
                "TƏRƏFİNDƏN YOXLANILMALI VƏ TƏHLÜKƏSİZLİK SERTİFİKATI İLƏ TƏMİN "
                "EDİLMƏLİDİR.",
            ),
        ),
    ),
    (
        "technical",
        "Settings",
        "TEXNIKI_NORMATIVLER.PDF",
        "RULES_TECH",
        "TEXNİKİ NORMATİVLƏR",
        (
            (
                "TƏKƏR ÖLÇÜLƏRİ",
                "PRO CLASS ÜÇÜN MAKSİMUM TƏKƏR ÖLÇÜSÜ 37 DÜYM, AMATEUR CLASS ÜÇÜN "
                "İSƏ 33 DÜYM OLARAQ MÜƏYYƏN EDİLMİŞDİR.",
            ),
            (
                "MÜHƏRRİK GÜCÜ",
                "MÜHƏRRİK ÜZƏRİNDƏ APARILAN MODİFİKASİYALAR KATEQORİYA ÜZRƏ "
                "LİMİTLƏRİ AŞMAMALIDIR. TURBO SİSTEMLƏRİ YALNIZ XÜSUSİ KLASLARDA "
                "İCAZƏLİDİR.",
            ),
            (
                "ASQI SİSTEMİ",
                "AVTOMOBİLİN KLİRENSİ (YERDƏN HÜNDÜRLÜYÜ) VƏ ASQI "
                "ARTIKULYASİYASI TƏHLÜKƏSİZLİK STANDARTLARINA UYĞUN OLMALIDIR.",
            ),
        ),
    ),
    (
        "safety",
        "ShieldAlert",
        "TEHLUKESIZLIK_QAYDALARI.PDF",
        "RULES_SAFETY",
        "TƏHLÜKƏSİZLİK QAYDALARI",
        (
            (
                "KARKAS TƏLƏBİ",
                "BÜTÜN AÇIQ VƏ YA MODİFİKASİYA OLUNMUŞ AVTOMOBİLLƏRDƏ FIA "
                "STANDARTLARINA UYĞUN TƏHLÜKƏSİZLİK KARKASI (ROLL CAGE) "
                "MƏCBURİDİR.",
            ),
            (
                "YANĞIN SÖNDÜRMƏ",
                "HƏR BİR AVTOMOBİLDƏ ƏN AZI 2 KİLOQRAMLIQ, ASAN ƏLÇATAN YERDƏ "
                "YERLƏŞƏN YANĞINSÖNDÜRƏN BALON OLMALIDIR.",
            ),
            (
                "KƏMƏR VƏ DƏBİLQƏ",
                "5 NÖQTƏLİ TƏHLÜKƏSİZLİK KƏMƏRLƏRİ VƏ SERTİFİKATLI KASKALARIN "
                "(DƏBİLQƏLƏRİN) İSTİFADƏSİ BÜTÜN MƏRHƏLƏLƏRDƏ MƏCBURİDİR.",
            ),
        ),
    ),
    (
        "eco",
        "Leaf",
        "EKOLOJI_MESULIYYET.PDF",
        "RULES_ECO",
        "EKOLOJİ MƏSULİYYƏT",
        (
            (
                "TULLANTILARIN İDARƏ EDİLMƏSİ",
                "YARIŞ ƏRAZİSİNDƏ VƏ TRASDA HƏR HANSI BİR TULLANTININ ATILMASI "
                'QƏTİ QADAĞANDIR. İŞTİRAKÇILAR "LEAVE NO TRACE" PRİNSİPİNƏ ƏMƏL '
                "ETMƏLİDİR.",
            ),
            (
                "MAYE SIZMALARI",
                "AVTOMOBİLDƏN YAĞ VƏ YA SOYUDUCU MAYE SIZMASI OLDUĞU TƏQDİRDƏ "
                "PİLOT DƏRHAL DAYANMALI VƏ ƏRAZİNİN ÇİRKLƏNMƏSİNİN QARŞISINI "
                "ALMALIDIR.",
            ),
            (
                "MARŞRUTDAN KƏNARA ÇIXMAMAQ",
                "TƏBİİ ÖRTÜYÜ QORUMAQ MƏQSƏDİ İLƏ MÜƏYYƏN OLUNMUŞ TRASDANKƏNAR "
                "SÜRÜŞLƏR VƏ YA YAŞIL SAHƏLƏRƏ ZƏRƏR VERMƏK QADAĞANDIR.",
            ),
        ),
    ),
)

# Deep-link keywords, checked in order against a normalized target.
TAB_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("pilot", ("pilot",)),
    ("technical", ("technical", "texniki", "normativ")),
    ("safety", ("safety", "tehlukesiz")),
    ("eco", ("eco", "ekoloji")),
)


def legacy_rule_tabs(content: PageContent | None = None) -> list[MergedRecord]:
    """Return the default tabs with CMS scalar overrides applied.

    Titles come from ``<STEM>_TITLE`` and rules from ``<STEM>_SUB<n>`` /
    ``<STEM>_DESC<n>``; the shared download button uses ``BTN_DOWNLOAD_PDF``
    for both its label and URL.
    """
    content = content or PageContent(name="rulespage")
    doc_button = content.get_text(DOC_BUTTON_KEY, DOC_BUTTON_TEXT)
    doc_url = content.get_url(DOC_BUTTON_KEY, "")
    records: list[MergedRecord] = []
    for tab_id, icon, doc_name, stem, title, rules in LEGACY_RULE_TABS:
        items = [
            {
                "subtitle": content.get_text(f"{stem}_SUB{number}", subtitle),
                "description": content.get_text(f"{stem}_DESC{number}", description),
            }
            for number, (subtitle, description) in enumerate(rules, start=1)
        ]
        records.append(
            MergedRecord(
                key=normalize(tab_id),
                fields={
                    "id": tab_id,
                    "title": content.get_text(f"{stem}_TITLE", title),
                    "icon": icon,
                    "doc_name": doc_name,
                    "doc_button": doc_button,
                    "doc_url": doc_url,
                },
                items=items,
            )
        )
    return records


def resolve_rule_icon(name: str | None) -> str:
    """Return ``name`` when it is a known icon, else the default icon."""
    candidate = (name or "").strip()
    return candidate if candidate in RULE_ICONS else DEFAULT_RULE_ICON


def _to_rule_tab(record: MergedRecord) -> RuleTab:
    return RuleTab(
        id=record.get("id"),
        title=record.get("title"),
        icon=resolve_rule_icon(record.get("icon")),
        doc_name=record.get("doc_name"),
        doc_button=record.get("doc_button"),
        doc_url=record.get("doc_url"),
        items=[
            RuleItem(
                subtitle=item.get("subtitle", ""),
                description=item.get("description", ""),
            )
            for item in record.items
        ],
    )


def build_rule_tabs(
    sections: cabc.Iterable[ContentSection],
    content: PageContent | None = None,
) -> list[RuleTab]:
    """Assemble the rules page tabs from CMS sections and legacy defaults."""
    records = merge_sections(sections, RULE_TAB_PATTERN, legacy_rule_tabs(content))
    return [_to_rule_tab(record) for record in records]


def _infer_tab_keyword(token: str) -> str:
    for keyword, needles in TAB_KEYWORDS:
        if any(needle in token for needle in needles):
            return keyword
    return ""


def find_rule_tab(tabs: cabc.Sequence[RuleTab], raw_target: object) -> RuleTab | None:
    """Return the tab a deep link points at, or None.

    A tab matches when its normalized id or title equals the normalized
    target, or contains the keyword inferred from the target.
    """
    target = normalize(raw_target)
    if not target:
        return None
    keyword = _infer_tab_keyword(target)
    for tab in tabs:
        id_token = normalize(tab.id)
        title_token = normalize(tab.title)
        if target in (id_token, title_token):
            return tab
        if keyword and (keyword in id_token or keyword in title_token):
            return tab
    return None


def resolve_doc_url(raw_url: object, origin: str = "") -> str:
    """Return a portable URL for a rule document.

    Absolute URLs pointing at ``/uploads/`` are rebased onto ``origin`` so
    files uploaded through the admin host resolve on the public site.
    Relative paths gain a leading slash.
    """
    value = first_non_empty(raw_url if isinstance(raw_url, str) else None).strip()
    if not value:
        return ""
    if value.lower().startswith(("http://", "https://")):
        try:
            parsed = urlsplit(value)
        except ValueError:
            return value
        if origin and parsed.path.startswith(UPLOADS_PREFIX):
            try:
                base = urlsplit(origin)
            except ValueError:
                logger.debug("Unparseable site origin", origin=origin)
                return value
            return urlunsplit(
                (base.scheme, base.netloc, parsed.path, parsed.query, parsed.fragment)
            )
        return value
    return value if value.startswith("/") else f"/{value}"


__all__ = [
    "LEGACY_RULE_TABS",
    "build_rule_tabs",
    "find_rule_tab",
    "legacy_rule_tabs",
    "resolve_doc_url",
    "resolve_rule_icon",
]
