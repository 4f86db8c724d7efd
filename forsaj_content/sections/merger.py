"""Regroup flat CMS sections into records and overlay them on legacy defaults.

The merge runs in five steps:

1. Scan the sections once, collecting group fields by group index and item
   fields by item sub-index.
2. Drop items with no populated field, then drop groups that miss a required
   field or (where the pattern demands it) every item. Partial groups are
   never emitted.
3. Key every dynamic group and legacy record by ``normalize(id or title)``.
4. Overlay matching dynamic groups onto legacy records field by field; a
   non-blank dynamic value wins, and the item list is replaced only when the
   dynamic group has at least one item.
5. Append the remaining dynamic groups in index order.

Example
-------
>>> from forsaj_content.config import ContentSection
>>> from forsaj_content.sections.patterns import RULE_TAB_PATTERN
>>> records = merge_sections(
...     [
...         ContentSection("RULE_TAB_1_TITLE", value="YENİ"),
...         ContentSection("RULE_TAB_1_ITEM_1_TITLE", value="Qayda"),
...     ],
...     RULE_TAB_PATTERN,
... )
>>> records[0].fields["id"], records[0].key
('tab-1', 'yeni')
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import structlog

from forsaj_content.config.helpers import first_non_empty, is_blank
from forsaj_content.normalizer import normalize
from forsaj_content.richtext import to_plain_text

from .models import MergedRecord

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from forsaj_content.config.models import ContentSection

    from .patterns import SectionPattern

logger = structlog.get_logger(__name__)


@dc.dataclass(slots=True)
class _GroupBuffer:
    """Fields and items collected for one group index during the scan."""

    fields: dict[str, str] = dc.field(default_factory=dict)
    items: dict[int, dict[str, str]] = dc.field(default_factory=dict)


def _section_value(section: ContentSection, field: str, pattern: SectionPattern) -> str:
    if field in pattern.url_fields:
        return first_non_empty(section.url, section.value)
    return section.value or ""


def _group_index(raw: str | None, section: ContentSection, pattern: SectionPattern) -> int | str:
    if pattern.numeric_index:
        return int(raw or 0)
    return (raw or "").strip() or section.id


def _collect(
    sections: cabc.Iterable[ContentSection], pattern: SectionPattern
) -> dict[int | str, _GroupBuffer]:
    groups: dict[int | str, _GroupBuffer] = {}
    for section in sections:
        section_id = section.id or ""
        try:
            _collect_section(groups, section, section_id, pattern)
        except ValueError:
            logger.debug("Skipped section with unusable index", section_id=section_id[:80])
    return groups


def _collect_section(
    groups: dict[int | str, _GroupBuffer],
    section: ContentSection,
    section_id: str,
    pattern: SectionPattern,
) -> None:
    match = pattern.match_group(section_id)
    if match is not None:
        index = _group_index(match.group("index"), section, pattern)
        field = pattern.fields[match.group("field")]
        buffer = groups.setdefault(index, _GroupBuffer())
        buffer.fields[field] = _section_value(section, field, pattern)
        return

    match = pattern.match_item(section_id)
    if match is not None:
        index = _group_index(match.group("index"), section, pattern)
        sub = int(match.group("sub"))
        field = pattern.item_fields[match.group("field")]
        buffer = groups.setdefault(index, _GroupBuffer())
        buffer.items.setdefault(sub, {})[field] = section.value or ""


def record_key(fields: cabc.Mapping[str, str], key_fields: cabc.Sequence[str]) -> str:
    """Return the normalized identity of a record from its first populated key field."""
    return normalize(first_non_empty(*(fields.get(name) for name in key_fields)))


def _is_missing(value: str | None, pattern: SectionPattern) -> bool:
    if pattern.plain_required:
        return not to_plain_text(value)
    return is_blank(value)


def _finalize(
    index: int | str, buffer: _GroupBuffer, pattern: SectionPattern
) -> MergedRecord | None:
    items = [
        {name: item.get(name, "") for name in pattern.item_fields.values()}
        for _, item in sorted(buffer.items.items())
        if any(not is_blank(value) for value in item.values())
    ]
    missing = [
        name for name in pattern.required if _is_missing(buffer.fields.get(name), pattern)
    ]
    if missing or (pattern.require_items and not items):
        logger.debug(
            "Dropped partial content group",
            index=index,
            missing_fields=missing,
            items=len(items),
        )
        return None
    return MergedRecord(
        key=record_key(buffer.fields, pattern.key_fields),
        fields=dict(buffer.fields),
        items=items,
        index=index,
    )


def collect_groups(
    sections: cabc.Iterable[ContentSection], pattern: SectionPattern
) -> list[MergedRecord]:
    """Return the complete dynamic groups found in ``sections`` in index order."""
    groups = _collect(sections, pattern)
    ordered = sorted(groups.items()) if pattern.numeric_index else list(groups.items())
    records: list[MergedRecord] = []
    for index, buffer in ordered:
        record = _finalize(index, buffer, pattern)
        if record is not None:
            records.append(record)
    return records


def _overlay(legacy: MergedRecord, dynamic: MergedRecord) -> MergedRecord:
    fields = dict(legacy.fields)
    for name, value in dynamic.fields.items():
        if not is_blank(value):
            fields[name] = value
    items = [dict(item) for item in (dynamic.items or legacy.items)]
    return MergedRecord(key=legacy.key, fields=fields, items=items, index=dynamic.index)


def _with_default_id(record: MergedRecord, pattern: SectionPattern) -> MergedRecord:
    if pattern.default_id is None or not is_blank(record.fields.get("id")):
        return record
    fields = dict(record.fields)
    fields["id"] = pattern.default_id.format(index=record.index)
    return dc.replace(record, fields=fields)


def _copy(record: MergedRecord) -> MergedRecord:
    return MergedRecord(
        key=record.key,
        fields=dict(record.fields),
        items=[dict(item) for item in record.items],
        index=record.index,
    )


def merge_sections(
    sections: cabc.Iterable[ContentSection],
    pattern: SectionPattern,
    legacy_defaults: cabc.Sequence[MergedRecord] = (),
    *,
    overlay_defaults: bool = True,
) -> list[MergedRecord]:
    """Merge CMS sections matching ``pattern`` with ``legacy_defaults``.

    Parameters
    ----------
    sections : Iterable[ContentSection]
        Ordered CMS sections of one or more pages.
    pattern : SectionPattern
        Id shapes and field rules of the repeating block.
    legacy_defaults : Sequence[MergedRecord], optional
        Hard-coded records shown when the CMS has nothing better. Their
        ``key`` is recomputed from ``pattern.key_fields``.
    overlay_defaults : bool, optional
        When False, legacy records are returned only if no dynamic group
        survives; otherwise the dynamic groups replace them wholesale.

    Returns
    -------
    list[MergedRecord]
        Legacy records (overlaid) first, then unmatched dynamic groups in
        index order. Inputs are never mutated.
    """
    dynamic = collect_groups(sections, pattern)
    legacy = [
        dc.replace(_copy(record), key=record_key(record.fields, pattern.key_fields))
        for record in legacy_defaults
    ]
    if not dynamic:
        return legacy
    if not overlay_defaults:
        return [_with_default_id(record, pattern) for record in dynamic]

    by_key: dict[str, MergedRecord] = {}
    for record in dynamic:
        by_key.setdefault(record.key, record)

    merged: list[MergedRecord] = []
    used: set[str] = set()
    for record in legacy:
        match = by_key.get(record.key) if record.key else None
        if match is None:
            merged.append(record)
            continue
        used.add(record.key)
        merged.append(_overlay(record, match))

    merged.extend(
        _with_default_id(record, pattern)
        for record in dynamic
        if record.key not in used
    )
    return merged


__all__ = ["collect_groups", "merge_sections", "record_key"]
