"""Field patterns for repeating CMS blocks.

CMS pages store repeating blocks as flat section ids. A pattern describes how
those ids encode a group index, an optional item sub-index, and a field name,
so the same merge algorithm can assemble rule tabs, about-page stats, and any
future repeating block from data alone.

Examples
--------
>>> pattern = indexed_pattern("FAQ", {"QUESTION": "title", "ANSWER": "answer"})
>>> pattern.match_group("FAQ_2_ANSWER").group("index")
'2'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@dc.dataclass(frozen=True, slots=True)
class SectionPattern:
    """Describe how flat CMS ids map onto grouped records.

    Attributes
    ----------
    group : re.Pattern[str]
        Regex with ``index`` and ``field`` named groups for group-level ids.
    fields : Mapping[str, str]
        Field token in the id (``DOC_URL``) → record field name (``doc_url``).
    item : re.Pattern[str] or None
        Regex with ``index``, ``sub`` and ``field`` groups for item ids.
    item_fields : Mapping[str, str]
        Item field token → item field name.
    url_fields : frozenset[str]
        Record fields read from the section URL before its value.
    required : tuple[str, ...]
        Record fields that must be non-blank for a group to survive.
    require_items : bool
        Drop groups that end up with no populated item.
    numeric_index : bool
        Order groups by ascending integer index; otherwise first-seen order.
    search : bool
        Match ids anywhere instead of requiring a full match.
    key_fields : tuple[str, ...]
        Fields tried in order to build the identity key.
    default_id : str or None
        ``str.format`` template (``{index}``) filling a missing ``id`` on
        appended dynamic groups.
    plain_required : bool
        Judge required fields by their plain text, so markup-only values
        such as ``<p></p>`` count as blank.
    """

    group: re.Pattern[str]
    fields: cabc.Mapping[str, str]
    item: re.Pattern[str] | None = None
    item_fields: cabc.Mapping[str, str] = dc.field(default_factory=dict)
    url_fields: frozenset[str] = frozenset()
    required: tuple[str, ...] = ()
    require_items: bool = False
    numeric_index: bool = True
    search: bool = False
    key_fields: tuple[str, ...] = ("id", "title")
    default_id: str | None = None
    plain_required: bool = False

    def match_group(self, section_id: str) -> re.Match[str] | None:
        """Return the group-level match for ``section_id``."""
        return self._match(self.group, section_id)

    def match_item(self, section_id: str) -> re.Match[str] | None:
        """Return the item-level match for ``section_id``."""
        if self.item is None:
            return None
        return self._match(self.item, section_id)

    def _match(self, regex: re.Pattern[str], section_id: str) -> re.Match[str] | None:
        if self.search:
            return regex.search(section_id)
        return regex.fullmatch(section_id)


def _alternation(tokens: cabc.Iterable[str]) -> str:
    """Return a regex alternation, longest token first."""
    ordered = sorted(tokens, key=len, reverse=True)
    return "|".join(re.escape(token) for token in ordered)


def indexed_pattern(
    prefix: str,
    fields: cabc.Mapping[str, str],
    *,
    item_fields: cabc.Mapping[str, str] | None = None,
    item_marker: str = "ITEM",
    url_fields: cabc.Iterable[str] = (),
    required: cabc.Iterable[str] = (),
    require_items: bool = False,
    key_fields: tuple[str, ...] = ("id", "title"),
    default_id: str | None = None,
) -> SectionPattern:
    """Build a ``PREFIX_<n>_<FIELD>`` / ``PREFIX_<n>_ITEM_<m>_<FIELD>`` pattern."""
    head = re.escape(prefix)
    group = re.compile(
        rf"^{head}_(?P<index>\d+)_(?P<field>{_alternation(fields)})$",
        re.ASCII,
    )
    item = None
    if item_fields:
        marker = re.escape(item_marker)
        item = re.compile(
            rf"^{head}_(?P<index>\d+)_{marker}_(?P<sub>\d+)"
            rf"_(?P<field>{_alternation(item_fields)})$",
            re.ASCII,
        )
    return SectionPattern(
        group=group,
        fields=dict(fields),
        item=item,
        item_fields=dict(item_fields or {}),
        url_fields=frozenset(url_fields),
        required=tuple(required),
        require_items=require_items,
        numeric_index=True,
        key_fields=key_fields,
        default_id=default_id,
    )


def suffix_pattern(
    markers: cabc.Mapping[str, str],
    *,
    required: cabc.Iterable[str] = (),
    key_fields: tuple[str, ...] = ("id", "title"),
) -> SectionPattern:
    """Build a pattern pairing ids such as ``label-stat-<s>`` by suffix ``<s>``.

    Ids carrying a marker but no suffix are grouped under their own id.
    """
    group = re.compile(rf"(?P<field>{_alternation(markers)})(?:-(?P<index>.+))?$")
    return SectionPattern(
        group=group,
        fields=dict(markers),
        required=tuple(required),
        numeric_index=False,
        search=True,
        key_fields=key_fields,
        plain_required=True,
    )


RULE_TAB_PATTERN = indexed_pattern(
    "RULE_TAB",
    {
        "ID": "id",
        "TITLE": "title",
        "ICON": "icon",
        "DOC_NAME": "doc_name",
        "DOC_BUTTON": "doc_button",
        "DOC_URL": "doc_url",
    },
    item_fields={"TITLE": "subtitle", "DESC": "description"},
    url_fields=("doc_url",),
    required=("title",),
    require_items=True,
    default_id="tab-{index}",
)

ABOUT_STAT_PATTERN = suffix_pattern(
    {"label-stat": "label", "value-stat": "value"},
    required=("label", "value"),
    key_fields=("label",),
)

ABOUT_VALUE_PATTERN = suffix_pattern(
    {"val-icon": "icon", "val-title": "title", "val-desc": "desc"},
    required=("title", "desc"),
    key_fields=("title",),
)


__all__ = [
    "ABOUT_STAT_PATTERN",
    "ABOUT_VALUE_PATTERN",
    "RULE_TAB_PATTERN",
    "SectionPattern",
    "indexed_pattern",
    "suffix_pattern",
]
