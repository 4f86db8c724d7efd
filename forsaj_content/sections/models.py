"""Dataclasses produced by the section merger and its domain builders."""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(slots=True)
class MergedRecord:
    """Generic output of :func:`~forsaj_content.sections.merger.merge_sections`.

    Attributes
    ----------
    key : str
        Normalized identity (``normalize(id or title)``) used for overlays.
    fields : dict[str, str]
        Record fields keyed by their snake_case name.
    items : list[dict[str, str]]
        Ordered sub-records, empty for patterns without an item shape.
    index : int | str | None
        Group index from the CMS ids; None for legacy defaults.
    """

    key: str
    fields: dict[str, str] = dc.field(default_factory=dict)
    items: list[dict[str, str]] = dc.field(default_factory=list)
    index: int | str | None = None

    def get(self, name: str, default: str = "") -> str:
        """Return field ``name`` or ``default`` when it is absent."""
        return self.fields.get(name, default)


@dc.dataclass(slots=True)
class RuleItem:
    """One rule inside a rule tab."""

    subtitle: str
    description: str


@dc.dataclass(slots=True)
class RuleTab:
    """A tab on the rules page with its downloadable document."""

    id: str
    title: str
    icon: str
    doc_name: str
    doc_button: str
    doc_url: str
    items: list[RuleItem] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class AboutStat:
    """Headline number on the about page."""

    label: str
    value: str


@dc.dataclass(slots=True)
class AboutValue:
    """Club value card on the about page."""

    icon: str
    title: str
    desc: str


__all__ = ["AboutStat", "AboutValue", "MergedRecord", "RuleItem", "RuleTab"]
