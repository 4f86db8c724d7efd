"""Assemble repeating CMS blocks into records with legacy fallbacks."""

from __future__ import annotations

from .about import build_about_stats, build_about_values
from .merger import collect_groups, merge_sections
from .models import AboutStat, AboutValue, MergedRecord, RuleItem, RuleTab
from .patterns import (
    ABOUT_STAT_PATTERN,
    ABOUT_VALUE_PATTERN,
    RULE_TAB_PATTERN,
    SectionPattern,
    indexed_pattern,
    suffix_pattern,
)
from .rules import build_rule_tabs, find_rule_tab, legacy_rule_tabs, resolve_doc_url

__all__ = [
    "ABOUT_STAT_PATTERN",
    "ABOUT_VALUE_PATTERN",
    "RULE_TAB_PATTERN",
    "AboutStat",
    "AboutValue",
    "MergedRecord",
    "RuleItem",
    "RuleTab",
    "SectionPattern",
    "build_about_stats",
    "build_about_values",
    "build_rule_tabs",
    "collect_groups",
    "find_rule_tab",
    "indexed_pattern",
    "legacy_rule_tabs",
    "merge_sections",
    "resolve_doc_url",
    "suffix_pattern",
]
