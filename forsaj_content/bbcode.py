r"""Convert the CMS's BBCode-style markup into an HTML fragment.

The conversion is an ordered pipeline rather than a set of independent
substitutions: every step rewrites the output of the previous one, so a
``[CENTER]`` block may already contain the ``<strong>`` produced for an inner
``[B]`` tag. Tag bodies are captured non-greedily across lines, which means
nested tags of the same type are not supported; the first closing tag wins.

The transformer does not escape text. Callers that render user-supplied text
must sanitize it themselves.

Example
-------
>>> from forsaj_content.bbcode import to_html
>>> to_html("[B]Hi[/B]")
'<strong>Hi</strong>'
>>> to_html("[CENTER][B]x[/B][/CENTER]")
'<div style="text-align: center;"><strong>x</strong></div>'
"""

from __future__ import annotations

import re

ACCENT_COLOR = "#FF4D00"
_FLAGS = re.IGNORECASE | re.DOTALL

ESCAPED_OPEN_PATTERN = re.compile(r"\\+\[")
ESCAPED_CLOSE_PATTERN = re.compile(r"\\+\]")
SIZE_VARIANT_PATTERN = re.compile(r"\[(/?)S[İIıi]ZE", re.IGNORECASE)
CENTER_VARIANT_PATTERN = re.compile(r"\[(/?)C[ƏEəe]NTER", re.IGNORECASE)
NEWLINE_PATTERN = re.compile(r"\r?\n")


def _tag(name: str, *, argument: bool = False) -> re.Pattern[str]:
    opener = rf"\[{name}=([^\]]+)\]" if argument else rf"\[{name}\]"
    return re.compile(rf"{opener}(.*?)\[/{name}\]", _FLAGS)


# Containers run before inline tags so their bodies reach the later steps intact.
CONTAINER_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (_tag("CENTER"), r'<div style="text-align: center;">\1</div>'),
    (_tag("FONT", argument=True), r'<span style="font-family: \1;">\2</span>'),
)

INLINE_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (_tag("B"), r"<strong>\1</strong>"),
    (_tag("I"), r"<em>\1</em>"),
    (_tag("U"), r'<span style="text-decoration: underline;">\1</span>'),
    (_tag("S"), r"<strike>\1</strike>"),
)

LINK_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (
        _tag("URL", argument=True),
        r'<a href="\1" target="_blank" rel="noopener noreferrer" '
        rf'style="color: {ACCENT_COLOR};">\2</a>',
    ),
    (_tag("IMG"), r'<img src="\1" style="max-width: 100%;" />'),
)

STYLE_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (_tag("COLOR", argument=True), r'<span style="color: \1;">\2</span>'),
    (_tag("SIZE", argument=True), r'<span style="font-size: \1px;">\2</span>'),
)

BLOCK_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (
        _tag("QUOTE"),
        rf'<blockquote style="border-left: 2px solid {ACCENT_COLOR}; '
        r'padding-left: 10px; margin-left: 0;">\1</blockquote>',
    ),
    (
        _tag("CODE"),
        r'<pre style="background: #222; padding: 10px; border-radius: 4px;">'
        r"<code>\1</code></pre>",
    ),
)

PIPELINE: tuple[tuple[tuple[re.Pattern[str], str], ...], ...] = (
    CONTAINER_RULES,
    INLINE_RULES,
    LINK_RULES,
    STYLE_RULES,
    BLOCK_RULES,
)


def _unescape_brackets(text: str) -> str:
    """Collapse one or more escaping backslashes in front of brackets."""
    return ESCAPED_CLOSE_PATTERN.sub("]", ESCAPED_OPEN_PATTERN.sub("[", text))


def _normalize_tag_glyphs(text: str) -> str:
    """Rewrite locale letterforms such as ``[SİZE]`` or ``[CƏNTER]``."""
    text = SIZE_VARIANT_PATTERN.sub(r"[\1SIZE", text)
    return CENTER_VARIANT_PATTERN.sub(r"[\1CENTER", text)


def to_html(markup: str | None) -> str:
    """Return the HTML fragment for ``markup``.

    Parameters
    ----------
    markup : str or None
        BBCode-style text authored in the CMS. ``None`` and empty strings
        produce an empty fragment.

    Returns
    -------
    str
        HTML with every supported tag replaced and newlines turned into
        ``<br />`` elements. Unknown tags are left untouched.
    """
    if not markup:
        return ""
    html = _normalize_tag_glyphs(_unescape_brackets(str(markup)))
    for rules in PIPELINE:
        for pattern, replacement in rules:
            html = pattern.sub(replacement, html)
    return NEWLINE_PATTERN.sub("<br />", html)


__all__ = ["PIPELINE", "to_html"]
