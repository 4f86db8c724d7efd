"""Content normalization and resolution for the Forsaj Club website.

Pages hand this package raw CMS sections and REST payloads and get back typed
records, resolved navigation targets, and HTML fragments.

Exports
-------
- ``normalize``: fold text into an ASCII comparison token.
- ``resolve_view``: map a CMS link target onto a site view.
- ``extract_youtube_id``: pull the video id from a YouTube URL.
- ``to_html``: render BBCode-style markup as an HTML fragment.
- ``app`` / ``main``: the ``forsaj-content`` Cyclopts CLI.

Examples
--------
>>> from forsaj_content import normalize, resolve_view
>>> normalize("Qaydalar")
'qaydalar'
>>> resolve_view("qaydalar")
'rules'
"""

from __future__ import annotations

from .bbcode import to_html
from .cli import app, main
from .media import extract_youtube_id
from .normalizer import normalize
from .views import resolve_view

__all__ = ["app", "extract_youtube_id", "main", "normalize", "resolve_view", "to_html"]
