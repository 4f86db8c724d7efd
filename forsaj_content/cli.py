"""Cyclopts CLI entrypoint for inspecting how CMS content will be resolved.

The ``forsaj-content`` console script runs the normalization layer against
CMS exports and API payloads saved to disk, so editors and developers can see
which view a link resolves to, what a BBCode field renders as, or how the
rules and about pages will be assembled before the site picks them up.
Structured results are printed as JSON.

Examples
--------
Resolve a navbar target with its label:

>>> from forsaj_content.cli import main
>>> main()  # doctest: +SKIP

Render the rule tabs of a saved CMS export:

>>> from forsaj_content.cli import app
>>> app.meta(["rules", "content.yaml", "--origin", "https://forsaj.az"])  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
import msgspec
import structlog
from cyclopts import App, Parameter

from ._constants import ViewIdentifier  # noqa: TC001 - cyclopts resolves it at runtime
from .bbcode import to_html
from .config import SiteSettings, load_content_snapshot, load_site_settings
from .gallery import Album, build_photo_grid, prepare_photos
from .media import extract_youtube_id
from .normalizer import normalize
from .records import normalize_events, upcoming_events
from .sections import build_about_stats, build_about_values, build_rule_tabs, resolve_doc_url
from .views import resolve_view

app = App(name="forsaj-content", config=cyclopts.config.Env("FORSAJ_", command=False))  # type: ignore[unknown-argument]

RULES_PAGE = "rulespage"
ABOUT_PAGE = "about"
VALUES_PAGE = "values"
GENERAL_PAGE = "general"


def configure_logging(*, verbose: bool = False) -> None:
    """Route structlog events to stderr at DEBUG or WARNING level."""
    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def _print_json(payload: object) -> None:
    print(msgspec.json.encode(payload).decode("utf-8"))


def _read_json(path: Path) -> object:
    if not path.exists():
        msg = f"Payload file '{path}' not found."
        raise FileNotFoundError(msg)
    return msgspec.json.decode(path.read_bytes())


@app.meta.default
def launcher(
    *tokens: typ.Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    verbose: typ.Annotated[
        bool, Parameter(help="Log debug events to stderr", env_var="FORSAJ_VERBOSE")
    ] = False,
) -> None:
    """Configure logging, then dispatch to the requested subcommand."""
    configure_logging(verbose=verbose)
    app(tokens)


@app.command(name="normalize", help="Fold text into its comparison token.")
def normalize_command(text: str, /) -> None:
    """Print the normalized token for ``text``."""
    print(normalize(text))


@app.command(name="youtube-id", help="Extract the YouTube video id from a URL.")
def youtube_id_command(url: str, /) -> None:
    """Print the 11-character id, or an empty line when none is found."""
    print(extract_youtube_id(url) or "")


@app.command(name="bbcode", help="Render a BBCode text file as an HTML fragment.")
def bbcode_command(path: Path, /) -> None:
    """Print the HTML fragment for the markup stored in ``path``."""
    print(to_html(path.read_text(encoding="utf-8")))


@app.command(name="resolve-view", help="Resolve a navigation target to a view.")
def resolve_view_command(
    target: str,
    /,
    *,
    label: typ.Annotated[
        str | None, Parameter(help="Visible label of the link")
    ] = None,
    default_view: typ.Annotated[
        ViewIdentifier | None, Parameter(help="View used when nothing else matches")
    ] = None,
    settings: typ.Annotated[
        Path | None,
        Parameter(help="Path to site settings YAML", env_var="FORSAJ_SETTINGS"),
    ] = None,
) -> None:
    """Print the resolved view as JSON (a view id, ``"external"`` or null).

    Parameters
    ----------
    target : str
        URL, slug, or view name as authored in the CMS.
    label : str or None, optional
        Link label used for keyword inference.
    default_view : ViewIdentifier or None, optional
        Fallback view; overrides the one from ``settings`` when given.
    settings : Path or None, optional
        Site settings file providing the origin and trusted domains.
    """
    site_settings = load_site_settings(settings) if settings else SiteSettings()
    fallback = default_view or site_settings.default_view
    _print_json(resolve_view(target, label, fallback, settings=site_settings))


@app.command(name="rules", help="Assemble the rule tabs from a CMS export.")
def rules_command(
    snapshot: Path,
    /,
    *,
    origin: typ.Annotated[
        str, Parameter(help="Public site origin for document links", env_var="FORSAJ_ORIGIN")
    ] = "",
) -> None:
    """Print the merged rule tabs with portable document URLs."""
    content = load_content_snapshot(snapshot)
    page = content.page(RULES_PAGE)
    tabs = [
        dc.replace(tab, doc_url=resolve_doc_url(tab.doc_url, origin))
        for tab in build_rule_tabs(page.sections, page)
    ]
    _print_json(tabs)


@app.command(name="about", help="Assemble about-page stats and values from a CMS export.")
def about_command(snapshot: Path, /) -> None:
    """Print the stat tiles and value cards of the about page."""
    content = load_content_snapshot(snapshot)
    about = content.page(ABOUT_PAGE)
    _print_json(
        {
            "stats": build_about_stats(
                about.sections, about, content.page(GENERAL_PAGE)
            ),
            "values": build_about_values(
                content.sections(ABOUT_PAGE, VALUES_PAGE), about
            ),
        }
    )


@app.command(name="gallery", help="Group a gallery-photos payload into grid tiles.")
def gallery_command(photos_json: Path, /) -> None:
    """Print the photo grid; albums carry ``"type": "album"``."""
    grid = build_photo_grid(prepare_photos(_read_json(photos_json)))
    _print_json(
        [
            {"type": "album" if isinstance(item, Album) else "photo", **msgspec.to_builtins(item)}
            for item in grid
        ]
    )


@app.command(name="events", help="Normalize an events payload.")
def events_command(
    events_json: Path,
    /,
    *,
    upcoming: typ.Annotated[
        bool, Parameter(help="Only list planned events, soonest first")
    ] = False,
) -> None:
    """Print normalized events, newest first unless ``--upcoming`` is set."""
    events = normalize_events(_read_json(events_json))
    _print_json(upcoming_events(events) if upcoming else events)


def main() -> None:
    """Invoke the Cyclopts application behind the ``forsaj-content`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app.meta()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
