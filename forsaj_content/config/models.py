"""Typed dataclasses describing site settings and CMS content snapshots."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from forsaj_content._constants import DEFAULT_VIEW, TRUSTED_DOMAINS

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from forsaj_content._constants import ViewIdentifier


class ContentConfigError(ValueError):
    """Raised when site settings or a content snapshot are invalid."""


@dc.dataclass(frozen=True, slots=True)
class ContentSection:
    """One labeled content field supplied by the CMS."""

    id: str
    label: str = ""
    value: str = ""
    url: str = ""


@dc.dataclass(frozen=True, slots=True)
class SiteSettings:
    """Deployment facts the view resolver needs to judge link targets.

    Attributes
    ----------
    origin : str
        Public origin of the site (``https://forsaj.az``). Empty when unknown;
        relative targets are still treated as internal.
    trusted_domains : tuple[str, ...]
        Host substrings treated as the club's own brand domains.
    default_view : ViewIdentifier
        View returned when nothing else resolves.
    """

    origin: str = ""
    trusted_domains: tuple[str, ...] = TRUSTED_DOMAINS
    default_view: ViewIdentifier = DEFAULT_VIEW


@dc.dataclass(frozen=True, slots=True)
class ImageRef:
    """Image reference returned by :meth:`PageContent.get_image`."""

    path: str
    alt: str = ""


@dc.dataclass(frozen=True, slots=True)
class PageContent:
    """Fallback-aware read view over the sections of a single CMS page."""

    name: str
    sections: tuple[ContentSection, ...] = ()

    def find(self, key: str) -> ContentSection | None:
        """Return the first section whose id equals ``key``."""
        for section in self.sections:
            if section.id == key:
                return section
        return None

    def get_text(self, key: str, fallback: str = "") -> str:
        """Return the section value for ``key`` or ``fallback`` when blank."""
        section = self.find(key)
        if section is None or not section.value.strip():
            return fallback
        return section.value

    def get_url(self, key: str, fallback: str = "") -> str:
        """Return the section URL for ``key`` or ``fallback`` when blank."""
        section = self.find(key)
        if section is None or not section.url.strip():
            return fallback
        return section.url

    def get_image(self, key: str, fallback: str = "") -> ImageRef:
        """Return the image path (URL, then value) for ``key``."""
        section = self.find(key)
        if section is None:
            return ImageRef(path=fallback)
        path = section.url.strip() or section.value.strip() or fallback
        return ImageRef(path=path, alt=section.label)


@dc.dataclass(frozen=True, slots=True)
class ContentSnapshot:
    """All CMS pages as loaded for one content refresh."""

    pages: dict[str, PageContent] = dc.field(default_factory=dict)

    def page(self, name: str) -> PageContent:
        """Return the named page, or an empty page when it is absent."""
        return self.pages.get(name) or PageContent(name=name)

    def sections(self, *names: str) -> list[ContentSection]:
        """Return the concatenated sections of ``names`` in argument order."""
        collected: list[ContentSection] = []
        for name in names:
            collected.extend(self.page(name).sections)
        return collected

    @classmethod
    def from_mapping(
        cls, pages: cabc.Mapping[str, cabc.Iterable[ContentSection]]
    ) -> ContentSnapshot:
        """Build a snapshot from already-typed section sequences."""
        return cls(
            pages={
                name: PageContent(name=name, sections=tuple(sections))
                for name, sections in pages.items()
            }
        )


__all__ = [
    "ContentConfigError",
    "ContentSection",
    "ContentSnapshot",
    "ImageRef",
    "PageContent",
    "SiteSettings",
]
