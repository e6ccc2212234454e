"""Typed dataclasses describing docnav site configuration structures."""

from __future__ import annotations

import dataclasses as dc

from docnav.context import DocInfo
from docnav.errors import ConfigError
from docnav.pagination import PaginationSettings
from docnav.tree import PageDefinition, PageTree
from docnav.urls import UrlScheme


class SiteConfigError(ConfigError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SiteConfig:
    """Page definitions alongside the settings shared by every page.

    Attributes
    ----------
    title : str
        Site title, used as the root page title when the root omits one.
    pages : list[PageDefinition]
        Page definitions in authoring order.
    pagination : PaginationSettings
        Listing pagination policy.
    url_scheme : UrlScheme
        How links are written into rendered pages.
    doc_info : DocInfo
        Run metadata passed through to templates.
    """

    title: str
    pages: list[PageDefinition]
    pagination: PaginationSettings = dc.field(default_factory=PaginationSettings)
    url_scheme: UrlScheme = dc.field(default_factory=UrlScheme)
    doc_info: DocInfo = dc.field(default_factory=DocInfo)

    def get_page(self, page_id: str) -> PageDefinition:
        """Return the definition for ``page_id``."""
        for page in self.pages:
            if page.id == page_id:
                return page
        available = ", ".join(page.id for page in self.pages)
        msg = f"Unknown page '{page_id}'. Known pages: {available}"
        raise KeyError(msg)

    def build_tree(self) -> PageTree:
        """Build the page tree, checking listing URLs under this pagination."""
        return PageTree.build(self.pages, pagination=self.pagination)


__all__ = ["SiteConfig", "SiteConfigError"]
