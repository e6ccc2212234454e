"""Navigation core for static documentation sites.

This package turns flat page definitions into an immutable page tree and
derives the per-page navigation data a template engine needs: the sidebar
sitemap, the breadcrumb trail, paginated listings, and the render context
that bundles them.

Exports
-------
- ``PageTree``: Validated, read-only page hierarchy.
- ``render_sitemap``: Sidebar rows visible on a given page.
- ``build_breadcrumbs``: Root-to-page breadcrumb trail.
- ``paginate``: Split listing entries into numbered pages.
- ``build_render_context`` / ``build_site_contexts``: Template data for one
  page or the whole site.
- ``load_site_config``: Read page definitions and settings from YAML.

Examples
--------
>>> from docnav import PageDefinition, PageTree, render_sitemap
>>> tree = PageTree.build(
...     [
...         PageDefinition("index", "Home", "index.html"),
...         PageDefinition("guide", "Guide", "guide/index.html", parent="index"),
...     ]
... )
>>> [entry.page.id for entry in render_sitemap(tree, "guide")]
['guide']
"""

from __future__ import annotations

from .breadcrumbs import Breadcrumb, build_breadcrumbs
from .config import SiteConfig, SiteConfigError, load_site_config
from .context import (
    DocInfo,
    RenderContext,
    SiteBuildResult,
    build_render_context,
    build_site_contexts,
    iter_output_pages,
)
from .errors import ConfigError, DocnavError, PageLookupError, StructureError
from .pagination import PaginatedPage, PaginationSettings, paginate
from .sitemap import SitemapEntry, render_sitemap
from .tree import Entry, Page, PageDefinition, PageTree
from .urls import UrlScheme

__all__ = [
    "Breadcrumb",
    "ConfigError",
    "DocInfo",
    "DocnavError",
    "Entry",
    "Page",
    "PageDefinition",
    "PageLookupError",
    "PageTree",
    "PaginatedPage",
    "PaginationSettings",
    "RenderContext",
    "SiteBuildResult",
    "SiteConfig",
    "SiteConfigError",
    "SitemapEntry",
    "StructureError",
    "UrlScheme",
    "build_breadcrumbs",
    "build_render_context",
    "build_site_contexts",
    "iter_output_pages",
    "load_site_config",
    "paginate",
    "render_sitemap",
]
