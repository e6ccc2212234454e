"""Assemble the render contexts handed to the template collaborator.

A :class:`RenderContext` bundles everything one output page needs: title and
name, breadcrumbs, the sidebar sitemap, listing data with its pagination
controls, and static run metadata. Links are resolved through the configured
:class:`~docnav.urls.UrlScheme` only when the context is turned into template
data, so the view-models keep canonical site-root URLs.

Site-wide builds fan out across a thread pool. Each worker reads the shared
tree and writes only its own contexts; configuration and lookup failures are
confined to the source page that raised them.

Example
-------
>>> from pathlib import Path
>>> from docnav.config import load_site_config
>>> from docnav.context import build_site_contexts
>>> config = load_site_config(Path("site.yaml"))  # doctest: +SKIP
>>> tree = config.build_tree()  # doctest: +SKIP
>>> result = build_site_contexts(tree, config.pagination)  # doctest: +SKIP
>>> [ctx.url for ctx in result.contexts][:2]  # doctest: +SKIP
['index.html', 'guide/index.html']
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from concurrent.futures import ThreadPoolExecutor, as_completed

import msgspec.json
from markupsafe import Markup

from ._constants import DEFAULT_WINDOW_SPAN, GENERATOR_NAME, GENERATOR_VERSION
from .breadcrumbs import Breadcrumb, build_breadcrumbs
from .errors import ConfigError, PageLookupError
from .pagination import PaginatedPage, PaginationSettings, paginate_page
from .sitemap import SitemapEntry, render_sitemap
from .urls import UrlScheme

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .tree import Page, PageTree

logger = logging.getLogger(__name__)

MAX_WORKERS = 8


@dc.dataclass(slots=True, frozen=True)
class DocInfo:
    """Static run metadata passed through to every page."""

    corpus_name: str = ""
    corpus_version: str = ""
    generator_name: str = GENERATOR_NAME
    generator_version: str = GENERATOR_VERSION

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {
            "generator": {
                "name": self.generator_name,
                "version": self.generator_version,
            },
            "corpus": {"name": self.corpus_name, "version": self.corpus_version},
        }


@dc.dataclass(slots=True)
class OutputPage:
    """One file the generator writes: a page, or one page of its listing."""

    page: Page
    paginated: PaginatedPage | None = None

    @property
    def url(self) -> str:
        if self.paginated is not None and self.paginated.url is not None:
            return self.paginated.url
        return self.page.url


@dc.dataclass(slots=True)
class RenderContext:
    """Data contract consumed by the external template engine.

    Attributes
    ----------
    page : Page
        Source page being rendered.
    url : str
        Address of this output page (differs from ``page.url`` on later pages
        of a listing).
    breadcrumbs : list[Breadcrumb]
        Trail from the root to ``page``.
    site_map : list[SitemapEntry]
        Visible sidebar rows.
    pagination : PaginatedPage or None
        Listing slice and neighbours; ``None`` on ordinary pages.
    doc_info : DocInfo
        Pass-through run metadata.
    url_scheme : UrlScheme
        Link strategy applied by :meth:`to_dict`.
    window_span : int
        Numbered page links shown either side of the current listing page.
    """

    page: Page
    url: str
    breadcrumbs: list[Breadcrumb]
    site_map: list[SitemapEntry]
    pagination: PaginatedPage | None
    doc_info: DocInfo
    url_scheme: UrlScheme = dc.field(default_factory=UrlScheme)
    window_span: int = DEFAULT_WINDOW_SPAN

    @property
    def title(self) -> Markup:
        """Return the page title, marked safe for autoescaping templates."""
        return Markup(self.page.title)  # noqa: S704 - titles carry authored markup

    @property
    def name(self) -> Markup:
        return Markup(self.page.name)  # noqa: S704

    def link(self, target: str) -> str:
        """Return ``target`` as a link written on this output page."""
        return self.url_scheme.link(self.url, target)

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the template-facing mapping for this page."""
        return {
            "title": self.title,
            "name": self.name,
            "url": self.url,
            "breadcrumbs": [
                crumb.to_dict(self.link(crumb.url)) for crumb in self.breadcrumbs
            ],
            "site_map": [
                entry.to_dict(self.link(entry.url)) for entry in self.site_map
            ],
            "data": self._data(),
            "doc_info": self.doc_info.to_dict(),
        }

    def to_json(self) -> bytes:
        """Encode :meth:`to_dict` as JSON for out-of-process template engines."""
        return msgspec.json.encode(self.to_dict(), enc_hook=_encode_markup)

    def _data(self) -> dict[str, typ.Any]:
        if self.pagination is None:
            return {}
        return {
            "entries": [entry.to_dict() for entry in self.pagination.entries],
            "pagination": self._pagination_data(self.pagination),
        }

    def _pagination_data(self, paginated: PaginatedPage) -> dict[str, typ.Any]:
        window = paginated.window(self.window_span)

        def _page_link(number: int | None) -> dict[str, typ.Any] | None:
            if number is None:
                return None
            url = paginated.url_for(number)
            return {"number": number, "url": self.link(url) if url else None}

        return {
            **paginated.info.to_dict(),
            "label": paginated.label,
            "prev_url": self.link(paginated.prev_url) if paginated.prev_url else None,
            "next_url": self.link(paginated.next_url) if paginated.next_url else None,
            "first_page": _page_link(window.first_page),
            "pages_before": [_page_link(n) for n in window.pages_before],
            "pages_after": [_page_link(n) for n in window.pages_after],
            "last_page": _page_link(window.last_page),
        }


def _encode_markup(obj: object) -> str:
    if isinstance(obj, Markup):
        return str(obj)
    msg = f"Cannot encode {type(obj).__name__} as JSON."
    raise NotImplementedError(msg)


def build_render_context(
    tree: PageTree,
    page: Page | str,
    *,
    paginated: PaginatedPage | None = None,
    doc_info: DocInfo | None = None,
    url_scheme: UrlScheme | None = None,
    window_span: int = DEFAULT_WINDOW_SPAN,
) -> RenderContext:
    """Build the render context of one output page.

    Parameters
    ----------
    tree : PageTree
        Built site tree.
    page : Page or str
        Page being rendered, or its id.
    paginated : PaginatedPage, optional
        Listing slice when ``page`` hosts a listing. Breadcrumbs only show the
        page position when the listing spans several pages.
    doc_info : DocInfo, optional
        Run metadata; defaults to generator information only.
    url_scheme : UrlScheme, optional
        Link strategy; defaults to relative links.
    window_span : int, optional
        Numbered page links either side of the current listing page.

    Raises
    ------
    PageLookupError
        If ``page`` is not part of ``tree``.
    """
    current = tree.require(page)
    paging = None
    if paginated is not None and paginated.info.is_multi_page:
        paging = paginated.info
    output = OutputPage(current, paginated)
    return RenderContext(
        page=current,
        url=output.url,
        breadcrumbs=build_breadcrumbs(tree, current, paging),
        site_map=render_sitemap(tree, current),
        pagination=paginated,
        doc_info=doc_info or DocInfo(),
        url_scheme=url_scheme or UrlScheme(),
        window_span=window_span,
    )


def iter_output_pages(
    tree: PageTree, settings: PaginationSettings
) -> cabc.Iterator[OutputPage]:
    """Yield every output page of the site in tree pre-order.

    Raises
    ------
    ConfigError
        If a listing page has an invalid page size.
    """
    for page in tree:
        yield from _output_pages_for(page, settings)


def _output_pages_for(page: Page, settings: PaginationSettings) -> list[OutputPage]:
    if not page.is_listing:
        return [OutputPage(page)]
    return [OutputPage(page, chunk) for chunk in paginate_page(page, settings)]


@dc.dataclass(slots=True)
class SiteBuildResult:
    """Outcome of a site-wide context build.

    Attributes
    ----------
    contexts : list[RenderContext]
        Contexts of every page that built cleanly, in tree pre-order.
    errors : list[tuple[str, Exception]]
        ``(page id, error)`` for each source page that failed.
    """

    contexts: list[RenderContext] = dc.field(default_factory=list)
    errors: list[tuple[str, Exception]] = dc.field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def build_site_contexts(
    tree: PageTree,
    settings: PaginationSettings | None = None,
    *,
    doc_info: DocInfo | None = None,
    url_scheme: UrlScheme | None = None,
    max_workers: int | None = None,
) -> SiteBuildResult:
    """Build render contexts for every output page of the site.

    Parameters
    ----------
    tree : PageTree
        Built site tree, shared read-only by every worker.
    settings : PaginationSettings, optional
        Pagination policy; defaults to :class:`PaginationSettings`.
    doc_info : DocInfo, optional
        Run metadata passed to every context.
    url_scheme : UrlScheme, optional
        Link strategy; defaults to relative links.
    max_workers : int, optional
        Thread pool size; defaults to ``MAX_WORKERS``.

    Returns
    -------
    SiteBuildResult
        Contexts in tree pre-order plus the failures isolated per source page.
    """
    settings = settings or PaginationSettings()
    doc_info = doc_info or DocInfo()
    url_scheme = url_scheme or UrlScheme()
    pages = list(tree)
    logger.info("building render contexts for %d pages", len(pages))

    def _build(page: Page) -> list[RenderContext]:
        return [
            build_render_context(
                tree,
                output.page,
                paginated=output.paginated,
                doc_info=doc_info,
                url_scheme=url_scheme,
                window_span=settings.window,
            )
            for output in _output_pages_for(page, settings)
        ]

    built: dict[str, list[RenderContext]] = {}
    result = SiteBuildResult()
    with ThreadPoolExecutor(max_workers=max_workers or MAX_WORKERS) as executor:
        futures = {executor.submit(_build, page): page for page in pages}
        for future in as_completed(futures):
            page = futures[future]
            try:
                built[page.id] = future.result()
            except (ConfigError, PageLookupError) as exc:
                logger.error("failed to build context for page %r: %s", page.id, exc)
                result.errors.append((page.id, exc))

    for page in pages:
        result.contexts.extend(built.get(page.id, ()))
    order = {page.id: index for index, page in enumerate(pages)}
    result.errors.sort(key=lambda item: order[item[0]])
    logger.info(
        "built %d render contexts, %d page(s) failed",
        len(result.contexts),
        len(result.errors),
    )
    return result


__all__ = [
    "DocInfo",
    "OutputPage",
    "RenderContext",
    "SiteBuildResult",
    "build_render_context",
    "build_site_contexts",
    "iter_output_pages",
]
