"""Sidebar sitemap view over the page tree.

The sidebar keeps top-level navigation visible on every page and only opens
the branch leading to the page being rendered. The filter runs over the
shared, immutable tree; nothing is pruned in place.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from markupsafe import Markup

if typ.TYPE_CHECKING:
    from .tree import Page, PageTree


@dc.dataclass(slots=True, frozen=True)
class SitemapEntry:
    """One visible sidebar row.

    Attributes
    ----------
    page : Page
        Tree node the row links to.
    depth : int
        Tree depth of the node; templates indent by it.
    is_current : bool
        ``True`` only for the row of the page being rendered.
    has_children : bool
        ``True`` when the node has children, shown or not.
    """

    page: Page
    depth: int
    is_current: bool
    has_children: bool

    @property
    def url(self) -> str:
        return self.page.url

    def to_dict(self, url: str | None = None) -> dict[str, typ.Any]:
        """Return template data, optionally with ``url`` already resolved.

        Labels are marked safe: page titles carry authored markup.
        """
        return {
            "id": self.page.id,
            "title": Markup(self.page.title),  # noqa: S704
            "name": Markup(self.page.name),  # noqa: S704
            "url": url if url is not None else self.page.url,
            "depth": self.depth,
            "is_current": self.is_current,
            "has_children": self.has_children,
        }


def render_sitemap(tree: PageTree, current_page: Page | str) -> list[SitemapEntry]:
    """Return the sidebar rows shown while rendering ``current_page``.

    The root is never listed. Depth-1 pages are always listed; deeper pages
    appear only when they are ``current_page`` or one of its ancestors.
    Rows come in tree pre-order.

    Parameters
    ----------
    tree : PageTree
        Built site tree.
    current_page : Page or str
        Page being rendered, or its id.

    Returns
    -------
    list[SitemapEntry]
        Visible rows; when ``current_page`` is the root, only depth-1 pages
        and none of them current.

    Raises
    ------
    PageLookupError
        If ``current_page`` is not part of ``tree``.
    """
    current = tree.require(current_page)
    on_path = {page.id for page in tree.ancestors_of(current)}

    def _open(page: Page) -> bool:
        return page.id in on_path

    return [
        SitemapEntry(
            page=page,
            depth=page.depth,
            is_current=page.url == current.url,
            has_children=page.has_children,
        )
        for page in tree.walk(descend=_open)
        if page.depth == 1 or (page.depth >= 2 and page.id in on_path)
    ]


__all__ = ["SitemapEntry", "render_sitemap"]
