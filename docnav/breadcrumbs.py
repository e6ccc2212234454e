"""Breadcrumb trail builder.

Produces the ordered chain from the site root down to the page being
rendered. Only the trailing crumb may carry pagination details, since
intermediate ancestors are always shown as whole pages.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from markupsafe import Markup

if typ.TYPE_CHECKING:
    from .pagination import PaginationInfo
    from .tree import Page, PageTree


@dc.dataclass(slots=True, frozen=True)
class Breadcrumb:
    """One crumb of the trail.

    Templates link every crumb except the last one, which reads as plain
    "you are here" text and may show "Page X of Y" when ``is_paged``.
    """

    title: str
    url: str
    is_first: bool
    is_last: bool
    is_paged: bool = False
    current_page: int | None = None
    total_pages: int | None = None

    def to_dict(self, url: str | None = None) -> dict[str, typ.Any]:
        """Return template data, optionally with ``url`` already resolved."""
        data: dict[str, typ.Any] = {
            "title": Markup(self.title),  # noqa: S704
            "url": url if url is not None else self.url,
            "is_first": self.is_first,
            "is_last": self.is_last,
            "is_paged": self.is_paged,
        }
        if self.is_paged:
            data["current_page"] = self.current_page
            data["total_pages"] = self.total_pages
        return data


def build_breadcrumbs(
    tree: PageTree,
    current_page: Page | str,
    paging: PaginationInfo | None = None,
) -> list[Breadcrumb]:
    """Return the breadcrumb trail for ``current_page``.

    Parameters
    ----------
    tree : PageTree
        Built site tree.
    current_page : Page or str
        Page being rendered, or its id.
    paging : PaginationInfo, optional
        Position within a multi-page listing; attached to the last crumb only.

    Returns
    -------
    list[Breadcrumb]
        One crumb per page from the root to ``current_page`` inclusive. Crumb
        titles use each page's short ``name``; the paged crumb keeps the URL
        of the listing's first page.

    Raises
    ------
    PageLookupError
        If ``current_page`` is not part of ``tree``.
    """
    chain = tree.ancestors_of(current_page)
    last = len(chain) - 1
    crumbs: list[Breadcrumb] = []
    for index, page in enumerate(chain):
        is_last = index == last
        paged = is_last and paging is not None
        crumbs.append(
            Breadcrumb(
                title=page.name,
                url=page.url,
                is_first=index == 0,
                is_last=is_last,
                is_paged=paged,
                current_page=paging.current_page if paged and paging else None,
                total_pages=paging.total_pages if paged and paging else None,
            )
        )
    return crumbs


__all__ = ["Breadcrumb", "build_breadcrumbs"]
