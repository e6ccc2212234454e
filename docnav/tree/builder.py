"""Build and query the immutable page tree.

The tree is built once per generation run from flat page definitions and is
read-only afterwards, so any number of renders may query it concurrently.
Lookups by id or URL are O(1); ancestor chains cost O(d) for a page at
depth d.

Example
-------
>>> from docnav.tree import PageDefinition, PageTree
>>> tree = PageTree.build(
...     [
...         PageDefinition("index", "Home", "index.html"),
...         PageDefinition("guide", "Guide", "guide/index.html", parent="index"),
...     ]
... )
>>> [page.id for page in tree.ancestors_of(tree.require("guide"))]
['index', 'guide']
"""

from __future__ import annotations

import collections
import logging
import typing as typ
import weakref

from docnav.errors import PageLookupError, StructureError
from docnav.pagination import count_pages
from docnav.urls import paged_url

from .models import Page, PageDefinition

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from docnav.pagination import PaginationSettings

logger = logging.getLogger(__name__)


class PageTree:
    """Immutable hierarchy of every page in the site.

    Pages are stored in pre-order with id and URL indices. Children keep the
    order in which their definitions were supplied.
    """

    __slots__ = ("_by_id", "_by_url", "_order", "_root")

    def __init__(self, root: Page, order: cabc.Sequence[Page]) -> None:
        """Wrap an already linked tree; use :meth:`build` to construct one."""
        self._root = root
        self._order = tuple(order)
        self._by_id = {page.id: page for page in self._order}
        self._by_url = {page.url: page for page in self._order}

    @classmethod
    def build(
        cls,
        definitions: cabc.Iterable[PageDefinition],
        *,
        pagination: PaginationSettings | None = None,
    ) -> PageTree:
        """Validate ``definitions`` and link them into a tree.

        Parameters
        ----------
        definitions : Iterable[PageDefinition]
            Flat page records; sibling order follows iteration order.
        pagination : PaginationSettings, optional
            When supplied, URLs synthesized for the later pages of every
            listing join the URL uniqueness check.

        Returns
        -------
        PageTree
            The linked, read-only tree.

        Raises
        ------
        StructureError
            If the definitions are empty, repeat an id, reference a missing
            parent, form a cycle, declare more than one root, or resolve two
            pages (or generated listing pages) to the same URL.
        """
        defs = list(definitions)
        if not defs:
            raise StructureError("empty tree", (), "no page definitions supplied")

        by_id: dict[str, PageDefinition] = {}
        for definition in defs:
            if definition.id in by_id:
                raise StructureError("duplicate id", (definition.id,))
            by_id[definition.id] = definition

        for definition in defs:
            if definition.parent is not None and definition.parent not in by_id:
                raise StructureError(
                    "missing parent",
                    (definition.id,),
                    f"parent {definition.parent!r} is not defined",
                )

        cycle = _find_cycle({d.id: d.parent for d in defs})
        if cycle:
            raise StructureError("cycle", cycle)

        roots = [d.id for d in defs if d.parent is None]
        if len(roots) > 1:
            raise StructureError("multiple roots", roots)

        _check_unique_urls(defs, pagination)

        children: dict[str, list[PageDefinition]] = collections.defaultdict(list)
        for definition in defs:
            if definition.parent is not None:
                children[definition.parent].append(definition)

        root = _make_page(by_id[roots[0]], depth=0, parent=None)
        order: list[Page] = []
        stack: list[tuple[Page, PageDefinition]] = [(root, by_id[roots[0]])]
        while stack:
            page, definition = stack.pop()
            order.append(page)
            kids = [
                _make_page(child, depth=page.depth + 1, parent=page)
                for child in children.get(definition.id, ())
            ]
            object.__setattr__(page, "children", tuple(kids))
            stack.extend((kid, by_id[kid.id]) for kid in reversed(kids))

        logger.debug("built page tree with %d pages rooted at %r", len(order), root.id)
        return cls(root, order)

    @property
    def root(self) -> Page:
        return self._root

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> cabc.Iterator[Page]:
        return iter(self._order)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Page):
            return item.id in self._by_id
        return item in self._by_id

    def find_by_id(self, page_id: str) -> Page | None:
        """Return the page with ``page_id``, or ``None`` when absent."""
        return self._by_id.get(page_id)

    def find_by_url(self, url: str) -> Page | None:
        """Return the page published at ``url``, or ``None`` when absent."""
        return self._by_url.get(url)

    def require(self, page: Page | str) -> Page:
        """Return this tree's node for ``page`` (a Page or an id).

        Raises
        ------
        PageLookupError
            If the page is not part of the tree.
        """
        page_id = page.id if isinstance(page, Page) else page
        found = self._by_id.get(page_id)
        if found is None:
            raise PageLookupError(page_id)
        return found

    def ancestors_of(self, page: Page | str) -> tuple[Page, ...]:
        """Return the chain from the root down to ``page``, inclusive."""
        current: Page | None = self.require(page)
        chain: list[Page] = []
        while current is not None:
            chain.append(current)
            current = current.parent
        chain.reverse()
        return tuple(chain)

    def walk(
        self, descend: cabc.Callable[[Page], bool] | None = None
    ) -> cabc.Iterator[Page]:
        """Yield pages in pre-order, preserving sibling order.

        Parameters
        ----------
        descend : Callable[[Page], bool], optional
            Predicate deciding whether a yielded page's children are visited.
            Every subtree is visited when omitted.
        """
        stack = [self._root]
        while stack:
            page = stack.pop()
            yield page
            if descend is None or descend(page):
                stack.extend(reversed(page.children))

    def listing_pages(self) -> list[Page]:
        """Return every page that hosts an entry listing, in pre-order."""
        return [page for page in self._order if page.is_listing]


def _make_page(definition: PageDefinition, *, depth: int, parent: Page | None) -> Page:
    return Page(
        id=definition.id,
        title=definition.title,
        url=definition.url,
        name=definition.name or definition.title,
        depth=depth,
        entry_group=(
            tuple(definition.entries) if definition.entries is not None else None
        ),
        page_size=definition.page_size,
        parent_ref=weakref.ref(parent) if parent is not None else None,
    )


def _find_cycle(parents: cabc.Mapping[str, str | None]) -> list[str] | None:
    """Return the ids forming a parent cycle, or ``None`` when acyclic."""
    settled: set[str] = set()
    for start in parents:
        path: list[str] = []
        on_path: set[str] = set()
        node: str | None = start
        while node is not None and node not in settled:
            if node in on_path:
                return path[path.index(node) :]
            path.append(node)
            on_path.add(node)
            node = parents[node]
        settled.update(path)
    return None


def _check_unique_urls(
    defs: cabc.Sequence[PageDefinition], pagination: PaginationSettings | None
) -> None:
    owners: dict[str, str] = {}

    def _claim(url: str, page_id: str) -> None:
        owner = owners.setdefault(url, page_id)
        if owner != page_id:
            raise StructureError("duplicate url", (owner, page_id), f"url {url!r}")

    for definition in defs:
        _claim(definition.url, definition.id)

    if pagination is None:
        return
    for definition in defs:
        if definition.entries is None:
            continue
        size = (
            definition.page_size
            if definition.page_size is not None
            else pagination.limit
        )
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            continue
        total = count_pages(definition.entries, size, mode=pagination.mode)
        for number in range(2, total + 1):
            _claim(paged_url(definition.url, number), definition.id)


__all__ = ["PageTree"]
