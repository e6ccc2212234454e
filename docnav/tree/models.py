"""Dataclasses describing authored page definitions and built tree nodes."""

from __future__ import annotations

import dataclasses as dc
import types
import typing as typ
import weakref

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@dc.dataclass(slots=True, frozen=True)
class Entry:
    """One item of a paginated listing, such as a changelog record.

    Attributes
    ----------
    key : str
        Stable ordering and display key.
    payload : Mapping[str, Any]
        Opaque, read-only data handed through to templates.
    """

    key: str
    payload: cabc.Mapping[str, typ.Any] = dc.field(
        default_factory=lambda: types.MappingProxyType({})
    )

    def __post_init__(self) -> None:
        if not isinstance(self.payload, types.MappingProxyType):
            object.__setattr__(
                self, "payload", types.MappingProxyType(dict(self.payload))
            )

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the entry as template data, payload fields first."""
        return {**self.payload, "key": self.key}


@dc.dataclass(slots=True, frozen=True)
class PageDefinition:
    """Raw page record supplied by the page-definition source.

    Attributes
    ----------
    id : str
        Stable identifier, unique across the site.
    title : str
        Display title; may contain markup that templates emit unescaped.
    url : str
        Resolved, site-root relative output address.
    parent : str or None
        Identifier of the owning page; ``None`` marks the root.
    name : str or None
        Short label for breadcrumbs and the sidebar; defaults to ``title``.
    entries : tuple[Entry, ...] or None
        Listing entries; present only on pages that render a listing.
    page_size : int or None
        Per-listing override of the configured pagination limit.
    """

    id: str
    title: str
    url: str
    parent: str | None = None
    name: str | None = None
    entries: tuple[Entry, ...] | None = None
    page_size: int | None = None


@dc.dataclass(slots=True, frozen=True, eq=False, weakref_slot=True)
class Page:
    """Node of a built :class:`~docnav.tree.PageTree`.

    Pages compare equal when their ``id`` matches; trees are rebuilt rather
    than mutated between runs, so object identity carries no meaning. The
    parent link is weak: a page owns its children, never the reverse. Pages
    are frozen; the tree builder sets ``children`` once while linking.
    """

    id: str
    title: str
    url: str
    name: str
    depth: int
    entry_group: tuple[Entry, ...] | None = None
    page_size: int | None = None
    children: tuple[Page, ...] = dc.field(default=(), repr=False)
    parent_ref: weakref.ReferenceType[Page] | None = dc.field(
        default=None, repr=False
    )

    @property
    def parent(self) -> Page | None:
        """Return the owning page, or ``None`` for the root."""
        if self.parent_ref is None:
            return None
        return self.parent_ref()

    @property
    def is_root(self) -> bool:
        return self.depth == 0

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    @property
    def is_listing(self) -> bool:
        """Return ``True`` when the page renders a paginated entry listing."""
        return self.entry_group is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Page):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


__all__ = ["Entry", "Page", "PageDefinition"]
