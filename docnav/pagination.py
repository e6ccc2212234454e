"""Split listing entries into numbered output pages.

A listing page hosts an ordered entry group. :func:`paginate` partitions the
group and materializes one :class:`PaginatedPage` per output page, each
carrying everything a template needs: its slice of entries, its position in
the group, and links to its neighbours. The result depends only on the
entries and settings, so every page of a group sees the same totals.

Example
-------
>>> from docnav.tree import Entry
>>> pages = paginate([Entry(str(n)) for n in range(25)], 10)
>>> [len(page.entries) for page in pages]
[10, 10, 5]
>>> pages[-1].next_url is None
True
"""

from __future__ import annotations

import dataclasses as dc
import itertools
import logging
import math
import typing as typ

from ._constants import ALPHABETIC_FALLBACK_LABEL, DEFAULT_PAGE_LIMIT, DEFAULT_WINDOW_SPAN
from .errors import ConfigError
from .urls import paged_url

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .tree.models import Entry, Page

logger = logging.getLogger(__name__)

PaginationMode = typ.Literal["none", "absolute", "alphabetic"]
PAGINATION_MODES: tuple[str, ...] = typ.get_args(PaginationMode)


@dc.dataclass(slots=True, frozen=True)
class PaginationSettings:
    """Site-wide pagination policy.

    Attributes
    ----------
    mode : {"none", "absolute", "alphabetic"}
        ``"none"`` keeps every entry on one page, ``"absolute"`` cuts
        fixed-size chunks, ``"alphabetic"`` starts a new page per leading
        letter and cuts each letter group into chunks of ``limit``.
    limit : int
        Maximum entries per page.
    window : int
        How many numbered page links to show either side of the current page.
    """

    mode: PaginationMode = "absolute"
    limit: int = DEFAULT_PAGE_LIMIT
    window: int = DEFAULT_WINDOW_SPAN

    def page_size_for(self, page: Page) -> int:
        """Return the effective page size for ``page``."""
        if page.page_size is not None:
            return page.page_size
        return self.limit


@dc.dataclass(slots=True, frozen=True)
class PaginationInfo:
    """Position of one output page inside its paginated group."""

    current_page: int
    total_pages: int

    @property
    def is_multi_page(self) -> bool:
        return self.total_pages > 1

    def to_dict(self) -> dict[str, int]:
        return {"current_page": self.current_page, "total_pages": self.total_pages}


@dc.dataclass(slots=True, frozen=True)
class PageWindow:
    """Numbered page links surrounding the current page.

    ``first_page`` and ``last_page`` are omitted when the current page is
    already the first or last one; ``pages_before`` and ``pages_after`` never
    repeat them.
    """

    current_page: int
    first_page: int | None
    pages_before: tuple[int, ...]
    pages_after: tuple[int, ...]
    last_page: int | None

    @classmethod
    def around(cls, current_page: int, total_pages: int, span: int) -> PageWindow:
        """Return the window of at most ``span`` links either side of the page."""
        if total_pages <= 1:
            return cls(current_page, None, (), (), None)
        span = max(span, 0)
        before = range(max(2, current_page - span), current_page)
        after = range(current_page + 1, min(total_pages, current_page + 1 + span))
        return cls(
            current_page=current_page,
            first_page=1 if current_page != 1 else None,
            pages_before=tuple(before),
            pages_after=tuple(after),
            last_page=total_pages if current_page != total_pages else None,
        )

    def numbers(self) -> list[int]:
        """Return every page number in the window, in display order."""
        ordered: list[int] = []
        if self.first_page is not None:
            ordered.append(self.first_page)
        ordered.extend(self.pages_before)
        ordered.append(self.current_page)
        ordered.extend(self.pages_after)
        if self.last_page is not None:
            ordered.append(self.last_page)
        return ordered


@dc.dataclass(slots=True, frozen=True)
class PaginatedPage:
    """One output page of a paginated group.

    Attributes
    ----------
    source_page : Page or None
        Listing page the group belongs to; ``None`` when paginating a bare
        entry sequence, in which case no URLs are synthesized.
    page_number : int
        1-based position in the group.
    total_pages : int
        Number of pages in the group, identical on every page.
    entries : tuple[Entry, ...]
        Slice of the listing shown on this page.
    url : str or None
        Address of this output page.
    prev_url, next_url : str or None
        Neighbouring pages; ``None`` at the group boundaries.
    label : str or None
        Group label for alphabetic pagination (the leading letter).
    """

    source_page: Page | None
    page_number: int
    total_pages: int
    entries: tuple[Entry, ...]
    url: str | None = None
    prev_url: str | None = None
    next_url: str | None = None
    label: str | None = None

    @property
    def info(self) -> PaginationInfo:
        return PaginationInfo(self.page_number, self.total_pages)

    @property
    def is_first(self) -> bool:
        return self.page_number == 1

    @property
    def is_last(self) -> bool:
        return self.page_number == self.total_pages

    def window(self, span: int = DEFAULT_WINDOW_SPAN) -> PageWindow:
        return PageWindow.around(self.page_number, self.total_pages, span)

    def url_for(self, number: int) -> str | None:
        """Return the URL of page ``number`` in this group, if URLs apply."""
        if self.source_page is None:
            return None
        return paged_url(self.source_page.url, number)


def _validate(page_size: int, mode: str) -> None:
    if mode not in PAGINATION_MODES:
        known = ", ".join(PAGINATION_MODES)
        msg = f"Unknown pagination mode {mode!r}. Known modes: {known}"
        raise ConfigError(msg)
    if isinstance(page_size, bool) or not isinstance(page_size, int):
        msg = f"Page size must be an integer, got {page_size!r}."
        raise ConfigError(msg)
    if page_size <= 0:
        msg = f"Page size must be positive, got {page_size}."
        raise ConfigError(msg)


def _letter_of(entry: Entry) -> str:
    """Return the alphabetic group label for ``entry``."""
    first = entry.key[:1].upper()
    return first if first.isalpha() else ALPHABETIC_FALLBACK_LABEL


def _chunks(
    entries: cabc.Sequence[Entry], size: int
) -> cabc.Iterator[tuple[Entry, ...]]:
    for start in range(0, len(entries), size):
        yield tuple(entries[start : start + size])


def split_entries(
    entries: cabc.Sequence[Entry],
    page_size: int,
    *,
    mode: PaginationMode = "absolute",
) -> list[tuple[str | None, tuple[Entry, ...]]]:
    """Partition ``entries`` into labelled chunks, preserving their order.

    Parameters
    ----------
    entries : Sequence[Entry]
        Ordered listing entries.
    page_size : int
        Maximum number of entries per chunk.
    mode : {"none", "absolute", "alphabetic"}, optional
        Partitioning policy; defaults to ``"absolute"``.

    Returns
    -------
    list[tuple[str | None, tuple[Entry, ...]]]
        ``(label, chunk)`` pairs. An empty listing yields a single empty chunk
        so the listing page still renders its empty state.

    Raises
    ------
    ConfigError
        If ``page_size`` is not a positive integer or ``mode`` is unknown.
    """
    _validate(page_size, mode)
    entries = tuple(entries)
    if not entries:
        return [(None, ())]
    if mode == "none":
        return [(None, entries)]
    if mode == "absolute":
        return [(None, chunk) for chunk in _chunks(entries, page_size)]

    result: list[tuple[str | None, tuple[Entry, ...]]] = []
    for letter, group in itertools.groupby(entries, key=_letter_of):
        result.extend((letter, chunk) for chunk in _chunks(tuple(group), page_size))
    return result


def count_pages(
    entries: cabc.Sequence[Entry],
    page_size: int,
    *,
    mode: PaginationMode = "absolute",
) -> int:
    """Return how many output pages ``entries`` need under the given policy."""
    if mode == "absolute":
        _validate(page_size, mode)
        return max(1, math.ceil(len(entries) / page_size))
    return len(split_entries(entries, page_size, mode=mode))


def paginate(
    entries: cabc.Sequence[Entry],
    page_size: int,
    *,
    source_page: Page | None = None,
    mode: PaginationMode = "absolute",
) -> list[PaginatedPage]:
    """Split ``entries`` into numbered pages with neighbour links.

    Parameters
    ----------
    entries : Sequence[Entry]
        Ordered listing entries; concatenating the returned slices reproduces
        this sequence exactly.
    page_size : int
        Maximum number of entries per page.
    source_page : Page, optional
        Listing page hosting the group. When given, every page receives its
        own URL and ``prev_url``/``next_url`` links synthesized from the
        source page URL.
    mode : {"none", "absolute", "alphabetic"}, optional
        Partitioning policy; defaults to ``"absolute"``.

    Returns
    -------
    list[PaginatedPage]
        Pages numbered from 1 without gaps. Empty input yields exactly one
        page with no entries. ``url``, ``prev_url`` and ``next_url`` are only
        filled in when ``source_page`` is given; a bare entry sequence has no
        addresses to link, so every page then carries ``None`` for all three.

    Raises
    ------
    ConfigError
        If ``page_size`` is not a positive integer or ``mode`` is unknown.
    """
    chunks = split_entries(entries, page_size, mode=mode)
    total = len(chunks)
    base_url = source_page.url if source_page is not None else None

    def _url(number: int) -> str | None:
        if base_url is None or number < 1 or number > total:
            return None
        return paged_url(base_url, number)

    pages = [
        PaginatedPage(
            source_page=source_page,
            page_number=number,
            total_pages=total,
            entries=chunk,
            url=_url(number),
            prev_url=_url(number - 1),
            next_url=_url(number + 1),
            label=label,
        )
        for number, (label, chunk) in enumerate(chunks, start=1)
    ]
    logger.debug(
        "paginated %d entries into %d page(s) of at most %d (%s)",
        len(entries),
        total,
        page_size,
        source_page.id if source_page is not None else "detached",
    )
    return pages


def paginate_page(page: Page, settings: PaginationSettings) -> list[PaginatedPage]:
    """Paginate the entry group of listing ``page`` under ``settings``."""
    if page.entry_group is None:
        msg = f"Page {page.id!r} does not host an entry listing."
        raise ValueError(msg)
    return paginate(
        page.entry_group,
        settings.page_size_for(page),
        source_page=page,
        mode=settings.mode,
    )


__all__ = [
    "PAGINATION_MODES",
    "PageWindow",
    "PaginatedPage",
    "PaginationInfo",
    "PaginationMode",
    "PaginationSettings",
    "count_pages",
    "paginate",
    "paginate_page",
    "split_entries",
]
