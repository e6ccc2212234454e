"""Error taxonomy shared by the navigation core.

``StructureError`` aborts a generation run: sitemap and breadcrumb data are
meaningless over an inconsistent tree. ``ConfigError`` covers invalid
pagination or site settings, and ``PageLookupError`` signals that a caller
asked for navigation data about a page the tree does not contain.
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class DocnavError(Exception):
    """Base class for errors raised by docnav."""


class StructureError(DocnavError):
    """Raised when page definitions do not form a well-formed tree.

    Attributes
    ----------
    violation : str
        Short label of the broken invariant (``"missing parent"``,
        ``"cycle"``, ``"duplicate url"``, ...).
    page_ids : tuple[str, ...]
        Identifiers of the pages involved, in discovery order.
    """

    def __init__(
        self, violation: str, page_ids: cabc.Iterable[str], detail: str = ""
    ) -> None:
        self.violation = violation
        self.page_ids = tuple(page_ids)
        ids = ", ".join(repr(page_id) for page_id in self.page_ids)
        msg = f"{violation}: {ids}" if ids else violation
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)


class ConfigError(DocnavError, ValueError):
    """Raised when pagination or site settings are invalid."""


class PageLookupError(DocnavError, LookupError):
    """Raised when navigation data is requested for a page outside the tree."""

    def __init__(self, page_id: str) -> None:
        self.page_id = page_id
        super().__init__(f"Page {page_id!r} is not part of the page tree.")


__all__ = ["ConfigError", "DocnavError", "PageLookupError", "StructureError"]
