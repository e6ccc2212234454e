"""URL helpers for pages, paginated groups, and rendered links.

Page URLs inside the tree are site-root relative (``guide/install.html``).
Links placed into a render context are resolved through a :class:`UrlScheme`,
either relative to the page being rendered or prefixed with an absolute base.

Examples
--------
>>> paged_url("modifiers/mask.html", 3)
'modifiers/mask_p3.html'
>>> relative_url("guide/install/linux.html", "guide/index.html")
'../index.html'
"""

from __future__ import annotations

import dataclasses as dc
import posixpath
import typing as typ

from ._constants import HTML_SUFFIX, PAGED_URL_TEMPLATE
from .errors import ConfigError

SchemeKind = typ.Literal["relative", "absolute"]


def paged_url(url: str, number: int) -> str:
    """Return the URL of page ``number`` within the group rooted at ``url``.

    Page 1 always lives at the source page URL so links to the listing stay
    stable however many entries it holds. A directory-style URL such as
    ``changelog/`` pages through ``changelog/index_p2.html``.
    """
    if number < 1:
        msg = f"Page numbers start at 1, got {number}."
        raise ValueError(msg)
    if number == 1:
        return url
    head, tail = posixpath.split(url)
    if not tail:
        tail = f"index{HTML_SUFFIX}"
    stem, suffix = posixpath.splitext(tail)
    paged = PAGED_URL_TEMPLATE.format(stem=stem, number=number, suffix=suffix)
    return posixpath.join(head, paged) if head else paged


def ensure_html_suffix(url: str) -> str:
    """Give ``url`` an ``.html`` suffix unless it already has an extension."""
    if not url or url.endswith("/"):
        return url
    _, ext = posixpath.splitext(posixpath.basename(url))
    if ext:
        return url
    return f"{url}{HTML_SUFFIX}"


def normalize_url(url: str) -> str:
    """Return a site-root relative URL with an HTML suffix."""
    return ensure_html_suffix(url.strip().lstrip("/"))


def relative_url(from_url: str, to_url: str) -> str:
    """Return ``to_url`` expressed relative to the page at ``from_url``."""
    source_dir = posixpath.dirname(from_url.lstrip("/"))
    target = to_url.lstrip("/")
    target_dir, filename = posixpath.split(target)
    diff = posixpath.relpath(target_dir or ".", source_dir or ".")
    if diff == ".":
        return filename or "./"
    if not filename:
        return f"{diff}/"
    return posixpath.join(diff, filename)


@dc.dataclass(slots=True, frozen=True)
class UrlScheme:
    """Strategy used to turn site-root URLs into links inside a page.

    Attributes
    ----------
    kind : {"relative", "absolute"}
        ``"relative"`` writes links relative to the page being rendered;
        ``"absolute"`` prefixes every link with ``base_url``.
    base_url : str or None
        Required for the absolute scheme, ignored otherwise.
    """

    kind: SchemeKind = "relative"
    base_url: str | None = None

    def __post_init__(self) -> None:
        if self.kind not in ("relative", "absolute"):
            msg = f"Unknown URL scheme {self.kind!r}."
            raise ConfigError(msg)
        if self.kind == "absolute" and not self.base_url:
            msg = "The absolute URL scheme requires a base_url."
            raise ConfigError(msg)

    @classmethod
    def absolute(cls, base_url: str) -> UrlScheme:
        """Return an absolute scheme rooted at ``base_url``."""
        return cls(kind="absolute", base_url=base_url)

    def link(self, from_url: str, to_url: str) -> str:
        """Return the link to ``to_url`` as written on the page at ``from_url``."""
        if self.kind == "absolute":
            base = typ.cast("str", self.base_url).rstrip("/")
            return f"{base}/{to_url.lstrip('/')}"
        return relative_url(from_url, to_url)


__all__ = [
    "UrlScheme",
    "ensure_html_suffix",
    "normalize_url",
    "paged_url",
    "relative_url",
]
