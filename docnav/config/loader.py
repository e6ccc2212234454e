"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML

from docnav.tree import PageDefinition
from docnav.urls import normalize_url

from .helpers import (
    _build_doc_info,
    _build_entries,
    _build_pagination,
    _build_url_scheme,
    _optional_int,
    _optional_str,
)
from .models import SiteConfig, SiteConfigError

if typ.TYPE_CHECKING:
    from pathlib import Path


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML document describing the site's pages and navigation.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML site file (for example, ``site.yaml``).

    Returns
    -------
    SiteConfig
        Parsed configuration: page definitions in authoring order plus the
        pagination, URL scheme, and run metadata settings.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If required sections or fields are missing or invalid (for example,
        no pages are defined or a page has no ``url``).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from docnav.config import load_site_config
    >>> config = load_site_config(Path("site.yaml"))  # doctest: +SKIP
    >>> config.pages[0].id  # doctest: +SKIP
    'index'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    site = raw.get("site") or {}
    title = _optional_str(site.get("title")) or "Documentation"

    pages_raw = raw.get("pages") or {}
    if not isinstance(pages_raw, dict) or not pages_raw:
        msg = "No pages defined in site configuration."
        raise SiteConfigError(msg)

    pages: list[PageDefinition] = []
    for key, payload in pages_raw.items():
        match payload:
            case dict():
                pages.append(
                    _build_page_definition(str(key), payload, site_title=title)
                )
            case _:
                msg = f"Page '{key}' must be a mapping."
                raise SiteConfigError(msg)

    return SiteConfig(
        title=title,
        pages=pages,
        pagination=_build_pagination(raw.get("pagination")),
        url_scheme=_build_url_scheme(raw.get("url_scheme")),
        doc_info=_build_doc_info(raw.get("doc_info")),
    )


def _build_page_definition(
    key: str, payload: typ.Mapping[str, typ.Any], *, site_title: str
) -> PageDefinition:
    """Build a PageDefinition for a single page entry."""
    parent = _optional_str(payload.get("parent"))
    url = _optional_str(payload.get("url"))
    if url is None:
        msg = f"Page '{key}' is missing 'url'."
        raise SiteConfigError(msg)
    title = _optional_str(payload.get("title"))
    if title is None:
        if parent is not None:
            msg = f"Page '{key}' is missing 'title'."
            raise SiteConfigError(msg)
        title = site_title

    entries_raw = payload.get("entries")
    entries = _build_entries(entries_raw, key) if entries_raw is not None else None
    if entries is None and payload.get("listing"):
        entries = ()

    return PageDefinition(
        id=key,
        title=title,
        url=normalize_url(url),
        parent=parent,
        name=_optional_str(payload.get("name")),
        entries=entries,
        page_size=_optional_int(payload.get("page_size"), field=f"{key}.page_size"),
    )


__all__ = ["load_site_config"]
