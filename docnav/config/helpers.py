"""Utility helpers shared by the docnav configuration loader."""

from __future__ import annotations

import typing as typ

from docnav._constants import DEFAULT_PAGE_LIMIT, DEFAULT_WINDOW_SPAN
from docnav.context import DocInfo
from docnav.errors import ConfigError
from docnav.pagination import PAGINATION_MODES, PaginationSettings
from docnav.tree import Entry
from docnav.urls import UrlScheme

from .models import SiteConfigError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_int(value: object | None, *, field: str) -> int | None:
    """Return ``value`` as an int, rejecting booleans and non-numeric text."""
    match value:
        case None:
            return None
        case bool():
            pass
        case int():
            return value
        case str() if value.strip().lstrip("-").isdigit():
            return int(value)
    msg = f"'{field}' must be an integer, got {value!r}."
    raise SiteConfigError(msg)


def _build_entries(raw: object, page_id: str) -> tuple[Entry, ...]:
    """Build listing entries from strings or mappings carrying a ``key``."""
    if not isinstance(raw, list):
        msg = f"Page '{page_id}' entries must be a list."
        raise SiteConfigError(msg)
    entries: list[Entry] = []
    for item in raw:
        match item:
            case str() | int() | float():
                entries.append(Entry(key=str(item)))
            case dict():
                key = _optional_str(item.get("key"))
                if key is None:
                    msg = f"Page '{page_id}' has an entry without a 'key'."
                    raise SiteConfigError(msg)
                payload = {k: v for k, v in item.items() if k != "key"}
                entries.append(Entry(key=key, payload=payload))
            case _:
                msg = f"Page '{page_id}' has an unsupported entry {item!r}."
                raise SiteConfigError(msg)
    return tuple(entries)


def _build_pagination(payload: typ.Mapping[str, typ.Any] | None) -> PaginationSettings:
    """Build PaginationSettings, falling back to the package defaults."""
    if not payload:
        return PaginationSettings()
    mode = str(payload.get("type", "absolute")).strip().lower()
    if mode not in PAGINATION_MODES:
        known = ", ".join(PAGINATION_MODES)
        msg = f"Unknown pagination type '{mode}'. Known types: {known}"
        raise SiteConfigError(msg)
    limit = _optional_int(payload.get("limit"), field="pagination.limit")
    window = _optional_int(payload.get("window"), field="pagination.window")
    if window is not None and window < 0:
        msg = "'pagination.window' must not be negative."
        raise SiteConfigError(msg)
    return PaginationSettings(
        mode=typ.cast("typ.Any", mode),
        limit=DEFAULT_PAGE_LIMIT if limit is None else limit,
        window=DEFAULT_WINDOW_SPAN if window is None else window,
    )


def _build_url_scheme(value: object | None) -> UrlScheme:
    """Build a UrlScheme from ``relative``, ``absolute`` or a base URL mapping."""
    try:
        match value:
            case None | "relative":
                return UrlScheme()
            case {"base_url": base_url}:
                return UrlScheme.absolute(str(base_url))
            case str() as text if text.startswith(("http://", "https://")):
                return UrlScheme.absolute(text)
            case _:
                return UrlScheme(kind=typ.cast("typ.Any", value))
    except ConfigError as exc:
        raise SiteConfigError(str(exc)) from exc


def _build_doc_info(payload: typ.Mapping[str, typ.Any] | None) -> DocInfo:
    """Build DocInfo from the ``doc_info`` block, keeping generator defaults."""
    base = DocInfo()
    if not payload:
        return base
    corpus = payload.get("corpus") or {}
    generator = payload.get("generator") or {}
    return DocInfo(
        corpus_name=_optional_str(corpus.get("name")) or base.corpus_name,
        corpus_version=_optional_str(corpus.get("version")) or base.corpus_version,
        generator_name=_optional_str(generator.get("name")) or base.generator_name,
        generator_version=(
            _optional_str(generator.get("version")) or base.generator_version
        ),
    )


__all__ = [
    "_build_doc_info",
    "_build_entries",
    "_build_pagination",
    "_build_url_scheme",
    "_optional_int",
    "_optional_str",
]
