"""Shared fixtures for docnav tests."""

from __future__ import annotations

import typing as typ

import pytest

from docnav.tree import Entry, PageDefinition, PageTree


def make_entries(count: int, *, prefix: str = "entry") -> tuple[Entry, ...]:
    """Return ``count`` entries keyed ``<prefix>-00``, ``<prefix>-01``, ..."""
    return tuple(
        Entry(key=f"{prefix}-{index:02d}", payload={"index": index})
        for index in range(count)
    )


def site_definitions(
    *, changelog_entries: int = 25, changelog_page_size: int | None = None
) -> list[PageDefinition]:
    """Return definitions for a small documentation site.

    The tree looks like::

        index
        ├── guide
        │   ├── install
        │   │   ├── linux
        │   │   └── windows
        │   └── usage
        ├── reference
        │   └── api
        └── changelog (listing)
    """
    return [
        PageDefinition("index", "Home", "index.html"),
        PageDefinition("guide", "Guide", "guide/index.html", parent="index"),
        PageDefinition(
            "install",
            "Installing docnav",
            "guide/install/index.html",
            parent="guide",
            name="Install",
        ),
        PageDefinition("linux", "Linux", "guide/install/linux.html", parent="install"),
        PageDefinition(
            "windows", "Windows", "guide/install/windows.html", parent="install"
        ),
        PageDefinition("usage", "Usage", "guide/usage.html", parent="guide"),
        PageDefinition("reference", "Reference", "reference/index.html", parent="index"),
        PageDefinition("api", "API", "reference/api.html", parent="reference"),
        PageDefinition(
            "changelog",
            "<em>Changelog</em>",
            "changelog.html",
            parent="index",
            name="Changelog",
            entries=make_entries(changelog_entries, prefix="release"),
            page_size=changelog_page_size,
        ),
    ]


@pytest.fixture
def site_tree() -> PageTree:
    """Return the sample site tree described by :func:`site_definitions`."""
    return PageTree.build(site_definitions())


@pytest.fixture
def entry_factory() -> typ.Callable[..., tuple[Entry, ...]]:
    """Return the :func:`make_entries` helper for building listings."""
    return make_entries


@pytest.fixture
def definitions_factory() -> typ.Callable[..., list[PageDefinition]]:
    """Return the :func:`site_definitions` helper for variant trees."""
    return site_definitions
