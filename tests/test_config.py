"""Tests for loading the site YAML with ruamel.yaml.

Each test writes a small ``site.yaml`` into ``tmp_path`` and checks the
resulting :class:`docnav.config.SiteConfig` or the error raised for it.
"""

from __future__ import annotations

import textwrap
import typing as typ

import pytest

from docnav.config import SiteConfigError, load_site_config
from docnav.errors import ConfigError
from docnav.tree import Entry

if typ.TYPE_CHECKING:
    from pathlib import Path

SITE_YAML = """
site:
  title: Script Docs
doc_info:
  corpus:
    name: Victoria 3
    version: 1.5.13
url_scheme:
  base_url: https://docs.example.com
pagination:
  type: alphabetic
  limit: 20
  window: 3
pages:
  index:
    url: /index
  guide:
    parent: index
    title: Guide
    url: guide/index
  install:
    parent: guide
    title: Installing
    name: Install
    url: guide/install.html
  changelog:
    parent: index
    title: Changelog
    url: changelog.html
    page_size: 5
    entries:
      - v1.0
      - key: v1.1
        summary: Fixes
  archive:
    parent: index
    title: Archive
    url: archive.html
    listing: true
"""


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "site.yaml"
    path.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")
    return path


def test_load_full_site(tmp_path: Path) -> None:
    """Every section of the site file is parsed."""
    config = load_site_config(_write(tmp_path, SITE_YAML))

    assert config.title == "Script Docs", f"unexpected title {config.title!r}"
    assert [page.id for page in config.pages] == [
        "index",
        "guide",
        "install",
        "changelog",
        "archive",
    ], "expected pages in authoring order"
    index = config.get_page("index")
    assert index.title == "Script Docs", "expected the root to inherit the site title"
    assert index.url == "index.html", "expected the URL to be normalized"
    assert config.get_page("guide").url == "guide/index.html", "expected .html added"
    assert config.get_page("install").name == "Install", "expected the short name"

    changelog = config.get_page("changelog")
    assert changelog.page_size == 5, "expected the page size override"
    assert changelog.entries == (
        Entry("v1.0"),
        Entry("v1.1", {"summary": "Fixes"}),
    ), f"unexpected entries {changelog.entries!r}"
    assert config.get_page("archive").entries == (), "expected an empty listing"
    assert config.get_page("guide").entries is None, "expected no listing on guide"

    assert config.pagination.mode == "alphabetic", "expected alphabetic pagination"
    assert (config.pagination.limit, config.pagination.window) == (20, 3), (
        "expected the configured limit and window"
    )
    assert config.url_scheme.kind == "absolute", "expected an absolute scheme"
    assert config.url_scheme.base_url == "https://docs.example.com", "expected base"
    assert config.doc_info.corpus_name == "Victoria 3", "expected corpus name"
    assert config.doc_info.corpus_version == "1.5.13", "expected corpus version"
    assert config.doc_info.generator_name == "docnav", "expected generator default"


def test_loaded_config_builds_tree(tmp_path: Path) -> None:
    """The parsed definitions link into a tree."""
    tree = load_site_config(_write(tmp_path, SITE_YAML)).build_tree()
    assert tree.root.id == "index", "expected index as the root"
    assert [page.id for page in tree.listing_pages()] == ["changelog", "archive"], (
        "expected both listings"
    )


def test_minimal_site_uses_defaults(tmp_path: Path) -> None:
    """Omitted sections fall back to relative links and default pagination."""
    config = load_site_config(
        _write(tmp_path, "pages:\n  home:\n    title: Home\n    url: index.html\n")
    )
    assert config.title == "Documentation", "expected the default site title"
    assert config.pagination.mode == "absolute", "expected absolute pagination"
    assert config.pagination.limit == 50, "expected the default limit"
    assert config.url_scheme.kind == "relative", "expected relative links"


def test_unknown_page_lookup(tmp_path: Path) -> None:
    """Asking for an undefined page lists the known ones."""
    config = load_site_config(_write(tmp_path, SITE_YAML))
    with pytest.raises(KeyError, match="Known pages: index"):
        config.get_page("nowhere")


def test_missing_file(tmp_path: Path) -> None:
    """A missing site file is reported as such."""
    with pytest.raises(FileNotFoundError):
        load_site_config(tmp_path / "absent.yaml")


def test_top_level_must_be_mapping(tmp_path: Path) -> None:
    """A YAML list at the top level is rejected."""
    with pytest.raises(TypeError):
        load_site_config(_write(tmp_path, "- index\n- guide\n"))


@pytest.mark.parametrize(
    ("text", "match"),
    [
        pytest.param("site:\n  title: Empty\n", "No pages defined", id="no-pages"),
        pytest.param(
            "pages:\n  home: index.html\n", "must be a mapping", id="page-not-mapping"
        ),
        pytest.param(
            "pages:\n  home:\n    title: Home\n", "missing 'url'", id="missing-url"
        ),
        pytest.param(
            """
            pages:
              home:
                url: index.html
              child:
                parent: home
                url: child.html
            """,
            "missing 'title'",
            id="missing-child-title",
        ),
        pytest.param(
            """
            pages:
              home:
                url: index.html
                entries:
                  - summary: no key
            """,
            "without a 'key'",
            id="entry-without-key",
        ),
        pytest.param(
            """
            pages:
              home:
                url: index.html
                entries: v1.0
            """,
            "must be a list",
            id="entries-not-list",
        ),
        pytest.param(
            """
            pagination:
              type: sideways
            pages:
              home:
                url: index.html
            """,
            "Unknown pagination type",
            id="unknown-pagination-type",
        ),
        pytest.param(
            """
            pagination:
              limit: ten
            pages:
              home:
                url: index.html
            """,
            "must be an integer",
            id="limit-not-int",
        ),
        pytest.param(
            """
            pagination:
              window: -1
            pages:
              home:
                url: index.html
            """,
            "must not be negative",
            id="negative-window",
        ),
        pytest.param(
            """
            url_scheme: absolute
            pages:
              home:
                url: index.html
            """,
            "requires a base_url",
            id="absolute-without-base",
        ),
        pytest.param(
            """
            url_scheme: sideways
            pages:
              home:
                url: index.html
            """,
            "Unknown URL scheme",
            id="unknown-scheme",
        ),
    ],
)
def test_invalid_site_files(tmp_path: Path, text: str, match: str) -> None:
    """Invalid configuration raises SiteConfigError with a useful message."""
    with pytest.raises(SiteConfigError, match=match) as excinfo:
        load_site_config(_write(tmp_path, text))
    assert isinstance(excinfo.value, ConfigError), "expected a ConfigError subclass"


def test_zero_page_size_is_left_to_pagination(tmp_path: Path) -> None:
    """Non-positive sizes load and only fail when the listing is paginated."""
    config = load_site_config(
        _write(
            tmp_path,
            """
            pages:
              home:
                url: index.html
                page_size: 0
                entries: [a, b]
            """,
        )
    )
    assert config.get_page("home").page_size == 0, "expected the size to be kept"
