"""Behaviour tests for paginated listing pages.

These scenarios build every render context of the sample site and inspect the
contexts produced for the changelog listing: how many output pages it spans,
how its pages link to their neighbours, and how the breadcrumb trail reports
the position inside the listing.

The tests are implemented as pytest-bdd scenarios backed by the
``paginated_listing.feature`` feature file.

Usage:
    Run these behaviour tests with pytest, for example:

        pytest tests/bdd/test_paginated_listing.py -v
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from docnav.context import RenderContext, build_site_contexts
from docnav.pagination import PaginationSettings
from docnav.tree import PageDefinition, PageTree

if typ.TYPE_CHECKING:
    import collections.abc as cabc

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "paginated_listing.feature"
)
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _changelog_contexts(scenario_state: dict[str, object]) -> list[RenderContext]:
    return scenario_state["changelog"]  # type: ignore[return-value]


@given(parsers.parse("a site whose changelog lists {count:d} releases"))
def given_site(
    count: int,
    definitions_factory: cabc.Callable[..., list[PageDefinition]],
    scenario_state: dict[str, object],
) -> None:
    """Store the sample site definitions with ``count`` changelog entries.

    Parameters
    ----------
    count : int
        Number of release entries listed on the changelog page.
    definitions_factory : Callable[..., list[PageDefinition]]
        Fixture returning the sample site definitions.
    scenario_state : dict[str, object]
        Mutable state shared across steps; receives ``definitions``.
    """
    scenario_state["definitions"] = definitions_factory(changelog_entries=count)


@given(parsers.parse("pagination of {limit:d} entries per page"))
def given_pagination(limit: int, scenario_state: dict[str, object]) -> None:
    """Store the pagination policy used by the build."""
    scenario_state["settings"] = PaginationSettings(limit=limit)


@when("I build the render contexts for the site")
def when_build(scenario_state: dict[str, object]) -> None:
    """Build the tree and every render context, keeping the changelog ones.

    Parameters
    ----------
    scenario_state : dict[str, object]
        Mutable state shared across steps. Reads ``definitions`` and
        ``settings``; stores the changelog contexts under ``changelog``.
    """
    settings: PaginationSettings = scenario_state["settings"]  # type: ignore[assignment]
    definitions: list[PageDefinition] = scenario_state["definitions"]  # type: ignore[assignment]
    tree = PageTree.build(definitions, pagination=settings)
    result = build_site_contexts(tree, settings)
    assert result.ok, f"expected a clean build, got {result.errors!r}"
    scenario_state["changelog"] = [
        ctx for ctx in result.contexts if ctx.page.id == "changelog"
    ]


@then("the changelog renders 3 pages holding 10, 10 and 5 entries")
def then_three_pages(scenario_state: dict[str, object]) -> None:
    """Verify the changelog spans three pages of 10, 10 and 5 entries."""
    contexts = _changelog_contexts(scenario_state)
    sizes = [len(ctx.pagination.entries) for ctx in contexts if ctx.pagination]
    assert sizes == [10, 10, 5], f"expected slices [10, 10, 5], got {sizes!r}"
    urls = [ctx.url for ctx in contexts]
    assert urls == ["changelog.html", "changelog_p2.html", "changelog_p3.html"], (
        f"unexpected changelog URLs {urls!r}"
    )


@then("only the first page lacks a previous link")
def then_prev_links(scenario_state: dict[str, object]) -> None:
    """Verify previous links exist on every page but the first."""
    contexts = _changelog_contexts(scenario_state)
    missing = [
        ctx.pagination.prev_url is None for ctx in contexts if ctx.pagination
    ]
    assert missing == [True, False, False], f"unexpected prev links {missing!r}"


@then("only the last page lacks a next link")
def then_next_links(scenario_state: dict[str, object]) -> None:
    """Verify next links exist on every page but the last."""
    contexts = _changelog_contexts(scenario_state)
    missing = [
        ctx.pagination.next_url is None for ctx in contexts if ctx.pagination
    ]
    assert missing == [False, False, True], f"unexpected next links {missing!r}"


@then(parsers.parse('the last breadcrumb on page {number:d} reads "{text}"'))
def then_paged_crumb(
    number: int, text: str, scenario_state: dict[str, object]
) -> None:
    """Verify the trailing crumb of page ``number`` reports its position."""
    ctx = _changelog_contexts(scenario_state)[number - 1]
    crumb = ctx.breadcrumbs[-1]
    assert crumb.is_paged, "expected the trailing crumb to be paged"
    actual = f"Page {crumb.current_page} of {crumb.total_pages}"
    assert actual == text, f"expected {text!r}, got {actual!r}"
    assert not any(c.is_paged for c in ctx.breadcrumbs[:-1]), (
        "expected ancestors to stay unpaged"
    )


@then("the changelog renders 1 page with no entries")
def then_single_empty_page(scenario_state: dict[str, object]) -> None:
    """Verify an empty listing still renders exactly one page."""
    contexts = _changelog_contexts(scenario_state)
    assert len(contexts) == 1, f"expected one page, got {len(contexts)}"
    paginated = contexts[0].pagination
    assert paginated is not None, "expected listing data on the changelog"
    assert paginated.entries == (), "expected no entries"
    assert paginated.prev_url is None, "expected no previous link"
    assert paginated.next_url is None, "expected no next link"


@then("the changelog breadcrumb is not paged")
def then_crumb_not_paged(scenario_state: dict[str, object]) -> None:
    """Verify a single-page listing keeps a plain trailing crumb."""
    crumb = _changelog_contexts(scenario_state)[0].breadcrumbs[-1]
    assert not crumb.is_paged, "expected no page position on a single page"
