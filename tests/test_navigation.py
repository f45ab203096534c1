"""Unit tests for the ``## Navigation`` link list.

The tests pin the line format, the fixed parent/sibling/child order, and the
domain handling of :func:`llmstxt.navigation.generate_navigation_section`.
"""

from __future__ import annotations

import pytest

from llmstxt.navigation import generate_navigation_section


def test_root_without_relatives_is_empty() -> None:
    """The root chunk with nothing to link should render no lines."""
    assert generate_navigation_section("", "") == "", (
        "expected an empty string so callers can drop the heading"
    )


def test_top_level_chunk_links_root_and_siblings() -> None:
    """A top-level chunk should link the overview, then its siblings."""
    text = generate_navigation_section("guide", "", ["api"])
    assert text == (
        "- [Documentation Overview](/llms.txt): Parent documentation section\n"
        "- [Api](/api/llms.txt): Api documentation"
    ), f"unexpected navigation {text!r}"


def test_nested_chunk_links_parent_siblings_then_children() -> None:
    """Parent, sibling, and child links should appear in that order."""
    text = generate_navigation_section(
        "guide/advanced",
        "guide",
        ["guide/basics"],
        ["guide/advanced/internals"],
    )
    assert text.splitlines() == [
        "- [Guide](/guide/llms.txt): Parent documentation section",
        "- [Basics](/guide/basics/llms.txt): Basics documentation",
        "- [Internals](/guide/advanced/internals/llms.txt): Internals documentation",
    ], f"unexpected navigation order {text!r}"


@pytest.mark.parametrize(
    ("domain", "expected"),
    [
        (None, "/llms.txt"),
        ("https://docs.example.com", "https://docs.example.com/llms.txt"),
    ],
)
def test_domain_prefixes_links(domain: str | None, expected: str) -> None:
    """Links should be site-absolute unless a domain is configured."""
    text = generate_navigation_section("guide", "", domain=domain)
    assert f"({expected})" in text, f"expected parent link {expected!r} in {text!r}"
