"""Unit tests for ``{name}`` placeholder expansion."""

from __future__ import annotations

from llmstxt.template import expand_template, template_placeholders


def test_unknown_placeholders_expand_to_empty() -> None:
    """Placeholders without a variable should disappear."""
    text = expand_template("# {title}\n\n{missing}", {"title": "Foo"})
    assert text == "# Foo\n\n", f"unexpected expansion {text!r}"


def test_none_values_expand_to_empty() -> None:
    """A ``None`` value should expand like a missing one."""
    text = expand_template("[{description}]", {"description": None})
    assert text == "[]", f"unexpected expansion {text!r}"


def test_non_identifier_braces_pass_through() -> None:
    """Braces around anything but an identifier should be left alone."""
    text = expand_template("{ spaced } {a-b} {{title}}", {"title": "T"})
    assert text == "{ spaced } {a-b} {T}", f"unexpected expansion {text!r}"


def test_values_are_stringified() -> None:
    """Non-string values should be rendered with ``str``."""
    text = expand_template("{count} pages", {"count": 3})
    assert text == "3 pages", f"unexpected expansion {text!r}"


def test_placeholders_listed_once_in_order() -> None:
    """Placeholder names should be listed once, in first-seen order."""
    names = template_placeholders("{toc} {title} {toc}")
    assert names == ["toc", "title"], f"unexpected placeholder list {names!r}"
