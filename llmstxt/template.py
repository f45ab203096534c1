"""Expand ``{name}`` placeholders in ``llms.txt`` templates."""

from __future__ import annotations

import collections.abc as cabc
import re

PLACEHOLDER_PATTERN = re.compile(r"\{(\w+)\}")


def expand_template(
    template: str, variables: cabc.Mapping[str, object | None]
) -> str:
    """Substitute every ``{name}`` in ``template`` from ``variables``.

    Unknown names and ``None`` values expand to an empty string. Braces that do
    not enclose a plain identifier are left untouched; there is no escaping.

    Examples
    --------
    >>> expand_template("# {title}\\n\\n{missing}", {"title": "Foo"})
    '# Foo\\n\\n'
    >>> expand_template("{ not a placeholder }", {})
    '{ not a placeholder }'
    """

    def _replace(match: re.Match[str]) -> str:
        value = variables.get(match.group(1))
        return "" if value is None else str(value)

    return PLACEHOLDER_PATTERN.sub(_replace, template)


def template_placeholders(template: str) -> list[str]:
    """Return placeholder names in order of first appearance."""
    return list(dict.fromkeys(PLACEHOLDER_PATTERN.findall(template)))


__all__ = ["PLACEHOLDER_PATTERN", "expand_template", "template_placeholders"]
