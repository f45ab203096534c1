"""Render navigation links between related ``llms.txt`` files."""

from __future__ import annotations

import collections.abc as cabc
import posixpath

from ._constants import LLMS_TXT_FILENAME

ROOT_PARENT_TITLE = "Documentation Overview"
PARENT_DESCRIPTION = "Parent documentation section"


def generate_navigation_section(
    current_dir_path: str,
    parent_path: str,
    sibling_paths: cabc.Sequence[str] = (),
    child_paths: cabc.Sequence[str] = (),
    *,
    domain: str | None = None,
) -> str:
    """Return a Markdown bullet list linking a chunk to its neighbours.

    Parameters
    ----------
    current_dir_path : str
        Directory of the chunk being rendered (``""`` for the root).
    parent_path : str
        Directory of the parent chunk (``""`` for the root).
    sibling_paths : Sequence[str], optional
        Sibling chunk directories, rendered in the given order.
    child_paths : Sequence[str], optional
        Direct child chunk directories, rendered in the given order.
    domain : str, optional
        Base URL prefixed to every link. Links are site-absolute when unset.

    Returns
    -------
    str
        Newline-joined bullet lines, or ``""`` when there is nothing to link
        so callers can drop the surrounding heading.

    Examples
    --------
    >>> print(generate_navigation_section("guide", "", ["api"]))
    - [Documentation Overview](/llms.txt): Parent documentation section
    - [Api](/api/llms.txt): Api documentation
    """
    links: list[str] = []

    if parent_path != current_dir_path and current_dir_path:
        parent_title = ROOT_PARENT_TITLE if not parent_path else _title_for(parent_path)
        parent_url = _llms_txt_url(parent_path, domain)
        links.append(f"- [{parent_title}]({parent_url}): {PARENT_DESCRIPTION}")

    for related in (*sibling_paths, *child_paths):
        title = _title_for(related)
        url = _llms_txt_url(related, domain)
        links.append(f"- [{title}]({url}): {title} documentation")

    return "\n".join(links)


def _title_for(dir_path: str) -> str:
    """Return the capitalized last segment of ``dir_path``."""
    name = posixpath.basename(dir_path.rstrip("/"))
    return name[:1].upper() + name[1:]


def _llms_txt_url(dir_path: str, domain: str | None) -> str:
    target = f"{dir_path}/{LLMS_TXT_FILENAME}" if dir_path else LLMS_TXT_FILENAME
    return f"{domain}/{target}" if domain else f"/{target}"


__all__ = ["generate_navigation_section"]
