"""Build the Markdown table of contents listed in ``llms.txt`` files.

Documents are either listed alphabetically by title or, when a sidebar is
configured, grouped under headings that mirror the sidebar's nesting. Pages
the sidebar does not mention are collected under a trailing ``### Other``
heading so nothing silently disappears from the index.

Example
-------
>>> from llmstxt.models import Document
>>> docs = [Document("Zeta", "zeta.md"), Document("Alpha", "guide/alpha.md")]
>>> print(generate_toc(docs, root=""), end="")
- [Alpha](/guide/alpha.md)
- [Zeta](/zeta.md)
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import posixpath
import re
import typing as typ
from pathlib import PurePath

from .models import SidebarItem
from .paths import is_within_directory, normalize_path
from .utils import document_link

if typ.TYPE_CHECKING:
    from .models import Document

SidebarInput = (
    cabc.Sequence[SidebarItem | cabc.Mapping[str, typ.Any]]
    | cabc.Mapping[str, typ.Any]
    | None
)

TOP_SECTION_LEVEL = 3
MAX_SECTION_LEVEL = 6
OTHER_SECTION_TITLE = "Other"
_LINK_SUFFIX_PATTERN = re.compile(r"[#?].*$")
_LINK_EXTENSION_PATTERN = re.compile(r"\.(md|html)$")


@dc.dataclass(frozen=True, slots=True)
class _LinkOptions:
    domain: str | None
    links_extension: str | None
    clean_urls: bool


@dc.dataclass(frozen=True, slots=True)
class _TocEntry:
    document: Document
    relative_path: str

    @property
    def key(self) -> str:
        return _match_key(self.relative_path)


def generate_toc(
    documents: cabc.Iterable[Document],
    *,
    root: str | PurePath,
    domain: str | None = None,
    sidebar: SidebarInput = None,
    links_extension: str | None = None,
    clean_urls: bool = False,
    directory_filter: str | None = None,
) -> str:
    """Render the table of contents for ``documents``.

    Parameters
    ----------
    documents : Iterable[Document]
        Pages to list.
    root : str or PurePath
        Source root used to compute each page's link path.
    domain : str, optional
        Base URL prefixed to links.
    sidebar : sequence or mapping, optional
        Sidebar tree (or multi-sidebar mapping) used to group and order the
        listing. It is only read, never modified.
    links_extension : str, optional
        Extension appended to links; ``.md`` when unset.
    clean_urls : bool, optional
        Drop the extension from links entirely.
    directory_filter : str, optional
        Only list pages below this directory (``"."``/``""`` lists all).

    Returns
    -------
    str
        Markdown bullet list, one ``- [Title](url)`` line per page, optionally
        interleaved with section headings.
    """
    options = _LinkOptions(domain, links_extension, clean_urls)
    entries = [
        _TocEntry(document, normalize_path(document.path, root))
        for document in documents
    ]
    entries = _filter_by_directory(entries, directory_filter)
    sections = flatten_sidebar(sidebar)

    if not sections:
        return "".join(_toc_link(entry, options) for entry in _by_title(entries))

    walker = _SidebarWalker(entries, options)
    parts = [walker.visit(section, TOP_SECTION_LEVEL) for section in sections]
    remaining = walker.unvisited()
    if remaining:
        links = "".join(_toc_link(entry, options) for entry in _by_title(remaining))
        parts.append(_section(OTHER_SECTION_TITLE, TOP_SECTION_LEVEL, links))
    return "\n".join(part for part in parts if part)


def flatten_sidebar(sidebar: SidebarInput) -> tuple[SidebarItem, ...]:
    """Normalize any supported sidebar shape into top-level items.

    Multi-sidebar mappings (path prefix → items or ``{base, items}``) are
    concatenated in mapping order.
    """
    if not sidebar:
        return ()
    if isinstance(sidebar, cabc.Mapping):
        flattened: list[SidebarItem] = []
        for group in sidebar.values():
            if isinstance(group, cabc.Mapping):
                flattened.extend(_to_items(group.get("items") or [], group.get("base")))
            elif isinstance(group, cabc.Sequence) and not isinstance(group, str):
                flattened.extend(_to_items(group, None))
        return tuple(flattened)
    if isinstance(sidebar, cabc.Sequence) and not isinstance(sidebar, str):
        return tuple(_to_items(sidebar, None))
    return ()


def _to_items(
    raw_items: cabc.Iterable[typ.Any], base: str | None
) -> list[SidebarItem]:
    items: list[SidebarItem] = []
    for raw in raw_items:
        match raw:
            case SidebarItem():
                items.append(raw)
            case cabc.Mapping():
                items.append(SidebarItem.from_mapping(raw, base=base))
            case _:
                continue
    return items


class _SidebarWalker:
    """Visit sidebar items, emitting each matched document at most once."""

    def __init__(self, entries: list[_TocEntry], options: _LinkOptions) -> None:
        self._entries = entries
        self._options = options
        self._by_key: dict[str, _TocEntry] = {}
        for entry in entries:
            self._by_key.setdefault(entry.key, entry)
        self._emitted: set[str] = set()

    def visit(self, item: SidebarItem, level: int) -> str:
        blocks: list[str] = []
        links = self._link_for(item.link)
        for child in item.items:
            if not child.items:
                links += self._link_for(child.link)
                continue
            section = self.visit(child, min(level + 1, MAX_SECTION_LEVEL))
            if section:
                blocks.extend(filter(None, (links, section)))
                links = ""
        if links:
            blocks.append(links)
        if not blocks:
            return ""
        body = "\n".join(blocks)
        return _section(item.text, level, body) if item.text else body

    def unvisited(self) -> list[_TocEntry]:
        return [entry for entry in self._entries if entry.key not in self._emitted]

    def _link_for(self, link: str | None) -> str:
        if not link:
            return ""
        key = _match_key(link)
        entry = self._by_key.get(key)
        if entry is None or key in self._emitted:
            return ""
        self._emitted.add(key)
        return _toc_link(entry, self._options)


def _toc_link(entry: _TocEntry, options: _LinkOptions) -> str:
    url = document_link(
        entry.relative_path,
        domain=options.domain,
        links_extension=options.links_extension,
        clean_urls=options.clean_urls,
    )
    description = entry.document.description
    suffix = f": {description}" if description else ""
    return f"- [{entry.document.title}]({url}){suffix}\n"


def _section(title: str, level: int, body: str) -> str:
    return f"{'#' * level} {title}\n\n{body}"


def _by_title(entries: cabc.Iterable[_TocEntry]) -> list[_TocEntry]:
    return sorted(entries, key=lambda entry: entry.document.title.casefold())


def _filter_by_directory(
    entries: list[_TocEntry], directory_filter: str | None
) -> list[_TocEntry]:
    return [
        entry
        for entry in entries
        if is_within_directory(entry.relative_path, directory_filter)
    ]


def _match_key(link: str) -> str:
    """Reduce a sidebar link or document path to a comparable key.

    ``/guide/``, ``guide/index.md``, ``guide.md`` and ``/guide.html`` all map
    to ``guide``.
    """
    text = _LINK_SUFFIX_PATTERN.sub("", link.strip()).strip("/")
    text = _LINK_EXTENSION_PATTERN.sub("", text)
    if posixpath.basename(text) == "index":
        text = posixpath.dirname(text)
    return text.strip("/")


__all__ = ["SidebarInput", "flatten_sidebar", "generate_toc"]
