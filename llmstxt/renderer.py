"""Render ``llms.txt`` and ``llms-full.txt`` text from prepared documents.

The renderer joins the pieces computed elsewhere: navigation links from
:mod:`llmstxt.navigation`, the table of contents from :mod:`llmstxt.toc`, and
chunk metadata, all merged through :func:`~llmstxt.template.expand_template`.
The root chunk resolves its title and description from the site's index page;
directory chunks derive them from the directory name and add navigation.

Nothing here touches the filesystem. Callers pick the destination
(:attr:`~llmstxt.chunking.DirectoryChunk.output_path`) and persist the text.

Example
-------
>>> from llmstxt.chunking import organize_files_by_depth
>>> from llmstxt.models import Document
>>> docs = [Document("A", "guide/a.md"), Document("B", "guide/b.md")]
>>> chunks = organize_files_by_depth(docs, "", depth=2)
>>> text = render_directory_llms_txt(chunks[1], RenderOptions(root=""))
>>> text.splitlines()[0]
'# Guide Documentation'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import posixpath
import typing as typ
from pathlib import PurePath

from ._constants import (
    DEFAULT_DIRECTORY_LLMS_TXT_TEMPLATE,
    DEFAULT_LLMS_TXT_TEMPLATE,
    FALLBACK_DETAILS,
    FALLBACK_TITLE,
    FULL_TXT_SEPARATOR,
)
from .markdown_parser import extract_title, stringify_front_matter
from .navigation import generate_navigation_section
from .paths import is_within_directory, normalize_path
from .template import expand_template
from .toc import SidebarInput, generate_toc
from .utils import generate_metadata

if typ.TYPE_CHECKING:
    from .chunking import DirectoryChunk
    from .models import Document


@dc.dataclass(frozen=True, slots=True)
class SiteMetadata:
    """Site-wide fallbacks for the root ``llms.txt`` header."""

    title: str | None = None
    title_template: str | None = None
    description: str | None = None


@dc.dataclass(frozen=True, slots=True)
class RenderOptions:
    """Options shared by every chunk rendered in one build.

    Attributes
    ----------
    root : str or PurePath
        Source root document paths are relative to.
    domain : str, optional
        Base URL prefixed to links; site-absolute links when unset.
    links_extension : str, optional
        Extension used in TOC links (``.md`` when unset).
    clean_urls : bool
        Drop extensions from TOC links.
    template : str, optional
        Custom template used for every chunk instead of the defaults.
    template_variables : Mapping[str, str | None]
        Custom variables; they override computed values for every chunk.
    root_variables : Mapping[str, str | None]
        Explicit ``title``/``description``/``details``/``toc`` for the root
        chunk only.
    include_navigation : bool
        Add the ``## Navigation`` block to directory chunks.
    sidebar : sequence or mapping, optional
        Resolved sidebar tree used to group the TOC.
    root_front_matter : Mapping[str, Any]
        Parsed front matter of the site's root ``index.md``.
    root_body : str
        Body of the root ``index.md`` (searched for a first heading).
    site : SiteMetadata
        Site-level fallbacks for the root header.
    """

    root: str | PurePath
    domain: str | None = None
    links_extension: str | None = None
    clean_urls: bool = False
    template: str | None = None
    template_variables: cabc.Mapping[str, str | None] = dc.field(default_factory=dict)
    root_variables: cabc.Mapping[str, str | None] = dc.field(default_factory=dict)
    include_navigation: bool = True
    sidebar: SidebarInput = None
    root_front_matter: cabc.Mapping[str, typ.Any] = dc.field(default_factory=dict)
    root_body: str = ""
    site: SiteMetadata = dc.field(default_factory=SiteMetadata)


def render_directory_llms_txt(chunk: DirectoryChunk, options: RenderOptions) -> str:
    """Return the ``llms.txt`` text for one directory chunk."""
    if chunk.is_root:
        return render_root_llms_txt(chunk.files, options)

    name = posixpath.basename(chunk.dir_path)
    navigation = ""
    if options.include_navigation:
        links = generate_navigation_section(
            chunk.dir_path,
            chunk.parent_path,
            chunk.sibling_paths,
            chunk.child_paths,
            domain=options.domain,
        )
        if links:
            navigation = f"## Navigation\n\n{links}\n\n"

    variables: dict[str, str | None] = {
        "title": f"{name[:1].upper()}{name[1:]} Documentation",
        "description": f"> Documentation for the {name} section",
        "details": f"Documentation and guides for {name}.",
        "navigation": navigation,
        "toc": _toc(chunk.files, options),
    }
    variables.update(_present(options.template_variables))
    template = options.template or DEFAULT_DIRECTORY_LLMS_TXT_TEMPLATE
    return expand_template(template, variables)


def render_root_llms_txt(
    documents: cabc.Sequence[Document], options: RenderOptions
) -> str:
    """Return the root ``llms.txt`` text listing every document.

    Explicit values win; otherwise the header is resolved from the root
    page's hero block, then its plain front matter, then site metadata, then
    its first heading, before falling back to fixed text.
    """
    variables: dict[str, str | None] = {
        **_present(options.root_variables),
        **_present(options.template_variables),
    }
    front_matter = options.root_front_matter
    hero = front_matter.get("hero")
    if not isinstance(hero, cabc.Mapping):
        hero = {}
    site = options.site

    if variables.get("title") is None:
        variables["title"] = _first_text(
            hero.get("name"),
            front_matter.get("title"),
            site.title,
            site.title_template,
            extract_title(front_matter, options.root_body),
            FALLBACK_TITLE,
        )

    if variables.get("description") is None:
        variables["description"] = _first_text(
            hero.get("text"),
            front_matter.get("description"),
            site.description,
            front_matter.get("titleTemplate"),
        )
    if variables.get("description"):
        variables["description"] = f"> {variables['description']}"

    if variables.get("details") is None:
        variables["details"] = _first_text(
            hero.get("tagline"), front_matter.get("tagline")
        ) or (None if variables.get("description") else FALLBACK_DETAILS)

    if variables.get("toc") is None:
        variables["toc"] = _toc(documents, options)

    template = options.template or DEFAULT_LLMS_TXT_TEMPLATE
    return expand_template(template, variables)


def render_llms_full_txt(
    documents: cabc.Iterable[Document],
    *,
    root: str | PurePath,
    domain: str | None = None,
    links_extension: str | None = None,
    clean_urls: bool = False,
    directory_filter: str | None = None,
) -> str:
    """Return every document's body, each under a ``url`` front matter header.

    Documents are separated by a ``---`` rule. ``directory_filter`` limits
    the output to one directory (``"."`` or ``""`` keeps everything).
    """
    sections: list[str] = []
    for document in documents:
        relative_path = normalize_path(document.path, root)
        if not is_within_directory(relative_path, directory_filter):
            continue
        metadata = generate_metadata(
            document,
            file_path=relative_path,
            domain=domain,
            links_extension=links_extension,
            clean_urls=clean_urls,
        )
        sections.append(stringify_front_matter(document.body, metadata))
    return FULL_TXT_SEPARATOR.join(sections)


def _toc(documents: cabc.Iterable[Document], options: RenderOptions) -> str:
    return generate_toc(
        documents,
        root=options.root,
        domain=options.domain,
        sidebar=options.sidebar,
        links_extension=options.links_extension,
        clean_urls=options.clean_urls,
    )


def _present(variables: cabc.Mapping[str, str | None]) -> dict[str, str]:
    return {key: value for key, value in variables.items() if value is not None}


def _first_text(*candidates: object | None) -> str | None:
    for candidate in candidates:
        if candidate is None:
            continue
        text = str(candidate).strip()
        if text:
            return text
    return None


__all__ = [
    "RenderOptions",
    "SiteMetadata",
    "render_directory_llms_txt",
    "render_llms_full_txt",
    "render_root_llms_txt",
]
