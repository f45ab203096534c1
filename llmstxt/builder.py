"""Build every LLM-facing artifact for a documentation tree.

This module takes resolved :class:`~llmstxt.config.LlmstxtSettings`, collects
the Markdown pages under the work directory, prepares them for LLM
consumption, and writes:

- one ``llms.txt`` per surviving directory chunk (root plus deeper levels when
  ``depth`` allows),
- ``llms-full.txt`` containing every page,
- a front-matter annotated copy of every page.

Typical usage pairs the loader with the builder:

>>> from pathlib import Path
>>> from llmstxt.config import load_settings
>>> from llmstxt.builder import LlmsTxtBuilder
>>> settings = load_settings(Path("llmstxt.yaml"))  # doctest: +SKIP
>>> written = LlmsTxtBuilder(settings).run()  # doctest: +SKIP
>>> print(written[0])  # doctest: +SKIP
dist/llms.txt

Side effects are limited to reading the source tree and writing below
``out_dir``. A page that fails to prepare or copy is logged and skipped; the
rest of the build carries on.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from loguru import logger
from ruamel.yaml.error import YAMLError
from wcmatch import glob

from ._constants import INDEX_FILENAME, LLMS_FULL_TXT_FILENAME, UNTITLED
from .chunking import ROOT_DIR, DirectoryChunk, organize_files_by_depth
from .markdown_parser import (
    extract_title,
    prepare_for_llms,
    split_front_matter,
    stringify_front_matter,
)
from .models import Document
from .paths import relative_to_root
from .renderer import (
    RenderOptions,
    SiteMetadata,
    render_directory_llms_txt,
    render_llms_full_txt,
)
from .utils import (
    approximate_token_count,
    generate_metadata,
    human_readable_size,
    millify,
)

if typ.TYPE_CHECKING:
    from .config import LlmstxtSettings
    from .toc import SidebarInput

_PAGE_ERRORS = (OSError, UnicodeDecodeError, TypeError, YAMLError)


class LlmsTxtBuilder:
    """Collect documentation pages and write their LLM-facing artifacts."""

    def __init__(self, settings: LlmstxtSettings) -> None:
        """Initialize the builder.

        Parameters
        ----------
        settings : LlmstxtSettings
            Resolved settings, typically from
            :func:`llmstxt.config.load_settings`.
        """
        self.settings = settings
        self.work_dir = settings.resolved_work_dir
        self.out_dir = settings.out_dir

    def run(self) -> list[Path]:
        """Write every enabled artifact and return the written paths."""
        sidebar = self.resolve_sidebar()
        documents = self.collect_documents()
        if not documents:
            logger.opt(colors=True).warning(
                "No markdown files found to process. Check your "
                "<bold>work_dir</bold> and <bold>ignore_files</bold> settings."
            )
            return []

        logger.opt(colors=True).info(
            "Processing <bold>{}</bold> markdown files from <cyan>{}</cyan>",
            len(documents),
            self.work_dir,
        )
        self.out_dir.mkdir(parents=True, exist_ok=True)

        written: list[Path] = []
        if self.settings.generate_llms_txt:
            options = self.render_options(sidebar)
            for chunk in self.plan_chunks(documents):
                written.append(self._write_chunk(chunk, options))
        if self.settings.generate_llms_full_txt:
            written.append(self._write_full_txt(documents))
        if self.settings.generate_llm_friendly_docs_for_each_page:
            for document in documents:
                path = self._write_page_copy(document)
                if path is not None:
                    written.append(path)
        return written

    def resolve_sidebar(self) -> SidebarInput:
        """Return the sidebar used to group tables of contents.

        A callable ``sidebar`` setting receives the site sidebar and returns
        the tree to use; otherwise the explicit sidebar wins over the site's.
        """
        configured = self.settings.sidebar
        site_sidebar = self.settings.site.sidebar
        if callable(configured):
            return configured(site_sidebar)
        return configured or site_sidebar

    def collect_documents(self) -> list[Document]:
        """Return prepared documents for every included page, sorted by title."""
        if not self.work_dir.is_dir():
            return []
        patterns = self.settings.ignore_patterns()
        documents: list[Document] = []
        for source in sorted(self.work_dir.rglob("*.md")):
            relative = relative_to_root(source, self.work_dir)
            if _is_ignored(relative, patterns):
                logger.debug("Ignoring {}", relative)
                continue
            try:
                documents.append(self._prepare(source, relative))
            except _PAGE_ERRORS as exc:
                logger.opt(colors=True).error(
                    "Failed to prepare <cyan>{}</cyan>: {}", relative, exc
                )
        documents.sort(key=lambda document: document.title.casefold())
        return documents

    def plan_chunks(self, documents: list[Document]) -> list[DirectoryChunk]:
        """Return the directory chunks ``documents`` are indexed by.

        Document paths are already relative to the work directory, so the
        engine gets an empty root.
        """
        return organize_files_by_depth(
            documents,
            ROOT_DIR,
            depth=self.settings.depth,
            min_files_per_chunk=self.settings.min_files_per_chunk,
        )

    def render_options(self, sidebar: SidebarInput) -> RenderOptions:
        """Return the rendering options shared by every chunk of this build."""
        front_matter, body = self._read_root_index()
        site = self.settings.site
        return RenderOptions(
            root=ROOT_DIR,
            domain=self.settings.domain,
            links_extension=self.settings.links_extension,
            clean_urls=self.settings.clean_urls,
            template=self.settings.custom_llms_txt_template,
            template_variables=self.settings.custom_template_variables,
            root_variables={
                "title": self.settings.title,
                "description": self.settings.description,
                "details": self.settings.details,
                "toc": self.settings.toc,
            },
            include_navigation=self.settings.include_navigation,
            sidebar=sidebar,
            root_front_matter=front_matter,
            root_body=body,
            site=SiteMetadata(
                title=site.title,
                title_template=site.title_template,
                description=site.description,
            ),
        )

    def _prepare(self, source: Path, relative: str) -> Document:
        front_matter, body = split_front_matter(source.read_text(encoding="utf-8"))
        body = prepare_for_llms(body, strip_html=self.settings.strip_html)
        title = extract_title(front_matter, body) or UNTITLED
        return Document(
            title=title,
            path=_logical_path(relative),
            body=body,
            front_matter=front_matter,
        )

    def _read_root_index(self) -> tuple[dict[str, typ.Any], str]:
        index_path = self.work_dir / INDEX_FILENAME
        if not index_path.is_file():
            return {}, ""
        try:
            return split_front_matter(index_path.read_text(encoding="utf-8"))
        except _PAGE_ERRORS as exc:
            logger.warning("Could not read {}: {}", index_path, exc)
            return {}, ""

    def _write_chunk(self, chunk: DirectoryChunk, options: RenderOptions) -> Path:
        display_path = chunk.output_path
        logger.opt(colors=True).info("Generating <cyan>{}</cyan>...", display_path)
        target = self.out_dir / display_path
        target.parent.mkdir(parents=True, exist_ok=True)
        text = render_directory_llms_txt(chunk, options)
        target.write_text(text, encoding="utf-8")
        _log_generated(display_path, text, f"{len(chunk.files)} documentation links")
        return target

    def _write_full_txt(self, documents: list[Document]) -> Path:
        logger.opt(colors=True).info(
            "Generating full documentation bundle (<cyan>{}</cyan>)...",
            LLMS_FULL_TXT_FILENAME,
        )
        text = render_llms_full_txt(
            documents,
            root=ROOT_DIR,
            domain=self.settings.domain,
            links_extension=self.settings.links_extension,
            clean_urls=self.settings.clean_urls,
        )
        target = self.out_dir / LLMS_FULL_TXT_FILENAME
        target.write_text(text, encoding="utf-8")
        _log_generated(LLMS_FULL_TXT_FILENAME, text, f"{len(documents)} markdown files")
        return target

    def _write_page_copy(self, document: Document) -> Path | None:
        target = self.out_dir / document.path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            metadata = generate_metadata(
                document,
                file_path=document.path,
                domain=self.settings.domain,
                links_extension=".md",
                clean_urls=self.settings.clean_urls,
            )
            target.write_text(
                stringify_front_matter(document.body, metadata), encoding="utf-8"
            )
        except _PAGE_ERRORS as exc:
            logger.opt(colors=True).error(
                "Failed to process <cyan>{}</cyan>: {}", document.path, exc
            )
            return None
        logger.opt(colors=True).success("Processed <cyan>{}</cyan>", document.path)
        return target


def _logical_path(relative: str) -> str:
    """Map ``<dir>/index.md`` below the root to ``<dir>.md``."""
    path = Path(relative)
    if path.name == INDEX_FILENAME and path.parent != Path("."):
        return f"{path.parent.as_posix()}.md"
    return relative


def _is_ignored(relative: str, patterns: list[str]) -> bool:
    """Return True when a glob matches; ``**`` spans zero or more directories."""
    return bool(patterns) and glob.globmatch(relative, patterns, flags=glob.GLOBSTAR)


def _log_generated(display_path: str, text: str, summary: str) -> None:
    logger.opt(colors=True).success(
        "Generated <cyan>{}</cyan> (~<bold>{}</bold> tokens, <bold>{}</bold>) with {}",
        display_path,
        millify(approximate_token_count(text)),
        human_readable_size(text),
        summary,
    )


__all__ = ["LlmsTxtBuilder"]
