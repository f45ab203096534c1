"""Typed dataclasses describing llmstxt build settings."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ
from pathlib import Path

from .._constants import UNNECESSARY_FILES


class SettingsError(ValueError):
    """Raised when the build settings are invalid or incomplete."""


@dc.dataclass(slots=True)
class SiteSettings:
    """Site-level metadata used when the root page lacks its own."""

    title: str | None = None
    title_template: str | None = None
    description: str | None = None
    sidebar: typ.Any = None


@dc.dataclass(slots=True)
class LlmstxtSettings:
    """A fully resolved build configuration.

    ``sidebar`` accepts a sidebar tree, a multi-sidebar mapping, or a callable
    receiving :attr:`SiteSettings.sidebar` and returning the tree to use.
    """

    src_dir: Path = Path("docs")
    out_dir: Path = Path("dist")
    work_dir: Path | None = None
    domain: str | None = None
    generate_llms_txt: bool = True
    generate_llms_full_txt: bool = True
    generate_llm_friendly_docs_for_each_page: bool = True
    strip_html: bool = True
    ignore_files: list[str] = dc.field(default_factory=list)
    exclude_unnecessary_files: bool = True
    exclude_index_page: bool = True
    exclude_blog: bool = True
    exclude_team: bool = True
    depth: int = 1
    min_files_per_chunk: int = 2
    include_navigation: bool = True
    clean_urls: bool = False
    title: str | None = None
    description: str | None = None
    details: str | None = None
    toc: str | None = None
    custom_llms_txt_template: str | None = None
    custom_template_variables: dict[str, str] = dc.field(default_factory=dict)
    sidebar: typ.Any = None
    site: SiteSettings = dc.field(default_factory=SiteSettings)

    @property
    def resolved_work_dir(self) -> Path:
        """Return the directory pages are collected from."""
        if self.work_dir is None:
            return self.src_dir
        return self.src_dir / self.work_dir

    @property
    def links_extension(self) -> str | None:
        """Return the extension index links use.

        Links point at the per-page Markdown copies when those are generated,
        and at the HTML site otherwise.
        """
        if self.generate_llm_friendly_docs_for_each_page:
            return None
        return ".html"

    def ignore_patterns(self) -> list[str]:
        """Return ``ignore_files`` plus the enabled preset patterns."""
        patterns = list(self.ignore_files)
        if not self.exclude_unnecessary_files:
            return patterns
        presets: cabc.Mapping[str, bool] = {
            "index_page": self.exclude_index_page,
            "blog": self.exclude_blog,
            "team": self.exclude_team,
        }
        for preset, enabled in presets.items():
            if enabled:
                patterns.extend(UNNECESSARY_FILES[preset])
        return patterns


__all__ = ["LlmstxtSettings", "SettingsError", "SiteSettings"]
