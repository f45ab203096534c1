"""Generate LLM-friendly text artifacts from Markdown documentation.

This package exposes the CLI used by ``llmstxt build`` to write the
hierarchical ``llms.txt`` index, the ``llms-full.txt`` bundle, and per-page
LLM-friendly copies, plus the chunking and rendering engine behind it.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``Document``: A prepared page fed to the engine.
- ``organize_files_by_depth``: Group documents into directory chunks.
- ``expand_template``: ``{name}`` placeholder substitution.

Examples
--------
>>> from llmstxt import Document, organize_files_by_depth
>>> chunks = organize_files_by_depth([Document("Intro", "intro.md")], "")
>>> [chunk.dir_path for chunk in chunks]
['']
"""

from __future__ import annotations

from .chunking import DirectoryChunk, organize_files_by_depth
from .cli import app, main
from .models import Document, SidebarItem
from .template import expand_template

__all__ = [
    "DirectoryChunk",
    "Document",
    "SidebarItem",
    "app",
    "expand_template",
    "main",
    "organize_files_by_depth",
]
