"""Cyclopts CLI entrypoint for generating llms.txt artifacts.

The ``llmstxt`` console script defined here turns a Markdown documentation
tree into the hierarchical ``llms.txt`` index, the ``llms-full.txt`` bundle,
and per-page LLM-friendly copies. ``llmstxt chunks`` previews the directory
chunks a given depth would produce without writing anything.

Examples
--------
Build everything described by ``llmstxt.yaml``:

>>> from llmstxt.cli import main
>>> main()  # doctest: +SKIP

Build two directory levels into a custom folder:

>>> from llmstxt.cli import app
>>> app(["build", "--depth", "2", "--out-dir", "public"])  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from loguru import logger

from .builder import LlmsTxtBuilder
from .config import LlmstxtSettings, load_settings

DEFAULT_CONFIG = Path("llmstxt.yaml")
LOG_FORMAT = "<level>{level: <8}</level> <dim>llmstxt</dim> {message}"

app = App(name="llmstxt", config=cyclopts.config.Env("LLMSTXT_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path | None,
    Parameter(help="Path to the settings file (defaults to llmstxt.yaml if present)"),
]
SrcDirOption = typ.Annotated[
    Path | None, Parameter(help="Override the documentation source directory")
]
DepthOption = typ.Annotated[
    int | None, Parameter(help="Directory levels that get their own llms.txt")
]
MinFilesOption = typ.Annotated[
    int | None, Parameter(help="Minimum pages a directory needs for its llms.txt")
]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    """Send colored log output to stderr at INFO (or DEBUG when verbose)."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO", format=LOG_FORMAT)


def _resolve_settings(
    config: Path | None, overrides: dict[str, typ.Any]
) -> LlmstxtSettings:
    """Load settings from ``config`` (or defaults) and apply CLI overrides."""
    if config is not None:
        settings = load_settings(config)
    elif DEFAULT_CONFIG.exists():
        settings = load_settings(DEFAULT_CONFIG)
    else:
        settings = LlmstxtSettings()
    present = {key: value for key, value in overrides.items() if value is not None}
    if "depth" in present:
        present["depth"] = max(present["depth"], 1)
    if "min_files_per_chunk" in present:
        present["min_files_per_chunk"] = max(present["min_files_per_chunk"], 1)
    if "domain" in present:
        present["domain"] = present["domain"].rstrip("/") or None
    return dc.replace(settings, **present)


@app.command(help="Generate llms.txt, llms-full.txt, and per-page LLM docs.")
def build(
    *,
    config: ConfigOption = None,
    src_dir: SrcDirOption = None,
    out_dir: typ.Annotated[
        Path | None, Parameter(help="Override the output directory")
    ] = None,
    depth: DepthOption = None,
    min_files_per_chunk: MinFilesOption = None,
    domain: typ.Annotated[
        str | None, Parameter(help="Base URL prefixed to generated links")
    ] = None,
    verbose: bool = False,
) -> None:
    """Build every enabled artifact for the configured documentation tree.

    Parameters
    ----------
    config : Path or None, optional
        Settings file to load. When ``None`` (default), ``llmstxt.yaml`` in the
        working directory is used if it exists; built-in defaults otherwise.
    src_dir : Path or None, optional
        Override the documentation source directory.
    out_dir : Path or None, optional
        Override the directory artifacts are written to.
    depth : int or None, optional
        Override how many directory levels get their own ``llms.txt``.
    min_files_per_chunk : int or None, optional
        Override the minimum number of pages a directory needs.
    domain : str or None, optional
        Override the base URL prefixed to links.
    verbose : bool, optional
        Log debug output, including ignored files.

    Returns
    -------
    None
        Writes artifacts and prints each written path.
    """
    _configure_logging(verbose=verbose)
    settings = _resolve_settings(
        config,
        {
            "src_dir": src_dir,
            "out_dir": out_dir,
            "depth": depth,
            "min_files_per_chunk": min_files_per_chunk,
            "domain": domain,
        },
    )
    for path in LlmsTxtBuilder(settings).run():
        print(f"wrote {_format_path(path)}")


@app.command(help="Show the directory chunks without writing any files.")
def chunks(
    *,
    config: ConfigOption = None,
    src_dir: SrcDirOption = None,
    depth: DepthOption = None,
    min_files_per_chunk: MinFilesOption = None,
    verbose: bool = False,
) -> None:
    """Print one line per directory chunk the build would index.

    Each line lists the chunk's ``llms.txt`` path, depth level, page count,
    parent, siblings, and children.
    """
    _configure_logging(verbose=verbose)
    settings = _resolve_settings(
        config,
        {
            "src_dir": src_dir,
            "depth": depth,
            "min_files_per_chunk": min_files_per_chunk,
        },
    )
    builder = LlmsTxtBuilder(settings)
    documents = builder.collect_documents()
    if not documents:
        logger.warning("No markdown files found in {}", builder.work_dir)
        return
    for chunk in builder.plan_chunks(documents):
        parent = "-" if chunk.is_root else (chunk.parent_path or "/")
        print(
            f"{chunk.output_path}\tdepth={chunk.depth_level}\t"
            f"files={len(chunk.files)}\tparent={parent}\t"
            f"siblings={','.join(chunk.sibling_paths) or '-'}\t"
            f"children={','.join(chunk.child_paths) or '-'}"
        )


def main() -> None:
    """Invoke the Cyclopts application that powers the ``llmstxt`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
