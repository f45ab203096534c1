"""Load llmstxt build settings YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from loguru import logger
from ruamel.yaml import YAML

from ..template import template_placeholders
from .helpers import (
    _build_site_settings,
    _coerce_bool,
    _coerce_level,
    _normalize_domain,
    _normalize_patterns,
    _optional_str,
    _string_mapping,
)
from .models import LlmstxtSettings, SettingsError

_BOOL_KEYS = (
    "generate_llms_txt",
    "generate_llms_full_txt",
    "generate_llm_friendly_docs_for_each_page",
    "strip_html",
    "exclude_unnecessary_files",
    "exclude_index_page",
    "exclude_blog",
    "exclude_team",
    "include_navigation",
    "clean_urls",
)
_TEXT_KEYS = ("title", "description", "details", "toc", "custom_llms_txt_template")


def load_settings(path: Path) -> LlmstxtSettings:
    """Load the YAML file describing how llms.txt artifacts are generated.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML settings file (for example,
        ``llmstxt.yaml``). Relative ``src_dir``/``out_dir`` values are
        resolved against the file's directory.

    Returns
    -------
    LlmstxtSettings
        Parsed settings with defaults applied for every missing key.

    Raises
    ------
    FileNotFoundError
        If the settings file does not exist at ``path``.
    SettingsError
        If the top-level structure is not a mapping or a value has the wrong
        type.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from llmstxt.config import load_settings
    >>> settings = load_settings(Path("llmstxt.yaml"))  # doctest: +SKIP
    >>> settings.depth  # doctest: +SKIP
    2
    """
    if not path.exists():
        msg = f"Settings file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise SettingsError(msg)
    return build_settings(loaded, base_dir=path.parent)


def build_settings(
    raw: typ.Mapping[str, typ.Any], *, base_dir: Path | None = None
) -> LlmstxtSettings:
    """Build settings from an already-parsed mapping."""
    defaults = LlmstxtSettings()
    unknown = sorted(set(raw) - _known_keys())
    if unknown:
        logger.warning("Ignoring unknown settings: {}", ", ".join(unknown))

    options: dict[str, typ.Any] = {}
    for key in _BOOL_KEYS:
        if key in raw:
            options[key] = _coerce_bool(key, raw[key])
    for key in _TEXT_KEYS:
        if key in raw:
            options[key] = _optional_str(raw[key])
    for key in ("depth", "min_files_per_chunk"):
        if key in raw:
            options[key] = _coerce_level(key, raw[key])

    src_dir = _resolve_dir(raw.get("src_dir"), defaults.src_dir, base_dir)
    out_dir = _resolve_dir(raw.get("out_dir"), defaults.out_dir, base_dir)
    work_dir = raw.get("work_dir")

    template = options.get("custom_llms_txt_template")
    if template and not template_placeholders(template):
        logger.warning(
            "custom_llms_txt_template contains no placeholders; it is used verbatim"
        )

    return LlmstxtSettings(
        src_dir=src_dir,
        out_dir=out_dir,
        work_dir=Path(work_dir) if work_dir else None,
        domain=_normalize_domain(raw.get("domain")),
        ignore_files=_normalize_patterns(raw.get("ignore_files")),
        custom_template_variables=_string_mapping(
            "custom_template_variables", raw.get("custom_template_variables")
        ),
        sidebar=raw.get("sidebar"),
        site=_build_site_settings(raw.get("site")),
        **options,
    )


def _resolve_dir(value: object | None, default: Path, base_dir: Path | None) -> Path:
    path = Path(str(value)) if value else default
    if base_dir is not None and not path.is_absolute():
        return base_dir / path
    return path


def _known_keys() -> set[str]:
    return {
        *_BOOL_KEYS,
        *_TEXT_KEYS,
        "depth",
        "min_files_per_chunk",
        "src_dir",
        "out_dir",
        "work_dir",
        "domain",
        "ignore_files",
        "custom_template_variables",
        "sidebar",
        "site",
    }


__all__ = ["build_settings", "load_settings"]
