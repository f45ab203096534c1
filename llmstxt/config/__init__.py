"""Load and validate llmstxt build settings.

This subpackage parses the project's ``llmstxt.yaml`` file, applies defaults,
and produces the :class:`LlmstxtSettings` dataclass the build driver consumes.
The primary entry point is :func:`load_settings`.

Examples
--------
>>> from pathlib import Path
>>> from llmstxt.config import load_settings
>>> settings = load_settings(Path("llmstxt.yaml"))  # doctest: +SKIP
>>> settings.out_dir  # doctest: +SKIP
PosixPath('dist')
"""

from .loader import build_settings, load_settings
from .models import LlmstxtSettings, SettingsError, SiteSettings

__all__ = [
    "LlmstxtSettings",
    "SettingsError",
    "SiteSettings",
    "build_settings",
    "load_settings",
]
