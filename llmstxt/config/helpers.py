"""Utility helpers shared by the llmstxt settings loader."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from .models import SettingsError, SiteSettings


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _normalize_domain(value: object | None) -> str | None:
    """Return the domain without trailing slashes, or None when unset."""
    text = _optional_str(value)
    if text is None:
        return None
    return text.rstrip("/") or None


def _coerce_bool(key: str, value: object) -> bool:
    """Return ``value`` as a bool, rejecting anything but YAML booleans."""
    if isinstance(value, bool):
        return value
    msg = f"Setting '{key}' must be true or false, got {value!r}."
    raise SettingsError(msg)


def _coerce_level(key: str, value: object) -> int:
    """Return a chunking level, clamping values below 1 up to 1."""
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"Setting '{key}' must be an integer, got {value!r}."
        raise SettingsError(msg)
    return max(value, 1)


def _normalize_patterns(value: str | list[object] | None) -> list[str]:
    """Normalize ignore patterns into a list of non-empty strings."""
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if isinstance(value, list):
        normalized: list[str] = []
        for pattern in value:
            text = str(pattern).strip()
            if text:
                normalized.append(text)
        return normalized
    return []


def _string_mapping(key: str, value: object | None) -> dict[str, str]:
    """Return a mapping of template variable names to string values."""
    if value is None:
        return {}
    if not isinstance(value, cabc.Mapping):
        msg = f"Setting '{key}' must be a mapping."
        raise SettingsError(msg)
    return {
        str(name): "" if item is None else str(item) for name, item in value.items()
    }


def _build_site_settings(payload: cabc.Mapping[str, typ.Any] | None) -> SiteSettings:
    """Build SiteSettings from the optional ``site`` block."""
    if not payload:
        return SiteSettings()
    if not isinstance(payload, cabc.Mapping):
        msg = "Setting 'site' must be a mapping."
        raise SettingsError(msg)
    return SiteSettings(
        title=_optional_str(payload.get("title")),
        title_template=_optional_str(payload.get("title_template")),
        description=_optional_str(payload.get("description")),
        sidebar=payload.get("sidebar"),
    )


__all__ = [
    "_build_site_settings",
    "_coerce_bool",
    "_coerce_level",
    "_normalize_domain",
    "_normalize_patterns",
    "_optional_str",
    "_string_mapping",
]
