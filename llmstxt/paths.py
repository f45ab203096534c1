"""Normalize filesystem paths into forward-slash paths relative to a root."""

from __future__ import annotations

import os
import posixpath
from pathlib import Path, PurePath


def normalize_path(path: str | PurePath, root: str | PurePath) -> str:
    """Return ``path`` relative to ``root`` using ``/`` separators.

    A relative ``path`` that starts with a relative ``root`` has that prefix
    removed; any other relative path is taken as already relative to ``root``
    and comes back unchanged. Paths outside ``root`` come back
    ``../``-prefixed; they are not rejected.

    Examples
    --------
    >>> normalize_path("/docs/guide/intro.md", "/docs")
    'guide/intro.md'
    >>> normalize_path("docs/guide/intro.md", "docs")
    'guide/intro.md'
    >>> normalize_path("guide/intro.md", "/docs")
    'guide/intro.md'
    >>> normalize_path("guide\\\\intro.md", "/docs")
    'guide/intro.md'
    """
    text = _to_posix(os.fspath(path))
    root_text = _to_posix(os.fspath(root))
    if _is_absolute(text):
        return posixpath.relpath(text, start=root_text or "/")
    if not text:
        return text
    text = posixpath.normpath(text)
    prefix = posixpath.normpath(root_text) if root_text else ""
    if prefix != "." and not _is_absolute(prefix) and text.startswith(f"{prefix}/"):
        return text[len(prefix) + 1 :]
    return text


def parent_dir(dir_path: str) -> str:
    """Return the parent of a normalized directory path, ``""`` at the top."""
    if not dir_path:
        return ""
    parent = posixpath.dirname(dir_path)
    return "" if parent in {"", "."} else parent


def strip_ext_posix(path: str) -> str:
    """Drop the final extension from a POSIX path, keeping its directory."""
    directory, name = posixpath.split(path)
    stem, _ext = posixpath.splitext(name)
    return posixpath.join(directory, stem) if directory else stem


def is_within_directory(relative_path: str, directory: str | None) -> bool:
    """Return True when ``relative_path`` lies under ``directory``.

    An empty directory or ``"."`` matches every path. The index copy of a
    directory (``guide.md`` for ``guide``) counts as inside it.
    """
    prefix = (directory or "").strip("/")
    if prefix in {"", "."}:
        return True
    return (
        relative_path.startswith(f"{prefix}/")
        or strip_ext_posix(relative_path) == prefix
    )


def relative_to_root(path: Path, root: Path) -> str:
    """Return the normalized path of ``path`` under ``root``."""
    return normalize_path(path.resolve(), root.resolve())


def _to_posix(text: str) -> str:
    return text.replace("\\", "/")


def _is_absolute(text: str) -> bool:
    # Drive-letter paths count as absolute even on POSIX hosts.
    return text.startswith("/") or (len(text) > 2 and text[1] == ":" and text[2] == "/")


__all__ = [
    "is_within_directory",
    "normalize_path",
    "parent_dir",
    "relative_to_root",
    "strip_ext_posix",
]
