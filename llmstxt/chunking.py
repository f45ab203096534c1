"""Group prepared documents into cumulative per-directory chunks.

A chunk is the set of documents an ``llms.txt`` file at one directory level
indexes. Chunks are cumulative: a page under ``guide/advanced/`` belongs to the
root chunk, the ``guide`` chunk, and the ``guide/advanced`` chunk (depth and
the minimum-files filter permitting), so discarding a small directory never
loses a page. Navigation relationships between the surviving chunks are
derived in the same pass.

Example
-------
>>> from llmstxt.models import Document
>>> docs = [Document("A", "guide/a.md"), Document("B", "guide/b.md")]
>>> [chunk.dir_path for chunk in organize_files_by_depth(docs, "", depth=2)]
['', 'guide']
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import posixpath
import typing as typ
from pathlib import PurePath

from .paths import normalize_path, parent_dir

if typ.TYPE_CHECKING:
    from .models import Document

ROOT_DIR = ""


@dc.dataclass(frozen=True, slots=True)
class DirectoryChunk:
    """Documents indexed by one directory's ``llms.txt`` and its neighbours.

    Attributes
    ----------
    dir_path : str
        Directory relative to the source root; ``""`` for the root.
    files : tuple[Document, ...]
        Documents in this directory and its descendants, in input order.
    depth_level : int
        1 for the root, otherwise the number of path segments plus one.
    parent_path : str
        Parent chunk directory; ``""`` for the root and top-level chunks.
    sibling_paths : tuple[str, ...]
        Surviving chunks with the same parent and depth level.
    child_paths : tuple[str, ...]
        Surviving chunks whose parent is this chunk.
    """

    dir_path: str
    files: tuple[Document, ...]
    depth_level: int
    parent_path: str
    sibling_paths: tuple[str, ...] = ()
    child_paths: tuple[str, ...] = ()

    @property
    def is_root(self) -> bool:
        """Return ``True`` for the chunk covering the whole source root."""
        return self.dir_path == ROOT_DIR

    @property
    def output_path(self) -> str:
        """Return the ``llms.txt`` location relative to the output directory."""
        if self.is_root:
            return "llms.txt"
        return f"{self.dir_path}/llms.txt"


def organize_files_by_depth(
    documents: cabc.Iterable[Document],
    root: str | PurePath,
    depth: int = 1,
    min_files_per_chunk: int = 2,
) -> list[DirectoryChunk]:
    """Partition documents into directory chunks up to ``depth`` levels.

    Parameters
    ----------
    documents : Iterable[Document]
        Prepared documents; their order is kept inside every chunk.
    root : str or PurePath
        Source root the document paths are relative to.
    depth : int, optional
        Number of directory levels that get their own chunk. ``1`` (the
        default) yields the root chunk only; values below 1 behave as 1.
    min_files_per_chunk : int, optional
        Minimum number of documents a non-root directory needs to keep its
        chunk. Defaults to ``2``.

    Returns
    -------
    list[DirectoryChunk]
        Surviving chunks in first-seen order, root first. Empty when no
        documents were supplied.
    """
    depth = max(depth, 1)
    directory_map: dict[str, list[Document]] = {}
    for document in documents:
        segments = _dir_segments(normalize_path(document.path, root))
        for level in range(1, min(depth, len(segments) + 1) + 1):
            prefix = ROOT_DIR if level == 1 else "/".join(segments[: level - 1])
            directory_map.setdefault(prefix, []).append(document)

    surviving = [
        (dir_path, files)
        for dir_path, files in directory_map.items()
        if _keep_directory(dir_path, files, min_files_per_chunk)
    ]
    surviving_paths = [dir_path for dir_path, _files in surviving]

    return [
        DirectoryChunk(
            dir_path=dir_path,
            files=tuple(files),
            depth_level=depth_level(dir_path),
            parent_path=parent_dir(dir_path),
            sibling_paths=_find_siblings(dir_path, surviving_paths),
            child_paths=_find_children(dir_path, surviving_paths),
        )
        for dir_path, files in surviving
    ]


def depth_level(dir_path: str) -> int:
    """Return the chunk depth level for ``dir_path`` (root is level 1)."""
    if dir_path == ROOT_DIR:
        return 1
    return len(dir_path.split("/")) + 1


def _dir_segments(relative_path: str) -> list[str]:
    directory = posixpath.dirname(relative_path)
    if directory in {"", "."}:
        return []
    return directory.split("/")


def _keep_directory(
    dir_path: str, files: cabc.Sized, min_files_per_chunk: int
) -> bool:
    if dir_path == ROOT_DIR:
        return len(files) > 0
    return len(files) >= min_files_per_chunk


def _find_siblings(dir_path: str, candidates: cabc.Sequence[str]) -> tuple[str, ...]:
    parent = parent_dir(dir_path)
    level = depth_level(dir_path)
    return tuple(
        other
        for other in candidates
        if other != dir_path
        and parent_dir(other) == parent
        and depth_level(other) == level
    )


def _find_children(dir_path: str, candidates: cabc.Sequence[str]) -> tuple[str, ...]:
    if dir_path == ROOT_DIR:
        return ()
    return tuple(
        other
        for other in candidates
        if other != ROOT_DIR and parent_dir(other) == dir_path
    )


__all__ = ["ROOT_DIR", "DirectoryChunk", "depth_level", "organize_files_by_depth"]
