"""Link, metadata, and size helpers shared by the renderers and build driver."""

from __future__ import annotations

import math
import re
import typing as typ

from .paths import strip_ext_posix

if typ.TYPE_CHECKING:
    from .models import Document

DEFAULT_LINKS_EXTENSION = ".md"
TOKEN_PATTERN = re.compile(r"[^\W_]+|[^\w\s]|_", re.UNICODE)
CJK_PATTERN = re.compile(r"[\u3040-\u30ff\u3400-\u4dbf\u4e00-\u9fff\uac00-\ud7af]")
CHARS_PER_TOKEN = 4
_SIZE_UNITS = ("B", "KB", "MB", "GB")
_MILLIFY_UNITS = ("", "K", "M", "B", "T")


def generate_link(
    path: str,
    domain: str | None = None,
    extension: str | None = DEFAULT_LINKS_EXTENSION,
    clean_urls: bool = False,
) -> str:
    """Return the public URL of an extension-less document path.

    Examples
    --------
    >>> generate_link("guide/intro")
    '/guide/intro.md'
    >>> generate_link("guide/intro", "https://example.com", ".html")
    'https://example.com/guide/intro.html'
    >>> generate_link("guide/intro", clean_urls=True)
    '/guide/intro'
    """
    suffix = "" if clean_urls else (extension or "")
    return f"{domain or ''}/{path.lstrip('/')}{suffix}"


def document_link(
    relative_path: str,
    *,
    domain: str | None = None,
    links_extension: str | None = None,
    clean_urls: bool = False,
) -> str:
    """Return the link for a document at ``relative_path`` (with extension)."""
    return generate_link(
        strip_ext_posix(relative_path),
        domain,
        links_extension or DEFAULT_LINKS_EXTENSION,
        clean_urls,
    )


def generate_metadata(
    document: Document,
    *,
    file_path: str,
    domain: str | None = None,
    links_extension: str | None = None,
    clean_urls: bool = False,
) -> dict[str, str]:
    """Return the front matter written above a page in LLM-facing outputs."""
    metadata = {
        "url": document_link(
            file_path,
            domain=domain,
            links_extension=links_extension,
            clean_urls=clean_urls,
        )
    }
    if document.description:
        metadata["description"] = document.description
    return metadata


def approximate_token_count(text: str) -> int:
    """Estimate how many LLM tokens ``text`` occupies.

    Words count one token per four characters (at least one), CJK characters
    and punctuation one token each. The figure is for progress reporting only.
    """
    total = 0
    for match in TOKEN_PATTERN.finditer(text):
        segment = match.group(0)
        cjk = len(CJK_PATTERN.findall(segment))
        if cjk:
            total += cjk + math.ceil((len(segment) - cjk) / CHARS_PER_TOKEN)
        else:
            total += max(1, math.ceil(len(segment) / CHARS_PER_TOKEN))
    return total


def human_readable_size(text: str) -> str:
    """Return the UTF-8 size of ``text`` as ``"12 B"``/``"3.4 KB"``."""
    size = float(len(text.encode("utf-8")))
    unit_index = 0
    while size >= 1024 and unit_index < len(_SIZE_UNITS) - 1:
        size /= 1024
        unit_index += 1
    if unit_index == 0:
        return f"{int(size)} {_SIZE_UNITS[0]}"
    return f"{size:.1f} {_SIZE_UNITS[unit_index]}"


def millify(value: int) -> str:
    """Abbreviate ``value`` with K/M/B suffixes (``1234`` → ``"1.2K"``)."""
    number = float(value)
    unit_index = 0
    while abs(number) >= 1000 and unit_index < len(_MILLIFY_UNITS) - 1:
        number /= 1000
        unit_index += 1
    if unit_index == 0:
        return str(int(number))
    text = f"{number:.1f}".rstrip("0").rstrip(".")
    return f"{text}{_MILLIFY_UNITS[unit_index]}"


__all__ = [
    "DEFAULT_LINKS_EXTENSION",
    "approximate_token_count",
    "document_link",
    "generate_link",
    "generate_metadata",
    "human_readable_size",
    "millify",
]
