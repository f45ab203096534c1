r"""Prepare Markdown pages for LLM-facing outputs.

This module splits and re-serializes YAML front matter, resolves the
``<llm-only>``/``<llm-exclude>`` tag regions authors use to tailor content for
either audience, strips raw HTML outside code, and extracts page titles. The
results feed :class:`~llmstxt.models.Document` instances consumed by the
chunking and rendering stages.

Example
-------
>>> from llmstxt.markdown_parser import split_front_matter, extract_title
>>> data, body = split_front_matter("---\ntitle: Intro\n---\n# Hello\n")
>>> data["title"], body
('Intro', '# Hello\n')
>>> extract_title({}, "Some text\n\n# First heading\n")
'First heading'
"""

from __future__ import annotations

import collections.abc as cabc
import io
import re
import typing as typ

from ruamel.yaml import YAML

LLM_ONLY_TAG = "llm-only"
LLM_EXCLUDE_TAG = "llm-exclude"

FRONT_MATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(?P<yaml>.*?)^(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)
H1_PATTERN = re.compile(r"^#[ \t]+(.+?)[ \t]*#*[ \t]*$", re.MULTILINE)
FENCE_PATTERN = re.compile(r"^[ ]{0,3}(`{3,}|~{3,})")
INLINE_CODE_PATTERN = re.compile(r"(`+)(?:.+?)\1", re.DOTALL)
HTML_COMMENT_PATTERN = re.compile(r"<!--.*?-->", re.DOTALL)
HTML_TAG_PATTERN = re.compile(r"</?[A-Za-z][\w-]*(?:\s[^<>]*)?/?>")
BLANK_RUN_PATTERN = re.compile(r"\n{3,}")


def full_tag_pattern(tag: str) -> re.Pattern[str]:
    """Return a pattern matching ``<tag>…</tag>`` and capturing the content."""
    escaped = re.escape(tag)
    return re.compile(rf"<{escaped}>(.*?)</{escaped}>", re.DOTALL)


def split_front_matter(text: str) -> tuple[dict[str, typ.Any], str]:
    """Return parsed front matter and the remaining Markdown body.

    Raises
    ------
    TypeError
        If the front matter is not a YAML mapping.
    YAMLError
        If the front matter cannot be parsed.
    """
    match = FRONT_MATTER_PATTERN.match(text)
    if not match:
        return {}, text
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    loaded = loader.load(match.group("yaml")) or {}
    if not isinstance(loaded, dict):
        msg = "Front matter must be a YAML mapping."
        raise TypeError(msg)
    return dict(loaded), text[match.end() :]


def stringify_front_matter(body: str, data: cabc.Mapping[str, typ.Any]) -> str:
    """Serialize ``data`` as a front matter block above ``body``.

    Keys keep their insertion order. An empty mapping yields the body
    unchanged. The body always ends with a newline in the output.
    """
    if not body.endswith("\n"):
        body = f"{body}\n"
    if not data:
        return body
    dumper = YAML()
    dumper.default_flow_style = False
    dumper.width = 4096
    buffer = io.StringIO()
    dumper.dump(dict(data), buffer)
    return f"---\n{buffer.getvalue()}---\n{body}"


def prepare_for_llms(text: str, *, strip_html: bool = True) -> str:
    """Return page text as LLM outputs should see it.

    ``<llm-only>`` regions are unwrapped (content kept) and ``<llm-exclude>``
    regions are dropped. Raw HTML is removed outside code when ``strip_html``
    is set.
    """
    text = full_tag_pattern(LLM_ONLY_TAG).sub(r"\1", text)
    text = full_tag_pattern(LLM_EXCLUDE_TAG).sub("", text)
    if strip_html:
        text = strip_html_tags(text)
    return _collapse_blank_runs(text)


def strip_html_tags(text: str) -> str:
    """Remove HTML tags and comments that appear outside code."""
    parts: list[str] = []
    for is_code, chunk in _split_code_fences(text):
        parts.append(chunk if is_code else _strip_outside_inline_code(chunk))
    return "".join(parts)


def extract_title(front_matter: cabc.Mapping[str, typ.Any], body: str) -> str | None:
    """Return the page title from front matter or the first ``#`` heading."""
    for key in ("title", "titleTemplate"):
        value = front_matter.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    for is_code, chunk in _split_code_fences(body):
        if is_code:
            continue
        match = H1_PATTERN.search(chunk)
        if match:
            return match.group(1).replace("\\", "").strip() or None
    return None


def _strip_outside_inline_code(chunk: str) -> str:
    pieces: list[str] = []
    cursor = 0
    for match in INLINE_CODE_PATTERN.finditer(chunk):
        pieces.append(_strip_markup(chunk[cursor : match.start()]))
        pieces.append(match.group(0))
        cursor = match.end()
    pieces.append(_strip_markup(chunk[cursor:]))
    return "".join(pieces)


def _strip_markup(text: str) -> str:
    text = HTML_COMMENT_PATTERN.sub("", text)
    return HTML_TAG_PATTERN.sub("", text)


def _split_code_fences(text: str) -> list[tuple[bool, str]]:
    """Split ``text`` into ``(is_code, chunk)`` pairs around fenced blocks."""
    chunks: list[tuple[bool, str]] = []
    buffer: list[str] = []
    fence: str | None = None
    for line in text.splitlines(keepends=True):
        match = FENCE_PATTERN.match(line)
        if fence is None and match:
            if buffer:
                chunks.append((False, "".join(buffer)))
            buffer = [line]
            fence = match.group(1)
            continue
        buffer.append(line)
        if fence is not None and match and _closes(match.group(1), fence, line):
            chunks.append((True, "".join(buffer)))
            buffer = []
            fence = None
    if buffer:
        chunks.append((fence is not None, "".join(buffer)))
    return chunks


def _closes(marker: str, fence: str, line: str) -> bool:
    return (
        marker[0] == fence[0]
        and len(marker) >= len(fence)
        and not line.strip()[len(marker) :].strip()
    )


def _collapse_blank_runs(text: str) -> str:
    parts: list[str] = []
    for is_code, chunk in _split_code_fences(text):
        parts.append(chunk if is_code else BLANK_RUN_PATTERN.sub("\n\n", chunk))
    return "".join(parts)


__all__ = [
    "LLM_EXCLUDE_TAG",
    "LLM_ONLY_TAG",
    "extract_title",
    "full_tag_pattern",
    "prepare_for_llms",
    "split_front_matter",
    "strip_html_tags",
    "stringify_front_matter",
]
