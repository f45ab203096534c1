"""Unit tests for loading ``llmstxt.yaml`` build settings.

These tests cover defaults, relative directory resolution, value coercion,
the ignore-pattern presets, and the errors raised for malformed files.

Usage
-----
Run ``pytest tests/test_config.py -v``. Tests only need pytest's ``tmp_path``
and the ``mocker`` fixture from pytest-mock.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest

from llmstxt.config import LlmstxtSettings, SettingsError, build_settings, load_settings

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "llmstxt.yaml"
    path.write_text(text.strip() + "\n", encoding="utf-8")
    return path


def test_defaults_apply_for_empty_file(tmp_path: Path) -> None:
    """An empty settings file should yield the documented defaults."""
    settings = load_settings(_write(tmp_path, ""))
    assert settings.src_dir == tmp_path / "docs", "expected docs next to the file"
    assert settings.out_dir == tmp_path / "dist", "expected dist next to the file"
    assert settings.depth == 1, "expected root-only chunking by default"
    assert settings.min_files_per_chunk == 2, "expected two pages per chunk"
    assert settings.generate_llms_txt, "expected llms.txt generation on"
    assert settings.domain is None, "expected site-absolute links by default"


def test_values_are_parsed(tmp_path: Path) -> None:
    """Every supported key should land on the settings dataclass."""
    settings = load_settings(
        _write(
            tmp_path,
            """
src_dir: site
work_dir: en
out_dir: /tmp/llms-out
domain: https://docs.example.com/
depth: 3
min_files_per_chunk: 1
clean_urls: true
include_navigation: false
ignore_files:
  - drafts/*
description: Project docs
custom_template_variables:
  version: 2
site:
  title: Example
  sidebar:
    - text: Guide
      link: /guide/
""",
        )
    )
    assert settings.resolved_work_dir == tmp_path / "site" / "en", (
        "expected work_dir below src_dir"
    )
    assert settings.out_dir == Path("/tmp/llms-out"), "expected absolute out_dir"
    assert settings.domain == "https://docs.example.com", (
        "expected trailing slash to be stripped from domain"
    )
    assert (settings.depth, settings.min_files_per_chunk) == (3, 1)
    assert settings.clean_urls and not settings.include_navigation
    assert settings.description == "Project docs"
    assert settings.custom_template_variables == {"version": "2"}, (
        "expected template variables to be stringified"
    )
    assert settings.site.title == "Example"
    assert settings.site.sidebar == [{"text": "Guide", "link": "/guide/"}]
    assert settings.ignore_patterns()[0] == "drafts/*", (
        "expected explicit patterns before presets"
    )


def test_depth_below_one_is_clamped() -> None:
    """A zero or negative depth should behave as 1."""
    assert build_settings({"depth": 0}).depth == 1
    assert build_settings({"min_files_per_chunk": -4}).min_files_per_chunk == 1


@pytest.mark.parametrize(
    ("raw", "message"),
    [
        ({"strip_html": "yes"}, "strip_html"),
        ({"depth": "deep"}, "depth"),
        ({"custom_template_variables": ["a"]}, "custom_template_variables"),
        ({"site": "Example"}, "site"),
    ],
)
def test_invalid_values_raise(raw: dict[str, object], message: str) -> None:
    """Wrongly typed values should raise SettingsError naming the key."""
    with pytest.raises(SettingsError, match=message):
        build_settings(raw)


def test_non_mapping_file_raises(tmp_path: Path) -> None:
    """A YAML list at the top level should be rejected."""
    with pytest.raises(SettingsError, match="mapping"):
        load_settings(_write(tmp_path, "- depth: 2"))


def test_missing_file_raises(tmp_path: Path) -> None:
    """Explicitly requesting a missing file should fail loudly."""
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "missing.yaml")


def test_ignore_presets_follow_flags() -> None:
    """Preset ignore lists should be added per flag."""
    everything = LlmstxtSettings().ignore_patterns()
    assert {"index.md", "blog/*", "team.md"} <= set(everything), (
        f"expected every preset by default, got {everything}"
    )
    no_blog = LlmstxtSettings(exclude_blog=False).ignore_patterns()
    assert "blog/*" not in no_blog, "expected blog preset to be disabled"
    none = LlmstxtSettings(
        ignore_files=["x.md"], exclude_unnecessary_files=False
    ).ignore_patterns()
    assert none == ["x.md"], "expected only explicit patterns without presets"


def test_links_extension_follows_page_copies() -> None:
    """Index links target .md copies unless they are not generated."""
    assert LlmstxtSettings().links_extension is None
    disabled = LlmstxtSettings(generate_llm_friendly_docs_for_each_page=False)
    assert disabled.links_extension == ".html"


def test_warnings_for_unknown_keys_and_bare_template(mocker: MockerFixture) -> None:
    """Unknown keys and placeholder-free templates should only warn."""
    logger = mocker.patch("llmstxt.config.loader.logger")
    settings = build_settings(
        {"dpeth": 2, "custom_llms_txt_template": "Static text only"}
    )
    assert settings.custom_llms_txt_template == "Static text only"
    assert logger.warning.call_count == 2, "expected one warning per problem"
