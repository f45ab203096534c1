"""Integration tests for :class:`llmstxt.builder.LlmsTxtBuilder`.

Each test lays out a small documentation tree under ``tmp_path`` and runs the
builder end to end, asserting on the files written below ``dist``.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest

from llmstxt.builder import LlmsTxtBuilder
from llmstxt.config import LlmstxtSettings, SiteSettings
from llmstxt.markdown_parser import split_front_matter

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture

PAGES = {
    "index.md": "---\nhero:\n  name: My Docs\n  text: Everything about it\n---\n",
    "intro.md": (
        "---\ndescription: Start here\n---\n# Introduction\n\n"
        "Welcome <span>there</span>.\n"
    ),
    "guide/index.md": "# Guide\n\nGuide home.\n",
    "guide/setup.md": "# Setup\n\nInstall it.\n",
    "guide/usage.md": (
        "# Usage\n\n<llm-only>Call the API.</llm-only>\n"
        "<llm-exclude>Click the button.</llm-exclude>\n"
    ),
    "blog/post.md": "# Post\n",
}


@pytest.fixture
def docs_tree(tmp_path: Path) -> Path:
    """Write the sample pages and return the source directory."""
    src = tmp_path / "docs"
    for relative, text in PAGES.items():
        path = src / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return src


def _settings(docs_tree: Path, **overrides: typ.Any) -> LlmstxtSettings:
    return LlmstxtSettings(
        src_dir=docs_tree, out_dir=docs_tree.parent / "dist", **overrides
    )


def test_collect_documents_applies_presets(docs_tree: Path) -> None:
    """Presets should drop the index and blog pages and map index copies."""
    documents = LlmsTxtBuilder(_settings(docs_tree)).collect_documents()
    assert [(doc.title, doc.path) for doc in documents] == [
        ("Guide", "guide.md"),
        ("Introduction", "intro.md"),
        ("Setup", "guide/setup.md"),
        ("Usage", "guide/usage.md"),
    ], f"unexpected documents {documents!r}"


def test_run_writes_every_artifact(docs_tree: Path) -> None:
    """A depth-2 build should write both indexes, the bundle, and page copies."""
    settings = _settings(docs_tree, depth=2)
    written = LlmsTxtBuilder(settings).run()
    dist = settings.out_dir
    expected = {
        dist / "llms.txt",
        dist / "guide" / "llms.txt",
        dist / "llms-full.txt",
        dist / "guide.md",
        dist / "intro.md",
        dist / "guide" / "setup.md",
        dist / "guide" / "usage.md",
    }
    assert set(written) == expected, f"unexpected written paths {sorted(written)}"

    root = (dist / "llms.txt").read_text(encoding="utf-8")
    assert root.startswith("# My Docs\n\n> Everything about it\n\n"), (
        f"expected the hero block to title the root, got {root!r}"
    )
    assert "- [Introduction](/intro.md): Start here\n" in root, (
        "expected the description after the intro link"
    )
    assert "- [Usage](/guide/usage.md)\n" in root, "expected nested pages in root"

    guide = (dist / "guide" / "llms.txt").read_text(encoding="utf-8")
    assert guide.startswith("# Guide Documentation\n"), f"unexpected header {guide!r}"
    assert "- [Documentation Overview](/llms.txt)" in guide, (
        "expected a link back to the root index"
    )
    assert "[Introduction]" not in guide, "expected only guide pages in guide index"


def test_page_copies_are_llm_friendly(docs_tree: Path) -> None:
    """Page copies should carry URL front matter and only LLM content."""
    settings = _settings(docs_tree, domain="https://docs.example.com")
    LlmsTxtBuilder(settings).run()

    intro = (settings.out_dir / "intro.md").read_text(encoding="utf-8")
    data, body = split_front_matter(intro)
    assert data == {
        "url": "https://docs.example.com/intro.md",
        "description": "Start here",
    }, f"unexpected page front matter {data!r}"
    assert "Welcome there." in body, f"expected HTML tags stripped, got {body!r}"

    usage = (settings.out_dir / "guide" / "usage.md").read_text(encoding="utf-8")
    assert "Call the API." in usage, "expected llm-only content to be kept"
    assert "Click the button." not in usage, "expected llm-exclude content dropped"

    full = (settings.out_dir / "llms-full.txt").read_text(encoding="utf-8")
    assert full.count("\n---\n\n") == 3, "expected four pages in the bundle"


def test_html_links_without_page_copies(docs_tree: Path) -> None:
    """Index links should point at HTML pages when no copies are written."""
    settings = _settings(docs_tree, generate_llm_friendly_docs_for_each_page=False)
    written = LlmsTxtBuilder(settings).run()
    root = (settings.out_dir / "llms.txt").read_text(encoding="utf-8")
    assert "- [Setup](/guide/setup.html)" in root, f"expected .html links in {root!r}"
    assert settings.out_dir / "intro.md" not in written, "expected no page copies"


def test_empty_tree_writes_nothing(tmp_path: Path, mocker: MockerFixture) -> None:
    """With no pages the builder should warn and leave no output behind."""
    logger = mocker.patch("llmstxt.builder.logger")
    (tmp_path / "docs").mkdir()
    settings = _settings(tmp_path / "docs")
    assert LlmsTxtBuilder(settings).run() == []
    assert not settings.out_dir.exists(), "expected no output directory"
    logger.opt.return_value.warning.assert_called_once()


def test_broken_page_is_skipped(docs_tree: Path, mocker: MockerFixture) -> None:
    """A page with unusable front matter should be logged and skipped."""
    broken = docs_tree / "broken.md"
    broken.write_text("---\n- a\n---\n# Broken\n", encoding="utf-8")
    logger = mocker.patch("llmstxt.builder.logger")
    written = LlmsTxtBuilder(_settings(docs_tree)).run()
    assert written, "expected the build to continue past the broken page"
    assert all(path.name != "broken.md" for path in written)
    logger.opt.return_value.error.assert_called_once()


def test_callable_sidebar_receives_site_sidebar(docs_tree: Path) -> None:
    """A callable sidebar should be handed the site sidebar to extend."""
    site_sidebar = [
        {"text": "Guide", "items": [{"text": "Setup", "link": "/guide/setup"}]}
    ]
    settings = _settings(
        docs_tree,
        site=SiteSettings(sidebar=site_sidebar),
        sidebar=lambda existing: [
            *existing,
            {"text": "Start", "items": [{"text": "Intro", "link": "/intro"}]},
        ],
    )
    builder = LlmsTxtBuilder(settings)
    assert len(builder.resolve_sidebar()) == 2, "expected the extended sidebar"

    builder.run()
    root = (settings.out_dir / "llms.txt").read_text(encoding="utf-8")
    positions = [root.index(f"### {name}") for name in ("Guide", "Start", "Other")]
    assert positions == sorted(positions), (
        f"expected sidebar sections before Other in {root!r}"
    )


def test_ignore_globs_follow_globstar_rules(tmp_path: Path) -> None:
    """``**/`` also matches top-level files and ``blog/*`` stays one level deep."""
    pages = {
        "draft.md": "# Draft\n",
        "guide/draft.md": "# Nested Draft\n",
        "keep.md": "# Keep\n",
        "blog/intro.md": "# Blog Intro\n",
        "blog/2024/post.md": "# Yearly Post\n",
    }
    src = tmp_path / "docs"
    for relative, text in pages.items():
        path = src / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    settings = _settings(src, ignore_files=["**/draft.md"])
    documents = LlmsTxtBuilder(settings).collect_documents()
    assert [doc.path for doc in documents] == ["keep.md", "blog/2024/post.md"], (
        f"unexpected documents {documents!r}"
    )


def test_relative_src_dir_with_same_named_subdirectory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A ``docs/docs`` section should keep its name when ``src_dir`` is relative."""
    for name in ("one", "two"):
        path = tmp_path / "docs" / "docs" / f"{name}.md"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"# {name.title()}\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    settings = LlmstxtSettings(src_dir=Path("docs"), out_dir=Path("dist"), depth=2)
    written = LlmsTxtBuilder(settings).run()
    assert Path("dist/docs/llms.txt") in written, (
        f"expected a chunk for the nested docs directory, got {written!r}"
    )
    root = Path("dist/llms.txt").read_text(encoding="utf-8")
    assert "- [One](/docs/one.md)" in root, f"expected nested links in {root!r}"
