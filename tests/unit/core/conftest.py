"""Shared fixtures for core unit tests"""

import asyncio
from pathlib import Path

import pytest

from mdcompile.core.models import Collection
from mdcompile.core.render import MarkdownRenderer


class FakeHighlighter:
    """Wraps code in a tagged <pre> and records every call."""

    def __init__(self):
        self.calls: list[tuple[str, str]] = []

    async def highlight(self, code: str, lang: str) -> str:
        self.calls.append((code, lang))
        await asyncio.sleep(0)
        return f'<pre data-lang="{lang}">{code}</pre>'


class FailingHighlighter:
    async def highlight(self, code: str, lang: str) -> str:
        raise ConnectionError(f"highlight service unavailable for {lang}")


@pytest.fixture(name="fake_highlighter")
def fake_highlighter_fixture():
    return FakeHighlighter()


@pytest.fixture(name="fake_renderer")
def fake_renderer_fixture(fake_highlighter):
    return MarkdownRenderer(fake_highlighter)


@pytest.fixture(name="failing_renderer")
def failing_renderer_fixture():
    return MarkdownRenderer(FailingHighlighter())


@pytest.fixture(name="collection")
def collection_fixture(tmp_path):
    """A 'posts' collection rooted at tmp_path with existing source and output dirs."""
    (tmp_path / "posts").mkdir()
    (tmp_path / "dist").mkdir()
    return Collection(source=Path("posts"), destination=Path("dist"), key="posts", root=tmp_path)


@pytest.fixture(name="write_source")
def write_source_fixture(collection):
    """Factory: write <doc_id>.md into the collection's source dir and return its path."""
    def _write(doc_id: str, text: str) -> Path:
        path = collection.root / collection.source / f"{doc_id}.md"
        path.write_text(text, encoding="utf-8")
        return path
    return _write
