"""Pipeline step functions: collection construction, single-document and batch compile"""

import logging
from pathlib import Path

from mdcompile.config import Settings
from mdcompile.core.compiler import DocumentCompiler
from mdcompile.core.highlight import PygmentsHighlighter
from mdcompile.core.models import Collection, CompileResult
from mdcompile.core.render import MarkdownRenderer
from mdcompile.core.utils.files import discover_ids


logger = logging.getLogger(__name__)


def make_collection(settings: Settings) -> Collection:
    return Collection(
        source=Path(settings.source_dir),
        destination=Path(settings.destination_dir),
        key=settings.collection_key,
        root=Path(settings.root_dir),
    )


def make_renderer(settings: Settings) -> MarkdownRenderer:
    """Build the renderer and highlighter described by settings."""
    highlighter = PygmentsHighlighter(
        css_class=settings.highlight_css_class,
        inline_styles=settings.highlight_inline_styles,
    )
    return MarkdownRenderer(highlighter, settings.parser_config, settings.linkify)


def run_compile(
    collection: Collection,
    doc_id: str,
    renderer: MarkdownRenderer = None,
    ) -> CompileResult:
    """Compile one document and raise WriteError if any artifact failed to land."""
    result = DocumentCompiler(collection, doc_id, renderer=renderer).compile_sync()
    result.raise_for_errors()
    return result


def run_build(
    collection: Collection,
    renderer: MarkdownRenderer = None,
    ) -> list[CompileResult]:
    """Compile every document in the collection's source dir, one at a time.

    Stops at the first failure, wrapping it with the document id.
    """
    ids = discover_ids(collection.root / collection.source)
    if not ids:
        logger.warning("No .md files found under %s", collection.root / collection.source)
    results = []
    for doc_id in ids:
        try:
            results.append(run_compile(collection, doc_id, renderer))
        except Exception as e:
            raise RuntimeError(f"Failed to compile {doc_id}: {e}") from e
    return results
