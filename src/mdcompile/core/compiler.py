"""DocumentCompiler: one Markdown + front matter source to HTML, preview and JSON artifacts"""

import asyncio
import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Awaitable, Callable

import yaml

from mdcompile.core.errors import FrontMatterParseError, SegmentIndexError, SourceReadError
from mdcompile.core.models import Collection, CompileResult, CompiledArtifacts, WriteResult
from mdcompile.core.preview import extract_preview
from mdcompile.core.render import MarkdownRenderer
from mdcompile.core.storage import write_artifact
from mdcompile.core.utils.inflect import singularize


logger = logging.getLogger(__name__)

DELIMITER = "---"
FRONT_MATTER_INDEX = 1
BODY_INDEX = 2

Writer = Callable[[Path, str], Awaitable[WriteResult]]


def _json_default(value: Any) -> str:
    """Serialize YAML-decoded dates and datetimes as ISO-8601 strings."""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class DocumentCompiler:
    """Compile one document of a collection into its three artifacts.

    Source layout is ``<preamble>---<YAML front matter>---<Markdown body>``, split
    on the literal delimiter. Paths are derived from the collection and the
    filename (the document id) at construction; nothing is read until asked.

    Renderer, YAML decoder, preview extractor and writer are injectable so tests
    can substitute fakes.
    """

    def __init__(
        self,
        collection: Collection,
        filename: str,
        *,
        renderer: MarkdownRenderer = None,
        decoder: Callable[[str], Any] = yaml.safe_load,
        preview: Callable[[str], str] = extract_preview,
        writer: Writer = write_artifact,
        ):
        self.collection = collection
        self.id = filename
        self.collection_key = collection.key
        self.key = singularize(collection.key)

        self.source_path = collection.root / collection.source / f"{filename}.md"
        destination = collection.root / collection.destination
        self.html_path = destination / f"{filename}.html"
        self.preview_path = destination / f"{filename}.preview.html"
        self.metadata_path = destination / f"{filename}.json"

        self.renderer = renderer or MarkdownRenderer()
        self.decoder = decoder
        self.preview = preview
        self.writer = writer

    def __repr__(self) -> str:
        return f"DocumentCompiler(id={self.id!r}, key={self.key!r}, source={str(self.source_path)!r})"

    # --- tokenize ---

    def read_segments(self) -> list[str]:
        """Read the source and split it on '---'. Missing segments are not an error here."""
        try:
            raw = self.source_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(f"Cannot read {self.source_path}: {e}") from e
        return raw.split(DELIMITER)

    def _segment(self, index: int, name: str) -> str:
        segments = self.read_segments()
        if index >= len(segments):
            raise SegmentIndexError(
                f"{self.source_path} has {len(segments)} segment(s); no {name} at index {index}"
            )
        return segments[index]

    def front_matter(self) -> str:
        """Raw YAML front matter (segment 1), verbatim."""
        return self._segment(FRONT_MATTER_INDEX, "front matter")

    def body(self) -> str:
        """Raw Markdown body (segment 2), verbatim."""
        return self._segment(BODY_INDEX, "body")

    # --- metadata ---

    def decode_attributes(self) -> dict[str, Any]:
        """Decode the front matter; the document id always overrides a front matter 'id'."""
        try:
            attrs = self.decoder(self.front_matter())
        except yaml.YAMLError as e:
            raise FrontMatterParseError(f"Invalid YAML front matter in {self.source_path}: {e}") from e
        if attrs is None:
            attrs = {}
        if not isinstance(attrs, dict):
            raise FrontMatterParseError(
                f"Invalid YAML front matter in {self.source_path}: expected a mapping, got {type(attrs).__name__}"
            )
        return {"id": self.id, **{k: v for k, v in attrs.items() if k != "id"}}

    def metadata(self) -> dict[str, dict[str, Any]]:
        return {self.key: self.decode_attributes()}

    def metadata_json(self) -> str:
        """Decode and serialize in one step so a failure never yields partial metadata."""
        metadata = self.metadata()
        try:
            return json.dumps(metadata, default=_json_default, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise FrontMatterParseError(f"Front matter in {self.source_path} is not JSON serializable: {e}") from e

    # --- compile ---

    async def compile(self) -> CompileResult:
        """Write metadata, HTML and preview artifacts; return every write's result.

        The metadata write is scheduled before rendering and is awaited even when
        rendering or preview extraction fails. The error is then re-raised with the
        metadata ``WriteResult`` attached as ``writes``, and no HTML or preview write
        happens. Write failures do not raise; inspect the result or call
        ``raise_for_errors()``.
        """
        metadata = self.metadata_json()
        metadata_task = asyncio.create_task(self.writer(self.metadata_path, metadata))
        logger.debug("Scheduled metadata write for %s -> %s", self.id, self.metadata_path)

        try:
            html = await self.renderer.render(self.body())
            preview = self.preview(html)
        except Exception as e:
            metadata_result = await metadata_task
            e.writes = [metadata_result]
            if not metadata_result.ok:
                logger.error("Metadata write for %s failed: %s", self.id, metadata_result.error)
            raise

        html_result, preview_result, metadata_result = await asyncio.gather(
            self.writer(self.html_path, html),
            self.writer(self.preview_path, preview),
            metadata_task,
        )

        result = CompileResult(
            id=self.id,
            artifacts=CompiledArtifacts(html=html, preview=preview, metadata=metadata),
            writes=[metadata_result, html_result, preview_result],
        )
        if result.ok:
            logger.info("Compiled %s (%s)", self.id, self.key)
        else:
            logger.error("Compiled %s with %d failed write(s)", self.id, len(result.failed_writes))
        return result

    def compile_sync(self) -> CompileResult:
        """Run compile() to completion on a new event loop."""
        return asyncio.run(self.compile())
