"""Markdown to HTML rendering with concurrent per-block highlighting"""

import asyncio
import logging

from markdown_it import MarkdownIt
from markdown_it.common.utils import unescapeAll

from mdcompile.core.errors import RenderError
from mdcompile.core.highlight import Highlighter, PygmentsHighlighter


logger = logging.getLogger(__name__)

HIGHLIGHTED_ENV_KEY = "highlighted"


def _make_parser(preset: str, linkify: bool) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": linkify})


def fence_lang(token) -> str:
    """Return the declared language of a fence token ('' when none)."""
    info = unescapeAll(token.info).strip() if token.info else ""
    return info.split(maxsplit=1)[0] if info else ""


def _render_fence(self, tokens, idx, options, env) -> str:
    """Fence render rule: emit the markup highlighted ahead of time for this token."""
    return env[HIGHLIGHTED_ENV_KEY][idx]


class MarkdownRenderer:
    """GFM renderer that highlights every fenced code block before emitting HTML.

    All highlight calls for a document run concurrently and are joined before
    rendering; the render fails with RenderError if any one of them fails.
    """

    def __init__(
        self,
        highlighter: Highlighter = None,
        parser_config: str = "gfm-like",
        linkify: bool = True,
        ):
        self.highlighter = highlighter or PygmentsHighlighter()
        self.md = _make_parser(parser_config, linkify)
        self.md.add_render_rule("fence", _render_fence)

    async def _highlight_fences(self, tokens: list) -> dict[int, str]:
        fences = [(i, tok) for i, tok in enumerate(tokens) if tok.type == "fence"]
        if not fences:
            return {}
        logger.debug("Highlighting %d code block(s)", len(fences))

        results = await asyncio.gather(
            *(self.highlighter.highlight(tok.content, fence_lang(tok)) for _, tok in fences),
            return_exceptions=True,
        )
        for (i, tok), result in zip(fences, results):
            if isinstance(result, BaseException):
                raise RenderError(
                    f"Highlighting code block at line {tok.map[0] + 1 if tok.map else '?'} failed: {result}"
                ) from result
        return {i: html for (i, _), html in zip(fences, results)}

    async def render(self, markdown: str) -> str:
        """Render markdown to an HTML fragment once every code block is highlighted."""
        env: dict = {}
        try:
            tokens = self.md.parse(markdown, env)
        except Exception as e:
            raise RenderError(f"Markdown parse failed: {e}") from e

        env[HIGHLIGHTED_ENV_KEY] = await self._highlight_fences(tokens)
        return self.md.renderer.render(tokens, self.md.options, env)
