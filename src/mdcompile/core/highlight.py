"""Per-block syntax highlighting backed by Pygments"""

import asyncio
from typing import Protocol

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.lexers.special import TextLexer
from pygments.util import ClassNotFound


class Highlighter(Protocol):
    """Anything that turns (code, lang) into HTML markup, asynchronously."""

    async def highlight(self, code: str, lang: str) -> str: ...


class HighlightError(Exception):
    """A single code block could not be highlighted."""


class PygmentsHighlighter:
    """Highlight code blocks to HTML, one worker-thread call per block."""

    def __init__(self, css_class: str = "highlight", inline_styles: bool = False):
        self.formatter = HtmlFormatter(cssclass=css_class, noclasses=inline_styles)

    def _lexer(self, lang: str):
        if not lang:
            return TextLexer()
        try:
            return get_lexer_by_name(lang)
        except ClassNotFound as e:
            raise HighlightError(f"No lexer for language {lang!r}") from e

    def highlight_sync(self, code: str, lang: str) -> str:
        return highlight(code, self._lexer(lang), self.formatter)

    async def highlight(self, code: str, lang: str) -> str:
        return await asyncio.to_thread(self.highlight_sync, code, lang)
