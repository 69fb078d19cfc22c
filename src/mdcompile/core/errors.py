"""Error kinds raised while compiling a document"""


class CompileError(Exception):
    """Base class for every failure raised by the compile pipeline.

    When compile() fails after scheduling the metadata write, ``writes`` holds
    that write's result.
    """
    writes: list = []


class SourceReadError(CompileError):
    """The source .md file is missing or cannot be decoded as UTF-8 text."""


class SegmentIndexError(CompileError, IndexError):
    """The source has fewer '---' delimited segments than the accessed index."""


class FrontMatterParseError(CompileError, ValueError):
    """The front matter is not valid YAML, or does not decode to a mapping."""


class RenderError(CompileError, RuntimeError):
    """Markdown rendering failed, including a failed per-block highlight call."""


class WriteError(CompileError, RuntimeError):
    """One or more artifact writes failed."""

    def __init__(self, failures: list):
        self.failures = failures
        detail = "; ".join(f"{w.path}: {w.error}" for w in failures)
        super().__init__(f"Failed to write {len(failures)} artifact(s): {detail}")
