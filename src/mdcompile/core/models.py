"""Data models for collections, documents and compile results"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from mdcompile.core.errors import WriteError


class Collection(BaseModel):
    """A group of documents sharing a source directory, destination directory and key."""
    source:      Path
    destination: Path
    key:         str            # plural, e.g. "articles"
    root:        Path = Path(".")


@dataclass
class CompiledArtifacts:
    """The three outputs derived from one document."""
    html:     str
    preview:  str              # inner HTML of the first <p>; "" when there is none
    metadata: str              # JSON text


@dataclass
class WriteResult:
    path:  Path
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class CompileResult:
    """Outcome of DocumentCompiler.compile: the artifacts and every write's result."""
    id:        str
    artifacts: CompiledArtifacts
    writes:    list[WriteResult] = field(default_factory=list)

    @property
    def failed_writes(self) -> list[WriteResult]:
        return [w for w in self.writes if not w.ok]

    @property
    def ok(self) -> bool:
        return not self.failed_writes

    def raise_for_errors(self) -> None:
        """Raise WriteError if any artifact failed to land on disk."""
        if self.failed_writes:
            raise WriteError(self.failed_writes)
