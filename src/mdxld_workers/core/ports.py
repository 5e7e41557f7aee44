from pathlib import Path
from typing import Protocol

from .model import RawDocument, WorkerContext


class FrontmatterCodec(Protocol):
    """
    Split source text into frontmatter data and body without enforcing schema.
    Raises MetadataExtractionError when the frontmatter cannot be parsed.
    """

    def decode(self, text: str) -> RawDocument:
        pass


class Renderer(Protocol):
    """
    Turn a compiled document into text; metadata is read-only.
    """

    def render(self, context: WorkerContext) -> str:
        pass


class ExportAdapter(Protocol):
    def export(self, context: WorkerContext, out: Path) -> Path:
        pass
