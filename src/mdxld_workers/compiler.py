"""Compile MDXLD sources into a worker context (metadata + content)."""

import logging
from pathlib import Path

from .adapters.yaml_codec import YamlFrontmatter
from .core.merge import extract_metadata
from .core.model import WorkerContext, WorkerOverride
from .core.ports import FrontmatterCodec

log = logging.getLogger("mdxld_workers.compiler")


def compile_document(
    source: str,
    override: WorkerOverride | None = None,
    codec: FrontmatterCodec | None = None,
) -> WorkerContext:
    """
    Parse ``source`` and build its normalized worker metadata.

    Args:
        source: Full MDXLD text (frontmatter + body)
        override: Caller options; non-empty name/routes win over the document
        codec: Frontmatter codec (default: YamlFrontmatter)

    Returns:
        WorkerContext with the metadata and the untouched body

    Raises:
        MetadataExtractionError: the frontmatter could not be parsed
    """
    codec = codec or YamlFrontmatter()
    document = codec.decode(source)
    metadata = extract_metadata(document, override)
    log.debug(
        "Compiled worker %r (%d routes, %d metadata keys)",
        metadata.name,
        len(metadata.routes),
        len(metadata),
    )
    return WorkerContext(metadata=metadata, content=document.content)


def compile_file(path: Path, override: WorkerOverride | None = None) -> WorkerContext:
    return compile_document(path.read_text(encoding="utf-8"), override)
