"""Frontmatter metadata normalization core."""

from .errors import MetadataExtractionError
from .keys import Key, classify, spellings
from .merge import extract_metadata
from .meta import Metadata
from .model import RawDocument, TypedAttributes, WorkerContext, WorkerOverride
from .normalize import normalize

__all__ = [
    "Key",
    "Metadata",
    "MetadataExtractionError",
    "RawDocument",
    "TypedAttributes",
    "WorkerContext",
    "WorkerOverride",
    "classify",
    "extract_metadata",
    "normalize",
    "spellings",
]
