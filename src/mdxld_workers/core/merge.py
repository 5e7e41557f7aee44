"""Assemble final worker metadata from every metadata source.

Precedence, low to high:

1. built-in defaults (``name``, ``routes``, ``config``)
2. normalized frontmatter data
3. typed attributes lifted by the parser
4. the ``worker`` block (any spelling): ``name``, ``routes``, ``config``
5. caller overrides, when non-empty
"""

import logging
from collections.abc import Mapping
from typing import Any

from .meta import Metadata
from .model import RawDocument, WorkerOverride
from .normalize import is_sequence, normalize_mapping
from .resolve import (
    apply_special_fields,
    default_config,
    resolve_config,
    resolve_special_fields,
)

log = logging.getLogger("mdxld_workers.merge")


def extract_metadata(
    document: RawDocument, override: WorkerOverride | None = None
) -> Metadata:
    normalized = normalize_mapping(document.data)
    resolved = resolve_special_fields(normalized, document.typed_attributes.as_dict())

    meta: dict[str, Any] = {"name": "", "routes": [], "config": default_config()}
    meta.update(normalized)
    apply_special_fields(meta, resolved)

    worker = resolved.get("worker")
    worker_config = None
    if isinstance(worker, Mapping):
        if worker.get("name"):
            meta["name"] = worker["name"]
        if is_sequence(worker.get("routes")):
            meta["routes"] = worker["routes"]
        worker_config = worker.get("config")
    elif worker is not None:
        log.debug("Ignoring non-mapping worker block %r", worker)

    override_config = None
    if override is not None:
        if override.name:
            meta["name"] = override.name
        if override.routes:
            meta["routes"] = list(override.routes)
        override_config = override.config

    meta["name"] = _as_name(meta.get("name"))
    meta["routes"] = _as_routes(meta.get("routes"))
    meta["config"] = resolve_config(normalized.get("config"), worker_config, override_config)
    return Metadata(meta)


def _as_name(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if value is not None:
        log.debug("Dropping non-scalar worker name %r", value)
    return ""


def _as_routes(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    if is_sequence(value):
        return [r if isinstance(r, str) else str(r) for r in value if r is not None]
    if value is not None:
        log.debug("Dropping malformed routes %r", value)
    return []
