"""Special-field and config resolution for the top-level metadata mapping."""

import logging
from collections.abc import Mapping
from typing import Any

from .keys import SPECIAL_FIELDS, spellings
from .normalize import clone, special_value

log = logging.getLogger("mdxld_workers.resolve")

DEFAULT_MEMORY = 128


def default_config() -> dict[str, Any]:
    """Built per call; callers are free to mutate the result."""
    return {"memory": DEFAULT_MEMORY, "env": {"NODE_ENV": "production"}}


def resolve_special_fields(
    normalized: Mapping[str, Any], typed: Mapping[str, Any] | None = None
) -> dict[str, Any]:
    """
    Resolve each special field from the parser's typed attributes and the
    normalized frontmatter.

    Priority: typed attribute, then ``$field``, ``@field``, plain ``field``.
    ``None`` counts as absent. Fields found nowhere are left out.
    """
    typed = typed or {}
    resolved: dict[str, Any] = {}

    for name in SPECIAL_FIELDS:
        plain, at, dollar = spellings(name)
        if typed.get(name) is not None:
            resolved[name] = special_value(name, typed[name])
            log.debug("%s resolved from typed attributes", name)
            continue
        for spelling in (dollar, at, plain):
            if normalized.get(spelling) is not None:
                resolved[name] = normalized[spelling]
                break

    return resolved


def apply_special_fields(target: dict[str, Any], resolved: Mapping[str, Any]) -> None:
    for name, value in resolved.items():
        for spelling in spellings(name):
            target[spelling] = value


def resolve_config(*layers: Any) -> dict[str, Any]:
    """
    Shallow-merge config layers over the defaults, later layers winning per
    top-level key (``env`` is replaced as a whole). ``None`` layers are
    skipped; other non-mapping layers are ignored.
    """
    config = default_config()
    for layer in layers:
        if layer is None:
            continue
        if not isinstance(layer, Mapping):
            log.debug("Ignoring non-mapping config layer %r", layer)
            continue
        config.update(clone(layer))
    return config
