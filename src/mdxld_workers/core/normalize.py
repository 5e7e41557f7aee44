"""Recursive normalization of YAML-LD frontmatter metadata.

Every mapping level is rebuilt from scratch: prefixed special fields are
written under all three spellings, ``context`` mappings get ``@vocab``,
``worker`` blocks seed the enclosing ``name``/``routes`` and ``list`` is
always a sequence. Malformed shapes pass through untouched.
"""

import logging
from collections.abc import Mapping
from typing import Any

from .keys import NORMALIZED_FIELDS, classify, spellings

log = logging.getLogger("mdxld_workers.normalize")


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def clone(value: Any) -> Any:
    """Copy mappings and sequences without re-keying anything."""
    if isinstance(value, Mapping):
        return {k if isinstance(k, str) else str(k): clone(v) for k, v in value.items()}
    if is_sequence(value):
        return [clone(item) for item in value]
    return value


def normalize_context(value: Any) -> Any:
    """
    Rewrite ``vocab`` (any spelling) to ``@vocab`` in a context mapping.

    Other terms keep their spelling and are not tripled; term definitions
    are copied as written. Non-mapping contexts (usually a URL) pass through.
    """
    if not isinstance(value, Mapping):
        return clone(value)
    out: dict[str, Any] = {}
    for raw_key, item in value.items():
        key = classify(raw_key)
        out["@vocab" if key.base == "vocab" else key.text] = clone(item)
    return out


def special_value(base: str, value: Any) -> Any:
    """Normalize ``value`` and apply the structural rule for field ``base``."""
    if base == "context":
        if is_sequence(value):
            return [normalize_context(item) for item in value]
        if isinstance(value, Mapping):
            return normalize_context(value)
    value = normalize(value)
    if base == "list" and not is_sequence(value):
        return [value]
    return value


def normalize(value: Any) -> Any:
    if isinstance(value, Mapping):
        return normalize_mapping(value)
    if is_sequence(value):
        return [normalize(item) for item in value]
    return value


def normalize_mapping(data: Mapping[Any, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    # bases already written by a prefixed spelling at this level
    claimed: set[str] = set()

    for raw_key, raw_value in data.items():
        key = classify(raw_key)
        special = key.base in NORMALIZED_FIELDS

        if special and not key.is_prefixed and key.base in claimed:
            log.debug("Plain %r shadowed by a prefixed spelling", key.base)
            continue

        value = special_value(key.base, raw_value)

        if special and key.is_prefixed:
            for spelling in spellings(key.base):
                result[spelling] = value
            claimed.add(key.base)
        else:
            result[key.text] = value

        if key.base == "worker" and isinstance(value, Mapping):
            _hoist_worker(result, value)

    return result


def _hoist_worker(result: dict[str, Any], worker: Mapping[str, Any]) -> None:
    name = worker.get("name")
    if isinstance(name, str):
        result["name"] = name
    routes = worker.get("routes")
    if is_sequence(routes):
        result["routes"] = routes
