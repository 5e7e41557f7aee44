from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from typing import Any

from .meta import Metadata


@dataclass(frozen=True)
class TypedAttributes:
    """Well-known fields the frontmatter parser already lifted out."""

    id: str | None = None
    type: str | None = None
    context: str | dict[str, Any] | None = None
    language: str | None = None
    base: str | None = None
    vocab: str | None = None
    list: list[Any] | None = None
    set: list[Any] | None = None  # unique values, first occurrence order
    reverse: bool | None = None

    def get(self, name: str) -> Any:
        return getattr(self, name, None)

    def as_dict(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass
class RawDocument:
    data: dict[str, Any] = field(default_factory=dict)  # everything in the frontmatter
    content: str = ""  # body after the frontmatter block, verbatim
    typed_attributes: TypedAttributes = field(default_factory=TypedAttributes)


@dataclass
class WorkerOverride:
    """Caller-supplied compile options; empty values never override."""

    name: str | None = None
    routes: list[str] | None = None
    config: dict[str, Any] | None = None
    compatibility_date: str | None = None


@dataclass(frozen=True)
class WorkerContext:
    metadata: Metadata
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {"metadata": self.metadata.to_dict(), "content": self.content}

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
