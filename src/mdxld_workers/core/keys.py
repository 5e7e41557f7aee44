"""Prefix-aware key model for YAML-LD frontmatter keys."""

from dataclasses import dataclass
from typing import Any

PREFIXES = ("@", "$")

# Tripled under every spelling wherever they appear in the frontmatter
NORMALIZED_FIELDS = frozenset({"type", "id", "context", "list", "vocab", "worker"})

# Resolved at the top level against the parser's typed attributes
SPECIAL_FIELDS = (
    "type",
    "id",
    "context",
    "list",
    "vocab",
    "worker",
    "language",
    "base",
    "reverse",
    "set",
)


@dataclass(frozen=True)
class Key:
    prefix: str | None  # "@", "$" or None
    base: str

    @property
    def text(self) -> str:
        return f"{self.prefix or ''}{self.base}"

    @property
    def is_prefixed(self) -> bool:
        return self.prefix is not None


def unquote(key: str) -> str:
    """Strip one layer of matching single or double quotes."""
    if len(key) >= 2 and key[0] == key[-1] and key[0] in ("'", '"'):
        return key[1:-1]
    return key


def classify(key: Any) -> Key:
    """
    Split a frontmatter key into its prefix and base name.

    Examples:
        >>> classify("$type")
        Key(prefix='$', base='type')
        >>> classify("'@context'")
        Key(prefix='@', base='context')
        >>> classify("title")
        Key(prefix=None, base='title')
    """
    text = unquote(key if isinstance(key, str) else str(key))
    if text[:1] in PREFIXES:
        return Key(prefix=text[0], base=text[1:])
    return Key(prefix=None, base=text)


def spellings(base: str) -> tuple[str, str, str]:
    return (base, f"@{base}", f"${base}")
