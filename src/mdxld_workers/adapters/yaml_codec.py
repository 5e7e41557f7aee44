import io
import re
from collections.abc import Mapping
from typing import Any

import yaml

from ..core.errors import MetadataExtractionError
from ..core.keys import classify
from ..core.model import RawDocument, TypedAttributes
from ..core.ports import FrontmatterCodec

_FM = re.compile(r"^\s*---[ \t]*\r?\n(?:(.*?)\r?\n)??---[ \t]*(?:\r?\n|$)", re.DOTALL)

# "@key:" / "- @key:" at the start of a line; YAML reserves "@" as an indicator
_AT_KEY = re.compile(r"^(\s*(?:-\s+)?)(@[^\s:'\"]*)(\s*:(?:\s|$))")
# "key: @value" / "- @value"; the key never spans a quote or another ": "
_AT_VALUE = re.compile(
    r"""^(\s*(?:-\s+)?(?:(?:'[^']*'|"[^"]*"|[^\s'"#:][^:#'"]*):\s+)?)(@.*?)\s*$"""
)
_BLOCK_SCALAR = re.compile(r":\s*[|>][-+0-9]*\s*$")

_STR_FIELDS = ("id", "type", "language", "base", "vocab")


class _Loader(yaml.SafeLoader):
    """SafeLoader that keeps timestamps as plain strings."""


_Loader.yaml_implicit_resolvers = {
    first: [(tag, rx) for tag, rx in resolvers if tag != "tag:yaml.org,2002:timestamp"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class _Dumper(yaml.SafeDumper):
    # the same value sits under several spellings; never emit &anchors
    def ignore_aliases(self, data: Any) -> bool:
        return True


def _quote(text: str) -> str:
    return "'" + text.replace("'", "''") + "'"


def quote_reserved(block: str) -> str:
    """
    Quote ``@``-prefixed keys and values so the YAML loader accepts them.

    Lines inside block scalars (``|`` / ``>``) are left alone.
    """
    out: list[str] = []
    scalar_indent: int | None = None

    for line in block.split("\n"):
        indent = len(line) - len(line.lstrip())
        if scalar_indent is not None:
            if not line.strip() or indent > scalar_indent:
                out.append(line)
                continue
            scalar_indent = None

        line = _AT_KEY.sub(lambda m: m.group(1) + _quote(m.group(2)) + m.group(3), line)
        line = _AT_VALUE.sub(lambda m: m.group(1) + _quote(m.group(2)), line)
        if _BLOCK_SCALAR.search(line):
            scalar_indent = indent
        out.append(line)

    return "\n".join(out)


def lift_typed_attributes(data: Mapping[Any, Any]) -> TypedAttributes:
    """
    Pick the well-known linked-data fields out of the frontmatter.

    Only prefixed spellings count; ``$field`` outranks ``@field``.
    """
    by_spelling: dict[str, Any] = {}
    for key, value in data.items():
        k = classify(key)
        if k.is_prefixed:
            by_spelling[k.text] = value

    def pick(name: str) -> Any:
        value = by_spelling.get(f"${name}")
        return value if value is not None else by_spelling.get(f"@{name}")

    found: dict[str, Any] = {}
    for name in _STR_FIELDS:
        value = pick(name)
        if isinstance(value, str):
            found[name] = value
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            found[name] = str(value)

    context = pick("context")
    if isinstance(context, (str, Mapping)):
        found["context"] = context

    items = pick("list")
    if items is not None:
        found["list"] = list(items) if isinstance(items, (list, tuple)) else [items]

    members = pick("set")
    if members is not None:
        unique: list[Any] = []
        for member in members if isinstance(members, (list, tuple)) else [members]:
            if member not in unique:
                unique.append(member)
        found["set"] = unique

    reverse = pick("reverse")
    if reverse is not None:
        found["reverse"] = bool(reverse)

    return TypedAttributes(**found)


class YamlFrontmatter(FrontmatterCodec):
    def decode(self, text: str) -> RawDocument:
        m = _FM.match(text)
        if not m:
            return RawDocument(data={}, content=text)
        try:
            data = yaml.load(io.StringIO(quote_reserved(m.group(1) or "")), Loader=_Loader)
        except yaml.YAMLError as e:
            raise MetadataExtractionError(str(e)) from e
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise MetadataExtractionError(
                f"frontmatter must be a mapping, got {type(data).__name__}"
            )
        return RawDocument(
            data=data,
            content=text[m.end() :],
            typed_attributes=lift_typed_attributes(data),
        )

    def encode(self, meta: Mapping[str, Any]) -> str:
        if not meta:
            return ""
        buf = io.StringIO()
        yaml.dump(dict(meta), buf, Dumper=_Dumper, sort_keys=False, allow_unicode=True)
        return f"---\n{buf.getvalue()}---\n"
