from typing import Mapping, Iterator, Any

from .normalize import clone


class Metadata(Mapping[str, Any]):
    """
    Read-only view over normalized worker metadata, e.g.,
    - "type" / "@type" / "$type": "Article"
    - "name": "blog-worker"
    - "config": {"memory": 128, "env": {"NODE_ENV": "production"}}
    Renderers and exporters receive this and must not change it; nested
    values are handed out as copies.
    """

    def __init__(self, initial: Mapping[str, Any] | None = None):
        self._d = dict(initial or {})

    # Mapping interface
    def __getitem__(self, k: str) -> Any:
        return clone(self._d[k])

    def __iter__(self) -> Iterator[str]:
        return iter(self._d)

    def __len__(self) -> int:
        return len(self._d)

    def __repr__(self) -> str:
        return f"Metadata({self._d!r})"

    # Convenience
    @property
    def name(self) -> str:
        return self._d.get("name", "")

    @property
    def routes(self) -> list[str]:
        return list(self._d.get("routes", []))

    def to_dict(self) -> dict[str, Any]:
        return clone(self._d)
