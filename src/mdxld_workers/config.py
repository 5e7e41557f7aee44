"""Configuration loader for mdxld.toml."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

CONFIG_NAME = "mdxld.toml"


@dataclass
class WorkerSettings:
    """Default worker identity; CLI flags override these."""
    name: str | None = None
    routes: list[str] = field(default_factory=list)
    compatibility_date: str | None = None
    config: dict[str, Any] = field(default_factory=dict)


@dataclass
class ServeConfig:
    """Preview server configuration."""
    host: str = "127.0.0.1"
    port: int = 8787


@dataclass
class LogConfig:
    level: str = "WARNING"


@dataclass
class MdxldConfig:
    """Complete mdxld-workers configuration."""
    worker: WorkerSettings
    serve: ServeConfig
    log: LogConfig
    path: Path | None = None


def load_config(config_path: Path | None = None, source_path: Path | None = None) -> MdxldConfig:
    """
    Load configuration from mdxld.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/mdxld.toml
    3. mdxld.toml next to the source document

    Args:
        config_path: Explicit path to config file
        source_path: MDXLD source file for the fallback search

    Returns:
        MdxldConfig with resolved settings
    """
    toml_data: dict[str, Any] = {}
    found: Path | None = None

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_NAME)
    if source_path:
        search_paths.append(source_path.parent / CONFIG_NAME)

    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            found = path
            break

    # Parse worker settings
    worker_data = toml_data.get("worker", {})
    routes = worker_data.get("routes", [])
    if isinstance(routes, str):
        routes = [r.strip() for r in routes.split(",") if r.strip()]
    worker_config = worker_data.get("config", {})

    worker = WorkerSettings(
        name=worker_data.get("name"),
        routes=list(routes),
        compatibility_date=worker_data.get("compatibility_date"),
        config=dict(worker_config) if isinstance(worker_config, dict) else {},
    )

    # Parse serve config
    serve_data = toml_data.get("serve", {})
    serve = ServeConfig(
        host=serve_data.get("host", "127.0.0.1"),
        port=int(serve_data.get("port", 8787)),
    )

    log_data = toml_data.get("log", {})
    log = LogConfig(level=str(log_data.get("level", "WARNING")).upper())

    return MdxldConfig(worker=worker, serve=serve, log=log, path=found)
