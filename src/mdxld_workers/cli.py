"""CLI for mdxld-workers - compile MDXLD documents into worker scripts."""

import argparse
import json
import logging
import platform
import sys
from datetime import date
from pathlib import Path
from typing import Any

from . import __version__
from .adapters.yaml_codec import YamlFrontmatter
from .compiler import compile_file
from .config import MdxldConfig, load_config
from .core.model import WorkerOverride
from .export.worker import WorkerModuleExporter


def _split_routes(value: str | None) -> list[str]:
    if not value:
        return []
    return [r.strip() for r in value.split(",") if r.strip()]


def build_override(args: argparse.Namespace, cfg: MdxldConfig) -> WorkerOverride:
    """CLI flags win over mdxld.toml; both win over the document."""
    routes = _split_routes(getattr(args, "routes", None)) or list(cfg.worker.routes)
    compatibility_date = (
        getattr(args, "compatibility_date", None)
        or cfg.worker.compatibility_date
        or date.today().isoformat()
    )
    return WorkerOverride(
        name=getattr(args, "name", None) or cfg.worker.name,
        routes=routes or None,
        config=dict(cfg.worker.config) or None,
        compatibility_date=compatibility_date,
    )


def _source(args: argparse.Namespace) -> Path | None:
    src = Path(args.input)
    if not src.is_file():
        print(f"Input file not found: {src}", file=sys.stderr)
        return None
    return src


def cmd_compile(args: argparse.Namespace, cfg: MdxldConfig) -> int:
    """Compile an MDXLD file into a worker module."""
    src = _source(args)
    if src is None:
        return 1

    override = build_override(args, cfg)
    context = compile_file(src, override)
    exporter = WorkerModuleExporter(compatibility_date=override.compatibility_date)

    if args.out:
        out = exporter.export(context, Path(args.out))
        if not args.quiet:
            print(f"Wrote {out}")
    else:
        print(exporter.render(context), end="")
    return 0


def cmd_meta(args: argparse.Namespace, cfg: MdxldConfig) -> int:
    """Print normalized metadata."""
    src = _source(args)
    if src is None:
        return 1

    context = compile_file(src, build_override(args, cfg))
    if args.format == "yaml":
        print(YamlFrontmatter().encode(context.metadata), end="")
    else:
        print(json.dumps(context.metadata.to_dict(), indent=2, ensure_ascii=False))
    return 0


def cmd_serve(args: argparse.Namespace, cfg: MdxldConfig) -> int:
    """Serve a compiled document locally."""
    import uvicorn

    from .api.app import create_app

    src = _source(args)
    if src is None:
        return 1

    context = compile_file(src, build_override(args, cfg))
    app = create_app(context, enable_cors=args.cors)

    host = args.host or cfg.serve.host
    port = args.port or cfg.serve.port
    print(f"Serving {context.metadata.name or src.name} on http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level="info")
    return 0


def _add_worker_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("input", help="Input MDXLD file")
    p.add_argument("-n", "--name", help="Worker name (overrides frontmatter)")
    p.add_argument("-r", "--routes", help="Worker routes (comma-separated)")


def _version_text() -> str:
    return (
        f"mdxld-workers {__version__} "
        f"(python {platform.python_version()}, platform {platform.system().lower()})"
    )


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="mdxld-workers",
        description="Compile MDXLD files into Cloudflare-style workers",
    )
    parser.add_argument(
        "--version", action="version", version=_version_text()
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/mdxld.toml, next to input)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Minimize output"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # compile command
    parser_compile = subparsers.add_parser(
        "compile", help="Compile MDXLD file to a worker module"
    )
    _add_worker_options(parser_compile)
    parser_compile.add_argument(
        "-c", "--compatibility-date", dest="compatibility_date",
        help="Worker compatibility date (default: today)"
    )
    parser_compile.add_argument(
        "-o", "--out",
        help="Output file or directory (default: print to stdout)"
    )

    # meta command
    parser_meta = subparsers.add_parser("meta", help="Show normalized metadata")
    _add_worker_options(parser_meta)
    parser_meta.add_argument(
        "--format", choices=["json", "yaml"], default="json",
        help="Output format (default: json)"
    )

    # serve command
    parser_serve = subparsers.add_parser("serve", help="Serve a compiled document locally")
    _add_worker_options(parser_serve)
    parser_serve.add_argument("--host", default=None, help="Host (default: 127.0.0.1)")
    parser_serve.add_argument("--port", type=int, default=None, help="Port (default: 8787)")
    parser_serve.add_argument("--cors", action="store_true", help="Enable CORS")

    args = parser.parse_args()

    handlers = {
        "compile": cmd_compile,
        "meta": cmd_meta,
        "serve": cmd_serve,
    }

    handler = handlers.get(args.cmd)
    if handler:
        try:
            source = Path(args.input) if getattr(args, "input", None) else None
            cfg = load_config(config_path=args.config, source_path=source)

            level: Any = logging.DEBUG if args.verbose else cfg.log.level
            logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

            exit_code = handler(args, cfg)
            sys.exit(exit_code)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
