"""FastAPI preview app serving one compiled MDXLD document the way the worker does."""

import json
from typing import Any

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..core.model import WorkerContext

METADATA_HEADER = "X-MDXLD-Metadata"


def create_app(context: WorkerContext, enable_cors: bool = False) -> FastAPI:
    """
    Create FastAPI application with the compiled document injected.

    Args:
        context: Compiled worker context to serve
        enable_cors: Enable CORS middleware

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="MDXLD Worker Preview",
        description="Local preview of a compiled MDXLD worker",
        version=__version__,
    )

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    metadata = context.metadata.to_dict()
    # ASCII-only compact JSON so it is a valid header value
    metadata_header = json.dumps(metadata, separators=(",", ":"))

    @app.get("/health")  # type: ignore[misc]
    async def health() -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "name": context.metadata.name}

    @app.get("/metadata")  # type: ignore[misc]
    async def get_metadata() -> dict[str, Any]:
        """Normalized metadata as JSON."""
        return metadata

    @app.get("/")  # type: ignore[misc]
    async def index() -> Response:
        """Document content, metadata in a response header."""
        return Response(
            content=context.content,
            media_type="text/html",
            headers={METADATA_HEADER: metadata_header},
        )

    return app
