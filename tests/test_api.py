"""Tests for the preview API."""

import json

import pytest
from fastapi.testclient import TestClient

from mdxld_workers.api.app import METADATA_HEADER, create_app
from mdxld_workers.compiler import compile_document


@pytest.fixture
def context():
    """Compile a small test document."""
    return compile_document("""---
$type: Article
@context: https://schema.org/
$worker:
  name: preview-worker
  routes:
    - /articles/*
title: Café
---
# Preview
""")


def test_health_endpoint(context):
    """Test /health endpoint."""
    client = TestClient(create_app(context))

    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "name": "preview-worker"}


def test_index_serves_content_with_metadata_header(context):
    """Test that / behaves like the compiled worker."""
    client = TestClient(create_app(context))

    response = client.get("/")
    assert response.status_code == 200
    assert response.text == "# Preview\n"
    assert response.headers["content-type"].startswith("text/html")
    assert json.loads(response.headers[METADATA_HEADER]) == context.metadata.to_dict()


def test_metadata_endpoint(context):
    client = TestClient(create_app(context))

    data = client.get("/metadata").json()
    assert data["name"] == "preview-worker"
    assert data["routes"] == ["/articles/*"]
    assert data["@type"] == "Article"
    assert data["title"] == "Café"


def test_cors(context):
    client = TestClient(create_app(context, enable_cors=True))

    response = client.get("/health", headers={"Origin": "http://example.org"})
    assert response.headers["access-control-allow-origin"] in ("*", "http://example.org")
