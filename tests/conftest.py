"""Pytest configuration and fixtures for photoctl tests."""

from __future__ import annotations

import base64
import json
import tempfile
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Generator

import httpx
import pytest

from photoctl.core.client import StoreClient


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config_yaml() -> str:
    """Sample config YAML content."""
    return """
default_profile: test
output_format: table

profiles:
  test:
    url: http://photos-test.example.org
    verify_ssl: false
    timeout: 30
    workers: 2

  production:
    url: https://photos.example.org
    verify_ssl: true
    timeout: 60
"""


@pytest.fixture
def make_file(temp_dir: Path) -> Callable[..., Path]:
    """Factory writing a file with the given content into temp_dir."""

    def _make(name: str, content: bytes = b"\xff\xd8\xff\xe0fake-jpeg") -> Path:
        path = temp_dir / name
        path.write_bytes(content)
        return path

    return _make


class FakeStore:
    """In-memory photo store served through httpx.MockTransport.

    File names listed in ``reject`` get the mapped HTTP status with an
    ``{"error": ...}`` body; everything else is stored and acknowledged.
    """

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.uploads: list[dict] = []
        self.reject: dict[str, int] = {}
        self.malformed: set[str] = set()
        self.photos: list[dict] = []
        self.last_query: dict[str, str] = {}
        self._next_id = 1

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if request.method == "POST" and path == "/api/images":
            return self._upload(request)
        if request.method == "GET" and path == "/api/images":
            self.last_query = dict(request.url.params)
            return httpx.Response(200, json={"photos": self.photos})
        if request.method == "POST" and path == "/api/images/search":
            body = json.loads(request.content)
            return httpx.Response(
                200,
                json={"query": body["query"], "tags": ["beach"], "photos": self.photos},
            )
        return httpx.Response(404, json={"error": "not found"})

    def _upload(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        name = body["file_name"]
        with self.lock:
            self.uploads.append(body)
            status = self.reject.get(name)
            if status is not None:
                return httpx.Response(status, json={"error": f"rejected {name}"})
            if name in self.malformed:
                return httpx.Response(200, json={"ok": True})
            photo = {
                "photo_id": self._next_id,
                "file_name": name,
                "file_path": f"uploads/{name}",
                "tags": ["beach"],
                "created_at": "2026-01-01T00:00:00Z",
            }
            self._next_id += 1
        return httpx.Response(201, json={"photo": photo})

    def uploaded_names(self) -> list[str]:
        with self.lock:
            return [u["file_name"] for u in self.uploads]

    def decoded(self, name: str) -> bytes:
        with self.lock:
            body = next(u for u in self.uploads if u["file_name"] == name)
        return base64.b64decode(body["image_base64"])


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def store_client(fake_store: FakeStore) -> Generator[StoreClient, None, None]:
    """StoreClient wired to the in-memory store, no retries."""
    client = StoreClient(
        base_url="http://store.test",
        max_retries=0,
        transport=httpx.MockTransport(fake_store),
    )
    yield client
    client.close()
