"""Shared fixtures: memory payloads and a fake HTTP session."""

from unittest.mock import Mock

import pytest

from supermemory_sync.config import Config


def make_memory(**overrides) -> dict:
    """Build a memory as returned by the Supermemory API."""
    memory = {
        "id": "mem_1",
        "title": "Hello World",
        "content": "Some content",
        "createdAt": "2024-01-02T03:04:05Z",
        "updatedAt": "2024-01-03T03:04:05Z",
        "tags": [],
        "type": "note",
        "metadata": {},
    }
    memory.update(overrides)
    return memory


def make_response(payload=None, status_code: int = 200, reason: str = "OK") -> Mock:
    response = Mock()
    response.status_code = status_code
    response.reason = reason
    response.ok = status_code < 400
    response.json.return_value = payload
    return response


def page_response(memories, page: int = 1, has_more: bool = False) -> Mock:
    return make_response(
        {"memories": memories, "total": len(memories), "page": page, "hasMore": has_more}
    )


@pytest.fixture
def session() -> Mock:
    """A stand-in for requests.Session; set ``get.side_effect`` per test."""
    fake = Mock()
    fake.headers = {}
    return fake


@pytest.fixture
def config(tmp_path) -> Config:
    return Config(
        api_key="sm_test",
        api_url="https://api.example.com/",
        output_dir=tmp_path / "export",
    )
