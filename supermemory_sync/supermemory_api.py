"""
Supermemory API wrapper for the sync system.

Provides a small interface to the Supermemory REST API:
- Bearer-token authentication
- Connectivity check
- Paginated memory listing
- Error handling (no retries)
"""

from dataclasses import dataclass, field
from typing import Any, Optional

import requests

from .config import Config
from .errors import APIConnectionError, DeserializationError, FetchError

MEMORIES_PATH = "/v1/memories"


@dataclass(frozen=True)
class MemoryMetadata:
    """Optional metadata bundle attached to a memory."""

    source: Optional[str] = None
    author: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_api_response(cls, data: Optional[dict]) -> "MemoryMetadata":
        data = data or {}
        return cls(
            source=data.get("source") or None,
            author=data.get("author") or None,
            description=data.get("description") or None,
        )


@dataclass(frozen=True)
class Memory:
    """Represents a Supermemory record. Never written back."""

    id: str
    title: str
    content: str
    created_at: str
    updated_at: str
    type: str
    url: Optional[str] = None
    tags: tuple[str, ...] = ()
    metadata: MemoryMetadata = field(default_factory=MemoryMetadata)

    @classmethod
    def from_api_response(cls, memory: dict) -> "Memory":
        """
        Create Memory from API response.

        Raises:
            DeserializationError: If a required field is missing.
        """
        if not isinstance(memory, dict):
            raise DeserializationError(
                f"Expected a memory object, got {type(memory).__name__}"
            )

        try:
            return cls(
                id=str(memory["id"]),
                title=memory.get("title") or "",
                content=memory.get("content") or "",
                created_at=memory["createdAt"],
                updated_at=memory["updatedAt"],
                type=memory["type"],
                url=memory.get("url") or None,
                tags=tuple(memory.get("tags") or ()),
                metadata=MemoryMetadata.from_api_response(memory.get("metadata")),
            )
        except KeyError as e:
            raise DeserializationError(
                f"Memory {memory.get('id', '?')} is missing field {e}"
            ) from e


@dataclass(frozen=True)
class MemoryPage:
    """One page of the memory listing."""

    memories: list[Memory]
    total: int
    page: int
    has_more: bool

    @classmethod
    def from_api_response(cls, data: Any) -> "MemoryPage":
        """Create MemoryPage from API response."""
        if not isinstance(data, dict) or not isinstance(data.get("memories"), list):
            raise DeserializationError("Response has no 'memories' list")

        has_more = data.get("hasMore", False)
        if not isinstance(has_more, bool):
            raise DeserializationError(f"Expected boolean 'hasMore', got {has_more!r}")

        try:
            total = int(data.get("total") or 0)
            page = int(data.get("page") or 0)
        except (TypeError, ValueError) as e:
            raise DeserializationError(f"Invalid page counters: {e}") from e

        return cls(
            memories=[Memory.from_api_response(m) for m in data["memories"]],
            total=total,
            page=page,
            has_more=has_more,
        )


class SupermemoryAPI:
    """
    Wrapper around the Supermemory REST API.

    Every call is a single GET; a non-success status raises
    immediately and is never retried.
    """

    def __init__(self, config: Config, session: Optional[requests.Session] = None):
        """
        Initialize the API client.

        Args:
            config: Configuration instance with API key and URL.
            session: Optional requests session (a new one is created if omitted).
        """
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {config.api_key}",
                "Content-Type": "application/json",
            }
        )
        self._request_count = 0

    def _get(self, params: dict) -> requests.Response:
        self._request_count += 1
        return self.session.get(
            f"{self.config.api_url}{MEMORIES_PATH}",
            params=params,
            timeout=self.config.request_timeout_seconds,
        )

    def check_connection(self) -> None:
        """
        Fetch a single memory to verify the key and URL.

        Raises:
            APIConnectionError: If the API answers with a non-success status.
        """
        response = self._get({"limit": 1})
        if not response.ok:
            raise APIConnectionError(response.status_code, response.reason or "")

    def fetch_page(self, page: int = 1, limit: int = 50) -> MemoryPage:
        """
        Fetch one page of memories, filtered server-side by type.

        Args:
            page: 1-based page number.
            limit: Page size.

        Returns:
            MemoryPage for the requested page.

        Raises:
            FetchError: On a non-success status.
            DeserializationError: If the body is not the expected JSON.
        """
        response = self._get(
            {
                "page": page,
                "limit": limit,
                "types": ",".join(self.config.include_types),
            }
        )
        if not response.ok:
            raise FetchError(response.status_code, response.reason or "")

        try:
            data = response.json()
        except ValueError as e:
            raise DeserializationError(f"Invalid JSON in page {page}: {e}") from e

        return MemoryPage.from_api_response(data)

    def close(self) -> None:
        self.session.close()

    @property
    def request_count(self) -> int:
        """Number of API requests made."""
        return self._request_count
