"""
Configuration management for Supermemory → Markdown sync.

Loads settings from environment variables (and an optional .env file)
and provides a single read-only configuration value for the sync.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

DEFAULT_API_URL = "https://api.supermemory.ai"
DEFAULT_OUTPUT_DIR = "./supermemory-export"

# Memory types known to the Supermemory API
MEMORY_TYPES = ("note", "link", "file", "chat")


def parse_types(value: str) -> tuple[str, ...]:
    """
    Split a comma-separated type list.

    Examples:
        "note,link" -> ("note", "link")
        " note , , chat" -> ("note", "chat")
    """
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class Config:
    """
    Central configuration for the sync.

    Constructed once at startup and never mutated; CLI overrides
    produce a new instance via ``dataclasses.replace``.
    """

    api_key: str = ""
    api_url: str = DEFAULT_API_URL
    output_dir: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT_DIR))

    # Sync behavior
    include_types: tuple[str, ...] = MEMORY_TYPES
    preserve_metadata: bool = True
    max_pages: int = 100
    page_size: int = 50
    page_delay_seconds: float = 1.0
    request_timeout_seconds: float = 30.0
    debug: bool = False

    def __post_init__(self):
        # Frozen dataclass: normalise through object.__setattr__
        if isinstance(self.output_dir, str):
            object.__setattr__(self, "output_dir", Path(self.output_dir))
        object.__setattr__(self, "include_types", tuple(self.include_types))
        object.__setattr__(self, "api_url", self.api_url.rstrip("/"))

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Config":
        """
        Load configuration from environment variables.

        A missing API key is not an error here: it is reported by
        :meth:`validate` when the sync starts, so ``--api-key`` can
        still supply it.

        Args:
            env_file: Optional path to .env file. If not provided,
                     looks for .env in current directory.

        Returns:
            Configured Config instance.
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        types_str = os.getenv("SUPERMEMORY_TYPES")

        return cls(
            api_key=os.getenv("SUPERMEMORY_API_KEY", ""),
            api_url=os.getenv("SUPERMEMORY_API_URL") or DEFAULT_API_URL,
            output_dir=Path(os.getenv("SUPERMEMORY_OUTPUT_DIR") or DEFAULT_OUTPUT_DIR),
            include_types=parse_types(types_str) if types_str else MEMORY_TYPES,
            debug=os.getenv("DEBUG", "false").lower() == "true",
        )

    def validate(self) -> None:
        """
        Check the configuration before any network call is made.

        Raises:
            ConfigurationError: If the API key is missing, no type is given,
                or a type is unknown.
        """
        if not self.api_key:
            raise ConfigurationError(
                "API key is required. Set SUPERMEMORY_API_KEY environment "
                "variable or pass --api-key"
            )

        if not self.include_types:
            raise ConfigurationError(
                f"At least one memory type is required. Valid types: {', '.join(MEMORY_TYPES)}"
            )

        unknown = [t for t in self.include_types if t not in MEMORY_TYPES]
        if unknown:
            raise ConfigurationError(
                f"Unknown memory type(s): {', '.join(unknown)}. "
                f"Valid types: {', '.join(MEMORY_TYPES)}"
            )

        if self.max_pages < 0:
            raise ConfigurationError("max_pages must not be negative")
