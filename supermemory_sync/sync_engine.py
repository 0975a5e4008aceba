"""
Main sync engine for Supermemory → Markdown export.

Orchestrates:
- Configuration check
- Connectivity check
- Page-by-page fetching
- Type filtering
- Content conversion
- File writing
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import Config
from .markdown_converter import MarkdownConverter, sanitize_filename
from .supermemory_api import Memory, SupermemoryAPI

console = Console()


@dataclass
class SyncResult:
    """Result of a sync operation."""

    memories_imported: int = 0
    memories_skipped: int = 0
    pages_fetched: int = 0
    files_written: list[Path] = field(default_factory=list)


class SyncEngine:
    """
    Main orchestrator for Supermemory → Markdown export.

    Runs strictly in order:
    1. Validate configuration
    2. Check the API connection
    3. Create the output directory
    4. Fetch pages until the API reports no more, or max_pages is reached
    5. Write each memory of an included type to its Markdown file

    The first error aborts the run; files already written stay on disk.
    """

    def __init__(
        self,
        config: Config,
        api: Optional[SupermemoryAPI] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize sync engine.

        Args:
            config: Configuration instance.
            api: Optional API client (created from config if omitted).
            sleep: Function used for the pause between pages.
        """
        self.config = config
        self._api = api
        self._owns_api = api is None
        self._sleep = sleep
        self.markdown_converter = MarkdownConverter(config.preserve_metadata)

    @property
    def api(self) -> SupermemoryAPI:
        if self._api is None:
            self._api = SupermemoryAPI(self.config)
        return self._api

    def sync(self) -> SyncResult:
        """
        Perform a full export.

        Returns:
            SyncResult with details of the operation.

        Raises:
            ConfigurationError: If no API key is configured.
            APIConnectionError: If the connectivity check fails.
            FetchError: If fetching a page fails.
        """
        try:
            return self._sync()
        finally:
            if self._owns_api and self._api is not None:
                self._api.close()

    def _sync(self) -> SyncResult:
        result = SyncResult()

        console.print("\n[bold blue]🚀 Starting Supermemory sync...[/bold blue]\n")

        # Nothing touches the network before this
        self.config.validate()

        self.api.check_connection()
        console.print("[green]✅ Connected to Supermemory API[/green]")

        self.config.output_dir.mkdir(parents=True, exist_ok=True)

        page = 1
        has_more = True

        while has_more and page <= self.config.max_pages:
            console.print(f"📖 Fetching memories page {page}...")
            response = self.api.fetch_page(page, self.config.page_size)
            result.pages_fetched += 1

            console.print(f"🔄 Processing {len(response.memories)} memories...")

            for memory in response.memories:
                if memory.type not in self.config.include_types:
                    result.memories_skipped += 1
                    continue

                path = self.save_memory(memory)
                result.files_written.append(path)
                result.memories_imported += 1
                console.print(f"[green]✅ Imported {result.memories_imported} memories[/green]")

            has_more = response.has_more
            page += 1

            # Fixed pause between pages
            if has_more and page <= self.config.max_pages:
                self._sleep(self.config.page_delay_seconds)

        console.print(
            f"\n[bold green]🎉 Sync complete![/bold green] Imported "
            f"{result.memories_imported} memories to {escape(str(self.config.output_dir))}"
        )
        self._print_summary(result)

        return result

    def target_path(self, memory: Memory) -> Path:
        """
        Compute where a memory is written.

        Frontmatter mode partitions files into ``{type}s/`` subdirectories.
        A title that sanitizes to nothing falls back to the memory id.
        """
        target_dir = self.config.output_dir
        if self.config.preserve_metadata:
            target_dir = target_dir / f"{memory.type}s"

        filename = sanitize_filename(memory.title) or sanitize_filename(memory.id)
        return target_dir / f"{filename}.md"

    def save_memory(self, memory: Memory) -> Path:
        """Write a memory to disk, overwriting any file with the same name."""
        content = self.markdown_converter.convert(memory)
        path = self.target_path(memory)

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

        return path

    def _print_summary(self, result: SyncResult) -> None:
        """Print sync summary."""
        table = Table(show_header=False, box=None)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="white")

        table.add_row("Memories imported", str(result.memories_imported))
        table.add_row("Memories skipped", str(result.memories_skipped))
        table.add_row("Pages fetched", str(result.pages_fetched))
        table.add_row("API requests", str(self.api.request_count))
        table.add_row("Output directory", escape(str(self.config.output_dir)))

        console.print(table)
        console.print("")
