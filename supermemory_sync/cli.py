"""
Supermemory → Markdown Sync CLI

Usage:
    supermemory-sync                                   # Export everything
    supermemory-sync --api-key sm_abc123 --output-dir ./my-memories
    supermemory-sync --types note,link --no-metadata   # Inline metadata only
    supermemory-sync --max-pages 5                     # Stop after 5 pages
"""

import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import Config, parse_types
from .errors import ConfigurationError
from .sync_engine import SyncEngine

console = Console()
err_console = Console(stderr=True)


@click.command(
    epilog=(
        "Examples:\n\n"
        "  supermemory-sync --api-key sm_abc123 --output-dir ./my-memories\n\n"
        "  supermemory-sync --types note,link --no-metadata"
    )
)
@click.option("--api-key", help="Supermemory API key (or set SUPERMEMORY_API_KEY env var)")
@click.option("--api-url", help="Supermemory API URL (or set SUPERMEMORY_API_URL env var)")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Output directory (default: ./supermemory-export)",
)
@click.option(
    "--types",
    help="Comma-separated list of types to include (default: note,link,file,chat)",
)
@click.option("--no-metadata", is_flag=True, help="Don't include metadata in frontmatter")
@click.option(
    "--max-pages",
    type=click.IntRange(min=0),
    help="Maximum pages to fetch (default: 100)",
)
@click.option("--debug", is_flag=True, help="Show tracebacks on errors")
@click.version_option(__version__, prog_name="Supermemory Sync")
def cli(
    api_key: Optional[str],
    api_url: Optional[str],
    output_dir: Optional[Path],
    types: Optional[str],
    no_metadata: bool,
    max_pages: Optional[int],
    debug: bool,
):
    """
    Supermemory Sync Tool

    Exports Supermemory memories to local Markdown files.
    """
    config = Config.from_env()

    # Apply CLI overrides
    overrides = {}
    if api_key:
        overrides["api_key"] = api_key
    if api_url:
        overrides["api_url"] = api_url
    if output_dir:
        overrides["output_dir"] = output_dir
    if types:
        overrides["include_types"] = parse_types(types)
    if no_metadata:
        overrides["preserve_metadata"] = False
    if max_pages is not None:
        overrides["max_pages"] = max_pages
    if debug:
        overrides["debug"] = True
    config = replace(config, **overrides)

    try:
        SyncEngine(config).sync()
    except ConfigurationError as e:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        sys.exit(1)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Sync cancelled.[/yellow]")
        sys.exit(130)
    except Exception as e:
        err_console.print(f"[red]❌ Error:[/red] {escape(str(e))}")
        if config.debug:
            err_console.print_exception()
        sys.exit(1)


def main():
    """Main entry point."""
    cli()
