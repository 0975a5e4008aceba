"""
Supermemory memories to Markdown converter.

Two mutually exclusive layouts:
- Frontmatter: metadata in a ``---`` delimited block, then title and content
- Inline: title, source and tags in the body, plus an import footer
"""

import re
from datetime import date, datetime, timezone
from typing import Optional

from .supermemory_api import Memory

# Characters not allowed in exported file names
_FORBIDDEN_FILENAME_CHARS = re.compile(r"[:|?<>*\\]")
MAX_FILENAME_LENGTH = 100


def sanitize_filename(title: str) -> str:
    """
    Turn a memory title into a filesystem-safe base name.

    Examples:
        "Notes: Week 1" -> "Notes Week 1"
        "a/b" -> "a-b"
    """
    name = _FORBIDDEN_FILENAME_CHARS.sub("", title)
    name = name.replace("/", "-")
    return name[:MAX_FILENAME_LENGTH].strip()


def format_tag(tag: str) -> str:
    """Render a tag as a hashtag: "machine learning" -> "#machine_learning"."""
    return "#" + re.sub(r"\s+", "_", tag)


class MarkdownConverter:
    """
    Converts memories to Markdown documents.

    Output depends only on the memory, except the inline footer's
    export date, which defaults to today's UTC date.
    """

    def __init__(self, preserve_metadata: bool = True):
        """
        Initialize converter.

        Args:
            preserve_metadata: Emit a frontmatter block instead of inline metadata.
        """
        self.preserve_metadata = preserve_metadata

    def convert(self, memory: Memory, today: Optional[date] = None) -> str:
        """
        Convert a memory to Markdown.

        Args:
            memory: The memory to render.
            today: Export date for the inline footer (defaults to today, UTC).

        Returns:
            The Markdown document.
        """
        if self.preserve_metadata:
            return self._convert_with_frontmatter(memory)
        return self._convert_inline(memory, today or datetime.now(timezone.utc).date())

    def _frontmatter(self, memory: Memory) -> list[str]:
        lines = ["---"]
        lines.append(f"id: {memory.id}")
        lines.append(f"type: {memory.type}")
        lines.append(f"created: {memory.created_at}")
        lines.append(f"updated: {memory.updated_at}")

        if memory.url:
            lines.append(f"url: {memory.url}")

        if memory.tags:
            lines.append("tags:")
            lines.extend(f"  - {tag}" for tag in memory.tags)

        if memory.metadata.source:
            lines.append(f"source: {memory.metadata.source}")

        if memory.metadata.author:
            lines.append(f"author: {memory.metadata.author}")

        lines.append("---")
        return lines

    def _convert_with_frontmatter(self, memory: Memory) -> str:
        lines = self._frontmatter(memory)
        lines.append("")
        lines.append(f"# {memory.title}")
        lines.append("")
        lines.append(memory.content)
        return "\n".join(lines)

    def _convert_inline(self, memory: Memory, today: date) -> str:
        lines = [f"# {memory.title}", ""]

        if memory.url:
            lines.append(f"**Source:** {memory.url}")
            lines.append("")

        if memory.tags:
            lines.append(f"**Tags:** {' '.join(format_tag(t) for t in memory.tags)}")
            lines.append("")

        lines.append(memory.content)

        # Footer
        lines.append("")
        lines.append("---")
        lines.append(f"*Imported from Supermemory on {today.isoformat()}*")
        lines.append(f"*Originally created: {memory.created_at}*")

        return "\n".join(lines)
