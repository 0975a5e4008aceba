"""Tests for supermemory_sync.markdown_converter."""

from datetime import date

import pytest

from supermemory_sync.markdown_converter import (
    MAX_FILENAME_LENGTH,
    MarkdownConverter,
    format_tag,
    sanitize_filename,
)
from supermemory_sync.supermemory_api import Memory

from .conftest import make_memory

FORBIDDEN = set(':|?<>*\\/')


class TestSanitizeFilename:
    def test_strips_forbidden_characters(self):
        assert sanitize_filename('What? <a|b> *c*: \\d') == "What ab c d"

    def test_replaces_slashes(self):
        assert sanitize_filename("2024/01/02 notes") == "2024-01-02 notes"

    def test_truncates_then_trims(self):
        title = "x" * 99 + " " + "y" * 50
        assert sanitize_filename(title) == "x" * 99

    def test_empty(self):
        assert sanitize_filename("") == ""
        assert sanitize_filename("  ::  ") == ""

    @pytest.mark.parametrize(
        "title",
        [
            "Hello World",
            "  padded  ",
            "a/b\\c:d|e?f<g>h*i",
            "é" * 150,
            " " * 20 + "z" * 120,
        ],
    )
    def test_output_is_safe_and_idempotent(self, title):
        name = sanitize_filename(title)
        assert not FORBIDDEN & set(name)
        assert len(name) <= MAX_FILENAME_LENGTH
        assert sanitize_filename(name) == name


def test_format_tag():
    assert format_tag("machine  learning\tbasics") == "#machine_learning_basics"
    assert format_tag("python") == "#python"


class TestFrontmatter:
    def test_minimal_memory_has_no_empty_fields(self):
        memory = Memory.from_api_response(make_memory())
        output = MarkdownConverter(preserve_metadata=True).convert(memory)
        assert output == (
            "---\n"
            "id: mem_1\n"
            "type: note\n"
            "created: 2024-01-02T03:04:05Z\n"
            "updated: 2024-01-03T03:04:05Z\n"
            "---\n"
            "\n"
            "# Hello World\n"
            "\n"
            "Some content"
        )
        for key in ("url:", "tags:", "source:", "author:"):
            assert key not in output

    def test_full_memory(self):
        memory = Memory.from_api_response(
            make_memory(
                type="link",
                url="https://example.com/post",
                tags=["python", "web dev"],
                metadata={"source": "browser", "author": "Sam", "description": "d"},
            )
        )
        output = MarkdownConverter(preserve_metadata=True).convert(memory)
        frontmatter, body = output.split("---\n\n", 1)
        assert "type: link\n" in frontmatter
        assert "url: https://example.com/post\n" in frontmatter
        assert "tags:\n  - python\n  - web dev\n" in frontmatter
        assert "source: browser\n" in frontmatter
        assert "author: Sam\n" in frontmatter
        assert "description" not in frontmatter
        assert body == "# Hello World\n\nSome content"

    def test_ignores_today(self):
        memory = Memory.from_api_response(make_memory())
        converter = MarkdownConverter(preserve_metadata=True)
        assert converter.convert(memory, today=date(2020, 1, 1)) == converter.convert(memory)


class TestInline:
    def test_minimal_memory(self):
        memory = Memory.from_api_response(make_memory())
        output = MarkdownConverter(preserve_metadata=False).convert(
            memory, today=date(2025, 6, 7)
        )
        assert output == (
            "# Hello World\n"
            "\n"
            "Some content\n"
            "\n"
            "---\n"
            "*Imported from Supermemory on 2025-06-07*\n"
            "*Originally created: 2024-01-02T03:04:05Z*"
        )

    def test_source_and_tags(self):
        memory = Memory.from_api_response(
            make_memory(url="https://example.com", tags=["web dev", "python"])
        )
        output = MarkdownConverter(preserve_metadata=False).convert(
            memory, today=date(2025, 6, 7)
        )
        assert output.startswith(
            "# Hello World\n\n"
            "**Source:** https://example.com\n\n"
            "**Tags:** #web_dev #python\n\n"
            "Some content\n\n---\n"
        )
        assert not output.startswith("---")

    def test_only_footer_date_depends_on_today(self):
        memory = Memory.from_api_response(make_memory(tags=["a"]))
        converter = MarkdownConverter(preserve_metadata=False)
        first = converter.convert(memory, today=date(2025, 1, 1))
        second = converter.convert(memory, today=date(2026, 12, 31))
        assert first.replace("2025-01-01", "DATE") == second.replace("2026-12-31", "DATE")

    def test_defaults_to_current_date(self):
        memory = Memory.from_api_response(make_memory())
        output = MarkdownConverter(preserve_metadata=False).convert(memory)
        assert "*Imported from Supermemory on " in output
