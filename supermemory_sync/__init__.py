"""
Supermemory → Markdown Sync

Exports memories from the Supermemory API as local Markdown files,
one file per memory.
"""

__version__ = "1.0.0"
