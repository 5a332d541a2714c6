"""
changekb package bootstrap.

Expose high-level helpers so callers can import from `changekb` without
needing to traverse the entire package hierarchy.
"""

from .config.settings import Settings, get_settings  # noqa: F401
from .knowledge_base import KnowledgeStore, SourceWatcher  # noqa: F401

__all__ = ["KnowledgeStore", "Settings", "SourceWatcher", "get_settings"]
