from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_FILES_DIR = BASE_DIR.parent / "files"
DEFAULT_SOURCE_FILENAME = "knowledgebase.pdf"
SUPPORTED_EXTRACTORS = ("pypdf", "mineru")


@dataclass(frozen=True)
class Settings:
    """Application configuration bundled in a single object."""

    files_root: Path
    source_path: Path
    log_dir: Path
    confidence_threshold: float = 0.35
    max_keywords: int = 8
    max_fallback_entries: int = 300
    poll_interval: float = 2.0
    extractor: str = "pypdf"
    mineru_api_key: Optional[str] = None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load and cache configuration from environment variables.

    Raises:
        ValueError: if a value cannot be parsed or is out of range.
    """
    load_dotenv()

    files_root = Path(os.getenv("CHANGEKB_FILES_ROOT", DEFAULT_FILES_DIR)).expanduser()
    source_path = Path(
        os.getenv("CHANGEKB_SOURCE", files_root / DEFAULT_SOURCE_FILENAME)
    ).expanduser()
    log_dir = Path(os.getenv("CHANGEKB_LOG_DIR", files_root)).expanduser()

    threshold = _env_number("CHANGEKB_CONFIDENCE_THRESHOLD", 0.35, float)
    if not 0.0 <= threshold <= 1.0:
        raise ValueError("CHANGEKB_CONFIDENCE_THRESHOLD must be between 0 and 1")
    max_keywords = _env_number("CHANGEKB_MAX_KEYWORDS", 8, int)
    max_fallback_entries = _env_number("CHANGEKB_MAX_FALLBACK_ENTRIES", 300, int)
    if max_keywords < 0 or max_fallback_entries < 0:
        raise ValueError("CHANGEKB_MAX_KEYWORDS and CHANGEKB_MAX_FALLBACK_ENTRIES must not be negative")
    poll_interval = _env_number("CHANGEKB_POLL_INTERVAL", 2.0, float)
    if poll_interval <= 0:
        raise ValueError("CHANGEKB_POLL_INTERVAL must be positive")

    extractor = os.getenv("CHANGEKB_EXTRACTOR", "pypdf").strip().lower()
    if extractor not in SUPPORTED_EXTRACTORS:
        raise ValueError(
            f"CHANGEKB_EXTRACTOR must be one of {', '.join(SUPPORTED_EXTRACTORS)}, got {extractor!r}"
        )
    mineru_api_key = os.getenv("MINERU_API_KEY") or None
    if extractor == "mineru" and not mineru_api_key:
        raise ValueError("MINERU_API_KEY is required when CHANGEKB_EXTRACTOR=mineru")

    return Settings(
        files_root=files_root,
        source_path=source_path,
        log_dir=log_dir,
        confidence_threshold=threshold,
        max_keywords=max_keywords,
        max_fallback_entries=max_fallback_entries,
        poll_interval=poll_interval,
        extractor=extractor,
        mineru_api_key=mineru_api_key,
    )


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be a valid {cast.__name__}, got {raw!r}") from exc


__all__ = ["Settings", "get_settings"]
