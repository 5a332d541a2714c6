from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Tuple

logger = logging.getLogger("changekb")

TEXT_SUFFIXES = {".md", ".txt"}

FileFingerprint = Tuple[int, int]


def read_document_bytes(file_path: str | Path) -> Optional[bytes]:
    """
    Read a source document as raw bytes. Returns None when the file does not
    exist so callers can treat a missing document as "nothing loaded yet".
    """
    path = Path(file_path)
    if not path.exists():
        return None
    return path.read_bytes()


def is_plain_text(file_path: str | Path) -> bool:
    return Path(file_path).suffix.lower() in TEXT_SUFFIXES


def file_fingerprint(file_path: str | Path) -> Optional[FileFingerprint]:
    """(size, mtime_ns) of the file, or None if it cannot be stat'ed."""
    try:
        st = os.stat(file_path)
    except OSError:
        return None
    return st.st_size, st.st_mtime_ns


__all__ = ["FileFingerprint", "file_fingerprint", "is_plain_text", "read_document_bytes"]
