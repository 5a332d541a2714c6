"""
Utility helpers kept intentionally small and stateless.
"""

from .files import file_fingerprint, is_plain_text, read_document_bytes  # noqa: F401
from .text import normalize, tokenize  # noqa: F401

__all__ = ["file_fingerprint", "is_plain_text", "read_document_bytes", "normalize", "tokenize"]
