"""
Text-extraction collaborators that turn document bytes into plain text.
"""

from .mineru import extract_text_via_mineru, get_batch_results  # noqa: F401
from .pdf_text import extract_text  # noqa: F401

__all__ = ["extract_text", "extract_text_via_mineru", "get_batch_results"]
