from __future__ import annotations

import io
import logging

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from ..errors import ExtractionFailed

logger = logging.getLogger("changekb")


def extract_text(document_bytes: bytes) -> str:
    """
    Extract plain text from PDF bytes, one page after another.

    Raises:
        ExtractionFailed: if the bytes are not a readable PDF.
    """
    if not document_bytes:
        raise ExtractionFailed("Document is empty")

    try:
        reader = PdfReader(io.BytesIO(document_bytes))
        pages = [page.extract_text() or "" for page in reader.pages]
    except (PyPdfError, ValueError, KeyError, OSError) as exc:
        raise ExtractionFailed(f"Unable to read PDF: {exc}") from exc

    logger.debug("Extracted text from %s PDF pages", len(pages))
    return "\n".join(pages)


__all__ = ["extract_text"]
