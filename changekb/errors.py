"""
Error taxonomy for knowledge loading.

A query that matches nothing is not an error: see ``MatchResult`` and
``Fallback`` in ``knowledge_base.models``.
"""

from __future__ import annotations


class ChangeKBError(Exception):
    """Base class for recoverable knowledge-loading failures."""


class ExtractionFailed(ChangeKBError):
    """The text extractor could not produce text for a document."""


class EmptyDocument(ChangeKBError):
    """Extraction succeeded but the document held no usable text."""


__all__ = ["ChangeKBError", "EmptyDocument", "ExtractionFailed"]
