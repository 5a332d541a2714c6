from __future__ import annotations

import re
from typing import List

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")


def normalize(text: str) -> str:
    """
    Lowercase ASCII letters, turn every other non-alphanumeric run into a single
    space and trim. Non-ASCII characters are treated as separators.
    """
    if not text:
        return ""
    return _NON_ALNUM.sub(" ", text).lower().strip()


def tokenize(text: str) -> List[str]:
    return normalize(text).split()


__all__ = ["normalize", "tokenize"]
