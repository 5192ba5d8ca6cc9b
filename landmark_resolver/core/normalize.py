"""
Name normalization for canonical ids.

The canonical id of a landmark is the normalized form of its name. The same
function keys the registry indices and feeds the similarity scorer, so any
change here changes every stored id downstream.
"""

from __future__ import annotations

import re
from typing import Optional

_WHITESPACE_RE = re.compile(r"\s+")


def normalize(name: Optional[str]) -> str:
    """
    Normalize a free-text name to a stable identifier.

    Process:
    1. Lowercase
    2. Trim
    3. Remove every whitespace run

    Examples:
        "Eiffel Tower" → "eiffeltower"
        "  EIFFEL   TOWER " → "eiffeltower"
        "Notre-Dame de Paris" → "notre-damedeparis"

    Args:
        name: The name to normalize (``None`` is accepted)

    Returns:
        Normalized token, or "" for empty input
    """
    if not name:
        return ""
    return _WHITESPACE_RE.sub("", name.lower().strip())
