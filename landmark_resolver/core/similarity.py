"""
String similarity scoring for landmark names.

Scores are bounded heuristics in [0.0, 1.0] built from three signals:
- Exact match of normalized forms (1.0)
- Containment of one normalized form in the other (0.7 and up)
- Word overlap between token lists (0.5 to 0.9)

All functions are pure and have no I/O dependencies.
"""

from __future__ import annotations

import re
from typing import Iterable

from .normalize import normalize

_NON_WORD_RE = re.compile(r"\W+")

CONTAINMENT_FLOOR = 0.7
OVERLAP_BASE = 0.5
OVERLAP_WEIGHT = 0.4
OVERLAP_CEILING = 0.9
MIN_TOKEN_LENGTH = 3


def tokenize(normalized: str) -> list[str]:
    """
    Split a normalized string on non-word runs, dropping short tokens.

    Normalization already removed whitespace, so only punctuation separates
    tokens here:
        "notre-damedeparis" → ["notre", "damedeparis"]
        "st.paul's" → ["paul"]
    """
    return [token for token in _NON_WORD_RE.split(normalized) if len(token) >= MIN_TOKEN_LENGTH]


def _tokens_related(left: str, right: str) -> bool:
    return left == right or left in right or right in left


def token_overlap(tokens1: list[str], tokens2: list[str]) -> float:
    """
    Fraction of first-side tokens that found a partner on the second side.

    Each first-side token counts at most once and stops at its first partner.
    The scan is driven by ``tokens1``, so swapping the arguments can change
    the result when a second-side token is related to several first-side
    tokens.
    """
    if not tokens1 or not tokens2:
        return 0.0
    match_count = 0
    for token in tokens1:
        for other in tokens2:
            if _tokens_related(token, other):
                match_count += 1
                break
    return match_count / max(len(tokens1), len(tokens2))


def similarity(a: str, b: str) -> float:
    """
    Compute a bounded similarity score between two names.

    Steps, in order:
    1. Equal normalized forms → 1.0
    2. One contains the other → max(0.7, len(shorter) / len(longer))
    3. Token overlap (only when either side has several tokens)
       → min(0.9, 0.5 + overlap * 0.4)
    4. Otherwise → 0.0

    A name that normalizes to "" never scores above 0.0.

    Args:
        a: Label-side name (drives the token scan)
        b: Registry-side name

    Returns:
        Score in [0.0, 1.0]
    """
    norm_a = normalize(a)
    norm_b = normalize(b)
    if not norm_a or not norm_b:
        return 0.0

    if norm_a == norm_b:
        return 1.0

    if norm_a in norm_b or norm_b in norm_a:
        shorter, longer = sorted((norm_a, norm_b), key=len)
        return max(CONTAINMENT_FLOOR, len(shorter) / len(longer))

    tokens1 = tokenize(norm_a)
    tokens2 = tokenize(norm_b)
    if len(tokens1) > 1 or len(tokens2) > 1:
        overlap = token_overlap(tokens1, tokens2)
        if overlap > 0:
            return min(OVERLAP_CEILING, OVERLAP_BASE + overlap * OVERLAP_WEIGHT)

    return 0.0


def keyword_overlap(label: str, keywords: Iterable[str]) -> float:
    """
    Fraction of keywords whose normalized form appears inside the label.

    Examples:
        keyword_overlap("Paris Tower", ["eiffel", "tower", "paris", "iron"]) → 0.5

    Returns:
        0.0 for an empty keyword list or an empty label
    """
    terms = [normalize(keyword) for keyword in keywords]
    if not terms:
        return 0.0
    norm_label = normalize(label)
    if not norm_label:
        return 0.0
    hits = sum(1 for term in terms if term and term in norm_label)
    return hits / len(terms)
