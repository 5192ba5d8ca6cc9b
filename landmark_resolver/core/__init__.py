"""
Core domain layer for landmark-resolver.

This package contains pure matching logic with no external dependencies.
All code here should be testable without I/O operations.
"""

from __future__ import annotations

from .classifier import LandmarkLabelClassifier
from .models import EntityDefinition, Label, LabelSet, MatchResult, MatchTier
from .normalize import normalize
from .similarity import keyword_overlap, similarity, tokenize

__all__ = [
    "EntityDefinition",
    "Label",
    "LabelSet",
    "LandmarkLabelClassifier",
    "MatchResult",
    "MatchTier",
    "keyword_overlap",
    "normalize",
    "similarity",
    "tokenize",
]
