"""
Landmark-label classification.

Decides whether a classifier label names a landmark-like concept by testing
the normalized label against a configured keyword vocabulary.
"""

from __future__ import annotations

from typing import Iterable

from .models import Label
from .normalize import normalize

DEFAULT_LANDMARK_VOCABULARY: tuple[str, ...] = (
    "landmark",
    "monument",
    "tower",
    "statue",
    "temple",
    "palace",
    "castle",
    "cathedral",
    "church",
    "mosque",
    "pyramid",
    "ruins",
    "historical",
    "heritage",
    "architecture",
    "attraction",
    "structure",
    "bridge",
    "fortress",
    "amphitheater",
    "arena",
    "memorial",
)

DEFAULT_GENERIC_TERMS: tuple[str, ...] = (
    "Landmark",
    "Monument",
    "Architecture",
    "Building",
    "Structure",
)


class LandmarkLabelClassifier:
    """
    Keyword predicate over label names.

    Usage:
        classifier = LandmarkLabelClassifier()
        classifier.is_landmark_related("Ancient Ruins")  # True
        classifier.is_generic("Building")  # True
    """

    def __init__(
        self,
        vocabulary: Iterable[str] = DEFAULT_LANDMARK_VOCABULARY,
        generic_terms: Iterable[str] = DEFAULT_GENERIC_TERMS,
    ) -> None:
        self._vocabulary = tuple(term for term in (normalize(v) for v in vocabulary) if term)
        self._generic_terms = frozenset(term for term in (normalize(g) for g in generic_terms) if term)

    @property
    def vocabulary(self) -> tuple[str, ...]:
        return self._vocabulary

    def is_landmark_related(self, label: str) -> bool:
        token = normalize(label)
        if not token:
            return False
        return any(term in token for term in self._vocabulary)

    def is_generic(self, label: str) -> bool:
        return normalize(label) in self._generic_terms

    def has_landmark_signal(self, labels: Iterable[Label], min_confidence: float) -> bool:
        """Whether any label at or above ``min_confidence`` is landmark related."""
        return any(
            label.confidence >= min_confidence and self.is_landmark_related(label.name)
            for label in labels
        )
