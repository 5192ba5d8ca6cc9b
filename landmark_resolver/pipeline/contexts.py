from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..config import MatchingSettings
from ..core.classifier import LandmarkLabelClassifier
from ..core.models import Label, LabelSet
from ..registry import EntityRegistry


@dataclass(frozen=True)
class MatchContext:
    labels: LabelSet
    registry: EntityRegistry
    classifier: LandmarkLabelClassifier
    settings: MatchingSettings

    def confident(self, min_confidence: float) -> list[Label]:
        return [label for label in self.labels if label.confidence >= min_confidence]

    def landmark_labels(self, min_confidence: float) -> list[Label]:
        return [
            label
            for label in self.confident(min_confidence)
            if self.classifier.is_landmark_related(label.name)
        ]

    def strongest_specific(self, labels: list[Label]) -> Optional[Label]:
        """Highest-confidence non-generic label; the earliest one wins ties."""
        specific = [label for label in labels if not self.classifier.is_generic(label.name)]
        if not specific:
            return None
        return max(specific, key=lambda label: label.confidence)
