from __future__ import annotations

from typing import Optional

from ...core.models import MatchTier
from ..contexts import MatchContext
from ..protocols import TierEvaluator
from ..types import TierMatch


class GenericLandmarkEvaluator(TierEvaluator):
    """Reports a strongly landmark-like label as an unrecognised landmark."""

    name = "generic_landmark"
    tier = MatchTier.GENERIC

    def attempt(self, ctx: MatchContext) -> Optional[TierMatch]:
        settings = ctx.settings
        landmark_labels = ctx.landmark_labels(settings.generic_trigger_confidence)
        if len(landmark_labels) < settings.generic_min_labels:
            return None
        label = ctx.strongest_specific(landmark_labels)
        if label is None:
            return None
        return TierMatch(raw_name=label.name, confidence=label.confidence)
