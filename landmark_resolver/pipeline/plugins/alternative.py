from __future__ import annotations

from typing import Optional

from ...core.models import MatchTier
from ..contexts import MatchContext
from ..protocols import TierEvaluator
from ..types import TierMatch


class AlternativeNameEvaluator(TierEvaluator):
    name = "alternative_name"
    tier = MatchTier.ALTERNATIVE

    def attempt(self, ctx: MatchContext) -> Optional[TierMatch]:
        for label in ctx.confident(ctx.settings.alternative_min_confidence):
            definition = ctx.registry.lookup_alternative(label.name)
            if definition is not None:
                return TierMatch(raw_name=definition.primary_name, confidence=label.confidence)
        return None
