from __future__ import annotations

from typing import Optional

from ...core.models import MatchTier
from ..contexts import MatchContext
from ..protocols import TierEvaluator
from ..types import TierMatch


class ExactNameEvaluator(TierEvaluator):
    name = "exact_name"
    tier = MatchTier.EXACT

    def attempt(self, ctx: MatchContext) -> Optional[TierMatch]:
        for label in ctx.confident(ctx.settings.exact_min_confidence):
            definition = ctx.registry.lookup_exact(label.name)
            if definition is not None:
                return TierMatch(raw_name=definition.primary_name, confidence=label.confidence)
        return None
