from __future__ import annotations

import logging
from typing import Optional

from ...core.models import MatchTier
from ...core.similarity import keyword_overlap, similarity
from ..contexts import MatchContext
from ..protocols import TierEvaluator
from ..types import TierMatch

logger = logging.getLogger(__name__)


class KeywordContextEvaluator(TierEvaluator):
    name = "keyword_context"
    tier = MatchTier.KEYWORD

    def attempt(self, ctx: MatchContext) -> Optional[TierMatch]:
        settings = ctx.settings
        if not ctx.landmark_labels(settings.keyword_trigger_confidence):
            return None
        candidate = ctx.strongest_specific(ctx.confident(settings.keyword_candidate_confidence))
        if candidate is None:
            return None

        best_name: Optional[str] = None
        best_score = -1.0
        for definition in ctx.registry:
            score = max(
                similarity(candidate.name, definition.primary_name),
                keyword_overlap(candidate.name, definition.keywords),
            )
            if score > best_score:
                best_score = score
                best_name = definition.primary_name

        if best_name is None or best_score < settings.keyword_min_score:
            logger.debug("Keyword tier found nothing for %r (best=%.3f)", candidate.name, best_score)
            return None
        return TierMatch(raw_name=best_name, confidence=candidate.confidence, score=best_score)
