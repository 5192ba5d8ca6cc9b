from __future__ import annotations

import logging
from typing import Optional

from ...core.models import EntityDefinition, MatchTier
from ...core.similarity import similarity
from ..contexts import MatchContext
from ..protocols import TierEvaluator
from ..types import TierMatch

logger = logging.getLogger(__name__)


def definition_similarity(label: str, definition: EntityDefinition) -> float:
    """Best score of ``label`` against the primary name and every alternative name."""
    best = similarity(label, definition.primary_name)
    for alternative in sorted(definition.alternative_names):
        best = max(best, similarity(label, alternative))
    return best


class NameSimilarityEvaluator(TierEvaluator):
    name = "name_similarity"
    tier = MatchTier.SIMILARITY

    def attempt(self, ctx: MatchContext) -> Optional[TierMatch]:
        min_score = ctx.settings.similarity_min_score
        best: Optional[TierMatch] = None
        best_combined = -1.0
        for label in ctx.confident(ctx.settings.similarity_min_confidence):
            for definition in ctx.registry:
                score = definition_similarity(label.name, definition)
                if score < min_score:
                    continue
                combined = score * (label.confidence / 100)
                if combined > best_combined:
                    best_combined = combined
                    best = TierMatch(
                        raw_name=definition.primary_name,
                        confidence=label.confidence,
                        score=score,
                    )
        if best is not None:
            logger.debug(
                "Similarity tier picked %s (score=%.3f, combined=%.3f)",
                best.raw_name,
                best.score,
                best_combined,
            )
        return best
