from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..config import Settings
from ..core.classifier import LandmarkLabelClassifier
from ..core.models import Label, LabelSet, MatchResult
from ..registry import EntityRegistry
from .contexts import MatchContext
from .protocols import TierEvaluator
from .types import MatchTrace, TierAttempt
from .plugins.alternative import AlternativeNameEvaluator
from .plugins.exact import ExactNameEvaluator
from .plugins.generic import GenericLandmarkEvaluator
from .plugins.keyword import KeywordContextEvaluator
from .plugins.similarity import NameSimilarityEvaluator

logger = logging.getLogger(__name__)

DEFAULT_TIER_ORDER: tuple[str, ...] = (
    "exact_name",
    "alternative_name",
    "name_similarity",
    "keyword_context",
    "generic_landmark",
)


def default_evaluators() -> list[TierEvaluator]:
    return [
        ExactNameEvaluator(),
        AlternativeNameEvaluator(),
        NameSimilarityEvaluator(),
        KeywordContextEvaluator(),
        GenericLandmarkEvaluator(),
    ]


class MatchPipeline:
    """
    Ordered tier cascade over one label set.

    Each evaluator implements `TierEvaluator.attempt`; the first one that
    returns a `TierMatch` decides the result and later tiers are not run.
    The registry, classifier and thresholds are fixed at construction, so a
    pipeline instance can be shared freely between callers.

    Usage:
        pipeline = MatchPipeline(EntityRegistry.bundled())
        result = pipeline.match(LabelSet.of(("Eiffel Tower", 96.0)))
    """

    def __init__(
        self,
        registry: EntityRegistry,
        settings: Optional[Settings] = None,
        *,
        classifier: Optional[LandmarkLabelClassifier] = None,
        evaluators: Optional[Sequence[TierEvaluator]] = None,
    ) -> None:
        self._settings = settings or Settings()
        self._registry = registry
        self._classifier = classifier or LandmarkLabelClassifier(
            self._settings.classifier.landmark_keywords,
            self._settings.classifier.generic_terms,
        )
        disabled = {name.strip() for name in self._settings.pipeline.disabled_tiers if name and name.strip()}
        candidates = list(evaluators) if evaluators is not None else default_evaluators()
        self._evaluators = [
            e for e in candidates if getattr(e, "name", e.__class__.__name__) not in disabled
        ]

    @property
    def registry(self) -> EntityRegistry:
        return self._registry

    @property
    def classifier(self) -> LandmarkLabelClassifier:
        return self._classifier

    @property
    def evaluators(self) -> tuple[TierEvaluator, ...]:
        return tuple(self._evaluators)

    @classmethod
    def from_settings(cls, settings: Settings) -> "MatchPipeline":
        registry = EntityRegistry.from_settings(settings.registry.path)
        return cls(registry, settings)

    def _context(self, labels: LabelSet | Iterable[Label]) -> MatchContext:
        if not isinstance(labels, LabelSet):
            labels = LabelSet(tuple(labels))
        return MatchContext(
            labels=labels,
            registry=self._registry,
            classifier=self._classifier,
            settings=self._settings.matching,
        )

    def match(self, labels: LabelSet | Iterable[Label]) -> MatchResult:
        return self.explain(labels).result

    def explain(self, labels: LabelSet | Iterable[Label]) -> MatchTrace:
        ctx = self._context(labels)
        attempts: list[TierAttempt] = []
        if not ctx.labels:
            attempts = [TierAttempt(_name(e), e.tier, "skipped") for e in self._evaluators]
            return MatchTrace(MatchResult.no_match(), tuple(attempts))

        result: Optional[MatchResult] = None
        for evaluator in self._evaluators:
            if result is not None:
                attempts.append(TierAttempt(_name(evaluator), evaluator.tier, "skipped"))
                continue
            # A failing tier aborts the run; later tiers must not answer for it.
            try:
                found = evaluator.attempt(ctx)
            except Exception:
                logger.exception("Tier evaluator %s failed", _name(evaluator))
                raise
            if found is None:
                attempts.append(TierAttempt(_name(evaluator), evaluator.tier, "no_match"))
                continue
            result = MatchResult.matched_as(
                found.raw_name,
                evaluator.tier,
                found.confidence,
                similarity_score=found.score,
            )
            attempts.append(TierAttempt(_name(evaluator), evaluator.tier, "matched"))
            logger.debug(
                "Matched %s via %s (confidence=%.1f)",
                result.canonical_id,
                _name(evaluator),
                result.confidence,
            )

        if result is None:
            logger.debug("No tier matched %d label(s)", len(ctx.labels))
            result = MatchResult.no_match()
        return MatchTrace(result, tuple(attempts))


def _name(evaluator: TierEvaluator) -> str:
    return getattr(evaluator, "name", "") or evaluator.__class__.__name__
