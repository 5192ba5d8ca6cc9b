from __future__ import annotations

from .contexts import MatchContext
from .core import DEFAULT_TIER_ORDER, MatchPipeline, default_evaluators
from .protocols import TierEvaluator
from .types import MatchTrace, TierAttempt, TierMatch

__all__ = [
    "DEFAULT_TIER_ORDER",
    "MatchContext",
    "MatchPipeline",
    "MatchTrace",
    "TierAttempt",
    "TierEvaluator",
    "TierMatch",
    "default_evaluators",
]
