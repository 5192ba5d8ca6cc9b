from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.models import MatchResult, MatchTier


@dataclass(frozen=True)
class TierMatch:
    raw_name: str
    confidence: float
    score: Optional[float] = None


@dataclass(frozen=True)
class TierAttempt:
    evaluator: str
    tier: MatchTier
    outcome: str
    """One of "matched", "no_match" or "skipped"."""


@dataclass(frozen=True)
class MatchTrace:
    result: MatchResult
    attempts: tuple[TierAttempt, ...] = field(default_factory=tuple)

    def to_record(self) -> dict[str, object]:
        return {
            "result": self.result.to_record(),
            "attempts": [
                {"evaluator": a.evaluator, "tier": a.tier.value, "outcome": a.outcome}
                for a in self.attempts
            ],
        }
