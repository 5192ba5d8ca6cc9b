from __future__ import annotations

from typing import Optional, Protocol

from ..core.models import MatchTier
from .contexts import MatchContext
from .types import TierMatch


class TierEvaluator(Protocol):
    name: str
    tier: MatchTier

    def attempt(self, ctx: MatchContext) -> Optional[TierMatch]: ...
