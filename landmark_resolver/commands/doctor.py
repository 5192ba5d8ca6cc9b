from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..config import Settings
from ..core.models import LabelSet, MatchTier
from ..pipeline import DEFAULT_TIER_ORDER, MatchPipeline
from ..registry import EntityRegistry, RegistryError


class CheckStatus(str, Enum):
    OK = "OK"
    WARNING = "WARNING"
    ERROR = "ERROR"
    DISABLED = "DISABLED"


@dataclass(slots=True)
class DoctorReport:
    ok: bool = True
    checks: list[str] = field(default_factory=list)

    def add(self, subject: str, status: CheckStatus, detail: Optional[str] = None) -> None:
        """Record one "<subject>: <STATUS> (<detail>)" line; any ERROR fails the report."""
        line = f"{subject}: {status.value}"
        if detail:
            line = f"{line} ({detail})"
        self.checks.append(line)
        if status is CheckStatus.ERROR:
            self.ok = False


def run(settings: Settings) -> DoctorReport:
    report = DoctorReport()

    source = str(settings.registry.path) if settings.registry.path else "bundled catalog"
    try:
        registry = EntityRegistry.from_settings(settings.registry.path)
    except RegistryError as exc:
        report.add("Registry", CheckStatus.ERROR, f"{source}: {exc}")
        return report
    if len(registry):
        report.add("Registry", CheckStatus.OK, f"{len(registry)} landmark(s) from {source}")
    else:
        report.add("Registry", CheckStatus.WARNING, f"{source} is empty")

    unknown = sorted(set(settings.pipeline.disabled_tiers) - set(DEFAULT_TIER_ORDER))
    if unknown:
        report.add("Pipeline", CheckStatus.ERROR, f"unknown tier(s): {', '.join(unknown)}")

    pipeline = MatchPipeline(registry, settings)
    active = {getattr(e, "name", "") for e in pipeline.evaluators}
    for name in DEFAULT_TIER_ORDER:
        report.add(f"Tier {name}", CheckStatus.OK if name in active else CheckStatus.DISABLED)

    missing_keywords = [d.primary_name for d in registry if not d.keywords]
    if missing_keywords:
        report.add(
            "Keywords",
            CheckStatus.WARNING,
            f"no keywords for {len(missing_keywords)} landmark(s): {', '.join(missing_keywords)}",
        )

    # Each primary name at full confidence must come back as its own exact match.
    if "exact_name" in active:
        for definition in registry:
            result = pipeline.match(LabelSet.of((definition.primary_name, 100.0)))
            if result.match_tier is not MatchTier.EXACT or result.canonical_id != definition.canonical_id:
                report.add(
                    "Self-match",
                    CheckStatus.ERROR,
                    f"{definition.primary_name} resolved to {result.canonical_id!r}",
                )
                break
        else:
            report.add("Self-match", CheckStatus.OK, "every landmark resolves to itself")

    return report
