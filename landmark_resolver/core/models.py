"""
Domain models for landmark matching.

These are pure data models with no dependencies beyond the normalizer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence

from .normalize import normalize


class MatchTier(str, Enum):
    """Cascade stage that produced a match, in decreasing order of trust."""

    EXACT = "exact"
    ALTERNATIVE = "alternative"
    SIMILARITY = "similarity"
    KEYWORD = "keyword"
    GENERIC = "generic"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class Label:
    """
    A detected visual concept with the classifier's confidence.

    Example:
        Label("Eiffel Tower", 96.4)
    """
    name: str
    """Label text as produced by the image classifier"""

    confidence: float
    """Classifier confidence on a 0-100 scale"""

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise ValueError(f"Label name must be a string, got {type(self.name).__name__}")
        if isinstance(self.confidence, bool) or not isinstance(self.confidence, (int, float)):
            raise ValueError(f"Label confidence must be a number, got {self.confidence!r}")
        if math.isnan(self.confidence) or not 0 <= self.confidence <= 100:
            raise ValueError(f"Label confidence {self.confidence!r} is outside [0, 100] for {self.name!r}")


@dataclass(frozen=True, slots=True)
class LabelSet:
    """
    Ordered labels for one classification request.

    Order carries no matching weight but is the tie-breaker whenever two
    labels have the same confidence.
    """
    labels: tuple[Label, ...] = ()

    def __iter__(self) -> Iterator[Label]:
        return iter(self.labels)

    def __len__(self) -> int:
        return len(self.labels)

    def __bool__(self) -> bool:
        return bool(self.labels)

    @classmethod
    def of(cls, *pairs: tuple[str, float]) -> "LabelSet":
        return cls(tuple(Label(name, confidence) for name, confidence in pairs))

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any] | Sequence[Any]]) -> "LabelSet":
        """
        Build a label set from classifier records.

        Accepts ``{"name": ..., "confidence": ...}``, the image classifier's
        native ``{"Name": ..., "Confidence": ...}`` shape and plain
        ``[name, confidence]`` pairs.
        """
        labels: list[Label] = []
        for record in records:
            if isinstance(record, Mapping):
                name = record.get("name", record.get("Name"))
                confidence = record.get("confidence", record.get("Confidence"))
            elif isinstance(record, Sequence) and not isinstance(record, (str, bytes)) and len(record) == 2:
                name, confidence = record
            else:
                raise ValueError(f"Label record must be a mapping or a (name, confidence) pair: {record!r}")
            labels.append(Label(name, confidence))
        return cls(tuple(labels))

    @classmethod
    def from_payload(cls, payload: Any) -> "LabelSet":
        """Build a label set from a record list or a ``{"Labels": [...]}`` envelope."""
        if isinstance(payload, Mapping):
            records = payload.get("Labels", payload.get("labels"))
            if not isinstance(records, list):
                raise ValueError("Label payload must contain a 'Labels' list")
            return cls.from_records(records)
        if isinstance(payload, list):
            return cls.from_records(payload)
        raise ValueError(f"Unsupported label payload type: {type(payload).__name__}")


@dataclass(frozen=True, slots=True)
class EntityDefinition:
    """
    A registry entry describing one recognisable landmark.

    Example:
        EntityDefinition(
            primary_name="Eiffel Tower",
            alternative_names=frozenset({"Tour Eiffel"}),
            keywords=("eiffel", "tower", "paris"),
        )
    """
    primary_name: str
    """Display name; its normalized form is the canonical id"""

    alternative_names: frozenset[str] = field(default_factory=frozenset)
    """Other names the landmark is known by"""

    keywords: tuple[str, ...] = ()
    """Context words used by keyword matching"""

    @property
    def canonical_id(self) -> str:
        return normalize(self.primary_name)


@dataclass(frozen=True, slots=True)
class MatchResult:
    """
    Outcome of one pipeline run.

    ``canonical_id`` is always ``normalize(raw_name)`` for a match and "" for
    no match. ``similarity_score`` is only set by the similarity and keyword
    tiers.
    """
    matched: bool
    canonical_id: str
    raw_name: Optional[str]
    match_tier: MatchTier
    confidence: float
    similarity_score: Optional[float] = None

    @classmethod
    def matched_as(
        cls,
        raw_name: str,
        tier: MatchTier,
        confidence: float,
        similarity_score: Optional[float] = None,
    ) -> "MatchResult":
        if tier not in (MatchTier.SIMILARITY, MatchTier.KEYWORD):
            similarity_score = None
        return cls(
            matched=True,
            canonical_id=normalize(raw_name),
            raw_name=raw_name,
            match_tier=tier,
            confidence=confidence,
            similarity_score=similarity_score,
        )

    @classmethod
    def no_match(cls) -> "MatchResult":
        return cls(
            matched=False,
            canonical_id="",
            raw_name=None,
            match_tier=MatchTier.NONE,
            confidence=0,
        )

    def to_record(self) -> dict[str, object]:
        return {
            "matched": self.matched,
            "canonicalId": self.canonical_id,
            "rawName": self.raw_name,
            "matchTier": self.match_tier.value,
            "confidence": self.confidence,
            "similarityScore": self.similarity_score,
        }
