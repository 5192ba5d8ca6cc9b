"""
Tier evaluator behaviour with small, hand-built registries.
"""

import unittest
from typing import Optional

from landmark_resolver.config import MatchingSettings, PipelineSettings, Settings
from landmark_resolver.core.classifier import LandmarkLabelClassifier
from landmark_resolver.core.models import EntityDefinition, LabelSet, MatchTier
from landmark_resolver.pipeline import (
    DEFAULT_TIER_ORDER,
    MatchContext,
    MatchPipeline,
    TierMatch,
)
from landmark_resolver.pipeline.plugins.alternative import AlternativeNameEvaluator
from landmark_resolver.pipeline.plugins.exact import ExactNameEvaluator
from landmark_resolver.pipeline.plugins.generic import GenericLandmarkEvaluator
from landmark_resolver.pipeline.plugins.keyword import KeywordContextEvaluator
from landmark_resolver.pipeline.plugins.similarity import (
    NameSimilarityEvaluator,
    definition_similarity,
)
from landmark_resolver.registry import EntityRegistry


def _registry() -> EntityRegistry:
    return EntityRegistry(
        [
            EntityDefinition("Big Ben", frozenset({"Elizabeth Tower"}), ("clock", "london", "bell")),
            EntityDefinition("Tower Bridge", frozenset(), ("bridge", "london", "thames")),
            EntityDefinition("Colosseum", frozenset({"Coliseum"}), ("rome", "amphitheatre")),
        ]
    )


def _context(*pairs, settings: Optional[MatchingSettings] = None) -> MatchContext:
    return MatchContext(
        labels=LabelSet.of(*pairs),
        registry=_registry(),
        classifier=LandmarkLabelClassifier(),
        settings=settings or MatchingSettings(),
    )


class TestExactNameEvaluator(unittest.TestCase):
    def test_threshold_is_inclusive(self):
        found = ExactNameEvaluator().attempt(_context(("big ben", 75.0)))
        self.assertEqual(found, TierMatch(raw_name="Big Ben", confidence=75.0))

    def test_below_threshold(self):
        self.assertIsNone(ExactNameEvaluator().attempt(_context(("Big Ben", 74.9))))

    def test_first_label_wins(self):
        found = ExactNameEvaluator().attempt(_context(("Colosseum", 80.0), ("Big Ben", 99.0)))
        self.assertEqual(found.raw_name, "Colosseum")


class TestAlternativeNameEvaluator(unittest.TestCase):
    def test_returns_primary_name(self):
        found = AlternativeNameEvaluator().attempt(_context(("ELIZABETH TOWER", 88.0)))
        self.assertEqual(found, TierMatch(raw_name="Big Ben", confidence=88.0))

    def test_ignores_primary_names(self):
        self.assertIsNone(AlternativeNameEvaluator().attempt(_context(("Big Ben", 99.0))))


class TestNameSimilarityEvaluator(unittest.TestCase):
    def test_definition_similarity_uses_alternatives(self):
        definition = _registry().get("bigben")
        self.assertEqual(definition_similarity("Elizabeth Tower", definition), 1.0)

    def test_picks_highest_combined_score(self):
        # "Big Ben Tower": Big Ben 6/11 -> 0.7, "Elizabeth Tower" no
        # "The Colosseum": 9/12 = 0.75
        found = NameSimilarityEvaluator().attempt(
            _context(("Big Ben Tower", 100.0), ("The Colosseum", 90.0))
        )
        # 0.7 * 1.00 = 0.700 beats 0.75 * 0.90 = 0.675
        self.assertEqual(found.raw_name, "Big Ben")
        self.assertAlmostEqual(found.score, 0.7)
        self.assertEqual(found.confidence, 100.0)

    def test_confidence_floor(self):
        self.assertIsNone(NameSimilarityEvaluator().attempt(_context(("The Colosseum", 69.9))))

    def test_score_floor(self):
        settings = MatchingSettings(similarity_min_score=0.8)
        self.assertIsNone(NameSimilarityEvaluator().attempt(_context(("The Colosseum", 90.0), settings=settings)))


class TestKeywordContextEvaluator(unittest.TestCase):
    def test_requires_strong_landmark_label(self):
        # "London Clock" is not landmark related, so the tier never starts.
        self.assertIsNone(KeywordContextEvaluator().attempt(_context(("London Clock", 99.0))))

    def test_scores_candidate_against_keywords(self):
        found = KeywordContextEvaluator().attempt(
            _context(("Monument", 95.0), ("London Clock", 90.0))
        )
        # Big Ben: clock + london = 2/3
        self.assertEqual(found.raw_name, "Big Ben")
        self.assertAlmostEqual(found.score, 2 / 3)
        self.assertEqual(found.confidence, 90.0)

    def test_candidate_must_be_confident(self):
        self.assertIsNone(
            KeywordContextEvaluator().attempt(_context(("Monument", 95.0), ("London Clock", 74.0)))
        )

    def test_minimum_score(self):
        # Tower Bridge: london = 1/3; Big Ben: london = 1/3; both above 0.3
        found = KeywordContextEvaluator().attempt(_context(("Monument", 95.0), ("London Street", 90.0)))
        self.assertEqual(found.raw_name, "Big Ben")
        settings = MatchingSettings(keyword_min_score=0.5)
        self.assertIsNone(
            KeywordContextEvaluator().attempt(
                _context(("Monument", 95.0), ("London Street", 90.0), settings=settings)
            )
        )


class TestGenericLandmarkEvaluator(unittest.TestCase):
    def test_needs_two_strong_landmark_labels(self):
        self.assertIsNone(GenericLandmarkEvaluator().attempt(_context(("Old Fortress", 95.0))))
        self.assertIsNone(
            GenericLandmarkEvaluator().attempt(_context(("Old Fortress", 95.0), ("Stone Arch Bridge", 84.0)))
        )

    def test_skips_generic_terms(self):
        found = GenericLandmarkEvaluator().attempt(
            _context(("Monument", 99.0), ("Old Fortress", 90.0))
        )
        self.assertEqual(found, TierMatch(raw_name="Old Fortress", confidence=90.0))

    def test_equal_confidence_keeps_first(self):
        found = GenericLandmarkEvaluator().attempt(
            _context(("Old Fortress", 90.0), ("Stone Arch Bridge", 90.0))
        )
        self.assertEqual(found.raw_name, "Old Fortress")


class _StaticEvaluator:
    name = "static"
    tier = MatchTier.GENERIC

    def __init__(self, raw_name: str) -> None:
        self.raw_name = raw_name

    def attempt(self, ctx: MatchContext) -> Optional[TierMatch]:
        return TierMatch(raw_name=self.raw_name, confidence=50.0)


class _FailingEvaluator:
    name = "failing"
    tier = MatchTier.EXACT

    def attempt(self, ctx: MatchContext) -> Optional[TierMatch]:
        raise RuntimeError("catalog lookup failed")


class TestMatchPipeline(unittest.TestCase):
    def test_default_order(self):
        pipeline = MatchPipeline(_registry())
        self.assertEqual(tuple(e.name for e in pipeline.evaluators), DEFAULT_TIER_ORDER)

    def test_disabled_tiers(self):
        settings = Settings(pipeline=PipelineSettings(disabled_tiers=["exact_name"]))
        pipeline = MatchPipeline(_registry(), settings)
        self.assertNotIn("exact_name", [e.name for e in pipeline.evaluators])
        result = pipeline.match(LabelSet.of(("Big Ben", 96.0)))
        self.assertEqual(result.match_tier, MatchTier.SIMILARITY)
        self.assertEqual(result.similarity_score, 1.0)

    def test_injected_evaluators(self):
        pipeline = MatchPipeline(_registry(), evaluators=[_StaticEvaluator("Mystery Tower")])
        result = pipeline.match(LabelSet.of(("Anything", 10.0)))
        self.assertEqual(result.canonical_id, "mysterytower")
        self.assertEqual(result.match_tier, MatchTier.GENERIC)

    def test_failing_tier_stops_the_cascade(self):
        pipeline = MatchPipeline(
            _registry(),
            evaluators=[_FailingEvaluator(), _StaticEvaluator("Mystery Tower")],
        )
        with self.assertLogs("landmark_resolver.pipeline.core", level="ERROR"):
            with self.assertRaises(RuntimeError):
                pipeline.match(LabelSet.of(("Anything", 10.0)))

    def test_injected_classifier(self):
        classifier = LandmarkLabelClassifier(["lighthouse"], [])
        pipeline = MatchPipeline(_registry(), classifier=classifier)
        result = pipeline.match(LabelSet.of(("Old Lighthouse", 90.0), ("Red Lighthouse", 88.0)))
        self.assertEqual(result.match_tier, MatchTier.GENERIC)
        self.assertEqual(result.raw_name, "Old Lighthouse")

    def test_thresholds_from_settings(self):
        settings = Settings(matching=MatchingSettings(exact_min_confidence=95.0, similarity_min_confidence=95.0))
        result = MatchPipeline(_registry(), settings).match(LabelSet.of(("Big Ben", 90.0)))
        self.assertFalse(result.matched)

    def test_explain_marks_later_tiers_skipped(self):
        trace = MatchPipeline(_registry()).explain(LabelSet.of(("Coliseum", 90.0)))
        self.assertEqual(trace.result.match_tier, MatchTier.ALTERNATIVE)
        self.assertEqual(
            [(a.evaluator, a.outcome) for a in trace.attempts],
            [
                ("exact_name", "no_match"),
                ("alternative_name", "matched"),
                ("name_similarity", "skipped"),
                ("keyword_context", "skipped"),
                ("generic_landmark", "skipped"),
            ],
        )

    def test_explain_empty_label_set(self):
        trace = MatchPipeline(_registry()).explain(LabelSet())
        self.assertFalse(trace.result.matched)
        self.assertTrue(all(a.outcome == "skipped" for a in trace.attempts))

    def test_trace_record(self):
        record = MatchPipeline(_registry()).explain(LabelSet.of(("Dog", 99.0))).to_record()
        self.assertEqual(record["result"]["matchTier"], "none")
        self.assertEqual(len(record["attempts"]), 5)
        self.assertTrue(all(a["outcome"] == "no_match" for a in record["attempts"]))


if __name__ == "__main__":
    unittest.main()
