"""
Unit Tests for Adaptation Components
====================================

Test Coverage:
- AdaptationCatalog: default profiles, isolation, lookups
- similarity_score / AdaptationSelector: scoring, threshold, tie-break,
  bounded history, reference scenarios
- FeedbackLearner: confidence updates and bounds
- evaluate_target: neuro-feedback target status
- state_flags: mental-state flags

Run tests:
    pytest tests/unit/test_adaptation.py -v
"""

import pytest

from neurosync.core.data_types import (
    METRIC_NAMES, AdaptationDescriptor, AdaptationProfile, MetricVector,
    UIComplexity, ColorScheme, AnimationIntensity, InteractionStyle,
    ContentDensity, CognitiveSupport,
)
from neurosync.adaptation import (
    AdaptationCatalog, AdaptationSelector, FeedbackLearner, default_profiles,
    evaluate_target, similarity_score, state_flags,
)


# =============================================================================
# TEST FIXTURES
# =============================================================================

@pytest.fixture
def catalog():
    return AdaptationCatalog()


@pytest.fixture
def selector(catalog):
    return AdaptationSelector(catalog)


@pytest.fixture
def descriptor():
    return AdaptationDescriptor(
        ui_complexity=UIComplexity.STANDARD,
        color_scheme=ColorScheme.NORMAL,
        animation_intensity=AnimationIntensity.NORMAL,
        interaction_style=InteractionStyle.STANDARD,
        content_density=ContentDensity.NORMAL,
        cognitive_support=CognitiveSupport.MEDIUM,
    )


def uniform(value):
    return MetricVector(**{name: value for name in METRIC_NAMES})


# =============================================================================
# CATALOG TESTS
# =============================================================================

class TestAdaptationCatalog:
    """Test suite for the profile catalog."""

    def test_default_profiles(self, catalog):
        assert catalog.ids() == ["high-cognitive-load", "flow-state", "low-attention", "fatigue", "relaxed"]
        for profile in catalog:
            assert isinstance(profile.trigger, MetricVector)
            assert isinstance(profile.descriptor, AdaptationDescriptor)
            assert 0.1 <= profile.confidence <= 0.95

    def test_high_cognitive_load_definition(self, catalog):
        profile = catalog.get("high-cognitive-load")
        assert profile.trigger.cognitive_load == 0.8
        assert profile.trigger.stress == 0.7
        assert profile.trigger.attention == 0.5
        assert profile.descriptor.as_dict() == {
            "ui_complexity": "minimal",
            "color_scheme": "high-contrast",
            "animation_intensity": "none",
            "interaction_style": "passive",
            "content_density": "sparse",
            "cognitive_support": "high",
        }

    def test_catalogs_do_not_share_profiles(self):
        a = AdaptationCatalog()
        b = AdaptationCatalog()
        a.get("fatigue").confidence = 0.2
        assert b.get("fatigue").confidence == 0.75
        assert default_profiles()[0] is not default_profiles()[0]

    def test_duplicate_ids_rejected(self, descriptor):
        profile = AdaptationProfile("dup", MetricVector(), descriptor)
        with pytest.raises(ValueError):
            AdaptationCatalog([profile, AdaptationProfile("dup", MetricVector(), descriptor)])

    def test_lookup(self, catalog):
        assert "relaxed" in catalog
        assert "missing" not in catalog
        assert catalog.get("missing") is None
        assert len(catalog) == 5

    def test_confidence_clamped_at_construction(self, descriptor):
        assert AdaptationProfile("x", MetricVector(), descriptor, confidence=2.0).confidence == 0.95
        assert AdaptationProfile("x", MetricVector(), descriptor, confidence=-1.0).confidence == 0.1


# =============================================================================
# SELECTOR TESTS
# =============================================================================

class TestSimilarityScore:
    """Test suite for the weighted similarity."""

    def test_identical_vectors(self):
        assert similarity_score(uniform(0.3), uniform(0.3)) == pytest.approx(1.0)

    def test_opposite_vectors(self):
        assert similarity_score(uniform(0.0), uniform(1.0)) == pytest.approx(0.0)

    def test_weighting(self):
        # flow carries the largest weight, meditation the smallest
        flow_off = similarity_score(MetricVector(flow=1.0), MetricVector(flow=0.0))
        meditation_off = similarity_score(MetricVector(meditation=1.0), MetricVector(meditation=0.0))
        assert flow_off < meditation_off
        assert flow_off == pytest.approx(1 - 1.4 / 9.1)


class TestAdaptationSelector:
    """Test suite for adaptation selection."""

    def test_high_cognitive_load_scenario(self, selector):
        metrics = MetricVector(attention=0.9, cognitive_load=0.85, stress=0.8)
        profile = selector.select(metrics)
        assert profile is not None
        assert profile.profile_id == "high-cognitive-load"
        scores = dict((p.profile_id, s) for p, s in selector.score_all(metrics))
        assert scores["high-cognitive-load"] > 0.6
        assert scores["high-cognitive-load"] == max(scores.values())

    def test_flow_state_beats_fatigue(self, selector):
        metrics = MetricVector(flow=0.85, attention=0.75, engagement=0.8)
        scores = dict((p.profile_id, s) for p, s in selector.score_all(metrics))
        assert scores["flow-state"] > scores["fatigue"]
        assert selector.select(metrics).profile_id == "flow-state"

    def test_nothing_above_threshold_returns_none(self, selector):
        metrics = uniform(0.0)
        assert all(score <= 0.6 for _, score in selector.score_all(metrics))
        assert selector.select(metrics) is None
        assert selector.get_history() == []

    def test_neutral_vector_scores_moderately(self, selector):
        # Default triggers differ from neutral by at most 0.3 per metric
        scores = [s for _, s in selector.score_all(MetricVector())]
        assert all(0.85 < s < 1.0 for s in scores)

    def test_neutral_vector_below_raised_threshold(self, catalog):
        strict = AdaptationSelector(catalog, threshold=0.97)
        assert strict.select(MetricVector()) is None

    def test_tie_breaks_by_declaration_order(self, descriptor):
        trigger = MetricVector(attention=0.9)
        catalog = AdaptationCatalog([
            AdaptationProfile("first", trigger, descriptor),
            AdaptationProfile("second", trigger, descriptor),
        ])
        assert AdaptationSelector(catalog).select(trigger).profile_id == "first"

    def test_threshold_is_strict(self, descriptor):
        catalog = AdaptationCatalog([AdaptationProfile("only", uniform(0.0), descriptor)])
        # uniform(0.5) against uniform(0.0) scores exactly 0.5
        assert AdaptationSelector(catalog, threshold=0.5).select(uniform(0.5)) is None

    def test_selection_records_event(self, selector):
        metrics = MetricVector(attention=0.9, cognitive_load=0.85, stress=0.8)
        profile = selector.select(metrics, timestamp=123.0)
        event = selector.get_history()[-1]
        assert event.profile.profile_id == profile.profile_id
        assert event.metrics == metrics
        assert event.timestamp == 123.0
        assert event.score > 0.6

    def test_snapshot_is_independent(self, selector, catalog):
        profile = selector.select(MetricVector(cognitive_load=0.8, stress=0.7))
        profile.confidence = 0.1
        assert catalog.get("high-cognitive-load").confidence == 0.9
        assert selector.get_history()[-1].profile.confidence == 0.9

    def test_history_entries_are_copies(self, selector):
        selector.select(MetricVector(cognitive_load=0.8, stress=0.7), timestamp=1.0)
        selector.get_history()[-1].profile.confidence = 7.0
        assert selector.get_history()[-1].profile.confidence == 0.9
        assert selector.get_history()[-1].timestamp == 1.0

    def test_history_bounded_oldest_evicted(self, catalog):
        selector = AdaptationSelector(catalog, history_limit=3)
        metrics = MetricVector(cognitive_load=0.8, stress=0.7)
        for t in range(5):
            selector.select(metrics, timestamp=float(t))
        assert [e.timestamp for e in selector.get_history()] == [2.0, 3.0, 4.0]

    def test_default_history_limit(self, selector):
        metrics = MetricVector(cognitive_load=0.8, stress=0.7)
        for t in range(150):
            selector.select(metrics, timestamp=float(t))
        history = selector.get_history()
        assert len(history) == 100
        assert history[0].timestamp == 50.0


# =============================================================================
# FEEDBACK LEARNER TESTS
# =============================================================================

class TestFeedbackLearner:
    """Test suite for online confidence learning."""

    def test_positive_feedback(self, catalog):
        learner = FeedbackLearner(catalog)
        learner.apply_feedback("relaxed", 1.0)
        assert catalog.get("relaxed").confidence == pytest.approx(0.75)

    def test_negative_feedback(self, catalog):
        learner = FeedbackLearner(catalog)
        learner.apply_feedback("relaxed", 0.0)
        assert catalog.get("relaxed").confidence == pytest.approx(0.65)

    def test_neutral_feedback(self, catalog):
        FeedbackLearner(catalog).apply_feedback("fatigue", 0.5)
        assert catalog.get("fatigue").confidence == pytest.approx(0.75)

    def test_upper_bound(self, catalog):
        learner = FeedbackLearner(catalog)
        for _ in range(100):
            learner.apply_feedback("flow-state", 1.0)
            assert catalog.get("flow-state").confidence <= 0.95
        assert catalog.get("flow-state").confidence == 0.95

    def test_lower_bound(self, catalog):
        learner = FeedbackLearner(catalog)
        for _ in range(100):
            learner.apply_feedback("flow-state", 0.0)
            assert catalog.get("flow-state").confidence >= 0.1
        assert catalog.get("flow-state").confidence == 0.1

    def test_unknown_profile_is_noop(self, catalog):
        before = [p.confidence for p in catalog]
        FeedbackLearner(catalog).apply_feedback("no-such-profile", 1.0)
        assert [p.confidence for p in catalog] == before

    def test_out_of_range_effectiveness_clamped(self, catalog):
        FeedbackLearner(catalog).apply_feedback("relaxed", 7.0)
        assert catalog.get("relaxed").confidence == pytest.approx(0.75)

    @pytest.mark.parametrize("rating", [float('nan'), "great", None])
    def test_invalid_effectiveness_ignored(self, catalog, rating):
        FeedbackLearner(catalog).apply_feedback("relaxed", rating)
        assert catalog.get("relaxed").confidence == pytest.approx(0.7)

    def test_custom_learning_rate(self, catalog):
        FeedbackLearner(catalog, learning_rate=0.5).apply_feedback("relaxed", 0.7)
        assert catalog.get("relaxed").confidence == pytest.approx(0.8)


# =============================================================================
# TARGET TESTS
# =============================================================================

class TestEvaluateTarget:
    """Test suite for neuro-feedback targets."""

    def test_on_target(self):
        status = evaluate_target(MetricVector(attention=0.75), "attention", target=0.8)
        assert status.on_target
        assert status.direction == "on-target"
        assert status.difference == pytest.approx(-0.05)

    def test_above(self):
        status = evaluate_target(MetricVector(flow=0.95), "flow", target=0.7)
        assert not status.on_target
        assert status.direction == "above"

    def test_below(self):
        status = evaluate_target(MetricVector(), "relaxation")
        assert status.direction == "below"
        assert status.value == 0.5
        assert status.target == 0.8

    def test_unknown_metric(self):
        with pytest.raises(ValueError):
            evaluate_target(MetricVector(), "happiness")


class TestStateFlags:
    """Test suite for mental-state flags."""

    def test_neutral_metrics_raise_no_flags(self):
        assert state_flags(MetricVector()) == {
            "high_cognitive_load": False,
            "in_flow_state": False,
            "needs_attention_support": False,
            "fatigued": False,
        }

    def test_all_flags(self):
        metrics = MetricVector(cognitive_load=0.75, flow=0.8, attention=0.2, fatigue=0.65)
        assert all(state_flags(metrics).values())

    def test_levels_are_exclusive(self):
        metrics = MetricVector(cognitive_load=0.7, flow=0.7, attention=0.4, fatigue=0.6)
        assert not any(state_flags(metrics).values())
