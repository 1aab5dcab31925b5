# tests/test_scoring_stages.py
"""
Unit tests for the individual scoring stages:
axis normalization, band classification, domain weighting and the
relational-state penalty / label classifier.
"""

from decimal import Decimal

import pytest

from app.core.exceptions import AggregationPreconditionError
from app.models.enumerations import Band, OverallLabel, RelationalState
from app.scoring.axis_normalizer import normalize_axis_score
from app.scoring.bands import BandDistribution, band_distribution, score_to_band
from app.scoring.domain_weighting import (
    BASE_WEIGHT,
    PRIORITY_WEIGHT,
    AggregationResult,
    DomainWeightingAggregator,
)
from app.scoring.penalty_classifier import (
    RELATIONAL_PENALTIES,
    PenaltyClassifier,
    derive_overall_label,
    resolve_relational_state,
)
from app.scoring.utils import clamp, coerce_number, round_half_up, weighted_mean

from conftest import ALL_DIMENSION_IDS, make_dimensions


# =============================================================================
# UTILITIES
# =============================================================================

class TestUtils:

    def test_round_half_up_at_point_five(self):
        assert round_half_up(Decimal("46.5")) == 47
        assert round_half_up(Decimal("46.4999")) == 46
        assert round_half_up(Decimal("0.5")) == 1

    def test_clamp_defaults_to_0_100(self):
        assert clamp(Decimal("-4")) == Decimal("0")
        assert clamp(Decimal("104")) == Decimal("100")
        assert clamp(Decimal("42")) == Decimal("42")

    @pytest.mark.parametrize("value,expected", [
        (2, 2), (-1.5, -1.5), ("3", 3.0), (" -2.5 ", -2.5),
        ("abc", None), (None, None), (True, None), (float("inf"), None), ({}, None),
    ])
    def test_coerce_number(self, value, expected):
        assert coerce_number(value) == expected

    def test_weighted_mean_empty_raises(self):
        with pytest.raises(ValueError):
            weighted_mean([], [])

    def test_weighted_mean(self):
        result = weighted_mean([Decimal("100"), Decimal("50")], [Decimal("2"), Decimal("1")])
        assert result == Decimal("83.3333")

    def test_weighted_mean_unquantized(self):
        result = weighted_mean([Decimal("100"), Decimal("50")], [Decimal("2"), Decimal("1")], places=None)
        assert result > Decimal("83.3333")
        assert result.quantize(Decimal("0.0001")) == Decimal("83.3333")


# =============================================================================
# AXIS NORMALIZATION
# =============================================================================

class TestAxisNormalizer:

    @pytest.mark.parametrize("raw,expected", [
        (-3, Decimal("0")),
        (0, Decimal("50")),
        (3, Decimal("100")),
        (1, Decimal("66.6667")),
        (-1, Decimal("33.3333")),
        (1.5, Decimal("75")),
    ])
    def test_anchor_points(self, raw, expected):
        assert normalize_axis_score(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        (7, Decimal("100")), (-10, Decimal("0")), (3.01, Decimal("100")),
    ])
    def test_out_of_range_is_clamped(self, raw, expected):
        assert normalize_axis_score(raw) == expected

    def test_precision(self):
        assert normalize_axis_score(2).as_tuple().exponent == -4


# =============================================================================
# BANDS
# =============================================================================

class TestBands:

    @pytest.mark.parametrize("score,band", [
        (-3, Band.STRONG_NEGATIVE),
        (-2, Band.STRONG_NEGATIVE),
        (-1.9, Band.MILD_NEGATIVE),
        (-0.5, Band.MILD_NEGATIVE),
        (-0.4, Band.NEUTRAL),
        (0, Band.NEUTRAL),
        (0.5, Band.NEUTRAL),
        (0.6, Band.MILD_POSITIVE),
        (2, Band.MILD_POSITIVE),
        (2.1, Band.STRONG_POSITIVE),
        (3, Band.STRONG_POSITIVE),
    ])
    def test_thresholds(self, score, band):
        assert score_to_band(score) == band

    def test_distribution(self):
        dist = band_distribution([3, 1, 0, 0.5, -1, -3])
        assert dist == BandDistribution(positive=2, negative=2, neutral=2)
        assert dist.total == 6

    def test_empty_distribution(self):
        assert band_distribution([]).total == 0


# =============================================================================
# DOMAIN WEIGHTING
# =============================================================================

class TestDomainWeighting:

    def test_priority_dimensions_get_double_weight(self, default_config):
        aggregator = DomainWeightingAggregator(default_config)
        dims = make_dimensions({d: 0 for d in ALL_DIMENSION_IDS})

        weights = aggregator.compute_weights("sales_email", dims)

        priority = set(default_config.get_domain("sales_email").priority_dimensions)
        for dim_id, weight in weights.items():
            expected = PRIORITY_WEIGHT if dim_id in priority else BASE_WEIGHT
            assert weight == expected
        assert sum(1 for w in weights.values() if w == PRIORITY_WEIGHT) == 4

    def test_unknown_domain_weights_everything_equally(self, default_config):
        aggregator = DomainWeightingAggregator(default_config)
        dims = make_dimensions({d: 1 for d in ALL_DIMENSION_IDS})

        result = aggregator.aggregate("podcast", dims)

        assert not result.domain_known
        assert result.priority_dimensions == ()
        assert all(w.weight == BASE_WEIGHT for w in result.weighted_scores)

    def test_priority_pulls_mean_toward_priority_scores(self, default_config):
        aggregator = DomainWeightingAggregator(default_config)
        # assumptive_state is a generic priority dimension
        dims = make_dimensions({"assumptive_state": 3, "identity_vs_tactic": -3})

        result = aggregator.aggregate("generic", dims)

        # (100*2 + 0*1) / 3
        assert result.weighted_mean == Decimal("66.6667")
        assert result.unrounded_mean == Decimal(200) / Decimal(3)

    def test_breakdown_preserves_input_order(self, default_config):
        aggregator = DomainWeightingAggregator(default_config)
        dims = make_dimensions({"field_strength": 1, "internal_sale": 2, "pedestalization": 3})

        result = aggregator.aggregate("generic", dims)

        assert [w.dimension_id for w in result.weighted_scores] == [
            "field_strength", "internal_sale", "pedestalization"
        ]

    def test_weighted_score_to_dict(self, default_config):
        aggregator = DomainWeightingAggregator(default_config)
        result = aggregator.aggregate("generic", make_dimensions({"assumptive_state": 0}))

        assert result.weighted_scores[0].to_dict() == {
            "dimensionId": "assumptive_state",
            "normalizedScore": 50.0,
            "weight": 2,
        }

    def test_out_of_range_raw_clamped_only_in_aggregation(self, default_config):
        aggregator = DomainWeightingAggregator(default_config)
        dims = make_dimensions({"field_strength": 9})

        result = aggregator.aggregate("generic", dims)

        assert result.weighted_scores[0].normalized_score == Decimal("100")
        assert dims[0]["score"] == 9

    def test_empty_dimensions_raise(self, default_config):
        aggregator = DomainWeightingAggregator(default_config)
        with pytest.raises(AggregationPreconditionError) as exc_info:
            aggregator.aggregate("generic", [])
        assert exc_info.value.domain == "generic"

    def test_custom_config_swaps_priorities(self, small_config):
        aggregator = DomainWeightingAggregator(small_config)
        dims = make_dimensions({"clarity": 0, "confidence": 3, "warmth": 0})

        result = aggregator.aggregate("pitch", dims)

        # (50 + 100*2 + 50) / 4
        assert result.weighted_mean == Decimal("75")
        assert result.priority_dimensions == ("confidence",)


# =============================================================================
# PENALTY & CLASSIFICATION
# =============================================================================

class TestRelationalState:

    def test_penalty_table(self):
        assert RELATIONAL_PENALTIES == {
            RelationalState.WIN_WIN: 0,
            RelationalState.NEUTRAL: 5,
            RelationalState.WIN_LOSE: 15,
            RelationalState.LOSE_LOSE: 30,
        }

    @pytest.mark.parametrize("value", ["win_win", "neutral", "win_lose", "lose_lose"])
    def test_known_states_resolve(self, value):
        state, recognised = resolve_relational_state(value)
        assert state.value == value
        assert recognised

    @pytest.mark.parametrize("value", ["frenemies", "WIN_WIN", ""])
    def test_unknown_state_falls_back_to_neutral(self, value):
        state, recognised = resolve_relational_state(value)
        assert state == RelationalState.NEUTRAL
        assert not recognised


class TestOverallLabel:

    def test_positive_requires_score_and_majority(self):
        dist = BandDistribution(positive=5, negative=2, neutral=2)
        assert derive_overall_label(70, dist) == OverallLabel.POSITIVE
        assert derive_overall_label(69, dist) == OverallLabel.MIXED

    def test_negative_requires_score_and_majority(self):
        dist = BandDistribution(positive=1, negative=6, neutral=2)
        assert derive_overall_label(30, dist) == OverallLabel.NEGATIVE
        assert derive_overall_label(31, dist) == OverallLabel.MIXED

    def test_high_score_without_majority_is_mixed(self):
        dist = BandDistribution(positive=4, negative=0, neutral=5)
        assert derive_overall_label(90, dist) == OverallLabel.MIXED

    def test_exact_tie_is_mixed(self):
        dist = BandDistribution(positive=2, negative=0, neutral=2)
        assert derive_overall_label(85, dist) == OverallLabel.MIXED

    def test_empty_distribution_is_mixed(self):
        assert derive_overall_label(100, BandDistribution(0, 0, 0)) == OverallLabel.MIXED


class TestPenaltyClassifier:

    def _classify(self, config, scores, domain, state):
        dims = make_dimensions(scores)
        aggregation = DomainWeightingAggregator(config).aggregate(domain, dims)
        return PenaltyClassifier().classify(aggregation, state, dims)

    @pytest.mark.parametrize("state,penalty", [
        ("win_win", 0), ("neutral", 5), ("win_lose", 15), ("lose_lose", 30),
    ])
    def test_penalty_subtracted(self, default_config, state, penalty):
        result = self._classify(
            default_config, {d: 0 for d in ALL_DIMENSION_IDS}, "generic", state
        )
        assert result.penalty == penalty
        assert result.final_score == 50 - penalty

    def test_final_score_clamped_at_zero(self, default_config):
        result = self._classify(
            default_config, {d: -3 for d in ALL_DIMENSION_IDS}, "generic", "lose_lose"
        )
        assert result.final_score == 0
        assert result.pre_penalty_score == Decimal("0")

    def test_notes_order(self, default_config):
        result = self._classify(
            default_config, {d: 0 for d in ALL_DIMENSION_IDS}, "generic", "neutral"
        )
        assert result.notes[0] == "Base score before relational-state penalty: 50.0"
        assert result.notes[1] == "Penalty applied: -5 (relational state: neutral)"
        assert result.notes[2] == "Final score after penalty: 45"
        assert result.notes[3] == "Domain: generic"
        assert result.notes[4] == (
            "Priority dimensions for domain: "
            "assumptive_state, buyer_seller_position, win_win_integrity"
        )
        assert result.notes[5] == "Band distribution: 0 positive, 0 negative, 9 neutral"
        assert len(result.notes) == 6

    def test_unknown_state_and_domain_add_warnings(self, default_config):
        result = self._classify(
            default_config, {d: 0 for d in ALL_DIMENSION_IDS}, "podcast", "frenemies"
        )
        assert result.relational_state == RelationalState.NEUTRAL
        assert result.penalty == 5
        assert "Priority dimensions for domain: none" in result.notes
        assert any("unknown relational state 'frenemies'" in n for n in result.notes)
        assert any("unknown domain 'podcast'" in n for n in result.notes)

    def test_final_score_rounds_the_unquantized_mean_once(self):
        # 52.49996 quantizes to 52.5000; rounding that again after the
        # penalty would give 48 instead of 47
        aggregation = AggregationResult(
            domain="generic",
            domain_known=True,
            priority_dimensions=(),
            weighted_scores=(),
            weighted_mean=Decimal("52.5000"),
            unrounded_mean=Decimal("52.49996"),
        )

        result = PenaltyClassifier().classify(aggregation, "neutral", [])

        assert result.final_score == 47
        assert result.pre_penalty_score == Decimal("52.5000")
        assert result.notes[0] == "Base score before relational-state penalty: 52.5"
        assert result.notes[2] == "Final score after penalty: 47"
