"""
Tests for per-question statistics

Covers population mean/standard deviation, the global standard deviation
as the mean of both dimensions, controversy tier boundaries, and fail-fast
handling of malformed collections.
"""

import math

import pytest

from database.models import Response
from exceptions import MalformedCollectionError
from opinions import classify_controversy, compute_question_stats
from tests.helpers import make_response


class TestInsufficientData:
    """No responses means no stats, not zero stats"""

    def test_empty_list_returns_none(self):
        assert compute_question_stats([]) is None

    def test_empty_generator_returns_none(self):
        assert compute_question_stats(r for r in []) is None


class TestAggregates:
    """Population estimators, computed per dimension"""

    def test_two_response_scenario(self):
        """(30,70) and (80,40): means 55/55, stds 25/15, global 20"""
        stats = compute_question_stats([
            make_response(30, 70, author_id="demo1"),
            make_response(80, 40, author_id="demo2"),
        ])

        assert stats.avg_agreement == pytest.approx(55)
        assert stats.avg_importance == pytest.approx(55)
        assert stats.std_dev_agreement == pytest.approx(25)
        assert stats.std_dev_importance == pytest.approx(15)
        assert stats.std_dev_global == pytest.approx(20)
        assert stats.response_count == 2

    def test_two_response_scenario_is_mixed(self):
        """20 is not > 20, so the tier falls through to mixed"""
        stats = compute_question_stats([make_response(30, 70), make_response(80, 40)])
        assert stats.controversy.key == "mixed"

    def test_population_not_sample_deviation(self):
        """Divides by N: [0, 10] has std 5, not 7.07"""
        stats = compute_question_stats([make_response(0, 50), make_response(10, 50)])
        assert stats.std_dev_agreement == pytest.approx(5)
        assert stats.std_dev_importance == pytest.approx(0)

    def test_single_response_has_zero_spread(self):
        stats = compute_question_stats([make_response(42, 17)])
        assert stats.avg_agreement == pytest.approx(42)
        assert stats.avg_importance == pytest.approx(17)
        assert stats.std_dev_global == 0
        assert stats.controversy.key == "consensus"

    def test_global_is_mean_of_dimensions_not_pooled(self):
        """Global = (sd_a + sd_i) / 2 exactly, for a range of response sets"""
        response_sets = [
            [(0, 0), (100, 100)],
            [(10, 90), (20, 80), (35, 5)],
            [(50, 50), (50, 50), (50, 51)],
            [(1, 99), (99, 1), (50, 50), (25, 75)],
            [(12.5, 33.3), (87.1, 2.0), (44.4, 66.6), (0, 100), (100, 0)],
        ]
        for pairs in response_sets:
            stats = compute_question_stats([make_response(a, i) for a, i in pairs])
            assert stats.std_dev_agreement >= 0
            assert stats.std_dev_importance >= 0
            assert stats.std_dev_global == (
                stats.std_dev_agreement + stats.std_dev_importance
            ) / 2

    def test_accepts_response_models(self):
        """Stored Response objects work the same as mappings"""
        from datetime import datetime

        responses = [
            Response(id="r1", question_id="q1", author_id="a", agreement=30,
                     importance=70, created_at=datetime.now()),
            Response(id="r2", question_id="q1", author_id="b", agreement=80,
                     importance=40, created_at=datetime.now()),
        ]
        stats = compute_question_stats(responses)
        assert stats.std_dev_global == pytest.approx(20)

    def test_to_dict_carries_tier_metadata(self):
        stats = compute_question_stats([make_response(0, 0), make_response(100, 100)])
        data = stats.to_dict()
        assert data["controversy"] == "very_controversial"
        assert data["controversy_tier"]["label"] == "Very controversial"
        assert data["response_count"] == 2


class TestControversyTiers:
    """Thresholds are evaluated top-down with strict greater-than"""

    def test_exactly_thirty_is_controversial(self):
        """[0,60] and [20,80] both have std 30 -> global 30.0"""
        stats = compute_question_stats([make_response(0, 20), make_response(60, 80)])
        assert stats.std_dev_global == pytest.approx(30)
        assert stats.controversy.key == "controversial"

    def test_exactly_ten_is_consensus(self):
        stats = compute_question_stats([make_response(40, 40), make_response(60, 60)])
        assert stats.std_dev_global == pytest.approx(10)
        assert stats.controversy.key == "consensus"

    def test_above_thirty_is_very_controversial(self):
        stats = compute_question_stats([make_response(0, 0), make_response(100, 100)])
        assert stats.std_dev_global == pytest.approx(50)
        assert stats.controversy.key == "very_controversial"

    @pytest.mark.parametrize("score,expected", [
        (0, "consensus"),
        (10, "consensus"),
        (10.01, "mixed"),
        (20, "mixed"),
        (20.01, "controversial"),
        (30, "controversial"),
        (30.01, "very_controversial"),
        (70, "very_controversial"),
    ])
    def test_classify_controversy(self, score, expected):
        assert classify_controversy(score).key == expected


class TestMalformedCollections:
    """Bad shapes fail fast and name the collection"""

    def test_string_is_rejected(self):
        with pytest.raises(MalformedCollectionError) as exc_info:
            compute_question_stats("not responses")
        assert exc_info.value.collection == "responses"

    def test_none_is_rejected(self):
        with pytest.raises(MalformedCollectionError):
            compute_question_stats(None)

    def test_non_iterable_is_rejected(self):
        with pytest.raises(MalformedCollectionError):
            compute_question_stats(42)

    def test_missing_field_is_rejected(self):
        with pytest.raises(MalformedCollectionError) as exc_info:
            compute_question_stats([make_response(10, 10), {"agreement": 5}])
        assert exc_info.value.index == 1
        assert "importance" in str(exc_info.value)

    def test_non_numeric_field_is_rejected(self):
        with pytest.raises(MalformedCollectionError):
            compute_question_stats([make_response("high", 10)])

    def test_boolean_field_is_rejected(self):
        with pytest.raises(MalformedCollectionError):
            compute_question_stats([make_response(True, 10)])

    def test_nan_is_rejected(self):
        with pytest.raises(MalformedCollectionError):
            compute_question_stats([make_response(math.nan, 10)])

    def test_mixed_questions_are_rejected(self):
        with pytest.raises(MalformedCollectionError) as exc_info:
            compute_question_stats([
                make_response(10, 10, question_id="q1"),
                make_response(20, 20, question_id="q2"),
            ])
        assert "more than one question" in str(exc_info.value)
