"""
Tests for individual-vs-group distance

Both classification policies are exercised independently: the card
policy (10/25/40) and the alignment policy (10/20/30) must not be merged.
"""

import math

import pytest

from exceptions import ValidationError
from opinions import (
    ALIGNMENT_POLICY,
    CARD_POLICY,
    classify_distance,
    compute_distance,
    compute_question_stats,
)
from tests.helpers import make_response


@pytest.fixture
def scenario_stats():
    """Mean point (55, 55)"""
    return compute_question_stats([make_response(30, 70), make_response(80, 40)])


class TestComputeDistance:

    def test_scenario_distance(self, scenario_stats):
        """(30,70) to (55,55) is sqrt(25^2 + 15^2) = sqrt(850)"""
        distance = compute_distance(make_response(30, 70), scenario_stats)
        assert distance == pytest.approx(math.sqrt(850))
        assert distance == pytest.approx(29.15, abs=0.01)

    def test_zero_at_the_mean(self, scenario_stats):
        assert compute_distance(make_response(55, 55), scenario_stats) == 0

    def test_single_responder_sits_on_the_mean(self):
        response = make_response(12, 88)
        stats = compute_question_stats([response])
        assert compute_distance(response, stats) == 0

    def test_no_stats_gives_zero(self):
        assert compute_distance(make_response(0, 100), None) == 0.0

    def test_missing_fields_fail_fast(self, scenario_stats):
        from exceptions import MalformedCollectionError

        with pytest.raises(MalformedCollectionError):
            compute_distance({"agreement": 10}, scenario_stats)


class TestCardPolicy:
    """< 10 aligned, < 25 moderate, < 40 different, else very_minority"""

    @pytest.mark.parametrize("distance,expected", [
        (0, "aligned"),
        (9.99, "aligned"),
        (10, "moderate"),
        (24.99, "moderate"),
        (25, "different"),
        (39.99, "different"),
        (40, "very_minority"),
        (141.4, "very_minority"),
    ])
    def test_bands(self, distance, expected):
        assert classify_distance(distance, policy=CARD_POLICY).key == expected

    def test_is_default_policy(self):
        assert classify_distance(24).key == "moderate"


class TestAlignmentPolicy:
    """< 10 mainstream, < 20 moderate_conformist, < 30 independent, else atypical"""

    @pytest.mark.parametrize("distance,expected", [
        (0, "mainstream"),
        (9.99, "mainstream"),
        (10, "moderate_conformist"),
        (19.99, "moderate_conformist"),
        (20, "independent"),
        (29.99, "independent"),
        (30, "atypical"),
    ])
    def test_bands(self, distance, expected):
        assert classify_distance(distance, policy=ALIGNMENT_POLICY).key == expected


class TestPoliciesStayIndependent:

    def test_same_distance_differs_by_policy(self):
        """22 is moderate on the card scale but independent on the alignment scale"""
        assert classify_distance(22, policy=CARD_POLICY).key == "moderate"
        assert classify_distance(22, policy=ALIGNMENT_POLICY).key == "independent"

    def test_unknown_policy_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            classify_distance(5, policy="strict")
        assert exc_info.value.field == "policy"
