"""Tier tables for controversy, cohesion and distance classification

Each classification is a step function over a single score. The tables
carry presentation metadata (label, icon, color, description) so the
rendering layer never recomputes a classification.

Two threshold directions exist:
- Controversy is evaluated top-down with strict greater-than
  (a score of exactly 30 is "controversial", not "very_controversial").
- Cohesion and distance are evaluated bottom-up with strict less-than
  (a score of exactly 30 falls through every band to the last tier).
"""

from dataclasses import asdict, dataclass
from typing import Dict, Sequence, Tuple

from exceptions import ValidationError


@dataclass(frozen=True)
class Tier:
    """One band of a classification"""

    key: str
    label: str
    icon: str
    color: str
    description: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


# Controversy: (lower bound, tier), highest first. Score must be > bound.
CONTROVERSY_TIERS: Tuple[Tuple[float, Tier], ...] = (
    (30.0, Tier("very_controversial", "Very controversial", "🔥", "red",
                "Responses are spread far apart")),
    (20.0, Tier("controversial", "Controversial", "⚡", "orange",
                "Responses diverge noticeably")),
    (10.0, Tier("mixed", "Mixed opinions", "🤔", "yellow",
                "Responses are moderately spread")),
)
CONSENSUS_TIER = Tier("consensus", "Consensus", "🤝", "green",
                      "Responses are close together")

# Cohesion: (upper bound, tier), lowest first. Score must be < bound.
COHESION_TIERS: Tuple[Tuple[float, Tier], ...] = (
    (10.0, Tier("very_strong", "Very strong", "💚", "green",
                "The group shares very similar opinions")),
    (20.0, Tier("strong", "Strong", "💙", "blue",
                "The group broadly holds close opinions")),
    (30.0, Tier("moderate", "Moderate", "🧡", "orange",
                "The group shows notable differences of opinion")),
)
WEAK_COHESION_TIER = Tier("weak", "Weak", "❤️", "red",
                          "The group is deeply divided on many topics")

# Distance policies. Both are kept: the question card and the group
# alignment readout use different bands.
CARD_POLICY = "card"
ALIGNMENT_POLICY = "alignment"

DISTANCE_POLICIES: Dict[str, Tuple[Tuple[Tuple[float, Tier], ...], Tier]] = {
    CARD_POLICY: (
        (
            (10.0, Tier("aligned", "Aligned with the average", "🎯", "green")),
            (25.0, Tier("moderate", "Moderate position", "📊", "blue")),
            (40.0, Tier("different", "Different position", "🔀", "orange")),
        ),
        Tier("very_minority", "Strongly minority position", "🌟", "purple"),
    ),
    ALIGNMENT_POLICY: (
        (
            (10.0, Tier("mainstream", "Mainstream", "🎯", "green",
                        "Your opinions are closely aligned with the group")),
            (20.0, Tier("moderate_conformist", "Moderate conformist", "📊", "blue",
                        "You broadly share the group's opinions")),
            (30.0, Tier("independent", "Independent", "🔀", "purple",
                        "Your opinions are distinct from the group")),
        ),
        Tier("atypical", "Atypical", "🌟", "pink",
             "Your opinions are very different from the majority"),
    ),
}


def tier_above(score: float, bands: Sequence[Tuple[float, Tier]], floor: Tier) -> Tier:
    """First tier whose bound the score strictly exceeds, checked top-down"""
    for bound, tier in bands:
        if score > bound:
            return tier
    return floor


def tier_below(score: float, bands: Sequence[Tuple[float, Tier]], ceiling: Tier) -> Tier:
    """First tier whose bound the score is strictly under, checked bottom-up"""
    for bound, tier in bands:
        if score < bound:
            return tier
    return ceiling


def get_distance_policy(policy: str) -> Tuple[Tuple[Tuple[float, Tier], ...], Tier]:
    """Look up a distance policy by name

    Raises:
        ValidationError: policy is not one of DISTANCE_POLICIES
    """
    try:
        return DISTANCE_POLICIES[policy]
    except KeyError:
        raise ValidationError(
            f"Unknown distance policy. Must be one of: {sorted(DISTANCE_POLICIES)}",
            field="policy",
            value=policy,
        ) from None
