# tests/scoring/test_action_tiers.py

import pytest

from health_engine.scoring import ActionTierSelector, TIER_ACTIONS


@pytest.mark.parametrize(
    "score,expected",
    [
        (0.0, "at-risk"),
        (33.0, "at-risk"),
        (33.1, "neutral"),
        (66.0, "neutral"),
        (66.1, "healthy"),
        (100.0, "healthy"),
        (-12.5, "at-risk"),
        (120.0, "healthy"),
    ],
)
def test_tier_boundaries(score, expected):
    assert ActionTierSelector().select(score).tier == expected


def test_each_tier_names_two_actions():
    selector = ActionTierSelector()

    assert selector.select(10).actions == ("retention-email", "schedule-call")
    for actions in TIER_ACTIONS.values():
        assert len(actions) == 2


def test_nan_score_is_at_risk():
    assert ActionTierSelector().select(float("nan")).tier == "at-risk"
