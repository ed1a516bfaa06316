"""
Action Tiers
============

Maps a health score to one of three intervention tiers and the two
actions recommended for it. Boundaries 33 and 66 belong to the lower
tier, and a NaN score is treated as at-risk.
"""

import math
from typing import Dict, Tuple

from ..models import ActionTier

AT_RISK = "at-risk"
NEUTRAL = "neutral"
HEALTHY = "healthy"

AT_RISK_MAX = 33.0
NEUTRAL_MAX = 66.0

TIER_ACTIONS: Dict[str, Tuple[str, str]] = {
    AT_RISK: ("retention-email", "schedule-call"),
    NEUTRAL: ("engagement-offer", "feedback-survey"),
    HEALTHY: ("loyalty-reward", "referral-invite"),
}


class ActionTierSelector:
    """Closed-interval tier lookup over the static action table."""

    def tier_for(self, health_score: float) -> str:
        if math.isnan(health_score) or health_score <= AT_RISK_MAX:
            return AT_RISK
        if health_score <= NEUTRAL_MAX:
            return NEUTRAL
        return HEALTHY

    def select(self, health_score: float) -> ActionTier:
        tier = self.tier_for(health_score)
        return ActionTier(tier=tier, actions=TIER_ACTIONS[tier])
