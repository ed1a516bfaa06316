"""
Composite Health Scoring
========================

Combines loyalty, lead score and churn risk into a single 0-100 health
score.

Loyalty and lead score are min-max scaled against their population
ranges; churn risk is only inverted (`1 - risk`) because upstream already
emits it as a probability. None of the three is clipped, so inputs outside
the population range or a churn risk outside [0, 1] move the score past
the nominal bounds.

Usage:
    from health_engine.scoring import CompositeScorer

    scorer = CompositeScorer()
    breakdown = scorer.score(loyalty_record, outreach_record, churn_record,
                             loyalty_range, lead_range)
    print(breakdown.health_score)
"""

import math
from typing import Optional

from loguru import logger

from ..common.preprocessing import parse_numeric
from ..models import (
    CHURN_RISK,
    LEAD_SCORE,
    LOYALTY_SCORE,
    CustomerRecord,
    PopulationRange,
    ScoreBreakdown,
)


def _raw(record: Optional[CustomerRecord], field: str) -> float:
    if record is None:
        return 0.0
    return parse_numeric(record.get(field))


class CompositeScorer:
    """
    Normalizes a customer's raw features and averages them.

    Example:
        >>> scorer = CompositeScorer()
        >>> scorer.score({'predicted_loyalty_score': '50'}, {'LeadScore': '45'},
        ...              {'churn_risk_predicted': '0.2'},
        ...              PopulationRange(10, 90), PopulationRange(5, 85)).health_score
        60.0
    """

    def __init__(self, decimals: int = 1):
        """
        Initialize CompositeScorer.

        Args:
            decimals: Decimal places kept in the health score
        """
        self.decimals = decimals

    def score(
        self,
        loyalty: Optional[CustomerRecord],
        outreach: Optional[CustomerRecord],
        churn: Optional[CustomerRecord],
        loyalty_range: PopulationRange,
        lead_range: PopulationRange
    ) -> ScoreBreakdown:
        """
        Score one customer.

        Args:
            loyalty: Matched loyalty record, if any
            outreach: Matched outreach record, if any
            churn: Matched churn record, if any
            loyalty_range: Population range of the loyalty score
            lead_range: Population range of the lead score

        Returns:
            ScoreBreakdown with raw, normalized and composite values
        """
        raw_loyalty = _raw(loyalty, LOYALTY_SCORE)
        raw_lead = _raw(outreach, LEAD_SCORE)
        raw_churn = _raw(churn, CHURN_RISK)

        norm_loyalty = loyalty_range.normalize(raw_loyalty)
        norm_lead = lead_range.normalize(raw_lead)
        norm_churn = 1.0 - raw_churn

        health = round(((norm_loyalty + norm_lead + norm_churn) / 3) * 100, self.decimals)

        if not math.isfinite(health):
            logger.warning(f"Health score overflowed for raw churn risk {raw_churn}; using 0.0")
            health = 0.0

        if not 0.0 <= health <= 100.0:
            logger.debug(f"Health score {health} outside nominal [0, 100]")

        return ScoreBreakdown(
            raw_loyalty=raw_loyalty,
            raw_lead_score=raw_lead,
            raw_churn_risk=raw_churn,
            norm_loyalty=norm_loyalty,
            norm_lead_score=norm_lead,
            norm_churn=norm_churn,
            health_score=health,
        )
