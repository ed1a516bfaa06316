"""
Distribution Helpers
====================

Category breakdowns (loyalty tier, outreach segment) and the
CLV vs. credit-risk point series used by the dashboard.
"""

import pandas as pd
from typing import Dict, List, Optional, Sequence, Tuple

from ..common.preprocessing import Preprocessor
from ..models import CLV_12M, CREDIT_RISK, SEGMENT, CustomerRecord

ScatterPoint = Tuple[float, float, Optional[str]]


def category_counts(labels: pd.Series) -> Dict[str, int]:
    """Count labels, keyed in order of first appearance."""
    counts: Dict[str, int] = {}
    for label in labels:
        counts[label] = counts.get(label, 0) + 1
    return counts


def clv_credit_points(
    records: Sequence[CustomerRecord],
    preprocessor: Optional[Preprocessor] = None
) -> List[ScatterPoint]:
    """
    One (credit_risk, clv_12m, segment) point per outreach record.

    Unparsable numbers plot at 0; the segment is passed through as-is
    (None when the record has no segment field).
    """
    preprocessor = preprocessor or Preprocessor()
    frame = preprocessor.to_frame(records, columns=[CREDIT_RISK, CLV_12M, SEGMENT])

    x = preprocessor.coerce_numeric(frame, CREDIT_RISK)
    y = preprocessor.coerce_numeric(frame, CLV_12M)

    return [
        (float(credit), float(clv), segment if isinstance(segment, str) else None)
        for credit, clv, segment in zip(x, y, frame[SEGMENT])
    ]
