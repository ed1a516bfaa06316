"""
Domain Models
=============

Dataset names, contracted field names and the value objects exchanged
between the engine components.

Usage:
    from health_engine.models import DatasetName, CustomerProfile, NotFound

    name = DatasetName.coerce("loyalty")
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple, Union

CustomerRecord = Mapping[str, str]

# Field names shared with the upstream CSV producers (case-sensitive)
CUSTOMER_ID = "customer_id"
LOYALTY_SCORE = "predicted_loyalty_score"
LOYALTY_TIER = "loyalty_tier"
LEAD_SCORE = "LeadScore"
SEGMENT = "segment"
CHURN_RISK = "churn_risk_predicted"
CLV_12M = "CLV_12m"
CREDIT_RISK = "CreditRisk"

UNKNOWN_CATEGORY = "Unknown"


class DatasetName(str, Enum):
    """The three independently produced customer datasets."""

    LOYALTY = "loyalty"
    OUTREACH = "outreach"
    CHURN = "churn"

    @classmethod
    def coerce(cls, name: Union[str, "DatasetName"]) -> "DatasetName":
        """Accept either an enum member or its string value."""
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown dataset: {name!r} (expected one of: {valid})")


# Primary feature per dataset: the one behind `mean`/`range` in stats
PRIMARY_FEATURES: Dict[DatasetName, str] = {
    DatasetName.LOYALTY: LOYALTY_SCORE,
    DatasetName.OUTREACH: LEAD_SCORE,
    DatasetName.CHURN: CHURN_RISK,
}

NUMERIC_FEATURES: Dict[DatasetName, Tuple[str, ...]] = {
    DatasetName.LOYALTY: (LOYALTY_SCORE,),
    DatasetName.OUTREACH: (LEAD_SCORE, CLV_12M, CREDIT_RISK),
    DatasetName.CHURN: (CHURN_RISK,),
}

CATEGORY_FIELDS: Dict[DatasetName, Tuple[str, ...]] = {
    DatasetName.LOYALTY: (LOYALTY_TIER,),
    DatasetName.OUTREACH: (SEGMENT,),
    DatasetName.CHURN: (),
}


@dataclass(frozen=True)
class PopulationRange:
    """Observed (min, max) of one numeric feature across a dataset."""

    min: float = 0.0
    max: float = 0.0

    @property
    def is_degenerate(self) -> bool:
        return not self.max > self.min

    def normalize(self, raw: float) -> float:
        """
        Min-max scale `raw`; a constant feature normalizes to 0.

        Spans wider than the largest float are scaled by halves, and any
        result that is still not finite normalizes to 0.
        """
        if self.is_degenerate:
            return 0.0
        span = self.max - self.min
        if math.isinf(span):
            normalized = (raw / 2 - self.min / 2) / (self.max / 2 - self.min / 2)
        else:
            normalized = (raw - self.min) / span
        if not math.isfinite(normalized):
            return 0.0
        return normalized


@dataclass(frozen=True)
class HistogramBin:
    lower: float
    upper: float
    count: int = 0

    @property
    def label(self) -> str:
        return f"{self.lower:.1f}–{self.upper:.1f}"


@dataclass(frozen=True)
class FeatureStats:
    mean: float
    range: PopulationRange


@dataclass(frozen=True)
class PopulationStats:
    """
    Read-only statistics snapshot for one dataset.

    `mean` and `range` describe the dataset's primary feature; every tracked
    numeric field is available under `features`.
    """

    dataset: DatasetName
    record_count: int
    primary_feature: str
    features: Mapping[str, FeatureStats]
    histogram: Optional[Tuple[HistogramBin, ...]] = None
    distributions: Mapping[str, Mapping[str, int]] = field(default_factory=dict)

    @property
    def mean(self) -> float:
        return self.features[self.primary_feature].mean

    @property
    def range(self) -> PopulationRange:
        return self.features[self.primary_feature].range


@dataclass(frozen=True)
class Centroid:
    coordinates: Tuple[float, float, float]
    label: Optional[str] = None


@dataclass(frozen=True)
class ClusterAssignment:
    index: int
    distance: float
    label: Optional[str] = None


@dataclass(frozen=True)
class ScoreBreakdown:
    """Raw and normalized inputs behind one composite health score."""

    raw_loyalty: float
    raw_lead_score: float
    raw_churn_risk: float
    norm_loyalty: float
    norm_lead_score: float
    norm_churn: float
    health_score: float

    @property
    def feature_vector(self) -> Tuple[float, float, float]:
        return (self.norm_loyalty, self.norm_lead_score, self.norm_churn)


@dataclass(frozen=True)
class ActionTier:
    tier: str
    actions: Tuple[str, str]


@dataclass(frozen=True)
class CustomerProfile:
    customer_id: str
    loyalty: Optional[CustomerRecord]
    outreach: Optional[CustomerRecord]
    churn: Optional[CustomerRecord]
    breakdown: ScoreBreakdown
    action_tier: ActionTier
    cluster: Optional[ClusterAssignment] = None

    @property
    def health_score(self) -> float:
        return self.breakdown.health_score

    @property
    def loyalty_tier(self) -> Optional[str]:
        return self.loyalty.get(LOYALTY_TIER) if self.loyalty is not None else None

    @property
    def segment(self) -> Optional[str]:
        return self.outreach.get(SEGMENT) if self.outreach is not None else None

    def to_dict(self) -> Dict[str, object]:
        """Plain-dict view for JSON responses and reports."""
        b = self.breakdown
        return {
            "customer_id": self.customer_id,
            "health_score": b.health_score,
            "features": {
                "loyalty": {"raw": b.raw_loyalty, "normalized": b.norm_loyalty,
                            "tier": self.loyalty_tier},
                "lead_score": {"raw": b.raw_lead_score, "normalized": b.norm_lead_score,
                               "segment": self.segment},
                "churn_risk": {"raw": b.raw_churn_risk, "inverted": b.norm_churn},
            },
            "cluster": None if self.cluster is None else {
                "index": self.cluster.index,
                "distance": self.cluster.distance,
                "label": self.cluster.label,
            },
            "action_tier": {"tier": self.action_tier.tier,
                            "actions": list(self.action_tier.actions)},
            "records": {
                "loyalty": dict(self.loyalty) if self.loyalty is not None else None,
                "outreach": dict(self.outreach) if self.outreach is not None else None,
                "churn": dict(self.churn) if self.churn is not None else None,
            },
        }


@dataclass(frozen=True)
class NotFound:
    """Lookup result when no dataset holds the requested identifier."""

    customer_id: str

    def to_dict(self) -> Dict[str, object]:
        return {"customer_id": self.customer_id, "not_found": True}
