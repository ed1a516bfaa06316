"""
Customer Scoring Module
=======================

Identifier resolution, composite health scoring, nearest-centroid
segmentation and action-tier selection.
"""

from .resolver import CustomerIndex, CustomerResolver, ResolvedRecords
from .composite import CompositeScorer
from .clustering import CentroidClassifier
from .action_tiers import ActionTierSelector, TIER_ACTIONS

__all__ = [
    "CustomerIndex",
    "CustomerResolver",
    "ResolvedRecords",
    "CompositeScorer",
    "CentroidClassifier",
    "ActionTierSelector",
    "TIER_ACTIONS",
]
