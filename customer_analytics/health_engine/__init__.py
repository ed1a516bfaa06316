"""
Customer Health Analytics Engine
================================

Aggregates loyalty, outreach and churn datasets into:
- Population statistics (means, ranges, churn-risk histogram)
- Per-customer composite health scores
- Nearest-centroid segment assignment
- Retention action tiers

Version: 1.0.0
"""

__version__ = "1.0.0"
__author__ = "Retail Analytics Team"

from .common import DataLoader, Preprocessor, Reporter, ActionDispatcher, load_settings
from .engine import HealthScoreEngine, EngineState
from .models import DatasetName, CustomerProfile, NotFound
from .population import PopulationStatsCalculator
from .scoring import CustomerResolver, CompositeScorer, CentroidClassifier, ActionTierSelector

__all__ = [
    "DataLoader",
    "Preprocessor",
    "Reporter",
    "ActionDispatcher",
    "load_settings",
    "HealthScoreEngine",
    "EngineState",
    "DatasetName",
    "CustomerProfile",
    "NotFound",
    "PopulationStatsCalculator",
    "CustomerResolver",
    "CompositeScorer",
    "CentroidClassifier",
    "ActionTierSelector",
]
