"""
Population Statistics
=====================

Means, ranges, histograms and category distributions over loaded datasets.
"""

from .statistics import PopulationStatsCalculator
from .distributions import category_counts, clv_credit_points

__all__ = ["PopulationStatsCalculator", "category_counts", "clv_credit_points"]
