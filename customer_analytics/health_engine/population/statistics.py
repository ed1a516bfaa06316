"""
Population Statistics Module
============================

Means, min/max ranges and the churn-risk histogram over one dataset.

Means and ranges substitute 0 for values that do not parse, so every
record counts in the denominator. The histogram instead drops anything
that is not a number in [0, 1].

Usage:
    from health_engine.population import PopulationStatsCalculator

    calculator = PopulationStatsCalculator()
    stats = calculator.compute(DatasetName.CHURN, records)
    print(stats.mean, stats.range, stats.histogram)
"""

import numpy as np
import pandas as pd
from typing import Dict, Optional, Sequence, Tuple, Union
from loguru import logger

from ..common.preprocessing import Preprocessor
from ..models import (
    CATEGORY_FIELDS,
    CHURN_RISK,
    NUMERIC_FEATURES,
    PRIMARY_FEATURES,
    CustomerRecord,
    DatasetName,
    FeatureStats,
    HistogramBin,
    PopulationRange,
    PopulationStats,
)
from .distributions import category_counts

N_BINS = 10


class PopulationStatsCalculator:
    """
    Statistics over a fully loaded dataset.

    Nothing is updated incrementally; `compute` is called again with the
    replacement records whenever a dataset is reloaded.

    Example:
        >>> calculator = PopulationStatsCalculator()
        >>> stats = calculator.compute("loyalty", records)
        >>> stats.range.normalize(50.0)
    """

    def __init__(self, n_bins: int = N_BINS, preprocessor: Optional[Preprocessor] = None):
        """
        Initialize PopulationStatsCalculator.

        Args:
            n_bins: Number of equal-width histogram bins over [0, 1]
            preprocessor: Shared Preprocessor (a default one is created if None)
        """
        self.n_bins = n_bins
        self.preprocessor = preprocessor or Preprocessor()
        logger.info("PopulationStatsCalculator initialized")

    def compute(
        self,
        dataset: Union[str, DatasetName],
        records: Sequence[CustomerRecord]
    ) -> PopulationStats:
        """
        Compute the full statistics snapshot for one dataset.

        Args:
            dataset: Dataset name
            records: All records of the dataset, in load order

        Returns:
            PopulationStats
        """
        name = DatasetName.coerce(dataset)
        frame = self.preprocessor.to_frame(records)

        features = {
            feature: self.feature_stats(frame, feature)
            for feature in NUMERIC_FEATURES[name]
        }

        histogram = None
        if name is DatasetName.CHURN:
            histogram = self.histogram(frame, CHURN_RISK)

        distributions = {
            column: category_counts(self.preprocessor.normalize_categories(frame, column))
            for column in CATEGORY_FIELDS[name]
        }

        stats = PopulationStats(
            dataset=name,
            record_count=len(frame),
            primary_feature=PRIMARY_FEATURES[name],
            features=features,
            histogram=histogram,
            distributions=distributions,
        )

        logger.info(
            f"Computed {name.value} stats over {stats.record_count} records: "
            f"mean={stats.mean:.4f}, range=({stats.range.min}, {stats.range.max})"
        )
        return stats

    def feature_stats(self, frame: pd.DataFrame, column: str) -> FeatureStats:
        """Mean and range of one column with zero substitution."""
        values = self.preprocessor.coerce_numeric(frame, column)
        return FeatureStats(mean=self.mean(values), range=self.population_range(values))

    def mean(self, values: pd.Series) -> float:
        """
        Arithmetic mean over all records.

        Args:
            values: Coerced values (unparsable already replaced with 0)

        Returns:
            sum / count, or 0.0 for an empty dataset
        """
        if len(values) == 0:
            return 0.0
        return float(values.sum() / len(values))

    def population_range(self, values: pd.Series) -> PopulationRange:
        """
        Observed (min, max) of coerced values.

        Args:
            values: Coerced values

        Returns:
            PopulationRange, (0.0, 0.0) for an empty dataset
        """
        if len(values) == 0:
            return PopulationRange(0.0, 0.0)
        return PopulationRange(float(values.min()), float(values.max()))

    def histogram(self, frame: pd.DataFrame, column: str) -> Tuple[HistogramBin, ...]:
        """
        Equal-width histogram over [0, 1].

        Bins are closed below and open above, except the last which also
        includes 1.0. Non-numeric values and values outside [0, 1] are not
        counted anywhere.

        Args:
            frame: Dataset frame
            column: Bounded feature column

        Returns:
            Tuple of `n_bins` HistogramBin
        """
        values = self.preprocessor.parse_bounded(frame, column).to_numpy()
        in_domain = values[(values >= 0) & (values <= 1)]

        indices = np.minimum(np.floor(in_domain * self.n_bins).astype(int), self.n_bins - 1)
        counts = np.bincount(indices, minlength=self.n_bins)

        dropped = len(values) - len(in_domain)
        if dropped:
            logger.debug(f"Histogram excluded {dropped} out-of-domain '{column}' values")

        width = 1.0 / self.n_bins
        return tuple(
            HistogramBin(lower=round(i * width, 10), upper=round((i + 1) * width, 10),
                         count=int(counts[i]))
            for i in range(self.n_bins)
        )

    def summarize(self, stats: PopulationStats) -> Dict[str, object]:
        """Plain-dict view of a snapshot for JSON responses and reports."""
        summary: Dict[str, object] = {
            'dataset': stats.dataset.value,
            'record_count': stats.record_count,
            'primary_feature': stats.primary_feature,
            'mean': stats.mean,
            'range': {'min': stats.range.min, 'max': stats.range.max},
            'features': {
                feature: {
                    'mean': fs.mean,
                    'range': {'min': fs.range.min, 'max': fs.range.max},
                }
                for feature, fs in stats.features.items()
            },
            'distributions': {k: dict(v) for k, v in stats.distributions.items()},
        }
        if stats.histogram is not None:
            summary['histogram'] = [
                {'bin': b.label, 'lower': b.lower, 'upper': b.upper, 'count': b.count}
                for b in stats.histogram
            ]
        return summary
