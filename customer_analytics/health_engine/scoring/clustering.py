"""
Nearest-Centroid Classification
===============================

Assigns a normalized feature vector (loyalty, lead score, inverted churn)
to the closest of a fixed set of externally supplied centroids.

Usage:
    from health_engine.scoring import CentroidClassifier

    classifier = CentroidClassifier(settings.centroids)
    assignment = classifier.classify((0.5, 0.5, 0.8))
"""

import numpy as np
from typing import Optional, Sequence, Tuple

from loguru import logger

from ..models import Centroid, ClusterAssignment

N_DIMENSIONS = 3


class CentroidClassifier:
    """
    Euclidean nearest-centroid lookup.

    Centroids are read-only input; nothing here fits or moves them. Ties
    go to the centroid listed first.

    Example:
        >>> classifier = CentroidClassifier([Centroid((0, 0, 0)), Centroid((1, 1, 1))])
        >>> classifier.classify((0.9, 0.8, 1.0)).index
        1
    """

    def __init__(self, centroids: Sequence[Centroid] = ()):
        """
        Initialize CentroidClassifier.

        Args:
            centroids: Centroids in scan order

        Raises:
            ValueError: If a centroid is not 3-dimensional
        """
        self.centroids: Tuple[Centroid, ...] = tuple(centroids)

        for i, centroid in enumerate(self.centroids):
            if len(centroid.coordinates) != N_DIMENSIONS:
                raise ValueError(
                    f"Centroid {i} has {len(centroid.coordinates)} dimensions, "
                    f"expected {N_DIMENSIONS}"
                )

        if self.centroids:
            self._matrix = np.array([c.coordinates for c in self.centroids], dtype=float)
        else:
            self._matrix = np.empty((0, N_DIMENSIONS))

        logger.info(f"CentroidClassifier initialized with {len(self.centroids)} centroids")

    @property
    def enabled(self) -> bool:
        return len(self.centroids) > 0

    def distances(self, vector: Sequence[float]) -> np.ndarray:
        """Euclidean distance from `vector` to every centroid, in scan order."""
        point = np.asarray(vector, dtype=float)
        return np.sqrt(np.sum((self._matrix - point) ** 2, axis=1))

    def classify(self, vector: Sequence[float]) -> Optional[ClusterAssignment]:
        """
        Assign `vector` to its nearest centroid.

        Args:
            vector: (norm_loyalty, norm_lead_score, norm_churn)

        Returns:
            ClusterAssignment, or None when no centroids are configured
        """
        if not self.enabled:
            return None

        distances = self.distances(vector)
        # argmin returns the first index on ties
        index = int(np.argmin(distances))

        return ClusterAssignment(
            index=index,
            distance=float(distances[index]),
            label=self.centroids[index].label,
        )
