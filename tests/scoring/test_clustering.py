# tests/scoring/test_clustering.py

import math

import pytest

from health_engine.models import Centroid
from health_engine.scoring import CentroidClassifier


def test_nearest_centroid():
    classifier = CentroidClassifier([
        Centroid((0.1, 0.1, 0.1), "At Risk"),
        Centroid((0.9, 0.9, 0.9), "Champions"),
    ])
    assignment = classifier.classify((0.8, 0.7, 1.0))

    assert assignment.index == 1
    assert assignment.label == "Champions"
    assert assignment.distance == pytest.approx(math.sqrt(0.01 + 0.04 + 0.01))


def test_tie_goes_to_first_centroid():
    classifier = CentroidClassifier([
        Centroid((0.0, 0.5, 0.5)),
        Centroid((1.0, 0.5, 0.5)),
    ])
    assignment = classifier.classify((0.5, 0.5, 0.5))

    assert assignment.index == 0
    assert assignment.distance == pytest.approx(0.5)


def test_no_centroids_skips_classification():
    classifier = CentroidClassifier()

    assert not classifier.enabled
    assert classifier.classify((0.5, 0.5, 0.5)) is None


def test_rejects_wrong_dimensions():
    with pytest.raises(ValueError):
        CentroidClassifier([Centroid((0.1, 0.2))])


def test_distances_in_scan_order():
    classifier = CentroidClassifier([Centroid((0, 0, 0)), Centroid((0, 0, 2)), Centroid((0, 3, 0))])

    assert list(classifier.distances((0, 0, 0))) == [0.0, 2.0, 3.0]
