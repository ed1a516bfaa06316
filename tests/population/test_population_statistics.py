# tests/population/test_population_statistics.py

import pytest

from health_engine.models import DatasetName, PopulationRange
from health_engine.population import PopulationStatsCalculator, category_counts, clv_credit_points
from health_engine.common import Preprocessor


@pytest.fixture
def calculator() -> PopulationStatsCalculator:
    return PopulationStatsCalculator()


# --- Mean and range ---


def test_mean_counts_unparsable_values_as_zero(calculator, loyalty_records):
    stats = calculator.compute(DatasetName.LOYALTY, loyalty_records)

    # (10 + 50 + 90 + 0) / 4: the unparsable score stays in the denominator
    assert stats.record_count == 4
    assert stats.mean == pytest.approx(37.5)


def test_range_uses_zero_substitution(calculator, loyalty_records):
    stats = calculator.compute("loyalty", loyalty_records)

    assert stats.range == PopulationRange(0.0, 90.0)


def test_range_without_unparsable_values(calculator):
    records = [{"customer_id": str(i), "LeadScore": str(v)} for i, v in enumerate([45, 5, 85])]
    stats = calculator.compute(DatasetName.OUTREACH, records)

    assert stats.range == PopulationRange(5.0, 85.0)
    assert stats.mean == pytest.approx(45.0)


def test_mean_is_sum_over_all_records(calculator, churn_records):
    stats = calculator.compute(DatasetName.CHURN, churn_records)

    # n/a -> 0; 1.5 is kept for the mean even though the histogram drops it
    assert stats.mean == pytest.approx((0.9 + 0.2 + 1.0 + 1.5 + 0.0) / 5)
    assert stats.range.max == pytest.approx(1.5)


def test_outreach_tracks_clv_and_credit_risk(calculator, outreach_records):
    stats = calculator.compute(DatasetName.OUTREACH, outreach_records)

    assert stats.primary_feature == "LeadScore"
    assert stats.features["CLV_12m"].mean == pytest.approx(400 / 3)
    assert stats.features["CLV_12m"].range == PopulationRange(0.0, 300.0)
    assert stats.features["CreditRisk"].range == PopulationRange(0.0, 0.4)


def test_missing_column_contributes_zero(calculator):
    stats = calculator.compute(DatasetName.LOYALTY, [{"customer_id": "A"}, {"customer_id": "B"}])

    assert stats.mean == 0.0
    assert stats.range.is_degenerate


def test_empty_dataset(calculator):
    stats = calculator.compute(DatasetName.CHURN, [])

    assert stats.record_count == 0
    assert stats.mean == 0.0
    assert stats.range == PopulationRange(0.0, 0.0)
    assert [b.count for b in stats.histogram] == [0] * 10


# --- Histogram ---


def test_histogram_only_for_churn(calculator, loyalty_records, outreach_records):
    assert calculator.compute(DatasetName.LOYALTY, loyalty_records).histogram is None
    assert calculator.compute(DatasetName.OUTREACH, outreach_records).histogram is None


def test_histogram_drops_out_of_domain_values(calculator, churn_records):
    histogram = calculator.compute(DatasetName.CHURN, churn_records).histogram

    counts = [b.count for b in histogram]
    assert sum(counts) == 3  # 1.5 and "n/a" are excluded
    assert sum(counts) <= len(churn_records)
    assert counts[2] == 1
    assert counts[9] == 2


def test_histogram_edges(calculator):
    values = ["0", "0.1", "0.0999", "0.5", "0.95", "1", "-0.01", "1.0001", ""]
    records = [{"customer_id": str(i), "churn_risk_predicted": v} for i, v in enumerate(values)]
    counts = [b.count for b in calculator.compute(DatasetName.CHURN, records).histogram]

    assert counts[0] == 2   # 0 and 0.0999
    assert counts[1] == 1   # lower edge is inclusive
    assert counts[5] == 1
    assert counts[9] == 2   # 0.95 and exactly 1.0
    assert sum(counts) == 6


def test_histogram_labels(calculator):
    histogram = calculator.compute(DatasetName.CHURN, []).histogram

    assert len(histogram) == 10
    assert histogram[0].label == "0.0–0.1"
    assert histogram[9].label == "0.9–1.0"
    assert histogram[9].upper == 1.0


# --- Distributions ---


def test_category_distributions(calculator, loyalty_records, outreach_records):
    loyalty = calculator.compute(DatasetName.LOYALTY, loyalty_records)
    outreach = calculator.compute(DatasetName.OUTREACH, outreach_records)

    assert loyalty.distributions["loyalty_tier"] == {"Bronze": 1, "Silver": 1, "Gold": 1, "Unknown": 1}
    assert list(outreach.distributions["segment"].items()) == [("Nurture", 1), ("Growth", 2)]


def test_category_counts_preserves_first_appearance():
    labels = Preprocessor().normalize_categories(
        Preprocessor().to_frame([{"s": "b"}, {"s": "a"}, {"s": "b"}, {}]), "s"
    )

    assert list(category_counts(labels).items()) == [("b", 2), ("a", 1), ("Unknown", 1)]


def test_clv_credit_points(outreach_records):
    points = clv_credit_points(outreach_records)

    assert points == [(0.1, 100.0, "Nurture"), (0.4, 300.0, "Growth"), (0.0, 0.0, "Growth")]


def test_summarize_includes_histogram_for_churn(calculator, churn_records):
    summary = calculator.summarize(calculator.compute(DatasetName.CHURN, churn_records))

    assert summary["dataset"] == "churn"
    assert summary["record_count"] == 5
    assert len(summary["histogram"]) == 10
    assert summary["histogram"][9] == {"bin": "0.9–1.0", "lower": 0.9, "upper": 1.0, "count": 2}
