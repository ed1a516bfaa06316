# tests/test_run_analytics.py

import pytest

from health_engine import HealthScoreEngine
from health_engine.common import DataLoader
from run_analytics import load_datasets


@pytest.fixture
def sources(tmp_path):
    loyalty = tmp_path / "loyalty.csv"
    loyalty.write_text("customer_id,predicted_loyalty_score,loyalty_tier\nA,10,Bronze\nB,90,Gold\n")
    churn = tmp_path / "churn.csv"
    churn.write_text("customer_id,churn_risk_predicted\nA,0.3\n")
    return {
        "loyalty": str(loyalty),
        "outreach": str(tmp_path / "missing.csv"),
        "churn": str(churn),
    }


def test_missing_source_is_skipped(sources):
    engine = HealthScoreEngine()
    loaded = load_datasets(engine, DataLoader(), sources)

    assert loaded == {"loyalty": True, "outreach": False, "churn": True}
    assert engine.get_population_stats("outreach").record_count == 0
    assert engine.get_population_stats("loyalty").record_count == 2


def test_failed_reload_keeps_previous_state(sources, tmp_path):
    engine = HealthScoreEngine()
    load_datasets(engine, DataLoader(), sources)
    version = engine.version
    before = engine.get_population_stats("churn")

    loaded = load_datasets(engine, DataLoader(), {"churn": str(tmp_path / "gone.csv")})

    assert loaded["churn"] is False
    assert engine.version == version
    assert engine.get_population_stats("churn") is before


def test_unconfigured_source(sources):
    del sources["churn"]
    loaded = load_datasets(HealthScoreEngine(), DataLoader(), sources)

    assert loaded["churn"] is False
