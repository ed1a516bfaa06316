# tests/common/test_data_loader.py

import io

import pytest

from health_engine.common import DataLoader


@pytest.fixture
def loader() -> DataLoader:
    return DataLoader()


@pytest.fixture
def loyalty_csv(tmp_path):
    path = tmp_path / "loyalty.csv"
    path.write_text(
        "customer_id,predicted_loyalty_score,loyalty_tier\n"
        "C1,10,Bronze\n"
        "\n"
        "C2,,Silver\n"
        "007,NA,\n"
    )
    return path


def test_load_records_keeps_text(loader, loyalty_csv):
    records = loader.load_records(loyalty_csv)

    assert len(records) == 3
    assert records[0] == {"customer_id": "C1", "predicted_loyalty_score": "10", "loyalty_tier": "Bronze"}
    assert records[1]["predicted_loyalty_score"] == ""
    # no NA inference and no numeric conversion of identifiers
    assert records[2]["customer_id"] == "007"
    assert records[2]["predicted_loyalty_score"] == "NA"


def test_load_missing_file(loader, tmp_path):
    with pytest.raises(FileNotFoundError):
        loader.load_records(tmp_path / "missing.csv")


def test_load_unsupported_format(loader, tmp_path):
    path = tmp_path / "data.parquet"
    path.write_bytes(b"")

    with pytest.raises(ValueError):
        loader.load_records(path)


def test_validate_records_ok(loader, loyalty_records):
    is_valid, report = loader.validate_records(loyalty_records, "loyalty")

    assert is_valid
    assert report["errors"] == []
    assert report["statistics"]["n_unique_ids"] == 4


def test_validate_records_missing_columns(loader):
    is_valid, report = loader.validate_records([{"customer_id": "A"}], "outreach")

    assert not is_valid
    assert "LeadScore" in report["errors"][0]


def test_validate_records_warns_on_duplicates(loader):
    records = [
        {"customer_id": "A", "churn_risk_predicted": "0.1"},
        {"customer_id": "A", "churn_risk_predicted": "0.2"},
        {"customer_id": " ", "churn_risk_predicted": "0.3"},
    ]
    is_valid, report = loader.validate_records(records, "churn")

    assert is_valid
    assert len(report["warnings"]) == 2


def test_validate_empty_dataset(loader):
    is_valid, report = loader.validate_records([], "churn")

    assert not is_valid
    assert "Insufficient data" in report["errors"][0]


def test_validate_unknown_dataset(loader):
    with pytest.raises(ValueError):
        loader.validate_records([], "billing")


def test_load_records_from_buffer(loader):
    buffer = io.StringIO("customer_id,churn_risk_predicted\nA,0.5\nB,NA\n")
    records = loader.load_records(buffer)

    assert records == [
        {"customer_id": "A", "churn_risk_predicted": "0.5"},
        {"customer_id": "B", "churn_risk_predicted": "NA"},
    ]
