import sys
from pathlib import Path

import pytest

# Ensure the project directory is on sys.path to allow `import health_engine`, `import api`
PROJECT_DIR = Path(__file__).resolve().parent.parent / "customer_analytics"
if str(PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(PROJECT_DIR))


@pytest.fixture
def loyalty_records():
    return [
        {"customer_id": "C1", "predicted_loyalty_score": "10", "loyalty_tier": "Bronze"},
        {"customer_id": "C2", "predicted_loyalty_score": "50", "loyalty_tier": "Silver"},
        {"customer_id": "C3", "predicted_loyalty_score": "90", "loyalty_tier": "Gold"},
        {"customer_id": "C4", "predicted_loyalty_score": "abc", "loyalty_tier": ""},
    ]


@pytest.fixture
def outreach_records():
    return [
        {"customer_id": "C1", "LeadScore": "5", "segment": "Nurture", "CLV_12m": "100", "CreditRisk": "0.1"},
        {"customer_id": "C2", "LeadScore": "45", "segment": "Growth", "CLV_12m": "300", "CreditRisk": "0.4"},
        {"customer_id": "C5", "LeadScore": "85", "segment": "Growth", "CLV_12m": "", "CreditRisk": "x"},
    ]


@pytest.fixture
def churn_records():
    return [
        {"customer_id": "C1", "churn_risk_predicted": "0.9"},
        {"customer_id": "C2", "churn_risk_predicted": "0.2"},
        {"customer_id": "C3", "churn_risk_predicted": "1.0"},
        {"customer_id": "C6", "churn_risk_predicted": "1.5"},
        {"customer_id": "C7", "churn_risk_predicted": "n/a"},
    ]
