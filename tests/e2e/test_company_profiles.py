"""End-to-end tests for different company profiles"""

import pytest
from fastapi.testclient import TestClient

pytestmark = pytest.mark.integration


def test_profile_established_manufacturer(client: TestClient, healthy_payload: dict):
    """
    Profile: Established manufacturer
    - Current ratio 2.0, debt-to-equity 1.0, net margin 9%
    - Clean balance sheet
    Expected: Excellent, enlarged loan at the lowest rate, no high-risk months
    """
    score = client.post("/v1/score", json={"dataset": healthy_payload}).json()
    assert score["score"]["category"] == "Excellent"
    assert score["score"]["provisional"] is False
    assert score["suggestion"]["amount"] > 120000
    assert score["suggestion"]["rate"] == 8.0

    plan = client.post("/v1/loan/plan", json={"dataset": healthy_payload}).json()
    assert plan["summary"]["high_risk_months"] == 0
    assert all(month["risk_level"] != "high" for month in plan["projection"])


def test_profile_distressed_retailer(client: TestClient, distressed_payload: dict):
    """
    Profile: Distressed retailer
    - Current ratio 0.75, debt-to-equity 19x
    - Operating loss, negative net profit
    Expected: Poor, base loan at the highest rate, high-risk months in the projection
    """
    ratios = client.post("/v1/ratios", json={"dataset": distressed_payload}).json()
    assert ratios["ratios"]["net_profit_margin"]["is_reliable"] is False
    assert ratios["ratios"]["operating_margin"]["is_reliable"] is False
    assert ratios["data_quality"]["issues"][0]["type"] == "unrealistic_ratio"

    score = client.post("/v1/score", json={"dataset": distressed_payload}).json()
    assert score["score"]["category"] == "Poor"
    assert score["score"]["score"] < 55
    assert score["suggestion"]["amount"] == 120000
    assert score["suggestion"]["rate"] == 15.0

    plan = client.post("/v1/loan/plan", json={"dataset": distressed_payload}).json()
    assert plan["summary"]["high_risk_months"] > 0
    assert plan["summary"]["stress_high_risk_months"] >= plan["summary"]["high_risk_months"]


def test_profile_inconsistent_statements(client: TestClient, healthy_payload: dict):
    """
    Profile: Extraction error in reported equity
    - Equity reported as 15M where assets - liabilities is 25M
    Expected: equity corrected, same ratios as the clean company, score provisional
    """
    payload = {
        **healthy_payload,
        "Balance Sheet": [
            {**fact, "value": 15_000_000} if fact["field_name"] == "Shareholder's Equity" else fact
            for fact in healthy_payload["Balance Sheet"]
        ],
    }

    ratios = client.post("/v1/ratios", json={"dataset": payload}).json()
    assert ratios["data_quality"]["is_valid"] is False
    assert ratios["data_quality"]["corrections"] == {"Shareholder's Equity": 25_000_000}
    assert ratios["ratios"]["debt_to_equity"]["value"] == 1.0

    score = client.post("/v1/score", json={"dataset": payload}).json()["score"]
    assert score["score"] == 89
    assert score["provisional"] is True


def test_profile_sample_company_full_journey(client: TestClient):
    """
    Profile: Bundled manufacturing sample
    - Load source, review trends, score, then assess a CAD facility
    """
    loaded = client.post("/v1/sources/manufacturing_sample/load").json()
    dataset = loaded["dataset"]

    trends = client.post("/v1/trends", json={"dataset": dataset}).json()
    assert all(metric["growth"] > 0 for metric in trends["metrics"])

    earlier = client.post("/v1/score", json={"dataset": dataset, "year": 2021}).json()
    latest = client.post("/v1/score", json={"dataset": dataset}).json()
    assert earlier["year"] == 2021
    assert latest["year"] == 2023

    loan = {
        "requested_amount": 900000,
        "loan_tenor": 12,
        "collateral_value": 1000000,
        "documents_coverage": 92,
        "trading_history": 8,
    }
    cad = client.post("/v1/cad/assessment", json={"dataset": dataset, "loan": loan}).json()
    # Financial 30, structure 5 + 7, history 20, documents 15
    assert cad["score"] == 77
    assert cad["category"] == "Good"
