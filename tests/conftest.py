"""Pytest fixtures for testing"""

import json
import pytest
from typing import Callable, Dict, Optional
from fastapi.testclient import TestClient
from credit_dashboard.api.main import create_app
from credit_dashboard.config import settings


HEALTHY_BALANCE_SHEET = {
    "Total Assets": 50_000_000,
    "Current Assets": 20_000_000,
    "Cash and Cash Equivalents": 5_000_000,
    "Inventory": 6_000_000,
    "Accounts Receivable": 7_000_000,
    "Accounts Payable": 6_000_000,
    "Total Liabilities": 25_000_000,
    "Current Liabilities": 10_000_000,
    "Shareholder's Equity": 25_000_000,
    "Short-term Debt": 4_000_000,
    "Long-term Debt": 12_000_000,
}

HEALTHY_INCOME_STATEMENT = {
    "Total Revenue": 60_000_000,
    "Cost of Goods Sold (COGS)": 40_000_000,
    "Gross Profit": 20_000_000,
    "EBITDA": 10_000_000,
    "EBIT": 8_000_000,
    "Interest Expense": 1_200_000,
    "Net Profit": 5_400_000,
}

HEALTHY_CASH_FLOW = {"Operating Cash Flow": 7_500_000}


def _facts(figures: Dict[str, float], year: int) -> list:
    return [
        {"field_name": name, "value": value, "currency": "AED", "year": year, "confidence_score": 0.95}
        for name, value in figures.items()
    ]


@pytest.fixture
def make_payload() -> Callable[..., dict]:
    """Build a raw statement payload for one year"""

    def _make(
        balance_sheet: Dict[str, float],
        income_statement: Optional[Dict[str, float]] = None,
        cash_flow: Optional[Dict[str, float]] = None,
        year: int = 2023,
    ) -> dict:
        return {
            "Balance Sheet": _facts(balance_sheet, year),
            "Income Statement": _facts(income_statement or {}, year),
            "Cash Flow Statement": _facts(cash_flow or {}, year),
        }

    return _make


@pytest.fixture
def healthy_payload(make_payload) -> dict:
    """Well-capitalised manufacturer; ratios score 89 (Excellent)"""
    return make_payload(HEALTHY_BALANCE_SHEET, HEALTHY_INCOME_STATEMENT, HEALTHY_CASH_FLOW)


@pytest.fixture
def distressed_payload(make_payload) -> dict:
    """Loss-making, highly leveraged retailer"""
    return make_payload(
        {
            "Total Assets": 10_000_000,
            "Current Assets": 3_000_000,
            "Cash and Cash Equivalents": 200_000,
            "Inventory": 2_000_000,
            "Total Liabilities": 9_500_000,
            "Current Liabilities": 4_000_000,
            "Shareholder's Equity": 500_000,
        },
        {
            "Total Revenue": 8_000_000,
            "Cost of Goods Sold (COGS)": 7_000_000,
            "Gross Profit": 1_000_000,
            "EBITDA": 0,
            "EBIT": -500_000,
            "Interest Expense": 600_000,
            "Net Profit": -1_100_000,
        },
    )


@pytest.fixture
def sample_financials() -> dict:
    """Three-year sample dataset shipped with the package"""
    return json.loads((settings.sample_data_dir / "manufacturing_financials.json").read_text())


@pytest.fixture
def aecb_payload() -> dict:
    """AECB report shipped with the package (credit score 742)"""
    return json.loads((settings.sample_data_dir / "manufacturing_aecb.json").read_text())


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())
