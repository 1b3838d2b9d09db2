"""Unit tests for financial data validation"""

from credit_dashboard.domain.dataset import load_dataset
from credit_dashboard.domain.models import SHAREHOLDER_EQUITY
from credit_dashboard.domain.validation import validate_financial_data


def _validate(make_payload, balance_sheet, revenue=50):
    dataset = load_dataset(make_payload(balance_sheet, {"Total Revenue": revenue}))
    return validate_financial_data(dataset, 2023)


def test_consistent_balance_sheet_is_valid(make_payload):
    """100 = 80 + 20 satisfies the balance sheet identity"""
    result = _validate(make_payload, {"Total Assets": 100, "Total Liabilities": 80, "Shareholder's Equity": 20})

    assert result.is_valid is True
    assert result.issues == []
    assert result.corrections == {}


def test_balance_violation_proposes_equity_correction(make_payload):
    """|100 - (80 + 10)| = 10 > 5% of 100, so equity is re-derived as 100 - 80"""
    result = _validate(make_payload, {"Total Assets": 100, "Total Liabilities": 80, "Shareholder's Equity": 10})

    assert result.is_valid is False
    assert result.corrections == {SHAREHOLDER_EQUITY: 20}
    issue = result.issues[0]
    assert issue.type == "balance_sheet_violation"
    assert issue.field == "Balance Sheet"
    assert issue.severity == "high"


def test_error_within_tolerance_passes(make_payload):
    """Error of exactly 5% of total assets is tolerated"""
    result = _validate(make_payload, {"Total Assets": 100, "Total Liabilities": 80, "Shareholder's Equity": 15})

    assert result.is_valid is True
    assert result.corrections == {}


def test_no_correction_when_liabilities_exceed_assets(make_payload):
    result = _validate(make_payload, {"Total Assets": 100, "Total Liabilities": 120, "Shareholder's Equity": 10})

    assert result.is_valid is False
    assert SHAREHOLDER_EQUITY not in result.corrections


def test_negative_values_flagged(make_payload):
    result = _validate(
        make_payload,
        {"Total Assets": 100, "Current Assets": -5, "Total Liabilities": 80, "Shareholder's Equity": 20},
        revenue=-10,
    )

    negative = [issue for issue in result.issues if issue.type == "negative_value"]
    assert {issue.field for issue in negative} == {"Current Assets", "Total Revenue"}
    assert result.is_valid is False


def test_missing_critical_data(make_payload):
    result = _validate(make_payload, {"Total Liabilities": 0}, revenue=0)

    assert [issue.type for issue in result.issues] == ["missing_data"]
    assert result.is_valid is False


def test_extreme_leverage_is_medium_severity(make_payload):
    """110 / 10 = 11x debt-to-equity; only a warning, data remains valid"""
    result = _validate(make_payload, {"Total Assets": 120, "Total Liabilities": 110, "Shareholder's Equity": 10})

    assert result.is_valid is True
    assert len(result.issues) == 1
    assert result.issues[0].type == "unrealistic_ratio"
    assert result.issues[0].severity == "medium"


def test_current_assets_exceeding_total_assets(make_payload):
    result = _validate(
        make_payload,
        {"Total Assets": 100, "Current Assets": 150, "Total Liabilities": 80, "Shareholder's Equity": 20},
    )

    assert result.is_valid is False
    assert result.issues[0].type == "balance_sheet_violation"
    assert result.issues[0].field == "Current Assets"
