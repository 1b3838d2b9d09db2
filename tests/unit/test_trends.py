"""Unit tests for year-over-year trend analysis"""

import pytest
from credit_dashboard.domain.dataset import load_dataset
from credit_dashboard.domain.trends import analyze_trends, calculate_growth


def _two_year_dataset():
    def facts(statement_values, year):
        return [{"field_name": k, "value": v, "year": year} for k, v in statement_values.items()]

    return load_dataset(
        {
            "Balance Sheet": facts({"Total Assets": 100}, 2022) + facts({"Total Assets": 110}, 2023),
            "Income Statement": facts({"Total Revenue": 50, "Net Profit": 5}, 2022)
            + facts({"Total Revenue": 60, "Net Profit": 4}, 2023),
            "Cash Flow Statement": facts({"Operating Cash Flow": 10}, 2023),
        }
    )


def test_calculate_growth():
    assert calculate_growth(110, 100) == pytest.approx(10.0)
    assert calculate_growth(80, 100) == pytest.approx(-20.0)
    assert calculate_growth(50, 0) == 0.0


def test_analyze_trends_latest_year():
    report = analyze_trends(_two_year_dataset())

    assert report.current_year == 2023
    assert report.previous_year == 2022
    growth = {metric.name: metric.growth for metric in report.metrics}
    assert growth == {
        "Total Assets": 10.0,
        "Total Revenue": 20.0,
        "Net Profit": -20.0,
        # No prior operating cash flow to grow from
        "Operating Cash Flow": 0.0,
    }


def test_analyze_trends_first_year_has_no_previous():
    report = analyze_trends(_two_year_dataset(), 2022)

    assert report.current_year == 2022
    assert report.previous_year is None
    assert all(metric.previous == 0 and metric.growth == 0 for metric in report.metrics)


def test_analyze_trends_sample_company(sample_financials):
    report = analyze_trends(load_dataset(sample_financials))

    growth = {metric.name: metric.growth for metric in report.metrics}
    assert growth["Total Assets"] == pytest.approx(8.7)
    assert growth["Total Revenue"] == pytest.approx(11.11)
    assert growth["Net Profit"] == pytest.approx(17.39)
    assert growth["Operating Cash Flow"] == pytest.approx(10.29)
