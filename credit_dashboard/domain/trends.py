"""Year-over-year trend analysis"""

from typing import List, Optional

from credit_dashboard.domain.dataset import get_value, previous_year, resolve_year
from credit_dashboard.domain.models import (
    BALANCE_SHEET,
    CASH_FLOW_STATEMENT,
    INCOME_STATEMENT,
    NET_PROFIT,
    OPERATING_CASH_FLOW,
    TOTAL_ASSETS,
    TOTAL_REVENUE,
    Dataset,
    GrowthMetric,
    TrendReport,
)

TRACKED_FIGURES = (
    (BALANCE_SHEET, TOTAL_ASSETS),
    (INCOME_STATEMENT, TOTAL_REVENUE),
    (INCOME_STATEMENT, NET_PROFIT),
    (CASH_FLOW_STATEMENT, OPERATING_CASH_FLOW),
)


def calculate_growth(current: float, previous: float) -> float:
    """Percentage change; 0 when there is no base to grow from"""
    if previous == 0:
        return 0.0
    return (current - previous) / previous * 100


def analyze_trends(dataset: Dataset, year: Optional[int] = None) -> TrendReport:
    """
    Growth of headline figures between a year and the one before it.

    Defaults to the latest year in the dataset. A dataset with a single year
    yields zero growth against a previous value of 0.
    """
    current_year = resolve_year(dataset, year)
    prior_year = previous_year(dataset, current_year)

    metrics: List[GrowthMetric] = []
    for statement, field_name in TRACKED_FIGURES:
        current = get_value(dataset, statement, field_name, current_year)
        previous = get_value(dataset, statement, field_name, prior_year) if prior_year is not None else 0.0
        metrics.append(
            GrowthMetric(
                name=field_name,
                current=current,
                previous=previous,
                growth=round(calculate_growth(current, previous), 2),
            )
        )

    return TrendReport(current_year=current_year, previous_year=prior_year, metrics=metrics)
