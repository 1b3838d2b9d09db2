"""Robust financial ratio calculation"""

import logging
import math
from typing import Dict

from credit_dashboard.domain.dataset import available_years, get_value
from credit_dashboard.domain.models import (
    BALANCE_SHEET,
    CASH_AND_EQUIVALENTS,
    COGS,
    CURRENT_ASSETS,
    CURRENT_LIABILITIES,
    EBIT,
    EBITDA,
    GROSS_PROFIT,
    INCOME_STATEMENT,
    INTEREST_EXPENSE,
    INVENTORY,
    NET_PROFIT,
    SHAREHOLDER_EQUITY,
    TOTAL_ASSETS,
    TOTAL_LIABILITIES,
    TOTAL_REVENUE,
    Dataset,
    RobustRatios,
    SafeRatioResult,
)
from credit_dashboard.domain.validation import validate_financial_data

logger = logging.getLogger(__name__)

MAX_PERCENTAGE = 1000
MAX_RATIO = 100


def safe_calculate(
    numerator: float,
    denominator: float,
    is_percentage: bool = False,
    ratio_name: str = "",
) -> SafeRatioResult:
    """
    Divide two figures without ever propagating NaN or infinity.

    Non-finite operands, a zero denominator, or a negative numerator on a
    margin ratio yield value 0 marked unreliable. Implausible results
    (beyond +/-1000% or +/-100x) keep their value but are marked unreliable.
    """
    if not math.isfinite(numerator) or not math.isfinite(denominator):
        return SafeRatioResult(
            value=0.0,
            is_reliable=False,
            warning=f"Invalid data for {ratio_name} calculation",
        )

    if denominator == 0:
        return SafeRatioResult(
            value=0.0,
            is_reliable=False,
            warning=f"Cannot calculate {ratio_name} - denominator is zero",
        )

    if numerator < 0 and "Margin" in ratio_name:
        return SafeRatioResult(
            value=0.0,
            is_reliable=False,
            warning=f"Negative value detected for {ratio_name}",
        )

    result = numerator / denominator
    value = result * 100 if is_percentage else result

    if is_percentage and abs(value) > MAX_PERCENTAGE:
        return SafeRatioResult(
            value=value,
            is_reliable=False,
            warning=f"Unusually high value for {ratio_name}: {value:.1f}%",
        )
    if not is_percentage and abs(value) > MAX_RATIO:
        return SafeRatioResult(
            value=value,
            is_reliable=False,
            warning=f"Unusually high ratio for {ratio_name}: {value:.2f}",
        )

    return SafeRatioResult(value=value, is_reliable=True)


def calculate_robust_ratios(dataset: Dataset, year: int) -> RobustRatios:
    """
    Compute the fixed ratio set for one year.

    Validation runs first; a proposed Shareholder's Equity correction replaces
    the reported equity for every ratio that uses it. Nothing else is
    corrected.
    """
    validation = validate_financial_data(dataset, year)

    def bs(field_name: str) -> float:
        return get_value(dataset, BALANCE_SHEET, field_name, year)

    def inc(field_name: str) -> float:
        return get_value(dataset, INCOME_STATEMENT, field_name, year)

    total_assets = bs(TOTAL_ASSETS)
    current_assets = bs(CURRENT_ASSETS)
    current_liabilities = bs(CURRENT_LIABILITIES)
    total_liabilities = bs(TOTAL_LIABILITIES)
    equity = bs(SHAREHOLDER_EQUITY)
    inventory = bs(INVENTORY)
    cash = bs(CASH_AND_EQUIVALENTS)

    if SHAREHOLDER_EQUITY in validation.corrections:
        equity = validation.corrections[SHAREHOLDER_EQUITY]
        logger.debug("Applied equity correction", extra={"year": year, "equity": equity})

    revenue = inc(TOTAL_REVENUE)
    net_profit = inc(NET_PROFIT)
    gross_profit = inc(GROSS_PROFIT)
    ebit = inc(EBIT)
    ebitda = inc(EBITDA)
    interest_expense = inc(INTEREST_EXPENSE)
    cogs = inc(COGS)

    return RobustRatios(
        # Liquidity
        current_ratio=safe_calculate(current_assets, current_liabilities, False, "Current Ratio"),
        quick_ratio=safe_calculate(current_assets - inventory, current_liabilities, False, "Quick Ratio"),
        cash_ratio=safe_calculate(cash, current_liabilities, False, "Cash Ratio"),
        # Leverage
        debt_to_equity=safe_calculate(total_liabilities, equity, False, "Debt-to-Equity"),
        debt_ratio=safe_calculate(total_liabilities, total_assets, True, "Debt Ratio"),
        capital_adequacy=safe_calculate(equity, total_assets, True, "Capital Adequacy"),
        # Profitability
        gross_profit_margin=safe_calculate(gross_profit, revenue, True, "Gross Profit Margin"),
        net_profit_margin=safe_calculate(net_profit, revenue, True, "Net Profit Margin"),
        operating_margin=safe_calculate(ebit, revenue, True, "Operating Margin"),
        ebitda_margin=safe_calculate(ebitda, revenue, True, "EBITDA Margin"),
        return_on_assets=safe_calculate(net_profit, total_assets, True, "Return on Assets"),
        return_on_equity=safe_calculate(net_profit, equity, True, "Return on Equity"),
        # Efficiency
        asset_turnover=safe_calculate(revenue, total_assets, False, "Asset Turnover"),
        inventory_turnover=safe_calculate(cogs, inventory, False, "Inventory Turnover"),
        interest_coverage=safe_calculate(ebit, interest_expense, False, "Interest Coverage"),
        data_quality=validation,
    )


def calculate_ratios_by_year(dataset: Dataset) -> Dict[int, RobustRatios]:
    """Ratios for every year in the dataset; each year is independent"""
    return {year: calculate_robust_ratios(dataset, year) for year in available_years(dataset)}
