"""Financial data validation - consistency checks on one year of statements"""

import logging
from typing import Dict, List

from credit_dashboard.domain.dataset import get_value
from credit_dashboard.domain.models import (
    BALANCE_SHEET,
    CURRENT_ASSETS,
    INCOME_STATEMENT,
    SHAREHOLDER_EQUITY,
    TOTAL_ASSETS,
    TOTAL_LIABILITIES,
    TOTAL_REVENUE,
    DataQualityIssue,
    Dataset,
    ValidationResult,
)

logger = logging.getLogger(__name__)

BALANCE_TOLERANCE = 0.05
MAX_DEBT_TO_EQUITY = 10

# Fields that must never be negative
NON_NEGATIVE_FIELDS = (
    (BALANCE_SHEET, TOTAL_ASSETS),
    (BALANCE_SHEET, CURRENT_ASSETS),
    (INCOME_STATEMENT, TOTAL_REVENUE),
)


def validate_financial_data(dataset: Dataset, year: int) -> ValidationResult:
    """
    Inspect one year of facts for internal consistency.

    Checks, in order:
    - Balance sheet identity: |Assets - (Liabilities + Equity)| within 5% of Assets
    - Negative Total Assets, Current Assets or Total Revenue
    - Missing Total Assets or Total Revenue
    - Debt-to-equity above 10x
    - Current assets exceeding total assets

    Only the equity figure is ever corrected: when the identity fails, equity
    is re-derived as Assets - Liabilities (kept only if positive).
    """
    issues: List[DataQualityIssue] = []
    corrections: Dict[str, float] = {}

    total_assets = get_value(dataset, BALANCE_SHEET, TOTAL_ASSETS, year)
    current_assets = get_value(dataset, BALANCE_SHEET, CURRENT_ASSETS, year)
    total_liabilities = get_value(dataset, BALANCE_SHEET, TOTAL_LIABILITIES, year)
    shareholder_equity = get_value(dataset, BALANCE_SHEET, SHAREHOLDER_EQUITY, year)
    total_revenue = get_value(dataset, INCOME_STATEMENT, TOTAL_REVENUE, year)

    logger.debug(
        "Validating financial data",
        extra={
            "year": year,
            "total_assets": total_assets,
            "total_liabilities": total_liabilities,
            "shareholder_equity": shareholder_equity,
        },
    )

    # Balance sheet equation
    balance_error = abs(total_assets - (total_liabilities + shareholder_equity))
    if balance_error > total_assets * BALANCE_TOLERANCE:
        issues.append(
            DataQualityIssue(
                type="balance_sheet_violation",
                field=BALANCE_SHEET,
                description=(
                    f"Balance sheet equation violated: Assets ({total_assets:.0f}) != "
                    f"Liabilities + Equity ({total_liabilities + shareholder_equity:.0f})"
                ),
                severity="high",
                suggested_fix="Verify data extraction accuracy or adjust equity calculation",
            )
        )
        corrected_equity = total_assets - total_liabilities
        if corrected_equity > 0:
            corrections[SHAREHOLDER_EQUITY] = corrected_equity
            logger.debug("Suggested equity correction", extra={"year": year, "corrected_equity": corrected_equity})

    for statement, field_name in NON_NEGATIVE_FIELDS:
        value = get_value(dataset, statement, field_name, year)
        if value < 0:
            issues.append(
                DataQualityIssue(
                    type="negative_value",
                    field=field_name,
                    description=f"{field_name} has negative value: {value}",
                    severity="high",
                    suggested_fix="Check data source for errors",
                )
            )

    if total_assets == 0 or total_revenue == 0:
        issues.append(
            DataQualityIssue(
                type="missing_data",
                field="Critical Financial Data",
                description="Missing essential financial data for ratio calculations",
                severity="high",
                suggested_fix="Ensure all required financial statements are properly imported",
            )
        )

    if total_liabilities > 0 and shareholder_equity > 0:
        debt_to_equity = total_liabilities / shareholder_equity
        if debt_to_equity > MAX_DEBT_TO_EQUITY:
            issues.append(
                DataQualityIssue(
                    type="unrealistic_ratio",
                    field="Debt-to-Equity Ratio",
                    description=f"Extremely high debt-to-equity ratio: {debt_to_equity:.2f}",
                    severity="medium",
                    suggested_fix="Review liability and equity classifications",
                )
            )

    if current_assets > total_assets:
        issues.append(
            DataQualityIssue(
                type="balance_sheet_violation",
                field=CURRENT_ASSETS,
                description=(
                    f"Current assets ({current_assets:.0f}) exceed total assets ({total_assets:.0f})"
                ),
                severity="high",
                suggested_fix="Verify current assets calculation",
            )
        )

    return ValidationResult(
        is_valid=not any(issue.severity == "high" for issue in issues),
        issues=issues,
        corrections=corrections,
    )
