"""Cash-Against-Documents loan assessment"""

from typing import List, Optional, Tuple

from credit_dashboard.domain.dataset import get_value, previous_year
from credit_dashboard.domain.models import (
    ACCOUNTS_PAYABLE,
    ACCOUNTS_RECEIVABLE,
    BALANCE_SHEET,
    CASH_FLOW_STATEMENT,
    CURRENT_ASSETS,
    CURRENT_LIABILITIES,
    INCOME_STATEMENT,
    INTEREST_EXPENSE,
    LONG_TERM_DEBT,
    NET_PROFIT,
    OPERATING_CASH_FLOW,
    SHORT_TERM_DEBT,
    TOTAL_ASSETS,
    TOTAL_REVENUE,
    CADAssessmentResult,
    CADLoanFacts,
    CADLoanRecommendation,
    CADRatioInputs,
    CADRatios,
    CADScoreDetail,
    CADSuggestedTerms,
    Dataset,
)
from credit_dashboard.domain.ratios import calculate_robust_ratios, safe_calculate
from credit_dashboard.domain.trends import calculate_growth
from credit_dashboard.utils.numbers import round_half_up

DAYS_PER_YEAR = 365

# (threshold, points, status) from best to worst; the last entry is the floor
Tiers = Tuple[Tuple[float, int, str], ...]

CURRENT_RATIO_TIERS: Tiers = ((1.5, 10, "excellent"), (1.2, 7, "good"), (float("-inf"), 3, "poor"))
DEBT_SERVICE_TIERS: Tiers = ((2.0, 15, "excellent"), (1.5, 10, "good"), (float("-inf"), 5, "poor"))
PROFIT_MARGIN_TIERS: Tiers = ((8, 15, "excellent"), (5, 10, "good"), (float("-inf"), 5, "poor"))
TRADING_HISTORY_TIERS: Tiers = ((5, 20, "excellent"), (3, 15, "good"), (float("-inf"), 8, "poor"))
DOCUMENT_COVERAGE_TIERS: Tiers = ((90, 15, "excellent"), (80, 12, "good"), (float("-inf"), 6, "poor"))

# Upper bounds: lower is better
LOAN_TO_COLLATERAL_TIERS: Tiers = ((70, 15, "excellent"), (85, 10, "good"), (float("inf"), 5, "poor"))
TENOR_TIERS: Tiers = ((6, 10, "excellent"), (12, 7, "good"), (float("inf"), 3, "poor"))

CAD_CATEGORIES = (
    (85, "Excellent", "Approve with standard terms"),
    (70, "Good", "Approve with enhanced monitoring"),
    (55, "Fair", "Conditional approval with restrictions"),
    (0, "Poor", "Decline or request additional security"),
)

# Minimum points for each recommendation, with the terms offered
APPROVE_POINTS = 75
CONDITIONAL_POINTS = 50
APPROVE_TERMS = dict(max_amount=50_000_000, interest_rate=4.5, tenor=12, additional_security=False)
CONDITIONAL_TERMS = dict(max_amount=25_000_000, interest_rate=6.0, tenor=6, additional_security=True)


def _at_least(value: float, tiers: Tiers) -> Tuple[int, str]:
    for threshold, points, status in tiers:
        if value >= threshold:
            return points, status
    return tiers[-1][1], tiers[-1][2]


def _at_most(value: float, tiers: Tiers) -> Tuple[int, str]:
    for threshold, points, status in tiers:
        if value <= threshold:
            return points, status
    return tiers[-1][1], tiers[-1][2]


def loan_to_collateral(requested_amount: float, collateral_value: float) -> Optional[float]:
    """Requested amount as a percentage of collateral; None without collateral"""
    if collateral_value <= 0:
        return None
    # Multiply first so 700000 / 1000000 lands exactly on 70
    return requested_amount * 100 / collateral_value


def cad_category(score: int) -> Tuple[str, str]:
    for threshold, category, recommendation in CAD_CATEGORIES:
        if score >= threshold:
            return category, recommendation
    return CAD_CATEGORIES[-1][1], CAD_CATEGORIES[-1][2]


def assess_cad_loan(loan: CADLoanFacts, ratios: CADRatioInputs) -> CADAssessmentResult:
    """
    Score a CAD facility request out of 100.

    Buckets:
    - Financial strength (40): current ratio, debt service coverage, profit margin
    - Loan structure (25): loan-to-collateral %, tenor in months
    - Trading history (20): years trading
    - Document coverage (15): % of trade covered by documents
    """
    details: List[CADScoreDetail] = []

    def award(category: str, item: str, scored: Tuple[int, str]) -> int:
        points, status = scored
        details.append(CADScoreDetail(category=category, item=item, status=status, points=points))
        return points

    financial = (
        award("Liquidity", "Current Ratio", _at_least(ratios.current_ratio, CURRENT_RATIO_TIERS))
        + award("Debt Service", "Coverage Ratio", _at_least(ratios.debt_service_coverage, DEBT_SERVICE_TIERS))
        + award("Profitability", "Profit Margin", _at_least(ratios.profit_margin, PROFIT_MARGIN_TIERS))
    )

    ltc = loan_to_collateral(loan.requested_amount, loan.collateral_value)
    ltc_scored = _at_most(ltc, LOAN_TO_COLLATERAL_TIERS) if ltc is not None else LOAN_TO_COLLATERAL_TIERS[-1][1:]
    structure = (
        award("Collateral", "Loan-to-Collateral Ratio", ltc_scored)
        + award("Structure", "Loan Tenor", _at_most(loan.loan_tenor, TENOR_TIERS))
    )

    trading = award("Experience", "Trading History", _at_least(loan.trading_history, TRADING_HISTORY_TIERS))
    documents = award(
        "Documentation", "Document Coverage", _at_least(loan.documents_coverage, DOCUMENT_COVERAGE_TIERS)
    )

    score = round_half_up(financial + structure + trading + documents)
    category, recommendation = cad_category(score)

    return CADAssessmentResult(
        score=score,
        category=category,
        recommendation=recommendation,
        financial_strength=financial,
        loan_structure=structure,
        trading_history=trading,
        document_coverage=documents,
        loan_to_collateral=ltc,
        details=details,
    )


def debt_service_coverage(operating_cash_flow: float, total_debt: float, interest_expense: float) -> float:
    """Operating cash flow over total debt plus interest; 0 for a company carrying no debt"""
    if total_debt == 0:
        return 0.0
    return safe_calculate(
        operating_cash_flow, total_debt + interest_expense, False, "Debt Service Coverage"
    ).usable_value()


def _days(turnover: float) -> float:
    return DAYS_PER_YEAR / turnover if turnover else 0.0


def credit_risk_score(
    current_ratio: float,
    debt_to_equity: float,
    profit_margin: float,
    debt_service_coverage: float,
    asset_turnover: float,
) -> int:
    """
    Start from 100 and deduct for weak ratios:
    - current ratio below 1.2: -20, below 1.5: -10
    - debt-to-equity above 3: -25, above 2: -15
    - profit margin below 2%: -20, below 5%: -10
    - debt service coverage below 1.0: -25, below 1.5: -15
    - asset turnover below 0.5: -10
    """
    score = 100

    if current_ratio < 1.2:
        score -= 20
    elif current_ratio < 1.5:
        score -= 10

    if debt_to_equity > 3:
        score -= 25
    elif debt_to_equity > 2:
        score -= 15

    if profit_margin < 2:
        score -= 20
    elif profit_margin < 5:
        score -= 10

    if debt_service_coverage < 1.0:
        score -= 25
    elif debt_service_coverage < 1.5:
        score -= 15

    if asset_turnover < 0.5:
        score -= 10

    return max(score, 0)


def calculate_cad_ratios(dataset: Dataset, year: int) -> CADRatios:
    """
    Trade-finance ratio set for one year.

    Ratios shared with the robust set (liquidity, leverage, margin, turnover)
    are taken from it, so the equity correction applies. Working capital is
    current assets less current liabilities. The volatility index compares
    against the previous year in the dataset, 0 when there is none.
    """
    ratios = calculate_robust_ratios(dataset, year)

    def value(statement: str, field_name: str, at_year: int = year) -> float:
        return get_value(dataset, statement, field_name, at_year)

    current_assets = value(BALANCE_SHEET, CURRENT_ASSETS)
    current_liabilities = value(BALANCE_SHEET, CURRENT_LIABILITIES)
    total_assets = value(BALANCE_SHEET, TOTAL_ASSETS)
    receivables = value(BALANCE_SHEET, ACCOUNTS_RECEIVABLE)
    payables = value(BALANCE_SHEET, ACCOUNTS_PAYABLE)
    total_debt = value(BALANCE_SHEET, SHORT_TERM_DEBT) + value(BALANCE_SHEET, LONG_TERM_DEBT)
    revenue = value(INCOME_STATEMENT, TOTAL_REVENUE)
    net_profit = value(INCOME_STATEMENT, NET_PROFIT)

    current_ratio = ratios.current_ratio.usable_value()
    debt_to_equity = ratios.debt_to_equity.usable_value()
    profit_margin = ratios.net_profit_margin.usable_value()
    asset_turnover = ratios.asset_turnover.usable_value()
    inventory_turnover = ratios.inventory_turnover.usable_value()

    receivables_turnover = safe_calculate(revenue, receivables, False, "Receivables Turnover").usable_value()
    payables_turnover = safe_calculate(revenue, payables, False, "Payables Turnover").usable_value()
    debt_service = debt_service_coverage(
        value(CASH_FLOW_STATEMENT, OPERATING_CASH_FLOW), total_debt, value(INCOME_STATEMENT, INTEREST_EXPENSE)
    )

    concentration = min(receivables / revenue * 100, 100) if revenue != 0 else 0.0

    prior = previous_year(dataset, year)
    volatility = 0.0
    if prior is not None:
        revenue_change = abs(calculate_growth(revenue, value(INCOME_STATEMENT, TOTAL_REVENUE, prior)))
        profit_change = abs(calculate_growth(net_profit, value(INCOME_STATEMENT, NET_PROFIT, prior)))
        volatility = (revenue_change + profit_change) / 2

    return CADRatios(
        current_ratio=current_ratio,
        quick_ratio=ratios.quick_ratio.usable_value(),
        cash_ratio=ratios.cash_ratio.usable_value(),
        working_capital_ratio=safe_calculate(
            current_assets - current_liabilities, total_assets, False, "Working Capital Ratio"
        ).usable_value(),
        debt_to_equity=debt_to_equity,
        profit_margin=profit_margin,
        asset_turnover=asset_turnover,
        receivables_turnover=receivables_turnover,
        inventory_turnover=inventory_turnover,
        payables_turnover=payables_turnover,
        cash_conversion_cycle=_days(receivables_turnover) + _days(inventory_turnover) - _days(payables_turnover),
        debt_service_coverage=debt_service,
        concentration_risk=concentration,
        volatility_index=volatility,
        credit_risk_score=credit_risk_score(
            current_ratio=current_ratio,
            debt_to_equity=debt_to_equity,
            profit_margin=profit_margin,
            debt_service_coverage=debt_service,
            asset_turnover=asset_turnover,
        ),
    )


def scoring_inputs(ratios: CADRatios) -> CADRatioInputs:
    return CADRatioInputs(
        current_ratio=ratios.current_ratio,
        debt_service_coverage=ratios.debt_service_coverage,
        profit_margin=ratios.profit_margin,
    )


def derive_cad_ratios(dataset: Dataset, year: int) -> CADRatioInputs:
    """CAD scoring inputs for one year of statements"""
    return scoring_inputs(calculate_cad_ratios(dataset, year))


def recommend_cad_loan(ratios: CADRatios) -> CADLoanRecommendation:
    """
    Approve / conditional / decline from the CAD ratio set.

    Points: liquidity 25, debt service 25, profitability 20, credit risk 20,
    cash conversion 10. 75+ approves on standard terms, 50+ approves with
    additional security on shorter terms, anything lower declines.
    """
    points = 0
    reasons: List[str] = []

    if ratios.current_ratio >= 1.5:
        points += 25
        reasons.append("Strong liquidity position")
    elif ratios.current_ratio >= 1.2:
        points += 15
        reasons.append("Adequate liquidity")
    else:
        reasons.append("Weak liquidity position - concern")

    if ratios.debt_service_coverage >= 2.0:
        points += 25
        reasons.append("Excellent debt service capability")
    elif ratios.debt_service_coverage >= 1.5:
        points += 15
        reasons.append("Good debt service capability")
    else:
        reasons.append("Insufficient debt service coverage")

    if ratios.profit_margin >= 8:
        points += 20
        reasons.append("Strong profitability")
    elif ratios.profit_margin >= 5:
        points += 12
        reasons.append("Moderate profitability")
    elif ratios.profit_margin < 2:
        reasons.append("Low profitability - risk factor")

    if ratios.credit_risk_score >= 80:
        points += 20
        reasons.append("Low credit risk profile")
    elif ratios.credit_risk_score >= 60:
        points += 10
        reasons.append("Moderate credit risk")
    else:
        reasons.append("High credit risk profile")

    if ratios.cash_conversion_cycle <= 30:
        points += 10
        reasons.append("Efficient working capital management")
    elif ratios.cash_conversion_cycle > 60:
        reasons.append("Extended cash conversion cycle")

    if points >= APPROVE_POINTS:
        return CADLoanRecommendation("approve", points, reasons, CADSuggestedTerms(**APPROVE_TERMS))
    if points >= CONDITIONAL_POINTS:
        return CADLoanRecommendation("conditional", points, reasons, CADSuggestedTerms(**CONDITIONAL_TERMS))
    return CADLoanRecommendation("decline", points, reasons)
