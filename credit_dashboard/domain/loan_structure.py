"""Loan structuring - EMI and monthly repayment-health projection"""

import math
from typing import List

from credit_dashboard.domain.models import (
    LoanParameters,
    MonthlyProjection,
    ProjectionSummary,
    RobustRatios,
)
from credit_dashboard.utils.numbers import clamp, round_half_up

BASELINE_HEALTH = 50
TIME_BONUS_MAX = 10
SEASONAL_AMPLITUDE = 0.15
STRESS_MULTIPLIER = 0.7  # 20% revenue shock


def calculate_emi(principal: float, annual_rate: float, term_years: int) -> int:
    """
    Equated monthly installment for a fully amortizing loan.

    EMI = P * r * (1 + r)^n / ((1 + r)^n - 1), with r the monthly rate and n
    the number of months, rounded to the nearest currency unit. A zero rate
    degenerates to P / n.

    Raises:
        ValueError: term is not positive, or the rate is too high to amortize
    """
    if term_years <= 0:
        raise ValueError(f"Repayment term must be positive, got {term_years}")
    if principal <= 0:
        return 0

    monthly_rate = annual_rate / 100 / 12
    months = term_years * 12

    if monthly_rate == 0:
        return round_half_up(principal / months)

    try:
        growth = math.pow(1 + monthly_rate, months)
    except OverflowError as e:
        raise ValueError(f"Interest rate {annual_rate}% is too high to amortize over {months} months") from e
    return round_half_up(principal * monthly_rate * growth / (growth - 1))


def base_health_score(ratios: RobustRatios) -> float:
    """
    Repayment health before time and seasonal adjustments.

    Starts at a neutral 50 and adds weighted contributions of reliable ratios:
    - 40%: current ratio, (cr - 0.5) * 25 within [0, 40]
    - 30%: net profit margin, margin * 2 within [0, 30]
    - 20%: interest coverage, (ic - 1) * 10 within [0, 20]
    - 10%: debt-to-equity, max(10 - de * 3, 0)
    """
    score = float(BASELINE_HEALTH)
    if ratios.current_ratio.is_reliable:
        score += clamp((ratios.current_ratio.value - 0.5) * 25, 0, 40) * 0.4
    if ratios.net_profit_margin.is_reliable:
        score += clamp(ratios.net_profit_margin.value * 2, 0, 30) * 0.3
    if ratios.interest_coverage.is_reliable:
        score += clamp((ratios.interest_coverage.value - 1) * 10, 0, 20) * 0.2
    if ratios.debt_to_equity.is_reliable:
        score += max(10 - ratios.debt_to_equity.value * 3, 0) * 0.1
    return score


def classify_risk(health_score: float) -> str:
    if health_score >= 70:
        return "low"
    elif health_score >= 50:
        return "moderate"
    else:
        return "high"


def seasonal_factor(month: int) -> float:
    """Business seasonality, +/-15% over a 12-month cycle"""
    return 1 + SEASONAL_AMPLITUDE * math.sin(2 * math.pi * month / 12)


def project_repayment(
    ratios: RobustRatios,
    params: LoanParameters,
    emi: int | None = None,
) -> List[MonthlyProjection]:
    """
    Month-by-month repayment projection.

    Each month amortizes the remaining principal (interest on the balance,
    the rest of the EMI against principal, balance floored at 0) and scores
    repayment health: base ratio health plus a time bonus that shrinks from
    10 points over the term, scaled by the seasonal factor and clamped to
    [0, 100]. The stress score applies a 0.7 multiplier to the same month.
    """
    if emi is None:
        emi = calculate_emi(params.loan_amount, params.interest_rate, params.repayment_term_years)

    months = params.repayment_term_years * 12
    monthly_rate = params.interest_rate / 100 / 12
    base = base_health_score(ratios)

    projection = []
    remaining = float(max(params.loan_amount, 0))
    for month in range(1, months + 1):
        interest = remaining * monthly_rate
        principal_paid = min(max(emi - interest, 0.0), remaining)
        remaining = max(0.0, remaining - principal_paid)

        factor = seasonal_factor(month)
        time_bonus = (months - month + 1) / months * TIME_BONUS_MAX
        health = clamp((base + time_bonus) * factor, 0, 100)
        stress = max(health * STRESS_MULTIPLIER, 0)

        projection.append(
            MonthlyProjection(
                month=month,
                remaining_principal=round(remaining, 2),
                emi=emi,
                interest_payment=round(interest, 2),
                principal_payment=round(principal_paid, 2),
                health_score=round_half_up(health),
                risk_level=classify_risk(health),
                seasonal_factor=round(factor, 4),
                stress_test_score=round_half_up(stress),
            )
        )

    return projection


def summarize_projection(projection: List[MonthlyProjection]) -> ProjectionSummary:
    """Averages and high-risk counts across a projection"""
    if not projection:
        return ProjectionSummary(
            months=0,
            emi=0,
            total_interest=0.0,
            average_health_score=0.0,
            average_stress_test_score=0.0,
            high_risk_months=0,
            stress_high_risk_months=0,
        )

    count = len(projection)
    return ProjectionSummary(
        months=count,
        emi=projection[0].emi,
        total_interest=round(sum(m.interest_payment for m in projection), 2),
        average_health_score=round(sum(m.health_score for m in projection) / count, 1),
        average_stress_test_score=round(sum(m.stress_test_score for m in projection) / count, 1),
        high_risk_months=sum(1 for m in projection if m.risk_level == "high"),
        stress_high_risk_months=sum(1 for m in projection if classify_risk(m.stress_test_score) == "high"),
    )
