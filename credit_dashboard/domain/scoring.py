"""Eligibility scoring engine - core business logic for loan decisions"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from credit_dashboard.domain.models import (
    BureauReport,
    CompositeScore,
    LoanSuggestion,
    RobustRatios,
    SafeRatioResult,
    ScoreBucket,
)
from credit_dashboard.utils.numbers import clamp, round_half_up


@dataclass(frozen=True)
class Tier:
    """Points awarded once a ratio reaches threshold"""

    threshold: float
    points: float


@dataclass(frozen=True)
class RatioRule:
    """
    Tiered points for one ratio.

    Tiers are checked in order and the first satisfied tier wins, so they must
    run from best to worst. Unreliable ratios always earn 0.
    """

    ratio: str
    tiers: Tuple[Tier, ...]
    higher_is_better: bool = True
    positive_only: bool = False

    def points_for(self, result: SafeRatioResult) -> float:
        if not result.is_reliable:
            return 0
        value = result.value
        if self.positive_only and value <= 0:
            return 0
        for tier in self.tiers:
            reached = value >= tier.threshold if self.higher_is_better else value <= tier.threshold
            if reached:
                return tier.points
        return 0


@dataclass(frozen=True)
class Bucket:
    name: str
    max_points: int
    rules: Tuple[RatioRule, ...]


@dataclass(frozen=True)
class CategoryBand:
    threshold: int
    category: str
    recommendation: str


def _rule(ratio: str, *tiers: Tuple[float, float], lower_is_better: bool = False, positive_only: bool = False) -> RatioRule:
    return RatioRule(
        ratio=ratio,
        tiers=tuple(Tier(threshold, points) for threshold, points in tiers),
        higher_is_better=not lower_is_better,
        positive_only=positive_only,
    )


# Bucket caps sum to 100: 25 + 20 + 25 + 20 + 10
DEFAULT_BUCKETS = (
    Bucket(
        "Liquidity",
        25,
        (
            _rule("current_ratio", (2.0, 10), (1.5, 7), (1.0, 4)),
            _rule("quick_ratio", (1.0, 8), (0.8, 5), (0.5, 2)),
            _rule("cash_ratio", (0.5, 7), (0.2, 4), (0.1, 2)),
        ),
    ),
    Bucket(
        "Leverage",
        20,
        (
            _rule("debt_to_equity", (1.0, 10), (2.0, 7), (3.0, 3), lower_is_better=True, positive_only=True),
            _rule("capital_adequacy", (50, 10), (30, 6), (20, 3)),
        ),
    ),
    Bucket(
        "Profitability",
        25,
        (
            _rule("net_profit_margin", (10, 8), (5, 5), (2, 2)),
            _rule("return_on_assets", (15, 8), (10, 5), (5, 2)),
            _rule("operating_margin", (15, 9), (8, 6), (5, 3)),
        ),
    ),
    Bucket(
        "Efficiency & Coverage",
        20,
        (
            _rule("interest_coverage", (5.0, 8), (2.5, 5), (1.5, 2)),
            _rule("asset_turnover", (1.5, 6), (1.0, 4), (0.5, 2)),
            _rule("inventory_turnover", (6.0, 6), (4.0, 4), (2.0, 2)),
        ),
    ),
    Bucket(
        "Market Performance",
        10,
        (
            _rule("gross_profit_margin", (30, 5), (20, 3), (15, 1)),
            _rule("return_on_equity", (20, 5), (15, 3), (10, 1)),
        ),
    ),
)

DEFAULT_CATEGORIES = (
    CategoryBand(85, "Excellent", "Strong candidate for loan approval on standard terms"),
    CategoryBand(70, "Good", "Approve with standard monitoring; additional collateral may be requested"),
    CategoryBand(55, "Fair", "Higher risk - enhanced due diligence and additional security required"),
    CategoryBand(0, "Poor", "High risk - loan approval not recommended"),
)

# Adjustment-factor increments for the suggested loan amount
DEFAULT_SUGGESTION_RULES = (
    _rule("net_profit_margin", (10, 0.3), (5, 0.1)),
    _rule("current_ratio", (2.0, 0.2), (1.5, 0.1)),
    _rule("debt_to_equity", (1.0, 0.2), (2.0, 0.1), lower_is_better=True, positive_only=True),
    _rule("return_on_assets", (15, 0.2), (10, 0.1)),
)

# Composite score -> suggested annual interest rate (%)
DEFAULT_RATE_BANDS = ((85, 8.0), (70, 10.0), (55, 12.0), (0, 15.0))

# Bureau factor maxima; credit score normalised over the AECB 300-850 range
BUREAU_SCORE_MIN = 300
BUREAU_SCORE_MAX = 850
BUREAU_CREDIT_SCORE_POINTS = 25
BUREAU_PAYMENT_POINTS = 20
BUREAU_UTILIZATION_POINTS = 15
BOUNCED_CHECK_DEDUCTION = 2
LEGAL_CASE_DEDUCTION = 3
RESTRUCTURING_DEDUCTION = 5
BANKRUPTCY_DEDUCTION = 5


@dataclass(frozen=True)
class ScoringConfig:
    """All weights and thresholds used by the scoring engine"""

    buckets: Tuple[Bucket, ...] = DEFAULT_BUCKETS
    categories: Tuple[CategoryBand, ...] = DEFAULT_CATEGORIES
    bureau_weight: float = 0.4
    base_loan_amount: int = 120_000
    suggestion_rules: Tuple[RatioRule, ...] = DEFAULT_SUGGESTION_RULES
    rate_bands: Tuple[Tuple[int, float], ...] = DEFAULT_RATE_BANDS
    suggested_term_years: int = 3


def blend_scores(ratio_score: float, bureau_score: float, bureau_weight: float = 0.4) -> int:
    """
    Blend the ratio-only score with the bureau factor score.

    final = (1 - w) * ratio_score + w * bureau_score, rounded half up.
    The default weight gives 60% ratios / 40% bureau.
    """
    if not 0.0 <= bureau_weight <= 1.0:
        raise ValueError(f"bureau_weight must be within [0, 1], got {bureau_weight}")
    blended = (1.0 - bureau_weight) * ratio_score + bureau_weight * bureau_score
    return int(clamp(round_half_up(blended), 0, 100))


def bureau_factor_score(report: BureauReport) -> int:
    """
    Score a bureau report from 0 (worst) to 100 (best).

    Components (60 points before normalisation):
    - 25: credit score, linear over 300-850
    - 20: on-time payment percentage
    - 15: credit utilization, lower is better
    Negative information is deducted: 2 per bounced check, 3 per legal
    case, 5 for a restructuring and 5 for a bankruptcy history.
    """
    score_span = BUREAU_SCORE_MAX - BUREAU_SCORE_MIN
    credit_points = clamp(
        (report.credit_score - BUREAU_SCORE_MIN) / score_span * BUREAU_CREDIT_SCORE_POINTS,
        0,
        BUREAU_CREDIT_SCORE_POINTS,
    )
    payment_points = clamp(
        report.payment_performance.on_time_payments / 100 * BUREAU_PAYMENT_POINTS,
        0,
        BUREAU_PAYMENT_POINTS,
    )
    utilization_points = clamp(
        BUREAU_UTILIZATION_POINTS - report.utilization_ratio / 100 * BUREAU_UTILIZATION_POINTS,
        0,
        BUREAU_UTILIZATION_POINTS,
    )

    negative = report.negative_information
    deduction = negative.bounced_checks * BOUNCED_CHECK_DEDUCTION + negative.legal_cases * LEGAL_CASE_DEDUCTION
    if negative.restructuring_history:
        deduction += RESTRUCTURING_DEDUCTION
    if negative.bankruptcy_history:
        deduction += BANKRUPTCY_DEDUCTION

    max_points = BUREAU_CREDIT_SCORE_POINTS + BUREAU_PAYMENT_POINTS + BUREAU_UTILIZATION_POINTS
    raw = credit_points + payment_points + utilization_points - deduction
    return int(clamp(round_half_up(raw / max_points * 100), 0, 100))


def categorize_score(score: int, categories: Tuple[CategoryBand, ...] = DEFAULT_CATEGORIES) -> CategoryBand:
    """Map a 0-100 score to its category band (thresholds are inclusive)"""
    for band in categories:
        if score >= band.threshold:
            return band
    return categories[-1]


class ScoringEngine:
    """Turns a ratio set (and optionally a bureau report) into a composite score"""

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    def score_buckets(self, ratios: RobustRatios) -> List[ScoreBucket]:
        results = ratios.ratios()
        buckets = []
        for bucket in self.config.buckets:
            contributions = {
                rule.ratio: int(rule.points_for(results[rule.ratio])) for rule in bucket.rules
            }
            points = min(sum(contributions.values()), bucket.max_points)
            buckets.append(
                ScoreBucket(
                    name=bucket.name,
                    points=points,
                    max_points=bucket.max_points,
                    contributions=contributions,
                )
            )
        return buckets

    @staticmethod
    def _total(breakdown: List[ScoreBucket]) -> int:
        return int(clamp(round_half_up(sum(bucket.points for bucket in breakdown)), 0, 100))

    def ratio_score(self, ratios: RobustRatios) -> int:
        return self._total(self.score_buckets(ratios))

    def score(self, ratios: RobustRatios, bureau: Optional[BureauReport] = None) -> CompositeScore:
        """
        Composite score for one year.

        Without a bureau report the ratio score is final. With one, it is
        blended with the bureau factor score using config.bureau_weight.
        Invalid source data marks the result provisional.
        """
        breakdown = self.score_buckets(ratios)
        ratio_score = self._total(breakdown)
        notes: List[str] = []

        bureau_score = None
        if bureau is not None:
            bureau_score = bureau_factor_score(bureau)
            final = blend_scores(ratio_score, bureau_score, self.config.bureau_weight)
        else:
            final = ratio_score
            notes.append("No credit bureau data supplied; score is based on financial ratios only")

        provisional = not ratios.data_quality.is_valid
        if provisional:
            notes.append("Source data failed validation; score is provisional")

        unreliable = ratios.unreliable()
        if unreliable:
            notes.append(f"Unreliable ratios excluded from scoring: {', '.join(unreliable)}")

        band = categorize_score(final, self.config.categories)
        return CompositeScore(
            score=final,
            category=band.category,
            recommendation=band.recommendation,
            provisional=provisional,
            ratio_score=ratio_score,
            bureau_score=bureau_score,
            breakdown=breakdown,
            notes=notes,
        )

    def suggest_rate(self, score: int) -> float:
        for threshold, rate in self.config.rate_bands:
            if score >= threshold:
                return rate
        return self.config.rate_bands[-1][1]

    def suggest_loan(self, ratios: RobustRatios, score: int) -> LoanSuggestion:
        """
        Suggested loan terms.

        Amount: base amount scaled by a factor that starts at 1.0 and grows
        with net margin, current ratio, debt-to-equity and ROA tiers.
        Rate: banded on the composite score. Term: fixed.
        """
        results = ratios.ratios()
        factor = 1.0
        for rule in self.config.suggestion_rules:
            factor += rule.points_for(results[rule.ratio])
        factor = round(factor, 4)

        return LoanSuggestion(
            amount=round_half_up(self.config.base_loan_amount * factor),
            rate=self.suggest_rate(score),
            term_years=self.config.suggested_term_years,
            adjustment_factor=factor,
        )
