"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field, asdict
from typing import Dict, List, Mapping, Optional, Tuple

BALANCE_SHEET = "Balance Sheet"
INCOME_STATEMENT = "Income Statement"
CASH_FLOW_STATEMENT = "Cash Flow Statement"

STATEMENTS = (BALANCE_SHEET, INCOME_STATEMENT, CASH_FLOW_STATEMENT)

# Balance sheet line items
TOTAL_ASSETS = "Total Assets"
CURRENT_ASSETS = "Current Assets"
CASH_AND_EQUIVALENTS = "Cash and Cash Equivalents"
INVENTORY = "Inventory"
ACCOUNTS_RECEIVABLE = "Accounts Receivable"
TOTAL_LIABILITIES = "Total Liabilities"
CURRENT_LIABILITIES = "Current Liabilities"
ACCOUNTS_PAYABLE = "Accounts Payable"
SHAREHOLDER_EQUITY = "Shareholder's Equity"
SHORT_TERM_DEBT = "Short-term Debt"
LONG_TERM_DEBT = "Long-term Debt"

# Income statement line items
TOTAL_REVENUE = "Total Revenue"
COGS = "Cost of Goods Sold (COGS)"
GROSS_PROFIT = "Gross Profit"
EBITDA = "EBITDA"
EBIT = "EBIT"
INTEREST_EXPENSE = "Interest Expense"
NET_PROFIT = "Net Profit"

# Cash flow statement line items
OPERATING_CASH_FLOW = "Operating Cash Flow"


@dataclass(frozen=True)
class FinancialFact:
    """Single line item extracted from a financial statement"""

    field_name: str
    value: float
    currency: str
    year: int
    confidence_score: float = 1.0


# Statement name -> ordered facts. Built by domain.dataset.load_dataset.
Dataset = Mapping[str, Tuple[FinancialFact, ...]]


@dataclass
class DataQualityIssue:
    """Inconsistency detected in the source facts"""

    type: str  # balance_sheet_violation | negative_value | missing_data | unrealistic_ratio
    field: str
    description: str
    severity: str  # high | medium | low
    suggested_fix: Optional[str] = None


@dataclass
class ValidationResult:
    """Outcome of validating one year-slice of a dataset"""

    is_valid: bool
    issues: List[DataQualityIssue]
    corrections: Dict[str, float]


@dataclass
class SafeRatioResult:
    """Atomic output of every ratio computation"""

    value: float
    is_reliable: bool
    warning: Optional[str] = None

    def usable_value(self) -> float:
        """Value to feed into scoring; unreliable ratios contribute nothing"""
        return self.value if self.is_reliable else 0.0


@dataclass
class RobustRatios:
    """The fixed ratio set for one (dataset, year) pair"""

    current_ratio: SafeRatioResult
    quick_ratio: SafeRatioResult
    cash_ratio: SafeRatioResult
    debt_to_equity: SafeRatioResult
    debt_ratio: SafeRatioResult
    capital_adequacy: SafeRatioResult
    gross_profit_margin: SafeRatioResult
    net_profit_margin: SafeRatioResult
    operating_margin: SafeRatioResult
    ebitda_margin: SafeRatioResult
    return_on_assets: SafeRatioResult
    return_on_equity: SafeRatioResult
    asset_turnover: SafeRatioResult
    inventory_turnover: SafeRatioResult
    interest_coverage: SafeRatioResult
    data_quality: ValidationResult

    def ratios(self) -> Dict[str, SafeRatioResult]:
        """Ratio name -> result, without the validation bundle"""
        return {
            name: value
            for name, value in vars(self).items()
            if isinstance(value, SafeRatioResult)
        }

    def unreliable(self) -> List[str]:
        return [name for name, result in self.ratios().items() if not result.is_reliable]


@dataclass
class ScoreBucket:
    """Points earned in one scoring bucket"""

    name: str
    points: int
    max_points: int
    contributions: Dict[str, int] = field(default_factory=dict)


@dataclass
class CompositeScore:
    """Eligibility score derived from ratios and optional bureau data"""

    score: int
    category: str  # Excellent | Good | Fair | Poor
    recommendation: str
    provisional: bool = False
    ratio_score: Optional[int] = None
    bureau_score: Optional[int] = None
    breakdown: List[ScoreBucket] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)


@dataclass
class LoanParameters:
    """User-adjustable loan terms"""

    loan_amount: float
    interest_rate: float  # annual %
    repayment_term_years: int


@dataclass
class LoanSuggestion:
    """Loan terms suggested from ratios and composite score"""

    amount: int
    rate: float
    term_years: int
    adjustment_factor: float

    def to_parameters(self) -> LoanParameters:
        return LoanParameters(
            loan_amount=self.amount,
            interest_rate=self.rate,
            repayment_term_years=self.term_years,
        )


@dataclass
class MonthlyProjection:
    """Single month in a repayment-health projection"""

    month: int
    remaining_principal: float
    emi: int
    interest_payment: float
    principal_payment: float
    health_score: int
    risk_level: str  # low | moderate | high
    seasonal_factor: float
    stress_test_score: int


@dataclass
class ProjectionSummary:
    """Aggregate view of a repayment projection"""

    months: int
    emi: int
    total_interest: float
    average_health_score: float
    average_stress_test_score: float
    high_risk_months: int
    stress_high_risk_months: int


@dataclass
class PaymentPerformance:
    on_time_payments: float  # %
    late_payments_30_days: int = 0
    late_payments_60_days: int = 0
    late_payments_90_days: int = 0
    defaults: int = 0


@dataclass
class CreditFacility:
    facility_type: str
    bank: str
    limit: float
    outstanding: float
    status: str
    days_past_due: int = 0


@dataclass
class NegativeInformation:
    bounced_checks: int = 0
    legal_cases: int = 0
    bankruptcy_history: bool = False
    restructuring_history: bool = False


@dataclass
class BureauReport:
    """Structured AECB credit-bureau report"""

    company_name: str
    credit_score: int
    risk_grade: str
    payment_performance: PaymentPerformance
    utilization_ratio: float  # %
    facilities: List[CreditFacility] = field(default_factory=list)
    inquiries_last_12_months: int = 0
    inquiries_last_6_months: int = 0
    negative_information: NegativeInformation = field(default_factory=NegativeInformation)
    personal_guarantors: int = 0
    corporate_guarantors: int = 0
    industry: Optional[str] = None
    trade_license: Optional[str] = None


@dataclass
class CADLoanFacts:
    """Cash-Against-Documents loan request"""

    requested_amount: float
    loan_tenor: int  # months
    collateral_value: float
    documents_coverage: float  # %
    trading_history: float  # years


@dataclass
class CADRatioInputs:
    current_ratio: float
    debt_service_coverage: float
    profit_margin: float  # %


@dataclass
class CADRatios:
    """
    Trade-finance view of one year of statements.

    Values that cannot be computed read as 0.
    """

    current_ratio: float
    quick_ratio: float
    cash_ratio: float
    working_capital_ratio: float
    debt_to_equity: float
    profit_margin: float  # %
    asset_turnover: float
    receivables_turnover: float
    inventory_turnover: float
    payables_turnover: float
    cash_conversion_cycle: float  # days
    debt_service_coverage: float
    concentration_risk: float  # receivables as % of revenue, capped at 100
    volatility_index: float  # mean absolute revenue / profit growth %
    credit_risk_score: int  # 100 minus deductions


@dataclass
class CADSuggestedTerms:
    max_amount: int
    interest_rate: float  # annual %
    tenor: int  # months
    additional_security: bool


@dataclass
class CADLoanRecommendation:
    decision: str  # approve | conditional | decline
    points: int
    reasons: List[str] = field(default_factory=list)
    suggested_terms: Optional[CADSuggestedTerms] = None


@dataclass
class CADScoreDetail:
    category: str
    item: str
    status: str  # excellent | good | poor
    points: int


@dataclass
class CADAssessmentResult:
    score: int
    category: str
    recommendation: str
    financial_strength: int
    loan_structure: int
    trading_history: int
    document_coverage: int
    loan_to_collateral: Optional[float]
    details: List[CADScoreDetail] = field(default_factory=list)


@dataclass
class GrowthMetric:
    name: str
    current: float
    previous: float
    growth: float  # %


@dataclass
class TrendReport:
    current_year: int
    previous_year: Optional[int]
    metrics: List[GrowthMetric] = field(default_factory=list)


def to_dict(obj) -> dict:
    """Serialize a domain dataclass for API responses and logs"""
    return asdict(obj)
