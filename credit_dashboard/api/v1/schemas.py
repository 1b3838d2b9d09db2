"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class DatasetRequest(BaseModel):
    """Financial statements keyed by statement name, plus the year to analyse"""

    dataset: Dict[str, Any] = Field(..., description="Statement name -> list of financial facts")
    year: Optional[int] = Field(None, description="Defaults to the latest year in the dataset")


class ScoreRequest(DatasetRequest):
    """Request body for POST /v1/score"""

    bureau_report: Optional[Dict[str, Any]] = Field(None, description="AECB credit report")


class LoanPlanRequest(ScoreRequest):
    """Request body for POST /v1/loan/plan; omitted terms default to the suggestion"""

    loan_amount: Optional[float] = Field(None, gt=0)
    interest_rate: Optional[float] = Field(None, ge=0, le=100, description="Annual interest rate in %")
    repayment_term_years: Optional[int] = Field(None, gt=0, le=30)


class CADLoanSchema(BaseModel):
    requested_amount: float = Field(..., gt=0)
    loan_tenor: int = Field(..., gt=0, description="Tenor in months")
    collateral_value: float = Field(..., ge=0)
    documents_coverage: float = Field(..., ge=0, le=100, description="% of trade covered by documents")
    trading_history: float = Field(..., ge=0, description="Years of trading history")


class CADRequest(DatasetRequest):
    """Request body for POST /v1/cad/assessment"""

    loan: CADLoanSchema


class SourceLoadRequest(BaseModel):
    trade_license: Optional[str] = Field(None, min_length=1)


class SafeRatioSchema(BaseModel):
    value: float
    is_reliable: bool
    warning: Optional[str] = None


class DataQualityIssueSchema(BaseModel):
    type: str
    field: str
    description: str
    severity: str
    suggested_fix: Optional[str] = None


class ValidationSchema(BaseModel):
    is_valid: bool
    issues: List[DataQualityIssueSchema]
    corrections: Dict[str, float]


class RatiosResponse(BaseModel):
    """Response for POST /v1/ratios"""

    year: int
    ratios: Dict[str, SafeRatioSchema]
    data_quality: ValidationSchema


class ScoreBucketSchema(BaseModel):
    name: str
    points: int
    max_points: int
    contributions: Dict[str, int]


class CompositeScoreSchema(BaseModel):
    score: int
    category: str
    recommendation: str
    provisional: bool
    ratio_score: Optional[int] = None
    bureau_score: Optional[int] = None
    breakdown: List[ScoreBucketSchema]
    notes: List[str]


class LoanSuggestionSchema(BaseModel):
    amount: int
    rate: float
    term_years: int
    adjustment_factor: float


class ScoreResponse(BaseModel):
    """Response for POST /v1/score"""

    year: int
    score: CompositeScoreSchema
    suggestion: LoanSuggestionSchema


class LoanParametersSchema(BaseModel):
    loan_amount: float
    interest_rate: float
    repayment_term_years: int


class MonthlyProjectionSchema(BaseModel):
    month: int
    remaining_principal: float
    emi: int
    interest_payment: float
    principal_payment: float
    health_score: int
    risk_level: str
    seasonal_factor: float
    stress_test_score: int


class ProjectionSummarySchema(BaseModel):
    months: int
    emi: int
    total_interest: float
    average_health_score: float
    average_stress_test_score: float
    high_risk_months: int
    stress_high_risk_months: int


class LoanPlanResponse(BaseModel):
    """Response for POST /v1/loan/plan"""

    year: int
    score: CompositeScoreSchema
    parameters: LoanParametersSchema
    emi: int
    projection: List[MonthlyProjectionSchema]
    summary: ProjectionSummarySchema


class CADDetailSchema(BaseModel):
    category: str
    item: str
    status: str
    points: int


class CADRatiosSchema(BaseModel):
    current_ratio: float
    quick_ratio: float
    cash_ratio: float
    working_capital_ratio: float
    debt_to_equity: float
    profit_margin: float
    asset_turnover: float
    receivables_turnover: float
    inventory_turnover: float
    payables_turnover: float
    cash_conversion_cycle: float
    debt_service_coverage: float
    concentration_risk: float
    volatility_index: float
    credit_risk_score: int


class CADSuggestedTermsSchema(BaseModel):
    max_amount: int
    interest_rate: float
    tenor: int
    additional_security: bool


class CADLoanRecommendationSchema(BaseModel):
    decision: str
    points: int
    reasons: List[str]
    suggested_terms: Optional[CADSuggestedTermsSchema] = None


class CADResponse(BaseModel):
    """Response for POST /v1/cad/assessment"""

    year: int
    score: int
    category: str
    recommendation: str
    financial_strength: int
    loan_structure: int
    trading_history: int
    document_coverage: int
    loan_to_collateral: Optional[float] = None
    details: List[CADDetailSchema]
    ratios: CADRatiosSchema
    loan_recommendation: CADLoanRecommendationSchema


class GrowthMetricSchema(BaseModel):
    name: str
    current: float
    previous: float
    growth: float


class TrendsResponse(BaseModel):
    """Response for POST /v1/trends"""

    current_year: int
    previous_year: Optional[int] = None
    metrics: List[GrowthMetricSchema]


class DataSourceSchema(BaseModel):
    id: str
    name: str
    type: str
    category: str
    description: str


class SourcesResponse(BaseModel):
    """Response for GET /v1/sources"""

    sources: List[DataSourceSchema]


class SourceLoadResponse(BaseModel):
    """Response for POST /v1/sources/{source_id}/load"""

    source_id: str
    dataset: Optional[Dict[str, List[Dict[str, Any]]]] = None
    bureau_report: Optional[Dict[str, Any]] = None
