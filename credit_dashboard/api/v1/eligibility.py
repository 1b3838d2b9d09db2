"""POST /v1/score and /v1/loan/plan - eligibility score and repayment projection"""

import time
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request

from credit_dashboard.api.v1.schemas import (
    LoanPlanRequest,
    LoanPlanResponse,
    ScoreRequest,
    ScoreResponse,
)
from credit_dashboard.api.dependencies import get_request_id, get_scoring_engine
from credit_dashboard.domain.bureau import parse_bureau_report
from credit_dashboard.domain.dataset import load_dataset, resolve_year
from credit_dashboard.domain.exceptions import MissingDatasetError, UnsupportedInputError
from credit_dashboard.domain.loan_structure import calculate_emi, project_repayment, summarize_projection
from credit_dashboard.domain.models import BureauReport, LoanParameters, to_dict
from credit_dashboard.domain.ratios import calculate_robust_ratios
from credit_dashboard.domain.scoring import ScoringEngine
from credit_dashboard.infrastructure.observability.metrics import record_assessment, record_ratio_quality
from credit_dashboard.infrastructure.observability.logging import log_assessment

router = APIRouter()


@router.post("/score", response_model=ScoreResponse)
def create_score(
    request_body: ScoreRequest,
    request: Request,
    engine: ScoringEngine = Depends(get_scoring_engine),
):
    """
    Score loan eligibility for one year.

    Flow:
    1. Validate statements and compute robust ratios
    2. Score ratios (blended with bureau factors when a report is supplied)
    3. Suggest loan amount, rate and term from ratios and score
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        dataset = load_dataset(request_body.dataset)
        year = resolve_year(dataset, request_body.year)
        bureau: Optional[BureauReport] = None
        if request_body.bureau_report is not None:
            bureau = parse_bureau_report(request_body.bureau_report)
    except (MissingDatasetError, UnsupportedInputError) as e:
        logging.warning(f"Rejected input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    ratios = calculate_robust_ratios(dataset, year)
    score = engine.score(ratios, bureau)
    suggestion = engine.suggest_loan(ratios, score.score)

    duration_ms = (time.time() - start_time) * 1000
    record_ratio_quality(ratios)
    record_assessment(score.category)
    log_assessment(request_id, year, score.score, score.category, score.provisional, duration_ms)

    return ScoreResponse(year=year, score=to_dict(score), suggestion=to_dict(suggestion))


@router.post("/loan/plan", response_model=LoanPlanResponse)
def create_loan_plan(
    request_body: LoanPlanRequest,
    request: Request,
    engine: ScoringEngine = Depends(get_scoring_engine),
):
    """
    EMI and month-by-month repayment health projection.

    Loan terms not given in the request fall back to the suggestion derived
    from the composite score.
    """
    request_id = get_request_id(request)

    try:
        dataset = load_dataset(request_body.dataset)
        year = resolve_year(dataset, request_body.year)
        bureau: Optional[BureauReport] = None
        if request_body.bureau_report is not None:
            bureau = parse_bureau_report(request_body.bureau_report)
    except (MissingDatasetError, UnsupportedInputError) as e:
        logging.warning(f"Rejected input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    ratios = calculate_robust_ratios(dataset, year)
    score = engine.score(ratios, bureau)
    suggested = engine.suggest_loan(ratios, score.score).to_parameters()

    params = LoanParameters(
        loan_amount=request_body.loan_amount if request_body.loan_amount is not None else suggested.loan_amount,
        interest_rate=request_body.interest_rate if request_body.interest_rate is not None else suggested.interest_rate,
        repayment_term_years=request_body.repayment_term_years or suggested.repayment_term_years,
    )

    try:
        emi = calculate_emi(params.loan_amount, params.interest_rate, params.repayment_term_years)
    except ValueError as e:
        logging.warning(f"Rejected loan terms: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))
    projection = project_repayment(ratios, params, emi)

    return LoanPlanResponse(
        year=year,
        score=to_dict(score),
        parameters=to_dict(params),
        emi=emi,
        projection=[to_dict(month) for month in projection],
        summary=to_dict(summarize_projection(projection)),
    )
