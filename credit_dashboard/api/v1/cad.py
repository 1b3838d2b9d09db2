"""POST /v1/cad/assessment - Cash-Against-Documents loan assessment"""

import logging
from fastapi import APIRouter, HTTPException, Request

from credit_dashboard.api.v1.schemas import CADRequest, CADResponse
from credit_dashboard.api.dependencies import get_request_id
from credit_dashboard.domain.cad import (
    assess_cad_loan,
    calculate_cad_ratios,
    recommend_cad_loan,
    scoring_inputs,
)
from credit_dashboard.domain.dataset import load_dataset, resolve_year
from credit_dashboard.domain.exceptions import MissingDatasetError, UnsupportedInputError
from credit_dashboard.domain.models import CADLoanFacts, to_dict
from credit_dashboard.infrastructure.observability.metrics import record_cad_assessment

router = APIRouter()


@router.post("/cad/assessment", response_model=CADResponse)
def create_cad_assessment(request_body: CADRequest, request: Request):
    """
    Score a CAD facility from the loan terms and one year of statements.

    Returns:
        Score out of 100 with per-bucket points, category and recommendation,
        the trade-finance ratio set, and an approve / conditional / decline
        recommendation with suggested terms
    """
    request_id = get_request_id(request)

    try:
        dataset = load_dataset(request_body.dataset)
        year = resolve_year(dataset, request_body.year)
    except (MissingDatasetError, UnsupportedInputError) as e:
        logging.warning(f"Rejected dataset: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    loan = CADLoanFacts(**request_body.loan.model_dump())
    cad_ratios = calculate_cad_ratios(dataset, year)
    result = assess_cad_loan(loan, scoring_inputs(cad_ratios))
    loan_recommendation = recommend_cad_loan(cad_ratios)

    record_cad_assessment(result.category)
    logging.info(
        "CAD assessment completed",
        extra={
            "request_id": request_id,
            "year": year,
            "score": result.score,
            "category": result.category,
            "decision": loan_recommendation.decision,
        },
    )

    return CADResponse(
        year=year,
        **to_dict(result),
        ratios=to_dict(cad_ratios),
        loan_recommendation=to_dict(loan_recommendation),
    )
