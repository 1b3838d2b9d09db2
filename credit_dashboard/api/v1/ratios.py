"""POST /v1/ratios and /v1/trends - financial ratio and trend analysis"""

import logging
from fastapi import APIRouter, HTTPException, Request

from credit_dashboard.api.v1.schemas import DatasetRequest, RatiosResponse, TrendsResponse
from credit_dashboard.api.dependencies import get_request_id
from credit_dashboard.domain.dataset import load_dataset, resolve_year
from credit_dashboard.domain.exceptions import MissingDatasetError, UnsupportedInputError
from credit_dashboard.domain.models import to_dict
from credit_dashboard.domain.ratios import calculate_robust_ratios
from credit_dashboard.domain.trends import analyze_trends
from credit_dashboard.infrastructure.observability.metrics import record_ratio_quality

router = APIRouter()


@router.post("/ratios", response_model=RatiosResponse)
def get_ratios(request_body: DatasetRequest, request: Request):
    """
    Compute the robust ratio set for one year.

    Returns:
        15 ratios with reliability flags, and the validation result used
    """
    request_id = get_request_id(request)

    try:
        dataset = load_dataset(request_body.dataset)
        year = resolve_year(dataset, request_body.year)
        ratios = calculate_robust_ratios(dataset, year)
    except (MissingDatasetError, UnsupportedInputError) as e:
        logging.warning(f"Rejected dataset: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_ratio_quality(ratios)

    return RatiosResponse(
        year=year,
        ratios={name: to_dict(result) for name, result in ratios.ratios().items()},
        data_quality=to_dict(ratios.data_quality),
    )


@router.post("/trends", response_model=TrendsResponse)
def get_trends(request_body: DatasetRequest, request: Request):
    """
    Year-over-year growth of assets, revenue, profit and operating cash flow.
    """
    request_id = get_request_id(request)

    try:
        dataset = load_dataset(request_body.dataset)
        report = analyze_trends(dataset, request_body.year)
    except (MissingDatasetError, UnsupportedInputError) as e:
        logging.warning(f"Rejected dataset: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    return TrendsResponse.model_validate(to_dict(report))
