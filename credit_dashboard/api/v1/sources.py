"""GET /v1/sources and POST /v1/sources/{source_id}/load - data source registry"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from credit_dashboard.api.v1.schemas import (
    DataSourceSchema,
    SourceLoadRequest,
    SourceLoadResponse,
    SourcesResponse,
)
from credit_dashboard.api.dependencies import get_data_loader, get_request_id
from credit_dashboard.domain.dataset import dump_dataset
from credit_dashboard.domain.exceptions import BureauAPIError, UnsupportedInputError, UnsupportedSourceError
from credit_dashboard.domain.models import to_dict
from credit_dashboard.infrastructure.sources import DataLoader, list_sources
from credit_dashboard.infrastructure.observability.metrics import bureau_fetch_failures_counter

router = APIRouter()


@router.get("/sources", response_model=SourcesResponse)
def get_sources(category: str | None = None):
    """List registered data sources, optionally filtered by category"""
    return SourcesResponse(
        sources=[
            DataSourceSchema(
                id=s.id,
                name=s.name,
                type=s.type,
                category=s.category,
                description=s.description,
            )
            for s in list_sources(category)
        ]
    )


@router.post("/sources/{source_id}/load", response_model=SourceLoadResponse)
async def load_source(
    source_id: str,
    request: Request,
    request_body: SourceLoadRequest | None = None,
    loader: DataLoader = Depends(get_data_loader),
):
    """
    Load a dataset and/or bureau report from a registered source.

    Bureau API sources need a trade license number in the body.
    """
    request_id = get_request_id(request)
    trade_license = request_body.trade_license if request_body else None

    try:
        loaded = await loader.load(source_id, trade_license=trade_license)

    except UnsupportedSourceError as e:
        logging.warning(f"Unsupported source: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    except UnsupportedInputError as e:
        logging.warning(f"Invalid source data: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except BureauAPIError as e:
        bureau_fetch_failures_counter.inc()
        logging.error(f"Bureau API error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Credit bureau service unavailable")

    return SourceLoadResponse(
        source_id=loaded.source.id,
        dataset=dump_dataset(loaded.dataset) if loaded.dataset is not None else None,
        bureau_report=to_dict(loaded.bureau_report) if loaded.bureau_report is not None else None,
    )
