"""Registered data sources and the loader that feeds datasets into the pipeline"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from credit_dashboard.config import settings
from credit_dashboard.domain.bureau import parse_bureau_report
from credit_dashboard.domain.dataset import load_dataset
from credit_dashboard.domain.exceptions import UnsupportedInputError, UnsupportedSourceError
from credit_dashboard.domain.models import BureauReport, Dataset
from credit_dashboard.infrastructure.clients.bureau import BureauClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataSource:
    """Where a dataset or bureau report can come from"""

    id: str
    name: str
    type: str  # json | api | ocr | vision
    category: str  # financial | aecb | combined
    description: str
    financial_data_file: Optional[str] = None
    bureau_data_file: Optional[str] = None
    endpoint: Optional[str] = None


DATA_SOURCES: Dict[str, DataSource] = {
    source.id: source
    for source in (
        DataSource(
            id="manufacturing_sample",
            name="Manufacturing Company Sample",
            type="json",
            category="combined",
            description="3-year financial history with comprehensive statements and AECB report",
            financial_data_file="manufacturing_financials.json",
            bureau_data_file="manufacturing_aecb.json",
        ),
        DataSource(
            id="fashion_retail_sample",
            name="Fashion Retail Sample",
            type="json",
            category="combined",
            description="High-growth fashion retailer with strong profitability trends",
            financial_data_file="fashion_retail_financials.json",
            bureau_data_file="fashion_retail_aecb.json",
        ),
        DataSource(
            id="consumables_retail_sample",
            name="Consumables Retail Sample",
            type="json",
            category="combined",
            description="Established retail business with declining profitability challenges",
            financial_data_file="consumables_retail_financials.json",
            bureau_data_file="consumables_retail_aecb.json",
        ),
        DataSource(
            id="aecb_api",
            name="AECB Direct API",
            type="api",
            category="aecb",
            description="Direct integration with AECB credit bureau services",
            endpoint="/api/aecb/credit-report",
        ),
        DataSource(
            id="banking_api",
            name="Banking Data API",
            type="api",
            category="financial",
            description="Connect to UAE banking systems for real-time financial data",
            endpoint="/api/banking/financial-data",
        ),
        DataSource(
            id="document_ocr",
            name="Document OCR Scanner",
            type="ocr",
            category="financial",
            description="Extract financial data from scanned documents and PDFs",
        ),
        DataSource(
            id="smart_vision",
            name="Smart Vision Analysis",
            type="vision",
            category="financial",
            description="Financial document analysis with table detection",
        ),
    )
}


@dataclass
class LoadedData:
    source: DataSource
    dataset: Optional[Dataset] = None
    bureau_report: Optional[BureauReport] = None


def list_sources(category: Optional[str] = None) -> List[DataSource]:
    return [s for s in DATA_SOURCES.values() if category is None or s.category == category]


class DataLoader:
    """Resolve a source id to a dataset and/or bureau report"""

    def __init__(self, data_dir: Path | None = None, bureau_client: BureauClient | None = None):
        self.data_dir = data_dir or settings.sample_data_dir
        self.bureau_client = bureau_client or BureauClient()

    async def load(self, source_id: str, trade_license: str | None = None) -> LoadedData:
        """
        Load data from a registered source.

        Raises:
            UnsupportedSourceError: unknown id, or a source type this service
                cannot ingest (OCR, vision, non-bureau API feeds)
            UnsupportedInputError: source file holds malformed data
            BureauAPIError: bureau API failure
        """
        source = DATA_SOURCES.get(source_id)
        if source is None:
            raise UnsupportedSourceError(f"Data source '{source_id}' not found")

        logger.info("Loading data source", extra={"source_id": source.id, "source_type": source.type})

        if source.type == "json":
            return self._load_json(source)
        # Only the bureau has a client; other API feeds are listed but not ingested
        if source.type == "api" and source.category == "aecb":
            if not trade_license:
                raise UnsupportedInputError("trade_license is required for bureau API sources")
            report = await self.bureau_client.get_credit_report(trade_license)
            return LoadedData(source=source, bureau_report=report)

        raise UnsupportedSourceError(f"Unsupported data source type: {source.type} ({source.id})")

    def _load_json(self, source: DataSource) -> LoadedData:
        loaded = LoadedData(source=source)
        if source.financial_data_file:
            loaded.dataset = load_dataset(self._read(source.financial_data_file))
        if source.bureau_data_file:
            loaded.bureau_report = parse_bureau_report(self._read(source.bureau_data_file))
        return loaded

    def _read(self, filename: str) -> dict:
        file = self.data_dir / filename
        if not file.exists():
            raise UnsupportedSourceError(f"Data file {filename} is missing")
        try:
            return json.loads(file.read_text())
        except json.JSONDecodeError as e:
            raise UnsupportedInputError(f"{filename} is not valid JSON: {e}") from e
