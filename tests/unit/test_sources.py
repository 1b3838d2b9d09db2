"""Unit tests for data source registry and loading"""

import pytest
from unittest.mock import AsyncMock
from credit_dashboard.domain.exceptions import BureauAPIError, UnsupportedInputError, UnsupportedSourceError
from credit_dashboard.domain.dataset import available_years
from credit_dashboard.domain.models import BALANCE_SHEET, NET_PROFIT
from credit_dashboard.domain.trends import analyze_trends
from credit_dashboard.domain.validation import validate_financial_data
from credit_dashboard.infrastructure.sources import DATA_SOURCES, DataLoader, list_sources


def test_list_sources():
    assert len(list_sources()) == 7
    assert [s.id for s in list_sources("aecb")] == ["aecb_api"]
    assert {s.id for s in list_sources("financial")} == {"banking_api", "document_ocr", "smart_vision"}
    assert {s.id for s in list_sources("combined")} == {
        "manufacturing_sample",
        "fashion_retail_sample",
        "consumables_retail_sample",
    }
    assert list_sources("unknown") == []


async def test_load_bundled_sample():
    loaded = await DataLoader(bureau_client=AsyncMock()).load("manufacturing_sample")

    assert loaded.source is DATA_SOURCES["manufacturing_sample"]
    assert len(loaded.dataset[BALANCE_SHEET]) > 0
    assert loaded.bureau_report.credit_score == 742


@pytest.mark.parametrize(
    "source_id,credit_score,years",
    [
        ("fashion_retail_sample", 768, [2021, 2022, 2023]),
        ("consumables_retail_sample", 618, [2021, 2022, 2023]),
    ],
)
async def test_load_retail_samples(source_id, credit_score, years):
    loaded = await DataLoader(bureau_client=AsyncMock()).load(source_id)

    assert available_years(loaded.dataset) == years
    assert loaded.bureau_report.credit_score == credit_score
    assert validate_financial_data(loaded.dataset, 2023).is_valid


async def test_retail_samples_diverge():
    loader = DataLoader(bureau_client=AsyncMock())
    fashion = (await loader.load("fashion_retail_sample")).dataset
    consumables = (await loader.load("consumables_retail_sample")).dataset

    fashion_profit = analyze_trends(fashion).metrics[2]
    consumables_profit = analyze_trends(consumables).metrics[2]

    assert fashion_profit.name == consumables_profit.name == NET_PROFIT
    assert fashion_profit.growth > 0
    assert consumables_profit.growth < 0


async def test_banking_api_is_not_ingested():
    bureau_client = AsyncMock()

    with pytest.raises(UnsupportedSourceError, match="banking_api"):
        await DataLoader(bureau_client=bureau_client).load("banking_api", trade_license="CN-1045872")

    bureau_client.get_credit_report.assert_not_awaited()


async def test_load_unknown_source():
    with pytest.raises(UnsupportedSourceError, match="not found"):
        await DataLoader(bureau_client=AsyncMock()).load("nope")


@pytest.mark.parametrize("source_id", ["document_ocr", "smart_vision", "banking_api"])
async def test_load_unsupported_source_types(source_id):
    with pytest.raises(UnsupportedSourceError, match="Unsupported data source type"):
        await DataLoader(bureau_client=AsyncMock()).load(source_id)


async def test_bureau_source_requires_trade_license():
    with pytest.raises(UnsupportedInputError):
        await DataLoader(bureau_client=AsyncMock()).load("aecb_api")


async def test_bureau_source_uses_client(aecb_payload):
    bureau_client = AsyncMock()
    bureau_client.get_credit_report.return_value = "report"

    loaded = await DataLoader(bureau_client=bureau_client).load("aecb_api", trade_license="CN-1045872")

    bureau_client.get_credit_report.assert_awaited_once_with("CN-1045872")
    assert loaded.bureau_report == "report"
    assert loaded.dataset is None


async def test_bureau_source_propagates_api_errors():
    bureau_client = AsyncMock()
    bureau_client.get_credit_report.side_effect = BureauAPIError("Bureau API timeout after 5.0s")

    with pytest.raises(BureauAPIError):
        await DataLoader(bureau_client=bureau_client).load("aecb_api", trade_license="CN-1")


async def test_missing_and_malformed_files(tmp_path):
    loader = DataLoader(data_dir=tmp_path, bureau_client=AsyncMock())

    with pytest.raises(UnsupportedSourceError, match="missing"):
        await loader.load("manufacturing_sample")

    (tmp_path / "manufacturing_financials.json").write_text("{not json")
    with pytest.raises(UnsupportedInputError):
        await loader.load("manufacturing_sample")
