"""Unit tests for the AECB bureau client and report parsing"""

import httpx
import pytest
from credit_dashboard.domain.bureau import parse_bureau_report
from credit_dashboard.domain.exceptions import BureauAPIError, UnsupportedInputError
from credit_dashboard.infrastructure.clients.bureau import BureauClient


def make_client(handler) -> BureauClient:
    return BureauClient(base_url="http://bureau.test", timeout=1.0, transport=httpx.MockTransport(handler))


def test_parse_sample_report(aecb_payload):
    report = parse_bureau_report(aecb_payload)

    assert report.credit_score == 742
    assert report.risk_grade == "A"
    assert report.trade_license == "CN-1045872"
    assert report.payment_performance.on_time_payments == 96
    assert report.utilization_ratio == 45
    assert report.negative_information.bankruptcy_history is False


def test_parse_report_missing_sections():
    with pytest.raises(UnsupportedInputError):
        parse_bureau_report({"company_info": {"company_name": "Test LLC"}})


async def test_get_credit_report_success(aecb_payload):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/aecb/credit-report"
        assert request.url.params["trade_license"] == "CN-1045872"
        return httpx.Response(200, json=aecb_payload)

    report = await make_client(handler).get_credit_report("CN-1045872")

    assert report.company_name == aecb_payload["company_info"]["company_name"]
    assert report.credit_score == 742


async def test_get_credit_report_http_error():
    client = make_client(lambda request: httpx.Response(500, json={"error": "down"}))

    with pytest.raises(BureauAPIError, match="500"):
        await client.get_credit_report("CN-1")


async def test_get_credit_report_timeout():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(BureauAPIError, match="timeout"):
        await make_client(handler).get_credit_report("CN-1")


async def test_get_credit_report_unreachable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(BureauAPIError, match="unreachable"):
        await make_client(handler).get_credit_report("CN-1")


async def test_get_credit_report_malformed_body():
    client = make_client(lambda request: httpx.Response(200, json={"unexpected": True}))

    with pytest.raises(BureauAPIError, match="Invalid credit report"):
        await client.get_credit_report("CN-1")
