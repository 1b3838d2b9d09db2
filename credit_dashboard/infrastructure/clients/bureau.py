"""AECB credit bureau HTTP client for fetching company credit reports"""

import httpx
from credit_dashboard.domain.models import BureauReport
from credit_dashboard.domain.bureau import parse_bureau_report
from credit_dashboard.domain.exceptions import BureauAPIError, UnsupportedInputError
from credit_dashboard.config import settings


class BureauClient:
    """Client for the external AECB credit report API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.bureau_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def get_credit_report(self, trade_license: str) -> BureauReport:
        """
        Fetch the latest bureau report for a company.

        Raises:
            BureauAPIError: On timeout, HTTP errors, or invalid response
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(
                    f"{self.base_url}/api/aecb/credit-report",
                    params={"trade_license": trade_license},
                )
                response.raise_for_status()
                return parse_bureau_report(response.json())

            except httpx.TimeoutException as e:
                raise BureauAPIError(f"Bureau API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise BureauAPIError(f"Bureau API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise BureauAPIError(f"Bureau API unreachable: {e}") from e
            except (UnsupportedInputError, ValueError) as e:
                raise BureauAPIError(f"Invalid credit report from bureau: {e}") from e
