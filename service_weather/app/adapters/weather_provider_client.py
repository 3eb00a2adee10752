"""
Upstream weather provider client.
"""

from typing import Any, Dict
from urllib.parse import quote
import httpx

from shared.logging import get_logger
from shared.errors import InvalidCredentialError, UpstreamFetchError


CREDENTIAL_REJECTED_STATUSES = (401, 403)


class WeatherProviderClient:
    """Client for the Visual Crossing timeline API.

    One GET per call, no retries.
    """

    def __init__(self, base_url: str, api_key: str, unit_group: str = "us", timeout: float = 10.0):
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.unit_group = unit_group
        self.timeout = timeout
        self.logger = get_logger("weather.provider_client")

        if not api_key:
            self.logger.warning("WEATHER_API_KEY is not set; upstream lookups will be rejected")

    def _build_url(self, city: str) -> str:
        return f"{self.base_url}/{quote(city, safe='')}"

    async def fetch(self, city: str) -> Any:
        """Fetch the weather payload for city."""
        url = self._build_url(city)
        params = {
            "unitGroup": self.unit_group,
            "key": self.api_key,
            "contentType": "json",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as e:
            self.logger.error("Weather API transport error", city=city, error=str(e))
            raise UpstreamFetchError(str(e), details={"city": city})

        if response.status_code in CREDENTIAL_REJECTED_STATUSES:
            self.logger.error(
                "Weather API rejected credential",
                city=city,
                status_code=response.status_code
            )
            raise InvalidCredentialError(details={"status_code": response.status_code})

        if not response.is_success:
            detail = self._error_detail(response)
            self.logger.error(
                "Weather API error",
                city=city,
                status_code=response.status_code,
                response=detail
            )
            raise UpstreamFetchError(
                detail,
                details={"city": city, "status_code": response.status_code}
            )

        try:
            return response.json()
        except ValueError as e:
            self.logger.error("Weather API returned malformed body", city=city, error=str(e))
            raise UpstreamFetchError(
                f"Malformed response from weather provider: {e}",
                details={"city": city, "status_code": response.status_code}
            )

    @staticmethod
    def _error_detail(response: httpx.Response) -> Any:
        """Provider detail: JSON body when it parses, else text."""
        try:
            return response.json()
        except ValueError:
            return response.text or f"Unexpected status {response.status_code}"

    def get_state(self) -> Dict[str, Any]:
        return {
            "base_url": self.base_url,
            "credential_configured": bool(self.api_key),
        }
