"""
Base async HTTP client for JSON APIs authenticated with a bearer key.
"""

from typing import Any, Dict, Optional
import httpx
import logging

from nyumba.config import settings
from nyumba.utils.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class BaseAPIClient:
    """
    Thin wrapper around httpx.AsyncClient.

    A transport can be injected so tests can answer requests without a network.
    """

    service_name = "external service"
    error_message = "External service error"

    def __init__(
        self,
        url: str,
        api_key: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.url = url
        self.api_key = api_key
        self._timeout = timeout if timeout is not None else settings.http_timeout
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def post_json(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a JSON body and return the decoded response.

        Raises:
            ExternalServiceError: On a transport failure, a non-2xx status or a non-JSON body
        """
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await client.post(self.url, json=payload, headers=self._headers())
            except httpx.HTTPError as e:
                logger.error(f"{self.service_name} request failed: {e}")
                raise ExternalServiceError(self.error_message)

        if response.is_error:
            logger.error(f"{self.service_name} returned {response.status_code}: {response.text[:500]}")
            raise ExternalServiceError(self.error_message)

        try:
            return response.json()
        except ValueError:
            logger.error(f"{self.service_name} returned a non-JSON body")
            raise ExternalServiceError(self.error_message)
