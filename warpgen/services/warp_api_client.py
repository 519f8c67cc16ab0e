"""
WARP Registration API Client

Performs the single network hop of the pipeline: POSTs a registration
request as JSON and returns the decoded JSON document.

Connection failures, timeouts, non-2xx responses and non-JSON bodies all
surface as NetworkError. There is no retry and no fallback to another
registration URL.
"""

import json
import logging
from typing import Any, Optional

import httpx

from warpgen import config
from warpgen.errors import NetworkError
from warpgen.models.warp.registration import RegistrationRequest

logger = logging.getLogger(__name__)


class WarpApiClient:
    """
    Client for the WARP device registration endpoint

    Attributes:
        api_url: Registration endpoint URL
        timeout: Request timeout in seconds
        client: Underlying httpx.AsyncClient
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize the API client

        Args:
            api_url: Registration endpoint (defaults to WARP_API_URL)
            timeout: Request timeout in seconds (defaults to WARP_API_TIMEOUT)
            client: Pre-configured httpx.AsyncClient; not closed by close()
        """
        self.api_url = api_url or config.WARP_API_URL
        self.timeout = timeout if timeout is not None else config.WARP_API_TIMEOUT

        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=self.timeout)

    async def close(self):
        """Close HTTP client and cleanup resources"""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "WarpApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def register(self, request: RegistrationRequest) -> Any:
        """
        Register a device with the WARP service

        Args:
            request: Registration request body

        Returns:
            Parsed JSON response document

        Raises:
            NetworkError: On transport failure, non-2xx status or invalid JSON
        """
        logger.info(
            f"Registering WARP device: install_id={request.install_id}",
            extra={"api_url": self.api_url}
        )

        try:
            response = await self.client.post(
                self.api_url,
                json=request.model_dump(),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            raise NetworkError(f"Registration request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise NetworkError(f"Registration request failed: {e}") from e

        if not response.is_success:
            raise NetworkError(
                f"Registration failed (status={response.status_code}): {response.text}",
                status_code=response.status_code
            )

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise NetworkError(
                f"Registration response is not valid JSON: {e}",
                status_code=response.status_code
            ) from e

        logger.info(f"Received WARP registration response (status={response.status_code})")

        return data
