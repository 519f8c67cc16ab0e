"""
WARP Config Generation Service

Runs the config generation pipeline:

1. Generate an ephemeral X25519 keypair
2. Compose the registration request for its public key
3. Register with the WARP service
4. Decode the response and render the WireGuard config

Each run is a single linear pass with no retry. Runs share no mutable
state, so concurrent calls are independent. Callers wanting a timeout wrap
the call themselves, e.g. ``asyncio.wait_for(service.generate_config(), 30)``.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from warpgen import config
from warpgen.networking.endpoint_pool import EndpointPool
from warpgen.networking.warp_config import render
from warpgen.networking.warp_keys import KeyPairGenerator
from warpgen.services.registration_request_builder import RegistrationRequestBuilder
from warpgen.services.warp_api_client import WarpApiClient

logger = logging.getLogger(__name__)

# Singleton used by the API layer
_service_instance: Optional["WarpConfigService"] = None


@dataclass(frozen=True)
class GeneratedConfig:
    """Result of one pipeline run"""
    config: str
    endpoint: str
    public_key: str
    generated_at: datetime


class WarpConfigService:
    """
    WARP config generation pipeline

    Attributes:
        key_generator: Produces the ephemeral keypair
        request_builder: Composes the registration body
        api_client: Performs the registration request
        endpoint_pool: Picks a peer endpoint when none is given
        fixed_endpoint: Endpoint used for every run instead of the pool
    """

    def __init__(
        self,
        key_generator: Optional[KeyPairGenerator] = None,
        request_builder: Optional[RegistrationRequestBuilder] = None,
        api_client: Optional[WarpApiClient] = None,
        endpoint_pool: Optional[EndpointPool] = None,
        fixed_endpoint: Optional[str] = None
    ):
        self.key_generator = key_generator or KeyPairGenerator()
        self.request_builder = request_builder or RegistrationRequestBuilder()
        self.api_client = api_client or WarpApiClient()
        self.endpoint_pool = endpoint_pool or EndpointPool()
        self.fixed_endpoint = fixed_endpoint

    async def close(self):
        """Release the HTTP client"""
        await self.api_client.close()

    def select_endpoint(self, endpoint: Optional[str] = None) -> str:
        """Resolve the peer endpoint: explicit, then fixed, then random from the pool."""
        return endpoint or self.fixed_endpoint or self.endpoint_pool.random_endpoint()

    async def generate(self, endpoint: Optional[str] = None) -> GeneratedConfig:
        """
        Run the pipeline once

        Args:
            endpoint: Peer endpoint "host:port"; chosen automatically if omitted

        Returns:
            GeneratedConfig with the rendered config text

        Raises:
            CryptoError: Key generation failed
            NetworkError: Registration request failed
            MalformedResponseError: Registration response has an unexpected shape
        """
        keypair = await asyncio.to_thread(self.key_generator.generate)

        request = self.request_builder.build(keypair.public_key)

        response = await self.api_client.register(request)

        peer_endpoint = self.select_endpoint(endpoint)
        config_text = render(response, keypair.private_key, peer_endpoint)

        logger.info(
            f"Generated WARP config for install_id={request.install_id}",
            extra={"endpoint": peer_endpoint}
        )

        return GeneratedConfig(
            config=config_text,
            endpoint=peer_endpoint,
            public_key=keypair.public_key,
            generated_at=datetime.now(timezone.utc),
        )

    async def generate_config(self, endpoint: Optional[str] = None) -> str:
        """Run the pipeline and return only the WireGuard config text."""
        result = await self.generate(endpoint)
        return result.config


def get_warp_config_service() -> WarpConfigService:
    """
    Get singleton config service instance.

    Built from environment configuration on first use.
    """
    global _service_instance

    if _service_instance is None:
        logger.info("Creating WARP config service singleton instance")
        _service_instance = WarpConfigService(
            api_client=WarpApiClient(
                api_url=config.WARP_API_URL,
                timeout=config.WARP_API_TIMEOUT
            ),
            fixed_endpoint=config.WARP_ENDPOINT
        )

    return _service_instance


def reset_warp_config_service():
    """
    Reset the singleton service instance.

    Primarily used for testing to ensure clean state between tests.
    """
    global _service_instance
    _service_instance = None


async def close_warp_config_service():
    """Close the singleton service, if one was created, and reset it."""
    global _service_instance

    if _service_instance is not None:
        await _service_instance.close()
        _service_instance = None
