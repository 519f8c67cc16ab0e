"""
WARP Config API Endpoint

FastAPI endpoints that run the config generation pipeline.

Provides:
- GET /api/v1/warp/config - WireGuard config as text/plain
- GET /api/v1/warp/config.json - WireGuard config with metadata as JSON

Errors:
- 500: Key generation failed
- 502: Registration request failed or returned a malformed response
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from warpgen.errors import CryptoError, MalformedResponseError, NetworkError
from warpgen.services.warp_config_service import (
    GeneratedConfig,
    WarpConfigService,
    get_warp_config_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/warp", tags=["WARP", "WireGuard"])

DOWNLOAD_FILENAME = "wireguard.conf"


class GeneratedConfigResponse(BaseModel):
    """Generated WireGuard config with metadata"""
    config: str = Field(..., description="WireGuard configuration text")
    endpoint: str = Field(..., description="Peer endpoint used in the config")
    public_key: str = Field(..., description="Client public key registered with WARP")
    generated_at: datetime = Field(..., description="Generation timestamp (UTC)")


async def _run_pipeline(
    service: WarpConfigService,
    endpoint: Optional[str]
) -> GeneratedConfig:
    try:
        return await service.generate(endpoint)

    except CryptoError as e:
        logger.error(f"Key generation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Key generation failed: {e}"
        )

    except NetworkError as e:
        logger.warning(f"WARP registration failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"WARP registration failed: {e}"
        )

    except MalformedResponseError as e:
        logger.warning(f"Malformed WARP registration response: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"message": str(e), "path": e.path}
        )


@router.get(
    "/config",
    response_class=PlainTextResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate WARP WireGuard config",
    description="""
    Register a fresh ephemeral key with Cloudflare WARP and return the
    resulting WireGuard client configuration.

    Set `download=true` to receive the config as a `wireguard.conf` attachment.
    """
)
async def get_warp_config(
    endpoint: Optional[str] = Query(None, description="Peer endpoint host:port"),
    download: bool = Query(False, description="Serve as a file attachment"),
    service: WarpConfigService = Depends(get_warp_config_service)
) -> PlainTextResponse:
    result = await _run_pipeline(service, endpoint)

    headers = {}
    if download:
        headers["Content-Disposition"] = f'attachment; filename="{DOWNLOAD_FILENAME}"'

    return PlainTextResponse(content=result.config, headers=headers)


@router.get(
    "/config.json",
    response_model=GeneratedConfigResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate WARP WireGuard config (JSON)"
)
async def get_warp_config_json(
    endpoint: Optional[str] = Query(None, description="Peer endpoint host:port"),
    service: WarpConfigService = Depends(get_warp_config_service)
) -> GeneratedConfigResponse:
    result = await _run_pipeline(service, endpoint)

    return GeneratedConfigResponse(
        config=result.config,
        endpoint=result.endpoint,
        public_key=result.public_key,
        generated_at=result.generated_at
    )
