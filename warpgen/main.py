"""
FastAPI application entrypoint

Registers the API routers.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from warpgen import __version__
from warpgen.api.v1.endpoints.warp_config import router as warp_config_router
from warpgen.services.warp_config_service import close_warp_config_service

app = FastAPI(
    title="WARP Config Generator",
    description="Generates WireGuard client configurations for Cloudflare WARP",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(warp_config_router, prefix="/api/v1")


@app.on_event("shutdown")
async def shutdown():
    await close_warp_config_service()


@app.get("/health")
async def health():
    return {"status": "ok"}
