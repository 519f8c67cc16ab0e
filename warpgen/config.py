"""
Runtime configuration

Settings are read from the environment once at import time. Explicit
constructor arguments always take precedence over these values.
"""

import os

DEFAULT_WARP_API_URL = "https://api.cloudflareclient.com/v0a4005/reg"

WARP_API_URL = os.getenv("WARP_API_URL", DEFAULT_WARP_API_URL)
WARP_API_TIMEOUT = float(os.getenv("WARP_API_TIMEOUT", "30"))

# Fixed "host:port" endpoint; when unset a random pool endpoint is used per run
WARP_ENDPOINT = os.getenv("WARP_ENDPOINT") or None
