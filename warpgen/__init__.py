"""
warpgen

Generates WireGuard client configurations for the Cloudflare WARP network.
"""

__version__ = "1.0.0"
