"""
WARP Endpoint Pool

Known-good Cloudflare WARP edge endpoints. Each config generation run
picks one host and one port at random; the chosen "host:port" string is
passed through to the rendered config unchanged.
"""

import ipaddress
import logging
import random
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_HOSTS = [
    "162.159.192.1",
    "162.159.193.1",
    "162.159.195.1",
    "188.114.96.1",
    "188.114.97.1",
    "188.114.98.1",
    "188.114.99.1",
    "engage.cloudflareclient.com",
]

# UDP ports accepted by the WARP edge
DEFAULT_PORTS = [2408, 500, 1701, 4500]


def format_endpoint(host: str, port: int) -> str:
    """
    Join host and port, bracketing IPv6 literals.

    Example:
        >>> format_endpoint("2606:4700:d0::a29f:c001", 2408)
        '[2606:4700:d0::a29f:c001]:2408'
    """
    try:
        if ipaddress.ip_address(host).version == 6:
            return f"[{host}]:{port}"
    except ValueError:
        pass  # hostname
    return f"{host}:{port}"


class EndpointPool:
    """
    Random endpoint selection

    Attributes:
        hosts: Candidate edge hosts (IPs or hostnames)
        ports: Candidate UDP ports
    """

    def __init__(
        self,
        hosts: Optional[Sequence[str]] = None,
        ports: Optional[Sequence[int]] = None,
        rng: Optional[random.Random] = None
    ):
        self.hosts: List[str] = list(hosts if hosts is not None else DEFAULT_HOSTS)
        self.ports: List[int] = list(ports if ports is not None else DEFAULT_PORTS)

        if not self.hosts:
            raise ValueError("Endpoint pool requires at least one host")
        if not self.ports:
            raise ValueError("Endpoint pool requires at least one port")
        for port in self.ports:
            if not 1 <= port <= 65535:
                raise ValueError(f"Invalid port {port}: must be between 1 and 65535")

        self._rng = rng or random.SystemRandom()

    def random_endpoint(self) -> str:
        """Pick a random "host:port" endpoint."""
        endpoint = format_endpoint(self._rng.choice(self.hosts), self._rng.choice(self.ports))
        logger.debug(f"Selected WARP endpoint {endpoint}")
        return endpoint

    def all_endpoints(self) -> List[str]:
        """Every host/port combination in the pool."""
        return [format_endpoint(host, port) for host in self.hosts for port in self.ports]
