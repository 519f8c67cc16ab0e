"""
WARP Provisioning Errors

Exception taxonomy for the config generation pipeline:

- CryptoError: key pair generation or export failed
- NetworkError: the registration request could not be completed
- ParseError / MalformedResponseError: the registration response does not
  match the expected schema

All errors propagate to the caller; the pipeline never retries.
"""

from typing import Optional


class WarpError(Exception):
    """Base exception for WARP config generation errors"""
    pass


class CryptoError(WarpError):
    """Raised when the X25519 key pair cannot be generated or exported"""
    pass


class NetworkError(WarpError):
    """Raised when the registration request fails at the transport level"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ParseError(WarpError):
    """Base exception for registration response parsing errors"""
    pass


class MalformedResponseError(ParseError):
    """Raised when the registration response deviates from the expected schema"""

    def __init__(self, path: str, reason: str = "missing or invalid"):
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed registration response at '{path}': {reason}")
