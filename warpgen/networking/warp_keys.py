"""
WireGuard keypair generation for WARP registration.

This module provides functionality for:
- Generating ephemeral X25519 keypairs through a pluggable key provider
- Exporting key material in JWK form (URL-safe, unpadded base64)
- Converting JWK coordinates to the standard padded base64 WireGuard expects

WireGuard uses Curve25519 for key exchange, so the key is only ever used
to derive shared secrets, never for signing. Keys are ephemeral: nothing
here stores or rotates them.
"""

import base64
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Protocol, Tuple, runtime_checkable

from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PrivateKey
from cryptography.hazmat.primitives import serialization

from warpgen.errors import CryptoError

logger = logging.getLogger(__name__)

X25519_KEY_LENGTH = 32


@dataclass(frozen=True)
class KeyPair:
    """X25519 keypair, both halves in standard padded base64."""
    public_key: str
    private_key: str


@runtime_checkable
class KeyProvider(Protocol):
    """
    Capability that generates an X25519 keypair.

    Implementations return the raw 32-byte private scalar and public
    coordinate, in that order.
    """

    def generate_raw(self) -> Tuple[bytes, bytes]:
        ...


class CryptographyKeyProvider:
    """KeyProvider backed by the ``cryptography`` X25519 implementation."""

    def generate_raw(self) -> Tuple[bytes, bytes]:
        private_key_obj = X25519PrivateKey.generate()
        public_key_obj = private_key_obj.public_key()

        private_key_bytes = private_key_obj.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption()
        )
        public_key_bytes = public_key_obj.public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw
        )
        return private_key_bytes, public_key_bytes


def _b64url_unpadded(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def export_jwk(private_key_bytes: bytes, public_key_bytes: bytes) -> Dict[str, str]:
    """
    Export raw X25519 key material as an OKP JSON Web Key.

    Args:
        private_key_bytes: Raw 32-byte private scalar
        public_key_bytes: Raw 32-byte public coordinate

    Returns:
        Dict with ``kty``, ``crv``, ``x`` (public) and ``d`` (private),
        the latter two as URL-safe base64 without padding.
    """
    return {
        "kty": "OKP",
        "crv": "X25519",
        "x": _b64url_unpadded(public_key_bytes),
        "d": _b64url_unpadded(private_key_bytes),
    }


def to_std_base64(b64url: str) -> str:
    """
    Convert an unpadded URL-safe base64 value to standard padded base64.

    JWK coordinates for 32-byte keys are always 43 characters, so exactly
    one ``=`` is appended.

    Example:
        >>> to_std_base64("ab-_")
        'ab+/='
    """
    return b64url.replace("-", "+").replace("_", "/") + "="


def from_std_base64(b64: str) -> str:
    """Inverse of :func:`to_std_base64`."""
    if b64.endswith("="):
        b64 = b64[:-1]
    return b64.replace("+", "-").replace("/", "_")


def keypair_from_jwk(jwk: Dict[str, str]) -> KeyPair:
    """
    Build a KeyPair from an exported X25519 JWK.

    Raises:
        CryptoError: If the ``x`` or ``d`` field is missing
    """
    x_b64url = jwk.get("x")
    if not isinstance(x_b64url, str) or not x_b64url:
        raise CryptoError("missing 'x' in JWK")

    d_b64url = jwk.get("d")
    if not isinstance(d_b64url, str) or not d_b64url:
        raise CryptoError("missing 'd' in JWK")

    return KeyPair(
        public_key=to_std_base64(x_b64url),
        private_key=to_std_base64(d_b64url),
    )


class KeyPairGenerator:
    """
    Generates fresh WireGuard keypairs.

    Attributes:
        provider: Key provider used for the underlying X25519 operation
    """

    def __init__(self, provider: Optional[KeyProvider] = None):
        self.provider = provider or CryptographyKeyProvider()

    def generate(self) -> KeyPair:
        """
        Generate a new keypair.

        Returns:
            KeyPair with standard base64 public and private keys

        Raises:
            CryptoError: If the provider fails or returns malformed key material
        """
        try:
            private_key_bytes, public_key_bytes = self.provider.generate_raw()
        except CryptoError:
            raise
        except Exception as e:
            raise CryptoError(f"X25519 key generation failed: {e}") from e

        for name, value in (("private", private_key_bytes), ("public", public_key_bytes)):
            if not isinstance(value, (bytes, bytearray)) or len(value) != X25519_KEY_LENGTH:
                raise CryptoError(
                    f"Invalid {name} key: expected {X25519_KEY_LENGTH} bytes"
                )

        keypair = keypair_from_jwk(export_jwk(bytes(private_key_bytes), bytes(public_key_bytes)))

        logger.debug(f"Generated X25519 keypair: public={keypair.public_key}")

        return keypair


def generate_keypair() -> KeyPair:
    """Generate a keypair with the default ``cryptography`` provider."""
    return KeyPairGenerator().generate()


def get_public_key_from_private(private_key: str) -> str:
    """
    Derive the public key from a private key.

    Args:
        private_key: Base64-encoded X25519 private key

    Returns:
        str: Base64-encoded X25519 public key

    Raises:
        CryptoError: If the private key is invalid
    """
    try:
        private_key_bytes = base64.b64decode(private_key, validate=True)
    except (ValueError, TypeError) as e:
        raise CryptoError(f"Invalid private key format: {e}") from e

    if len(private_key_bytes) != X25519_KEY_LENGTH:
        raise CryptoError(
            f"Invalid private key length: expected {X25519_KEY_LENGTH} bytes, "
            f"got {len(private_key_bytes)}"
        )

    public_key_bytes = X25519PrivateKey.from_private_bytes(private_key_bytes).public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw
    )
    return base64.b64encode(public_key_bytes).decode("ascii")
