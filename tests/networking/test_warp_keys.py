"""
Tests for WARP keypair generation.

This module tests:
- JWK export and URL-safe to standard base64 conversion
- Keypair generation through real and deterministic key providers
- Error reporting for failing providers and incomplete exports
"""

import base64
import os

import pytest

from warpgen.errors import CryptoError
from warpgen.networking.warp_keys import (
    CryptographyKeyProvider,
    KeyPair,
    KeyPairGenerator,
    KeyProvider,
    export_jwk,
    from_std_base64,
    generate_keypair,
    get_public_key_from_private,
    keypair_from_jwk,
    to_std_base64,
)

PRIVATE_KEY_BYTES = bytes(range(32))
PUBLIC_KEY_BYTES = bytes(range(100, 132))


class TestBase64Conversion:
    """Test suite for JWK base64 conversion."""

    def test_alphabet_swap_and_padding(self):
        """
        Given a URL-safe unpadded value
        When converting to standard base64
        Then '-' and '_' are swapped and one '=' is appended
        """
        assert to_std_base64("ab-_cd") == "ab+/cd="

    def test_round_trip_reproduces_export(self):
        """
        Given JWK coordinates exported from random key material
        When converting to standard base64 and back
        Then the original value is reproduced exactly
        """
        for _ in range(50):
            jwk = export_jwk(os.urandom(32), os.urandom(32))
            for field in ("x", "d"):
                assert from_std_base64(to_std_base64(jwk[field])) == jwk[field]

    def test_converted_value_matches_standard_encoding(self):
        """
        Given 32 bytes of key material
        When exporting as JWK and converting
        Then the result equals the standard padded base64 encoding
        """
        for _ in range(50):
            raw = os.urandom(32)
            jwk = export_jwk(raw, raw)
            assert to_std_base64(jwk["d"]) == base64.b64encode(raw).decode("ascii")

    def test_jwk_export_shape(self):
        """JWK export carries OKP/X25519 metadata and unpadded coordinates."""
        jwk = export_jwk(PRIVATE_KEY_BYTES, PUBLIC_KEY_BYTES)

        assert jwk["kty"] == "OKP"
        assert jwk["crv"] == "X25519"
        assert len(jwk["x"]) == 43
        assert len(jwk["d"]) == 43
        assert "=" not in jwk["x"] + jwk["d"]
        assert "+" not in jwk["x"] + jwk["d"]
        assert "/" not in jwk["x"] + jwk["d"]


class TestKeypairFromJwk:
    """Test suite for extracting keys from a JWK."""

    def test_missing_public_coordinate(self):
        """
        Given a JWK without 'x'
        When building a keypair
        Then CryptoError names the missing field
        """
        with pytest.raises(CryptoError, match="'x'"):
            keypair_from_jwk({"kty": "OKP", "d": "abc"})

    def test_missing_private_scalar(self):
        """
        Given a JWK without 'd'
        When building a keypair
        Then CryptoError names the missing field
        """
        with pytest.raises(CryptoError, match="'d'"):
            keypair_from_jwk({"kty": "OKP", "x": "abc"})

    def test_extracts_both_fields(self):
        keypair = keypair_from_jwk({"x": "pub-key_", "d": "priv-key_"})

        assert keypair == KeyPair(public_key="pub+key/=", private_key="priv+key/=")


class TestKeypairGenerator:
    """Test suite for KeyPairGenerator."""

    def test_static_provider_encoding(self, static_key_provider):
        """
        Given a provider returning fixed key material
        When generating a keypair
        Then both halves are the standard base64 of that material
        """
        keypair = KeyPairGenerator(static_key_provider).generate()

        assert keypair.private_key == base64.b64encode(PRIVATE_KEY_BYTES).decode("ascii")
        assert keypair.public_key == base64.b64encode(PUBLIC_KEY_BYTES).decode("ascii")
        assert static_key_provider.calls == 1

    def test_real_keypair_is_consistent(self):
        """
        Given the default cryptography provider
        When generating a keypair
        Then the public key derives from the private key
        """
        keypair = generate_keypair()

        assert len(keypair.private_key) == 44
        assert len(keypair.public_key) == 44
        assert keypair.private_key.endswith("=")
        assert keypair.public_key.endswith("=")
        assert get_public_key_from_private(keypair.private_key) == keypair.public_key

    def test_keypairs_are_unique(self):
        """Successive keypairs never repeat."""
        keypairs = [generate_keypair() for _ in range(5)]

        assert len({kp.private_key for kp in keypairs}) == 5
        assert len({kp.public_key for kp in keypairs}) == 5

    def test_provider_failure_becomes_crypto_error(self):
        """
        Given a provider that raises
        When generating a keypair
        Then CryptoError carries the cause
        """
        class BrokenProvider:
            def generate_raw(self):
                raise RuntimeError("X25519 not supported")

        with pytest.raises(CryptoError, match="X25519 not supported"):
            KeyPairGenerator(BrokenProvider()).generate()

    def test_wrong_key_length_rejected(self):
        class ShortKeyProvider:
            def generate_raw(self):
                return bytes(31), PUBLIC_KEY_BYTES

        provider = ShortKeyProvider()

        with pytest.raises(CryptoError, match="private key"):
            KeyPairGenerator(provider).generate()

    def test_default_provider_satisfies_protocol(self):
        assert isinstance(CryptographyKeyProvider(), KeyProvider)
        assert isinstance(KeyPairGenerator().provider, CryptographyKeyProvider)


class TestPublicKeyDerivation:
    """Test suite for deriving public keys."""

    def test_invalid_base64_rejected(self):
        with pytest.raises(CryptoError):
            get_public_key_from_private("not base64!!")

    def test_wrong_length_rejected(self):
        with pytest.raises(CryptoError, match="length"):
            get_public_key_from_private(base64.b64encode(bytes(16)).decode("ascii"))
