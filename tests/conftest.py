"""
Pytest configuration and shared fixtures
"""

import random
from typing import Tuple

import pytest

PRIVATE_KEY_BYTES = bytes(range(32))
PUBLIC_KEY_BYTES = bytes(range(100, 132))


class StaticKeyProvider:
    """Deterministic KeyProvider returning fixed key material"""

    def __init__(self, private_key: bytes = PRIVATE_KEY_BYTES, public_key: bytes = PUBLIC_KEY_BYTES):
        self.private_key = private_key
        self.public_key = public_key
        self.calls = 0

    def generate_raw(self) -> Tuple[bytes, bytes]:
        self.calls += 1
        return self.private_key, self.public_key


@pytest.fixture
def static_key_provider():
    """KeyProvider with fixed key material"""
    return StaticKeyProvider()


@pytest.fixture
def seeded_rng():
    """Deterministic random source"""
    return random.Random(1234)


@pytest.fixture
def registration_response():
    """Minimal well-formed WARP registration response"""
    return {
        "id": "device-id",
        "config": {
            "client_id": "AAAA",
            "interface": {
                "addresses": {
                    "v4": "1.2.3.4",
                    "v6": "::1"
                }
            },
            "peers": [
                {
                    "public_key": "PEERKEYBASE64==",
                    "endpoint": {
                        "v4": "162.159.192.1:0",
                        "v6": "[2606:4700:d0::a29f:c001]:0",
                        "host": "engage.cloudflareclient.com:2408"
                    }
                }
            ]
        }
    }


@pytest.fixture
def expected_config_text():
    """Config rendered from registration_response with PRIVKEYBASE64== and 162.159.192.1:2408"""
    return (
        "[Interface]\n"
        "PrivateKey = PRIVKEYBASE64==\n"
        "Address = 1.2.3.4/32, ::1/128\n"
        "DNS = 1.1.1.1, 8.8.8.8\n"
        "\n"
        "[Peer]\n"
        "PublicKey = PEERKEYBASE64==\n"
        "AllowedIPs = 0.0.0.0/0, ::/0\n"
        "Endpoint = 162.159.192.1:2408"
    )
