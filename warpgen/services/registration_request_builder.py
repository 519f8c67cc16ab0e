"""
WARP Registration Request Builder

Composes the registration body that binds a WireGuard public key to a
freshly synthesized device identity:

- 22-character install identifier
- synthetic push token "<install_id>:APA91b<134 random chars>"
- RFC 3339 UTC terms-of-service timestamp

The random source and the clock are injectable so identifier shape and
timestamps can be tested deterministically. No network or crypto side
effects.
"""

import logging
import random
import string
from datetime import datetime, timezone
from typing import Callable, Optional

from warpgen.models.warp.registration import (
    FCM_TOKEN_MARKER,
    FCM_TOKEN_SUFFIX_LENGTH,
    INSTALL_ID_LENGTH,
    InstallIdentity,
    RegistrationRequest,
)

logger = logging.getLogger(__name__)

CHARSET = string.ascii_uppercase + string.ascii_lowercase + string.digits


def generate_random_string(length: int, rng: Optional[random.Random] = None) -> str:
    """
    Generate a random alphanumeric string.

    Each character is drawn independently and uniformly from [A-Za-z0-9].

    Args:
        length: Number of characters
        rng: Random source (defaults to a SystemRandom instance)

    Returns:
        str of exactly ``length`` characters
    """
    rng = rng or random.SystemRandom()
    return "".join(rng.choice(CHARSET) for _ in range(length))


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_rfc3339(moment: datetime) -> str:
    """Format a datetime as an RFC 3339 UTC instant (naive values are taken as UTC)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat()


class RegistrationRequestBuilder:
    """
    Builds WARP registration requests

    Attributes:
        rng: Random source for identifiers
        clock: Callable returning the current time
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.rng = rng or random.SystemRandom()
        self.clock = clock or _utc_now

    def new_identity(self, rng: Optional[random.Random] = None) -> InstallIdentity:
        """Synthesize a fresh install identity."""
        return InstallIdentity(
            install_id=generate_random_string(INSTALL_ID_LENGTH, rng or self.rng)
        )

    def build(
        self,
        public_key: str,
        now: Optional[datetime] = None,
        rng: Optional[random.Random] = None
    ) -> RegistrationRequest:
        """
        Build a registration request for a public key

        Args:
            public_key: WireGuard public key (standard base64)
            now: Timestamp for the ``tos`` field (defaults to the clock)
            rng: Random source override for this call

        Returns:
            RegistrationRequest ready to be serialized as JSON
        """
        rng = rng or self.rng
        identity = self.new_identity(rng)
        token_suffix = generate_random_string(FCM_TOKEN_SUFFIX_LENGTH, rng)
        tos = to_rfc3339(now if now is not None else self.clock())

        request = RegistrationRequest(
            key=public_key,
            install_id=identity.install_id,
            fcm_token=f"{identity.install_id}:{FCM_TOKEN_MARKER}{token_suffix}",
            tos=tos,
            type="Android",
            locale="en_US"
        )

        logger.debug(
            f"Built registration request: install_id={identity.install_id}, tos={tos}"
        )

        return request
