"""
Bearer token generation for the App Store Connect API.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

import jwt

from .config import ClientConfig
from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)

AUDIENCE = "appstoreconnect-v1"

# Seconds before expiry at which a cached token is replaced
REFRESH_MARGIN = 60


class TokenProvider:
    """
    Generates ES256 JWT tokens signed with the configured private key.

    A generated token is reused until one minute before it expires, or halfway
    through its lifetime when that is shorter than two minutes.
    """

    def __init__(self, config: ClientConfig):
        self.config = config
        self._token: Optional[str] = None
        self._token_expiry: Optional[int] = None

    def token(self) -> str:
        """Return a valid bearer token, generating a new one when needed."""
        current_time = int(datetime.now(timezone.utc).timestamp())

        if self._token and self._token_expiry and current_time < self._token_expiry:
            return self._token

        expiry = current_time + self.config.token_lifetime

        payload = {
            "iss": self.config.issuer_id,
            "iat": current_time,
            "exp": expiry,
            "aud": AUDIENCE,
        }

        headers = {"alg": "ES256", "kid": self.config.key_id, "typ": "JWT"}

        try:
            token = jwt.encode(
                payload, self.config.private_key, algorithm="ES256", headers=headers
            )
        except Exception as e:
            raise AuthenticationError(f"Failed to generate JWT token: {e}")

        logger.info(f"Generated token for key {self.config.key_id}, expires at {expiry}")

        self._token = token
        self._token_expiry = expiry - min(REFRESH_MARGIN, self.config.token_lifetime // 2)
        return self._token
