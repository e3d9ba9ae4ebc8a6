"""
Client configuration for asc-client.

A ``ClientConfig`` is built once and shared read-only by the transport and
every service of a client.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

from .exceptions import AuthenticationError, ValidationError

DEFAULT_BASE_URL = "https://api.appstoreconnect.apple.com/"

# Tokens may live at most 20 minutes
MAX_TOKEN_LIFETIME = 1200


@dataclass(frozen=True)
class ClientConfig:
    """
    Immutable settings for one App Store Connect client.

    Args:
        key_id: Your App Store Connect API key ID
        issuer_id: Your App Store Connect API issuer ID
        private_key: Contents of your .p8 private key (PEM)
        base_url: API root; resource paths such as ``v1/apps`` are joined to it
        timeout: Seconds to wait for each HTTP exchange
        token_lifetime: Seconds a generated bearer token stays valid
        rate_limit_calls: Calls allowed per ``rate_limit_period``, None disables throttling
        rate_limit_period: Throttle window in seconds
        user_agent: Value of the User-Agent header
    """

    key_id: str
    issuer_id: str
    private_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30
    token_lifetime: int = MAX_TOKEN_LIFETIME
    rate_limit_calls: Optional[int] = 3500  # Apple's hourly quota
    rate_limit_period: int = 3600
    user_agent: str = "asc-client"

    def __post_init__(self):
        if not all([self.key_id, self.issuer_id, self.private_key]):
            raise ValidationError("Missing required authentication parameters")

        if not self.base_url:
            raise ValidationError("Base URL cannot be empty")

        if self.token_lifetime <= 0 or self.token_lifetime > MAX_TOKEN_LIFETIME:
            raise ValidationError(
                f"Token lifetime must be between 1 and {MAX_TOKEN_LIFETIME} seconds, "
                f"got: {self.token_lifetime}"
            )

        if self.rate_limit_calls is not None and self.rate_limit_calls <= 0:
            raise ValidationError("Rate limit calls must be positive")

    def __repr__(self) -> str:
        return (
            f"ClientConfig(key_id={self.key_id!r}, issuer_id={self.issuer_id!r}, "
            f"base_url={self.base_url!r}, timeout={self.timeout!r})"
        )

    @classmethod
    def from_key_file(
        cls,
        key_id: str,
        issuer_id: str,
        private_key_path: Union[str, Path],
        **options,
    ) -> "ClientConfig":
        """
        Build a configuration from a .p8 key file on disk.

        Raises:
            ValidationError: If the key file does not exist
            AuthenticationError: If the key file cannot be read
        """
        if not private_key_path:
            raise ValidationError("Missing required authentication parameters")

        path = Path(private_key_path)
        if not path.exists():
            raise ValidationError(f"Private key file not found: {private_key_path}")

        try:
            with open(path, "r") as f:
                private_key = f.read()
        except IOError as e:
            raise AuthenticationError(f"Failed to load private key: {e}")

        return cls(key_id=key_id, issuer_id=issuer_id, private_key=private_key, **options)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """
        Build a configuration from ``ASC_*`` environment variables.

        Reads ASC_KEY_ID, ASC_ISSUER_ID and either ASC_PRIVATE_KEY (PEM text)
        or ASC_PRIVATE_KEY_PATH. ASC_BASE_URL and ASC_TIMEOUT are optional.
        """
        env = os.environ if environ is None else environ

        options = {}
        if env.get("ASC_BASE_URL"):
            options["base_url"] = env["ASC_BASE_URL"]
        if env.get("ASC_TIMEOUT"):
            try:
                options["timeout"] = float(env["ASC_TIMEOUT"])
            except ValueError:
                raise ValidationError(
                    f"ASC_TIMEOUT must be a number, got: {env['ASC_TIMEOUT']}"
                )

        key_id = env.get("ASC_KEY_ID", "")
        issuer_id = env.get("ASC_ISSUER_ID", "")

        if env.get("ASC_PRIVATE_KEY"):
            return cls(
                key_id=key_id,
                issuer_id=issuer_id,
                private_key=env["ASC_PRIVATE_KEY"],
                **options,
            )

        return cls.from_key_file(
            key_id, issuer_id, env.get("ASC_PRIVATE_KEY_PATH", ""), **options
        )
