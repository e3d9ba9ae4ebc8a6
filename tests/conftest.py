"""
Shared fixtures for asc-client tests.
"""

import json

import pytest
from unittest.mock import Mock

from asc_client import AppStoreConnectClient, ClientConfig, Transport


@pytest.fixture
def config():
    """Create a test configuration without client-side throttling."""
    return ClientConfig(
        key_id="test_key",
        issuer_id="test_issuer",
        private_key="test_private_key",
        rate_limit_calls=None,
    )


@pytest.fixture
def token_provider():
    """Token provider that always hands out the same token."""
    provider = Mock()
    provider.token.return_value = "test_token"
    return provider


@pytest.fixture
def transport(config, token_provider):
    return Transport(config, token_provider)


@pytest.fixture
def client(config, transport):
    return AppStoreConnectClient(config, transport=transport)


@pytest.fixture
def make_response():
    """Factory for mocked ``requests`` responses."""

    def _make(status_code=200, payload=None, content=None, headers=None):
        response = Mock()
        response.status_code = status_code
        if content is None:
            content = json.dumps(payload).encode("utf-8") if payload is not None else b""
        response.content = content
        response.headers = headers or {}
        return response

    return _make
