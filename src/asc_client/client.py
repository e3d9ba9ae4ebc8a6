"""
Apple App Store Connect API client.

This module provides the client object that ties the configuration, the
shared transport and the per-resource services together.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .app_info_localizations import AppInfoLocalizationsService
from .apps import AppsService
from .auth import TokenProvider
from .config import ClientConfig
from .screenshots import ScreenshotsService
from .subscriptions import SubscriptionsService
from .transport import Transport

logger = logging.getLogger(__name__)


class AppStoreConnectClient:
    """
    Apple App Store Connect API client.

    Every service shares one transport, which in turn holds the immutable
    configuration. Each service method performs a single request.

    Args:
        config: Client configuration
        transport: Optional transport to use instead of building one

    Usage:
        config = ClientConfig.from_key_file("KEY_ID", "ISSUER_ID", "AuthKey.p8")
        client = AppStoreConnectClient(config)
        apps, response = client.apps.list_apps(ListAppsQuery(limit=10))
    """

    def __init__(self, config: ClientConfig, transport: Optional[Transport] = None):
        self.config = config
        self.transport = transport or Transport(config, TokenProvider(config))

        self.apps = AppsService(self.transport)
        self.app_info_localizations = AppInfoLocalizationsService(self.transport)
        self.screenshots = ScreenshotsService(self.transport)
        self.subscriptions = SubscriptionsService(self.transport)

        logger.info(f"Initialized client for key {config.key_id} at {config.base_url}")


def create_client(
    key_id: str,
    issuer_id: str,
    private_key_path: Union[str, Path],
    **options,
) -> AppStoreConnectClient:
    """
    Convenience function to create a client from a .p8 key file.

    Args:
        key_id: App Store Connect API key ID
        issuer_id: App Store Connect API issuer ID
        private_key_path: Path to private key file
        **options: Further ClientConfig settings (timeout, base_url...)

    Returns:
        Configured AppStoreConnectClient instance
    """
    config = ClientConfig.from_key_file(
        key_id=key_id,
        issuer_id=issuer_id,
        private_key_path=private_key_path,
        **options,
    )
    return AppStoreConnectClient(config)
