"""
MTN MoMo Python SDK

Example usage:
    ```python
    from momo_sdk import MomoClient, MomoConfig

    config = MomoConfig.create(
        "sandbox",
        subscription_key="your-subscription-key",
        callback_host="example.com",
    )
    with MomoClient(config) as client:
        reference_id = client.collection.request_to_pay("0770123456", "5.00")
        status = client.collection.get_transaction_status(reference_id)

        client.disbursement.transfer("0770123456", "2.50")
    ```
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import httpx

from .auth import AuthService
from .config import Environment, MomoConfig
from .http import DEFAULT_TIMEOUT, HTTPDispatcher
from .phone import PhoneNormalizer, format_phone_number
from .resources.collection import CollectionResource
from .resources.disbursement import DisbursementResource


class MomoClient:
    """
    MoMo API client.

    Provides access to:
    - auth: token cache and sandbox provisioning
    - collection: request-to-pay, status, balance, account holder info
    - disbursement: transfer, status, balance, account holder info

    Args:
        config: Validated configuration
        timeout: Request timeout in seconds (default: 30)
        http_client: Pre-built ``httpx.Client``; not closed by this client
        phone_normalizer: Strategy used to canonicalise phone numbers
    """

    def __init__(
        self,
        config: MomoConfig,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.Client] = None,
        phone_normalizer: PhoneNormalizer = format_phone_number,
    ):
        self.config = config
        self._dispatcher = HTTPDispatcher(
            config.base_url,
            timeout=timeout,
            http_client=http_client,
        )
        self.auth = AuthService(config, self._dispatcher)
        self.collection = CollectionResource(
            config, self._dispatcher, self.auth, phone_normalizer
        )
        self.disbursement = DisbursementResource(
            config, self._dispatcher, self.auth, phone_normalizer
        )

    @classmethod
    def from_env(
        cls,
        environment: Union[Environment, str] = Environment.SANDBOX,
        env_file: Optional[Union[str, Path]] = None,
        **overrides: Optional[str],
    ) -> "MomoClient":
        """Create a client configured from ``MOMO_*`` environment variables."""
        return cls(MomoConfig.from_env(environment, env_file=env_file, **overrides))

    def close(self) -> None:
        """Close the HTTP client."""
        self._dispatcher.close()

    def __enter__(self) -> "MomoClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
