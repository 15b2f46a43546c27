"""Authentication for the MoMo SDK.

``AuthService`` is the session: it owns the per-product token cache and any
sandbox credentials provisioned on the fly. All token work happens under one
lock, network calls included, so concurrent callers never race a refresh.
"""
from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, Dict, Optional, Tuple, Union

from .config import MomoConfig
from .http import HTTPDispatcher, Request, basic_auth_header
from .models.auth import ApiKeyResponse, SandboxUserPayload, TokenResponse
from .models.errors import AuthenticationError, MomoError, UnknownProductError

logger = logging.getLogger(__name__)

SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"
REFERENCE_ID_HEADER = "X-Reference-Id"

# Tokens are renewed this long before MoMo says they expire.
TOKEN_EXPIRY_MARGIN = timedelta(seconds=60)


class Product(str, Enum):
    """MoMo API product."""

    COLLECTION = "collection"
    DISBURSEMENT = "disbursement"


TOKEN_PATHS: Dict[Product, str] = {
    Product.COLLECTION: "/collection/token/",
    Product.DISBURSEMENT: "/disbursement/token/",
}


@dataclass(frozen=True)
class CachedToken:
    """A bearer token and the instant it stops being reused."""

    access_token: str = field(repr=False)
    expires_at: datetime

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return bool(self.access_token) and now < self.expires_at


@dataclass(frozen=True)
class SandboxCredentials:
    """API user and key created against the sandbox."""

    api_user: str
    api_key: str = field(repr=False)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuthService:
    """Token acquisition and sandbox provisioning.

    Args:
        config: Validated configuration
        dispatcher: HTTP dispatcher bound to the configured host
        clock: Returns the current time as an aware datetime
    """

    def __init__(
        self,
        config: MomoConfig,
        dispatcher: HTTPDispatcher,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._config = config
        self._dispatcher = dispatcher
        self._clock = clock
        self._lock = threading.Lock()
        self._tokens: Dict[Product, CachedToken] = {}
        self._sandbox_credentials: Optional[SandboxCredentials] = None

    # ------------------------------------------------------------------
    # Sandbox provisioning
    # ------------------------------------------------------------------

    def _require_sandbox(self, operation: str) -> None:
        if not self._config.is_sandbox:
            raise AuthenticationError(f"{operation} is only available in sandbox mode")

    def create_api_user(self) -> str:
        """Create a sandbox API user.

        The id is generated client-side and sent as the reference id; MoMo
        does not return one.

        Returns:
            The new API user id
        """
        self._require_sandbox("creating API users")
        api_user = str(uuid.uuid4())
        self._dispatcher.send(
            Request(
                method="POST",
                path="/v1_0/apiuser",
                body=SandboxUserPayload(provider_callback_host=self._config.callback_host),
                headers={
                    REFERENCE_ID_HEADER: api_user,
                    SUBSCRIPTION_KEY_HEADER: self._config.subscription_key,
                },
            )
        )
        logger.info("Created MoMo sandbox API user %s", api_user)
        return api_user

    def create_api_key(self, api_user: str) -> str:
        """Create an API key for a sandbox API user."""
        self._require_sandbox("creating API keys")
        result = self._dispatcher.send(
            Request(
                method="POST",
                path=f"/v1_0/apiuser/{api_user}/apikey",
                headers={SUBSCRIPTION_KEY_HEADER: self._config.subscription_key},
            ),
            ApiKeyResponse,
        )
        if result is None:
            raise AuthenticationError(f"no API key returned for API user {api_user}")
        logger.info("Created MoMo sandbox API key for user %s", api_user)
        return result.api_key

    def provision_sandbox_credentials(self) -> SandboxCredentials:
        """Create a fresh sandbox API user and key.

        Each call creates a new user on the remote side.
        """
        api_user = self.create_api_user()
        api_key = self.create_api_key(api_user)
        return SandboxCredentials(api_user=api_user, api_key=api_key)

    @property
    def sandbox_credentials(self) -> Optional[SandboxCredentials]:
        """Credentials provisioned by this session, if any."""
        return self._sandbox_credentials

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    @staticmethod
    def resolve_product(product: Union[Product, str]) -> Product:
        try:
            return Product(product)
        except ValueError as exc:
            raise UnknownProductError(product) from exc

    def subscription_key(self, product: Union[Product, str]) -> str:
        """Subscription key presented for a product."""
        if self.resolve_product(product) == Product.DISBURSEMENT:
            return self._config.disbursement_key
        return self._config.subscription_key

    def _resolve_credentials(self) -> Tuple[str, str]:
        config = self._config
        if config.api_user and config.api_key:
            return config.api_user, config.api_key
        if not config.is_sandbox:
            raise AuthenticationError("API user and key are required for production")
        if self._sandbox_credentials is None:
            self._sandbox_credentials = self.provision_sandbox_credentials()
        return self._sandbox_credentials.api_user, self._sandbox_credentials.api_key

    def get_access_token(self, product: Union[Product, str]) -> str:
        """Return a valid bearer token for a product, fetching one if needed.

        Args:
            product: ``collection`` or ``disbursement``

        Raises:
            UnknownProductError: For any other product; nothing is sent
            AuthenticationError: If provisioning or the token exchange fails
        """
        product = self.resolve_product(product)

        with self._lock:
            cached = self._tokens.get(product)
            if cached is not None and cached.is_valid(self._clock()):
                return cached.access_token

            try:
                api_user, api_key = self._resolve_credentials()
                token = self._dispatcher.send(
                    Request(
                        method="POST",
                        path=TOKEN_PATHS[product],
                        headers={
                            "Authorization": basic_auth_header(api_user, api_key),
                            SUBSCRIPTION_KEY_HEADER: self.subscription_key(product),
                        },
                    ),
                    TokenResponse,
                )
            except AuthenticationError:
                raise
            except MomoError as exc:
                raise AuthenticationError(
                    f"failed to fetch {product.value} access token: {exc}"
                ) from exc

            if token is None or not token.access_token:
                raise AuthenticationError(f"empty {product.value} token response")

            expires_at = self._clock() + timedelta(seconds=token.expires_in) - TOKEN_EXPIRY_MARGIN
            self._tokens[product] = CachedToken(
                access_token=token.access_token,
                expires_at=expires_at,
            )
            logger.info(
                "Fetched MoMo %s access token, valid until %s",
                product.value,
                expires_at.isoformat(),
            )
            return token.access_token

    def cached_token(self, product: Union[Product, str]) -> Optional[CachedToken]:
        """Current cache entry for a product, valid or not."""
        product = self.resolve_product(product)
        with self._lock:
            return self._tokens.get(product)

    def invalidate(self, product: Optional[Union[Product, str]] = None) -> None:
        """Drop the cached token for one product, or all of them."""
        with self._lock:
            if product is None:
                self._tokens.clear()
            else:
                self._tokens.pop(self.resolve_product(product), None)
