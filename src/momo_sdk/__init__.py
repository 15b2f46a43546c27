"""
MTN MoMo Python SDK

A client for the MTN Mobile Money Collection and Disbursement APIs.
"""

from .auth import AuthService, CachedToken, Product, SandboxCredentials
from .client import MomoClient
from .config import Environment, MomoConfig
from .http import HTTPDispatcher, Request
from .idempotency import generate_idempotency_key
from .models.errors import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    InvalidResponseError,
    MomoError,
    TransportError,
    UnknownProductError,
    ValidationError,
)
from .models.transaction import (
    AccountBalance,
    AccountHolderInfo,
    Party,
    PartyIdType,
    RequestToPayOptions,
    TransactionOptions,
    TransactionStatus,
    TransactionStatusResponse,
    TransferOptions,
)
from .phone import CountryCodeNormalizer, PhoneNormalizer, format_phone_number

__version__ = "0.1.0"

__all__ = [
    # Client
    "MomoClient",
    "MomoConfig",
    "Environment",
    # Session and transport
    "AuthService",
    "CachedToken",
    "Product",
    "SandboxCredentials",
    "HTTPDispatcher",
    "Request",
    # Helpers
    "generate_idempotency_key",
    "CountryCodeNormalizer",
    "PhoneNormalizer",
    "format_phone_number",
    # Errors
    "MomoError",
    "APIError",
    "AuthenticationError",
    "ConfigurationError",
    "InvalidResponseError",
    "TransportError",
    "UnknownProductError",
    "ValidationError",
    # Models
    "AccountBalance",
    "AccountHolderInfo",
    "Party",
    "PartyIdType",
    "RequestToPayOptions",
    "TransactionOptions",
    "TransactionStatus",
    "TransactionStatusResponse",
    "TransferOptions",
]
