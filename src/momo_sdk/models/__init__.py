"""MoMo SDK Models."""
from .base import MomoModel
from .auth import ApiKeyResponse, SandboxUserPayload, TokenResponse
from .transaction import (
    AccountBalance,
    AccountHolderInfo,
    Party,
    PartyIdType,
    RequestToPayOptions,
    RequestToPayPayload,
    TransactionOptions,
    TransactionStatus,
    TransactionStatusResponse,
    TransferOptions,
    TransferPayload,
)
from .errors import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    InvalidResponseError,
    MomoError,
    TransportError,
    UnknownProductError,
    ValidationError,
)

__all__ = [
    "MomoModel",
    "ApiKeyResponse",
    "SandboxUserPayload",
    "TokenResponse",
    "AccountBalance",
    "AccountHolderInfo",
    "Party",
    "PartyIdType",
    "RequestToPayOptions",
    "RequestToPayPayload",
    "TransactionOptions",
    "TransactionStatus",
    "TransactionStatusResponse",
    "TransferOptions",
    "TransferPayload",
    "APIError",
    "AuthenticationError",
    "ConfigurationError",
    "InvalidResponseError",
    "MomoError",
    "TransportError",
    "UnknownProductError",
    "ValidationError",
]
