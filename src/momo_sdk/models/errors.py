"""Error models for the MoMo SDK."""
from __future__ import annotations

import json
from typing import Any, Optional


class MomoError(Exception):
    """Base exception for the MoMo SDK."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "MOMO_ERROR"
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


class ConfigurationError(MomoError):
    """A required configuration value is missing or invalid."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, code="INVALID_CONFIGURATION", details={"field": field})
        self.field = field


class AuthenticationError(MomoError):
    """Token exchange or sandbox provisioning failed."""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, code="AUTHENTICATION_FAILED")


class APIError(MomoError):
    """Non-2xx response from the MoMo API.

    ``body`` always holds the raw response text. When the body is MTN's JSON
    error document, its ``code`` and ``message`` are lifted onto the error.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        body: str = "",
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code or "API_REQUEST_FAILED", details)
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        text = f"[{self.code}] {self.message} (status {self.status_code})"
        return f"{text}: {self.body}" if self.body else text

    @classmethod
    def from_response(cls, status_code: int, body: str) -> "APIError":
        """Create APIError from an HTTP status and raw response text."""
        message = "API request failed"
        try:
            data = json.loads(body) if body else None
        except ValueError:
            data = None
        if not isinstance(data, dict):
            return cls(message=message, status_code=status_code, body=body)
        return cls(
            message=str(data.get("message") or message),
            status_code=status_code,
            body=body,
            code=data.get("code"),
            details={k: v for k, v in data.items() if k not in ("code", "message")},
        )


class InvalidResponseError(MomoError):
    """The response body could not be decoded into the expected model."""

    def __init__(self, message: str, body: str = ""):
        super().__init__(message, code="INVALID_RESPONSE")
        self.body = body


class UnknownProductError(MomoError):
    """Token requested for a product other than collection or disbursement."""

    def __init__(self, product: Any):
        super().__init__(
            f"unknown product: {product}",
            code="UNKNOWN_PRODUCT",
            details={"product": str(product)},
        )
        self.product = product


class TransportError(MomoError):
    """The request never produced an HTTP response."""

    def __init__(self, message: str):
        super().__init__(message, code="TRANSPORT_ERROR")


class ValidationError(MomoError):
    """A caller-supplied argument was rejected before sending."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, code="VALIDATION_ERROR", details={"field": field})
        self.field = field
