"""Authentication models for the MoMo SDK."""
from __future__ import annotations

from typing import Optional

from pydantic import Field

from .base import MomoModel


class TokenResponse(MomoModel):
    """OAuth-style token returned by the product token endpoints."""

    access_token: str
    token_type: Optional[str] = None
    expires_in: int


class ApiKeyResponse(MomoModel):
    """API key issued for a sandbox API user."""

    api_key: str = Field(alias="apiKey")


class SandboxUserPayload(MomoModel):
    """Body of the sandbox API user creation call."""

    provider_callback_host: str = Field(alias="providerCallbackHost")
