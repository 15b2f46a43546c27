"""Configuration surface for the MoMo SDK.

A ``MomoConfig`` is assembled once from three layers, each overriding the
previous one:

1. defaults for the selected environment (sandbox or production),
2. ``MOMO_*`` environment variables, when requested,
3. explicit keyword arguments from the caller.

The result is validated and frozen. Mutable state (cached tokens, sandbox
credentials) lives in the session object, never here.
"""
from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.errors import ConfigurationError

logger = logging.getLogger(__name__)

SANDBOX_HOST = "sandbox.momodeveloper.mtn.com"


class Environment(str, Enum):
    """MoMo environment."""

    SANDBOX = "sandbox"
    PRODUCTION = "production"


ENVIRONMENT_DEFAULTS: dict[Environment, dict[str, str]] = {
    Environment.SANDBOX: {
        "host": SANDBOX_HOST,
        "target_environment": "sandbox",
        "currency": "EUR",
    },
    # Production currency and target environment depend on the country.
    Environment.PRODUCTION: {},
}


class MomoEnvironmentSettings(BaseSettings):
    """``MOMO_*`` environment variables. Unset or empty variables are None."""

    model_config = SettingsConfigDict(
        env_prefix="MOMO_",
        env_ignore_empty=True,
        extra="ignore",
    )

    subscription_key: Optional[str] = None
    disbursement_key: Optional[str] = None
    target_environment: Optional[str] = None
    callback_host: Optional[str] = None
    host: Optional[str] = None
    api_user: Optional[str] = None
    api_key: Optional[str] = None
    currency: Optional[str] = None


class MomoConfig(BaseModel):
    """Validated, immutable MoMo configuration.

    Prefer :meth:`create` or :meth:`from_env` over calling the constructor,
    so that environment defaults are applied.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    environment: Environment = Environment.SANDBOX
    subscription_key: str = Field(default="", repr=False)
    disbursement_key: str = Field(default="", repr=False)
    target_environment: str = ""
    callback_host: str = ""
    api_user: str = ""
    api_key: str = Field(default="", repr=False)
    host: str = ""
    currency: str = ""

    @model_validator(mode="before")
    @classmethod
    def default_disbursement_key(cls, data: Any) -> Any:
        """Use the subscription key for disbursements when no key is given."""
        if isinstance(data, dict) and not data.get("disbursement_key"):
            data = {**data, "disbursement_key": data.get("subscription_key", "")}
        return data

    @model_validator(mode="after")
    def check_required(self) -> "MomoConfig":
        for field, label in (
            ("subscription_key", "subscription key"),
            ("target_environment", "target environment"),
            ("host", "host"),
        ):
            if not getattr(self, field):
                raise ConfigurationError(f"{label} is required", field=field)
        if self.environment == Environment.PRODUCTION and not (self.api_user and self.api_key):
            raise ConfigurationError(
                "API user and key are required for production", field="api_user"
            )
        if not self.currency:
            raise ConfigurationError("currency is required", field="currency")
        return self

    @property
    def is_sandbox(self) -> bool:
        return self.environment == Environment.SANDBOX

    @property
    def base_url(self) -> str:
        """Host as a URL; bare hosts are served over HTTPS."""
        if "://" in self.host:
            return self.host.rstrip("/")
        return f"https://{self.host.rstrip('/')}"

    @classmethod
    def create(
        cls,
        environment: Union[Environment, str] = Environment.SANDBOX,
        *,
        from_env: bool = False,
        env_file: Optional[Union[str, Path]] = None,
        **overrides: Optional[str],
    ) -> "MomoConfig":
        """Build a configuration from defaults, environment and overrides.

        Args:
            environment: ``sandbox`` or ``production``
            from_env: Read ``MOMO_*`` environment variables
            env_file: Optional dotenv file read alongside the environment
            **overrides: Explicit field values; ``None`` means not given

        Raises:
            ConfigurationError: If a required value is missing or invalid
        """
        try:
            environment = Environment(environment)
        except ValueError as exc:
            raise ConfigurationError(
                f"unknown environment: {environment}", field="environment"
            ) from exc

        unknown = set(overrides) - set(MomoEnvironmentSettings.model_fields)
        if unknown:
            raise ConfigurationError(
                f"unknown configuration option(s): {', '.join(sorted(unknown))}",
                field=sorted(unknown)[0],
            )

        values: dict[str, Any] = dict(ENVIRONMENT_DEFAULTS[environment])
        if from_env or env_file is not None:
            settings = MomoEnvironmentSettings(_env_file=env_file)
            values.update(settings.model_dump(exclude_none=True))
        values.update({k: v for k, v in overrides.items() if v is not None})
        values["environment"] = environment

        try:
            config = cls(**values)
        except ValidationError as exc:
            raise ConfigurationError(f"invalid configuration: {exc}") from exc
        logger.debug(
            "MoMo config ready: environment=%s host=%s target=%s",
            config.environment.value,
            config.host,
            config.target_environment,
        )
        return config

    @classmethod
    def from_env(
        cls,
        environment: Union[Environment, str] = Environment.SANDBOX,
        env_file: Optional[Union[str, Path]] = None,
        **overrides: Optional[str],
    ) -> "MomoConfig":
        """Build a configuration from ``MOMO_*`` environment variables."""
        return cls.create(environment, from_env=True, env_file=env_file, **overrides)
