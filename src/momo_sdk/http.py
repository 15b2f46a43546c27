"""HTTP dispatch for the MoMo SDK.

Turns a declarative :class:`Request` into a single ``httpx`` call and decodes
the JSON response into a pydantic model. There are no retries: one attempt,
bounded by the client timeout.
"""
from __future__ import annotations

import base64
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .models.base import MomoModel
from .models.errors import APIError, InvalidResponseError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
USER_AGENT = "momo-sdk-python/0.1.0"

T = TypeVar("T", bound=BaseModel)


@dataclass(frozen=True)
class Request:
    """A single API call.

    Attributes:
        method: HTTP method
        path: Path appended to the configured base URL
        body: JSON-serializable body, or a pydantic model
        headers: Extra headers; these override the defaults
        params: Query parameters
    """

    method: str
    path: str
    body: Any = None
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, str] = field(default_factory=dict)


def basic_auth_header(api_user: str, api_key: str) -> str:
    """Build a Basic Authorization header value from an API user and key."""
    token = base64.b64encode(f"{api_user}:{api_key}".encode()).decode()
    return f"Basic {token}"


class HTTPDispatcher:
    """Sends :class:`Request` descriptors to the MoMo API.

    Args:
        base_url: Scheme and host, e.g. ``https://sandbox.momodeveloper.mtn.com``
        timeout: Request timeout in seconds (default: 30)
        http_client: Pre-built ``httpx.Client``; the caller keeps ownership
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.Client] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def send(self, request: Request, result_type: Optional[Type[T]] = None) -> Optional[T]:
        """Send a request and optionally decode the response.

        Args:
            request: The request descriptor
            result_type: Model to decode the JSON body into

        Returns:
            The decoded model, or None when no result type is given, the
            status is 204 or the body is empty

        Raises:
            TransportError: If no response was received
            APIError: If the status is outside [200, 300)
            InvalidResponseError: If the body cannot be decoded
        """
        headers = httpx.Headers({"Content-Type": "application/json"})
        headers.update(request.headers)

        content = None
        if request.body is not None:
            body = request.body
            if isinstance(body, MomoModel):
                body = body.to_dict()
            content = json.dumps(body, default=str)

        url = f"{self._base_url}{request.path}"
        logger.debug("MoMo request: %s %s", request.method, url)
        try:
            response = self._client.request(
                request.method,
                url,
                content=content,
                headers=headers,
                params=request.params or None,
                timeout=self._timeout,
            )
        except httpx.RequestError as exc:
            raise TransportError(
                f"error making HTTP request to {request.method} {request.path}: {exc}"
            ) from exc

        logger.debug(
            "MoMo response: %s %s -> %d", request.method, request.path, response.status_code
        )
        if not 200 <= response.status_code < 300:
            raise APIError.from_response(response.status_code, response.text)

        if result_type is None or response.status_code == 204 or not response.content:
            return None

        try:
            return result_type.model_validate_json(response.content)
        except PydanticValidationError as exc:
            raise InvalidResponseError(
                f"error decoding response from {request.method} {request.path}: {exc}",
                body=response.text,
            ) from exc

    def close(self) -> None:
        """Close the HTTP client if this dispatcher created it."""
        if self._owns_client and not self._client.is_closed:
            self._client.close()

    def __enter__(self) -> "HTTPDispatcher":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
