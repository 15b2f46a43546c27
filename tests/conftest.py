"""
Pytest configuration and fixtures for MoMo SDK tests.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Optional, Union
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx
import pytest

from momo_sdk import MomoClient, MomoConfig

BASE_URL = "https://sandbox.momodeveloper.mtn.com"

UrlPattern = Union[str, "re.Pattern[str]"]


@dataclass
class _MockEntry:
    method: str
    url: UrlPattern
    response: Optional[httpx.Response] = None
    exception: Optional[Exception] = None

    def matches(self, method: str, url: str) -> bool:
        if self.method != method:
            return False
        if isinstance(self.url, re.Pattern):
            return self.url.fullmatch(url) is not None
        return _normalize_url(self.url) == _normalize_url(url)


class _LocalHTTPXMock:
    """Queue of canned responses served through ``httpx.MockTransport``.

    Each registered response is used once, in registration order among
    entries matching the same method and URL. Every request that reaches the
    transport is recorded.
    """

    def __init__(self) -> None:
        self._entries: list[_MockEntry] = []
        self.requests: list[httpx.Request] = []

    def add_response(
        self,
        *,
        url: UrlPattern,
        method: str = "GET",
        status_code: int = 200,
        json: Any = None,
        content: Optional[bytes] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        if content is None and json is not None:
            content = json_dumps_bytes(json)
            response_headers = {"content-type": "application/json"}
            if headers:
                response_headers.update(headers)
        else:
            response_headers = headers or {}

        response = httpx.Response(
            status_code=status_code,
            headers=response_headers,
            content=content or b"",
        )
        self._entries.append(_MockEntry(method=method.upper(), url=url, response=response))

    def add_exception(
        self,
        exception: Exception,
        *,
        url: UrlPattern,
        method: str = "GET",
    ) -> None:
        self._entries.append(_MockEntry(method=method.upper(), url=url, exception=exception))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        match = self._pop_match(request.method, str(request.url))
        if match.exception is not None:
            raise match.exception
        assert match.response is not None
        return match.response

    def _pop_match(self, method: str, url: str) -> _MockEntry:
        for idx, entry in enumerate(self._entries):
            if entry.matches(method, url):
                return self._entries.pop(idx)
        raise AssertionError(
            f"No mocked response for {method} {url}. "
            f"Available: {[f'{e.method} {e.url}' for e in self._entries]}"
        )

    def get_requests(self, *, method: Optional[str] = None, path: Optional[str] = None) -> list[httpx.Request]:
        return [
            r
            for r in self.requests
            if (method is None or r.method == method.upper())
            and (path is None or r.url.path == path)
        ]

    def get_request(self, *, method: Optional[str] = None, path: Optional[str] = None) -> httpx.Request:
        matches = self.get_requests(method=method, path=path)
        assert len(matches) == 1, f"expected one request, got {len(matches)}"
        return matches[0]


def json_dumps_bytes(payload: Any) -> bytes:
    return json.dumps(payload, default=str).encode("utf-8")


def _normalize_url(url: str) -> str:
    parts = urlsplit(url)
    normalized_query = urlencode(sorted(parse_qsl(parts.query, keep_blank_values=True)), doseq=True)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, normalized_query, parts.fragment))


@pytest.fixture(autouse=True)
def _clean_momo_env(monkeypatch):
    """Keep developer MOMO_* variables out of the tests."""
    for name in (
        "MOMO_SUBSCRIPTION_KEY",
        "MOMO_DISBURSEMENT_KEY",
        "MOMO_TARGET_ENVIRONMENT",
        "MOMO_CALLBACK_HOST",
        "MOMO_HOST",
        "MOMO_API_USER",
        "MOMO_API_KEY",
        "MOMO_CURRENCY",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def httpx_mock() -> _LocalHTTPXMock:
    return _LocalHTTPXMock()


@pytest.fixture
def http_client(httpx_mock) -> httpx.Client:
    client = httpx.Client(transport=httpx.MockTransport(httpx_mock.handler))
    yield client
    client.close()


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def sandbox_config() -> MomoConfig:
    """Sandbox config with pre-provisioned credentials."""
    return MomoConfig.create(
        "sandbox",
        subscription_key="collection-key",
        disbursement_key="disbursement-key",
        callback_host="callback.example.com",
        api_user="api-user-1",
        api_key="api-key-1",
    )


@pytest.fixture
def bare_sandbox_config() -> MomoConfig:
    """Sandbox config that has to provision its own credentials."""
    return MomoConfig.create(
        "sandbox",
        subscription_key="collection-key",
        callback_host="callback.example.com",
    )


@pytest.fixture
def client(sandbox_config, http_client) -> MomoClient:
    client = MomoClient(sandbox_config, http_client=http_client)
    yield client
    client.close()


def _add_token_response(
    httpx_mock: _LocalHTTPXMock,
    product: str = "collection",
    access_token: str = "T",
    expires_in: int = 3600,
) -> None:
    httpx_mock.add_response(
        url=f"{BASE_URL}/{product}/token/",
        method="POST",
        json={"access_token": access_token, "token_type": "access_token", "expires_in": expires_in},
    )


@pytest.fixture
def mock_token(httpx_mock):
    """Register a token endpoint response: mock_token(product, access_token, expires_in)."""

    def _add(product: str = "collection", access_token: str = "T", expires_in: int = 3600) -> None:
        _add_token_response(httpx_mock, product, access_token, expires_in)

    return _add


MOCK_RESPONSES = {
    "status": {
        "amount": "5",
        "currency": "EUR",
        "financialTransactionId": "363440463",
        "externalId": "ext-123",
        "payer": {"partyIdType": "MSISDN", "partyId": "231770123456"},
        "payerMessage": "Payment request",
        "payeeNote": "Thank you for your payment",
        "status": "SUCCESSFUL",
    },
    "balance": {"availableBalance": "1500.50", "currency": "EUR"},
    "holder": {
        "given_name": "Sand",
        "family_name": "Box",
        "birthdate": "1976-08-13",
        "locale": "sv_SE",
        "gender": "M",
        "status": "ACTIVE",
    },
}


@pytest.fixture
def mock_responses() -> dict:
    return MOCK_RESPONSES
