"""
Tests for MomoClient
"""
import re

import pytest

from momo_sdk import ConfigurationError, MomoClient
from momo_sdk.resources import CollectionResource, DisbursementResource


class TestClientInitialization:
    """Tests for client initialization."""

    def test_initialize_resources(self, sandbox_config):
        """Should expose auth, collection and disbursement."""
        client = MomoClient(sandbox_config)

        assert isinstance(client.collection, CollectionResource)
        assert isinstance(client.disbursement, DisbursementResource)
        assert client.collection._auth is client.auth
        assert client.disbursement._auth is client.auth
        assert client.config is sandbox_config
        client.close()

    def test_from_env(self, monkeypatch):
        """Should build the config from MOMO_* variables."""
        monkeypatch.setenv("MOMO_SUBSCRIPTION_KEY", "env-sub")
        monkeypatch.setenv("MOMO_CALLBACK_HOST", "cb.example.com")

        with MomoClient.from_env("sandbox") as client:
            assert client.config.subscription_key == "env-sub"
            assert client.config.disbursement_key == "env-sub"

    def test_from_env_invalid(self):
        """Should raise ConfigurationError without required variables."""
        with pytest.raises(ConfigurationError):
            MomoClient.from_env("sandbox")


class TestContextManager:
    """Tests for the context manager."""

    def test_closes_owned_client(self, sandbox_config):
        """Should close the HTTP client it created."""
        with MomoClient(sandbox_config) as client:
            inner = client._dispatcher._client
        assert inner.is_closed

    def test_leaves_injected_client_open(self, sandbox_config, http_client):
        with MomoClient(sandbox_config, http_client=http_client):
            pass
        assert not http_client.is_closed


class TestEndToEnd:
    """Token exchange followed by a product call."""

    def test_request_to_pay_flow(self, client, httpx_mock, base_url):
        """Should fetch a token and return a reference id for an accepted request."""
        httpx_mock.add_response(
            url=f"{base_url}/collection/token/",
            method="POST",
            json={"access_token": "T", "expires_in": 120},
        )
        httpx_mock.add_response(
            url=f"{base_url}/collection/v1_0/requesttopay",
            method="POST",
            status_code=202,
        )

        reference_id = client.collection.request_to_pay("0733123454", "5")

        assert reference_id
        assert [r.url.path for r in httpx_mock.requests] == [
            "/collection/token/",
            "/collection/v1_0/requesttopay",
        ]

    def test_sandbox_flow_with_provisioning(self, bare_sandbox_config, http_client, httpx_mock, base_url):
        """Should provision credentials, fetch a token, pay and poll."""
        client = MomoClient(bare_sandbox_config, http_client=http_client)
        httpx_mock.add_response(url=f"{base_url}/v1_0/apiuser", method="POST", status_code=201)
        httpx_mock.add_response(
            url=re.compile(rf"{re.escape(base_url)}/v1_0/apiuser/[0-9a-f-]+/apikey"),
            method="POST",
            status_code=201,
            json={"apiKey": "generated"},
        )
        httpx_mock.add_response(
            url=f"{base_url}/collection/token/",
            method="POST",
            json={"access_token": "T", "expires_in": 3600},
        )
        httpx_mock.add_response(
            url=f"{base_url}/collection/v1_0/requesttopay", method="POST", status_code=202
        )
        httpx_mock.add_response(
            url=re.compile(rf"{re.escape(base_url)}/collection/v1_0/requesttopay/[0-9a-f-]+"),
            json={"status": "SUCCESSFUL", "amount": "5", "currency": "EUR"},
        )

        reference_id = client.collection.request_to_pay("0733123454", "5")
        status = client.collection.get_transaction_status(reference_id)

        assert status.is_final
        assert httpx_mock.requests[-1].url.path.endswith(reference_id)
