# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import base64
import json
from dataclasses import asdict

import httpx
import pytest

from nagprobe.config import SiteAccountsSettings
from nagprobe.errors import (
    CredentialsDecryptionError,
    ErrorCategory,
    SiteAccountsConfigError,
    SiteAccountsRequestError,
    SiteAccountsResponseError,
)
from nagprobe.http.httpx_client import HttpxClient
from nagprobe.http.url import generate_url
from nagprobe.siteacc.client import SiteAccountsClient
from nagprobe.siteacc.credentials import decrypt_string, encrypt_credentials, encrypt_string
from nagprobe.siteacc.models import TestClientCredentials

PASSPHRASE = "correct horse battery staple"


def _settings(**overrides):
    values = {
        "url": "https://accounts.example/api",
        "username": "prober",
        "password": "pw",
        "credentials_passphrase": PASSPHRASE,
    }
    values.update(overrides)
    return SiteAccountsSettings(**values)


def _site_payload(client_id="test-client", secret="s3cret", passphrase=PASSPHRASE, success=True):
    return {
        "success": success,
        "data": {
            "site": {
                "id": "CERN",
                "config": {
                    "testClientCredentials": asdict(
                        encrypt_credentials(TestClientCredentials(client_id, secret), passphrase)
                    )
                },
            }
        },
    }


class RecordingTransport:
    def __init__(self, handler):
        self.handler = handler
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


def _client(handler, settings=None):
    transport = RecordingTransport(handler)
    settings = settings or _settings()
    http_client = HttpxClient(settings, client=httpx.Client(transport=httpx.MockTransport(transport)))
    return SiteAccountsClient(settings, http_client), transport


def test_generate_url_joins_endpoint_and_encodes_query():
    assert generate_url("https://accounts.example/api/", "site-get", {"site": "A B"}) == (
        "https://accounts.example/api/site-get?site=A+B"
    )
    assert generate_url("https://accounts.example", "site-get", {"site": "x"}) == "https://accounts.example/site-get?site=x"
    with pytest.raises(ValueError):
        generate_url("not a url", "site-get")


def test_credentials_roundtrip_and_wrong_passphrase():
    token = encrypt_string("value", PASSPHRASE)
    assert decrypt_string(token, PASSPHRASE) == "value"
    with pytest.raises(CredentialsDecryptionError):
        decrypt_string(token, "other passphrase")
    with pytest.raises(CredentialsDecryptionError):
        decrypt_string("%%%not-base64%%%", PASSPHRASE)
    with pytest.raises(CredentialsDecryptionError):
        decrypt_string(base64.b64encode(b"short").decode(), PASSPHRASE)


def test_query_returns_decrypted_credentials():
    client, transport = _client(lambda request: httpx.Response(200, json=_site_payload()))

    site = client.query_site_test_user_credentials("CERN")

    assert site.id == "CERN"
    assert site.config.test_client_credentials.id == "test-client"
    assert site.config.test_client_credentials.secret == "s3cret"
    (request,) = transport.requests
    assert str(request.url) == "https://accounts.example/api/site-get?site=CERN"
    expected_auth = "Basic " + base64.b64encode(b"prober:pw").decode()
    assert request.headers["authorization"] == expected_auth


def test_every_call_queries_the_service_again():
    client, transport = _client(lambda request: httpx.Response(200, json=_site_payload()))
    client.query_site_test_user_credentials("CERN")
    client.query_site_test_user_credentials("CERN")
    assert len(transport.requests) == 2


@pytest.mark.parametrize(
    "overrides",
    [{"url": ""}, {"credentials_passphrase": ""}],
)
def test_missing_configuration_fails_before_any_request(overrides):
    client, transport = _client(lambda request: httpx.Response(200, json=_site_payload()), _settings(**overrides))
    with pytest.raises(SiteAccountsConfigError):
        client.query_site_test_user_credentials("CERN")
    assert transport.requests == []


def test_plain_http_service_is_refused():
    client, transport = _client(
        lambda request: httpx.Response(200, json=_site_payload()),
        _settings(url="http://accounts.example/api"),
    )
    with pytest.raises(SiteAccountsConfigError, match="https"):
        client.query_site_test_user_credentials("CERN")
    assert transport.requests == []


def test_http_error_status_is_a_request_error():
    client, _ = _client(lambda request: httpx.Response(500, text="oops"))
    with pytest.raises(SiteAccountsRequestError) as excinfo:
        client.query_site_test_user_credentials("CERN")
    assert excinfo.value.category == ErrorCategory.HTTP_ERROR


def test_transport_failure_is_a_categorized_request_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client, _ = _client(handler)
    with pytest.raises(SiteAccountsRequestError) as excinfo:
        client.query_site_test_user_credentials("CERN")
    assert excinfo.value.category == ErrorCategory.CONNECTION_ERROR


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json={"success": False, "error": "unknown site"}),
        httpx.Response(200, json={"success": True, "data": {}}),
        httpx.Response(200, json=["unexpected"]),
    ],
)
def test_unusable_payloads_are_response_errors(response):
    client, _ = _client(lambda request: response)
    with pytest.raises(SiteAccountsResponseError):
        client.query_site_test_user_credentials("CERN")


def test_decryption_failure_is_reported_separately():
    payload = _site_payload(passphrase="a different passphrase")
    client, _ = _client(lambda request: httpx.Response(200, content=json.dumps(payload).encode()))
    with pytest.raises(CredentialsDecryptionError):
        client.query_site_test_user_credentials("CERN")
