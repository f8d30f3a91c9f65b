"""Tests for the out-of-band OAuth 2.0 flow."""

import asyncio
from unittest.mock import MagicMock
from urllib.parse import parse_qs, urlsplit

import pytest
import requests

from osm_client.auth import OobAuthorizationFlow
from osm_client.errors import AuthorizationError
from osm_client.models.user import Credentials
from osm_client.protocols import AuthorizationFlow


@pytest.fixture
def session() -> MagicMock:
    mock_session = MagicMock()
    mock_session.headers = {}
    return mock_session


def _flow(session: MagicMock, **kwargs: str) -> OobAuthorizationFlow:
    return OobAuthorizationFlow("https://www.example.org/", "client-123", session=session, **kwargs)


def _token_response(payload: object) -> MagicMock:
    response = MagicMock()
    response.json.return_value = payload
    return response


def test_flow_satisfies_protocol(session: MagicMock) -> None:
    assert isinstance(_flow(session), AuthorizationFlow)


def test_authorization_url(session: MagicMock) -> None:
    url = urlsplit(_flow(session).authorization_url())

    assert (url.scheme, url.netloc, url.path) == ("https", "www.example.org", "/oauth2/authorize")
    assert parse_qs(url.query) == {
        "client_id": ["client-123"],
        "redirect_uri": ["urn:ietf:wg:oauth:2.0:oob"],
        "response_type": ["code"],
        "scope": ["read_prefs write_api"],
    }


def test_start_exchanges_code_for_credentials(session: MagicMock) -> None:
    session.post.return_value = _token_response(
        {"access_token": "access", "token_type": "Bearer", "scope": "read_prefs"}
    )
    shown: list[str] = []

    def present(url: str) -> str:
        shown.append(url)
        return "  the-code\n"

    credentials, error = asyncio.run(_flow(session, client_secret="s3cret").start(present))

    assert credentials == Credentials(token="access", secret="")
    assert error is None
    assert shown and "client_id=client-123" in shown[0]
    args, kwargs = session.post.call_args
    assert args == ("https://www.example.org/oauth2/token",)
    assert kwargs["data"]["code"] == "the-code"
    assert kwargs["data"]["grant_type"] == "authorization_code"
    assert kwargs["data"]["client_secret"] == "s3cret"


def test_start_keeps_refresh_token_as_secret(session: MagicMock) -> None:
    session.post.return_value = _token_response({"access_token": "a", "refresh_token": "r"})

    credentials, _error = asyncio.run(_flow(session).start(lambda _url: "code"))

    assert credentials == Credentials(token="a", secret="r")
    assert "client_secret" not in session.post.call_args.kwargs["data"]


def test_blank_code_is_an_error(session: MagicMock) -> None:
    credentials, error = asyncio.run(_flow(session).start(lambda _url: "   "))

    assert credentials is None
    assert isinstance(error, AuthorizationError)
    session.post.assert_not_called()


def test_presentation_failure_is_returned(session: MagicMock) -> None:
    failure = RuntimeError("aborted")

    def present(_url: str) -> str:
        raise failure

    assert asyncio.run(_flow(session).start(present)) == (None, failure)


def test_http_failure_is_returned(session: MagicMock) -> None:
    error = requests.HTTPError("400 Bad Request")
    session.post.return_value.raise_for_status.side_effect = error

    assert asyncio.run(_flow(session).start(lambda _url: "code")) == (None, error)


def test_response_without_access_token_is_an_error(session: MagicMock) -> None:
    session.post.return_value = _token_response({"error": "invalid_grant"})

    credentials, error = asyncio.run(_flow(session).start(lambda _url: "code"))

    assert credentials is None
    assert isinstance(error, AuthorizationError)
