"""Shared test fixtures."""

import pytest

from osm_client.api import OsmApiClient
from tests.unit.fakes import FakeAuthorizationFlow, FakeCredentialStore, FakeTransport
from tests.unit.samples import BASE_URL


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def store() -> FakeCredentialStore:
    return FakeCredentialStore()


@pytest.fixture
def flow() -> FakeAuthorizationFlow:
    return FakeAuthorizationFlow()


@pytest.fixture
def client(
    transport: FakeTransport, store: FakeCredentialStore, flow: FakeAuthorizationFlow
) -> OsmApiClient:
    """Return a client wired to fakes, with no stored credentials."""
    return OsmApiClient(
        BASE_URL, transport=transport, credential_store=store, authorization_flow=flow
    )
