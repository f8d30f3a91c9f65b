"""Wire the API client to its default collaborators."""

import os
from pathlib import Path

from osm_client.api import OsmApiClient
from osm_client.auth import OobAuthorizationFlow
from osm_client.config import resolve_auth_base_url, resolve_base_url, resolve_credentials_file
from osm_client.credentials import FileCredentialStore
from osm_client.http import RequestsTransport


def create_client(
    *,
    base_url: str | None = None,
    auth_base_url: str | None = None,
    credentials_file: Path | None = None,
    client_id: str | None = None,
    client_secret: str | None = None,
) -> OsmApiClient:
    """Build a client using requests, a JSON credentials file and the out-of-band OAuth flow.

    Arguments left as None fall back to the environment and ``osm_client.config``.
    """
    store = FileCredentialStore(credentials_file or resolve_credentials_file())
    flow = OobAuthorizationFlow(
        auth_base_url or resolve_auth_base_url(),
        client_id or os.environ.get("OSM_CLIENT_ID", ""),
        client_secret=client_secret or os.environ.get("OSM_CLIENT_SECRET", ""),
    )
    return OsmApiClient(
        base_url or resolve_base_url(),
        transport=RequestsTransport(credential_store=store),
        credential_store=store,
        authorization_flow=flow,
    )
