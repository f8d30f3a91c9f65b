"""Typed asynchronous client for the OpenStreetMap API."""

from loguru import logger

from osm_client.api import OsmApiClient
from osm_client.errors import AuthorizationError, NotAuthenticatedError, OsmClientError
from osm_client.factory import create_client
from osm_client.protocols import (
    ApiClientProtocol,
    AuthorizationFlow,
    CredentialStore,
    Transport,
    TransportResponse,
)

logger.disable("osm_client")

__all__ = [
    "ApiClientProtocol",
    "AuthorizationError",
    "AuthorizationFlow",
    "CredentialStore",
    "NotAuthenticatedError",
    "OsmApiClient",
    "OsmClientError",
    "Transport",
    "TransportResponse",
    "create_client",
]
