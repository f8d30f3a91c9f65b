"""OpenStreetMap API client.

Every network operation is a coroutine that sends at most one request and
always returns a value: errors are part of the return value, never raised.
"""

from collections.abc import Sequence
from typing import Any

from loguru import logger

from osm_client.core.codec.parser import (
    parse_changesets,
    parse_entity_id,
    parse_map_data,
    parse_permissions,
    parse_user,
)
from osm_client.core.codec.serializer import changeset_creation_payload, node_creation_payload
from osm_client.errors import AuthorizationError, NotAuthenticatedError
from osm_client.models.changeset import Changeset
from osm_client.models.map_data import MapElement, Node
from osm_client.models.result import CreateResult, Failure, Success
from osm_client.models.tag import BoundingBox, Tag
from osm_client.models.user import Permission, User
from osm_client.protocols import AuthorizationFlow, CredentialStore, Transport, TransportResponse

API_PREFIX = "/api/0.6"
USER_DETAILS_PATH = f"{API_PREFIX}/user/details"
PERMISSIONS_PATH = f"{API_PREFIX}/permissions"
MAP_PATH = f"{API_PREFIX}/map"
CHANGESETS_PATH = f"{API_PREFIX}/changesets"
CHANGESET_CREATE_PATH = f"{API_PREFIX}/changeset/create"
NODE_CREATE_PATH = f"{API_PREFIX}/node/create"


class OsmApiClient:
    """Authenticated entry point to the OSM API."""

    def __init__(
        self,
        base_url: str,
        *,
        transport: Transport,
        credential_store: CredentialStore,
        authorization_flow: AuthorizationFlow,
    ) -> None:
        self.base_url = base_url
        self._transport = transport
        self._credential_store = credential_store
        self._authorization_flow = authorization_flow

    @property
    def is_authenticated(self) -> bool:
        """Whether the store currently holds credentials. Not cached."""
        credentials = self._credential_store.get()
        return credentials is not None and not credentials.is_empty

    def logout(self) -> None:
        """Forget the stored credentials."""
        self._credential_store.set(None)
        logger.info("Logged out")

    async def add_account_using_oauth(self, presentation_context: Any) -> Exception | None:
        """Run the authorization flow and store the credentials it yields.

        Returns None on success, otherwise the flow's error. Nothing is
        stored when the flow fails.
        """
        try:
            credentials, error = await self._authorization_flow.start(presentation_context)
        except Exception as e:
            logger.warning("Authorization flow raised: {!r}", e)
            return e
        if error is not None:
            return error
        if credentials is None:
            return AuthorizationError("Authorization finished without credentials.")
        self._credential_store.set(credentials)
        logger.info("Stored new credentials")
        return None

    async def _request(self, method: str, path: str, body: bytes | None = None) -> TransportResponse:
        logger.debug("{} {}{}", method, self.base_url, path)
        try:
            return await self._transport.request(method, self.base_url, path, body)
        except Exception as e:
            # A transport that raises is treated like one that reports the error.
            logger.warning("Transport raised for {} {}: {!r}", method, path, e)
            return TransportResponse(error=e)

    async def authenticated_user(self) -> tuple[User | None, Exception | None]:
        """Details of the user the credentials belong to.

        An unreadable body gives ``(None, None)``.
        """
        response = await self._request("GET", USER_DETAILS_PATH)
        if response.error is not None or response.data is None:
            return None, response.error
        return parse_user(response.data), None

    async def permissions(self) -> tuple[list[Permission], Exception | None]:
        """Permissions granted to this client. Requires stored credentials."""
        if not self.is_authenticated:
            return [], NotAuthenticatedError()

        response = await self._request("GET", PERMISSIONS_PATH)
        if response.error is not None:
            return [], response.error
        if response.data is None:
            return [], None
        return parse_permissions(response.data), None

    async def map_data(self, bounding_box: BoundingBox) -> tuple[list[MapElement], Exception | None]:
        """Nodes, ways and relations inside the bounding box."""
        response = await self._request("GET", f"{MAP_PATH}?bbox={bounding_box.query_string}")
        if response.error is not None:
            return [], response.error
        if response.data is None:
            return [], None
        return parse_map_data(response.data), None

    async def open_changesets(self, user_id: int) -> tuple[list[Changeset], Exception | None]:
        """Open changesets of a user, in the order the server lists them."""
        response = await self._request("GET", f"{CHANGESETS_PATH}?open=true&user={user_id}")
        if response.error is not None or response.data is None:
            return [], response.error
        return parse_changesets(response.data), None

    async def create_changeset(self, tags: Sequence[Tag]) -> tuple[int | None, Exception | None]:
        """Open a new changeset and return its id.

        A body that is not an integer gives ``(None, None)``. Tags that cannot be
        written as XML are returned as the error without sending a request.
        """
        try:
            body = changeset_creation_payload(tags)
        except ValueError as e:
            return None, e
        response = await self._request("PUT", CHANGESET_CREATE_PATH, body)
        if response.error is not None:
            return None, response.error
        if response.data is None:
            return None, None
        return parse_entity_id(response.data), None

    async def create_node(self, node: Node, changeset_id: int) -> CreateResult:
        """Create a node in the given changeset and return the id the server assigned."""
        try:
            body = node_creation_payload(node, changeset_id)
        except ValueError as e:
            return Failure(e)
        response = await self._request("PUT", NODE_CREATE_PATH, body)
        if response.error is not None:
            return Failure(response.error)
        node_id = parse_entity_id(response.data) if response.data is not None else None
        if node_id is None:
            return Failure()
        return Success(node_id)
