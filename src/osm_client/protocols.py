"""Protocols for the collaborators the API client depends on."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from osm_client.models.changeset import Changeset
from osm_client.models.map_data import MapElement, Node
from osm_client.models.result import CreateResult
from osm_client.models.tag import BoundingBox, Tag
from osm_client.models.user import Credentials, Permission, User


@dataclass(frozen=True)
class TransportResponse:
    """Outcome of one HTTP request: the body, or the error that prevented it."""

    data: bytes | None = None
    error: Exception | None = None


@runtime_checkable
class Transport(Protocol):
    """Protocol for HTTP transports."""

    async def request(
        self,
        method: str,
        base_url: str,
        path: str,
        body: bytes | None = None,
    ) -> TransportResponse:
        """Perform a request. Errors are returned in the response, not raised."""
        ...


@runtime_checkable
class CredentialStore(Protocol):
    """Protocol for credential persistence."""

    def get(self) -> Credentials | None:
        """Return the stored credentials, if any."""
        ...

    def set(self, credentials: Credentials | None) -> None:
        """Replace the stored credentials. None clears them."""
        ...


@runtime_checkable
class AuthorizationFlow(Protocol):
    """Protocol for interactive consent flows."""

    async def start(self, presentation_context: Any) -> tuple[Credentials | None, Exception | None]:
        """Run the flow and return credentials or the error that stopped it."""
        ...


@runtime_checkable
class ApiClientProtocol(Protocol):
    """Public surface of the OSM API client."""

    @property
    def is_authenticated(self) -> bool: ...

    def logout(self) -> None: ...

    async def add_account_using_oauth(self, presentation_context: Any) -> Exception | None: ...

    async def authenticated_user(self) -> tuple[User | None, Exception | None]: ...

    async def permissions(self) -> tuple[list[Permission], Exception | None]: ...

    async def map_data(
        self, bounding_box: BoundingBox
    ) -> tuple[list[MapElement], Exception | None]: ...

    async def open_changesets(self, user_id: int) -> tuple[list[Changeset], Exception | None]: ...

    async def create_changeset(self, tags: Sequence[Tag]) -> tuple[int | None, Exception | None]: ...

    async def create_node(self, node: Node, changeset_id: int) -> CreateResult: ...
