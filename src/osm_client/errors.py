"""Errors produced by the client itself.

Transport errors are passed through unchanged and are not wrapped here.
"""


class OsmClientError(Exception):
    """Base class for errors originating in osm_client."""


class NotAuthenticatedError(OsmClientError):
    """The operation needs stored credentials and there are none."""

    def __init__(self) -> None:
        super().__init__("Not authenticated: log in first.")


class AuthorizationError(OsmClientError):
    """The authorization flow failed or produced no credentials."""
