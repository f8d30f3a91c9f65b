"""Account-level models: users, permissions and credentials."""

from dataclasses import dataclass
from enum import Enum


class Permission(str, Enum):
    """A capability the user granted to this client."""

    READ_PREFS = "allow_read_prefs"
    WRITE_PREFS = "allow_write_prefs"
    WRITE_DIARY = "allow_write_diary"
    WRITE_API = "allow_write_api"
    READ_GPX = "allow_read_gpx"
    WRITE_GPX = "allow_write_gpx"
    WRITE_NOTES = "allow_write_notes"


@dataclass(frozen=True)
class User:
    """An OSM account."""

    id: int
    display_name: str


@dataclass(frozen=True)
class Credentials:
    """Token/secret pair issued by the authorization flow."""

    token: str
    secret: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.token and not self.secret
