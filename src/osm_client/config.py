"""Configuration constants for osm-client."""

import os
from pathlib import Path

DEFAULT_API_BASE_URL: str = "https://api.openstreetmap.org/"

# OAuth endpoints live on the website host, not the API host.
DEFAULT_AUTH_BASE_URL: str = "https://www.openstreetmap.org/"

# Credential file location. First file found is used, otherwise the first entry.
CREDENTIALS_FILES: list[Path] = [
    Path("~/.config/osm-client/credentials.json").expanduser(),
    Path("~/.osm-client/credentials.json").expanduser(),
]

USER_AGENT: str = "osm-client/0.1.0"

# Seconds. Applied by the HTTP transport only.
REQUEST_TIMEOUT: float = 30.0

OAUTH_AUTHORIZE_PATH: str = "/oauth2/authorize"
OAUTH_TOKEN_PATH: str = "/oauth2/token"
OOB_REDIRECT_URI: str = "urn:ietf:wg:oauth:2.0:oob"
DEFAULT_OAUTH_SCOPES: tuple[str, ...] = ("read_prefs", "write_api")


def resolve_base_url() -> str:
    """Return the API base URL, honouring ``OSM_API_URL``."""
    return os.environ.get("OSM_API_URL") or DEFAULT_API_BASE_URL


def resolve_auth_base_url() -> str:
    """Return the OAuth base URL, honouring ``OSM_AUTH_URL``."""
    return os.environ.get("OSM_AUTH_URL") or DEFAULT_AUTH_BASE_URL


def resolve_credentials_file() -> Path:
    """Return the first existing credentials file, or the default location."""
    for candidate in CREDENTIALS_FILES:
        if candidate.is_file():
            return candidate
    return CREDENTIALS_FILES[0]
