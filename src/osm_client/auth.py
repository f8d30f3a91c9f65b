"""OAuth 2.0 authorization-code flow with an out-of-band redirect.

The user opens the authorization URL in a browser, grants access and pastes
the code the site displays. The code is then exchanged for an access token.
"""

import asyncio
from collections.abc import Callable, Iterable
from typing import Any
from urllib.parse import urlencode, urljoin

import requests
from loguru import logger

from osm_client.config import (
    DEFAULT_OAUTH_SCOPES,
    OAUTH_AUTHORIZE_PATH,
    OAUTH_TOKEN_PATH,
    OOB_REDIRECT_URI,
    REQUEST_TIMEOUT,
    USER_AGENT,
)
from osm_client.errors import AuthorizationError
from osm_client.models.user import Credentials

# Shows the authorization URL to the user and returns the code they enter.
PresentationContext = Callable[[str], str]


class OobAuthorizationFlow:
    """Obtain credentials for a registered OAuth 2.0 application."""

    def __init__(
        self,
        base_url: str,
        client_id: str,
        *,
        client_secret: str = "",
        scopes: Iterable[str] = DEFAULT_OAUTH_SCOPES,
        timeout: float = REQUEST_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url
        self.client_id = client_id
        self.client_secret = client_secret
        self.scopes = tuple(scopes)
        self.timeout = timeout
        self.sess = session or requests.Session()
        self.sess.headers["User-Agent"] = USER_AGENT

    def authorization_url(self) -> str:
        query = urlencode(
            {
                "client_id": self.client_id,
                "redirect_uri": OOB_REDIRECT_URI,
                "response_type": "code",
                "scope": " ".join(self.scopes),
            }
        )
        return f"{urljoin(self.base_url, OAUTH_AUTHORIZE_PATH)}?{query}"

    async def start(
        self, presentation_context: PresentationContext
    ) -> tuple[Credentials | None, Exception | None]:
        """Ask the user for a code and exchange it. Errors are returned, not raised."""
        try:
            code = await asyncio.to_thread(presentation_context, self.authorization_url())
        except Exception as e:
            return None, e

        code = (code or "").strip()
        if not code:
            return None, AuthorizationError("No authorization code entered.")

        return await asyncio.to_thread(self._exchange_code, code)

    def _exchange_code(self, code: str) -> tuple[Credentials | None, Exception | None]:
        form = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": OOB_REDIRECT_URI,
            "client_id": self.client_id,
        }
        if self.client_secret:
            form["client_secret"] = self.client_secret

        try:
            r = self.sess.post(
                urljoin(self.base_url, OAUTH_TOKEN_PATH), data=form, timeout=self.timeout
            )
            r.raise_for_status()
            payload: Any = r.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("Token exchange failed: {}", e)
            return None, e

        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token:
            msg = f"Token response has no access_token: {payload!r}"
            return None, AuthorizationError(msg)

        logger.debug("Token exchange succeeded, scope {!r}", payload.get("scope"))
        return Credentials(token=token, secret=payload.get("refresh_token") or ""), None
