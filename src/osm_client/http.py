"""HTTP transport backed by requests."""

import asyncio
from urllib.parse import urljoin

import requests
from loguru import logger
from requests.auth import AuthBase

from osm_client.config import REQUEST_TIMEOUT, USER_AGENT
from osm_client.protocols import CredentialStore, TransportResponse


class BearerTokenAuth(AuthBase):
    """Attach the stored access token, re-read for every request."""

    def __init__(self, credential_store: CredentialStore) -> None:
        self.credential_store = credential_store

    def __call__(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        credentials = self.credential_store.get()
        if credentials is not None and credentials.token:
            r.headers["Authorization"] = f"Bearer {credentials.token}"
        return r


class RequestsTransport:
    """Run blocking ``requests`` calls in a worker thread.

    Errors, including non-2xx responses, are returned in the response.
    """

    def __init__(
        self,
        *,
        credential_store: CredentialStore | None = None,
        timeout: float = REQUEST_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.sess = session or requests.Session()
        self.sess.headers["User-Agent"] = USER_AGENT
        self.timeout = timeout
        self.auth = BearerTokenAuth(credential_store) if credential_store is not None else None

    async def request(
        self,
        method: str,
        base_url: str,
        path: str,
        body: bytes | None = None,
    ) -> TransportResponse:
        return await asyncio.to_thread(self._perform, method, urljoin(base_url, path), body)

    def _perform(self, method: str, url: str, body: bytes | None) -> TransportResponse:
        headers = {}
        if method == "PUT":
            headers["Content-Type"] = "text/xml"

        try:
            r = self.sess.request(
                method,
                url,
                data=body,
                headers=headers,
                auth=self.auth,
                timeout=self.timeout,
            )
            r.raise_for_status()
        except requests.RequestException as e:
            logger.warning("{} {} failed: {}", method, url, e)
            return TransportResponse(error=e)

        logger.debug("{} {} -> {} ({} bytes)", method, url, r.status_code, len(r.content))
        return TransportResponse(data=r.content or None)
