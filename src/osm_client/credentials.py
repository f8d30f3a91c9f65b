"""Credential store backed by a JSON file."""

import json
import os
from pathlib import Path

from loguru import logger

from osm_client.models.user import Credentials


class FileCredentialStore:
    """Keep one credential pair in a file readable only by the owner."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def get(self) -> Credentials | None:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

        try:
            data = json.loads(raw)
            token, secret = data["token"], data.get("secret", "")
        except (ValueError, KeyError, TypeError):
            token = secret = None
        if not isinstance(token, str) or not isinstance(secret, str):
            logger.warning("Ignoring unreadable credentials file {}", self.path)
            return None
        return Credentials(token=token, secret=secret)

    def set(self, credentials: Credentials | None) -> None:
        if credentials is None:
            self.path.unlink(missing_ok=True)
            return

        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps({"token": credentials.token, "secret": credentials.secret})
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload + "\n")
        logger.debug("Wrote credentials to {}", self.path)
