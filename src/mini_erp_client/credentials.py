from __future__ import annotations

import base64
from dataclasses import dataclass

from .exceptions import NoCredentials


@dataclass
class CredentialStore:
    """Username/password for the active session, kept in memory only."""

    username: str | None = None
    password: str | None = None

    def set_credentials(self, username: str, password: str) -> None:
        self.username = username
        self.password = password

    @property
    def has_credentials(self) -> bool:
        return self.username is not None and self.password is not None

    def auth_header_value(self) -> str:
        if not self.has_credentials:
            raise NoCredentials("Credentials are not set")
        raw = f"{self.username}:{self.password}".encode("utf-8")
        return "Basic " + base64.b64encode(raw).decode("ascii")

    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": self.auth_header_value()}

    def snapshot(self) -> CredentialStore:
        if not self.has_credentials:
            raise NoCredentials("Credentials are not set")
        return CredentialStore(username=self.username, password=self.password)

    def clear(self) -> None:
        self.username = None
        self.password = None

    def __repr__(self) -> str:
        return f"CredentialStore(username={self.username!r}, password={'***' if self.password else None})"
