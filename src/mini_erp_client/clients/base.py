from __future__ import annotations

from dataclasses import dataclass

from ..credentials import CredentialStore
from ..http_client import HttpClient


@dataclass
class BaseClient:
    http: HttpClient
    credentials: CredentialStore

    def _auth_headers(self) -> dict[str, str]:
        return self.credentials.auth_headers()

    def _request(self, method: str, path: str, **kwargs):
        headers = kwargs.pop("headers", {})
        merged = {**self._auth_headers(), **headers}
        return self.http.request(method, path, headers=merged, **kwargs)

    def _download(self, path: str, **kwargs) -> bytes:
        headers = kwargs.pop("headers", {})
        merged = {**self._auth_headers(), **headers}
        return self.http.download(path, headers=merged, **kwargs)
