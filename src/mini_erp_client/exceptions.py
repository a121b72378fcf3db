from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None
    status_code: int
    raw_payload: object | None = None

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.code}: {self.message}"


class AuthenticationDenied(ApiError):
    """HTTP 401 on any call; the stored credentials were refused."""


@dataclass
class ValidationFailed(ApiError):
    """Rejected input with per-field messages."""

    field_errors: dict[str, str] = field(default_factory=dict)

    def aggregate(self) -> str:
        return ", ".join(self.field_errors.values())


class ServerError(ApiError):
    """Any other non-success status."""


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""


class NoCredentials(RuntimeError):
    """An auth header was requested before both username and password were set."""
