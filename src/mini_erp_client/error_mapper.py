from __future__ import annotations

from typing import Mapping

from .exceptions import ApiError, AuthenticationDenied, ServerError, ValidationFailed


def extract_field_errors(payload: Mapping[str, object]) -> dict[str, str]:
    """Collect per-field messages in the order the server listed them.

    Accepts ``{"errors": {field: message}}`` as well as the
    ``{"fieldErrors": [{"field": ..., "message": ...}]}`` shape.
    """
    errors = payload.get("errors")
    if isinstance(errors, Mapping):
        return {str(key): str(value) for key, value in errors.items()}
    field_errors = payload.get("fieldErrors")
    collected: dict[str, str] = {}
    if isinstance(field_errors, list):
        for entry in field_errors:
            if not isinstance(entry, Mapping):
                continue
            name = str(entry.get("field") or f"field_{len(collected)}")
            collected[name] = str(entry.get("message") or "invalid")
    return collected


def map_error(status_code: int, payload: Mapping[str, object] | None) -> ApiError:
    payload = payload or {}
    code = str(payload.get("code") or payload.get("error") or "HTTP_ERROR")
    message = str(payload.get("message") or "Request failed")
    details = payload.get("details")
    if status_code == 401:
        return AuthenticationDenied(
            code="AUTHENTICATION_DENIED",
            message=message,
            details=details,
            status_code=status_code,
            raw_payload=dict(payload),
        )
    if 400 <= status_code < 500:
        field_errors = extract_field_errors(payload)
        if field_errors:
            return ValidationFailed(
                code="VALIDATION_FAILED",
                message=message,
                details=details,
                status_code=status_code,
                raw_payload=dict(payload),
                field_errors=field_errors,
            )
    return ServerError(
        code=code,
        message=message,
        details=details,
        status_code=status_code,
        raw_payload=dict(payload),
    )
