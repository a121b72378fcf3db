from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import ServerError, TransportError

logger = logging.getLogger(__name__)


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


@dataclass
class HttpClient:
    config: ClientConfig
    session: requests.Session | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    def _build_url(self, path: str) -> str:
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        operation: str = "unknown",
    ) -> dict[str, Any] | list[Any] | None:
        request_headers = {"Accept": "application/json"}
        if headers:
            request_headers.update(headers)
        response = self._send(method, path, request_headers, json_body, params, operation)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ServerError(
                code="INVALID_RESPONSE",
                message="Response body is not valid JSON",
                details={"operation": operation},
                status_code=response.status_code,
                raw_payload=response.text,
            ) from exc

    def download(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        accept: str = "*/*",
        operation: str = "download",
    ) -> bytes:
        request_headers = {"Accept": accept}
        if headers:
            request_headers.update(headers)
        response = self._send("GET", path, request_headers, None, None, operation)
        return response.content

    def close(self) -> None:
        if self.session is not None:
            self.session.close()

    def _send(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        json_body: dict[str, Any] | None,
        params: dict[str, Any] | None,
        operation: str,
    ) -> requests.Response:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        normalized_method = method.upper()
        url = self._build_url(path)
        started = time.monotonic()
        try:
            response = self.session.request(
                method=normalized_method,
                url=url,
                headers=headers,
                json=json_body,
                params=params,
                timeout=(self.config.connect_timeout_seconds, self.config.read_timeout_seconds),
                verify=self.config.verify_ssl,
            )
        except requests.RequestException as exc:
            logger.warning(
                "http_transport_error",
                extra={
                    "operation": operation,
                    "method": normalized_method,
                    "path": path,
                    "error": type(exc).__name__,
                    "duration_ms": _elapsed_ms(started),
                },
            )
            raise TransportError(
                code="TRANSPORT_ERROR",
                message=str(exc),
                details={"type": type(exc).__name__},
                status_code=0,
                raw_payload=None,
            ) from exc

        if response.ok:
            logger.debug(
                "http_request_completed",
                extra={
                    "operation": operation,
                    "status_code": response.status_code,
                    "duration_ms": _elapsed_ms(started),
                },
            )
            return response

        payload: Any
        try:
            payload = response.json()
        except ValueError:
            payload = {"message": response.text}
        logger.info(
            "http_error_response",
            extra={
                "operation": operation,
                "method": normalized_method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": _elapsed_ms(started),
            },
        )
        raise map_error(response.status_code, payload if isinstance(payload, dict) else None)
