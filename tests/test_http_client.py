from __future__ import annotations

import logging

import pytest
import requests
import responses

from mini_erp_client.config import ClientConfig
from mini_erp_client.exceptions import AuthenticationDenied, ServerError, TransportError
from mini_erp_client.http_client import HttpClient

from conftest import BASE_URL


@responses.activate
def test_request_returns_json_and_logs_operation(config: ClientConfig, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="mini_erp_client.http_client")
    http = HttpClient(config)
    responses.add(responses.GET, f"{BASE_URL}/api/products", json=[], status=200)

    assert http.request("GET", "/api/products", operation="list_products") == []
    record = next(r for r in caplog.records if r.getMessage() == "http_request_completed")
    assert record.operation == "list_products"
    assert record.status_code == 200
    assert responses.calls[0].request.headers["Accept"] == "application/json"


@responses.activate
def test_empty_body_returns_none(config: ClientConfig) -> None:
    http = HttpClient(config)
    responses.add(responses.DELETE, f"{BASE_URL}/api/products/3", status=204)
    assert http.request("DELETE", "/api/products/3") is None


@responses.activate
def test_error_status_is_mapped(config: ClientConfig) -> None:
    http = HttpClient(config)
    responses.add(responses.GET, f"{BASE_URL}/api/products", status=401)
    responses.add(responses.PUT, f"{BASE_URL}/api/products/1", body="boom", status=500)

    with pytest.raises(AuthenticationDenied):
        http.request("GET", "/api/products")
    with pytest.raises(ServerError) as excinfo:
        http.request("PUT", "/api/products/1", json_body={"name": "x"})
    assert excinfo.value.message == "boom"


@responses.activate
def test_transport_failure_becomes_transport_error(config: ClientConfig) -> None:
    http = HttpClient(config)
    responses.add(
        responses.GET,
        f"{BASE_URL}/api/products",
        body=requests.exceptions.ConnectionError("connection refused"),
    )

    with pytest.raises(TransportError) as excinfo:
        http.request("GET", "/api/products")
    assert excinfo.value.status_code == 0
    assert excinfo.value.details == {"type": "ConnectionError"}


@responses.activate
def test_non_json_success_body_is_server_error(config: ClientConfig) -> None:
    http = HttpClient(config)
    responses.add(responses.GET, f"{BASE_URL}/api/products", body="<html>", status=200)

    with pytest.raises(ServerError) as excinfo:
        http.request("GET", "/api/products")
    assert excinfo.value.code == "INVALID_RESPONSE"


@responses.activate
def test_download_returns_raw_bytes(config: ClientConfig) -> None:
    http = HttpClient(config)
    responses.add(
        responses.GET,
        f"{BASE_URL}/api/products/invoice",
        body=b"%PDF-1.4 data",
        status=200,
        content_type="application/pdf",
    )

    content = http.download("/api/products/invoice", accept="application/pdf")
    assert content == b"%PDF-1.4 data"
    assert responses.calls[0].request.headers["Accept"] == "application/pdf"


def test_base_url_joining() -> None:
    http = HttpClient(ClientConfig(env_name="test", api_base_url="http://localhost:8080/erp"))
    assert http._build_url("/api/products") == "http://localhost:8080/erp/api/products"
