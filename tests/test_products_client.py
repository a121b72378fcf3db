from __future__ import annotations

import json
from decimal import Decimal

import pytest
import responses
from responses import matchers

from mini_erp_client.clients.products import ProductsClient
from mini_erp_client.config import ClientConfig
from mini_erp_client.credentials import CredentialStore
from mini_erp_client.exceptions import NoCredentials, ServerError
from mini_erp_client.http_client import HttpClient
from mini_erp_client.models import ProductInput

from conftest import PRODUCTS_URL, product


def _client(config: ClientConfig) -> ProductsClient:
    return ProductsClient(http=HttpClient(config), credentials=CredentialStore("admin", "admin123"))


@responses.activate
def test_list_products_sends_basic_auth(config: ClientConfig) -> None:
    responses.add(responses.GET, PRODUCTS_URL, json=[product(1, "Widget", 10, 2.5)], status=200)

    rows = _client(config).list_products()

    assert rows[0].name == "Widget"
    assert rows[0].price == Decimal("2.5")
    assert responses.calls[0].request.headers["Authorization"] == "Basic YWRtaW46YWRtaW4xMjM="


@responses.activate
def test_fetch_uses_search_endpoint_for_filter(config: ClientConfig) -> None:
    responses.add(
        responses.GET,
        f"{PRODUCTS_URL}/search",
        json=[product(1, "Widget", 10, 2.5)],
        status=200,
        match=[matchers.query_param_matcher({"name": "wid"})],
    )
    responses.add(responses.GET, PRODUCTS_URL, json=[], status=200)
    client = _client(config)

    assert [row.name for row in client.fetch("wid")] == ["Widget"]
    assert client.fetch("") == []


@responses.activate
def test_create_serializes_price_as_number(config: ClientConfig) -> None:
    responses.add(responses.POST, PRODUCTS_URL, json=product(7, "Bolt", 5, 0.25), status=201)

    created = _client(config).create_product({"name": "Bolt", "quantity": 5, "price": "0.25"})

    assert created is not None and created.id == 7
    body = json.loads(responses.calls[0].request.body)
    assert body == {"name": "Bolt", "quantity": 5, "price": 0.25}


@responses.activate
def test_update_sends_full_fields(config: ClientConfig) -> None:
    responses.add(responses.PUT, f"{PRODUCTS_URL}/4", json=product(4, "Nut", 3, 1.0), status=200)

    _client(config).update_product(4, ProductInput(name="Nut", quantity=3, price=Decimal("1.00")))

    body = json.loads(responses.calls[0].request.body)
    assert body == {"id": 4, "name": "Nut", "quantity": 3, "price": 1.0}


@responses.activate
def test_delete_and_invoice(config: ClientConfig) -> None:
    responses.add(responses.DELETE, f"{PRODUCTS_URL}/4", status=200)
    responses.add(responses.GET, f"{PRODUCTS_URL}/invoice", body=b"%PDF", status=200)
    client = _client(config)

    assert client.delete_product(4) is None
    assert client.download_invoice() == b"%PDF"


@responses.activate
def test_unexpected_payload_shape(config: ClientConfig) -> None:
    responses.add(responses.GET, PRODUCTS_URL, json={"items": []}, status=200)
    responses.add(responses.GET, f"{PRODUCTS_URL}/search", json=[{"id": "x"}], status=200)
    client = _client(config)

    with pytest.raises(ServerError, match="list_products"):
        client.list_products()
    with pytest.raises(ServerError, match="search_products"):
        client.search_products("x")


def test_missing_credentials_never_reach_the_network(config: ClientConfig) -> None:
    client = ProductsClient(http=HttpClient(config), credentials=CredentialStore(username="admin"))
    with pytest.raises(NoCredentials):
        client.list_products()
