from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ServerError
from ..models import Product, ProductInput
from .base import BaseClient

PRODUCTS_PATH = "/api/products"


@dataclass
class ProductsClient(BaseClient):
    def list_products(self) -> list[Product]:
        data = self._request("GET", PRODUCTS_PATH, operation="list_products")
        return _parse_products(data, "list_products")

    def search_products(self, name: str) -> list[Product]:
        data = self._request(
            "GET",
            f"{PRODUCTS_PATH}/search",
            params={"name": name},
            operation="search_products",
        )
        return _parse_products(data, "search_products")

    def fetch(self, filter_text: str = "") -> list[Product]:
        if filter_text:
            return self.search_products(filter_text)
        return self.list_products()

    def create_product(self, payload: ProductInput | Mapping[str, Any]) -> Product | None:
        product = _coerce_input(payload)
        data = self._request(
            "POST",
            PRODUCTS_PATH,
            json_body=product.to_payload(),
            operation="create_product",
        )
        return _parse_optional_product(data, "create_product")

    def update_product(self, product_id: int, payload: ProductInput | Mapping[str, Any]) -> Product | None:
        product = _coerce_input(payload)
        body = {"id": product_id, **product.to_payload()}
        data = self._request(
            "PUT",
            f"{PRODUCTS_PATH}/{product_id}",
            json_body=body,
            operation="update_product",
        )
        return _parse_optional_product(data, "update_product")

    def delete_product(self, product_id: int) -> None:
        self._request("DELETE", f"{PRODUCTS_PATH}/{product_id}", operation="delete_product")

    def download_invoice(self) -> bytes:
        return self._download(
            f"{PRODUCTS_PATH}/invoice",
            accept="application/pdf",
            operation="download_invoice",
        )


def _coerce_input(value: ProductInput | Mapping[str, Any]) -> ProductInput:
    if isinstance(value, ProductInput):
        return value
    return ProductInput.model_validate(value)


def _invalid_payload(operation: str, exc: Exception | None = None) -> ServerError:
    return ServerError(
        code="INVALID_PAYLOAD",
        message=f"Unexpected response shape for {operation}",
        details=str(exc) if exc else None,
        status_code=200,
        raw_payload=None,
    )


def _parse_products(data: object, operation: str) -> list[Product]:
    if not isinstance(data, list):
        raise _invalid_payload(operation)
    try:
        return [Product.model_validate(item) for item in data]
    except PydanticValidationError as exc:
        raise _invalid_payload(operation, exc) from exc


def _parse_optional_product(data: object, operation: str) -> Product | None:
    # The server answers POST/PUT with the stored product, but an empty body is tolerated.
    if data is None:
        return None
    if not isinstance(data, dict):
        raise _invalid_payload(operation)
    try:
        return Product.model_validate(data)
    except PydanticValidationError as exc:
        raise _invalid_payload(operation, exc) from exc
