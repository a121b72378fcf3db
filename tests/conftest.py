from __future__ import annotations

from typing import Any, Callable

import pytest

from mini_erp_client import ClientConfig, MemoryDocumentSink, MiniErpClient

BASE_URL = "https://erp.example.com"
PRODUCTS_URL = f"{BASE_URL}/api/products"


class ManualScheduler:
    """Holds submitted calls until the test decides when (and in which order) they complete."""

    def __init__(self) -> None:
        self.jobs: list[tuple[Callable[[], Any], Callable[[Any], None], Callable[[Exception], None]]] = []

    def submit(self, work, on_success, on_error) -> None:
        self.jobs.append((work, on_success, on_error))

    def run(self, index: int = 0) -> None:
        work, on_success, on_error = self.jobs.pop(index)
        try:
            result = work()
        except Exception as exc:
            on_error(exc)
            return
        on_success(result)

    def run_all(self) -> None:
        while self.jobs:
            self.run(0)


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(env_name="test", api_base_url=BASE_URL)


@pytest.fixture
def sink() -> MemoryDocumentSink:
    return MemoryDocumentSink()


@pytest.fixture
def client(config: ClientConfig, sink: MemoryDocumentSink) -> MiniErpClient:
    return MiniErpClient(config, sink=sink, confirm=lambda prompt: True)


@pytest.fixture
def manual_scheduler() -> ManualScheduler:
    return ManualScheduler()


def product(product_id: int, name: str, quantity: int, price: float) -> dict[str, Any]:
    return {"id": product_id, "name": name, "quantity": quantity, "price": price}
