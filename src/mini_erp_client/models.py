from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_serializer


class ProductInput(BaseModel):
    """Product fields as sent to the server; the server owns validation."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    quantity: int = 0
    price: Decimal = Decimal("0")

    @field_serializer("price")
    def _price_as_number(self, value: Decimal) -> float:
        return float(value)

    def to_payload(self) -> dict[str, object]:
        return self.model_dump(mode="json")


class Product(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int
    name: str
    quantity: int
    price: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def to_input(self) -> ProductInput:
        return ProductInput(name=self.name, quantity=self.quantity, price=self.price)


@dataclass(frozen=True)
class ProductListView:
    products: tuple[Product, ...] = field(default_factory=tuple)
    filter_text: str = ""
    generation: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.products

    def total_value(self) -> Decimal:
        return sum((product.line_total for product in self.products), Decimal("0"))

    def ids(self) -> list[int]:
        return [product.id for product in self.products]

    def __len__(self) -> int:
        return len(self.products)
