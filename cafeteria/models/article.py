from __future__ import annotations
from pydantic import Field
from .common import CatalogRecord


class Article(CatalogRecord):
    description: str
    brand_id: str
    cost_cents: int = Field(default=0, ge=0)
    price_cents: int = Field(default=0, ge=0)
    supplier_id: str
    stock_quantity: int = Field(default=0, ge=0)

    def can_supply(self, quantity: int) -> bool:
        return self.stock_quantity >= quantity
