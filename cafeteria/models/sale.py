from __future__ import annotations
from pydantic import BaseModel, Field, model_validator
from typing import List, Literal
from datetime import datetime
from .common import Record, utcnow

SaleStatus = Literal["completed", "voided"]


class SaleLineItem(BaseModel):
    article_id: str
    quantity: int = Field(gt=0)
    unit_price_cents: int = Field(ge=0)
    subtotal_cents: int = 0  # snapshot, recalculé à la construction

    @model_validator(mode="after")
    def _compute_subtotal(self) -> "SaleLineItem":
        self.subtotal_cents = self.quantity * self.unit_price_cents
        return self


class Sale(Record):
    invoice_number: str
    employee_id: str
    user_id: str
    timestamp: datetime = Field(default_factory=utcnow)
    items: List[SaleLineItem] = Field(default_factory=list)
    total_cents: int = 0
    status: SaleStatus = "completed"

    @property
    def is_voided(self) -> bool:
        return self.status == "voided"
