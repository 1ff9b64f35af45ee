"""Exceptions for the cafeteria back office."""
from __future__ import annotations

from typing import Any


class CafeteriaError(Exception):
    """Base exception for back-office errors."""
    pass


class ValidationError(CafeteriaError):
    """Raised when an operation is called with missing or inconsistent input."""
    pass


class NotFoundError(CafeteriaError):
    """Raised when a required record does not exist."""

    def __init__(self, entity_name: str, obj_id: Any) -> None:
        super().__init__(f"{entity_name} with id={obj_id} not found")
        self.entity_name = entity_name
        self.obj_id = obj_id


class InsufficientStockError(CafeteriaError):
    """Raised when a sale asks for more units than an article has in stock."""

    def __init__(self, article_id: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for article {article_id}: "
            f"requested {requested}, available {available}"
        )
        self.article_id = article_id
        self.requested = requested
        self.available = available
