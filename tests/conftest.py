"""
Pytest fixtures for the cafeteria back office.

Every test gets a fresh in-memory store; file-store tests use tmp_path.
"""

import pytest

from cafeteria.services.backoffice import Backoffice
from cafeteria.storage.store import MemoryStore


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def bo(store):
    return Backoffice(store)


@pytest.fixture
def employee(bo):
    return bo.directory.create_employee({"name": "Carmen López", "work_shift": "morning"})


@pytest.fixture
def customer(bo):
    ut = bo.user_types.create({"description": "Estudiante"})
    return bo.directory.create_user({"name": "Pedro Martínez", "user_type_id": ut.id})


@pytest.fixture
def make_article(bo):
    def _make(stock=10, price=50, **extra):
        payload = {
            "description": "Café Expreso",
            "brand_id": "b1",
            "supplier_id": "s1",
            "cost_cents": 25,
            "price_cents": price,
            "stock_quantity": stock,
        }
        payload.update(extra)
        return bo.articles_repo.create(payload)
    return _make
