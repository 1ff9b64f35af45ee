"""Données de démonstration posées au premier lancement."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from cafeteria.storage.store import (
    ARTICLES, BRANDS, CAFETERIAS, CAMPUSES, EMPLOYEES, SALES, SUPPLIERS, USER_TYPES, USERS,
    CollectionStore,
)

logger = logging.getLogger(__name__)


def _d(y: int, m: int, day: int) -> datetime:
    return datetime(y, m, day, tzinfo=timezone.utc)


SEED_DATA: Dict[str, List[Dict[str, Any]]] = {
    USER_TYPES: [
        {"id": "1", "description": "Estudiante", "active": True},
        {"id": "2", "description": "Profesor", "active": True},
        {"id": "3", "description": "Administrativo", "active": True},
        {"id": "4", "description": "Visitante", "active": False},
        {"id": "5", "description": "Personal de Servicio", "active": True},
    ],
    BRANDS: [
        {"id": "1", "description": "Coca-Cola", "active": True},
        {"id": "2", "description": "Pepsi", "active": True},
        {"id": "3", "description": "Rica", "active": True},
        {"id": "4", "description": "Induveca", "active": True},
        {"id": "5", "description": "Nestlé", "active": False},
    ],
    CAMPUSES: [
        {"id": "1", "description": "Campus I", "active": True},
        {"id": "2", "description": "Campus II", "active": True},
        {"id": "3", "description": "Campus III", "active": False},
        {"id": "4", "description": "Extensión Santiago", "active": True},
    ],
    SUPPLIERS: [
        {"id": "1", "trade_name": "Distribuidora Nacional", "rnc": "123456789",
         "registered_at": _d(2025, 9, 15), "active": True},
        {"id": "2", "trade_name": "Alimentos del Caribe", "rnc": "987654321",
         "registered_at": _d(2025, 9, 20), "active": True},
        {"id": "3", "trade_name": "Bebidas Premium", "rnc": "456789123",
         "registered_at": _d(2025, 9, 10), "active": False},
    ],
    CAFETERIAS: [
        {"id": "1", "description": "Cafetería Principal", "campus_id": "1",
         "manager": "María Pérez", "active": True},
        {"id": "2", "description": "Cafetería Express", "campus_id": "1",
         "manager": "Juan García", "active": True},
        {"id": "3", "description": "Cafetería Edificio 3", "campus_id": "2",
         "manager": "Ana Martínez", "active": True},
        {"id": "4", "description": "Cafetería Biblioteca", "campus_id": "2",
         "manager": "Carlos Rodríguez", "active": False},
        {"id": "5", "description": "Cafetería Norte", "campus_id": "4",
         "manager": "Luis Fernández", "active": True},
    ],
    USERS: [
        {"id": "1", "name": "Pedro Martínez", "national_id": "00111222333", "user_type_id": "1",
         "credit_limit_cents": 500000, "registered_at": _d(2023, 1, 15), "active": True},
        {"id": "2", "name": "Laura García", "national_id": "00444555666", "user_type_id": "2",
         "credit_limit_cents": 1000000, "registered_at": _d(2023, 2, 20), "active": True},
        {"id": "3", "name": "José Rodríguez", "national_id": "00777888999", "user_type_id": "1",
         "credit_limit_cents": 300000, "registered_at": _d(2023, 3, 10), "active": True},
    ],
    EMPLOYEES: [
        {"id": "1", "name": "Carmen López", "national_id": "00123456789", "work_shift": "morning",
         "commission_pct": 5, "hired_at": _d(2022, 1, 10), "active": True},
        {"id": "2", "name": "Roberto Díaz", "national_id": "00987654321", "work_shift": "afternoon",
         "commission_pct": 7, "hired_at": _d(2022, 6, 15), "active": True},
        {"id": "3", "name": "Ana Sánchez", "national_id": "00456789123", "work_shift": "night",
         "commission_pct": 10, "hired_at": _d(2023, 1, 5), "active": True},
    ],
    ARTICLES: [
        {"id": "1", "description": "Café Expreso", "brand_id": "3", "cost_cents": 2500,
         "price_cents": 5000, "supplier_id": "1", "stock_quantity": 100, "active": True},
        {"id": "2", "description": "Sandwich de Jamón y Queso", "brand_id": "4", "cost_cents": 7500,
         "price_cents": 12500, "supplier_id": "2", "stock_quantity": 50, "active": True},
        {"id": "3", "description": "Jugo de Naranja Natural", "brand_id": "3", "cost_cents": 3000,
         "price_cents": 6000, "supplier_id": "1", "stock_quantity": 80, "active": True},
        {"id": "4", "description": "Empanada de Pollo", "brand_id": "4", "cost_cents": 4000,
         "price_cents": 7500, "supplier_id": "2", "stock_quantity": 60, "active": True},
    ],
    SALES: [],
}


def initialize_store(store: CollectionStore) -> List[str]:
    """Pose les données de démo pour chaque collection jamais écrite. Renvoie les clés posées."""
    seeded: List[str] = []
    for key, rows in SEED_DATA.items():
        if store.get_item(key) is None:
            store.set_item(key, rows)
            seeded.append(key)
    if seeded:
        logger.info("Collections initialisées: %s", ", ".join(seeded))
    return seeded
