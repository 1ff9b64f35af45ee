from __future__ import annotations
from pydantic import Field
from typing import Literal, Optional
from datetime import datetime
from .common import CatalogRecord

WorkShift = Literal["morning", "afternoon", "night"]


class UserType(CatalogRecord):
    description: str


class Brand(CatalogRecord):
    description: str


class Campus(CatalogRecord):
    description: str


class Supplier(CatalogRecord):
    trade_name: str
    rnc: str = ""  # registre fiscal du fournisseur
    registered_at: Optional[datetime] = None


class Cafeteria(CatalogRecord):
    description: str
    campus_id: str
    manager: str = ""


class User(CatalogRecord):
    name: str
    national_id: str = ""
    user_type_id: str
    credit_limit_cents: int = Field(default=0, ge=0)
    registered_at: Optional[datetime] = None


class Employee(CatalogRecord):
    name: str
    national_id: str = ""
    work_shift: WorkShift = "morning"
    commission_pct: float = Field(default=0.0, ge=0, le=100)
    hired_at: Optional[datetime] = None
