from __future__ import annotations

from typing import Any, List, Mapping, TypeVar, Union

from pydantic import BaseModel

from cafeteria.models.catalog import Cafeteria, Employee, Supplier, User, WorkShift
from cafeteria.models.common import utcnow
from cafeteria.storage.json_repo import JsonRepository

T = TypeVar("T", bound=BaseModel)


def create_stamped(
    repo: JsonRepository[T], item: Union[T, Mapping[str, Any]], field: str
) -> T:
    """Crée l'enregistrement en posant `field` à maintenant (écrase la valeur fournie)."""
    payload = item.model_dump() if isinstance(item, BaseModel) else dict(item)
    payload[field] = utcnow()
    return repo.create(payload)


class DirectoryService:
    """Fournisseurs, usagers, employés et cafétérias: CRUD + dates d'inscription."""

    def __init__(
        self,
        suppliers: JsonRepository[Supplier],
        users: JsonRepository[User],
        employees: JsonRepository[Employee],
        cafeterias: JsonRepository[Cafeteria],
    ) -> None:
        self.suppliers = suppliers
        self.users = users
        self.employees = employees
        self.cafeterias = cafeterias

    def create_supplier(self, s: Union[Supplier, Mapping[str, Any]]) -> Supplier:
        return create_stamped(self.suppliers, s, "registered_at")

    def create_user(self, u: Union[User, Mapping[str, Any]]) -> User:
        return create_stamped(self.users, u, "registered_at")

    def create_employee(self, e: Union[Employee, Mapping[str, Any]]) -> Employee:
        return create_stamped(self.employees, e, "hired_at")

    def cafeterias_by_campus(self, campus_id: str) -> List[Cafeteria]:
        return self.cafeterias.search(lambda c: c.campus_id == campus_id)

    def users_by_type(self, user_type_id: str) -> List[User]:
        return self.users.search(lambda u: u.user_type_id == user_type_id)

    def employees_by_shift(self, shift: WorkShift) -> List[Employee]:
        return self.employees.search(lambda e: e.work_shift == shift)
