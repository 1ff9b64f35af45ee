from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from cafeteria.exceptions import NotFoundError
from cafeteria.storage.store import CollectionStore

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class JsonRepository(Generic[T]):
    """
    Repo JSON générique sur une collection du store.
    - Hydrate JSON -> objets du modèle (les lignes illisibles sont ignorées)
    - Valide chaque écriture via le modèle pydantic
    - Chaque read-modify-write se fait sous le verrou de la collection
    """

    def __init__(
        self,
        store: CollectionStore,
        collection: str,
        model: Type[T],
        entity_name: str = "entity",
        key: str = "id",
    ) -> None:
        self.store = store
        self.collection = collection
        self.model = model
        self.entity_name = entity_name
        self.key = key

    @property
    def lock(self):
        return self.store.lock(self.collection)

    # ---------------- I/O bas niveau ---------------- #

    def _read_raw(self) -> List[Dict[str, Any]]:
        return self.store.get_item(self.collection, revive=False) or []

    def _write_raw(self, data: List[Dict[str, Any]]) -> None:
        self.store.set_item(self.collection, data)

    # ---------------- Helpers ---------------- #

    @staticmethod
    def _to_dict(item: Union[BaseModel, Mapping[str, Any]]) -> Dict[str, Any]:
        if isinstance(item, BaseModel):
            return item.model_dump()
        return dict(item)

    def _hydrate(self, d: Dict[str, Any]) -> Optional[T]:
        try:
            return self.model.model_validate(d)
        except ValidationError:
            logger.warning("Ligne %s illisible ignorée (id=%s)", self.entity_name, d.get(self.key))
            return None

    def _next_id(self, data: List[Dict[str, Any]]) -> str:
        # id dérivé de l'horloge (ms), incrémenté en cas de collision
        taken = {str(d.get(self.key)) for d in data}
        candidate = time.time_ns() // 1_000_000
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)

    def _index_of(self, data: List[Dict[str, Any]], obj_id: Any) -> int:
        for i, d in enumerate(data):
            if str(d.get(self.key)) == str(obj_id):
                return i
        return -1

    # ---------------- CRUD ---------------- #

    def get_all(self) -> List[T]:
        out: List[T] = []
        for d in self._read_raw():
            obj = self._hydrate(d)
            if obj is not None:
                out.append(obj)
        return out

    def get_by_id(self, obj_id: Any) -> Optional[T]:
        data = self._read_raw()
        idx = self._index_of(data, obj_id)
        return self._hydrate(data[idx]) if idx >= 0 else None

    def require(self, obj_id: Any) -> T:
        obj = self.get_by_id(obj_id)
        if obj is None:
            raise NotFoundError(self.entity_name, obj_id)
        return obj

    def count(self) -> int:
        return len(self._read_raw())

    def create(self, item: Union[T, Mapping[str, Any]]) -> T:
        record = self._to_dict(item)
        with self.lock:
            data = self._read_raw()
            record[self.key] = self._next_id(data)
            obj = self.model.model_validate(record)
            data.append(obj.model_dump())
            self._write_raw(data)
        logger.debug("%s créé(e) id=%s", self.entity_name, record[self.key])
        return obj

    def update(self, obj_id: Any, changes: Union[T, Mapping[str, Any]]) -> Optional[T]:
        patch = self._to_dict(changes)
        patch.pop(self.key, None)
        with self.lock:
            data = self._read_raw()
            idx = self._index_of(data, obj_id)
            if idx < 0:
                return None
            obj = self.model.model_validate({**data[idx], **patch})
            data[idx] = obj.model_dump()
            self._write_raw(data)
        return obj

    def modify(self, obj_id: Any, fn: Callable[[T], Optional[Mapping[str, Any]]]) -> Optional[T]:
        """
        Read-modify-write atomique (sous verrou) d'un enregistrement.
        fn reçoit l'objet courant et renvoie le patch à appliquer, ou None
        pour ne rien écrire. Renvoie l'objet écrit, sinon None.
        """
        with self.lock:
            current = self.get_by_id(obj_id)
            if current is None:
                return None
            patch = fn(current)
            if patch is None:
                return None
            return self.update(obj_id, patch)

    def delete(self, obj_id: Any) -> bool:
        with self.lock:
            data = self._read_raw()
            new_data = [d for d in data if str(d.get(self.key)) != str(obj_id)]
            changed = len(new_data) != len(data)
            if changed:
                self._write_raw(new_data)
        return changed

    # ---------------- Recherches ---------------- #

    def search(self, predicate: Callable[[T], bool]) -> List[T]:
        return [obj for obj in self.get_all() if predicate(obj)]

    def find_one(self, predicate: Callable[[T], bool]) -> Optional[T]:
        for obj in self.get_all():
            if predicate(obj):
                return obj
        return None
