from __future__ import annotations

import glob
import logging
import shutil
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from cafeteria.storage.codec import dumps, loads

logger = logging.getLogger(__name__)

USER_TYPES = "tiposUsuarios"
BRANDS = "marcas"
CAMPUSES = "campus"
SUPPLIERS = "proveedores"
CAFETERIAS = "cafeterias"
USERS = "usuarios"
EMPLOYEES = "empleados"
ARTICLES = "articulos"
SALES = "ventas"

COLLECTION_KEYS = (
    USER_TYPES,
    BRANDS,
    CAMPUSES,
    SUPPLIERS,
    CAFETERIAS,
    USERS,
    EMPLOYEES,
    ARTICLES,
    SALES,
)


class CollectionStore:
    """
    Key -> liste ordonnée d'enregistrements (JSON).
    - get_item renvoie None si la clé n'a jamais été écrite
    - un verrou ré-entrant par clé (lock) pour les read-modify-write
    """

    def __init__(self) -> None:
        self._locks: Dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    def lock(self, key: str) -> threading.RLock:
        with self._locks_guard:
            if key not in self._locks:
                self._locks[key] = threading.RLock()
            return self._locks[key]

    # ---------------- API ---------------- #

    def get_item(self, key: str, *, revive: bool = True) -> Optional[List[Dict[str, Any]]]:
        """revive=False laisse les dates en chaînes ISO (les modèles pydantic les parsent)."""
        text = self._read_text(key)
        if text is None:
            return None
        data = loads(text, revive=revive)
        return data if isinstance(data, list) else []

    def set_item(self, key: str, value: List[Dict[str, Any]]) -> None:
        with self.lock(key):
            self._write_text(key, dumps(list(value)))

    def remove_item(self, key: str) -> None:
        raise NotImplementedError

    def keys(self) -> List[str]:
        raise NotImplementedError

    def clear(self) -> None:
        for key in self.keys():
            self.remove_item(key)

    # ---------------- I/O bas niveau ---------------- #

    def _read_text(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def _write_text(self, key: str, text: str) -> None:
        raise NotImplementedError


class MemoryStore(CollectionStore):
    """Store en mémoire; garde le texte sérialisé pour reproduire le codec disque."""

    def __init__(self) -> None:
        super().__init__()
        self._items: Dict[str, str] = {}

    def _read_text(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def _write_text(self, key: str, text: str) -> None:
        self._items[key] = text

    def remove_item(self, key: str) -> None:
        with self.lock(key):
            self._items.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._items)


class FileStore(CollectionStore):
    """
    Un fichier <data_dir>/<key>.json par collection.
    - Rotation de backups (backup_enabled, backup_keep)
    - N'écrit pas si le contenu ne change pas (réduction du bruit et des .bak)
    - Fichier corrompu -> copié en .corrupt.json, la collection repart vide
    """

    def __init__(
        self,
        data_dir: Union[str, Path],
        *,
        backup_enabled: bool = True,
        backup_keep: int = 5,
    ) -> None:
        super().__init__()
        self.data_dir = Path(data_dir)
        self.backup_enabled = backup_enabled
        self.backup_keep = max(0, int(backup_keep))
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def get_item(self, key: str, *, revive: bool = True) -> Optional[List[Dict[str, Any]]]:
        try:
            return super().get_item(key, revive=revive)
        except ValueError:
            # JSON invalide ou octets non UTF-8
            path = self.path_for(key)
            logger.error("Fichier de collection corrompu %s, la collection repart vide", path)
            try:
                shutil.copy2(path, path.with_suffix(".corrupt.json"))
            except OSError:
                logger.exception("Impossible de conserver une copie de %s", path)
            return []

    def _read_text(self, key: str) -> Optional[str]:
        try:
            return self.path_for(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def _rotate_backups(self, path: Path) -> None:
        if not self.backup_enabled or self.backup_keep <= 0:
            return
        pattern = str(path.with_suffix(".*.bak.json"))
        files = sorted(glob.glob(pattern))
        # garde les plus récents
        if len(files) > self.backup_keep:
            for old in files[: len(files) - self.backup_keep]:
                Path(old).unlink(missing_ok=True)

    def _write_text(self, key: str, text: str) -> None:
        path = self.path_for(key)

        # si contenu identique -> ne rien faire
        if path.exists() and path.read_bytes() == text.encode("utf-8"):
            return

        if self.backup_enabled and path.exists():
            ts = datetime.now().strftime("%Y%m%d-%H%M%S-%f")
            shutil.copy2(path, path.with_suffix(f".{ts}.bak.json"))
            self._rotate_backups(path)

        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(text, encoding="utf-8")
        tmp.replace(path)

    def remove_item(self, key: str) -> None:
        with self.lock(key):
            self.path_for(key).unlink(missing_ok=True)

    def keys(self) -> List[str]:
        return sorted(
            p.stem for p in self.data_dir.glob("*.json")
            if not p.name.endswith((".bak.json", ".corrupt.json"))
        )
