from __future__ import annotations

import json
import logging

from cafeteria.storage.codec import dumps, loads
from cafeteria.storage.store import COLLECTION_KEYS, CollectionStore

logger = logging.getLogger(__name__)


def export_data(store: CollectionStore) -> str:
    """Un seul document JSON avec les neuf collections (null si jamais écrite)."""
    return dumps({key: store.get_item(key, revive=False) for key in COLLECTION_KEYS})


def import_data(store: CollectionStore, json_data: str) -> bool:
    """
    Écrase chaque collection présente (non null) dans le document.
    Pas de validation de schéma: seul le parse JSON peut échouer.
    """
    try:
        data = loads(json_data, revive=False)
    except json.JSONDecodeError as exc:
        logger.error("Échec de l'import: %s", exc)
        return False
    if not isinstance(data, dict):
        logger.error("Échec de l'import: objet JSON attendu, reçu %s", type(data).__name__)
        return False

    for key, value in data.items():
        if key not in COLLECTION_KEYS:
            logger.warning("Collection inconnue %r ignorée à l'import", key)
            continue
        if value is None:
            continue
        if not isinstance(value, list):
            logger.warning("Collection %r ignorée à l'import: ce n'est pas une liste", key)
            continue
        store.set_item(key, value)
    return True
