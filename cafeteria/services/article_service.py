from __future__ import annotations

import logging
from typing import List, Optional

from cafeteria.models.article import Article
from cafeteria.storage.json_repo import JsonRepository

logger = logging.getLogger(__name__)


class ArticleService:
    """
    Catalogue d'articles + ajustement de stock.
    Le stock est le seul champ qu'une vente modifie.
    """

    def __init__(self, repo: JsonRepository[Article]) -> None:
        self.repo = repo

    def get(self, article_id: str) -> Optional[Article]:
        return self.repo.get_by_id(article_id)

    def get_by_supplier(self, supplier_id: str) -> List[Article]:
        return self.repo.search(lambda a: a.supplier_id == supplier_id)

    def get_by_brand(self, brand_id: str) -> List[Article]:
        return self.repo.search(lambda a: a.brand_id == brand_id)

    def available(self) -> List[Article]:
        """Articles actifs avec du stock (ceux que l'écran de vente propose)."""
        return self.repo.search(lambda a: a.active and a.stock_quantity > 0)

    # ----- Stock ----- #

    def decrease_stock(self, article_id: str, quantity: int) -> bool:
        """Retire `quantity` unités; refuse (False) si quantity <= 0 ou si le stock deviendrait négatif."""
        if quantity <= 0:
            logger.warning("Quantité invalide %s pour l'article %s", quantity, article_id)
            return False

        def _take(a: Article):
            if a.stock_quantity - quantity < 0:
                logger.info(
                    "Retrait refusé: %s unité(s) de l'article %s (stock %s)",
                    quantity, article_id, a.stock_quantity,
                )
                return None
            return {"stock_quantity": a.stock_quantity - quantity}

        return self.repo.modify(article_id, _take) is not None

    def increase_stock(self, article_id: str, quantity: int) -> bool:
        if quantity <= 0:
            logger.warning("Quantité invalide %s pour l'article %s", quantity, article_id)
            return False
        updated = self.repo.modify(
            article_id, lambda a: {"stock_quantity": a.stock_quantity + quantity}
        )
        return updated is not None
