from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError as SchemaError

from cafeteria.exceptions import InsufficientStockError, ValidationError
from cafeteria.models.catalog import Employee, User
from cafeteria.models.common import utcnow
from cafeteria.models.sale import Sale, SaleLineItem
from cafeteria.services.article_service import ArticleService
from cafeteria.storage.json_repo import JsonRepository

logger = logging.getLogger(__name__)

_INVOICE_RE = re.compile(r"^F-(\d+)-\d{4}$")

LineLike = Union[SaleLineItem, Mapping[str, Any]]


def _aware(dt: datetime) -> datetime:
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


class SaleService:
    """
    Registre des ventes.
    - create_sale: valide tout (sélections, lignes, stock) avant la moindre écriture,
      puis enregistre la vente et décrémente le stock ligne par ligne
    - void_sale: restaure le stock et passe la vente en "voided" (état terminal)
    Verrous: ventes puis articles, toujours dans cet ordre.
    """

    def __init__(
        self,
        sales: JsonRepository[Sale],
        articles: ArticleService,
        employees: JsonRepository[Employee],
        users: JsonRepository[User],
    ) -> None:
        self.sales = sales
        self.articles = articles
        self.employees = employees
        self.users = users

    # ----- Numérotation ----- #

    def _next_invoice_number(self, year: int) -> str:
        seq = self.sales.count()
        for s in self.sales.get_all():
            m = _INVOICE_RE.match(s.invoice_number or "")
            if m:
                seq = max(seq, int(m.group(1)))
        return f"F-{seq + 1:03d}-{year}"

    # ----- Lignes ----- #

    def build_line(self, article_id: str, quantity: int) -> SaleLineItem:
        """Ligne au prix courant de l'article (prix figé au moment de l'ajout)."""
        article = self.articles.get(article_id)
        if article is None:
            raise ValidationError(f"Article {article_id} does not exist")
        try:
            return SaleLineItem(
                article_id=article.id, quantity=quantity, unit_price_cents=article.price_cents
            )
        except SchemaError as exc:
            raise ValidationError(f"Invalid quantity {quantity!r} for article {article_id}") from exc

    def _coerce_line(self, item: LineLike) -> SaleLineItem:
        if isinstance(item, SaleLineItem):
            return item
        payload = dict(item)
        if payload.get("unit_price_cents") is None:
            return self.build_line(payload.get("article_id"), payload.get("quantity"))
        try:
            return SaleLineItem.model_validate(payload)
        except SchemaError as exc:
            raise ValidationError(f"Invalid sale line: {payload}") from exc

    def _check_stock(self, lines: List[SaleLineItem]) -> None:
        wanted: Dict[str, int] = {}
        for ln in lines:
            wanted[ln.article_id] = wanted.get(ln.article_id, 0) + ln.quantity

        for article_id, qty in wanted.items():
            article = self.articles.get(article_id)
            if article is None:
                raise ValidationError(f"Article {article_id} does not exist")
            if not article.active:
                raise ValidationError(f"Article {article_id} is inactive")
            if not article.can_supply(qty):
                raise InsufficientStockError(article_id, qty, article.stock_quantity)

    def _require_active(self, repo: JsonRepository, obj_id: str, label: str) -> None:
        obj = repo.get_by_id(obj_id)
        if obj is None:
            raise ValidationError(f"{label} {obj_id} does not exist")
        if not obj.active:
            raise ValidationError(f"{label} {obj_id} is inactive")

    # ----- Création / annulation ----- #

    def create_sale(
        self, employee_id: Optional[str], user_id: Optional[str], items: Optional[Iterable[LineLike]]
    ) -> Sale:
        if not employee_id:
            raise ValidationError("An employee must be selected")
        if not user_id:
            raise ValidationError("A customer must be selected")
        items = list(items or [])
        if not items:
            raise ValidationError("A sale needs at least one line item")

        self._require_active(self.employees, employee_id, "Employee")
        self._require_active(self.users, user_id, "User")

        with self.sales.lock, self.articles.repo.lock:
            lines = [self._coerce_line(it) for it in items]
            self._check_stock(lines)

            now = utcnow()
            sale = self.sales.create(Sale(
                invoice_number=self._next_invoice_number(now.year),
                employee_id=employee_id,
                user_id=user_id,
                timestamp=now,
                items=lines,
                total_cents=sum(ln.subtotal_cents for ln in lines),
                status="completed",
            ))

            for ln in lines:
                if not self.articles.decrease_stock(ln.article_id, ln.quantity):
                    # ne peut arriver qu'en contournant les verrous
                    logger.error(
                        "Stock de l'article %s non décrémenté pour la vente %s",
                        ln.article_id, sale.invoice_number,
                    )

        logger.info(
            "Vente %s créée: %d ligne(s), total %d centimes",
            sale.invoice_number, len(sale.items), sale.total_cents,
        )
        return sale

    def void_sale(self, sale_id: str) -> bool:
        with self.sales.lock, self.articles.repo.lock:
            sale = self.sales.get_by_id(sale_id)
            if sale is None or sale.is_voided:
                return False

            for ln in sale.items:
                if not self.articles.increase_stock(ln.article_id, ln.quantity):
                    logger.warning(
                        "Article %s introuvable, %d unité(s) de la vente %s non restaurée(s)",
                        ln.article_id, ln.quantity, sale.invoice_number,
                    )

            ok = self.sales.update(sale_id, {"status": "voided"}) is not None

        if ok:
            logger.info("Vente %s annulée", sale.invoice_number)
        return ok

    # ----- Recherches ----- #

    def list_sales(self) -> List[Sale]:
        return self.sales.get_all()

    def get_sale(self, sale_id: str) -> Optional[Sale]:
        return self.sales.get_by_id(sale_id)

    def by_date_range(self, start: datetime, end: datetime) -> List[Sale]:
        lo, hi = _aware(start), _aware(end)
        return self.sales.search(lambda s: lo <= _aware(s.timestamp) <= hi)

    def by_user(self, user_id: str) -> List[Sale]:
        return self.sales.search(lambda s: s.user_id == user_id)

    def by_employee(self, employee_id: str) -> List[Sale]:
        return self.sales.search(lambda s: s.employee_id == employee_id)
