from __future__ import annotations

from typing import Optional

from cafeteria.config import Settings, get_settings
from cafeteria.models.article import Article
from cafeteria.models.catalog import Brand, Cafeteria, Campus, Employee, Supplier, User, UserType
from cafeteria.models.sale import Sale
from cafeteria.services.article_service import ArticleService
from cafeteria.services.directory_service import DirectoryService
from cafeteria.services.sale_service import SaleService
from cafeteria.storage import store as keys
from cafeteria.storage.json_repo import JsonRepository
from cafeteria.storage.seed import initialize_store
from cafeteria.storage.store import CollectionStore, FileStore


class Backoffice:
    """Un repo par collection sur un même store, et les services qui les composent."""

    def __init__(self, store: CollectionStore) -> None:
        self.store = store

        self.user_types = JsonRepository(store, keys.USER_TYPES, UserType, entity_name="user type")
        self.brands = JsonRepository(store, keys.BRANDS, Brand, entity_name="brand")
        self.campuses = JsonRepository(store, keys.CAMPUSES, Campus, entity_name="campus")
        self.suppliers = JsonRepository(store, keys.SUPPLIERS, Supplier, entity_name="supplier")
        self.cafeterias = JsonRepository(store, keys.CAFETERIAS, Cafeteria, entity_name="cafeteria")
        self.users = JsonRepository(store, keys.USERS, User, entity_name="user")
        self.employees = JsonRepository(store, keys.EMPLOYEES, Employee, entity_name="employee")
        self.articles_repo = JsonRepository(store, keys.ARTICLES, Article, entity_name="article")
        self.sales_repo = JsonRepository(store, keys.SALES, Sale, entity_name="sale")

        self.directory = DirectoryService(self.suppliers, self.users, self.employees, self.cafeterias)
        self.articles = ArticleService(self.articles_repo)
        self.sales = SaleService(self.sales_repo, self.articles, self.employees, self.users)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "Backoffice":
        settings = settings or get_settings()
        store = FileStore(
            settings.data_dir,
            backup_enabled=settings.backup_enabled,
            backup_keep=settings.backup_keep,
        )
        if settings.seed_on_init:
            initialize_store(store)
        return cls(store)
