import logging

import pytest
from pydantic import ValidationError as SchemaError


class TestStockAdjustment:

    def test_decrease_persists_new_stock(self, bo, make_article):
        a = make_article(stock=10)
        assert bo.articles.decrease_stock(a.id, 4) is True
        assert bo.articles.get(a.id).stock_quantity == 6

    def test_decrease_to_zero_is_allowed(self, bo, make_article):
        a = make_article(stock=3)
        assert bo.articles.decrease_stock(a.id, 3) is True
        assert bo.articles.get(a.id).stock_quantity == 0

    def test_decrease_below_zero_is_refused(self, bo, make_article):
        a = make_article(stock=3)
        assert bo.articles.decrease_stock(a.id, 4) is False
        assert bo.articles.get(a.id).stock_quantity == 3

    def test_decrease_missing_article(self, bo):
        assert bo.articles.decrease_stock("nope", 1) is False

    def test_increase(self, bo, make_article):
        a = make_article(stock=0)
        assert bo.articles.increase_stock(a.id, 5) is True
        assert bo.articles.get(a.id).stock_quantity == 5

    def test_increase_missing_article(self, bo):
        assert bo.articles.increase_stock("nope", 1) is False

    def test_negative_stock_never_stored(self, bo, make_article):
        a = make_article(stock=1)
        with pytest.raises(SchemaError):
            bo.articles_repo.update(a.id, {"stock_quantity": -1})
        assert bo.articles.get(a.id).stock_quantity == 1


class TestArticleQueries:

    def test_by_supplier_and_brand(self, bo, make_article):
        a = make_article(brand_id="rica", supplier_id="dn")
        make_article(brand_id="induveca", supplier_id="adc")
        assert [x.id for x in bo.articles.get_by_supplier("dn")] == [a.id]
        assert [x.id for x in bo.articles.get_by_brand("rica")] == [a.id]

    def test_available_excludes_inactive_and_out_of_stock(self, bo, make_article):
        ok = make_article(stock=2)
        make_article(stock=0)
        make_article(stock=5, active=False)
        assert [x.id for x in bo.articles.available()] == [ok.id]


class TestNonPositiveQuantities:

    @pytest.mark.parametrize("quantity", [0, -5])
    def test_decrease_refuses(self, bo, make_article, quantity):
        a = make_article(stock=10)
        assert bo.articles.decrease_stock(a.id, quantity) is False
        assert bo.articles.get(a.id).stock_quantity == 10

    @pytest.mark.parametrize("quantity", [0, -5])
    def test_increase_refuses(self, bo, make_article, quantity):
        a = make_article(stock=10)
        assert bo.articles.increase_stock(a.id, quantity) is False
        assert bo.articles.get(a.id).stock_quantity == 10


class TestStockLogs:

    def test_refused_decrease_is_logged_in_french(self, bo, make_article, caplog):
        a = make_article(stock=2)
        with caplog.at_level(logging.INFO, logger="cafeteria.services.article_service"):
            bo.articles.decrease_stock(a.id, 5)
        assert "Retrait refusé: 5 unité(s)" in caplog.text

    def test_invalid_quantity_is_logged_in_french(self, bo, make_article, caplog):
        a = make_article(stock=2)
        with caplog.at_level(logging.WARNING, logger="cafeteria.services.article_service"):
            bo.articles.increase_stock(a.id, 0)
        assert "Quantité invalide 0" in caplog.text
