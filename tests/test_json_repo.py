import pytest
from pydantic import ValidationError as SchemaError

from cafeteria.exceptions import NotFoundError
from cafeteria.models.catalog import Brand
from cafeteria.storage.json_repo import JsonRepository
from cafeteria.storage.store import BRANDS


@pytest.fixture
def brands(store):
    return JsonRepository(store, BRANDS, Brand, entity_name="brand")


class TestCreateAndRead:

    def test_create_assigns_unique_ids(self, brands):
        created = [brands.create({"description": f"Brand {i}"}) for i in range(5)]
        ids = {b.id for b in created}
        assert len(ids) == 5
        assert all(i.isdigit() for i in ids)

    def test_create_ignores_caller_id(self, brands):
        b = brands.create(Brand(id="forced", description="Rica"))
        assert b.id != "forced"

    def test_get_all_keeps_insertion_order(self, brands):
        for name in ("Coca-Cola", "Pepsi", "Rica"):
            brands.create({"description": name})
        assert [b.description for b in brands.get_all()] == ["Coca-Cola", "Pepsi", "Rica"]

    def test_get_by_id_missing_returns_none(self, brands):
        assert brands.get_by_id("nope") is None

    def test_require_missing_raises(self, brands):
        with pytest.raises(NotFoundError):
            brands.require("nope")

    def test_invalid_record_rejected_on_write(self, brands):
        with pytest.raises(SchemaError):
            brands.create({"active": True})
        assert brands.count() == 0

    def test_unreadable_rows_are_skipped(self, brands, store):
        store.set_item(BRANDS, [{"id": "1", "description": "Rica"}, {"id": "2"}])
        assert [b.id for b in brands.get_all()] == ["1"]
        assert brands.count() == 2


class TestUpdate:

    def test_partial_update_merges(self, brands):
        b = brands.create({"description": "Nestlé"})
        updated = brands.update(b.id, {"active": False})
        assert updated.description == "Nestlé"
        assert updated.active is False
        assert brands.get_by_id(b.id).active is False

    def test_update_cannot_change_id(self, brands):
        b = brands.create({"description": "Rica"})
        brands.update(b.id, {"id": "other", "description": "Rica 2"})
        assert brands.get_by_id(b.id).description == "Rica 2"
        assert brands.get_by_id("other") is None

    def test_update_missing_returns_none(self, brands):
        assert brands.update("nope", {"active": False}) is None

    def test_modify_skips_write_when_fn_returns_none(self, brands):
        b = brands.create({"description": "Rica"})
        assert brands.modify(b.id, lambda cur: None) is None
        assert brands.get_by_id(b.id).description == "Rica"


class TestDeleteAndSearch:

    def test_delete_existing_removes_exactly_one(self, brands):
        ids = [brands.create({"description": n}).id for n in ("a", "b", "c")]
        assert brands.delete(ids[1]) is True
        assert brands.count() == 2
        assert [b.id for b in brands.get_all()] == [ids[0], ids[2]]

    def test_delete_missing_returns_false(self, brands):
        brands.create({"description": "a"})
        assert brands.delete("nope") is False
        assert brands.count() == 1

    def test_search_and_find_one(self, brands):
        brands.create({"description": "Coca-Cola"})
        brands.create({"description": "Pepsi", "active": False})
        assert [b.description for b in brands.search(lambda b: b.active)] == ["Coca-Cola"]
        assert brands.find_one(lambda b: b.description == "Pepsi").active is False
        assert brands.find_one(lambda b: b.description == "Rica") is None


class TestTimestampShapedText:

    def test_text_field_holding_a_timestamp_is_readable(self, bo, make_article):
        a = make_article(description="2025-09-15T10:00:00")
        assert bo.articles_repo.get_by_id(a.id).description == "2025-09-15T10:00:00"
        assert [x.id for x in bo.articles_repo.get_all()] == [a.id]
        assert bo.articles_repo.count() == 1

    def test_update_keeps_timestamp_shaped_text(self, bo):
        c = bo.cafeterias.create({"description": "Principal", "campus_id": "1"})
        bo.cafeterias.update(c.id, {"manager": "2024-01-01T08:00:00Z"})
        assert bo.cafeterias.get_by_id(c.id).manager == "2024-01-01T08:00:00Z"
