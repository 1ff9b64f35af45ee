from datetime import datetime, timedelta, timezone

from cafeteria.services.directory_service import create_stamped


class TestStampedCreation:

    def test_supplier_gets_registration_date(self, bo):
        before = datetime.now(timezone.utc)
        s = bo.directory.create_supplier({"trade_name": "Bebidas Premium", "rnc": "456789123"})
        assert s.registered_at >= before
        assert bo.suppliers.get_by_id(s.id).registered_at == s.registered_at

    def test_supplied_date_is_overwritten(self, bo):
        old = datetime(2001, 1, 1, tzinfo=timezone.utc)
        u = bo.directory.create_user({"name": "Laura", "user_type_id": "2", "registered_at": old})
        assert u.registered_at > old

    def test_employee_gets_hire_date(self, bo):
        e = bo.directory.create_employee({"name": "Roberto Díaz", "work_shift": "afternoon"})
        assert datetime.now(timezone.utc) - e.hired_at < timedelta(minutes=1)

    def test_create_stamped_on_any_repo(self, bo):
        b = create_stamped(bo.suppliers, {"trade_name": "X"}, "registered_at")
        assert b.registered_at is not None


class TestDirectoryQueries:

    def test_cafeterias_by_campus(self, bo):
        c1 = bo.campuses.create({"description": "Campus I"})
        c2 = bo.campuses.create({"description": "Campus II"})
        bo.cafeterias.create({"description": "Principal", "campus_id": c1.id})
        bo.cafeterias.create({"description": "Express", "campus_id": c1.id})
        bo.cafeterias.create({"description": "Edificio 3", "campus_id": c2.id})
        assert [c.description for c in bo.directory.cafeterias_by_campus(c1.id)] == ["Principal", "Express"]

    def test_users_by_type(self, bo):
        bo.directory.create_user({"name": "Pedro", "user_type_id": "1"})
        bo.directory.create_user({"name": "Laura", "user_type_id": "2"})
        assert [u.name for u in bo.directory.users_by_type("2")] == ["Laura"]

    def test_employees_by_shift(self, bo):
        bo.directory.create_employee({"name": "Carmen", "work_shift": "morning"})
        bo.directory.create_employee({"name": "Ana", "work_shift": "night"})
        assert [e.name for e in bo.directory.employees_by_shift("night")] == ["Ana"]
