"""
Tests for the seed script.
"""

from conftest import MONDAY

from nailsalon.models import Appointment, Customer, Employee, Service
from nailsalon.seed import seed


class TestSeed:
    def test_seed_books_through_validation(self, db):
        seed(db, today=MONDAY)

        assert db.query(Service).count() == 5
        assert db.query(Customer).count() == 3
        assert db.query(Employee).count() == 2
        # Katerina does not work on Mondays, so her Monday sample booking is skipped
        assert db.query(Appointment).count() == 2

    def test_seed_is_idempotent(self, db):
        seed(db, today=MONDAY)
        seed(db, today=MONDAY)

        assert db.query(Service).count() == 5
        assert db.query(Customer).count() == 3
        assert db.query(Employee).count() == 2
        assert db.query(Appointment).count() == 2

    def test_seeded_employees_have_services(self, client, db):
        seed(db, today=MONDAY)

        employees = client.get("/api/employees").json()
        assert all(e["services"] for e in employees)
        assert all(e["workingHours"]["sunday"]["isWorking"] is False for e in employees)
