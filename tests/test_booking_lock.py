"""
Tests for the per-employee booking lock.
"""

import threading

import pytest
from conftest import MONDAY
from fastapi.testclient import TestClient

from nailsalon import booking_lock
from nailsalon.booking_lock import employee_booking_lock, lock_name
from nailsalon.domain.scheduling.exceptions import TimeConflict
from nailsalon.main import app


class FakeRedisLock:
    def __init__(self, acquired=True):
        self.acquired = acquired
        self.released = False

    def acquire(self):
        return self.acquired

    def release(self):
        self.released = True


class FakeRedis:
    def __init__(self, lock):
        self._lock = lock
        self.calls = []

    def lock(self, name, timeout, blocking_timeout):
        self.calls.append((name, timeout, blocking_timeout))
        return self._lock


class TestMemoryLock:
    def test_busy_lock_is_a_time_conflict(self):
        held = threading.Event()
        release = threading.Event()

        def hold():
            with employee_booking_lock(7):
                held.set()
                release.wait(5)

        worker = threading.Thread(target=hold)
        worker.start()
        try:
            assert held.wait(5)
            with pytest.raises(TimeConflict):
                with employee_booking_lock(7, timeout=0.05):
                    pass
        finally:
            release.set()
            worker.join()

    def test_released_after_block(self):
        with employee_booking_lock(8):
            pass
        with employee_booking_lock(8, timeout=0.05):
            pass

    def test_released_when_block_raises(self):
        with pytest.raises(RuntimeError):
            with employee_booking_lock(9):
                raise RuntimeError("boom")
        with employee_booking_lock(9, timeout=0.05):
            pass

    def test_employees_do_not_block_each_other(self):
        with employee_booking_lock(10):
            with employee_booking_lock(11, timeout=0.05):
                pass


class TestRedisLock:
    def test_uses_named_redis_lock(self, monkeypatch):
        lock = FakeRedisLock()
        client = FakeRedis(lock)
        monkeypatch.setattr(booking_lock, "REDIS_URL", "redis://localhost:6379/0")
        monkeypatch.setattr(booking_lock, "get_redis_client", lambda: client)

        with employee_booking_lock(3, timeout=2):
            assert not lock.released

        assert lock.released
        assert client.calls == [(lock_name(3), 2, 2)]
        assert lock_name(3) == "booking-lock:employee:3"

    def test_redis_lock_busy(self, monkeypatch):
        lock = FakeRedisLock(acquired=False)
        monkeypatch.setattr(booking_lock, "REDIS_URL", "redis://localhost:6379/0")
        monkeypatch.setattr(booking_lock, "get_redis_client", lambda: FakeRedis(lock))

        with pytest.raises(TimeConflict):
            with employee_booking_lock(3, timeout=0.1):
                pass
        assert not lock.released


class TestConcurrentBookings:
    def test_same_slot_from_two_threads(self, make_employee, make_service, make_customer):
        employee = make_employee()
        service = make_service(duration=60)
        customer = make_customer()
        payload = {
            "customerId": customer["id"],
            "employeeId": employee["id"],
            "serviceIds": [service["id"]],
            "date": f"{MONDAY}T10:00:00",
        }
        start = threading.Barrier(2)
        responses = []

        def post():
            client = TestClient(app)
            start.wait(5)
            responses.append(client.post("/api/appointments", json=payload))

        workers = [threading.Thread(target=post) for _ in range(2)]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join(30)

        assert sorted(r.status_code for r in responses) == [201, 400]
        rejected = next(r for r in responses if r.status_code == 400)
        assert rejected.json()["code"] == "TIME_CONFLICT"

    def test_waits_for_a_booking_in_progress(
        self, client, make_employee, make_service, make_customer
    ):
        employee = make_employee()
        service = make_service(duration=60)
        customer = make_customer()
        done = threading.Event()
        responses = []

        def post():
            responses.append(
                client.post(
                    "/api/appointments",
                    json={
                        "customerId": customer["id"],
                        "employeeId": employee["id"],
                        "serviceIds": [service["id"]],
                        "date": f"{MONDAY}T10:00:00",
                    },
                )
            )
            done.set()

        with employee_booking_lock(employee["id"]):
            worker = threading.Thread(target=post)
            worker.start()
            assert not done.wait(0.3)

        worker.join(30)
        assert responses[0].status_code == 201
