"""
Tests for the dashboard statistics.
"""

from datetime import datetime
from types import SimpleNamespace

from conftest import MONDAY

from nailsalon.domain.statistics.service import compute_statistics, period_bounds

# Wednesday 2030-01-09, the week started on Sunday 2030-01-06
NOW = datetime(2030, 1, 9, 12, 0)


def make_service(service_id, name, price):
    return SimpleNamespace(
        id=service_id,
        name=name,
        description=None,
        duration=60,
        price=price,
        is_active=True,
        created_at=None,
        updated_at=None,
    )


MANICURE = make_service(1, "Manicure", 30.0)
POLISH = make_service(2, "Polish", 10.0)


def appointment(when, customer_id, status="SCHEDULED", services=(MANICURE,)):
    return SimpleNamespace(
        date=when,
        customer_id=customer_id,
        status=status,
        total_price=sum(s.price for s in services),
        services=[SimpleNamespace(service_id=s.id, service=s) for s in services],
    )


class TestPeriodBounds:
    def test_week_starts_on_sunday(self):
        bounds = period_bounds(NOW)
        assert bounds["week"] == (datetime(2030, 1, 6), datetime(2030, 1, 13))

    def test_sunday_starts_its_own_week(self):
        bounds = period_bounds(datetime(2030, 1, 6, 8, 0))
        assert bounds["week"][0] == datetime(2030, 1, 6)

    def test_december_rolls_over(self):
        bounds = period_bounds(datetime(2030, 12, 31, 23, 0))
        assert bounds["month"] == (datetime(2030, 12, 1), datetime(2031, 1, 1))


class TestComputeStatistics:
    def test_empty(self):
        stats = compute_statistics([], NOW)

        assert stats.totalAppointments == 0
        assert stats.completionRate == 0.0
        assert stats.averageAppointmentValue == 0.0
        assert stats.popularServices == []

    def test_figures(self):
        appointments = [
            appointment(datetime(2030, 1, 9, 10, 0), 1, "COMPLETED", (MANICURE, POLISH)),
            appointment(datetime(2030, 1, 9, 15, 0), 2, "SCHEDULED"),
            appointment(datetime(2030, 1, 7, 11, 0), 1, "CANCELLED"),
            appointment(datetime(2030, 1, 2, 11, 0), 3, "COMPLETED", (POLISH,)),
            appointment(datetime(2029, 12, 20, 11, 0), 4, "NO_SHOW"),
        ]

        stats = compute_statistics(appointments, NOW)

        assert stats.totalAppointments == 5
        assert stats.todayAppointments == 2
        # Cancelled bookings earn nothing
        assert stats.weeklyRevenue == 70.0
        assert stats.monthlyRevenue == 80.0
        assert stats.totalCustomers == 4
        assert stats.customersThisMonth == 3
        assert stats.appointmentStatusCounts.model_dump() == {
            "SCHEDULED": 1,
            "COMPLETED": 2,
            "CANCELLED": 1,
            "NO_SHOW": 1,
        }
        assert stats.averageAppointmentValue == 25.0
        assert stats.completionRate == 40.0

    def test_popular_services_count_each_line(self):
        appointments = [
            appointment(NOW, 1, services=(POLISH, POLISH)),
            appointment(NOW, 2, services=(MANICURE,)),
        ]

        popular = compute_statistics(appointments, NOW).popularServices

        assert [(p.service.name, p.count, p.revenue) for p in popular] == [
            ("Polish", 2, 20.0),
            ("Manicure", 1, 30.0),
        ]


class TestStatisticsEndpoint:
    def test_uses_real_customers(self, client, make_customer, make_service, book):
        service = make_service(price=25.0)
        first, second = make_customer(), make_customer()
        book(first, None, [service], f"{MONDAY}T10:00:00")
        book(first, None, [service], f"{MONDAY}T12:00:00")
        book(second, None, [service], f"{MONDAY}T14:00:00")

        response = client.get("/api/statistics")

        assert response.status_code == 200
        body = response.json()
        assert body["totalAppointments"] == 3
        assert body["totalCustomers"] == 2
        assert body["popularServices"][0]["count"] == 3
        assert body["appointmentStatusCounts"]["SCHEDULED"] == 3
