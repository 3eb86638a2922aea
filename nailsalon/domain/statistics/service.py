"""Statistics service - dashboard figures computed from stored appointments"""

import logging
from collections import Counter
from datetime import datetime, time, timedelta
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from ...models import Appointment, AppointmentStatus
from ..appointments.repository import AppointmentRepository
from ..catalog.schemas import service_to_response
from .schemas import PopularService, StatisticsResponse, StatusCounts

logger = logging.getLogger(__name__)

POPULAR_SERVICES_LIMIT = 5


def period_bounds(now: datetime) -> dict[str, tuple[datetime, datetime]]:
    """
    Today, this week and this month as half-open [start, end) ranges.

    Weeks start on Sunday.
    """
    today = datetime.combine(now.date(), time.min)
    days_since_sunday = (now.weekday() + 1) % 7
    week_start = today - timedelta(days=days_since_sunday)
    month_start = today.replace(day=1)
    if month_start.month == 12:
        next_month = month_start.replace(year=month_start.year + 1, month=1)
    else:
        next_month = month_start.replace(month=month_start.month + 1)

    return {
        "today": (today, today + timedelta(days=1)),
        "week": (week_start, week_start + timedelta(days=7)),
        "month": (month_start, next_month),
    }


def _in_range(appointment: Appointment, bounds: tuple[datetime, datetime]) -> bool:
    start, end = bounds
    return start <= appointment.date < end


def _revenue(appointments: Iterable[Appointment]) -> float:
    return round(
        sum(
            a.total_price
            for a in appointments
            if a.status != AppointmentStatus.CANCELLED.value
        ),
        2,
    )


def compute_statistics(appointments: list[Appointment], now: datetime) -> StatisticsResponse:
    """Aggregate the dashboard figures for ``now``; cancelled bookings earn no revenue"""
    bounds = period_bounds(now)

    counts = Counter(a.status for a in appointments)
    status_counts = StatusCounts(**{s.value: counts[s.value] for s in AppointmentStatus})

    # Popularity counts every requested line, a service booked twice counts twice
    popularity: dict[int, dict] = {}
    for appointment in appointments:
        for link in appointment.services:
            entry = popularity.setdefault(
                link.service_id, {"service": link.service, "count": 0, "revenue": 0.0}
            )
            entry["count"] += 1
            entry["revenue"] += link.service.price

    ranked = sorted(popularity.values(), key=lambda e: (-e["count"], e["service"].id))
    popular_services = [
        PopularService(
            service=service_to_response(e["service"]),
            count=e["count"],
            revenue=round(e["revenue"], 2),
        )
        for e in ranked[:POPULAR_SERVICES_LIMIT]
    ]

    month_appointments = [a for a in appointments if _in_range(a, bounds["month"])]
    completed = [a for a in appointments if a.status == AppointmentStatus.COMPLETED.value]
    average_value = (
        round(sum(a.total_price for a in completed) / len(completed), 2) if completed else 0.0
    )
    completion_rate = (
        round(status_counts.COMPLETED / len(appointments) * 100, 1) if appointments else 0.0
    )

    return StatisticsResponse(
        totalAppointments=len(appointments),
        todayAppointments=sum(1 for a in appointments if _in_range(a, bounds["today"])),
        weeklyRevenue=_revenue(a for a in appointments if _in_range(a, bounds["week"])),
        monthlyRevenue=_revenue(month_appointments),
        totalCustomers=len({a.customer_id for a in appointments}),
        customersThisMonth=len({a.customer_id for a in month_appointments}),
        popularServices=popular_services,
        appointmentStatusCounts=status_counts,
        averageAppointmentValue=average_value,
        completionRate=completion_rate,
    )


class StatisticsService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentRepository()

    def get_statistics(self, now: Optional[datetime] = None) -> StatisticsResponse:
        now = now or datetime.now()
        appointments = self.repo.get_appointments(self.db)
        logger.debug(f"Computing statistics over {len(appointments)} appointments")
        return compute_statistics(appointments, now)
