"""
Seed the database with a starter catalogue, staff and customers.

    python -m nailsalon.seed

Safe to run more than once: existing rows (matched by service name,
employee name or customer phone) are left alone.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from .booking_lock import employee_booking_lock
from .database import Base, SessionLocal, engine
from .domain.scheduling.booking import service_totals
from .domain.scheduling.exceptions import BookingRejected
from .domain.scheduling.service import AvailabilityService
from .domain.scheduling.working_hours import WEEKDAYS, WorkingHours
from .models import (
    Appointment,
    AppointmentServiceLink,
    AppointmentStatus,
    Customer,
    Employee,
    EmployeeServiceLink,
    Service,
)

logger = logging.getLogger(__name__)

SERVICES = [
    {
        "name": "Manicure & Grooming",
        "description": "Classic nail grooming and manicure",
        "duration": 90,
        "price": 45,
    },
    {
        "name": "French Manicure",
        "description": "Polish in French style",
        "duration": 60,
        "price": 35,
    },
    {"name": "Pedicure", "description": "Classic pedicure", "duration": 60, "price": 40},
    {
        "name": "Acrylic Nails",
        "description": "Extensions with acrylic",
        "duration": 120,
        "price": 60,
    },
    {"name": "Gel Nails", "description": "Extensions with gel", "duration": 150, "price": 70},
]

CUSTOMERS = [
    {
        "name": "Maria Papadopoulou",
        "phone": "6912345678",
        "email": "maria@example.com",
        "preferences": "Prefers pink shades, sensitive skin",
    },
    {
        "name": "Eleni Nikolaou",
        "phone": "6987654321",
        "email": "eleni@example.com",
        "preferences": "Loves French nails, prefers a short length",
    },
    {
        "name": "Anna Georgiou",
        "phone": "6955555555",
        "email": "anna@example.com",
        "preferences": "Natural colours, no acrylics",
    },
]


def weekly_hours(start: str, end: str, days_off: tuple[str, ...]) -> dict:
    hours = {
        day: {"start": start, "end": end, "isWorking": day not in days_off} for day in WEEKDAYS
    }
    # Validate before storing
    return WorkingHours(**hours).to_storage()


EMPLOYEES = [
    {
        "name": "Sofia Dimitriou",
        "email": "sofia@example.com",
        "phone": "6900000001",
        "working_hours": weekly_hours("09:00", "17:00", days_off=("sunday",)),
        "services": ["Manicure & Grooming", "French Manicure", "Pedicure"],
    },
    {
        "name": "Katerina Ioannou",
        "email": "katerina@example.com",
        "phone": "6900000002",
        "working_hours": weekly_hours("11:00", "20:00", days_off=("sunday", "monday")),
        "services": ["Acrylic Nails", "Gel Nails", "French Manicure"],
    },
]

# (customer index, employee index, service name, day offset, hour)
APPOINTMENTS = [
    (0, 0, "Manicure & Grooming", 0, 11),
    (1, 1, "French Manicure", 0, 14),
    (2, 1, "Acrylic Nails", 1, 12),
]


def seed_services(db: Session) -> dict[str, Service]:
    existing = {s.name: s for s in db.query(Service).all()}
    for data in SERVICES:
        if data["name"] not in existing:
            service = Service(**data)
            db.add(service)
            existing[data["name"]] = service
            logger.info(f"Created service {data['name']}")
    db.flush()
    return existing


def seed_customers(db: Session) -> list[Customer]:
    customers = []
    for data in CUSTOMERS:
        customer = db.query(Customer).filter(Customer.phone == data["phone"]).first()
        if not customer:
            customer = Customer(**data)
            db.add(customer)
            logger.info(f"Created customer {data['name']}")
        customers.append(customer)
    db.flush()
    return customers


def seed_employees(db: Session, services: dict[str, Service]) -> list[Employee]:
    employees = []
    for data in EMPLOYEES:
        employee = db.query(Employee).filter(Employee.name == data["name"]).first()
        if not employee:
            fields = {k: v for k, v in data.items() if k != "services"}
            employee = Employee(**fields)
            employee.employee_services = [
                EmployeeServiceLink(service=services[name]) for name in data["services"]
            ]
            db.add(employee)
            logger.info(f"Created employee {data['name']}")
        employees.append(employee)
    db.flush()
    return employees


def seed_appointments(
    db: Session,
    customers: list[Customer],
    employees: list[Employee],
    services: dict[str, Service],
    today: date,
) -> int:
    """Book the sample appointments through the same checks the API uses"""
    if db.query(Appointment).count():
        logger.info("Appointments already present, skipping sample bookings")
        return 0

    availability = AvailabilityService(db)
    created = 0
    for customer_idx, employee_idx, service_name, day_offset, hour in APPOINTMENTS:
        employee = employees[employee_idx]
        service = services[service_name]
        start = datetime.combine(today + timedelta(days=day_offset), time(hour=hour))
        total_duration, total_price = service_totals([service])

        with employee_booking_lock(employee.id):
            try:
                availability.validate_booking(employee, start, total_duration)
            except BookingRejected as e:
                logger.info(f"Skipping sample booking for {employee.name} at {start}: {e.message}")
                continue

            db.add(
                Appointment(
                    customer_id=customers[customer_idx].id,
                    employee_id=employee.id,
                    date=start,
                    status=AppointmentStatus.SCHEDULED.value,
                    total_duration=total_duration,
                    total_price=total_price,
                    services=[AppointmentServiceLink(service_id=service.id)],
                )
            )
            db.flush()
        created += 1

    return created


def seed(db: Session, today: Optional[date] = None) -> None:
    services = seed_services(db)
    customers = seed_customers(db)
    employees = seed_employees(db, services)
    created = seed_appointments(db, customers, employees, services, today or date.today())
    db.commit()
    logger.info(f"Database seeded ({created} sample appointments booked)")


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    Base.metadata.create_all(bind=engine, checkfirst=True)

    db = SessionLocal()
    try:
        seed(db)
    except Exception as e:
        db.rollback()
        logger.error(f"Seeding failed: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
