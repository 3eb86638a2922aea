import enum

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func, text

from .database import Base


class AppointmentStatus(str, enum.Enum):
    """Flat status tag - any value may be set directly, there is no transition graph"""

    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    phone = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    preferences = Column(Text, nullable=True)  # Colours, sensitivities etc.

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    appointments = relationship("Appointment", back_populates="customer")


class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    duration = Column(Integer, nullable=False)  # Minutes
    price = Column(Float, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    employee_services = relationship(
        "EmployeeServiceLink", back_populates="service", cascade="all, delete-orphan"
    )


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    # {"monday": {"start": "09:00", "end": "17:00", "isWorking": true}, ...}
    # Validated through scheduling.working_hours on every write and read
    working_hours = Column(JSON, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    employee_services = relationship(
        "EmployeeServiceLink", back_populates="employee", cascade="all, delete-orphan"
    )
    appointments = relationship("Appointment", back_populates="employee")


class EmployeeServiceLink(Base):
    __tablename__ = "employee_services"
    __table_args__ = (UniqueConstraint("employee_id", "service_id", name="uq_employee_service"),)

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False)
    service_id = Column(Integer, ForeignKey("services.id", ondelete="CASCADE"), nullable=False)

    employee = relationship("Employee", back_populates="employee_services")
    service = relationship("Service", back_populates="employee_services")


class Appointment(Base):
    __tablename__ = "appointments"
    # Last line of defence against two requests booking the same start time.
    # Cancelled rows are left out so a cancelled slot can be booked again.
    __table_args__ = (
        Index(
            "uq_appointment_employee_start",
            "employee_id",
            "date",
            unique=True,
            sqlite_where=text("status != 'CANCELLED'"),
            postgresql_where=text("status != 'CANCELLED'"),
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    date = Column(DateTime, nullable=False, index=True)  # Start of the appointment
    status = Column(String(20), default=AppointmentStatus.SCHEDULED.value, nullable=False, index=True)
    notes = Column(Text, nullable=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    employee_id = Column(
        Integer, ForeignKey("employees.id", ondelete="SET NULL"), nullable=True, index=True
    )
    total_duration = Column(Integer, nullable=False, default=0)  # Minutes
    total_price = Column(Float, nullable=False, default=0.0)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    customer = relationship("Customer", back_populates="appointments")
    employee = relationship("Employee", back_populates="appointments")
    services = relationship(
        "AppointmentServiceLink", back_populates="appointment", cascade="all, delete-orphan"
    )


class AppointmentServiceLink(Base):
    __tablename__ = "appointment_services"

    id = Column(Integer, primary_key=True, index=True)
    appointment_id = Column(
        Integer, ForeignKey("appointments.id", ondelete="CASCADE"), nullable=False, index=True
    )
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False)

    appointment = relationship("Appointment", back_populates="services")
    service = relationship("Service")
