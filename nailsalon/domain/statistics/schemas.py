"""Statistics schemas - dashboard figures for the salon"""

from pydantic import BaseModel

from ..catalog.schemas import ServiceResponse


class PopularService(BaseModel):
    service: ServiceResponse
    count: int
    revenue: float


class StatusCounts(BaseModel):
    SCHEDULED: int = 0
    COMPLETED: int = 0
    CANCELLED: int = 0
    NO_SHOW: int = 0


class StatisticsResponse(BaseModel):
    """Schema for the dashboard statistics response"""

    totalAppointments: int
    todayAppointments: int
    weeklyRevenue: float
    monthlyRevenue: float
    totalCustomers: int
    customersThisMonth: int
    popularServices: list[PopularService]
    appointmentStatusCounts: StatusCounts
    averageAppointmentValue: float
    completionRate: float
