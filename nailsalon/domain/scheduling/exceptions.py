"""
Booking rejection hierarchy.

Every rejection is a recoverable validation failure: the API layer turns it
into a 400 response carrying the message and the machine-readable ``code``.
"""


class BookingRejected(Exception):
    """Base class for all booking validation failures."""

    code = "BOOKING_REJECTED"
    default_message = "The appointment cannot be booked"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotWorkingThisDay(BookingRejected):
    """Raised when the employee does not work on the requested weekday."""

    code = "NOT_WORKING_THIS_DAY"
    default_message = "The employee does not work on this day"


class InvalidConfiguration(NotWorkingThisDay):
    """Raised when stored working hours cannot be parsed; fails closed as a non-working day."""

    code = "INVALID_CONFIGURATION"
    default_message = "The employee's working hours are not configured correctly"


class OutsideWorkingHours(BookingRejected):
    """Raised when the appointment starts before or ends after the working window."""

    code = "OUTSIDE_WORKING_HOURS"
    default_message = "The appointment is outside the employee's working hours"


class TimeConflict(BookingRejected):
    """Raised when the appointment overlaps an existing non-cancelled appointment."""

    code = "TIME_CONFLICT"
    default_message = "The employee already has an appointment at this time"
