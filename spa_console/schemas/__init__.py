from .enums import (
    BookingStatus,
    EmployeeStatus,
    Position,
    RejectReason,
    ServiceCategory,
    ServiceStatus,
)
from .employee import BioRequest, Employee, EmployeeCreate
from .service import Service, ServiceCreate
from .booking import (
    Booking,
    BookingCandidate,
    DailyStats,
    RevenueSummary,
    RoomAvailability,
    StaffAvailability,
    StaffOption,
    StatusUpdate,
    SubmissionResult,
)
from .timeline import RoomRow, StaffRow, StaffStatus, Timeline, TimelineFilters
