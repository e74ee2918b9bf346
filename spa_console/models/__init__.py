from .employee import EmployeeRecord
from .service import ServiceRecord
from .booking import BookingRecord

__all__ = ["EmployeeRecord", "ServiceRecord", "BookingRecord"]
