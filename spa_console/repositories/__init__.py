from .base import BaseRepository, RecordStoreError
from .booking_repository import BookingRepository
from .employee_repository import EmployeeRepository
from .service_repository import ServiceRepository
