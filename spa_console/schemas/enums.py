from enum import Enum


class BookingStatus(str, Enum):
    """Статус записи клиента."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    ON_LEAVE = "on_leave"
    RESIGNED = "resigned"


class Position(str, Enum):
    MANAGER = "manager"
    THERAPIST = "therapist"
    RECEPTIONIST = "receptionist"
    SECURITY = "security"


class ServiceStatus(str, Enum):
    ACTIVE = "active"
    STOPPED = "stopped"


class ServiceCategory(str, Enum):
    MASSAGE = "massage"
    SKIN_CARE = "skin_care"
    BODY_CARE = "body_care"
    COMBO = "combo"
    OTHER = "other"


class RejectReason(str, Enum):
    """Причина отказа в сохранении записи."""
    NO_SERVICE = "no_service"
    ROOM_FULL = "room_full"
    NOT_ENOUGH_STAFF = "not_enough_staff"
    STAFF_CONFLICT = "staff_conflict"
    NOT_FOUND = "not_found"
    STORE_FAILURE = "store_failure"
