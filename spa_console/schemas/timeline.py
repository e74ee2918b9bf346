from typing import Dict, List, Optional

from pydantic import BaseModel

from .booking import Booking, DailyStats


class TimelineFilters(BaseModel):
    search: str = ""
    staff_id: Optional[str] = None
    available_only: bool = False
    start_time: str = "10:00"
    end_time: str = "22:00"


class StaffStatus(BaseModel):
    is_busy: bool
    text: str


class StaffRow(BaseModel):
    staff_id: str
    name: str
    status: StaffStatus
    completed_count: int
    bookings: List[Booking]


class RoomRow(BaseModel):
    room_index: int
    bookings: List[Booking]


class Timeline(BaseModel):
    slots: List[str]
    staff_rows: List[StaffRow]
    room_rows: List[RoomRow]
    # Брони, для которых не нашлось комнаты
    unallocated: List[Booking]
    allocation: Dict[str, Optional[int]]
    next_available_staff_slot: Optional[str] = None
    next_available_room_slot: Optional[str] = None
    stats: DailyStats
