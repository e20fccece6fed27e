from datetime import date, datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

AppointmentStatus = Literal["pending", "confirmed", "checked_in", "completed", "cancelled"]

# Appointments still waiting to be served
ACTIVE_STATUSES: List[str] = ["confirmed", "pending", "checked_in"]


class Appointment(BaseModel):
    id: Optional[int] = None
    customer_name: str
    barber_name: str
    service_name: str
    date_str: str
    time_str: str
    price: Optional[float] = 0
    status: AppointmentStatus = "pending"
    created_at: Optional[datetime] = None
    used_voucher: Optional[bool] = False


class AppointmentNotFound(ValueError):
    pass


class QueuePosition(BaseModel):
    position: int = 0
    wait_time: int = 0  # minutes


class QueueStats(BaseModel):
    count: int
    estimated_wait_time: int  # minutes
    is_busy: bool
    is_full: bool


class QueueSnapshot(BaseModel):
    appointments: List[Appointment]
    stats: QueueStats


class BarberAgenda(BaseModel):
    appointments: List[Appointment]
    customer_avatars: Dict[str, str] = Field(default_factory=dict)


class DaySaturation(BaseModel):
    day_name: str
    date_str: str
    full_date: date
    count: int
    percentage: int
    status: Literal["low", "medium", "high", "full"]


def store_date_str(day: date) -> str:
    """Formats a date the way appointments are keyed in the store, e.g. 3月7日."""
    return f"{day.month}月{day.day}日"
