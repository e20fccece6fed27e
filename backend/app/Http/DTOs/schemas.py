from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from app.Domains.Booking.Models.appointment import Appointment, QueuePosition
from app.Domains.Customer.Models.customer import CustomerPublic
from app.Http.Responses.hateoas import HateoasModel, Link

# --- Launcher ---


class LauncherEntry(HateoasModel):
    role: str
    label: str
    links: List[Link] = Field(default_factory=list, alias="_links")


class LauncherResponse(BaseModel):
    entries: List[LauncherEntry]


# --- Customers ---


class CustomerResponse(HateoasModel):
    customer: CustomerPublic
    links: List[Link] = Field(default_factory=list, alias="_links")


class CheckInView(HateoasModel):
    appointment: Optional[Appointment] = None
    appointments: List[Appointment] = Field(default_factory=list)
    queue: QueuePosition = Field(default_factory=QueuePosition)
    links: List[Link] = Field(default_factory=list, alias="_links")


# --- Appointments ---


class CompleteRequest(BaseModel):
    customer_name: str
    barber_name: str


class CompleteResponse(BaseModel):
    appointment_id: int
    used_voucher: bool


class ScanCheckInRequest(BaseModel):
    appointment_id: str


class BarberQueueResponse(BaseModel):
    barber_name: str
    count: int


# --- Email ---


class VerificationCodeRequest(BaseModel):
    to: str
    code: str
    purpose: Literal["reset_password", "register"] = "reset_password"


class PasswordResetNoticeRequest(BaseModel):
    to: str


class NotificationResponse(BaseModel):
    sent: bool


class MessageResponse(BaseModel):
    message: str
