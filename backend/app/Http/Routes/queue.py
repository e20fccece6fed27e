from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.dependencies import get_appointment_service
from app.Domains.Booking.Models.appointment import DaySaturation, QueueSnapshot
from app.Domains.Booking.Services.appointment_service import AppointmentService

router = APIRouter(tags=["Queue"])

TIME_PATTERN = r"^\d{1,2}:\d{2}$"


@router.get(
    "/queue/today",
    response_model=QueueSnapshot,
    summary="Today's queue",
    description="Checked-in customers for today with wait estimate and busy/full flags.",
)
async def today_queue(service: AppointmentService = Depends(get_appointment_service)):
    return await service.today_queue()


@router.get(
    "/saturation",
    response_model=List[DaySaturation],
    summary="Booking saturation for the next 7 days",
)
async def saturation(
    open_time: str = Query("09:00", pattern=TIME_PATTERN),
    close_time: str = Query("21:00", pattern=TIME_PATTERN),
    service_duration: int = Query(45, gt=0),
    barber_name: Optional[str] = None,
    service: AppointmentService = Depends(get_appointment_service),
):
    return await service.saturation(open_time, close_time, service_duration, barber_name)
