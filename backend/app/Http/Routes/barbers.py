from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.dependencies import get_appointment_service
from app.Domains.Booking.Models.appointment import (
    Appointment,
    AppointmentNotFound,
    BarberAgenda,
    store_date_str,
)
from app.Domains.Booking.Services.appointment_service import AppointmentService
from app.Http.DTOs.error_schemas import APIErrorResponse
from app.Http.DTOs.schemas import BarberQueueResponse, ScanCheckInRequest

router = APIRouter(prefix="/barbers", tags=["Barbers"])


@router.get("/{barber_name}/appointments", response_model=BarberAgenda)
async def barber_appointments(
    barber_name: str,
    date_str: Optional[str] = None,
    status: Optional[List[str]] = Query(None),
    service: AppointmentService = Depends(get_appointment_service),
):
    """
    The barber's workbench for one day (today by default), ordered by time.
    """
    day = date_str or store_date_str(service.clock())
    return await service.list_barber_appointments(barber_name, day, status)


@router.post(
    "/{barber_name}/scan-check-in",
    response_model=Appointment,
    summary="Check in a scanned ticket",
    responses={400: {"model": APIErrorResponse}, 404: {"model": APIErrorResponse}},
)
async def scan_check_in(
    barber_name: str,
    body: ScanCheckInRequest,
    service: AppointmentService = Depends(get_appointment_service),
):
    try:
        return await service.scan_check_in(barber_name, body.appointment_id)
    except AppointmentNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{barber_name}/queue", response_model=BarberQueueResponse)
async def barber_queue(barber_name: str, service: AppointmentService = Depends(get_appointment_service)):
    count = await service.barber_queue_count(barber_name)
    return BarberQueueResponse(barber_name=barber_name, count=count)
