from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import get_appointment_service
from app.Domains.Booking.Models.appointment import Appointment, AppointmentNotFound, QueuePosition
from app.Domains.Booking.Services.appointment_service import AppointmentService
from app.Http.DTOs.error_schemas import APIErrorResponse
from app.Http.DTOs.schemas import CompleteRequest, CompleteResponse

router = APIRouter(prefix="/appointments", tags=["Appointments"])


@router.post(
    "/{appointment_id}/cancel",
    response_model=Appointment,
    responses={404: {"model": APIErrorResponse}},
)
async def cancel_appointment(
    appointment_id: int, service: AppointmentService = Depends(get_appointment_service)
):
    try:
        return await service.cancel(appointment_id)
    except AppointmentNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post(
    "/{appointment_id}/check-in",
    response_model=Appointment,
    responses={404: {"model": APIErrorResponse}},
)
async def check_in_appointment(
    appointment_id: int, service: AppointmentService = Depends(get_appointment_service)
):
    try:
        return await service.check_in(appointment_id)
    except AppointmentNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post(
    "/{appointment_id}/complete",
    response_model=CompleteResponse,
    summary="Complete a service",
    description="Marks the appointment completed and consumes a customer voucher when available.",
    responses={404: {"model": APIErrorResponse}},
)
async def complete_appointment(
    appointment_id: int,
    body: CompleteRequest,
    service: AppointmentService = Depends(get_appointment_service),
):
    try:
        used_voucher = await service.complete(appointment_id, body.customer_name, body.barber_name)
    except AppointmentNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return CompleteResponse(appointment_id=appointment_id, used_voucher=used_voucher)


@router.get("/{appointment_id}/queue-position", response_model=QueuePosition)
async def queue_position(
    appointment_id: int,
    barber_name: str,
    date_str: str,
    service: AppointmentService = Depends(get_appointment_service),
):
    return await service.queue_position(appointment_id, barber_name, date_str)
