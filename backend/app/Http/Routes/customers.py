from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from app.dependencies import get_appointment_service, get_customer_service
from app.Domains.Booking.Models.appointment import Appointment
from app.Domains.Booking.Services.appointment_service import AppointmentService
from app.Domains.Customer.Models.customer import (
    Customer,
    CustomerPublic,
    LoginCredentials,
    PasswordChange,
    ProfileUpdate,
    RegisterData,
)
from app.Domains.Customer.Services.customer_service import CustomerService
from app.Http.DTOs.error_schemas import APIErrorResponse, FormErrorResponse
from app.Http.DTOs.schemas import CheckInView, CustomerResponse, MessageResponse

router = APIRouter(tags=["Customers"])

CHECK_IN_STATUSES = ["confirmed", "pending", "checked_in", "completed"]


def _map_to_response(customer: Customer, request: Request) -> CustomerResponse:
    base = str(request.base_url).rstrip("/")
    dto = CustomerResponse(customer=CustomerPublic.from_customer(customer))
    dto.add_link("self", f"{base}/customers/{customer.id}", "GET")
    dto.add_link("check_in", f"{base}/customers/{customer.name}/check-in", "GET")
    dto.add_link("profile", f"{base}/customers/{customer.id}/profile", "PUT")
    return dto


@router.post(
    "/customers",
    response_model=CustomerResponse,
    response_model_by_alias=True,
    status_code=201,
    summary="Register a customer",
    responses={422: {"model": FormErrorResponse}},
)
async def register_customer(
    body: RegisterData, request: Request, service: CustomerService = Depends(get_customer_service)
):
    customer = await service.register(body)
    return _map_to_response(customer, request)


@router.post(
    "/customers/login",
    response_model=CustomerResponse,
    response_model_by_alias=True,
    summary="Log in with phone and password",
    responses={401: {"model": APIErrorResponse}},
)
async def login(
    body: LoginCredentials, request: Request, service: CustomerService = Depends(get_customer_service)
):
    customer = await service.login(body)
    return _map_to_response(customer, request)


@router.get(
    "/customers/{customer_id:int}",
    response_model=CustomerResponse,
    response_model_by_alias=True,
    responses={404: {"model": APIErrorResponse}},
)
async def get_customer(
    customer_id: int, request: Request, service: CustomerService = Depends(get_customer_service)
):
    customer = await service.get(customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return _map_to_response(customer, request)


@router.put(
    "/customers/{customer_id:int}/profile",
    response_model=CustomerResponse,
    response_model_by_alias=True,
    summary="Edit profile",
    description="Updates name, real name, email and avatar. The phone number cannot change.",
    responses={404: {"model": APIErrorResponse}, 422: {"model": FormErrorResponse}},
)
async def update_profile(
    customer_id: int,
    body: ProfileUpdate,
    request: Request,
    service: CustomerService = Depends(get_customer_service),
):
    try:
        customer = await service.update_profile(customer_id, body)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _map_to_response(customer, request)


@router.put(
    "/customers/{customer_id:int}/password",
    response_model=MessageResponse,
    responses={404: {"model": APIErrorResponse}, 422: {"model": FormErrorResponse}},
)
async def update_password(
    customer_id: int, body: PasswordChange, service: CustomerService = Depends(get_customer_service)
):
    try:
        await service.update_password(customer_id, body)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return MessageResponse(message="Password updated")


@router.get("/customers/{name}/appointments", response_model=List[Appointment])
async def list_customer_appointments(
    name: str,
    status: Optional[List[str]] = Query(None),
    service: AppointmentService = Depends(get_appointment_service),
):
    return await service.list_customer_appointments(name, status)


@router.get(
    "/customers/{name}/check-in",
    response_model=CheckInView,
    response_model_by_alias=True,
    summary="Check-in ticket",
    description="The customer's current appointment with its place in the barber's queue.",
)
async def check_in_view(
    name: str,
    request: Request,
    appointment_id: Optional[int] = None,
    service: AppointmentService = Depends(get_appointment_service),
):
    appointments = await service.list_customer_appointments(name, CHECK_IN_STATUSES)

    current = None
    if appointment_id is not None:
        current = next((a for a in appointments if a.id == appointment_id), None)
    if current is None and appointments:
        current = appointments[0]

    view = CheckInView(appointment=current, appointments=appointments)
    if current is not None:
        view.queue = await service.queue_position(current.id, current.barber_name, current.date_str)

        base = str(request.base_url).rstrip("/")
        view.add_link("check_in", f"{base}/appointments/{current.id}/check-in", "POST")
        view.add_link("cancel", f"{base}/appointments/{current.id}/cancel", "POST")
    return view
