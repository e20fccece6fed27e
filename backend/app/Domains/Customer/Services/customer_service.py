import hashlib
from typing import Optional
from urllib.parse import quote

from loguru import logger

from app.Core.Exceptions.errors import AuthenticationError, FormValidationError
from app.Domains.Booking.Repositories.booking_repository import BookingRepository
from app.Domains.Customer.Forms.form import password_change_form, profile_form, register_form
from app.Domains.Customer.Models.customer import (
    Customer,
    LoginCredentials,
    PasswordChange,
    ProfileUpdate,
    RegisterData,
)


def hash_password(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def default_avatar(nickname: str) -> str:
    return f"https://ui-avatars.com/api/?name={quote(nickname)}&background=random"


class CustomerService:
    def __init__(self, repository: BookingRepository):
        self.repository = repository

    async def register(self, data: RegisterData) -> Customer:
        form = register_form(data.model_dump(exclude={"avatar"}))
        if not form.validate():
            raise FormValidationError(form.errors)

        if await self.repository.get_customer_by_phone(data.phone):
            raise FormValidationError({"phone": "This phone number is already registered"})

        customer = Customer(
            name=data.nickname,
            real_name=data.real_name or "",
            phone=data.phone,
            email=data.email or "",
            avatar=data.avatar or default_avatar(data.nickname),
            password_hash=hash_password(data.password),
        )
        created = await self.repository.add_customer(customer)
        logger.info(f"Registered customer {created.name} (#{created.id})")
        return created

    async def login(self, credentials: LoginCredentials) -> Customer:
        if not credentials.phone or not credentials.password:
            raise AuthenticationError("Phone number and password are required")

        customer = await self.repository.get_customer_by_phone(credentials.phone)
        if not customer or customer.password_hash != hash_password(credentials.password):
            raise AuthenticationError("Incorrect phone number or password")
        return customer

    async def get(self, customer_id: int) -> Optional[Customer]:
        return await self.repository.get_customer(customer_id)

    async def update_profile(self, customer_id: int, updates: ProfileUpdate) -> Customer:
        customer = await self.repository.get_customer(customer_id)
        if not customer:
            raise ValueError("Customer not found")

        if updates.phone is not None and updates.phone != customer.phone:
            raise FormValidationError({"phone": "Phone number cannot be changed after registration"})

        changes = updates.model_dump(exclude_none=True, exclude={"phone"})
        form = profile_form({**customer.model_dump(include={"name", "real_name", "email", "avatar"}), **changes})
        if not form.validate():
            raise FormValidationError(form.errors)

        if not changes:
            return customer
        return await self.repository.update_customer(customer_id, changes)

    async def update_password(self, customer_id: int, change: PasswordChange) -> None:
        form = password_change_form(change.model_dump())
        if not form.validate():
            raise FormValidationError(form.errors)

        updated = await self.repository.update_customer(
            customer_id, {"password_hash": hash_password(change.new_password)}
        )
        if not updated:
            raise ValueError("Customer not found")
        logger.warning(f"Customer #{customer_id} changed their password")
