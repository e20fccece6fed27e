import json
import os
from datetime import datetime
from typing import Any, Dict, List, Optional

import aiofiles

from app.Domains.Booking.Models.appointment import Appointment, AppointmentNotFound
from app.Domains.Booking.Repositories.booking_repository import BookingRepository
from app.Domains.Customer.Models.customer import Customer


class JsonBookingRepository(BookingRepository):
    """Booking store kept in a single JSON file. Used for local runs and tests."""

    def __init__(self, data_path: str):
        self.data_path = data_path
        self.appointments: List[Appointment] = []
        self.customers: List[Customer] = []
        self.settings: Dict[str, Any] = {}
        self._ensure_file_exists()
        self._load_data()

    def _ensure_file_exists(self):
        directory = os.path.dirname(self.data_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        if not os.path.exists(self.data_path):
            with open(self.data_path, "w") as f:
                json.dump(self._snapshot(), f, indent=2)

    def _snapshot(self) -> Dict[str, Any]:
        return {
            "appointments": [a.model_dump(mode="json") for a in self.appointments],
            "customers": [c.model_dump(mode="json") for c in self.customers],
            "settings": self.settings,
        }

    async def _save_data(self):
        async with aiofiles.open(self.data_path, "w") as f:
            await f.write(json.dumps(self._snapshot(), indent=2, ensure_ascii=False))

    def _load_data(self):
        try:
            with open(self.data_path, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError:
            return
        self.appointments = [Appointment(**a) for a in data.get("appointments", [])]
        self.customers = [Customer(**c) for c in data.get("customers", [])]
        self.settings = data.get("settings", {})

    @staticmethod
    def _next_id(rows) -> int:
        return max((r.id or 0 for r in rows), default=0) + 1

    # --- Appointments ---

    async def list_appointments(
        self,
        customer_name: Optional[str] = None,
        barber_name: Optional[str] = None,
        date_strs: Optional[List[str]] = None,
        statuses: Optional[List[str]] = None,
        order_by: str = "id",
        descending: bool = False,
    ) -> List[Appointment]:
        rows = [
            a
            for a in self.appointments
            if (customer_name is None or a.customer_name == customer_name)
            and (barber_name is None or a.barber_name == barber_name)
            and (date_strs is None or a.date_str in date_strs)
            and (not statuses or a.status in statuses)
        ]

        def sort_key(appointment: Appointment):
            value = getattr(appointment, order_by)
            return (value is None, value if value is not None else 0)

        return sorted(rows, key=sort_key, reverse=descending)

    async def get_appointment(self, appointment_id: int) -> Optional[Appointment]:
        for appointment in self.appointments:
            if appointment.id == appointment_id:
                return appointment
        return None

    async def add_appointment(self, appointment: Appointment) -> Appointment:
        appointment.id = self._next_id(self.appointments)
        if appointment.created_at is None:
            appointment.created_at = datetime.now()
        self.appointments.append(appointment)
        await self._save_data()
        return appointment

    async def update_appointment_status(
        self, appointment_id: int, status: str, barber_name: Optional[str] = None
    ) -> Optional[Appointment]:
        appointment = await self.get_appointment(appointment_id)
        if not appointment:
            return None
        if barber_name is not None and appointment.barber_name != barber_name:
            return None

        appointment.status = status
        await self._save_data()
        return appointment

    async def complete_service(
        self, appointment_id: int, customer_name: str, barber_name: str
    ) -> bool:
        appointment = await self.get_appointment(appointment_id)
        if not appointment or appointment.barber_name != barber_name:
            raise AppointmentNotFound(f"Appointment {appointment_id} not found for {barber_name}")

        used_voucher = False
        for customer in self.customers:
            if customer.name == customer_name and (customer.vouchers or 0) > 0:
                customer.vouchers -= 1
                used_voucher = True
                break

        appointment.status = "completed"
        appointment.used_voucher = used_voucher
        await self._save_data()
        return used_voucher

    # --- Customers ---

    async def get_customer(self, customer_id: int) -> Optional[Customer]:
        for customer in self.customers:
            if customer.id == customer_id:
                return customer
        return None

    async def get_customer_by_phone(self, phone: str) -> Optional[Customer]:
        for customer in self.customers:
            if customer.phone == phone:
                return customer
        return None

    async def get_customers_by_names(self, names: List[str]) -> List[Customer]:
        return [c for c in self.customers if c.name in names]

    async def add_customer(self, customer: Customer) -> Customer:
        customer.id = self._next_id(self.customers)
        self.customers.append(customer)
        await self._save_data()
        return customer

    async def update_customer(self, customer_id: int, updates: Dict[str, Any]) -> Optional[Customer]:
        customer = await self.get_customer(customer_id)
        if not customer:
            return None

        updated = customer.model_copy(update=updates)
        self.customers[self.customers.index(customer)] = updated
        await self._save_data()
        return updated

    # --- Settings ---

    async def get_setting(self, key: str) -> Optional[Dict[str, Any]]:
        return self.settings.get(key)

    async def set_setting(self, key: str, value: Dict[str, Any]) -> None:
        self.settings[key] = value
        await self._save_data()
