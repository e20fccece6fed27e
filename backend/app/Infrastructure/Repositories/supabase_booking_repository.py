import asyncio
from typing import Any, Dict, List, Optional

from loguru import logger
from supabase import Client, create_client

from app.Domains.Booking.Models.appointment import Appointment
from app.Domains.Booking.Repositories.booking_repository import BookingRepository
from app.Domains.Customer.Models.customer import Customer

APPOINTMENTS_TABLE = "app_appointments"
CUSTOMERS_TABLE = "app_customers"
SETTINGS_TABLE = "app_settings"
COMPLETE_SERVICE_RPC = "complete_barber_service_v2"


class SupabaseBookingRepository(BookingRepository):
    """
    Booking store backed by the Supabase tables the booking app writes to.

    The supabase client is synchronous, so every `execute()` runs in a worker
    thread to keep the event loop free.
    """

    def __init__(self, url: str, key: str, client: Optional[Client] = None):
        self.client: Client = client or create_client(url, key)

    @staticmethod
    async def _execute(query):
        return await asyncio.to_thread(query.execute)

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
        query = self.client.table(APPOINTMENTS_TABLE).select("*")
        if customer_name is not None:
            query = query.eq("customer_name", customer_name)
        if barber_name is not None:
            query = query.eq("barber_name", barber_name)
        if date_strs is not None:
            query = query.in_("date_str", date_strs)
        if statuses:
            query = query.in_("status", statuses)
        query = query.order(order_by, desc=descending)

        response = await self._execute(query)
        return [Appointment(**row) for row in response.data or []]

    async def get_appointment(self, appointment_id: int) -> Optional[Appointment]:
        query = self.client.table(APPOINTMENTS_TABLE).select("*").eq("id", appointment_id).limit(1)
        response = await self._execute(query)
        if not response.data:
            return None
        return Appointment(**response.data[0])

    async def add_appointment(self, appointment: Appointment) -> Appointment:
        payload = appointment.model_dump(mode="json", exclude_none=True, exclude={"id"})
        response = await self._execute(self.client.table(APPOINTMENTS_TABLE).insert(payload))
        return Appointment(**response.data[0])

    async def update_appointment_status(
        self, appointment_id: int, status: str, barber_name: Optional[str] = None
    ) -> Optional[Appointment]:
        query = self.client.table(APPOINTMENTS_TABLE).update({"status": status}).eq("id", appointment_id)
        if barber_name is not None:
            query = query.eq("barber_name", barber_name)

        response = await self._execute(query)
        if not response.data:
            return None
        return Appointment(**response.data[0])

    async def complete_service(
        self, appointment_id: int, customer_name: str, barber_name: str
    ) -> bool:
        # Voucher deduction, barber revenue and status change happen in one transaction.
        query = self.client.rpc(
            COMPLETE_SERVICE_RPC,
            {
                "p_appointment_id": appointment_id,
                "p_customer_name": customer_name,
                "p_barber_name": barber_name,
            },
        )
        response = await self._execute(query)
        data = response.data or {}
        if isinstance(data, list):
            data = data[0] if data else {}
        logger.info(f"Completed appointment #{appointment_id} for {customer_name} by {barber_name}")
        return bool(data.get("used_voucher", False))

    # --- Customers ---

    async def get_customer(self, customer_id: int) -> Optional[Customer]:
        query = self.client.table(CUSTOMERS_TABLE).select("*").eq("id", customer_id).limit(1)
        response = await self._execute(query)
        if not response.data:
            return None
        return Customer(**response.data[0])

    async def get_customer_by_phone(self, phone: str) -> Optional[Customer]:
        query = self.client.table(CUSTOMERS_TABLE).select("*").eq("phone", phone).limit(1)
        response = await self._execute(query)
        if not response.data:
            return None
        return Customer(**response.data[0])

    async def get_customers_by_names(self, names: List[str]) -> List[Customer]:
        if not names:
            return []
        query = self.client.table(CUSTOMERS_TABLE).select("*").in_("name", names)
        response = await self._execute(query)
        return [Customer(**row) for row in response.data or []]

    async def add_customer(self, customer: Customer) -> Customer:
        payload = customer.model_dump(exclude_none=True, exclude={"id", "role", "vouchers"})
        response = await self._execute(self.client.table(CUSTOMERS_TABLE).insert(payload))
        return Customer(**response.data[0])

    async def update_customer(self, customer_id: int, updates: Dict[str, Any]) -> Optional[Customer]:
        query = self.client.table(CUSTOMERS_TABLE).update(updates).eq("id", customer_id)
        response = await self._execute(query)
        if not response.data:
            return None
        return Customer(**response.data[0])

    # --- Settings ---

    async def get_setting(self, key: str) -> Optional[Dict[str, Any]]:
        query = self.client.table(SETTINGS_TABLE).select("value").eq("key", key).limit(1)
        try:
            response = await self._execute(query)
        except Exception as e:
            logger.error(f"Error loading setting {key}: {e}")
            return None
        if not response.data:
            return None
        return response.data[0].get("value")
