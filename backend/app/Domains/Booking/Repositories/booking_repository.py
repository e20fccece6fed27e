from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from app.Domains.Booking.Models.appointment import Appointment
from app.Domains.Customer.Models.customer import Customer


class BookingRepository(ABC):
    # --- Appointments ---

    @abstractmethod
    async def list_appointments(
        self,
        customer_name: Optional[str] = None,
        barber_name: Optional[str] = None,
        date_strs: Optional[List[str]] = None,
        statuses: Optional[List[str]] = None,
        order_by: str = "id",
        descending: bool = False,
    ) -> List[Appointment]:
        pass

    @abstractmethod
    async def get_appointment(self, appointment_id: int) -> Optional[Appointment]:
        pass

    @abstractmethod
    async def add_appointment(self, appointment: Appointment) -> Appointment:
        pass

    @abstractmethod
    async def update_appointment_status(
        self, appointment_id: int, status: str, barber_name: Optional[str] = None
    ) -> Optional[Appointment]:
        """Updates the status; when `barber_name` is given the row must belong to that barber."""
        pass

    @abstractmethod
    async def complete_service(
        self, appointment_id: int, customer_name: str, barber_name: str
    ) -> bool:
        """Marks the appointment completed, consuming a voucher if the customer has one."""
        pass

    # --- Customers ---

    @abstractmethod
    async def get_customer(self, customer_id: int) -> Optional[Customer]:
        pass

    @abstractmethod
    async def get_customer_by_phone(self, phone: str) -> Optional[Customer]:
        pass

    @abstractmethod
    async def get_customers_by_names(self, names: List[str]) -> List[Customer]:
        pass

    @abstractmethod
    async def add_customer(self, customer: Customer) -> Customer:
        pass

    @abstractmethod
    async def update_customer(self, customer_id: int, updates: Dict[str, Any]) -> Optional[Customer]:
        pass

    # --- Settings ---

    @abstractmethod
    async def get_setting(self, key: str) -> Optional[Dict[str, Any]]:
        pass
