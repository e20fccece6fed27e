import math
from datetime import date, timedelta
from typing import Callable, List, Optional

from loguru import logger

from app.Domains.Booking.Models.appointment import (
    ACTIVE_STATUSES,
    Appointment,
    AppointmentNotFound,
    BarberAgenda,
    DaySaturation,
    QueuePosition,
    QueueSnapshot,
    QueueStats,
    store_date_str,
)
from app.Domains.Booking.Repositories.booking_repository import BookingRepository
from app.Domains.Realtime.Models.change_event import ChangeEvent
from app.Domains.Realtime.Services.change_feed import ChangeFeed

APPOINTMENTS_TABLE = "app_appointments"

# Average minutes per customer ahead in a barber's line
QUEUE_POSITION_MINUTES = 20
# Average service time used for the shop-wide queue estimate
AVG_SERVICE_MINUTES = 15
BUSY_THRESHOLD = 5
FULL_THRESHOLD = 10

WEEKDAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

# A barber's finished services still occupy their slots
BARBER_SLOT_STATUSES = ACTIVE_STATUSES + ["completed"]


def _minutes(hhmm: str) -> int:
    hours, minutes = hhmm.split(":")
    return int(hours) * 60 + int(minutes)


class AppointmentService:
    def __init__(
        self,
        repository: BookingRepository,
        feed: ChangeFeed,
        clock: Callable[[], date] = date.today,
    ):
        self.repository = repository
        self.feed = feed
        self.clock = clock

    async def _publish_update(self, appointment: Appointment):
        await self.feed.publish(
            ChangeEvent(
                table=APPOINTMENTS_TABLE,
                event_type="UPDATE",
                new=appointment.model_dump(mode="json"),
                old={"id": appointment.id},
            )
        )

    async def _set_status(
        self, appointment_id: int, status: str, barber_name: Optional[str] = None
    ) -> Appointment:
        updated = await self.repository.update_appointment_status(appointment_id, status, barber_name)
        if not updated:
            raise AppointmentNotFound(f"Appointment {appointment_id} not found")
        logger.info(f"Appointment #{appointment_id} -> {status}")
        await self._publish_update(updated)
        return updated

    # --- Customer side ---

    async def list_customer_appointments(
        self, customer_name: Optional[str], statuses: Optional[List[str]] = None
    ) -> List[Appointment]:
        if not customer_name:
            return []
        return await self.repository.list_appointments(
            customer_name=customer_name,
            statuses=statuses if statuses is not None else ACTIVE_STATUSES,
            order_by="id",
            descending=True,
        )

    async def cancel(self, appointment_id: int) -> Appointment:
        return await self._set_status(appointment_id, "cancelled")

    async def check_in(self, appointment_id: int) -> Appointment:
        return await self._set_status(appointment_id, "checked_in")

    # --- Barber side ---

    async def list_barber_appointments(
        self, barber_name: Optional[str], date_str: Optional[str], statuses: Optional[List[str]] = None
    ) -> BarberAgenda:
        if not barber_name or not date_str:
            return BarberAgenda(appointments=[])

        appointments = await self.repository.list_appointments(
            barber_name=barber_name,
            date_strs=[date_str],
            statuses=statuses if statuses is not None else ACTIVE_STATUSES,
            order_by="time_str",
        )

        avatars = {}
        if appointments:
            names = sorted({a.customer_name for a in appointments})
            for customer in await self.repository.get_customers_by_names(names):
                if customer.avatar:
                    avatars[customer.name] = customer.avatar

        return BarberAgenda(appointments=appointments, customer_avatars=avatars)

    async def scan_check_in(self, barber_name: Optional[str], raw_id: str) -> Appointment:
        """Checks in a scanned appointment number, only if it belongs to this barber."""
        if not barber_name:
            raise ValueError("Barber identity not recognized")
        try:
            appointment_id = int(str(raw_id).strip())
        except ValueError:
            raise ValueError("Invalid appointment number, digits only")

        updated = await self.repository.update_appointment_status(
            appointment_id, "checked_in", barber_name=barber_name
        )
        if not updated:
            raise AppointmentNotFound("No matching appointment found for this barber")

        logger.info(f"Barber {barber_name} scanned in appointment #{appointment_id}")
        await self._publish_update(updated)
        return updated

    async def complete(self, appointment_id: int, customer_name: str, barber_name: str) -> bool:
        used_voucher = await self.repository.complete_service(appointment_id, customer_name, barber_name)
        appointment = await self.repository.get_appointment(appointment_id)
        if appointment:
            await self._publish_update(appointment)
        return used_voucher

    # --- Queue ---

    async def queue_position(
        self, appointment_id: Optional[int], barber_name: Optional[str], date_str: Optional[str]
    ) -> QueuePosition:
        if not appointment_id or not barber_name or not date_str:
            return QueuePosition()

        line = await self.repository.list_appointments(
            barber_name=barber_name,
            date_strs=[date_str],
            statuses=ACTIVE_STATUSES,
            order_by="time_str",
        )
        for index, appointment in enumerate(line):
            if appointment.id == appointment_id:
                return QueuePosition(position=index + 1, wait_time=index * QUEUE_POSITION_MINUTES)
        return QueuePosition()

    async def today_queue(self) -> QueueSnapshot:
        appointments = await self.repository.list_appointments(
            date_strs=[store_date_str(self.clock())],
            statuses=["checked_in"],
            order_by="created_at",
        )
        count = len(appointments)
        stats = QueueStats(
            count=count,
            estimated_wait_time=count * AVG_SERVICE_MINUTES,
            is_busy=count >= BUSY_THRESHOLD,
            is_full=count >= FULL_THRESHOLD,
        )
        return QueueSnapshot(appointments=appointments, stats=stats)

    async def barber_queue_count(self, barber_name: str) -> int:
        if not barber_name:
            return 0
        appointments = await self.repository.list_appointments(
            barber_name=barber_name,
            date_strs=[store_date_str(self.clock())],
            statuses=["checked_in"],
        )
        return len(appointments)

    async def saturation(
        self,
        open_time: str,
        close_time: str,
        service_duration: int,
        barber_name: Optional[str] = None,
        days: int = 7,
    ) -> List[DaySaturation]:
        """Booking load for each of the next `days` days, as a share of available slots."""
        total_minutes = _minutes(close_time) - _minutes(open_time)
        slots_per_day = max(1, total_minutes // max(1, service_duration))

        today = self.clock()
        dates = [today + timedelta(days=offset) for offset in range(days)]
        appointments = await self.repository.list_appointments(
            barber_name=barber_name,
            date_strs=[store_date_str(d) for d in dates],
            statuses=BARBER_SLOT_STATUSES if barber_name else ACTIVE_STATUSES,
        )

        result = []
        for offset, day in enumerate(dates):
            date_str = store_date_str(day)
            count = sum(1 for a in appointments if a.date_str == date_str)
            percentage = min(100, math.floor(count / slots_per_day * 100 + 0.5))

            if percentage >= 100:
                status = "full"
            elif percentage >= 80:
                status = "high"
            elif percentage >= 40:
                status = "medium"
            else:
                status = "low"

            if offset == 0:
                day_name = "Today"
            elif offset == 1:
                day_name = "Tomorrow"
            else:
                day_name = WEEKDAY_NAMES[day.weekday()]

            result.append(
                DaySaturation(
                    day_name=day_name,
                    date_str=date_str,
                    full_date=day,
                    count=count,
                    percentage=percentage,
                    status=status,
                )
            )
        return result
