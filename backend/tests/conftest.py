import json
from datetime import date

import pytest
from fastapi.testclient import TestClient

from app.dependencies import (
    get_appointment_service,
    get_change_feed,
    get_customer_service,
    get_email_relay_service,
    get_notification_service,
    get_tts_relay_service,
)
from app.Domains.Booking.Services.appointment_service import AppointmentService
from app.Domains.Customer.Services.customer_service import CustomerService, hash_password
from app.Domains.Email.Services.email_relay_service import EmailRelayService
from app.Domains.Email.Services.notification_service import EmailNotificationService
from app.Domains.Realtime.Services.change_feed import ChangeFeed
from app.Domains.Speech.Services.tts_relay_service import TTSRelayService
from app.Infrastructure.Email.smtp_sender import SmtpEmailSender
from app.Infrastructure.Repositories.json_booking_repository import JsonBookingRepository
from main import app

TODAY = date(2025, 3, 7)

SMTP_CONFIG = {
    "smtpHost": "smtp.example.com",
    "smtpPort": 465,
    "smtpUser": "shop@example.com",
    "smtpPassword": "app-password",
    "fromName": "BarberBook Pro",
    "useSSL": True,
    "enabled": True,
}


def _appointment(id, customer, barber, date_str, time_str, status, created_at):
    return {
        "id": id,
        "customer_name": customer,
        "barber_name": barber,
        "service_name": "Classic cut",
        "date_str": date_str,
        "time_str": time_str,
        "price": 88,
        "status": status,
        "created_at": created_at,
        "used_voucher": False,
    }


SEED = {
    "appointments": [
        _appointment(1, "Tom", "Tony", "3月7日", "10:00", "confirmed", "2025-03-01T09:00:00"),
        _appointment(2, "Amy", "Tony", "3月7日", "09:30", "checked_in", "2025-03-01T10:00:00"),
        _appointment(3, "Leo", "Tony", "3月7日", "11:00", "pending", "2025-03-01T08:00:00"),
        _appointment(4, "Tom", "Kevin", "3月8日", "14:00", "confirmed", "2025-03-02T09:00:00"),
        _appointment(5, "Amy", "Kevin", "3月7日", "15:00", "cancelled", "2025-03-02T10:00:00"),
        _appointment(6, "Leo", "Kevin", "3月7日", "16:00", "checked_in", "2025-03-02T11:00:00"),
    ],
    "customers": [
        {
            "id": 1,
            "name": "Tom",
            "real_name": "Tom Zhang",
            "phone": "13800138000",
            "email": "tom@example.com",
            "avatar": "https://example.com/tom.png",
            "vouchers": 2,
            "role": "customer",
            "password_hash": hash_password("secret1"),
        },
        {
            "id": 2,
            "name": "Amy",
            "real_name": "",
            "phone": "13900139000",
            "email": "",
            "avatar": None,
            "vouchers": 0,
            "role": "customer",
            "password_hash": hash_password("secret2"),
        },
    ],
    "settings": {"email_config": SMTP_CONFIG},
}


class FakeSmtpSend:
    """Stands in for aiosmtplib.send and records each call."""

    def __init__(self, error: Exception = None):
        self.error = error
        self.calls = []

    async def __call__(self, message, **kwargs):
        self.calls.append((message, kwargs))
        if self.error is not None:
            raise self.error
        return {}, "OK"


@pytest.fixture
def data_path(tmp_path):
    path = tmp_path / "booking.json"
    path.write_text(json.dumps(SEED, ensure_ascii=False))
    return str(path)


@pytest.fixture
def repository(data_path):
    return JsonBookingRepository(data_path)


@pytest.fixture
def feed():
    return ChangeFeed()


@pytest.fixture
def appointment_service(repository, feed):
    return AppointmentService(repository, feed, clock=lambda: TODAY)


@pytest.fixture
def customer_service(repository):
    return CustomerService(repository)


@pytest.fixture
def smtp_send():
    return FakeSmtpSend()


@pytest.fixture
def email_relay(smtp_send):
    return EmailRelayService(SmtpEmailSender(send=smtp_send))


@pytest.fixture
def tts_service():
    return TTSRelayService(None)


@pytest.fixture
def client(repository, feed, appointment_service, customer_service, email_relay, tts_service):
    app.dependency_overrides[get_change_feed] = lambda: feed
    app.dependency_overrides[get_appointment_service] = lambda: appointment_service
    app.dependency_overrides[get_customer_service] = lambda: customer_service
    app.dependency_overrides[get_email_relay_service] = lambda: email_relay
    app.dependency_overrides[get_notification_service] = lambda: EmailNotificationService(
        repository, email_relay
    )
    app.dependency_overrides[get_tts_relay_service] = lambda: tts_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
