import os
from typing import Optional

from loguru import logger

from app.Core.Config.server import ServerConfig
from app.Domains.Booking.Repositories.booking_repository import BookingRepository
from app.Domains.Booking.Services.appointment_service import AppointmentService
from app.Domains.Customer.Services.customer_service import CustomerService
from app.Domains.Email.Services.email_relay_service import EmailRelayService
from app.Domains.Email.Services.notification_service import EmailNotificationService
from app.Domains.Realtime.Services.change_feed import ChangeFeed
from app.Domains.Speech.Interfaces.speech_provider import SpeechProvider
from app.Domains.Speech.Services.tts_relay_service import TTSRelayService
from app.Infrastructure.Email.resend_sender import ResendEmailSender
from app.Infrastructure.Email.smtp_sender import SmtpEmailSender
from app.Infrastructure.Repositories.json_booking_repository import JsonBookingRepository
from app.Infrastructure.Speech.xfyun_tts_provider import XfyunTTSProvider

BACKEND_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

server_config = ServerConfig()

# Singletons (Infrastructure)
_change_feed = ChangeFeed()
_smtp_sender = SmtpEmailSender()
_resend_sender: Optional[ResendEmailSender] = None
_booking_repository: Optional[BookingRepository] = None

if server_config.resend_api_key:
    _resend_sender = ResendEmailSender(
        api_key=server_config.resend_api_key,
        api_url=server_config.resend_api_url,
        default_from_name=server_config.default_from_name,
        default_from_email=server_config.default_from_email,
    )


def _data_path() -> str:
    path = server_config.booking_data_path
    return path if os.path.isabs(path) else os.path.join(BACKEND_ROOT, path)


def get_booking_repository() -> BookingRepository:
    global _booking_repository
    if _booking_repository is None:
        if server_config.use_supabase:
            from app.Infrastructure.Repositories.supabase_booking_repository import (
                SupabaseBookingRepository,
            )

            logger.info("Booking store: Supabase")
            _booking_repository = SupabaseBookingRepository(
                server_config.supabase_url, server_config.supabase_key
            )
        else:
            logger.info(f"Booking store: JSON file at {_data_path()}")
            _booking_repository = JsonBookingRepository(_data_path())
    return _booking_repository


def get_change_feed() -> ChangeFeed:
    return _change_feed


def get_appointment_service() -> AppointmentService:
    return AppointmentService(get_booking_repository(), _change_feed)


def get_customer_service() -> CustomerService:
    return CustomerService(get_booking_repository())


def get_email_relay_service() -> EmailRelayService:
    return EmailRelayService(_smtp_sender, _resend_sender)


def get_notification_service() -> EmailNotificationService:
    return EmailNotificationService(get_booking_repository(), get_email_relay_service())


def get_speech_provider() -> Optional[SpeechProvider]:
    if not (
        server_config.xfyun_appid and server_config.xfyun_api_key and server_config.xfyun_api_secret
    ):
        return None
    return XfyunTTSProvider(
        app_id=server_config.xfyun_appid,
        api_key=server_config.xfyun_api_key,
        api_secret=server_config.xfyun_api_secret,
        url=server_config.xfyun_tts_url,
        timeout=server_config.tts_timeout_seconds,
        sample_rate=server_config.tts_sample_rate,
    )


def get_tts_relay_service() -> TTSRelayService:
    return TTSRelayService(get_speech_provider())


async def close_clients():
    if _resend_sender is not None:
        await _resend_sender.close()
