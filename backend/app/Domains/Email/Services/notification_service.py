from typing import Optional

from loguru import logger

from app.Core.Exceptions.errors import RelayError
from app.Domains.Booking.Repositories.booking_repository import BookingRepository
from app.Domains.Email.Services import templates
from app.Domains.Email.Services.email_relay_service import EmailRelayService

EMAIL_CONFIG_KEY = "email_config"


class EmailNotificationService:
    """Sends transactional emails using the SMTP settings stored in app settings."""

    def __init__(self, repository: BookingRepository, relay: EmailRelayService):
        self.repository = repository
        self.relay = relay

    async def send_email(self, to: str, subject: str, html: str, text: Optional[str] = None) -> bool:
        config = await self.repository.get_setting(EMAIL_CONFIG_KEY)
        if not config or not config.get("enabled"):
            logger.warning("Email service is disabled or not configured")
            return False

        payload = {"to": to, "subject": subject, "html": html, "text": text, "config": config}
        try:
            await self.relay.relay(payload)
        except RelayError as e:
            logger.error(f"Send email error: {e.message}")
            return False
        return True

    async def send_verification_code(
        self, to: str, code: str, purpose: templates.Purpose = "reset_password"
    ) -> bool:
        subject, html = templates.verification_code_email(code, purpose)
        return await self.send_email(to, subject, html)

    async def send_password_reset_success(self, to: str) -> bool:
        subject, html = templates.password_reset_success_email()
        return await self.send_email(to, subject, html)
