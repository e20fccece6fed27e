from email.message import EmailMessage
from typing import Awaitable, Callable, Optional

import aiosmtplib
from loguru import logger

from app.Core.Exceptions.errors import EmailDeliveryError
from app.Domains.Email.Interfaces.email_sender import EmailSender
from app.Domains.Email.Models.email import EmailRequest


def build_message(request: EmailRequest) -> EmailMessage:
    config = request.config
    from_address = config.from_email or config.smtp_user

    message = EmailMessage()
    message["From"] = f"{config.from_name} <{from_address}>" if config.from_name else from_address
    message["To"] = request.to
    message["Subject"] = request.subject
    message.set_content(request.text or "")
    message.add_alternative(request.html, subtype="html")
    return message


class SmtpEmailSender(EmailSender):
    """Direct SMTP submission with the credentials carried by the request."""

    def __init__(self, send: Callable[..., Awaitable] = aiosmtplib.send, timeout: float = 30.0):
        self._send = send
        self.timeout = timeout

    async def send(self, request: EmailRequest) -> Optional[str]:
        config = request.config
        message = build_message(request)

        try:
            await self._send(
                message,
                hostname=config.smtp_host,
                port=config.smtp_port,
                username=config.smtp_user,
                password=config.smtp_password,
                use_tls=config.use_ssl,
                timeout=self.timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"SMTP Error: {e}")
            raise EmailDeliveryError(f"SMTP sending failed: {e}")

        logger.info(f"SMTP delivered message to {request.to} via {config.smtp_host}")
        return None
