from typing import Any, Optional

from pydantic import ValidationError

from app.Core.Exceptions.errors import EmailValidationError
from app.Domains.Email.Interfaces.email_sender import EmailSender
from app.Domains.Email.Models.email import EmailRequest, EmailSendResult

REQUIRED_FIELDS = ("to", "subject", "html")
REQUIRED_CONFIG_FIELDS = ("smtpHost", "smtpUser", "smtpPassword")


class EmailRelayService:
    """
    Validates an email payload and forwards it to a single provider.

    Resend is preferred whenever a sender for it is configured; otherwise the
    message is submitted over SMTP with the credentials from the payload.
    No retries, no queuing.
    """

    def __init__(self, smtp_sender: EmailSender, resend_sender: Optional[EmailSender] = None):
        self.smtp_sender = smtp_sender
        self.resend_sender = resend_sender

    @staticmethod
    def parse_request(payload: Any) -> EmailRequest:
        if (
            not isinstance(payload, dict)
            or not all(payload.get(f) for f in REQUIRED_FIELDS)
            or payload.get("config") is None
        ):
            raise EmailValidationError("Missing required parameters")

        config = payload["config"]
        if not isinstance(config, dict) or not all(config.get(f) for f in REQUIRED_CONFIG_FIELDS):
            raise EmailValidationError("Invalid email configuration")

        try:
            return EmailRequest.model_validate(payload)
        except ValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            raise EmailValidationError(f"Invalid parameters: {fields}")

    async def relay(self, payload: Any) -> EmailSendResult:
        request = self.parse_request(payload)

        if self.resend_sender is not None:
            message_id = await self.resend_sender.send(request)
            return EmailSendResult(success=True, id=message_id)

        await self.smtp_sender.send(request)
        return EmailSendResult(success=True)

    @property
    def provider(self) -> str:
        return "resend" if self.resend_sender is not None else "smtp"
