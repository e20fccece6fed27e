from typing import Optional

import aiohttp
from loguru import logger

from app.Core.Exceptions.errors import EmailDeliveryError
from app.Domains.Email.Interfaces.email_sender import EmailSender
from app.Domains.Email.Models.email import EmailRequest


class ResendEmailSender(EmailSender):
    def __init__(
        self,
        api_key: str,
        api_url: str = "https://api.resend.com/emails",
        default_from_name: str = "BarberBook Pro",
        default_from_email: str = "onboarding@resend.dev",
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.default_from_name = default_from_name
        self.default_from_email = default_from_email
        self.session = session

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self.session is None:
            self.session = aiohttp.ClientSession()
        return self.session

    def _sender(self, request: EmailRequest) -> str:
        name = request.config.from_name or self.default_from_name
        address = request.config.from_email or self.default_from_email
        return f"{name} <{address}>"

    async def send(self, request: EmailRequest) -> Optional[str]:
        session = await self._ensure_session()
        payload = {
            "from": self._sender(request),
            "to": request.to,
            "subject": request.subject,
            "html": request.html,
            "text": request.text or "",
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with session.post(self.api_url, json=payload, headers=headers) as response:
                if response.status >= 400:
                    error = await response.text()
                    raise EmailDeliveryError(f"Resend API error: {error}")
                data = await response.json()
        except aiohttp.ClientError as e:
            raise EmailDeliveryError(f"Resend API error: {e}")

        logger.info(f"Resend accepted message to {request.to} (id={data.get('id')})")
        return data.get("id")

    async def close(self):
        if self.session:
            await self.session.close()
