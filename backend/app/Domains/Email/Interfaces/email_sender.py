from abc import ABC, abstractmethod
from typing import Optional

from app.Domains.Email.Models.email import EmailRequest


class EmailSender(ABC):
    @abstractmethod
    async def send(self, request: EmailRequest) -> Optional[str]:
        """Delivers the message and returns the provider's message id, if any."""
        pass
