from abc import ABC, abstractmethod

from app.Domains.Speech.Models.tts import TTSRequest


class SpeechProvider(ABC):
    sample_rate: int = 16000

    @abstractmethod
    async def synthesize(self, request: TTSRequest) -> bytes:
        """Returns raw 16-bit mono PCM for the requested text."""
        pass
