import base64
from typing import Any, Dict, Optional

from pydantic import ValidationError

from app.Core.Exceptions.errors import SpeechRelayError, SpeechValidationError
from app.Domains.Speech.Interfaces.speech_provider import SpeechProvider
from app.Domains.Speech.Models.tts import TTSRequest, TTSResponse
from app.Domains.Speech.Services.wav import pcm_to_wav


class TTSRelayService:
    def __init__(self, provider: Optional[SpeechProvider]):
        self.provider = provider

    @staticmethod
    def is_ping(payload: Dict[str, Any]) -> bool:
        return bool(payload.get("ping"))

    @staticmethod
    def parse_request(payload: Dict[str, Any]) -> TTSRequest:
        if not payload.get("text"):
            raise SpeechValidationError("Missing text")
        try:
            return TTSRequest.model_validate(payload)
        except ValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            raise SpeechValidationError(f"Invalid parameters: {fields}")

    async def handle(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Answers a health ping directly, otherwise synthesizes and wraps the audio."""
        if self.is_ping(payload):
            return {"status": "ok"}

        request = self.parse_request(payload)
        if self.provider is None:
            raise SpeechRelayError("TTS vendor credentials are not configured")

        pcm = await self.provider.synthesize(request)
        wav = pcm_to_wav(pcm, self.provider.sample_rate)
        return TTSResponse(audio=base64.b64encode(wav).decode("ascii")).model_dump()
