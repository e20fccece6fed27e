import asyncio
import base64
import json
from typing import Any, Callable, Dict, List, Optional

import websockets
from loguru import logger

from app.Core.Exceptions.errors import SpeechRelayError, SpeechTimeoutError, SpeechUpstreamError
from app.Domains.Speech.Interfaces.speech_provider import SpeechProvider
from app.Domains.Speech.Models.tts import TTSRequest
from app.Infrastructure.Speech.xfyun_auth import build_auth_url

FRAME_STATUS_LAST = 2


class XfyunVendorError(SpeechRelayError):
    """A reply frame carried a non-zero vendor code."""

    status_code = 502

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code


class XfyunTTSProvider(SpeechProvider):
    """
    Streams synthesis results from the Xfyun online TTS websocket API.

    One socket per request: a single request frame is sent, then audio
    frames are collected until the vendor flags the last one. The whole
    exchange is bounded by `timeout`; on expiry the socket is closed.
    """

    def __init__(
        self,
        app_id: str,
        api_key: str,
        api_secret: str,
        url: str = "wss://tts-api.xfyun.cn/v2/tts",
        timeout: float = 15.0,
        sample_rate: int = 16000,
        connect: Callable[..., Any] = websockets.connect,
    ):
        self.app_id = app_id
        self.api_key = api_key
        self.api_secret = api_secret
        self.url = url
        self.timeout = timeout
        self.sample_rate = sample_rate
        self._connect = connect

    def build_request_frame(self, request: TTSRequest) -> Dict[str, Any]:
        text_b64 = base64.b64encode(request.text.encode("utf-8")).decode("ascii")
        return {
            "common": {"app_id": self.app_id},
            "business": {
                "aue": "raw",
                "auf": f"audio/L16;rate={self.sample_rate}",
                "vcn": request.voice,
                "speed": request.speed,
                "volume": request.volume,
                "pitch": request.pitch,
                "bgs": 0,
                "tte": "UTF8",
                "ent": "intp65",
            },
            "data": {"status": FRAME_STATUS_LAST, "text": text_b64},
        }

    async def synthesize(self, request: TTSRequest) -> bytes:
        url = build_auth_url(self.url, self.api_key, self.api_secret)
        try:
            return await asyncio.wait_for(self._stream(url, request), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Xfyun TTS: no final frame within {self.timeout}s, aborting")
            raise SpeechTimeoutError("Xfyun timeout")
        except (websockets.exceptions.WebSocketException, OSError) as e:
            logger.error(f"Xfyun TTS: websocket error: {e}")
            raise SpeechUpstreamError("WS Error")

    async def _stream(self, url: str, request: TTSRequest) -> bytes:
        chunks: List[bytes] = []
        async with self._connect(url) as ws:
            logger.debug("Xfyun WS: connected, sending request")
            await ws.send(json.dumps(self.build_request_frame(request)))

            async for message in ws:
                frame = json.loads(message)
                code = frame.get("code")
                if code != 0:
                    raise XfyunVendorError(code, frame.get("message") or f"Xfyun error {code}")

                data: Optional[Dict[str, Any]] = frame.get("data")
                if not data:
                    continue
                if data.get("audio"):
                    chunks.append(base64.b64decode(data["audio"]))
                if data.get("status") == FRAME_STATUS_LAST:
                    pcm = b"".join(chunks)
                    logger.info(f"Xfyun TTS: received {len(pcm)} bytes in {len(chunks)} frames")
                    return pcm

        raise SpeechUpstreamError("Xfyun closed the connection before synthesis finished")
