import json
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from loguru import logger

from app.Core.Exceptions.errors import EmailRelayError, RelayError, SpeechRelayError
from app.dependencies import get_email_relay_service, get_tts_relay_service
from app.Domains.Email.Models.email import EmailSendResult
from app.Domains.Email.Services.email_relay_service import EmailRelayService
from app.Domains.Speech.Models.tts import TTSResponse
from app.Domains.Speech.Services.tts_relay_service import TTSRelayService
from app.Http.cors import CORS_HEADERS, preflight_response
from app.Http.DTOs.error_schemas import EmailRelayErrorResponse, RelayErrorResponse

router = APIRouter(prefix="/functions", tags=["Edge Functions"])


async def _read_json(request: Request, default: Any = None) -> Any:
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return default


@router.options("/send-email", include_in_schema=False)
async def send_email_preflight():
    return preflight_response()


@router.post(
    "/send-email",
    response_model=EmailSendResult,
    summary="Relay an email",
    description="Forwards a message to Resend when an API key is configured, otherwise to SMTP.",
    responses={
        400: {"model": EmailRelayErrorResponse},
        500: {"model": EmailRelayErrorResponse},
        502: {"model": EmailRelayErrorResponse},
    },
)
async def send_email(request: Request, service: EmailRelayService = Depends(get_email_relay_service)):
    payload = await _read_json(request)
    try:
        result = await service.relay(payload)
    except RelayError:
        raise
    except Exception as e:
        logger.error(f"Send email error: {e}")
        raise EmailRelayError(str(e))

    return JSONResponse(result.model_dump(exclude_none=True), headers=CORS_HEADERS)


@router.options("/xfyun-tts", include_in_schema=False)
async def tts_preflight():
    return preflight_response()


@router.post(
    "/xfyun-tts",
    response_model=TTSResponse,
    summary="Synthesize speech",
    description="Synthesizes text with the Xfyun TTS API and returns a base64 WAV. "
    "A body of `{ping: true}` is answered without contacting the vendor.",
    responses={
        400: {"model": RelayErrorResponse},
        500: {"model": RelayErrorResponse},
        502: {"model": RelayErrorResponse},
        504: {"model": RelayErrorResponse},
    },
)
async def synthesize_speech(request: Request, service: TTSRelayService = Depends(get_tts_relay_service)):
    payload = await _read_json(request, default={})
    if not isinstance(payload, dict):
        payload = {}

    try:
        result = await service.handle(payload)
    except RelayError:
        raise
    except Exception as e:
        logger.error(f"TTS relay error: {e}")
        raise SpeechRelayError(str(e))

    return JSONResponse(result, headers=CORS_HEADERS)
