from fastapi import APIRouter, Depends

from app.dependencies import get_notification_service
from app.Domains.Email.Services.notification_service import EmailNotificationService
from app.Http.DTOs.schemas import (
    NotificationResponse,
    PasswordResetNoticeRequest,
    VerificationCodeRequest,
)

router = APIRouter(prefix="/emails", tags=["Notifications"])


@router.post("/verification-code", response_model=NotificationResponse)
async def send_verification_code(
    body: VerificationCodeRequest,
    service: EmailNotificationService = Depends(get_notification_service),
):
    """
    Emails a one-time code for registration or password reset.
    `sent` is false when email is disabled or delivery failed.
    """
    sent = await service.send_verification_code(body.to, body.code, body.purpose)
    return NotificationResponse(sent=sent)


@router.post("/password-reset-success", response_model=NotificationResponse)
async def send_password_reset_success(
    body: PasswordResetNoticeRequest,
    service: EmailNotificationService = Depends(get_notification_service),
):
    sent = await service.send_password_reset_success(body.to)
    return NotificationResponse(sent=sent)
