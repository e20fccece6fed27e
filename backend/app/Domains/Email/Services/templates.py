from html import escape
from typing import Literal, Tuple

BRAND = "BarberBook Pro"

Purpose = Literal["reset_password", "register"]

_PURPOSE_TITLES = {
    "reset_password": "Password reset",
    "register": "Account registration",
}


def _wrap(body: str) -> str:
    return f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
      <div style="text-align: center; margin-bottom: 30px;">
        <h1 style="color: #007AFF; margin: 0;">{BRAND}</h1>
        <p style="color: #666; margin: 10px 0 0 0;">Barbershop booking and management</p>
      </div>
      <div style="background: #f8f9fa; border-radius: 12px; padding: 30px; margin-bottom: 20px;">
        {body}
      </div>
      <div style="text-align: center; color: #999; font-size: 12px;">
        <p>This message was sent automatically by {BRAND}. Please do not reply.</p>
      </div>
    </div>
    """


def verification_code_email(code: str, purpose: Purpose = "reset_password") -> Tuple[str, str]:
    """Returns (subject, html) for a one-time verification code."""
    title = _PURPOSE_TITLES[purpose]
    subject = f"{BRAND} - {title} verification code"
    body = f"""
        <h2 style="color: #333; margin: 0 0 20px 0; font-size: 18px;">{title}</h2>
        <p style="color: #666; margin: 0 0 20px 0; line-height: 1.6;">
          Enter the following code to continue:
        </p>
        <div style="background: #007AFF; color: white; font-size: 32px; font-weight: bold; text-align: center; padding: 20px; border-radius: 8px; letter-spacing: 8px;">
          {escape(code)}
        </div>
        <p style="color: #999; margin: 20px 0 0 0; font-size: 12px;">
          The code is valid for 10 minutes. Do not share it with anyone.
        </p>
    """
    return subject, _wrap(body)


def password_reset_success_email() -> Tuple[str, str]:
    subject = f"{BRAND} - Password reset successful"
    body = """
        <h2 style="color: #333; margin: 0 0 20px 0; font-size: 18px;">Password reset successful</h2>
        <p style="color: #666; margin: 0 0 20px 0; line-height: 1.6;">
          Your password has been changed. If this was not you, contact the shop administrator immediately.
        </p>
    """
    return subject, _wrap(body)
