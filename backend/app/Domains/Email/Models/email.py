from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class EmailConfig(BaseModel):
    """SMTP settings supplied by the caller alongside each message."""

    model_config = ConfigDict(populate_by_name=True)

    smtp_host: str = Field(alias="smtpHost")
    smtp_port: int = Field(default=465, alias="smtpPort")
    smtp_user: str = Field(alias="smtpUser")
    smtp_password: str = Field(alias="smtpPassword")
    from_email: Optional[str] = Field(default=None, alias="fromEmail")
    from_name: Optional[str] = Field(default=None, alias="fromName")
    use_ssl: bool = Field(default=True, alias="useSSL")
    enabled: bool = True


class EmailRequest(BaseModel):
    to: str
    subject: str
    html: str
    text: Optional[str] = None
    config: EmailConfig


class EmailSendResult(BaseModel):
    success: bool = True
    id: Optional[str] = None
