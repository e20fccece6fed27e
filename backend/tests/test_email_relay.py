import aiohttp
import aiosmtplib
import pytest

from app.Core.Exceptions.errors import EmailDeliveryError, EmailValidationError
from app.Domains.Email.Models.email import EmailRequest
from app.Domains.Email.Services.email_relay_service import EmailRelayService
from app.Infrastructure.Email.resend_sender import ResendEmailSender
from app.Infrastructure.Email.smtp_sender import SmtpEmailSender, build_message
from conftest import SMTP_CONFIG, FakeSmtpSend


def payload(**overrides):
    body = {
        "to": "tom@example.com",
        "subject": "Your code",
        "html": "<p>123456</p>",
        "text": "123456",
        "config": dict(SMTP_CONFIG),
    }
    body.update(overrides)
    return body


class FakeResponse:
    def __init__(self, status, body):
        self.status = status
        self.body = body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def json(self):
        return self.body

    async def text(self):
        return str(self.body)


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.posts = []

    def post(self, url, json=None, headers=None):
        self.posts.append({"url": url, "json": json, "headers": headers})
        if self.error is not None:
            raise self.error
        return self.response


def resend(session):
    return ResendEmailSender(api_key="re_test", session=session)


@pytest.mark.parametrize("missing", ["to", "subject", "html", "config"])
def test_missing_required_field(missing):
    body = payload()
    del body[missing]

    with pytest.raises(EmailValidationError) as excinfo:
        EmailRelayService.parse_request(body)

    assert excinfo.value.message == "Missing required parameters"
    assert excinfo.value.to_payload() == {"success": False, "error": "Missing required parameters"}


@pytest.mark.parametrize("missing", ["smtpHost", "smtpUser", "smtpPassword"])
def test_incomplete_smtp_config(missing):
    config = dict(SMTP_CONFIG)
    del config[missing]

    with pytest.raises(EmailValidationError) as excinfo:
        EmailRelayService.parse_request(payload(config=config))

    assert excinfo.value.message == "Invalid email configuration"


def test_non_object_payload_is_rejected():
    with pytest.raises(EmailValidationError):
        EmailRelayService.parse_request(None)


def test_config_defaults():
    config = {"smtpHost": "smtp.example.com", "smtpUser": "u@example.com", "smtpPassword": "pw"}

    request = EmailRelayService.parse_request(payload(config=config))

    assert request.config.smtp_port == 465
    assert request.config.use_ssl is True


async def test_smtp_is_used_without_resend(smtp_send):
    service = EmailRelayService(SmtpEmailSender(send=smtp_send))

    result = await service.relay(payload())

    assert result.success is True
    assert result.id is None
    message, kwargs = smtp_send.calls[0]
    assert kwargs["hostname"] == "smtp.example.com"
    assert kwargs["port"] == 465
    assert kwargs["username"] == "shop@example.com"
    assert kwargs["use_tls"] is True
    assert message["To"] == "tom@example.com"


async def test_resend_is_preferred_when_configured(smtp_send):
    session = FakeSession(FakeResponse(200, {"id": "msg_123"}))
    service = EmailRelayService(SmtpEmailSender(send=smtp_send), resend(session))

    result = await service.relay(payload())

    assert result.id == "msg_123"
    assert smtp_send.calls == []
    post = session.posts[0]
    assert post["headers"]["Authorization"] == "Bearer re_test"
    assert post["json"]["from"] == "BarberBook Pro <onboarding@resend.dev>"
    assert post["json"]["to"] == "tom@example.com"
    assert service.provider == "resend"


async def test_resend_rejection_is_a_delivery_error():
    session = FakeSession(FakeResponse(422, {"message": "invalid from"}))

    with pytest.raises(EmailDeliveryError) as excinfo:
        await resend(session).send(EmailRequest.model_validate(payload()))

    assert excinfo.value.message.startswith("Resend API error:")
    assert excinfo.value.status_code == 502


async def test_resend_network_failure_is_a_delivery_error():
    session = FakeSession(error=aiohttp.ClientConnectionError("down"))

    with pytest.raises(EmailDeliveryError):
        await resend(session).send(EmailRequest.model_validate(payload()))


async def test_smtp_failure_is_a_delivery_error():
    sender = SmtpEmailSender(send=FakeSmtpSend(aiosmtplib.SMTPAuthenticationError(535, "bad credentials")))

    with pytest.raises(EmailDeliveryError) as excinfo:
        await sender.send(EmailRequest.model_validate(payload()))

    assert excinfo.value.message.startswith("SMTP sending failed:")


def test_message_has_text_and_html_parts():
    message = build_message(EmailRequest.model_validate(payload()))

    assert message["From"] == "BarberBook Pro <shop@example.com>"
    assert message.get_body(("plain",)).get_content().strip() == "123456"
    assert message.get_body(("html",)).get_content().strip() == "<p>123456</p>"


def test_route_sends_email(client, smtp_send):
    response = client.post("/functions/send-email", json=payload())

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert len(smtp_send.calls) == 1


def test_route_reports_missing_fields(client):
    response = client.post("/functions/send-email", json={"to": "tom@example.com"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Missing required parameters"}
    assert response.headers["access-control-allow-origin"] == "*"


def test_route_reports_delivery_failure(client, smtp_send):
    smtp_send.error = aiosmtplib.SMTPException("connection lost")

    response = client.post("/functions/send-email", json=payload())

    assert response.status_code == 502
    assert response.json()["success"] is False
    assert response.json()["error"].startswith("SMTP sending failed:")


def test_route_preflight(client):
    response = client.options("/functions/send-email")

    assert response.status_code == 200
    assert response.text == "ok"


def test_empty_config_object_is_an_invalid_configuration():
    with pytest.raises(EmailValidationError) as excinfo:
        EmailRelayService.parse_request(payload(config={}))

    assert excinfo.value.message == "Invalid email configuration"


def test_route_reports_empty_config(client):
    response = client.post("/functions/send-email", json=payload(config={}))

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Invalid email configuration"}
