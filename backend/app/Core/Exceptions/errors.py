from typing import Any, Dict, Optional


class RelayError(Exception):
    """Base error for the edge relays. Renders its own JSON envelope."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message}


# --- Email relay ---


class EmailRelayError(RelayError):
    def to_payload(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message}


class EmailValidationError(EmailRelayError):
    status_code = 400


class EmailDeliveryError(EmailRelayError):
    status_code = 502


# --- TTS relay ---


class SpeechRelayError(RelayError):
    pass


class SpeechValidationError(SpeechRelayError):
    status_code = 400


class SpeechUpstreamError(SpeechRelayError):
    status_code = 502


class SpeechTimeoutError(SpeechRelayError):
    status_code = 504


# --- Forms ---


class FormValidationError(Exception):
    """Raised when a submitted form fails its field validators."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("Form validation failed")
        self.errors = errors


class AuthenticationError(Exception):
    pass
