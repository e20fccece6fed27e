"""
Field-level form validation with touched/error tracking.

`FormState` holds a form's values plus per-field `errors` and `touched`
flags. Validators are plain callables `(value, values) -> message | None`;
a `None` result means the field is valid.
"""

import re
from typing import Any, Callable, Dict, Optional

Validator = Callable[[Any, Dict[str, Any]], Optional[str]]

PHONE_PATTERN = re.compile(r"1[3-9]\d{9}")
EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")
MIN_PASSWORD_LENGTH = 6


class FormState:
    def __init__(self, initial_values: Dict[str, Any], validators: Optional[Dict[str, Validator]] = None):
        self.initial_values = dict(initial_values)
        self.validators = validators or {}
        self.values: Dict[str, Any] = dict(initial_values)
        self.errors: Dict[str, str] = {}
        self.touched: Dict[str, bool] = {}

    def _check(self, key: str):
        validator = self.validators.get(key)
        if validator is None:
            return
        error = validator(self.values.get(key), self.values)
        if error:
            self.errors[key] = error
        else:
            self.errors.pop(key, None)

    def set_value(self, key: str, value: Any):
        self.values[key] = value
        self._check(key)

    def set_values(self, **values: Any):
        """Merges values without running validators."""
        self.values.update(values)

    def blur(self, key: str):
        self.touched[key] = True
        self._check(key)

    def validate(self) -> bool:
        errors = {}
        for key, validator in self.validators.items():
            error = validator(self.values.get(key), self.values)
            if error:
                errors[key] = error

        self.errors = errors
        self.touched = {key: True for key in {**self.values, **self.validators}}
        return not errors

    def reset(self):
        self.values = dict(self.initial_values)
        self.errors = {}
        self.touched = {}

    def visible_errors(self) -> Dict[str, str]:
        """Errors for fields the user has already touched."""
        return {key: error for key, error in self.errors.items() if self.touched.get(key)}


# --- Validators ---


def required(message: str) -> Validator:
    def validator(value, values):
        return None if value else message

    return validator


def validate_phone(value, values) -> Optional[str]:
    if not value:
        return "Phone number is required"
    if not PHONE_PATTERN.fullmatch(str(value)):
        return "Invalid phone number format"
    return None


def validate_password(value, values) -> Optional[str]:
    if not value:
        return "Password is required"
    if len(value) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    return None


def confirms(field: str) -> Validator:
    def validator(value, values):
        if not value:
            return "Please confirm the password"
        if value != values.get(field):
            return "Passwords do not match"
        return None

    return validator


def validate_optional_email(value, values) -> Optional[str]:
    if value and not EMAIL_PATTERN.fullmatch(value):
        return "Invalid email address"
    return None


REGISTER_VALIDATORS: Dict[str, Validator] = {
    "nickname": required("Nickname is required"),
    "phone": validate_phone,
    "password": validate_password,
    "confirm_password": confirms("password"),
}

PASSWORD_CHANGE_VALIDATORS: Dict[str, Validator] = {
    "new_password": validate_password,
    "confirm_password": confirms("new_password"),
}

PROFILE_VALIDATORS: Dict[str, Validator] = {
    "name": required("Name is required"),
    "email": validate_optional_email,
}


def register_form(values: Optional[Dict[str, Any]] = None) -> FormState:
    initial = {
        "nickname": "",
        "real_name": "",
        "phone": "",
        "email": "",
        "password": "",
        "confirm_password": "",
    }
    form = FormState(initial, REGISTER_VALIDATORS)
    if values:
        form.set_values(**values)
    return form


def password_change_form(values: Optional[Dict[str, Any]] = None) -> FormState:
    form = FormState({"new_password": "", "confirm_password": ""}, PASSWORD_CHANGE_VALIDATORS)
    if values:
        form.set_values(**values)
    return form


def profile_form(values: Optional[Dict[str, Any]] = None) -> FormState:
    form = FormState({"name": "", "real_name": "", "email": "", "avatar": ""}, PROFILE_VALIDATORS)
    if values:
        form.set_values(**values)
    return form
