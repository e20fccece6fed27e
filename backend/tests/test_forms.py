from app.Domains.Customer.Forms.form import (
    FormState,
    password_change_form,
    profile_form,
    register_form,
    required,
    validate_phone,
)

VALID_REGISTRATION = {
    "nickname": "Tom",
    "phone": "13800138000",
    "password": "secret1",
    "confirm_password": "secret1",
}


def test_empty_registration_reports_every_required_field():
    form = register_form()

    assert form.validate() is False
    assert form.errors == {
        "nickname": "Nickname is required",
        "phone": "Phone number is required",
        "password": "Password is required",
        "confirm_password": "Please confirm the password",
    }


def test_valid_registration_passes():
    form = register_form(VALID_REGISTRATION)

    assert form.validate() is True
    assert form.errors == {}


def test_phone_format():
    assert validate_phone("13800138000", {}) is None
    assert validate_phone("12800138000", {}) == "Invalid phone number format"
    assert validate_phone("1380013800", {}) == "Invalid phone number format"
    assert validate_phone("138001380001", {}) == "Invalid phone number format"


def test_short_password_and_mismatch():
    form = register_form({**VALID_REGISTRATION, "password": "12345", "confirm_password": "123456"})

    form.validate()

    assert form.errors["password"] == "Password must be at least 6 characters"
    assert form.errors["confirm_password"] == "Passwords do not match"


def test_error_clears_once_value_is_corrected():
    form = register_form({**VALID_REGISTRATION, "phone": "123"})
    form.validate()
    assert "phone" in form.errors

    form.set_value("phone", "13912345678")

    assert "phone" not in form.errors


def test_confirmation_is_checked_against_current_values():
    form = password_change_form()
    form.set_value("new_password", "secret1")

    form.set_value("confirm_password", "secret1")

    assert form.errors == {}


def test_errors_are_visible_only_for_touched_fields():
    form = register_form()
    form.set_value("phone", "abc")
    assert form.errors == {"phone": "Invalid phone number format"}
    assert form.visible_errors() == {}

    form.blur("phone")

    assert form.visible_errors() == {"phone": "Invalid phone number format"}


def test_validate_touches_every_field():
    form = register_form()

    form.validate()

    assert all(form.touched[key] for key in ("nickname", "real_name", "phone", "email", "password"))


def test_reset_restores_initial_state():
    form = FormState({"name": ""}, {"name": required("Name is required")})
    form.set_value("name", "")
    form.blur("name")

    form.reset()

    assert form.values == {"name": ""}
    assert form.errors == {}
    assert form.touched == {}


def test_profile_email_is_optional_but_checked():
    assert profile_form({"name": "Tom", "email": ""}).validate() is True

    form = profile_form({"name": "Tom", "email": "not-an-email"})

    assert form.validate() is False
    assert form.errors == {"email": "Invalid email address"}
