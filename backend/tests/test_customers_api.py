NEW_CUSTOMER = {
    "nickname": "Max",
    "real_name": "Max Li",
    "phone": "13700137000",
    "email": "max@example.com",
    "password": "hunter22",
    "confirm_password": "hunter22",
}


def test_register_customer(client):
    response = client.post("/customers", json=NEW_CUSTOMER)

    assert response.status_code == 201
    body = response.json()
    assert body["customer"]["id"] == 3
    assert body["customer"]["name"] == "Max"
    assert body["customer"]["avatar"].startswith("https://ui-avatars.com/api/?name=Max")
    assert "password_hash" not in body["customer"]
    assert {link["rel"] for link in body["_links"]} == {"self", "check_in", "profile"}


def test_register_reports_field_errors(client):
    response = client.post("/customers", json={**NEW_CUSTOMER, "phone": "123", "confirm_password": "x"})

    assert response.status_code == 422
    assert response.json() == {
        "errors": {
            "phone": "Invalid phone number format",
            "confirm_password": "Passwords do not match",
        }
    }


def test_register_rejects_taken_phone(client):
    response = client.post("/customers", json={**NEW_CUSTOMER, "phone": "13800138000"})

    assert response.status_code == 422
    assert response.json()["errors"] == {"phone": "This phone number is already registered"}


def test_login(client):
    response = client.post("/customers/login", json={"phone": "13800138000", "password": "secret1"})

    assert response.status_code == 200
    assert response.json()["customer"]["name"] == "Tom"


def test_login_with_wrong_password(client):
    response = client.post("/customers/login", json={"phone": "13800138000", "password": "wrong"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "unauthorized"


def test_get_customer(client):
    assert client.get("/customers/1").json()["customer"]["phone"] == "13800138000"

    missing = client.get("/customers/99")
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "http_404"


def test_update_profile(client):
    response = client.put(
        "/customers/1/profile",
        json={"name": "Tommy", "email": "tommy@example.com", "phone": "13800138000"},
    )

    assert response.status_code == 200
    customer = response.json()["customer"]
    assert customer["name"] == "Tommy"
    assert customer["email"] == "tommy@example.com"
    assert customer["real_name"] == "Tom Zhang"


def test_phone_cannot_change(client):
    response = client.put("/customers/1/profile", json={"phone": "13911112222"})

    assert response.status_code == 422
    assert "phone" in response.json()["errors"]
    assert client.get("/customers/1").json()["customer"]["phone"] == "13800138000"


def test_profile_rejects_bad_email(client):
    response = client.put("/customers/1/profile", json={"email": "nope"})

    assert response.status_code == 422
    assert response.json()["errors"] == {"email": "Invalid email address"}


def test_profile_of_unknown_customer(client):
    assert client.put("/customers/99/profile", json={"name": "Ghost"}).status_code == 404


def test_change_password(client):
    mismatch = client.put(
        "/customers/2/password", json={"new_password": "newpass1", "confirm_password": "newpass2"}
    )
    assert mismatch.status_code == 422

    response = client.put(
        "/customers/2/password", json={"new_password": "newpass1", "confirm_password": "newpass1"}
    )
    assert response.status_code == 200

    login = client.post("/customers/login", json={"phone": "13900139000", "password": "newpass1"})
    assert login.status_code == 200


def test_customer_appointment_list(client):
    response = client.get("/customers/Tom/appointments")

    assert [a["id"] for a in response.json()] == [4, 1]

    cancelled = client.get("/customers/Amy/appointments", params={"status": "cancelled"})
    assert [a["id"] for a in cancelled.json()] == [5]


def test_check_in_view_defaults_to_latest_appointment(client):
    body = client.get("/customers/Tom/check-in").json()

    assert body["appointment"]["id"] == 4
    assert body["queue"] == {"position": 1, "wait_time": 0}
    rels = {link["rel"]: link for link in body["_links"]}
    assert rels["check_in"]["href"].endswith("/appointments/4/check-in")
    assert rels["cancel"]["method"] == "POST"


def test_check_in_view_for_selected_appointment(client):
    body = client.get("/customers/Tom/check-in", params={"appointment_id": 1}).json()

    assert body["appointment"]["id"] == 1
    assert body["queue"] == {"position": 2, "wait_time": 20}


def test_check_in_view_without_appointments(client):
    body = client.get("/customers/Nobody/check-in").json()

    assert body["appointment"] is None
    assert body["appointments"] == []
    assert body["_links"] == []
