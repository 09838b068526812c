from datetime import timedelta

import pytest

from bookstore.utils.token import create_access_token, decode_access_token


def register_payload(**overrides):
    payload = {
        "username": "  NewReader ",
        "email": "New.Reader@Example.com",
        "password": "secret123",
        "confirm_password": "secret123",
        "first_name": "New",
        "last_name": "Reader",
    }
    payload.update(overrides)
    return payload


def test_register_creates_user_and_returns_token(client):
    response = client.post("/api/auth/register", json=register_payload())

    assert response.status_code == 201
    body = response.json()
    assert body["token"]
    assert body["user"]["username"] == "newreader"
    assert body["user"]["email"] == "new.reader@example.com"
    assert body["user"]["role"] == "user"
    assert body["user"]["full_name"] == "New Reader"

    payload = decode_access_token(body["token"])
    assert payload["user_id"] == body["user"]["id"]


def test_register_rejects_taken_email_or_username(client, customer):
    response = client.post(
        "/api/auth/register",
        json=register_payload(email=customer.email),
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "User with this email or username already exists"

    response = client.post(
        "/api/auth/register",
        json=register_payload(username=customer.username),
    )
    assert response.status_code == 400


def test_register_validation_errors_are_400(client):
    response = client.post(
        "/api/auth/register",
        json=register_payload(confirm_password="different"),
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Validation failed"

    response = client.post(
        "/api/auth/register",
        json=register_payload(password="123", confirm_password="123"),
    )
    assert response.status_code == 400

    response = client.post(
        "/api/auth/register",
        json=register_payload(email="not-an-email"),
    )
    assert response.status_code == 400


def test_login(client, customer):
    response = client.post(
        "/api/auth/login",
        json={"email": "ALICE@example.com", "password": "secret123"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Authentication successful"
    assert body["user"]["id"] == customer.id
    assert body["token_type"] == "bearer"


def test_login_rejects_bad_credentials(client, customer):
    response = client.post(
        "/api/auth/login",
        json={"email": customer.email, "password": "wrong-password"},
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"

    response = client.post(
        "/api/auth/login",
        json={"email": "nobody@example.com", "password": "secret123"},
    )
    assert response.status_code == 401


def test_me_requires_valid_token(client, customer, customer_headers):
    response = client.get("/api/auth/me", headers=customer_headers)
    assert response.status_code == 200
    assert response.json()["username"] == "alice"

    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"

    response = client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401


def test_expired_token_is_rejected(client, customer):
    token = create_access_token({"user_id": customer.id}, expires_delta=timedelta(minutes=-1))
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


@pytest.mark.parametrize("claims", [{}, {"user_id": "abc"}, {"user_id": None}, {"user_id": [1]}])
def test_token_with_bad_user_id_is_rejected(client, claims):
    token = create_access_token(claims)
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token payload"
    assert response.headers["www-authenticate"] == "Bearer"


def test_token_for_deleted_user_is_rejected(client):
    token = create_access_token({"user_id": 9999})
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "User not found"


def test_logout(client):
    assert client.post("/api/auth/logout").json() == {"message": "Logout successful"}
