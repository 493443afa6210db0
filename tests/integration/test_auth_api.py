"""
Integration tests for /api/auth
"""
from httpx import AsyncClient

from tests.factories import TEST_PASSWORD


async def test_register_user(client: AsyncClient, registration_data):
    response = await client.post("/api/auth/register", json=registration_data)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Your account has been created successfully."
    assert body["user"]["email"] == registration_data["email"]
    assert body["user"]["fullName"] == registration_data["fullName"]
    assert body["user"]["role"] == "student"
    assert "password" not in body["user"]
    assert "hashedPassword" not in body["user"]


async def test_register_duplicate_email(client: AsyncClient, registration_data):
    await client.post("/api/auth/register", json=registration_data)

    response = await client.post("/api/auth/register", json=registration_data)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "An account with this email already exists."
    assert body["error"]["code"] == "CONFLICT"


async def test_register_missing_fields(client: AsyncClient):
    response = await client.post("/api/auth/register", json={"email": "x@y.z"})

    assert response.status_code == 400
    assert response.json()["message"] == "Please fill in all required fields."


async def test_register_without_body(client: AsyncClient):
    response = await client.post("/api/auth/register")

    assert response.status_code == 400
    assert response.json()["message"] == "Please fill in all required fields."


async def test_register_password_mismatch(client: AsyncClient, registration_data):
    registration_data["confirmPassword"] = "something-else"

    response = await client.post("/api/auth/register", json=registration_data)

    assert response.status_code == 400
    assert response.json()["error"]["details"]["field"] == "confirmPassword"

    login = await client.post(
        "/api/auth/login",
        json={"email": registration_data["email"], "password": registration_data["password"]}
    )
    assert login.status_code == 401


async def test_register_then_login(client: AsyncClient, registration_data):
    registered = await client.post("/api/auth/register", json=registration_data)

    response = await client.post(
        "/api/auth/login",
        json={"email": registration_data["email"], "password": registration_data["password"]}
    )

    assert response.status_code == 200
    assert response.json()["user"] == registered.json()["user"]


async def test_login_success(client: AsyncClient, test_account):
    response = await client.post(
        "/api/auth/login",
        json={"email": test_account.email, "password": TEST_PASSWORD}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "You have logged in successfully."
    assert body["user"] == {
        "id": test_account.id,
        "fullName": test_account.full_name,
        "email": test_account.email,
        "role": "student",
    }


async def test_login_failures_are_indistinguishable(client: AsyncClient, test_account):
    wrong_password = await client.post(
        "/api/auth/login",
        json={"email": test_account.email, "password": "wrongpassword"}
    )
    unknown_email = await client.post(
        "/api/auth/login",
        json={"email": "nobody@nowhere.test", "password": TEST_PASSWORD}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["message"] == "Incorrect email or password."


async def test_login_missing_password(client: AsyncClient):
    response = await client.post("/api/auth/login", json={"email": "a@b.c"})

    assert response.status_code == 400
    assert response.json()["message"] == "Please provide both email and password."


async def test_auth_responses_are_not_cached(client: AsyncClient, test_account):
    response = await client.post(
        "/api/auth/login",
        json={"email": test_account.email, "password": TEST_PASSWORD}
    )

    assert response.headers["Cache-Control"] == "no-store"
