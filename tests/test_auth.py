from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt
from sqlalchemy import select

from app.auth.models import User
from app.config import get_settings
from app.main import app


def decode(token: str) -> dict:
    return jwt.decode(token, "test-secret", algorithms=["HS256"])


async def load_user(database, email: str) -> User:
    async with database.session_factory() as session:
        result = await session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()


async def test_signup_issues_token(client, database):
    response = await client.post(
        "/auth/signup",
        json={"email": "Ghalib@Example.com", "password": "Hazaron-1797", "name": "Ghalib"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User created"
    assert body["user"] == {"email": "ghalib@example.com", "name": "Ghalib"}

    payload = decode(body["token"])
    assert payload["email"] == "ghalib@example.com"
    assert payload["type"] == "access"

    user = await load_user(database, "ghalib@example.com")
    assert payload["sub"] == user.id
    assert user.hashed_password != "Hazaron-1797"


async def test_signup_name_defaults_to_email(client, register):
    body = await register(email="faiz@example.com")

    assert body["user"]["name"] == "faiz@example.com"


@pytest.mark.parametrize(
    "body",
    [
        {"email": "ghalib@example.com"},
        {"password": "Hazaron-1797"},
        {"email": "", "password": "Hazaron-1797"},
        {"email": "ghalib@example.com", "password": ""},
        {"email": "not-an-email", "password": "Hazaron-1797"},
    ],
)
async def test_signup_validation(client, body):
    response = await client.post("/auth/signup", json=body)

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


async def test_signup_duplicate_email_is_conflict(client, database, register):
    await register(email="iqbal@example.com", password="Shikwa-1909", name="Iqbal")
    before = await load_user(database, "iqbal@example.com")

    response = await client.post(
        "/auth/signup",
        json={"email": "iqbal@example.com", "password": "Other-pass-1", "name": "Impostor"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "User already exists", "code": "CONFLICT"}

    after = await load_user(database, "iqbal@example.com")
    assert after.hashed_password == before.hashed_password
    assert after.name == "Iqbal"
    assert after.updated_at == before.updated_at


async def test_login_success(client, register):
    await register(email="mir@example.com", password="Dil-Ki-Basti-1")

    response = await client.post(
        "/auth/login",
        json={"email": "mir@example.com", "password": "Dil-Ki-Basti-1"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert decode(body["token"])["email"] == "mir@example.com"


async def test_login_wrong_password(client, register):
    await register(email="mir@example.com", password="Dil-Ki-Basti-1")

    response = await client.post(
        "/auth/login",
        json={"email": "mir@example.com", "password": "wrong"},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "UNAUTHORIZED"


async def test_login_unknown_email(client):
    response = await client.post(
        "/auth/login",
        json={"email": "nobody@example.com", "password": "whatever"},
    )

    assert response.status_code == 404
    assert response.json() == {"error": "User not found", "code": "NOT_FOUND"}


async def test_login_missing_fields(client):
    response = await client.post("/auth/login", json={"email": "mir@example.com"})

    assert response.status_code == 400


async def test_signup_and_login_tokens_share_expiry_window(client, register):
    signup_body = await register(email="zauq@example.com", password="Laayi-Hayat-1")
    login_body = (
        await client.post(
            "/auth/login",
            json={"email": "zauq@example.com", "password": "Laayi-Hayat-1"},
        )
    ).json()

    now = datetime.now(timezone.utc).timestamp()
    for token in (signup_body["token"], login_body["token"]):
        lifetime = decode(token)["exp"] - now
        assert timedelta(days=7) - timedelta(minutes=1) < timedelta(seconds=lifetime) <= timedelta(days=7)


async def test_expiry_is_configurable(client, settings, register):
    app.dependency_overrides[get_settings] = lambda: settings.model_copy(update={"jwt_expire_days": 2})

    body = await register()

    lifetime = decode(body["token"])["exp"] - datetime.now(timezone.utc).timestamp()
    assert timedelta(seconds=lifetime) <= timedelta(days=2)


async def test_signup_without_secret_is_configuration_error(client, database, settings):
    app.dependency_overrides[get_settings] = lambda: settings.model_copy(update={"jwt_secret_key": None})

    response = await client.post(
        "/auth/signup",
        json={"email": "ghalib@example.com", "password": "Hazaron-1797"},
    )

    assert response.status_code == 500
    assert response.json()["code"] == "CONFIGURATION_ERROR"
    assert await load_user(database, "ghalib@example.com") is None


async def test_me(client, register):
    body = await register(name="Ghalib")

    response = await client.get("/auth/me", headers={"Authorization": f"Bearer {body['token']}"})

    assert response.status_code == 200
    me = response.json()
    assert me["email"] == "ghalib@example.com"
    assert me["name"] == "Ghalib"
    assert me["analysisIds"] == []


@pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer not-a-token"}])
async def test_me_requires_valid_token(client, headers):
    response = await client.get("/auth/me", headers=headers)

    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


async def test_signup_is_committed_before_responding(client, uncommitted_db):
    response = await client.post(
        "/auth/signup",
        json={"email": "faiz@example.com", "password": "Subh-e-Azadi-1"},
    )

    assert response.status_code == 201
    assert await load_user(uncommitted_db, "faiz@example.com") is not None
