# tests/test_auth.py
import pytest

from anymessage.auth.token_manager import DefaultUserTokenManager
from anymessage.auth.user_store import UserStore
from anymessage.settings import settings

from fakes import auth_headers

HOST_SECRET = "host-app-secret"


@pytest.fixture
def host_secret(monkeypatch):
    monkeypatch.setattr(settings, "host_app_registration_secret", HOST_SECRET)
    return HOST_SECRET


async def test_register_user_issues_token_and_stores_only_its_hash(client, database, host_secret):
    response = await client.post(
        "/auth/register-user",
        json={"email": "  Ada@Acme.io "},
        headers={"X-Host-App-Secret": host_secret}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "ada@acme.io"
    user = await UserStore(database).get_by_email("ada@acme.io")
    assert user.token_hash == DefaultUserTokenManager().hash_token(body["auth_token"])
    assert user.token_hash != body["auth_token"]


async def test_registering_again_rotates_the_token(client, host_secret):
    headers = {"X-Host-App-Secret": host_secret}
    first = (await client.post("/auth/register-user", json={"email": "ada@acme.io"}, headers=headers)).json()
    second = (await client.post("/auth/register-user", json={"email": "ada@acme.io"}, headers=headers)).json()

    old = await client.get("/team", headers=auth_headers(first["auth_token"], "https://www.example.com"))
    new = await client.get("/team", headers=auth_headers(second["auth_token"], "https://www.example.com"))

    assert old.status_code == 401
    assert new.status_code == 400


@pytest.mark.parametrize("headers,expected", [
    ({}, 401),
    ({"X-Host-App-Secret": "wrong"}, 403),
])
async def test_register_user_checks_host_secret(client, host_secret, headers, expected):
    response = await client.post("/auth/register-user", json={"email": "ada@acme.io"}, headers=headers)

    assert response.status_code == expected


async def test_register_user_unavailable_without_server_secret(client, monkeypatch):
    monkeypatch.setattr(settings, "host_app_registration_secret", None)

    response = await client.post(
        "/auth/register-user", json={"email": "ada@acme.io"}, headers={"X-Host-App-Secret": "anything"}
    )

    assert response.status_code == 503


@pytest.mark.parametrize("authorization", ["", "Bearer", "Basic abc", "Bearer unknown-token"])
async def test_invalid_bearer_tokens_are_rejected(client, authorization):
    response = await client.get("/team", headers={"Authorization": authorization})

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_token_hash_is_deterministic_sha256():
    manager = DefaultUserTokenManager()
    token, token_hash = manager.generate_token_and_hash()

    assert manager.hash_token(token) == token_hash
    assert len(token_hash) == 64
    assert token not in token_hash
