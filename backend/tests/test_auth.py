# backend/tests/test_auth.py
import re
from datetime import timedelta

import pytest
from jose import JWTError, jwt

from config import settings
from utils.tokenJWT import (
    ACCESS_TOKEN,
    create_access_token,
    create_reset_token,
    decode_token,
    verify_access_token,
)


# ---- credentials ----
def test_access_token_round_trip(user):
    identity = verify_access_token(create_access_token(user))
    assert identity.id == user.id
    assert identity.email == user.email
    assert identity.is_admin is False


def test_admin_flag_is_carried(admin):
    claims = decode_token(create_access_token(admin), ACCESS_TOKEN)
    assert claims["isAdmin"] is True
    assert claims["sub"] == admin.id


def test_expired_token_is_rejected(user):
    token = create_access_token(user, expires_delta=timedelta(seconds=-5))
    with pytest.raises(JWTError):
        verify_access_token(token)


def test_tampered_token_is_rejected(user):
    token = create_access_token(user)
    claims = jwt.get_unverified_claims(token)
    claims["isAdmin"] = True
    forged = jwt.encode(claims, "not-the-secret", algorithm=settings.ALGORITHM)
    with pytest.raises(JWTError):
        verify_access_token(forged)


def test_reset_token_is_not_an_access_token(user):
    with pytest.raises(JWTError):
        verify_access_token(create_reset_token(user))


# ---- HTTP ----
def test_register_returns_token_and_user(client):
    res = client.post("/api/auth/register", json={
        "email": "new@portfolio.dev", "password": "pw123456", "name": "Newcomer",
    })
    assert res.status_code == 200
    body = res.json()
    assert body["user"]["email"] == "new@portfolio.dev"
    assert body["user"]["isAdmin"] is False
    assert "passwordHash" not in body["user"]
    assert verify_access_token(body["token"]).email == "new@portfolio.dev"


def test_register_collision(client, user, storage):
    res = client.post("/api/auth/register", json={
        "email": "visitor@portfolio.dev", "password": "x", "name": "Dup",
    })
    assert res.status_code == 400
    assert res.json()["detail"] == "User already exists"
    assert storage.get_user_by_email("visitor@portfolio.dev").name == "Visitor"


def test_register_with_bad_payload(client):
    res = client.post("/api/auth/register", json={"email": "not-an-email", "password": "x"})
    assert res.status_code == 400
    assert res.json()["detail"] == "Invalid request data"


def test_login(client, user):
    res = client.post("/api/auth/login", json={"email": "visitor@portfolio.dev", "password": "secret123"})
    assert res.status_code == 200
    assert res.json()["user"]["id"] == user.id


@pytest.mark.parametrize("email,password", [
    ("visitor@portfolio.dev", "wrong"),
    ("nobody@portfolio.dev", "secret123"),
])
def test_login_failures_look_the_same(client, user, email, password):
    res = client.post("/api/auth/login", json={"email": email, "password": password})
    assert res.status_code == 401
    assert res.json()["detail"] == "Invalid credentials"


def test_admin_can_log_in_with_configured_credentials(client):
    res = client.post("/api/auth/login", json={
        "email": settings.ADMIN_EMAIL, "password": settings.ADMIN_PASSWORD,
    })
    assert res.status_code == 200
    assert res.json()["user"]["isAdmin"] is True


def test_me_requires_token(client):
    res = client.get("/api/auth/me")
    assert res.status_code == 401
    assert res.json()["detail"] == "Access token required"


def test_me_rejects_bad_token(client, user):
    expired = create_access_token(user, expires_delta=timedelta(seconds=-5))
    for token in ("garbage", expired):
        res = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert res.status_code == 403
        assert res.json()["detail"] == "Invalid or expired token"


def test_me(client, user, user_headers):
    res = client.get("/api/auth/me", headers=user_headers)
    assert res.status_code == 200
    assert res.json()["name"] == "Visitor"


def test_password_reset_flow(client, user, mailer):
    res = client.post("/api/auth/forgot-password", json={"email": "visitor@portfolio.dev"})
    assert res.status_code == 200
    assert len(mailer.sent) == 1
    token = re.search(r"token=([^\"&]+)", mailer.sent[0]["html"]).group(1)

    res = client.post("/api/auth/reset-password", json={"token": token, "password": "brand-new"})
    assert res.status_code == 200

    res = client.post("/api/auth/login", json={"email": "visitor@portfolio.dev", "password": "brand-new"})
    assert res.status_code == 200


def test_forgot_password_does_not_reveal_unknown_email(client, mailer):
    res = client.post("/api/auth/forgot-password", json={"email": "nobody@portfolio.dev"})
    assert res.status_code == 200
    assert mailer.sent == []


def test_reset_password_rejects_access_token(client, user):
    res = client.post("/api/auth/reset-password", json={
        "token": create_access_token(user), "password": "x",
    })
    assert res.status_code == 400


def test_register_ignores_profile_fields(client, storage):
    res = client.post("/api/auth/register", json={
        "email": "eager@portfolio.dev",
        "password": "pw123456",
        "name": "Eager",
        "avatar": "https://evil.example/a.png",
        "aboutText": "Injected",
        "heroSubtitle": "Injected",
        "skills": ["Injected"],
    })
    assert res.status_code == 200
    assert res.json()["user"]["avatar"] is None

    stored = storage.get_user_by_email("eager@portfolio.dev")
    assert stored.avatar is None
    assert stored.about_text is None
    assert stored.hero_subtitle is None
    assert stored.skills == []
