from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from conftest import DEFAULT_PASSWORD, auth_headers, unique_email
from witti.core.jwt_auth import create_access_token, issue_token
from witti.core.settings import settings
from witti.models.entities import User
from witti.repositories.users import DuplicateEmailError, UserRepository


def _count_users(run_db, email: str) -> int:
    async def _count(session):
        return (await session.execute(select(func.count(User.id)).where(User.email == email))).scalar_one()

    return run_db(_count)


def test_signup_login_me_scenario(client):
    signup = client.post("/api/auth/signup", json={"email": "t@x.com", "password": "abc12345", "name": "Kim"})
    assert signup.status_code == 201
    body = signup.json()
    assert body["success"] is True
    assert body["user"]["email"] == "t@x.com"
    assert body["user"]["name"] == "Kim"
    assert isinstance(body["user"]["id"], int)
    assert "password" not in str(body)

    login = client.post("/api/auth/login", json={"email": "t@x.com", "password": "abc12345"})
    assert login.status_code == 200
    login_body = login.json()
    assert login_body["success"] is True
    assert login_body["token"].count(".") == 2
    assert login_body["user"]["id"] == body["user"]["id"]

    me = client.get("/api/auth/me", headers=auth_headers(login_body["token"]))
    assert me.status_code == 200
    user = me.json()["user"]
    assert user["email"] == "t@x.com"
    assert user["name"] == "Kim"
    assert user["phone"] is None


def test_me_with_expired_token_returns_401(client, member):
    issued = datetime.now(timezone.utc) - timedelta(days=8)
    expired = issue_token(
        {"sub": str(member["user"]["id"]), "email": member["email"], "name": "Park Sujin"},
        settings.jwt_secret,
        settings.token_ttl_seconds,
        algorithm=settings.jwt_algorithm,
        now=issued,
    )
    response = client.get("/api/auth/me", headers=auth_headers(expired))
    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Invalid or expired token."


def test_login_token_lasts_seven_days(client, member):
    from witti.core.jwt_auth import verify_token

    claims = verify_token(member["token"], settings.jwt_secret)
    assert claims["sub"] == str(member["user"]["id"])
    assert claims["email"] == member["email"]
    assert claims["exp"] - claims["iat"] == 7 * 24 * 60 * 60


def test_duplicate_signup_returns_409_and_keeps_one_row(client, run_db):
    email = unique_email("dup")
    payload = {"email": email, "password": DEFAULT_PASSWORD, "name": "Lee Jieun"}
    first = client.post("/api/auth/signup", json=payload)
    assert first.status_code == 201
    second = client.post("/api/auth/signup", json={**payload, "name": "Someone Else"})
    assert second.status_code == 409
    assert second.json()["success"] is False
    assert "already registered" in second.json()["message"]
    assert _count_users(run_db, email) == 1


def test_email_identity_is_case_insensitive(client, run_db):
    email = unique_email("Case")
    first = client.post("/api/auth/signup", json={"email": email.upper(), "password": DEFAULT_PASSWORD, "name": "Kim"})
    assert first.status_code == 201
    assert first.json()["user"]["email"] == email.lower()

    second = client.post("/api/auth/signup", json={"email": email.lower(), "password": DEFAULT_PASSWORD, "name": "Kim"})
    assert second.status_code == 409

    login = client.post("/api/auth/login", json={"email": f"  {email.title()} ", "password": DEFAULT_PASSWORD})
    assert login.status_code == 200
    assert _count_users(run_db, email.lower()) == 1


def test_unique_constraint_is_authoritative_for_duplicates(client, run_db):
    email = unique_email("race")

    async def _insert_twice(session):
        repo = UserRepository(session)
        await repo.create(email, "hash-one", "First")
        await session.commit()
        with pytest.raises(DuplicateEmailError):
            await repo.create(email, "hash-two", "Second")
        return True

    assert run_db(_insert_twice) is True
    assert _count_users(run_db, email) == 1


@pytest.mark.parametrize(
    "overrides,fragment",
    [
        ({"email": "not-an-email"}, "valid email"),
        ({"password": "abc1234"}, "at least 8"),
        ({"password": "abcdefgh"}, "two of"),
        ({"name": " K "}, "at least 2"),
        ({"name": ""}, "enter your name"),
        ({"phone": "010-1234-567a"}, "digits and hyphens"),
        ({"phone": "010-123"}, "10 or 11 digits"),
    ],
)
def test_signup_validation_errors_return_400_without_side_effects(client, run_db, overrides, fragment):
    email = unique_email("invalid")
    payload = {"email": email, "password": DEFAULT_PASSWORD, "name": "Kim Minji", **overrides}
    response = client.post("/api/auth/signup", json=payload)
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert fragment in body["message"]
    assert body["error"]["code"] == "http_error"
    assert _count_users(run_db, email) == 0


def test_signup_accepts_optional_phone(client):
    response = client.post(
        "/api/auth/signup",
        json={"email": unique_email(), "password": DEFAULT_PASSWORD, "name": "Choi", "phone": "01098765432"},
    )
    assert response.status_code == 201


def test_check_email_reports_availability(client, member):
    taken = client.post("/api/auth/check-email", json={"email": member["email"].upper()})
    assert taken.status_code == 200
    assert taken.json() == {"success": True, "available": False}

    free = client.post("/api/auth/check-email", json={"email": unique_email("free")})
    assert free.status_code == 200
    assert free.json() == {"success": True, "available": True}

    invalid = client.post("/api/auth/check-email", json={"email": "nope"})
    assert invalid.status_code == 400
    assert invalid.json()["success"] is False


def test_login_missing_fields_returns_400(client):
    for payload in ({}, {"email": "t@x.com"}, {"password": "abc12345"}, {"email": "", "password": ""}):
        response = client.post("/api/auth/login", json=payload)
        assert response.status_code == 400
        assert response.json()["message"] == "Email and password are required."


def test_login_does_not_distinguish_unknown_email_from_wrong_password(client, member):
    wrong_password = client.post("/api/auth/login", json={"email": member["email"], "password": "wrong-pass-1"})
    unknown_email = client.post("/api/auth/login", json={"email": unique_email("ghost"), "password": "wrong-pass-1"})
    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json()["message"] == unknown_email.json()["message"] == "Invalid email or password."


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": ""},
        {"Authorization": "Bearer"},
        {"Authorization": "Basic dXNlcjpwYXNz"},
        {"Authorization": "Bearer not.a.token"},
        {"Authorization": "Bearer abc"},
    ],
)
def test_me_rejects_missing_or_invalid_tokens(client, headers):
    response = client.get("/api/auth/me", headers=headers)
    assert response.status_code == 401
    assert response.json()["success"] is False
    assert response.headers.get("www-authenticate") == "Bearer"


def test_me_accepts_lowercase_bearer_scheme(client, member):
    response = client.get("/api/auth/me", headers={"Authorization": f"bearer {member['token']}"})
    assert response.status_code == 200
    assert response.json()["user"]["email"] == member["email"]


def test_me_with_token_signed_by_other_secret_returns_401(client, member):
    forged = issue_token({"sub": str(member["user"]["id"])}, "not-the-server-secret-but-long-enough", 3600)
    response = client.get("/api/auth/me", headers=auth_headers(forged))
    assert response.status_code == 401


def test_me_for_deleted_user_returns_404(client):
    token = create_access_token(987654321, "gone@witti.kr", "Gone")
    response = client.get("/api/auth/me", headers=auth_headers(token))
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "User not found."


def test_me_with_non_numeric_subject_returns_401(client):
    token = issue_token({"sub": "admin"}, settings.jwt_secret, 3600)
    response = client.get("/api/auth/me", headers=auth_headers(token))
    assert response.status_code == 401
