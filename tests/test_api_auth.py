"""
Authentication API tests.

Tests:
1. Register / login / me
2. Admin bootstrap by e-mail
3. Blocked accounts
4. Google sign-in (verification stubbed)
5. Password reset (mail stubbed)
"""
from career_portal.api.routes import auth_routes
from career_portal.core.auth import create_password_reset_token
from career_portal.core.google_auth import GoogleAuthError


def test_register_signs_in_immediately(client):
    response = client.post("/api/auth/register", json={
        "email": "New.User@Example.com", "password": "secret123"
    })
    assert response.status_code == 201
    data = response.json()
    assert data["role"] == "user"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"})
    assert me.status_code == 200
    assert me.json()["email"] == "new.user@example.com"
    assert me.json()["display_name"] == "new.user"


def test_duplicate_email_is_rejected(client, user):
    response = client.post("/api/auth/register", json={
        "email": "student@example.com", "password": "another1"
    })
    assert response.status_code == 409
    assert response.json()["detail"] == "This email is already registered. Please login instead."


def test_short_password_fails_validation(client):
    response = client.post("/api/auth/register", json={"email": "a@example.com", "password": "123"})
    assert response.status_code == 422


def test_login(client, user):
    ok = client.post("/api/auth/login", json={"email": "student@example.com", "password": "secret123"})
    assert ok.status_code == 200
    assert ok.json()["user_id"] == user["user_id"]

    bad = client.post("/api/auth/login", json={"email": "student@example.com", "password": "wrong!!"})
    assert bad.status_code == 401
    assert bad.json()["detail"] == "Invalid email or password."

    unknown = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "secret123"})
    assert unknown.status_code == 401


def test_admin_email_gets_admin_role(admin):
    assert admin["role"] == "admin"


def test_me_requires_token(client):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer nope"}).status_code == 401


def test_blocked_user_is_locked_out(client, user, admin):
    response = client.put(
        f"/api/admin/users/{user['user_id']}/block",
        json={"is_blocked": True}, headers=admin["headers"]
    )
    assert response.status_code == 200

    assert client.get("/api/auth/me", headers=user["headers"]).status_code == 403
    login = client.post("/api/auth/login", json={"email": "student@example.com", "password": "secret123"})
    assert login.status_code == 403


# ============================================================
# GOOGLE
# ============================================================

def _google_claims(email="g.user@gmail.com"):
    return {
        "iss": "https://accounts.google.com", "email": email,
        "email_verified": True, "name": "G User", "sub": "1234567890"
    }


def test_google_sign_in_creates_then_reuses_account(client, monkeypatch):
    monkeypatch.setattr(auth_routes, "verify_google_id_token", lambda token: _google_claims())

    first = client.post("/api/auth/google", json={"id_token": "header.payload.signature"})
    second = client.post("/api/auth/google", json={"id_token": "header.payload.signature"})

    assert first.status_code == 200
    assert first.json()["user_id"] == second.json()["user_id"]
    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {first.json()['access_token']}"})
    assert me.json()["display_name"] == "G User"


def test_google_sign_in_links_existing_email(client, user, monkeypatch):
    monkeypatch.setattr(
        auth_routes, "verify_google_id_token", lambda token: _google_claims("student@example.com")
    )
    response = client.post("/api/auth/google", json={"id_token": "header.payload.signature"})
    assert response.json()["user_id"] == user["user_id"]


def test_google_sign_in_rejects_bad_token(client, monkeypatch):
    def reject(token):
        raise GoogleAuthError("Invalid Google sign-in token.")

    monkeypatch.setattr(auth_routes, "verify_google_id_token", reject)
    response = client.post("/api/auth/google", json={"id_token": "header.payload.signature"})
    assert response.status_code == 401


# ============================================================
# PASSWORD RESET
# ============================================================

def test_password_reset_flow(client, user, monkeypatch):
    sent = {}

    async def fake_send(email, token):
        sent[email] = token
        return True

    monkeypatch.setattr(auth_routes, "send_password_reset_email", fake_send)

    response = client.post("/api/auth/password-reset", json={"email": "student@example.com"})
    assert response.status_code == 200
    token = sent["student@example.com"]

    confirm = client.post("/api/auth/password-reset/confirm", json={
        "token": token, "new_password": "brandnew1"
    })
    assert confirm.status_code == 200

    login = client.post("/api/auth/login", json={"email": "student@example.com", "password": "brandnew1"})
    assert login.status_code == 200

    # single use: the password hash changed
    again = client.post("/api/auth/password-reset/confirm", json={
        "token": token, "new_password": "another9"
    })
    assert again.status_code == 400


def test_password_reset_unknown_email_looks_the_same(client, monkeypatch):
    calls = []

    async def fake_send(email, token):
        calls.append(email)
        return True

    monkeypatch.setattr(auth_routes, "send_password_reset_email", fake_send)
    response = client.post("/api/auth/password-reset", json={"email": "ghost@example.com"})
    assert response.status_code == 200
    assert calls == []


def test_reset_token_is_not_a_session(client, user):
    token = create_password_reset_token(user["user_id"], None)
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
