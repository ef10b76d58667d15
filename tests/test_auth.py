"""
Tests for accounts and bearer tokens.
"""

from datetime import datetime, timedelta, timezone

import jwt

from thinksearch.services.auth_service import bearer_token, create_token, verify_token

SECRET = "unit-test-secret"


class TestTokens:
    def test_round_trip(self):
        token = create_token("user-1", "a@example.com", SECRET)
        assert verify_token(token, SECRET) == "user-1"

    def test_wrong_secret(self):
        token = create_token("user-1", "a@example.com", SECRET)
        assert verify_token(token, "other-secret") is None

    def test_expired(self):
        token = jwt.encode(
            {"userId": "user-1", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
            SECRET,
            algorithm="HS256",
        )
        assert verify_token(token, SECRET) is None

    def test_garbage_and_missing(self):
        assert verify_token("not-a-token", SECRET) is None
        assert verify_token(None, SECRET) is None

    def test_bearer_parsing(self):
        assert bearer_token("Bearer abc") == "abc"
        assert bearer_token("bearer abc ") == "abc"
        assert bearer_token("Basic abc") is None
        assert bearer_token("Bearer ") is None
        assert bearer_token(None) is None


class TestAuthApi:
    def test_signup_and_me(self, client, auth_headers):
        headers, user = auth_headers()

        response = client.get("/api/auth/me", headers=headers)

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "writer@example.com"
        assert response.json()["user"]["id"] == user["id"]
        assert "password_hash" not in response.json()["user"]

    def test_signup_normalizes_email(self, client):
        response = client.post("/api/auth/signup", json={"email": "  Mixed@Example.COM ", "password": "secret123"})
        assert response.status_code == 201
        assert response.json()["user"]["email"] == "mixed@example.com"

    def test_duplicate_email(self, client, auth_headers):
        auth_headers()
        response = client.post(
            "/api/auth/signup",
            json={"email": "writer@example.com", "password": "secret123", "username": "someone-else"},
        )
        assert response.status_code == 400

    def test_short_password_rejected(self, client):
        response = client.post("/api/auth/signup", json={"email": "a@example.com", "password": "123"})
        assert response.status_code == 422

    def test_signin(self, client, auth_headers):
        auth_headers()
        response = client.post("/api/auth/signin", json={"email": "writer@example.com", "password": "secret123"})
        assert response.status_code == 200
        assert response.json()["token"]

    def test_signin_wrong_password(self, client, auth_headers):
        auth_headers()
        response = client.post("/api/auth/signin", json={"email": "writer@example.com", "password": "wrong-pass"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_me_requires_token(self, client):
        assert client.get("/api/auth/me").status_code == 401
        assert client.get("/api/auth/me", headers={"Authorization": "Bearer junk"}).status_code == 401
