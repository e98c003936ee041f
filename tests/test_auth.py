# =============================================================================
# tests/test_auth.py - Authentication Tests
# =============================================================================
# Tests for bearer-token verification using HS256 tokens signed with the
# test SUPABASE_JWT_SECRET.
# =============================================================================

import time

import pytest
from fastapi import HTTPException
from jose import jwt

from app.auth.dependencies import decode_access_token
from app.config import settings
from tests.conftest import TEST_USER_ID, ist


def make_token(**overrides) -> str:
    claims = {
        "sub": str(TEST_USER_ID),
        "email": "atiksha@example.com",
        "aud": "authenticated",
        "exp": int(time.time()) + 3600,
        "iat": int(time.time()),
        "role": "authenticated",
        "user_metadata": {"username": "atiksha"},
    }
    claims.update(overrides)
    return jwt.encode(claims, settings.SUPABASE_JWT_SECRET, algorithm="HS256")


class TestDecodeAccessToken:
    """Tests for decode_access_token."""

    def test_valid_token(self):
        user = decode_access_token(make_token())

        assert user.id == TEST_USER_ID
        assert user.identity == str(TEST_USER_ID)
        assert user.email == "atiksha@example.com"
        assert user.username == "atiksha"

    def test_expired_token(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_access_token(make_token(exp=int(time.time()) - 60))

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Token has expired"

    def test_wrong_audience(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_access_token(make_token(aud="anon"))

        assert exc_info.value.status_code == 401

    def test_wrong_secret(self):
        token = jwt.encode(
            {"sub": str(TEST_USER_ID), "aud": "authenticated", "exp": int(time.time()) + 60},
            "some-other-secret",
            algorithm="HS256",
        )

        with pytest.raises(HTTPException) as exc_info:
            decode_access_token(token)

        assert exc_info.value.status_code == 401

    def test_malformed_user_id(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_access_token(make_token(sub="not-a-uuid"))

        assert exc_info.value.detail == "Invalid token: malformed user ID"

    def test_missing_metadata(self):
        user = decode_access_token(make_token(user_metadata={}))

        assert user.username is None


class TestVerifyEndpoint:
    """Tests for GET /api/auth/verify."""

    def test_verify_with_token(self, anonymous_client):
        response = anonymous_client.get(
            "/api/auth/verify",
            headers={"Authorization": f"Bearer {make_token()}"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "valid": True,
            "user_id": str(TEST_USER_ID),
            "email": "atiksha@example.com",
            "username": "atiksha",
        }

    def test_verify_without_token(self, anonymous_client):
        response = anonymous_client.get("/api/auth/verify")

        assert response.status_code == 401


def test_token_identity_reaches_store(anonymous_client, store, clock):
    """Activity is recorded under the user id carried by the token."""
    clock.set(ist(2024, 3, 15, 12, 0, 0))

    response = anonymous_client.post(
        "/api/editor/activity",
        json={"action": "start"},
        headers={"Authorization": f"Bearer {make_token()}"},
    )

    assert response.status_code == 200
    assert store.sessions[0].user_id == str(TEST_USER_ID)
