"""Tests for Firebase ID token handling."""

from unittest.mock import Mock

import pytest
from firebase_admin import auth
from starlette.requests import Request

from arthub.auth.dependencies import get_token_from_header
from arthub.auth.security import InvalidTokenError, user_from_claims, verify_id_token


def make_request(authorization: str | None) -> Request:
    headers = []
    if authorization is not None:
        headers.append((b"authorization", authorization.encode()))
    return Request({"type": "http", "headers": headers})


class TestTokenFromHeader:
    def test_bearer_token(self):
        assert get_token_from_header(make_request("Bearer abc.def")) == "abc.def"

    @pytest.mark.parametrize("header", [None, "", "Basic abc", "Bearer", "Bearer a b"])
    def test_missing_or_malformed(self, header):
        assert get_token_from_header(make_request(header)) is None


class TestClaims:
    def test_uid_and_email(self):
        user = user_from_claims({"uid": "u1", "email": "painter@example.com"})
        assert user.uid == "u1"
        assert user.display_name == "painter"

    def test_sub_fallback_without_email(self):
        user = user_from_claims({"sub": "u2"})
        assert user.uid == "u2"
        assert user.email is None
        assert user.display_name == "u2"

    def test_no_subject(self):
        with pytest.raises(InvalidTokenError):
            user_from_claims({"email": "x@example.com"})


class TestVerifyIdToken:
    @pytest.mark.asyncio
    async def test_valid_token(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(
            auth, "verify_id_token", Mock(return_value={"uid": "u1", "email": "a@b.co"})
        )
        user = await verify_id_token("token")
        assert user.uid == "u1"

    @pytest.mark.asyncio
    async def test_rejected_token(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(auth, "verify_id_token", Mock(side_effect=ValueError("bad")))
        with pytest.raises(InvalidTokenError) as exc_info:
            await verify_id_token("token")
        assert exc_info.value.code == "invalid_token"
