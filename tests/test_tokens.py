"""
Tests for JWT access / refresh tokens.
"""

import time

import jwt
import pytest

from auth.tokens import ACCESS, REFRESH, create_access_token, create_refresh_token, decode_token
from config.settings import config
from database.models import User


@pytest.fixture
def user():
    return User(user_id="alice", display_name="Alice", email="alice@example.com")


class TestAccessToken:
    def test_round_trip_carries_identity(self, user):
        claims = decode_token(create_access_token(user), ACCESS)
        assert claims is not None
        assert claims.user_id == "alice"
        assert claims.name == "Alice"
        assert claims.email == "alice@example.com"
        assert claims.token_type == ACCESS

    def test_expiry_follows_config(self, user):
        before = int(time.time())
        claims = decode_token(create_access_token(user), ACCESS)
        assert before + config.access_token_expiry_seconds <= claims.expires_at
        assert claims.expires_at <= int(time.time()) + config.access_token_expiry_seconds

    def test_payload_is_standard_hs256_jwt(self, user):
        token = create_access_token(user)
        assert jwt.get_unverified_header(token)["alg"] == "HS256"
        payload = jwt.decode(token, config.jwt_secret_key, algorithms=["HS256"], issuer="planp-backend")
        assert payload["sub"] == "alice"
        assert payload["type"] == "access"


class TestRefreshToken:
    def test_round_trip(self):
        claims = decode_token(create_refresh_token("alice"), REFRESH)
        assert claims.user_id == "alice"
        assert claims.name is None

    def test_refresh_token_is_not_an_access_token(self):
        assert decode_token(create_refresh_token("alice"), ACCESS) is None

    def test_access_token_is_not_a_refresh_token(self, user):
        assert decode_token(create_access_token(user), REFRESH) is None


class TestRejection:
    def test_tampered_token(self, user):
        token = create_access_token(user)
        header, payload, signature = token.split(".")
        flipped = ("A" if signature[0] != "A" else "B") + signature[1:]
        assert decode_token(".".join([header, payload, flipped]), ACCESS) is None

    def test_wrong_secret(self):
        token = jwt.encode(
            {"sub": "alice", "type": ACCESS, "iss": config.jwt_issuer, "exp": int(time.time()) + 60},
            "some-other-secret-that-is-long-enough",
            algorithm="HS256",
        )
        assert decode_token(token, ACCESS) is None

    def test_expired_token(self, monkeypatch, user):
        monkeypatch.setattr(config, "access_token_expiry_seconds", -10)
        assert decode_token(create_access_token(user), ACCESS) is None

    def test_wrong_issuer(self):
        token = jwt.encode(
            {"sub": "alice", "type": ACCESS, "iss": "someone-else", "exp": int(time.time()) + 60},
            config.jwt_secret_key,
            algorithm="HS256",
        )
        assert decode_token(token, ACCESS) is None

    @pytest.mark.parametrize("token", [None, "", "not.a.jwt", "garbage"])
    def test_garbage(self, token):
        assert decode_token(token, ACCESS) is None
