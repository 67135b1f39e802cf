"""
MyGram Backend — Token Service Unit Tests
===========================================

What:  Issue/verify behaviour with an injected clock.

What we test:
    ✅ Round trip preserves identity claims
    ✅ Valid for now <= t < now + 1h; expired at exactly now + 1h (also sub-second)
    ✅ Not valid before issue time
    ✅ Foreign key / forged payload → InvalidSignatureError
    ✅ Garbage, foreign audience, foreign subject → MalformedTokenError
    ✅ Missing secret → SigningError
"""

from datetime import date, datetime, timedelta, timezone

import jwt
import pytest

from mygram.exceptions import (
    InvalidSignatureError,
    MalformedTokenError,
    SigningError,
    TokenExpiredError,
    TokenNotYetValidError,
)
from mygram.services.token_service import AuthenticatedSession, TokenService

SECRET = "test-signing-secret-with-at-least-32-bytes"
OTHER_SECRET = "another-signing-secret-with-32-bytes-plus"
NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)
DOB = date(2001, 5, 17)


class TestTokenRoundTrip:

    def setup_method(self):
        self.tokens = TokenService(secret=SECRET)

    def test_verify_returns_issued_identity(self):
        token = self.tokens.issue(42, "alice", DOB, now=NOW)
        claim = self.tokens.verify(token, now=NOW + timedelta(minutes=1))

        assert claim.user_id == 42
        assert claim.username == "alice"
        assert claim.dob == DOB

    def test_claim_carries_fixed_tags_and_one_hour_window(self):
        token = self.tokens.issue(42, "alice", DOB, now=NOW)
        payload = jwt.decode(token, options={"verify_signature": False})

        assert payload["iss"] == "mygram"
        assert payload["aud"] == "mygram-api"
        assert payload["sub"] == "access-token"
        assert payload["iat"] == payload["nbf"] == NOW.timestamp()
        assert payload["exp"] - payload["iat"] == 3600

    def test_each_token_gets_a_unique_id(self):
        first = self.tokens.verify(self.tokens.issue(1, "a", DOB, now=NOW), now=NOW)
        second = self.tokens.verify(self.tokens.issue(1, "a", DOB, now=NOW), now=NOW)
        assert first.token_id != second.token_id

    def test_session_is_typed_view_of_claim(self):
        claim = self.tokens.verify(self.tokens.issue(7, "bob", DOB, now=NOW), now=NOW)
        session = claim.session()

        assert isinstance(session, AuthenticatedSession)
        assert session.user_id == 7
        assert session.username == "bob"
        assert session.expires_at == NOW + timedelta(hours=1)

    def test_naive_now_is_treated_as_utc(self):
        token = self.tokens.issue(42, "alice", DOB, now=NOW.replace(tzinfo=None))
        assert self.tokens.verify(token, now=NOW).user_id == 42


class TestTokenTimeWindow:

    def setup_method(self):
        self.tokens = TokenService(secret=SECRET)
        self.token = self.tokens.issue(42, "alice", DOB, now=NOW)

    @pytest.mark.parametrize("offset", [
        timedelta(0),
        timedelta(minutes=30),
        timedelta(minutes=59, seconds=59),
    ])
    def test_valid_inside_window(self, offset):
        assert self.tokens.verify(self.token, now=NOW + offset).user_id == 42

    def test_expired_at_exactly_one_hour(self):
        with pytest.raises(TokenExpiredError):
            self.tokens.verify(self.token, now=NOW + timedelta(hours=1))

    def test_expired_long_after(self):
        with pytest.raises(TokenExpiredError):
            self.tokens.verify(self.token, now=NOW + timedelta(days=2))

    def test_not_valid_before_issue_time(self):
        with pytest.raises(TokenNotYetValidError):
            self.tokens.verify(self.token, now=NOW - timedelta(seconds=1))

    def test_custom_ttl(self):
        short = TokenService(secret=SECRET, ttl=timedelta(minutes=5))
        token = short.issue(1, "a", DOB, now=NOW)
        short.verify(token, now=NOW + timedelta(minutes=4))
        with pytest.raises(TokenExpiredError):
            short.verify(token, now=NOW + timedelta(minutes=5))

    def test_sub_second_issue_time_keeps_full_hour(self):
        issued = NOW + timedelta(milliseconds=700)
        token = self.tokens.issue(42, "alice", DOB, now=issued)

        assert self.tokens.verify(token, now=issued).user_id == 42
        assert self.tokens.verify(
            token, now=issued + timedelta(hours=1) - timedelta(milliseconds=500)
        ).user_id == 42
        with pytest.raises(TokenExpiredError):
            self.tokens.verify(token, now=issued + timedelta(hours=1))
        with pytest.raises(TokenNotYetValidError):
            self.tokens.verify(token, now=issued - timedelta(milliseconds=100))


class TestTokenRejection:

    def setup_method(self):
        self.tokens = TokenService(secret=SECRET)

    def test_token_signed_with_other_secret(self):
        foreign = TokenService(secret=OTHER_SECRET).issue(42, "alice", DOB, now=NOW)
        with pytest.raises(InvalidSignatureError):
            self.tokens.verify(foreign, now=NOW)

    def test_forged_payload_with_original_signature(self):
        genuine = self.tokens.issue(42, "alice", DOB, now=NOW)
        forged = TokenService(secret=OTHER_SECRET).issue(1, "admin", DOB, now=NOW)

        header, payload, _ = forged.split(".")
        signature = genuine.split(".")[2]
        with pytest.raises(InvalidSignatureError):
            self.tokens.verify(f"{header}.{payload}.{signature}", now=NOW)

    @pytest.mark.parametrize("garbage", ["", "not-a-token", "a.b.c"])
    def test_garbage_is_malformed(self, garbage):
        with pytest.raises(MalformedTokenError):
            self.tokens.verify(garbage, now=NOW)

    def test_foreign_audience_is_malformed(self):
        token = TokenService(secret=SECRET, audience="someone-else").issue(1, "a", DOB, now=NOW)
        with pytest.raises(MalformedTokenError):
            self.tokens.verify(token, now=NOW)

    def test_foreign_subject_is_malformed(self):
        token = TokenService(secret=SECRET, subject="refresh-token").issue(1, "a", DOB, now=NOW)
        with pytest.raises(MalformedTokenError):
            self.tokens.verify(token, now=NOW)

    def test_missing_identity_claims_is_malformed(self):
        stamp = int(NOW.timestamp())
        token = jwt.encode(
            {
                "iss": "mygram", "aud": "mygram-api", "sub": "access-token",
                "jti": "x", "iat": stamp, "nbf": stamp, "exp": stamp + 3600,
            },
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(MalformedTokenError):
            self.tokens.verify(token, now=NOW)


class TestTokenSecret:

    def test_issue_without_secret_raises_signing_error(self):
        with pytest.raises(SigningError):
            TokenService(secret="").issue(42, "alice", DOB, now=NOW)

    def test_verify_without_secret_raises_signing_error(self):
        token = TokenService(secret=SECRET).issue(42, "alice", DOB, now=NOW)
        with pytest.raises(SigningError):
            TokenService(secret="").verify(token, now=NOW)

    def test_non_positive_ttl_is_rejected(self):
        with pytest.raises(ValueError):
            TokenService(secret=SECRET, ttl=timedelta(0))
