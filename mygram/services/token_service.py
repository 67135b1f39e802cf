"""
MyGram Backend — Session Token Issuer/Verifier
================================================

What:  Builds, signs, parses and checks the stateless session tokens handed
       out at login.
How:   A `SessionClaim` is serialized as a JWT (HS256 via PyJWT) and signed
       with a server-held secret. Nothing is stored server-side; a token is
       valid while its signature checks out and `nbf <= now < exp`.
Who:   AuthService.login issues; `mygram.dependencies.get_current_session`
       verifies on every protected request.

Claim layout:
    {
        "iss": "mygram",  "aud": "mygram-api",  "sub": "access-token",
        "jti": "<unique id>",
        "iat": 1718000000.25, "nbf": 1718000000.25, "exp": 1718003600.25,
        "user_id": 42, "username": "alice", "dob": "2001-05-17"
    }

Time handling:
    Both operations take an explicit `now` (defaults to the wall clock).
    NumericDate claims keep the fractional seconds of `now`, so a token is
    valid for exactly `ttl` after issue. PyJWT's own clock checks are
    switched off so the supplied `now` is the only clock in play.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Mapping, Optional

import jwt

from mygram.exceptions import (
    InvalidSignatureError,
    MalformedTokenError,
    SigningError,
    TokenExpiredError,
    TokenNotYetValidError,
)

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["iss", "aud", "sub", "jti", "iat", "nbf", "exp"]


def _utc(moment: Optional[datetime]) -> datetime:
    if moment is None:
        return datetime.now(timezone.utc)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _to_timestamp(moment: datetime) -> float:
    return _utc(moment).timestamp()


def _from_timestamp(value: Any, claim: str) -> datetime:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedTokenError(f"claim '{claim}' must be a timestamp")
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        raise MalformedTokenError(f"claim '{claim}' is out of range")


@dataclass(frozen=True)
class AuthenticatedSession:
    """
    The caller's identity for the rest of a request.

    Produced once per request by token verification and handed to services
    explicitly; the ownership rule compares `user_id` against resource owners.
    """

    user_id: int
    username: str
    dob: date
    token_id: str
    expires_at: datetime


@dataclass(frozen=True)
class SessionClaim:
    """The signed facts carried by one token."""

    issuer: str
    audience: str
    subject: str
    token_id: str
    issued_at: datetime
    not_before: datetime
    expires_at: datetime
    user_id: int
    username: str
    dob: date

    def to_payload(self) -> Dict[str, Any]:
        return {
            "iss": self.issuer,
            "aud": self.audience,
            "sub": self.subject,
            "jti": self.token_id,
            "iat": _to_timestamp(self.issued_at),
            "nbf": _to_timestamp(self.not_before),
            "exp": _to_timestamp(self.expires_at),
            "user_id": self.user_id,
            "username": self.username,
            "dob": self.dob.isoformat(),
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SessionClaim":
        """
        Rebuild a claim from a decoded payload.

        Raises:
            MalformedTokenError: A claim is missing or has the wrong type.
        """
        user_id = payload.get("user_id")
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise MalformedTokenError("claim 'user_id' must be an integer")

        username = payload.get("username")
        if not isinstance(username, str):
            raise MalformedTokenError("claim 'username' must be a string")

        raw_dob = payload.get("dob")
        try:
            dob = date.fromisoformat(raw_dob)
        except (TypeError, ValueError):
            raise MalformedTokenError("claim 'dob' must be an ISO date")

        audience = payload.get("aud")
        if isinstance(audience, list):
            audience = audience[0] if audience else ""

        return cls(
            issuer=str(payload.get("iss", "")),
            audience=str(audience),
            subject=str(payload.get("sub", "")),
            token_id=str(payload.get("jti", "")),
            issued_at=_from_timestamp(payload.get("iat"), "iat"),
            not_before=_from_timestamp(payload.get("nbf"), "nbf"),
            expires_at=_from_timestamp(payload.get("exp"), "exp"),
            user_id=user_id,
            username=username,
            dob=dob,
        )

    def session(self) -> AuthenticatedSession:
        return AuthenticatedSession(
            user_id=self.user_id,
            username=self.username,
            dob=self.dob,
            token_id=self.token_id,
            expires_at=self.expires_at,
        )


class TokenService:
    """
    Issues and verifies session tokens.

    Every value comes in through the constructor; the service never reads
    application settings itself. Instances are immutable and safe to share
    across concurrent requests.

    Args:
        secret:    HMAC signing secret. Empty means signing is unavailable.
        ttl:       Token lifetime (default 1 hour).
        issuer, audience, subject: Fixed tags identifying this service's tokens.
        algorithm: JWS algorithm (HS256).
    """

    def __init__(
        self,
        secret: str,
        ttl: timedelta = timedelta(hours=1),
        issuer: str = "mygram",
        audience: str = "mygram-api",
        subject: str = "access-token",
        algorithm: str = "HS256",
    ):
        if ttl <= timedelta(0):
            raise ValueError("token ttl must be positive")
        self._secret = secret
        self.ttl = ttl
        self.issuer = issuer
        self.audience = audience
        self.subject = subject
        self.algorithm = algorithm

    def _require_secret(self) -> str:
        if not self._secret:
            logger.error("Token signing secret is not configured (JWT_SECRET)")
            raise SigningError()
        return self._secret

    def issue(
        self,
        user_id: int,
        username: str,
        dob: date,
        now: Optional[datetime] = None,
    ) -> str:
        """
        Build and sign a fresh claim for one login.

        `iat` and `nbf` are `now`; `exp` is `now + ttl`.

        Raises:
            SigningError: No secret configured, or the signer failed.
        """
        secret = self._require_secret()
        now = _utc(now)
        claim = SessionClaim(
            issuer=self.issuer,
            audience=self.audience,
            subject=self.subject,
            token_id=uuid.uuid4().hex,
            issued_at=now,
            not_before=now,
            expires_at=now + self.ttl,
            user_id=user_id,
            username=username,
            dob=dob,
        )
        try:
            token = jwt.encode(claim.to_payload(), secret, algorithm=self.algorithm)
        except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as e:
            logger.error("Token signing failed: %s", type(e).__name__)
            raise SigningError(context={"error_type": type(e).__name__}) from e

        logger.debug("Issued token jti=%s for user=%s", claim.token_id, user_id)
        return token

    def verify(self, token: str, now: Optional[datetime] = None) -> SessionClaim:
        """
        Parse and check a token.

        Raises:
            InvalidSignatureError: Signature does not match (tampered or foreign key).
            MalformedTokenError:   Unparseable, missing claims, or foreign iss/aud/sub.
            TokenNotYetValidError: `now < nbf`.
            TokenExpiredError:     `now >= exp`.
            SigningError:          No secret configured.
        """
        secret = self._require_secret()
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options={
                    "verify_exp": False,
                    "verify_nbf": False,
                    "verify_iat": False,
                    "require": REQUIRED_CLAIMS,
                },
            )
        except jwt.InvalidSignatureError as e:
            logger.info("Rejected token with invalid signature")
            raise InvalidSignatureError() from e
        except jwt.PyJWTError as e:
            logger.info("Rejected malformed token: %s", type(e).__name__)
            raise MalformedTokenError() from e

        if payload.get("sub") != self.subject:
            raise MalformedTokenError("token subject is not recognised")

        claim = SessionClaim.from_payload(payload)
        if claim.expires_at <= claim.issued_at:
            raise MalformedTokenError("token expiry precedes its issue time")

        current = _utc(now)
        if current < claim.not_before:
            raise TokenNotYetValidError()
        if current >= claim.expires_at:
            raise TokenExpiredError()
        return claim
