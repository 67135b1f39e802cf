"""
MyGram Backend — Sign-Up and Login Flows
==========================================

What:  Credential issuance: registering accounts and exchanging
       email + password for a session token.
How:   Composes a CredentialStore, a PasswordHasher and a TokenService,
       all passed in by the caller (see mygram/dependencies.py).
Who:   POST /users/register and POST /users/login.

Sign-up order (the first failure wins):
    1. dob parses as YYYY-MM-DD          → InvalidDateError
    2. age >= min_age (8)                → AgeRestrictionError
    3. 6 chars <= password <= 72 bytes   → WeakPasswordError
    4. email has valid syntax            → InvalidEmailError
    5. hash password
    6. email not already registered      → EmailTakenError
    7. insert (unique index backstop     → EmailTakenError)

Login order:
    1. record found with a non-zero id   → UserNotFoundError
    2. password matches                  → InvalidCredentialsError
    3. token issued

The validators below are module-level so UserService can apply the same
rules when a user edits their account.
"""

import logging
import re
from datetime import date, datetime
from typing import Optional

from email_validator import EmailNotValidError, validate_email

from mygram.exceptions import (
    AgeRestrictionError,
    EmailTakenError,
    InvalidCredentialsError,
    InvalidDateError,
    InvalidEmailError,
    UserNotFoundError,
    WeakPasswordError,
)
from mygram.models.user import User
from mygram.repositories.base import CredentialStore
from mygram.schemas.user import UserSignUp, UserView
from mygram.services.password_service import BCRYPT_MAX_BYTES, PasswordHasher
from mygram.services.token_service import TokenService

logger = logging.getLogger(__name__)

_DOB_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


# ── Validators ───────────────────────────────────────────────────────────


def parse_dob(raw: str) -> date:
    """Parse a strict `YYYY-MM-DD` calendar date."""
    if not isinstance(raw, str) or not _DOB_PATTERN.match(raw):
        raise InvalidDateError()
    try:
        return datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError:
        raise InvalidDateError()


def age_on(dob: date, today: date) -> int:
    """Whole calendar years elapsed between `dob` and `today`."""
    years = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        years -= 1
    return years


def check_age(dob: date, today: date, min_age: int) -> None:
    if age_on(dob, today) < min_age:
        raise AgeRestrictionError(min_age=min_age)


def check_password(password: str, min_length: int) -> None:
    if len(password) < min_length:
        raise WeakPasswordError(f"password must be at least {min_length} characters")
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise WeakPasswordError(f"password must be at most {BCRYPT_MAX_BYTES} bytes")


def check_email(email: str) -> None:
    """Syntax only; the stored value is kept exactly as supplied."""
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        raise InvalidEmailError()


# ── Service ──────────────────────────────────────────────────────────────


class AuthService:
    """
    Sign-up and login.

    Stateless apart from its collaborators; one instance per request.
    """

    def __init__(
        self,
        users: CredentialStore,
        hasher: PasswordHasher,
        tokens: TokenService,
        min_age: int = 8,
        min_password_length: int = 6,
    ):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens
        self.min_age = min_age
        self.min_password_length = min_password_length

    async def sign_up(self, payload: UserSignUp, today: Optional[date] = None) -> UserView:
        """
        Register a new account.

        Args:
            payload: username, email, password and dob string.
            today:   Reference date for the age check (defaults to today).

        Returns:
            The stored account without its password hash.

        Raises:
            InvalidDateError, AgeRestrictionError, WeakPasswordError,
            InvalidEmailError, EmailTakenError, HashingError, DatabaseError
        """
        today = today or date.today()

        dob = parse_dob(payload.dob)
        check_age(dob, today, self.min_age)
        check_password(payload.password, self.min_password_length)
        check_email(payload.email)

        password_hash = self.hasher.hash(payload.password)

        if await self.users.find_by_email(payload.email) is not None:
            logger.info("Sign-up rejected: email already registered")
            raise EmailTakenError()

        user = await self.users.insert(
            User(
                username=payload.username,
                email=payload.email,
                password_hash=password_hash,
                dob=dob,
            )
        )
        logger.info("Registered user id=%s username=%s", user.id, user.username)
        return UserView.model_validate(user)

    async def login(self, email: str, password: str, now: Optional[datetime] = None) -> str:
        """
        Exchange credentials for a signed session token.

        Raises:
            UserNotFoundError:       No live account with that exact email.
            InvalidCredentialsError: Password does not match.
            SigningError, HashingError, DatabaseError
        """
        user = await self.users.find_by_email(email)
        if user is None or not user.id:
            logger.info("Login rejected: unknown email")
            raise UserNotFoundError()

        if not self.hasher.verify(password, user.password_hash):
            logger.info("Login rejected: wrong password for user id=%s", user.id)
            raise InvalidCredentialsError()

        token = self.tokens.issue(user.id, user.username, user.dob, now=now)
        logger.info("User id=%s logged in", user.id)
        return token
