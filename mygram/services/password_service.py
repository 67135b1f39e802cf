"""
MyGram Backend — Password Hashing
===================================

What:  One-way salted password hashing and verification.
How:   bcrypt. Each digest is self-describing (`$2b$<cost>$<salt><hash>`),
       so verification needs no separate salt or cost.
Who:   AuthService (sign-up hashes, login verifies) and UserService
       (password change).

bcrypt only reads the first 72 bytes of its input and current releases
refuse longer inputs outright. Sign-up and account edits reject such
passwords in `check_password` first; `hash` still reports one as
HashingError and `verify` simply never matches it.
"""

import logging

import bcrypt

from mygram.exceptions import HashingError

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """
    Stateless bcrypt hasher.

    Args:
        rounds: bcrypt cost factor (4-31). Production uses 12; tests use 4.
    """

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        """
        Hash a plaintext password.

        Raises:
            HashingError: Input too long for bcrypt, or the library failed.
        """
        raw = plaintext.encode("utf-8")
        if len(raw) > BCRYPT_MAX_BYTES:
            raise HashingError(
                message=f"password must be at most {BCRYPT_MAX_BYTES} bytes",
                context={"length": len(raw)},
            )
        try:
            return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=self.rounds)).decode("ascii")
        except (ValueError, TypeError) as e:
            logger.error("bcrypt hashing failed: %s", type(e).__name__)
            raise HashingError(context={"error_type": type(e).__name__}) from e

    def verify(self, plaintext: str, digest: str) -> bool:
        """
        Check a plaintext password against a stored digest (constant-time).

        Returns False on mismatch.

        Raises:
            HashingError: `digest` is not a bcrypt hash.
        """
        raw = plaintext.encode("utf-8")
        if len(raw) > BCRYPT_MAX_BYTES:
            return False
        try:
            return bcrypt.checkpw(raw, digest.encode("utf-8"))
        except (ValueError, TypeError) as e:
            logger.error("Stored password digest is malformed: %s", type(e).__name__)
            raise HashingError(
                message="stored password digest is malformed",
                context={"error_type": type(e).__name__},
            ) from e
