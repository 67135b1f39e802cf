"""
MyGram Backend — Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for every failure the API can report.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch the category
       classes and return structured JSON error responses.
Who:   Raised by services, stores and the auth dependency.
When:  During request processing; every failure is scoped to one request.

Exception Hierarchy:
    MyGramError (base)
    ├── ValidationError              → 400 Bad Request
    │   ├── InvalidDateError
    │   ├── AgeRestrictionError
    │   ├── WeakPasswordError
    │   ├── InvalidEmailError
    │   └── BadRequestError
    ├── AuthenticationError          → 401 Unauthorized
    │   ├── InvalidCredentialsError
    │   ├── InvalidSignatureError
    │   ├── TokenExpiredError
    │   ├── TokenNotYetValidError
    │   ├── MalformedTokenError
    │   └── UnauthorizedError
    ├── AuthorizationError           → 403 Forbidden
    │   └── ForbiddenError
    ├── NotFoundError                → 404 Not Found
    │   └── UserNotFoundError
    ├── ConflictError                → 409 Conflict
    │   └── EmailTakenError
    └── InfrastructureError          → 500 Internal Server Error
        ├── HashingError
        ├── SigningError
        └── DatabaseError
"""

from typing import Any, Dict, Optional


class MyGramError(Exception):
    """
    Base exception for all MyGram application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only for 4xx categories)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


# ══════════════════════════════════════════════════════════════════════════
# 400: Validation
# ══════════════════════════════════════════════════════════════════════════


class ValidationError(MyGramError):
    """
    Raised when client input fails validation.

    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "password must be at least 6 characters",
            "details": {"field": "password"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidDateError(ValidationError):
    """Date of birth is not a `YYYY-MM-DD` calendar date."""

    def __init__(self, message: str = "invalid date of birth format"):
        super().__init__(message=message, field="dob")


class AgeRestrictionError(ValidationError):
    """Computed age is below the sign-up minimum."""

    def __init__(self, min_age: int = 8):
        super().__init__(
            message=f"age must be at least {min_age} years old",
            field="dob",
            context={"min_age": min_age},
        )
        self.min_age = min_age


class WeakPasswordError(ValidationError):
    def __init__(self, message: str = "password must be at least 6 characters"):
        super().__init__(message=message, field="password")


class InvalidEmailError(ValidationError):
    def __init__(self, message: str = "invalid email format"):
        super().__init__(message=message, field="email")


class BadRequestError(ValidationError):
    """
    Raised for malformed request parameters that schema validation cannot
    catch, e.g. a path id that is not a positive integer.
    """

    def __init__(self, message: str = "invalid required param", field: Optional[str] = None):
        super().__init__(message=message, field=field)


# ══════════════════════════════════════════════════════════════════════════
# 401: Authentication
# ══════════════════════════════════════════════════════════════════════════


class AuthenticationError(MyGramError):
    """
    Raised when the caller cannot be authenticated.

    HTTP:    401 Unauthorized (with `WWW-Authenticate: Bearer`)
    When:    Wrong password at login, or a missing/invalid/expired bearer token.
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidCredentialsError(AuthenticationError):
    def __init__(self):
        super().__init__(message="invalid email or password")


class InvalidSignatureError(AuthenticationError):
    def __init__(self):
        super().__init__(message="token signature is invalid")


class TokenExpiredError(AuthenticationError):
    def __init__(self):
        super().__init__(message="token has expired")


class TokenNotYetValidError(AuthenticationError):
    def __init__(self):
        super().__init__(message="token is not valid yet")


class MalformedTokenError(AuthenticationError):
    def __init__(self, message: str = "token is malformed"):
        super().__init__(message=message)


class UnauthorizedError(AuthenticationError):
    """No usable session is attached to the request."""

    def __init__(self, message: str = "invalid user session"):
        super().__init__(message=message)


# ══════════════════════════════════════════════════════════════════════════
# 403: Authorization
# ══════════════════════════════════════════════════════════════════════════


class AuthorizationError(MyGramError):
    """
    Raised when an authenticated session is not allowed to act on a resource.

    HTTP:    403 Forbidden
    When:    The session identity differs from the resource owner identity.
    """

    def __init__(
        self,
        message: str = "You are not authorized to perform this action",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(AuthorizationError):
    def __init__(self, resource: str = "resource", action: str = "edit"):
        super().__init__(
            message=f"You are not authorized to {action} this {resource}",
            context={"resource": resource, "action": action},
        )
        self.resource = resource
        self.action = action


# ══════════════════════════════════════════════════════════════════════════
# 404: Not Found
# ══════════════════════════════════════════════════════════════════════════


class NotFoundError(MyGramError):
    """
    Raised when a requested resource does not exist.

    HTTP:    404 Not Found

    Stores return None for missing or soft-deleted rows (not an exception);
    services convert None into NotFoundError.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource


class UserNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__(resource="user")


# ══════════════════════════════════════════════════════════════════════════
# 409: Conflict
# ══════════════════════════════════════════════════════════════════════════


class ConflictError(MyGramError):
    """
    Raised when a write collides with existing state.

    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "The request conflicts with existing data",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class EmailTakenError(ConflictError):
    def __init__(self):
        super().__init__(message="email already exist", context={"field": "email"})


# ══════════════════════════════════════════════════════════════════════════
# 500: Infrastructure
# ══════════════════════════════════════════════════════════════════════════


class InfrastructureError(MyGramError):
    """
    Raised when a backing component (hash library, signer, database) fails.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        Context is logged server-side only.
    """

    def __init__(
        self,
        message: str = "An internal error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class HashingError(InfrastructureError):
    def __init__(self, message: str = "password hashing failed", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class SigningError(InfrastructureError):
    def __init__(self, message: str = "token signing is unavailable", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class DatabaseError(InfrastructureError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, deadlock, unexpected constraint violation.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
