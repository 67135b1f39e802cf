"""
MyGram Backend — User Schemas
===============================

What:  Request and response models for sign-up, login and the user CRUD
       endpoints.

Design Decision:
    Sign-up fields are typed as plain strings. Date parsing, the minimum
    age, password length and email syntax are checked by AuthService in a
    fixed order, so the first failing rule is the one reported. Schema
    validation only rejects missing fields and wrong JSON types.

    `UserView` never includes the password hash.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class UserSignUp(BaseModel):
    username: str = Field(min_length=1, max_length=100, description="Display name")
    email: str = Field(min_length=1, max_length=255, description="Login email")
    password: str = Field(min_length=1, description="Plaintext password (min 6 characters)")
    dob: str = Field(description="Date of birth, YYYY-MM-DD")


class UserLogin(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserUpdate(BaseModel):
    """
    Partial update of the caller's own account. Omitted fields are left
    unchanged; supplied ones go through the sign-up validators.
    """
    username: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[str] = Field(default=None, min_length=1, max_length=255)
    password: Optional[str] = Field(default=None, min_length=1)
    dob: Optional[str] = Field(default=None, description="Date of birth, YYYY-MM-DD")


class UserView(BaseModel):
    """Public representation of a credential record."""
    id: int
    username: str
    email: str
    dob: date
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SignUpResponse(BaseModel):
    user: UserView


class TokenResponse(BaseModel):
    token: str = Field(description="Bearer token, valid for one hour")


class UserDeleteResponse(BaseModel):
    user: UserView
    message: str = "Your account has been successfully deleted"
