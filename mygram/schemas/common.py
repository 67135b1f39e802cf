"""
MyGram Backend — Shared Response Schemas
==========================================

What:  Pydantic models reused across resources: the error envelope, the
       health payload, and the compact owner/photo summaries embedded in
       list responses.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response body.
    Who:   Returned by the exception handlers registered in main.py.

    Example:
        {
            "error": "authorization_error",
            "message": "You are not authorized to edit this photo",
            "details": {"resource": "photo", "action": "edit"},
            "request_id": "a1b2c3d4-..."
        }
    """
    error: str = Field(description="Machine-readable error category")
    message: str = Field(description="Human-readable error description")
    details: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Additional context (field name, resource, ...)"
    )
    request_id: Optional[str] = Field(
        default=None,
        description="Correlation ID for log tracing"
    )


class HealthResponse(BaseModel):
    status: str = Field(description="Overall health: healthy or degraded")
    database: str = Field(description="Database connectivity: connected or disconnected")
    version: str = Field(description="Application version")
    uptime_seconds: float = Field(description="Seconds since the process started")


class UserSummary(BaseModel):
    """Owner details embedded in photo, comment and social media responses."""
    id: int
    username: str
    email: str

    model_config = {"from_attributes": True}


class PhotoSummary(BaseModel):
    id: int
    title: str
    caption: str
    photo_url: str
    user_id: int

    model_config = {"from_attributes": True}
