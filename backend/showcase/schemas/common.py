"""
Showcase Backend — Shared Pydantic Schemas
===========================================

What:  Response envelopes used by every endpoint (message, error, health)
       and the base classes the per-entity schemas build on.

Serialization conventions:
    - Keys are camelCase on the wire (created_at → createdAt)
    - Record identifiers are emitted as "_id", the key the landing page and
      admin panel read
    - Input schemas accept camelCase keys (fullName) as well as snake_case
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RecordResponse(BaseModel):
    """Base for stored records returned by the API."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: uuid.UUID = Field(alias="_id", description="Server-assigned identifier")
    created_at: datetime = Field(description="When the record was created (UTC ISO 8601)")


class RecordCreate(BaseModel):
    """Base for request payloads: trims text and rejects blank values."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class MessageResponse(BaseModel):
    """Plain acknowledgement, e.g. {"message": "Contact deleted successfully"}."""

    message: str = Field(description="Human-readable result")


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "Project not found",
            "details": {"resource": "Project", "resource_id": "..."},
            "request_id": "1f2e3d4c"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /api/health. Always HTTP 200 while the process runs."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: str = Field(description="Always 'Server is running'")
    timestamp: datetime = Field(description="Current server time (UTC)")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
