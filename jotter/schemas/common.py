"""
Jotter Backend — Response Envelope
====================================

Every response body, success or error, has the same outer shape:

    {"status": "SUCCESS" | "ERROR", "message": "...", "data": {...}}

`data` is present only when the endpoint has a payload.
"""

from typing import Generic, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base for payload models: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    """Envelope without a payload (e.g. resend-otp)."""

    status: Literal["SUCCESS", "ERROR"] = Field(default="SUCCESS")
    message: str = Field(description="Human-readable outcome")


class ApiResponse(MessageResponse, Generic[DataT]):
    """Envelope carrying an endpoint-specific payload."""

    data: Optional[DataT] = Field(default=None)


class ErrorResponse(MessageResponse):
    """Documented shape of every error body (status is always ERROR)."""

    status: Literal["SUCCESS", "ERROR"] = Field(default="ERROR")


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""

    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
    endpoints: dict = Field(default_factory=dict, description="Route overview")
