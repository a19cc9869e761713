"""Common DTOs for API responses and error handling."""
from __future__ import annotations

from pydantic import BaseModel, Field, RootModel


class FieldErrors(RootModel[dict[str, str]]):
    """Error body keyed by the offending field, e.g. ``{"email": "Email is invalid"}``."""


class UnauthorizedResponse(BaseModel):
    """Body returned when the bearer token is missing or invalid."""
    detail: str = Field("Unauthorized", description="Error message")


class SuccessResponse(BaseModel):
    """Standard success response model."""
    success: bool = Field(True, description="Indicates the operation was successful")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Health status", example="healthy")


class RootResponse(BaseModel):
    """Root endpoint response model."""
    status: str = Field(..., description="API status", example="ok")
    service: str = Field(..., description="Service name", example="devconnect-backend")
    version: str = Field(..., description="API version", example="0.1.0")
