"""
StackIt Backend — Shared Response Schemas
===========================================

What:  Response shapes reused by every resource: pagination metadata,
       plain acknowledgement messages, errors and the health probe.
"""

from typing import Optional

from pydantic import BaseModel, Field


class Pagination(BaseModel):
    """
    Offset pagination metadata attached to every list response.

    Example:
        {"current_page": 2, "total_pages": 5, "total_count": 47, "has_more": true}
    """
    current_page: int = Field(description="1-based page number that was returned")
    total_pages: int = Field(description="ceil(total_count / limit)")
    total_count: int = Field(description="Total number of items matching the filters")
    has_more: bool = Field(description="Whether a page after this one exists")


class MessageResponse(BaseModel):
    """Acknowledgement for mutations that return nothing else."""
    message: str = Field(description="Human-readable outcome")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "validation_error", "not_found")
        message: Human-readable description for display to users
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
