"""
Shared response schemas
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Error body returned by every failing request."""

    error: str = Field(description="Human-readable error message")

    model_config = ConfigDict(
        json_schema_extra={"example": {"error": "malformatted id"}}
    )


class HealthCheckResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(description="Overall health status")
    version: str = Field(description="Application version")
    database: Dict[str, Any] = Field(description="Database connectivity check")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "healthy",
                "version": "1.0.0",
                "database": {"connected": True, "status": "healthy", "response_time_ms": 1.2},
            }
        }
    )
