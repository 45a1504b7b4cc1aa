"""
Pydantic schemas for validating and documenting API requests and responses.
"""

from .auth import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from .common import ErrorResponse, HealthCheckResponse
from .notes import NoteCreate, NoteResponse, NoteUpdate

__all__ = [
    # Auth / user schemas
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "UserResponse",
    # Note schemas
    "NoteCreate",
    "NoteUpdate",
    "NoteResponse",
    # Common schemas
    "ErrorResponse",
    "HealthCheckResponse",
]
