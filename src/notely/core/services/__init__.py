"""
Service layer interfaces and implementations.
"""

from .interfaces import IAuthService, IHealthService, INoteService, IUserService

from .auth_service import AuthService
from .health_service import HealthService
from .note_service import NoteService
from .user_service import UserService

__all__ = [
    # Interfaces
    "IAuthService",
    "INoteService",
    "IUserService",
    "IHealthService",

    # Implementations
    "AuthService",
    "NoteService",
    "UserService",
    "HealthService",
]
