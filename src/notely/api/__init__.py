"""API routers for Notely."""

from .health import router as health_router
from .login import router as login_router
from .notes import router as notes_router
from .testing import router as testing_router
from .users import router as users_router

__all__ = ["notes_router", "users_router", "login_router", "health_router", "testing_router"]
