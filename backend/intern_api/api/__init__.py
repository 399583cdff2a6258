"""HTTP layer: routers, request/response schemas and per-request dependencies."""

from .attendance_routes import router as attendance_router
from .auth_routes import router as auth_router
from .leave_routes import router as leave_router
from .settings_routes import router as settings_router

__all__ = ["attendance_router", "auth_router", "leave_router", "settings_router"]
