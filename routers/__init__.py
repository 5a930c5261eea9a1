# routers/__init__.py
from .places import router as places_router
from .users import router as users_router

__all__ = ["places_router", "users_router"]
