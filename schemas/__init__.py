# schemas/__init__.py
from .place import (
     PlaceUpdate,
     PlaceResponse,
     PlaceEnvelope,
     PlaceListResponse,
)
from .user import (
     LoginRequest,
     AuthResponse,
     UserResponse,
     UserListResponse,
)

__all__ = [
     "PlaceUpdate",
     "PlaceResponse",
     "PlaceEnvelope",
     "PlaceListResponse",
     "LoginRequest",
     "AuthResponse",
     "UserResponse",
     "UserListResponse",
]
