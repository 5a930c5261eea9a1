# models/__init__.py
from .base import Base
from .user import User
from .place import Place
from .user_place import UserPlace

__all__ = [
     "Base",
     "User",
     "Place",
     "UserPlace",
]
