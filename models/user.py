# models/user.py
from sqlalchemy import Column, Integer, String, DateTime, func
from .base import Base


class User(Base):
     """
     User model - account table for authentication and place ownership.

     The set of places a user owns lives in ``user_places`` (see UserPlace)
     and is only changed by PlaceService, in the same transaction as the
     place itself.
     """
     __tablename__ = "users"

     id = Column(Integer, primary_key=True, autoincrement=True)
     email = Column(String(255), unique=True, nullable=False, index=True)
     password = Column(String(255), nullable=False)  # bcrypt hash
     name = Column(String(200), nullable=False)
     image = Column(String(500), nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}')>"
