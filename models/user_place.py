# models/user_place.py
"""
UserPlace model - the account side of the user <-> place link.

One row per place a user owns. Place.creator_id is the other side; the two
must always agree.
"""
from sqlalchemy import Column, Integer, ForeignKey
from .base import Base


class UserPlace(Base):
     __tablename__ = "user_places"

     user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
     place_id = Column(Integer, ForeignKey("places.id"), primary_key=True, unique=True)

     def __repr__(self):
          return f"<UserPlace(user_id={self.user_id}, place_id={self.place_id})>"
