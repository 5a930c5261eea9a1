# models/place.py
from sqlalchemy import Column, Integer, String, Text, Float, DateTime, ForeignKey, func
from .base import Base


class Place(Base):
     """
     Place model - a location owned by exactly one user.

     latitude/longitude are resolved from ``address`` when the place is
     created. ``image`` is an asset reference (local path or blob URL).
     """
     __tablename__ = "places"

     id = Column(Integer, primary_key=True, autoincrement=True)
     title = Column(String(255), nullable=False)
     description = Column(Text, nullable=False)
     address = Column(String(500), nullable=False)

     # Location
     latitude = Column(Float, nullable=False)
     longitude = Column(Float, nullable=False)

     image = Column(String(500), nullable=True)
     creator_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

     def __repr__(self):
          return f"<Place(id={self.id}, title='{self.title}', creator_id={self.creator_id})>"

     @property
     def location(self) -> dict:
          return {"lat": self.latitude, "lng": self.longitude}
