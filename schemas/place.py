# schemas/place.py
"""
Pydantic schemas for Place API request/response validation.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict


class PlaceUpdate(BaseModel):
     """Schema for updating an existing place."""
     title: str = Field(..., min_length=1, max_length=255)
     description: str = Field(..., min_length=5)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "title": "Cafe",
                    "description": "Nice coffee shop downtown"
               }
          }
     )


class Location(BaseModel):
     lat: float
     lng: float


class PlaceResponse(BaseModel):
     """Schema for place response."""
     id: int
     title: str
     description: str
     address: str
     location: Location
     image: Optional[str] = None
     creator_id: int
     created_at: Optional[datetime] = None

     model_config = ConfigDict(
          from_attributes=True,
          json_schema_extra={
               "example": {
                    "id": 1,
                    "title": "Cafe",
                    "description": "Nice coffee shop downtown",
                    "address": "1 Main St",
                    "location": {"lat": 40.7484405, "lng": -73.9878584},
                    "image": "uploads/images/3f1c9a.jpg",
                    "creator_id": 1,
                    "created_at": "2026-01-31T10:30:00"
               }
          }
     )


class PlaceEnvelope(BaseModel):
     place: PlaceResponse


class PlaceListResponse(BaseModel):
     places: List[PlaceResponse]
