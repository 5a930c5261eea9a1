# schemas/user.py
"""
Pydantic schemas for signup, login and user listing.
"""
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict


class LoginRequest(BaseModel):
     email: str
     password: str


class AuthResponse(BaseModel):
     """Returned by signup and login."""
     userId: int
     email: str
     token: str

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "userId": 1,
                    "email": "a@x.com",
                    "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."
               }
          }
     )


class UserResponse(BaseModel):
     """Public view of a user; the password hash is never included."""
     id: int
     name: str
     email: str
     image: Optional[str] = None
     places: List[int] = Field(default_factory=list)

     model_config = ConfigDict(from_attributes=True)


class UserListResponse(BaseModel):
     users: List[UserResponse]
