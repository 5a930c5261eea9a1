# routers/users.py
"""
User API routes: listing, signup and login.
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from dependencies import get_asset_store, get_user_service
from schemas.user import AuthResponse, LoginRequest, UserListResponse, UserResponse
from services import UserService, release_asset_quietly
from services.exceptions import PlacesError

router = APIRouter(prefix="/api/users", tags=["users"])

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


@router.get("", response_model=UserListResponse, summary="List users")
def get_all_users(users: UserService = Depends(get_user_service)):
     found = users.list_users()
     return UserListResponse(
          users=[
               UserResponse(
                    id=u.id,
                    name=u.name,
                    email=u.email,
                    image=u.image,
                    places=sorted(users.place_ids(u.id)),
               )
               for u in found
          ]
     )


@router.post(
     "/signup",
     response_model=AuthResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create an account"
)
def signup(
     name: str = Form(..., min_length=1),
     email: str = Form(..., pattern=EMAIL_PATTERN),
     password: str = Form(..., min_length=6),
     image: Optional[UploadFile] = File(None),
     users: UserService = Depends(get_user_service),
     asset_store=Depends(get_asset_store),
):
     reference = asset_store.save(image) if image is not None else None
     try:
          result = users.signup(name=name, email=email, password=password, image=reference)
     except PlacesError:
          release_asset_quietly(asset_store, reference)
          raise

     return AuthResponse(userId=result.user_id, email=result.email, token=result.token)


@router.post("/login", response_model=AuthResponse, summary="Log in")
def login(body: LoginRequest, users: UserService = Depends(get_user_service)):
     result = users.login(body.email, body.password)
     return AuthResponse(userId=result.user_id, email=result.email, token=result.token)
