# routers/places.py
"""
Place API routes.

Reads are public. Create, update and delete go through the auth gate and
act as the user the bearer token was issued for.
"""
from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from dependencies import get_asset_store, get_place_service, verify_token
from schemas.place import PlaceEnvelope, PlaceListResponse, PlaceResponse, PlaceUpdate
from services import PlaceService, release_asset_quietly
from services.exceptions import PlacesError

router = APIRouter(prefix="/api/places", tags=["places"])


@router.get(
     "/user/{user_id}",
     response_model=PlaceListResponse,
     summary="List places created by a user"
)
def get_places_by_user_id(
     user_id: int,
     places: PlaceService = Depends(get_place_service),
):
     """Returns an empty list when the user has no places."""
     found = places.list_places_for_user(user_id)
     return PlaceListResponse(places=[PlaceResponse.model_validate(p) for p in found])


@router.get(
     "/{place_id}",
     response_model=PlaceEnvelope,
     summary="Get place by ID"
)
def get_place_by_id(
     place_id: int,
     places: PlaceService = Depends(get_place_service),
):
     place = places.get_place(place_id)
     return PlaceEnvelope(place=PlaceResponse.model_validate(place))


@router.post(
     "",
     response_model=PlaceEnvelope,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new place"
)
def create_place(
     title: str = Form(..., min_length=1),
     description: str = Form(..., min_length=5),
     address: str = Form(..., min_length=1),
     image: UploadFile = File(...),
     identity: int = Depends(verify_token),
     places: PlaceService = Depends(get_place_service),
     asset_store=Depends(get_asset_store),
):
     """
     Create a place owned by the authenticated user.

     - **title**: required
     - **description**: at least 5 characters
     - **address**: resolved to coordinates
     - **image**: uploaded picture of the place
     """
     reference = asset_store.save(image)
     try:
          place = places.create_place(
               identity,
               title=title,
               description=description,
               address=address,
               image=reference,
          )
     except PlacesError:
          # Nothing references the upload any more
          release_asset_quietly(asset_store, reference)
          raise

     return PlaceEnvelope(place=PlaceResponse.model_validate(place))


@router.patch(
     "/{place_id}",
     response_model=PlaceEnvelope,
     summary="Update place"
)
def update_place(
     place_id: int,
     place_data: PlaceUpdate,
     identity: int = Depends(verify_token),
     places: PlaceService = Depends(get_place_service),
):
     place = places.update_place(
          identity,
          place_id,
          title=place_data.title,
          description=place_data.description,
     )
     return PlaceEnvelope(place=PlaceResponse.model_validate(place))


@router.delete(
     "/{place_id}",
     summary="Delete place"
)
def delete_place(
     place_id: int,
     identity: int = Depends(verify_token),
     places: PlaceService = Depends(get_place_service),
):
     """
     Delete a place. The image is removed in the background after the
     response is sent.
     """
     places.delete_place(identity, place_id)
     return {"message": "Deleted place."}
