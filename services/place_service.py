# services/place_service.py
"""
Place Service - owns the user <-> place link.

A place row and its entry in the owner's user_places set are always
written together:

- create: insert place + insert link, one commit
- delete: delete link + delete place, one commit
- update: place row only, the link is not touched

The owner's users row is locked (SELECT ... FOR UPDATE) for the life of a
create/delete transaction, so two writers on the same user queue up
instead of interleaving. Existence is always checked before ownership.
"""
import logging
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models import Place
from .asset_store import release_asset_quietly
from .exceptions import (
     ForbiddenError,
     OwnerNotFoundError,
     PersistenceError,
     PlaceNotFoundError,
     RecordLookupError,
)
from .repositories import PlaceRepository, UserRepository

logger = logging.getLogger(__name__)

ReleaseScheduler = Callable[..., None]


def _run_now(func, *args) -> None:
     func(*args)


class PlaceService:
     """Service class for place reads and ownership-checked writes."""

     def __init__(
          self,
          db: Session,
          geocoder=None,
          asset_store=None,
          release_scheduler: Optional[ReleaseScheduler] = None,
     ):
          self.db = db
          self.geocoder = geocoder
          self.asset_store = asset_store
          # FastAPI's BackgroundTasks.add_task in the web layer
          self.release_scheduler = release_scheduler or _run_now
          self.users = UserRepository(db)
          self.places = PlaceRepository(db)

     # ------------------------------------------------------------------
     # Reads
     # ------------------------------------------------------------------

     def get_place(self, place_id: int) -> Place:
          try:
               place = self.places.get(place_id)
          except SQLAlchemyError as exc:
               logger.error("Lookup of place %s failed: %s", place_id, exc)
               raise RecordLookupError() from exc

          if place is None:
               raise PlaceNotFoundError()
          return place

     def list_places_for_user(self, user_id: int) -> List[Place]:
          """Places created by ``user_id``; an empty list if there are none."""
          try:
               return self.places.list_by_creator(user_id)
          except SQLAlchemyError as exc:
               logger.error("Listing places for user %s failed: %s", user_id, exc)
               raise RecordLookupError("Fetching places failed, please try again later.") from exc

     # ------------------------------------------------------------------
     # Writes
     # ------------------------------------------------------------------

     def create_place(
          self,
          identity: int,
          title: str,
          description: str,
          address: str,
          image: Optional[str] = None,
     ) -> Place:
          """
          Create a place owned by ``identity`` and add it to the owner's set.

          Raises:
               OwnerNotFoundError: no user with id ``identity``
               GeocodeError: the address could not be resolved
               PersistenceError: the transaction failed; nothing was saved
          """
          coordinates = self.geocoder.resolve(address)

          try:
               owner = self.users.get_for_update(identity)
          except SQLAlchemyError as exc:
               self.db.rollback()
               raise PersistenceError("Creating place failed, please try again.") from exc

          if owner is None:
               self.db.rollback()
               raise OwnerNotFoundError()

          place = Place(
               title=title,
               description=description,
               address=address,
               latitude=coordinates.lat,
               longitude=coordinates.lng,
               image=image,
               creator_id=owner.id,
          )

          try:
               self.places.add(place)
               self.users.add_place_ref(owner, place.id)
               self.db.commit()
          except SQLAlchemyError as exc:
               self.db.rollback()
               logger.error("Creating place for user %s rolled back: %s", identity, exc)
               raise PersistenceError("Creating place failed, please try again.") from exc

          logger.info("User %s created place %s", identity, place.id)
          return place

     def update_place(
          self,
          identity: int,
          place_id: int,
          title: Optional[str] = None,
          description: Optional[str] = None,
     ) -> Place:
          try:
               place = self.places.get(place_id)
          except SQLAlchemyError as exc:
               self.db.rollback()
               raise RecordLookupError() from exc

          if place is None:
               raise PlaceNotFoundError()

          if place.creator_id != identity:
               raise ForbiddenError("You are not allowed to edit this place.")

          if title is not None:
               place.title = title
          if description is not None:
               place.description = description

          try:
               self.db.commit()
          except SQLAlchemyError as exc:
               self.db.rollback()
               raise PersistenceError("Could not save place to database.") from exc

          logger.info("User %s updated place %s", identity, place_id)
          return place

     def delete_place(self, identity: int, place_id: int) -> None:
          """
          Delete a place and remove it from its owner's set.

          The image is released after commit through ``release_scheduler``;
          a failed release is only logged.
          """
          try:
               place = self.places.get(place_id)
               owner = self.users.get_for_update(place.creator_id) if place is not None else None
               if place is not None:
                    # A delete that committed before the owner lock was granted
                    # leaves no row to re-read
                    place = self.places.get_for_update(place_id)
          except SQLAlchemyError as exc:
               self.db.rollback()
               raise PersistenceError("Could not delete place with provided id.") from exc

          if place is None:
               self.db.rollback()
               raise PlaceNotFoundError()

          if owner is None or owner.id != identity:
               self.db.rollback()
               raise ForbiddenError("You are not allowed to delete this place.")

          image = place.image

          try:
               if not self.users.remove_place_ref(owner, place.id):
                    self.db.rollback()
                    raise PlaceNotFoundError()
               self.places.delete(place)
               self.db.commit()
          except SQLAlchemyError as exc:
               self.db.rollback()
               logger.error("Deleting place %s rolled back: %s", place_id, exc)
               raise PersistenceError("Could not delete place in database.") from exc

          logger.info("User %s deleted place %s", identity, place_id)

          if image:
               self.release_scheduler(release_asset_quietly, self.asset_store, image)
