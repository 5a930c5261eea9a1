# services/repositories.py
"""
Thin repositories over the users, places and user_places tables.

They only read and stage writes on the session they are given; committing
and rolling back is the caller's job. Storage failures surface as
SQLAlchemyError for the service layer to translate.
"""
from typing import List, Optional, Set

from sqlalchemy import func
from sqlalchemy.orm import Session

from models import Place, User, UserPlace


class UserRepository:

     def __init__(self, db: Session):
          self.db = db

     def get(self, user_id: int) -> Optional[User]:
          return self.db.query(User).filter(User.id == user_id).first()

     def get_for_update(self, user_id: int) -> Optional[User]:
          """Load the user and lock its row until the transaction ends."""
          return (
               self.db.query(User)
               .filter(User.id == user_id)
               .with_for_update()
               .first()
          )

     def get_by_email(self, email: str) -> Optional[User]:
          return self.db.query(User).filter(User.email == email).first()

     def list_all(self) -> List[User]:
          return self.db.query(User).order_by(User.id).all()

     def add(self, user: User) -> User:
          self.db.add(user)
          self.db.flush()
          return user

     def place_ids(self, user_id: int) -> Set[int]:
          rows = self.db.query(UserPlace.place_id).filter(UserPlace.user_id == user_id).all()
          return {row[0] for row in rows}

     def add_place_ref(self, user: User, place_id: int) -> None:
          self.db.add(UserPlace(user_id=user.id, place_id=place_id))
          user.updated_at = func.now()
          self.db.flush()

     def remove_place_ref(self, user: User, place_id: int) -> int:
          """Drop the link row and return how many rows matched."""
          removed = self.db.query(UserPlace).filter(
               UserPlace.user_id == user.id,
               UserPlace.place_id == place_id,
          ).delete(synchronize_session=False)
          user.updated_at = func.now()
          self.db.flush()
          return removed


class PlaceRepository:

     def __init__(self, db: Session):
          self.db = db

     def get(self, place_id: int) -> Optional[Place]:
          return self.db.query(Place).filter(Place.id == place_id).first()

     def get_for_update(self, place_id: int) -> Optional[Place]:
          """Re-read the place from the database and lock its row."""
          return (
               self.db.query(Place)
               .filter(Place.id == place_id)
               .with_for_update()
               .populate_existing()
               .first()
          )

     def list_by_creator(self, user_id: int) -> List[Place]:
          return (
               self.db.query(Place)
               .filter(Place.creator_id == user_id)
               .order_by(Place.id)
               .all()
          )

     def add(self, place: Place) -> Place:
          self.db.add(place)
          self.db.flush()  # Flush to get the ID without committing
          return place

     def delete(self, place: Place) -> None:
          self.db.delete(place)
          self.db.flush()
