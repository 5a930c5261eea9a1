# services/user_service.py
"""
User Service - signup, login and the public user listing.

Login never says which half of the credentials was wrong.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from models import User
from .exceptions import (
     DuplicateAccountError,
     InvalidCredentialsError,
     PersistenceError,
     RecordLookupError,
)
from .repositories import UserRepository
from .security import PasswordHasher, TokenService

logger = logging.getLogger(__name__)


@dataclass
class AuthResult:
     user_id: int
     email: str
     token: str


class UserService:

     def __init__(self, db: Session, hasher: PasswordHasher, tokens: TokenService):
          self.db = db
          self.hasher = hasher
          self.tokens = tokens
          self.users = UserRepository(db)

     def list_users(self) -> List[User]:
          try:
               return self.users.list_all()
          except SQLAlchemyError as exc:
               raise RecordLookupError("Fetching users failed, please try again later.") from exc

     def place_ids(self, user_id: int) -> set:
          try:
               return self.users.place_ids(user_id)
          except SQLAlchemyError as exc:
               raise RecordLookupError() from exc

     def signup(self, name: str, email: str, password: str, image: Optional[str] = None) -> AuthResult:
          """
          Create a user and return a session token for it.

          Raises:
               DuplicateAccountError: the email is already registered
               HashingError: the password could not be hashed
               PersistenceError: the user could not be saved
               SigningError: the token could not be issued
          """
          try:
               existing = self.users.get_by_email(email)
          except SQLAlchemyError as exc:
               raise PersistenceError("Signing up failed, please try again later.") from exc

          if existing is not None:
               raise DuplicateAccountError()

          hashed = self.hasher.hash(password)
          user = User(name=name, email=email, password=hashed, image=image)

          try:
               self.users.add(user)
               self.db.commit()
          except IntegrityError as exc:
               # Lost a race with a concurrent signup for the same email
               self.db.rollback()
               raise DuplicateAccountError() from exc
          except SQLAlchemyError as exc:
               self.db.rollback()
               raise PersistenceError("Could not save user to database.") from exc

          logger.info("Signed up user %s", user.id)
          token = self.tokens.issue(user.id, email=user.email)
          return AuthResult(user_id=user.id, email=user.email, token=token)

     def login(self, email: str, password: str) -> AuthResult:
          try:
               user = self.users.get_by_email(email)
          except SQLAlchemyError as exc:
               raise PersistenceError("Logging in failed, please try again later.") from exc

          if user is None:
               self.hasher.dummy_verify()
               raise InvalidCredentialsError()

          if not self.hasher.verify(password, user.password):
               logger.info("Rejected login for user %s", user.id)
               raise InvalidCredentialsError()

          token = self.tokens.issue(user.id, email=user.email)
          return AuthResult(user_id=user.id, email=user.email, token=token)
