# dependencies.py
"""
FastAPI dependencies: service wiring and the auth gate.

Everything configurable is built from config.Settings here, once, and
handed to the services explicitly. Tests swap any of these through
app.dependency_overrides.
"""
import logging
from functools import lru_cache
from typing import Optional

from fastapi import BackgroundTasks, Depends, Request
from sqlalchemy.orm import Session

from config import get_settings
from database import get_session
from services import (
     AzureBlobAssetStore,
     GoogleGeocoder,
     LocalAssetStore,
     PasswordHasher,
     PlaceService,
     StaticGeocoder,
     TokenConfig,
     TokenService,
     UserService,
)
from services.exceptions import AuthenticationError, InvalidTokenError

logger = logging.getLogger(__name__)


@lru_cache
def get_token_service() -> TokenService:
     settings = get_settings()
     return TokenService(
          TokenConfig(
               secret_key=settings.jwt_secret,
               algorithm=settings.jwt_algorithm,
               ttl=settings.jwt_ttl,
          )
     )


@lru_cache
def get_password_hasher() -> PasswordHasher:
     return PasswordHasher(rounds=get_settings().bcrypt_rounds)


@lru_cache
def get_geocoder():
     settings = get_settings()
     if not settings.google_api_key:
          logger.warning("No GOOGLE_API_KEY set. Every address resolves to a fixed point.")
          return StaticGeocoder()
     return GoogleGeocoder(settings.google_api_key, base_url=settings.geocode_url)


@lru_cache
def get_asset_store():
     settings = get_settings()
     if settings.asset_backend == "azure":
          return AzureBlobAssetStore.from_account(
               settings.azure_storage_account,
               settings.azure_storage_key,
               settings.azure_container,
          )
     return LocalAssetStore(settings.upload_dir)


# ---------------------------------------------------------------------------
# Auth gate
# ---------------------------------------------------------------------------

class AuthGate:
     """
     Verifies the bearer token on a request and yields the user id.

     Pre-flight (OPTIONS) requests pass through with no identity. Every
     other failure, whether the header is missing, malformed or the token
     is bad or expired, becomes the same AuthenticationError.
     """

     def __call__(
          self,
          request: Request,
          tokens: TokenService = Depends(get_token_service),
     ) -> Optional[int]:
          if request.method == "OPTIONS":
               return None

          try:
               token = self._extract_bearer(request.headers.get("Authorization"))
               identity = tokens.verify(token)
          except InvalidTokenError as exc:
               logger.debug("Rejected %s %s: %r", request.method, request.url.path, exc.__cause__ or exc)
               raise AuthenticationError() from None

          request.state.identity = identity
          return identity

     @staticmethod
     def _extract_bearer(header: Optional[str]) -> str:
          if not header:
               raise InvalidTokenError()
          parts = header.split(" ")
          if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
               raise InvalidTokenError()
          return parts[1]


verify_token = AuthGate()


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------

def get_place_service(
     background_tasks: BackgroundTasks,
     db: Session = Depends(get_session),
     geocoder=Depends(get_geocoder),
     asset_store=Depends(get_asset_store),
) -> PlaceService:
     return PlaceService(
          db,
          geocoder=geocoder,
          asset_store=asset_store,
          release_scheduler=background_tasks.add_task,
     )


def get_user_service(
     db: Session = Depends(get_session),
     hasher: PasswordHasher = Depends(get_password_hasher),
     tokens: TokenService = Depends(get_token_service),
) -> UserService:
     return UserService(db, hasher, tokens)
