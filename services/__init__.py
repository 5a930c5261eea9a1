# services/__init__.py
from .place_service import PlaceService
from .user_service import UserService, AuthResult
from .security import PasswordHasher, TokenService, TokenConfig
from .geocoding import Coordinates, GoogleGeocoder, StaticGeocoder
from .asset_store import LocalAssetStore, AzureBlobAssetStore, release_asset_quietly

__all__ = [
     "PlaceService",
     "UserService",
     "AuthResult",
     "PasswordHasher",
     "TokenService",
     "TokenConfig",
     "Coordinates",
     "GoogleGeocoder",
     "StaticGeocoder",
     "LocalAssetStore",
     "AzureBlobAssetStore",
     "release_asset_quietly",
]
