# services/exceptions.py
"""
Error kinds raised by the service layer.

Services raise these; main.py maps each kind to an HTTP status. Messages
are safe to show to clients.
"""


class PlacesError(Exception):
     """Base class for every error the service layer raises on purpose."""

     default_message = "Something went wrong, please try again later."

     def __init__(self, message: str = None):
          self.message = message or self.default_message
          super().__init__(self.message)


# ---------------------------------------------------------------------------
# Lookups and ownership
# ---------------------------------------------------------------------------

class NotFoundError(PlacesError):
     default_message = "Could not find the requested resource."


class OwnerNotFoundError(NotFoundError):
     default_message = "Could not find user for provided id."


class PlaceNotFoundError(NotFoundError):
     default_message = "Could not find a place for the provided id."


class ForbiddenError(PlacesError):
     default_message = "You are not allowed to modify this place."


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------

class PersistenceError(PlacesError):
     default_message = "Saving to the database failed, please try again."


class RecordLookupError(PersistenceError):
     """Storage failed while reading; distinct from "nothing matched"."""

     default_message = "Fetching data failed, please try again later."


# ---------------------------------------------------------------------------
# Credentials and tokens
# ---------------------------------------------------------------------------

class HashingError(PlacesError):
     default_message = "Could not create user, please try again."


class HashFormatError(PlacesError):
     default_message = "Stored credentials are unreadable."


class SigningError(PlacesError):
     default_message = "Could not issue a session token."


class AuthenticationError(PlacesError):
     default_message = "Authentication failed!"


class InvalidTokenError(AuthenticationError):
     pass


class InvalidCredentialsError(AuthenticationError):
     default_message = "Could not identify user, credentials seem to be wrong."


class DuplicateAccountError(PlacesError):
     default_message = "User already exists, please login instead."


# ---------------------------------------------------------------------------
# External collaborators
# ---------------------------------------------------------------------------

class GeocodeError(PlacesError):
     default_message = "Could not find location for the specified address."
