# services/security.py
"""
Credential hashing and session tokens.

- PasswordHasher: bcrypt (passlib) hashing and verification of user secrets
- TokenService: issues and verifies signed, time-limited JWTs (python-jose)
  carrying the user id

Both are configured explicitly at construction; see dependencies.py for how
the application wires them from Settings.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt
from jose.exceptions import JOSEError
from passlib.context import CryptContext

from .exceptions import HashingError, HashFormatError, InvalidTokenError, SigningError

DEFAULT_TOKEN_TTL = timedelta(hours=1)


# ---------------------------------------------------------------------------
# PASSWORD HASHING
# ---------------------------------------------------------------------------

class PasswordHasher:
     """bcrypt with a configurable cost factor. Slow on purpose."""

     def __init__(self, rounds: int = 12):
          self.rounds = rounds
          self._context = CryptContext(
               schemes=["bcrypt"],
               deprecated="auto",
               bcrypt__rounds=rounds,
          )

     def hash(self, plain: str) -> str:
          try:
               return self._context.hash(plain)
          except Exception as exc:
               raise HashingError() from exc

     def verify(self, plain: str, hashed: str) -> bool:
          """
          Return True if ``plain`` matches ``hashed``.

          A mismatch is False, never an error. HashFormatError means the
          stored hash itself is not a usable bcrypt hash.
          """
          try:
               return self._context.verify(plain, hashed)
          except (ValueError, TypeError) as exc:
               raise HashFormatError() from exc

     def dummy_verify(self) -> None:
          """Spend the time of a real verify. Used when there is no stored hash."""
          self._context.dummy_verify()


# ---------------------------------------------------------------------------
# JWT TOKENS
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TokenConfig:
     secret_key: Optional[str]
     algorithm: str = "HS256"
     ttl: timedelta = DEFAULT_TOKEN_TTL


class TokenService:
     """
     Sole component that mints and parses session tokens.

     Claims: {"id": <user id>, "email": <email>, "iat": ..., "exp": ...}.
     """

     def __init__(self, config: TokenConfig):
          self.config = config

     def issue(
          self,
          identity: int,
          email: Optional[str] = None,
          ttl: Optional[timedelta] = None,
          secret_key: Optional[str] = None,
     ) -> str:
          key = secret_key if secret_key is not None else self.config.secret_key
          if not key:
               raise SigningError("Signing key is not configured.")

          now = datetime.now(timezone.utc)
          claims = {
               "id": identity,
               "email": email,
               "iat": now,
               "exp": now + (ttl if ttl is not None else self.config.ttl),
          }
          try:
               return jwt.encode(claims, key, algorithm=self.config.algorithm)
          except JOSEError as exc:
               raise SigningError() from exc

     def verify(self, token: str, secret_key: Optional[str] = None) -> int:
          """
          Decode ``token`` and return the user id it was issued for.

          Malformed, unsigned, mis-signed and expired tokens all raise
          InvalidTokenError.
          """
          key = secret_key if secret_key is not None else self.config.secret_key
          if not key or not token:
               raise InvalidTokenError()
          try:
               payload = jwt.decode(token, key, algorithms=[self.config.algorithm])
          except JOSEError as exc:
               raise InvalidTokenError() from exc

          identity = payload.get("id")
          if not isinstance(identity, int) or isinstance(identity, bool):
               raise InvalidTokenError()
          return identity
