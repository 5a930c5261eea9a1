# config.py
"""
Application configuration loaded from the environment (and .env).

Components receive the values they need explicitly; nothing outside this
module reads os.environ directly.
"""
import os
from dataclasses import dataclass, field
from datetime import timedelta
from functools import lru_cache
from typing import List, Optional
from urllib.parse import quote_plus

from dotenv import load_dotenv

# Load .env
load_dotenv()


def _build_mssql_url() -> str:
     """Build the Azure SQL (pymssql) URL from the individual DB_* variables."""
     safe_user = quote_plus(os.getenv("DB_USER") or "")
     safe_pass = quote_plus(os.getenv("DB_PASS") or "")
     server = os.getenv("DB_SERVER")
     port = os.getenv("DB_PORT", "1433")
     name = os.getenv("DB_NAME")
     return f"mssql+pymssql://{safe_user}:{safe_pass}@{server}:{port}/{name}"


@dataclass
class Settings:
     database_url: str
     sql_echo: bool = False

     jwt_secret: Optional[str] = None
     jwt_algorithm: str = "HS256"
     jwt_ttl: timedelta = timedelta(hours=1)
     bcrypt_rounds: int = 12

     google_api_key: Optional[str] = None
     geocode_url: str = "https://maps.googleapis.com/maps/api/geocode/json"

     asset_backend: str = "local"  # local, azure
     upload_dir: str = os.path.join("uploads", "images")
     azure_storage_account: Optional[str] = None
     azure_storage_key: Optional[str] = None
     azure_container: str = "places"

     cors_origins: List[str] = field(default_factory=list)
     log_level: str = "INFO"
     port: int = 10000

     @classmethod
     def from_env(cls) -> "Settings":
          origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
          return cls(
               database_url=os.getenv("DATABASE_URL") or _build_mssql_url(),
               sql_echo=os.getenv("SQL_ECHO", "false").lower() == "true",
               jwt_secret=os.getenv("JWT_SECRET"),
               jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
               jwt_ttl=timedelta(seconds=int(os.getenv("JWT_TTL_SECONDS", "3600"))),
               bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "12")),
               google_api_key=os.getenv("GOOGLE_API_KEY"),
               geocode_url=os.getenv("GEOCODE_URL", "https://maps.googleapis.com/maps/api/geocode/json"),
               asset_backend=os.getenv("ASSET_BACKEND", "local").lower(),
               upload_dir=os.getenv("UPLOAD_DIR", os.path.join("uploads", "images")),
               azure_storage_account=os.getenv("AZURE_STORAGE_ACCOUNT"),
               azure_storage_key=os.getenv("AZURE_STORAGE_KEY"),
               azure_container=os.getenv("AZURE_CONTAINER", "places"),
               cors_origins=origins,
               log_level=os.getenv("LOG_LEVEL", "INFO"),
               port=int(os.getenv("PORT", "10000")),
          )


@lru_cache
def get_settings() -> Settings:
     """Process-wide settings, read once."""
     return Settings.from_env()
