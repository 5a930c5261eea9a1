# services/geocoding.py
"""
Address -> coordinate lookup.

GoogleGeocoder calls the Google Geocoding API; StaticGeocoder returns a
fixed point and is used when no API key is configured.
"""
import logging
from dataclasses import dataclass

import requests

from .exceptions import GeocodeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Coordinates:
     lat: float
     lng: float


class GoogleGeocoder:

     def __init__(
          self,
          api_key: str,
          base_url: str = "https://maps.googleapis.com/maps/api/geocode/json",
          timeout: float = 10,
          http=requests,
     ):
          self.api_key = api_key
          self.base_url = base_url
          self.timeout = timeout
          self.http = http

     def resolve(self, address: str) -> Coordinates:
          try:
               response = self.http.get(
                    self.base_url,
                    params={"address": address, "key": self.api_key},
                    timeout=self.timeout,
               )
          except requests.RequestException as exc:
               logger.warning("Geocoding request failed for %r: %s", address, exc)
               raise GeocodeError() from exc

          if response.status_code != 200:
               logger.warning("Geocoding returned HTTP %s for %r", response.status_code, address)
               raise GeocodeError()

          data = response.json()
          if not data or data.get("status") != "OK" or not data.get("results"):
               raise GeocodeError()

          location = data["results"][0]["geometry"]["location"]
          return Coordinates(lat=float(location["lat"]), lng=float(location["lng"]))


class StaticGeocoder:
     """Development stand-in: every address resolves to the same point."""

     def __init__(self, lat: float = 40.7484405, lng: float = -73.9878584):
          self.coordinates = Coordinates(lat=lat, lng=lng)

     def resolve(self, address: str) -> Coordinates:
          if not address or not address.strip():
               raise GeocodeError()
          return self.coordinates
