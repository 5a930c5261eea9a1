# services/asset_store.py
"""
Storage for uploaded images.

save() returns an opaque reference that is stored on the Place/User row;
release() deletes the blob behind a reference. Releases run after the
database transaction has committed and never affect the request outcome,
see release_asset_quietly().
"""
import logging
import os
import shutil
import uuid
from typing import Optional

from azure.storage.blob import BlobServiceClient

logger = logging.getLogger(__name__)


def _extension(filename: Optional[str]) -> str:
     return os.path.splitext(filename or "")[1].lower()


class LocalAssetStore:
     """Files on local disk, served by the /uploads static mount."""

     def __init__(self, upload_dir: str):
          self.upload_dir = upload_dir
          os.makedirs(self.upload_dir, exist_ok=True)

     def save(self, upload) -> str:
          filename = f"{uuid.uuid4()}{_extension(upload.filename)}"
          file_path = os.path.join(self.upload_dir, filename)
          with open(file_path, "wb") as buffer:
               shutil.copyfileobj(upload.file, buffer)
          return file_path.replace(os.sep, "/")

     def release(self, reference: str) -> None:
          os.remove(reference)


class AzureBlobAssetStore:
     """Blobs in one Azure Storage container; references are blob URLs."""

     def __init__(self, container: str, blob_service: BlobServiceClient):
          self.container = container
          self.blob_service = blob_service

     @classmethod
     def from_account(cls, account: str, key: str, container: str) -> "AzureBlobAssetStore":
          blob_service = BlobServiceClient.from_connection_string(
               f"DefaultEndpointsProtocol=https;"
               f"AccountName={account};"
               f"AccountKey={key};"
               f"EndpointSuffix=core.windows.net"
          )
          return cls(container, blob_service)

     def save(self, upload) -> str:
          blob_name = f"{uuid.uuid4()}{_extension(upload.filename)}"
          blob_client = self.blob_service.get_blob_client(container=self.container, blob=blob_name)
          blob_client.upload_blob(upload.file, overwrite=True)
          return blob_client.url

     def release(self, reference: str) -> None:
          """
          Deletes a blob using its full URL
          """
          parts = reference.split("/")
          container = parts[-2]
          blob_name = parts[-1]
          blob_client = self.blob_service.get_blob_client(
               container=container,
               blob=blob_name
          )
          blob_client.delete_blob()


def release_asset_quietly(store, reference: Optional[str]) -> None:
     """Best-effort release: failures are logged, never raised or retried."""
     if not reference or store is None:
          return
     try:
          store.release(reference)
          logger.info("Released asset %s", reference)
     except Exception:
          logger.exception("Could not release asset %s", reference)
