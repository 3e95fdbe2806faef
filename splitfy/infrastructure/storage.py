"""Azure Blob Storage helpers for user uploaded objects."""

from __future__ import annotations

import uuid
from functools import lru_cache
from pathlib import PurePosixPath

from azure.core.exceptions import ResourceExistsError
from azure.storage.blob import BlobServiceClient, ContainerClient, ContentSettings

from splitfy.config import get_settings


class StorageNotConfiguredError(RuntimeError):
    """Raised when the blob storage settings are missing."""


def is_storage_configured() -> bool:
    settings = get_settings()
    return bool(
        settings.azure_storage_connection_string
        and settings.azure_storage_container_name
    )


@lru_cache
def _get_container_client() -> ContainerClient:
    settings = get_settings()
    if not is_storage_configured():
        raise StorageNotConfiguredError("Azure storage is not configured")
    service_client = BlobServiceClient.from_connection_string(
        settings.azure_storage_connection_string
    )
    container_name = settings.azure_storage_container_name
    try:
        service_client.create_container(container_name, public_access="blob")
    except ResourceExistsError:
        pass
    return service_client.get_container_client(container_name)


def build_object_path(user_id: int, filename: str | None) -> str:
    """Return a unique blob path below the user's upload folder."""

    suffix = PurePosixPath(filename or "").suffix.lower()
    return f"uploads/{user_id}/{uuid.uuid4().hex}{suffix}"


def upload_object(
    blob_path: str,
    data: bytes,
    *,
    content_type: str | None = None,
) -> str:
    """Upload ``data`` at ``blob_path`` and return its public URL."""

    container_client = _get_container_client()
    blob_client = container_client.get_blob_client(blob_path)
    content_settings = None
    if content_type is not None:
        content_settings = ContentSettings(content_type=content_type)
    blob_client.upload_blob(data, overwrite=True, content_settings=content_settings)
    return blob_client.url


__all__ = [
    "StorageNotConfiguredError",
    "is_storage_configured",
    "build_object_path",
    "upload_object",
]
