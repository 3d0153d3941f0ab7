"""Azure Blob Storage utilities for audio and file attachments."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import PurePosixPath
from typing import Optional
from uuid import uuid4

from azure.core.exceptions import ResourceExistsError
from azure.storage.blob import BlobServiceClient, ContainerClient, ContentSettings

from chatline.config import get_settings

AUDIO_FOLDER = "chat_audio"
FILE_FOLDER = "chat_files"


@dataclass(frozen=True)
class StoredObject:
    """Durable reference returned for an uploaded attachment."""

    url: str
    content_type: str
    original_name: str


@lru_cache
def _get_blob_service_client() -> BlobServiceClient:
    settings = get_settings()
    if not settings.azure_storage_connection_string:
        msg = "Azure storage connection string is not configured"
        raise RuntimeError(msg)
    return BlobServiceClient.from_connection_string(
        settings.azure_storage_connection_string
    )


@lru_cache
def _get_container_client() -> ContainerClient:
    settings = get_settings()
    if not settings.azure_storage_container_name:
        msg = "Azure storage container name is not configured"
        raise RuntimeError(msg)
    service_client = _get_blob_service_client()
    try:
        service_client.create_container(settings.azure_storage_container_name)
    except ResourceExistsError:
        pass
    return service_client.get_container_client(settings.azure_storage_container_name)


class BlobObjectStorage:
    """Store uploads in the configured container and hand back their URL."""

    def store(
        self,
        folder: str,
        filename: str,
        data: bytes,
        *,
        content_type: Optional[str] = None,
    ) -> StoredObject:
        suffix = PurePosixPath(filename).suffix.lower()
        blob_path = f"{folder}/{uuid4().hex}{suffix}"
        blob_client = _get_container_client().get_blob_client(blob_path)
        content_settings = None
        if content_type is not None:
            content_settings = ContentSettings(content_type=content_type)
        blob_client.upload_blob(data, overwrite=True, content_settings=content_settings)
        return StoredObject(
            url=blob_client.url,
            content_type=content_type or "application/octet-stream",
            original_name=filename,
        )


__all__ = ["AUDIO_FOLDER", "FILE_FOLDER", "BlobObjectStorage", "StoredObject"]
