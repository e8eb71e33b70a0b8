"""Supabase Storage service for reading published game files."""
import json
from typing import Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from gameserve.config import Settings
from gameserve.services.artifacts import OptionalArtifact
from gameserve.utils.exceptions import ConfigurationError, StorageError, StorageObjectNotFound
from gameserve.utils.logger import logger

ModelT = TypeVar("ModelT", bound=BaseModel)


class StorageService:
    """Read-only client for the published-games bucket using the REST API."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        if not settings.storage_configured:
            raise ConfigurationError(
                "Supabase URL and secret key must be configured. "
                "Set SUPABASE_URL and SUPABASE_SECRET_KEY environment variables."
            )

        # Ensure URL doesn't have trailing slash
        self.supabase_url = settings.supabase_url.rstrip('/')
        self.supabase_key = settings.supabase_secret_key
        self.bucket_name = settings.storage_bucket
        self.storage_url = f"{self.supabase_url}/storage/v1"
        self.timeout = settings.storage_timeout_seconds
        self._transport = transport

    def _headers(self) -> dict:
        return {
            "apikey": self.supabase_key,
            "Authorization": f"Bearer {self.supabase_key}",
        }

    def object_url(self, storage_path: str) -> str:
        """Build the authenticated object URL, quoting each segment but keeping slashes."""
        path_segments = storage_path.strip('/').split('/')
        encoded_path = '/'.join(quote(segment, safe='') for segment in path_segments)
        return f"{self.storage_url}/object/{self.bucket_name}/{encoded_path}"

    @staticmethod
    def _is_missing_object(response: httpx.Response) -> bool:
        """
        Supabase reports a missing object as a plain 404 or as a 400 whose
        JSON body carries `"statusCode": "404"`.
        """
        if response.status_code == 404:
            return True
        if response.status_code != 400:
            return False
        try:
            payload = response.json()
        except ValueError:
            return False
        return isinstance(payload, dict) and str(payload.get("statusCode")) == "404"

    async def download(self, storage_path: str) -> bytes:
        """
        Download one object from the bucket.

        Args:
            storage_path: Path in storage bucket (e.g., "{user_id}/{project_id}/v1/index.html")

        Returns:
            Raw object bytes

        Raises:
            StorageObjectNotFound: The object does not exist
            StorageError: Transport, auth or any other unexpected failure
        """
        url = self.object_url(storage_path)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error(f"[STORAGE] Request failed for {storage_path}: {e}")
            raise StorageError(f"Storage request failed for {storage_path}") from e

        if response.status_code == 200:
            logger.debug(f"[STORAGE] Read {storage_path} ({len(response.content)} bytes)")
            return response.content

        if self._is_missing_object(response):
            logger.debug(f"[STORAGE] Object not found: {storage_path}")
            raise StorageObjectNotFound(storage_path)

        logger.error(
            f"[STORAGE] Unexpected response for {storage_path}: "
            f"{response.status_code} - {response.text[:200]}"
        )
        raise StorageError(f"Storage returned {response.status_code} for {storage_path}")

    async def read_optional_json(self, storage_path: str, schema: Type[ModelT]) -> OptionalArtifact[ModelT]:
        """
        Read and validate an optional JSON artifact.

        Never raises: a missing object, an unreachable backend, invalid JSON
        and schema mismatches all come back as a non-usable artifact.
        """
        try:
            raw = await self.download(storage_path)
        except StorageObjectNotFound:
            return OptionalArtifact.absent()
        except StorageError as e:
            logger.warning(f"[STORAGE] Treating {storage_path} as absent: {e}")
            return OptionalArtifact.absent(str(e))

        try:
            return OptionalArtifact.present(schema.model_validate(json.loads(raw)))
        except (ValueError, ValidationError) as e:
            logger.warning(f"[STORAGE] Ignoring malformed {storage_path}: {e}")
            return OptionalArtifact.malformed(str(e))
