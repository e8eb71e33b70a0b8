"""Load per-version manifests declaring the entrypoint and file content types."""
from dataclasses import dataclass, field
from typing import Dict, Optional

from gameserve.constants import MANIFEST_FILENAME
from gameserve.schemas import ManifestDocument
from gameserve.services.content_types import guess_content_type
from gameserve.services.storage import StorageService
from gameserve.utils.logger import logger


@dataclass(frozen=True)
class Manifest:
    entrypoint: Optional[str] = None
    content_types: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_document(cls, document: ManifestDocument) -> "Manifest":
        content_types = {}
        for entry in document.files or []:
            path = entry.path.lstrip("/")
            content_types[path] = entry.contentType or guess_content_type(path)
        entrypoint = document.entrypoint.lstrip("/") if document.entrypoint else None
        return cls(entrypoint=entrypoint or None, content_types=content_types)

    def declares(self, path: str) -> bool:
        return path in self.content_types

    def gate(self, requested: str, entrypoint: str) -> str:
        """
        Map a request onto the file that should be fetched.

        Manifest membership decides, not existence in storage: anything that is
        neither declared nor the entrypoint is treated as a client-side route.
        An empty file list declares nothing, so it gates nothing.
        """
        if not self.content_types or requested == entrypoint or self.declares(requested):
            return requested
        return entrypoint


class ManifestLoader:
    def __init__(self, storage: StorageService):
        self.storage = storage

    async def load(self, storage_prefix: str) -> Optional[Manifest]:
        """Returns None when the version has no usable manifest, which is normal for older publishes."""
        artifact = await self.storage.read_optional_json(
            f"{storage_prefix}/{MANIFEST_FILENAME}", ManifestDocument
        )
        if not artifact.usable:
            logger.debug(f"[MANIFEST] No manifest for {storage_prefix} ({artifact.state.value})")
            return None
        return Manifest.from_document(artifact.value)
