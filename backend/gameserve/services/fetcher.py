"""File fetching with a bounded single-page-app fallback."""
import enum
from dataclasses import dataclass
from typing import List, Optional

from gameserve.services.storage import StorageService
from gameserve.utils.exceptions import StorageObjectNotFound
from gameserve.utils.logger import logger


@dataclass(frozen=True)
class FetchedFile:
    path: str
    body: bytes
    fell_back: bool = False


class FileFetcher:
    """One object-store read per call at `{storage_prefix}/{file_path}`."""

    def __init__(self, storage: StorageService):
        self.storage = storage

    async def fetch(self, storage_prefix: str, file_path: str) -> Optional[bytes]:
        """
        Returns the object bytes, or None when the object does not exist.

        Any other storage failure propagates as StorageError.
        """
        try:
            return await self.storage.download(f"{storage_prefix}/{file_path}")
        except StorageObjectNotFound:
            return None


class FallbackState(enum.Enum):
    PRIMARY = "primary"
    FALLBACK = "fallback"


class SpaFallbackController:
    """
    Fetch the requested file, and on a miss fetch the entrypoint exactly once.

    The loop has two states and stops on any hit, on a miss of the entrypoint
    itself, or after the fallback fetch, so a request costs at most two reads.
    """

    def __init__(self, fetcher: FileFetcher):
        self.fetcher = fetcher
        self.attempts: List[str] = []

    async def run(self, storage_prefix: str, requested: str, entrypoint: str) -> Optional[FetchedFile]:
        state = FallbackState.PRIMARY
        target = requested
        while True:
            self.attempts.append(target)
            body = await self.fetcher.fetch(storage_prefix, target)
            if body is not None:
                return FetchedFile(path=target, body=body, fell_back=state is FallbackState.FALLBACK)

            if state is FallbackState.FALLBACK or target == entrypoint:
                logger.info(f"[DELIVERY] {target} not found under {storage_prefix}")
                return None

            logger.debug(f"[DELIVERY] {target} missing, falling back to {entrypoint}")
            state = FallbackState.FALLBACK
            target = entrypoint
