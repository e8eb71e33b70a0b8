"""Determine which immutable build of a project to serve."""
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Tuple

from sqlalchemy.orm import Session

from gameserve.constants import DEFAULT_ENTRYPOINT, LEGACY_MARKER_FILENAME
from gameserve.models import PublishVersion
from gameserve.schemas import LegacyMarker
from gameserve.services.project_resolver import ResolvedProject
from gameserve.services.storage import StorageService
from gameserve.utils.db import get_by_field
from gameserve.utils.logger import logger


class VersionSource:
    VERSION_POINTER = "version_pointer"
    LEGACY_MARKER = "legacy_marker"
    BASE_PATH = "base_path"


@dataclass(frozen=True)
class ResolvedVersion:
    storage_prefix: str
    entrypoint: str
    source: str

    @property
    def versioned(self) -> bool:
        """True when the prefix came from version metadata rather than the raw project path."""
        return self.source != VersionSource.BASE_PATH


VersionStrategy = Callable[[ResolvedProject], Awaitable[Optional[ResolvedVersion]]]


def split_entrypoint_path(path: str) -> Optional[Tuple[str, str]]:
    """Split `a/b/game.html` into (`a/b`, `game.html`) at the last separator."""
    value = path.strip().lstrip("/")
    # A trailing separator names a directory, not an entrypoint
    if "/" not in value or value.endswith("/"):
        return None
    prefix, entrypoint = value.rsplit("/", 1)
    if not prefix or not entrypoint:
        return None
    return prefix, entrypoint


class VersionResolver:
    """
    Tries each strategy in order and returns the first build found.

    1. The project's live version pointer (or a domain's pinned version).
    2. The legacy `latest.json` marker at the project's base path.

    When neither resolves, `resolve_or_base_path` serves straight from
    `{user_id}/{project_id}`, which is where the oldest publishes live.
    """

    def __init__(self, db: Session, storage: StorageService):
        self.db = db
        self.storage = storage
        self.strategies: List[Tuple[str, VersionStrategy]] = [
            (VersionSource.VERSION_POINTER, self.from_version_pointer),
            (VersionSource.LEGACY_MARKER, self.from_legacy_marker),
        ]

    async def resolve(self, project: ResolvedProject) -> Optional[ResolvedVersion]:
        for name, strategy in self.strategies:
            version = await strategy(project)
            if version is not None:
                logger.debug(
                    f"[VERSION] Project {project.id} resolved via {name}: "
                    f"{version.storage_prefix} ({version.entrypoint})"
                )
                return version
        return None

    async def resolve_or_base_path(self, project: ResolvedProject) -> ResolvedVersion:
        version = await self.resolve(project)
        if version is not None:
            return version
        logger.info(f"[VERSION] No version metadata for project {project.id}, using base path")
        return ResolvedVersion(
            storage_prefix=project.base_path,
            entrypoint=DEFAULT_ENTRYPOINT,
            source=VersionSource.BASE_PATH,
        )

    async def from_version_pointer(self, project: ResolvedProject) -> Optional[ResolvedVersion]:
        # Datastore errors here are deliberately not caught: a broken pointer read fails the request.
        if not project.live_version_id:
            return None
        version = get_by_field(self.db, PublishVersion, "id", project.live_version_id)
        if version is None:
            logger.warning(f"[VERSION] Project {project.id} points at missing version {project.live_version_id}")
            return None

        prefix = (version.storage_prefix or "").rstrip("/")
        if not prefix:
            return None
        return ResolvedVersion(
            storage_prefix=prefix,
            entrypoint=version.entrypoint or DEFAULT_ENTRYPOINT,
            source=VersionSource.VERSION_POINTER,
        )

    async def from_legacy_marker(self, project: ResolvedProject) -> Optional[ResolvedVersion]:
        marker = await self.storage.read_optional_json(
            f"{project.base_path}/{LEGACY_MARKER_FILENAME}", LegacyMarker
        )
        if not marker.usable:
            return None

        parts = split_entrypoint_path(marker.value.path)
        if parts is None:
            logger.warning(f"[VERSION] Ignoring legacy marker without a directory: {marker.value.path}")
            return None
        prefix, entrypoint = parts
        return ResolvedVersion(
            storage_prefix=prefix,
            entrypoint=entrypoint,
            source=VersionSource.LEGACY_MARKER,
        )
