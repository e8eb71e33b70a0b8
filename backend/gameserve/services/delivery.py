"""Serve a file from a project's published build."""
from typing import Optional

from sqlalchemy.orm import Session

from gameserve.config import Settings
from gameserve.services.fetcher import FileFetcher, SpaFallbackController
from gameserve.services.manifest_loader import ManifestLoader
from gameserve.services.project_resolver import ProjectResolver
from gameserve.services.response_composer import DeliveryResult, ResponseComposer
from gameserve.services.storage import StorageService
from gameserve.services.version_resolver import VersionResolver
from gameserve.utils.logger import logger


class DeliveryService:
    """
    Per-request pipeline: project -> version -> manifest -> file -> response.

    Holds no state between requests; build one per request.
    """

    def __init__(self, settings: Settings, db: Session, storage: StorageService):
        self.projects = ProjectResolver(db)
        self.versions = VersionResolver(db, storage)
        self.manifests = ManifestLoader(storage)
        self.fetcher = FileFetcher(storage)
        self.composer = ResponseComposer(patch_html=settings.inject_route_reset, site_url=settings.site_url)

    async def serve(self, host: Optional[str], identifier: str, file_path: Optional[str]) -> DeliveryResult:
        """
        Args:
            host: Normalized request host, checked for a custom domain mapping
            identifier: Slug or project id taken from the URL
            file_path: Requested file inside the build, None for the entrypoint

        Raises:
            StorageError: The object store failed while fetching the file
            SQLAlchemyError: The live version pointer could not be read
        """
        project = self.projects.resolve(host, identifier)
        if project is None:
            logger.info(f"[DELIVERY] No published project for host={host!r} identifier={identifier!r}")
            return self.composer.project_not_found(identifier)

        version = await self.versions.resolve_or_base_path(project)
        entrypoint = version.entrypoint

        manifest = None
        if version.versioned:
            manifest = await self.manifests.load(version.storage_prefix)
            if manifest is not None and manifest.entrypoint:
                entrypoint = manifest.entrypoint

        requested = file_path or entrypoint
        if manifest is not None:
            requested = manifest.gate(requested, entrypoint)

        controller = SpaFallbackController(self.fetcher)
        fetched = await controller.run(version.storage_prefix, requested, entrypoint)
        if fetched is None:
            return self.composer.file_not_found()

        if fetched.fell_back or fetched.path != (file_path or entrypoint):
            logger.debug(f"[DELIVERY] Served {fetched.path} for {file_path!r} (project {project.id})")
        return self.composer.compose(fetched, manifest)
