"""Resolve an inbound request to a published project."""
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gameserve.constants import ProjectStatus
from gameserve.models import GameDomain, Project
from gameserve.utils.db import get_by_field
from gameserve.utils.logger import logger


@dataclass(frozen=True)
class ResolvedProject:
    """Read-only view of a published project for a single request."""
    id: str
    user_id: str
    name: str
    slug: Optional[str]
    live_version_id: Optional[str]
    preview_version_id: Optional[str]
    subdomain_url: Optional[str]
    resolved_via: str

    @property
    def base_path(self) -> str:
        """Storage root of the project, also the prefix of pre-versioning publishes."""
        return f"{self.user_id}/{self.id}"

    @classmethod
    def from_model(cls, project: Project, resolved_via: str) -> "ResolvedProject":
        return cls(
            id=str(project.id),
            user_id=str(project.user_id),
            name=project.name,
            slug=project.slug,
            live_version_id=project.primary_version_id,
            preview_version_id=project.preview_version_id,
            subdomain_url=project.subdomain_url,
            resolved_via=resolved_via,
        )


def _published(project: Optional[Project]) -> Optional[Project]:
    if project is None or project.status != ProjectStatus.PUBLISHED:
        return None
    return project


class ProjectResolver:
    """
    Finds the published project for a request.

    Lookups run in order and the first hit wins: custom domain mapping for the
    host, then slug, then project id. Unpublished records and datastore errors
    both count as "not found".
    """

    def __init__(self, db: Session):
        self.db = db

    def resolve(self, host: Optional[str], identifier: Optional[str]) -> Optional[ResolvedProject]:
        lookups: List[Tuple[str, Callable[[], Optional[ResolvedProject]]]] = [
            ("domain", lambda: self.by_domain(host)),
            ("slug", lambda: self.by_slug(identifier)),
            ("id", lambda: self.by_id(identifier)),
        ]
        for name, lookup in lookups:
            try:
                project = lookup()
            except SQLAlchemyError as e:
                logger.error(f"[RESOLVE] {name} lookup failed, treating as not found: {e}")
                self.db.rollback()
                continue
            if project is not None:
                logger.debug(f"[RESOLVE] Resolved project {project.id} via {name}")
                return project
        return None

    def by_domain(self, host: Optional[str]) -> Optional[ResolvedProject]:
        if not host:
            return None
        mapping = get_by_field(self.db, GameDomain, "domain", host)
        if mapping is None:
            return None

        project = _published(get_by_field(self.db, Project, "id", mapping.project_id))
        if project is None:
            logger.debug(f"[RESOLVE] Domain {host} maps to an unpublished project")
            return None

        resolved = ResolvedProject.from_model(project, "domain")
        if mapping.target_version:
            resolved = replace(resolved, live_version_id=mapping.target_version)
        return resolved

    def by_slug(self, slug: Optional[str]) -> Optional[ResolvedProject]:
        if not slug:
            return None
        project = get_by_field(self.db, Project, "slug", slug, status=ProjectStatus.PUBLISHED)
        return ResolvedProject.from_model(project, "slug") if project else None

    def by_id(self, project_id: Optional[str]) -> Optional[ResolvedProject]:
        if not project_id:
            return None
        project = _published(get_by_field(self.db, Project, "id", project_id))
        return ResolvedProject.from_model(project, "id") if project else None
