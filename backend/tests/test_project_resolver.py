from sqlalchemy.exc import OperationalError

from gameserve.constants import ProjectStatus
from gameserve.services.project_resolver import ProjectResolver

from ._helpers import seed_domain, seed_project, seed_version


class BrokenSession:
    """Session whose every query fails like an unreachable database."""

    def __init__(self):
        self.rollbacks = 0

    def query(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    def rollback(self):
        self.rollbacks += 1


def test_resolves_by_slug(db_session):
    project = seed_project(db_session, slug="space-run")
    resolved = ProjectResolver(db_session).resolve("testserver", "space-run")
    assert resolved.id == project.id
    assert resolved.resolved_via == "slug"
    assert resolved.base_path == f"user-1/{project.id}"


def test_resolves_by_id_when_slug_misses(db_session):
    project = seed_project(db_session, slug="space-run", project_id="0b8a7c1e-6d2f-4b8e-9a51-3f2d1c0e9b77")
    resolved = ProjectResolver(db_session).resolve(None, "0b8a7c1e-6d2f-4b8e-9a51-3f2d1c0e9b77")
    assert resolved.id == project.id
    assert resolved.resolved_via == "id"


def test_slug_takes_precedence_over_id(db_session):
    by_slug = seed_project(db_session, slug="p-42")
    seed_project(db_session, slug="other", project_id="p-42")
    assert ProjectResolver(db_session).resolve(None, "p-42").id == by_slug.id


def test_unpublished_projects_are_never_resolved(db_session):
    seed_project(db_session, slug="secret", status=ProjectStatus.DRAFT, project_id="draft-id")
    resolver = ProjectResolver(db_session)
    assert resolver.resolve(None, "secret") is None
    assert resolver.resolve(None, "draft-id") is None


def test_reused_slug_resolves_to_the_published_project(db_session):
    seed_project(db_session, slug="reused", status=ProjectStatus.DRAFT)
    live = seed_project(db_session, slug="reused")
    assert ProjectResolver(db_session).resolve(None, "reused").id == live.id


def test_domain_mapping_supersedes_path_identifier(db_session):
    mapped = seed_project(db_session, slug="mapped-game")
    seed_project(db_session, slug="space-run")
    seed_domain(db_session, mapped, "games.example.com")

    resolved = ProjectResolver(db_session).resolve("games.example.com", "space-run")
    assert resolved.id == mapped.id
    assert resolved.resolved_via == "domain"


def test_domain_target_version_overrides_live_pointer(db_session):
    project = seed_project(db_session, slug="pinned")
    pinned = seed_version(db_session, project, storage_prefix="user-1/pinned/v1")
    live = seed_version(db_session, project, storage_prefix="user-1/pinned/v2")
    seed_domain(db_session, project, "pinned.example.com", target_version=pinned.id)

    resolved = ProjectResolver(db_session).resolve("pinned.example.com", "anything")
    assert resolved.live_version_id == pinned.id
    db_session.refresh(project)
    assert project.primary_version_id == live.id


def test_domain_mapped_to_unpublished_project_falls_through(db_session):
    hidden = seed_project(db_session, slug="hidden", status=ProjectStatus.DRAFT)
    fallback = seed_project(db_session, slug="space-run")
    seed_domain(db_session, hidden, "hidden.example.com")

    resolved = ProjectResolver(db_session).resolve("hidden.example.com", "space-run")
    assert resolved.id == fallback.id


def test_datastore_errors_fail_closed():
    session = BrokenSession()
    assert ProjectResolver(session).resolve("games.example.com", "space-run") is None
    assert session.rollbacks == 3
