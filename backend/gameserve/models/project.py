"""Project model for published games."""
from sqlalchemy import Column, String, Boolean, DateTime, Index, func, text
import uuid
from gameserve.database import Base
from gameserve.constants import ProjectStatus


class Project(Base):
    """A user's publishable game project."""
    __tablename__ = "playcraft_projects"
    # Slugs are only unique among published projects; an unpublished slug can be reused.
    __table_args__ = (
        Index(
            "uq_playcraft_projects_published_slug",
            "slug",
            unique=True,
            postgresql_where=text("status = 'published'"),
            sqlite_where=text("status = 'published'"),
        ),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), nullable=False, index=True)
    name = Column(String, nullable=False)
    slug = Column(String(60), nullable=True)
    status = Column(String, nullable=False, default=ProjectStatus.DRAFT)
    primary_version_id = Column(String(36), nullable=True)  # Live pointer
    preview_version_id = Column(String(36), nullable=True)
    subdomain_url = Column(String(255), nullable=True)
    is_public = Column(Boolean, default=True, nullable=False)
    published_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
