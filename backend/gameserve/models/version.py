"""Publish version model."""
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, UniqueConstraint, func
import uuid
from gameserve.database import Base
from gameserve.constants import DEFAULT_ENTRYPOINT


class PublishVersion(Base):
    """An immutable build of a project stored under a fixed prefix."""
    __tablename__ = "publish_versions"
    __table_args__ = (UniqueConstraint("project_id", "version_tag"),)

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    project_id = Column(
        String(36),
        ForeignKey("playcraft_projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(String(36), nullable=False)
    version_tag = Column(String, nullable=False)
    storage_prefix = Column(String, nullable=False)  # Path in the published-games bucket
    entrypoint = Column(String, nullable=False, default=DEFAULT_ENTRYPOINT)
    checksum = Column(String, nullable=True)  # Manifest checksum
    is_preview = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
