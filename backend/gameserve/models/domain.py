"""Custom domain mapping model."""
from sqlalchemy import Column, String, DateTime, ForeignKey, func
import uuid
from gameserve.database import Base
from gameserve.constants import DomainType


class GameDomain(Base):
    """Binds a host name to a project, optionally pinned to one version."""
    __tablename__ = "game_domains"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    project_id = Column(String(36), ForeignKey("playcraft_projects.id", ondelete="CASCADE"), nullable=False, index=True)
    domain = Column(String, unique=True, nullable=False)
    type = Column(String, nullable=False, default=DomainType.CUSTOM)
    verification_status = Column(String, nullable=False, default="pending")
    target_version = Column(String(36), ForeignKey("publish_versions.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
