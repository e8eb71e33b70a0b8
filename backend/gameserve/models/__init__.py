"""Models package."""
from gameserve.models.project import Project
from gameserve.models.version import PublishVersion
from gameserve.models.domain import GameDomain

__all__ = ["Project", "PublishVersion", "GameDomain"]
