"""Pydantic schemas for request/response validation."""
from gameserve.schemas.artifacts import LegacyMarker, ManifestDocument, ManifestEntry

__all__ = ["LegacyMarker", "ManifestDocument", "ManifestEntry"]
