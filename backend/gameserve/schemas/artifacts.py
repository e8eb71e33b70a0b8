"""Schemas for optional JSON artifacts stored next to published builds."""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class LegacyMarker(BaseModel):
    """`latest.json` written by publishes that predate version pointers."""
    model_config = ConfigDict(extra="ignore")

    path: str = Field(..., min_length=1, description="Storage path of the published entrypoint")
    versionTag: Optional[str] = None


class ManifestEntry(BaseModel):
    """One file declared by a version manifest."""
    model_config = ConfigDict(extra="ignore")

    path: str = Field(..., min_length=1)
    contentType: Optional[str] = None


class ManifestDocument(BaseModel):
    """`manifest.json` stored at the root of a version prefix."""
    model_config = ConfigDict(extra="ignore")

    entrypoint: Optional[str] = None
    # null is tolerated so the entrypoint still applies
    files: Optional[List[ManifestEntry]] = Field(default_factory=list)
