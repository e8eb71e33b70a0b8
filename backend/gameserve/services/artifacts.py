"""Result type for metadata files that a publish may or may not carry."""
import enum
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ArtifactState(str, enum.Enum):
    PRESENT = "present"
    ABSENT = "absent"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class OptionalArtifact(Generic[T]):
    """
    Outcome of reading an optional artifact such as `manifest.json` or `latest.json`.

    Callers branch on `usable`; a malformed artifact is reported separately
    for logging but is otherwise handled exactly like an absent one.
    """
    state: ArtifactState
    value: Optional[T] = None
    reason: Optional[str] = None

    @classmethod
    def present(cls, value: T) -> "OptionalArtifact[T]":
        return cls(state=ArtifactState.PRESENT, value=value)

    @classmethod
    def absent(cls, reason: Optional[str] = None) -> "OptionalArtifact[T]":
        return cls(state=ArtifactState.ABSENT, reason=reason)

    @classmethod
    def malformed(cls, reason: str) -> "OptionalArtifact[T]":
        return cls(state=ArtifactState.MALFORMED, reason=reason)

    @property
    def usable(self) -> bool:
        return self.state is ArtifactState.PRESENT
