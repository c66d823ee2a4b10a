"""
Browsing context models.

A BrowsingContext records where element lookups currently happen as a path
of segments from the top-level document. The empty path is the top level.
The value is threaded through the resolver so the active context is
observable in results and failures.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict


class ContextSegment(BaseModel):
    """One boundary crossed from the parent context."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["frame", "shadow"]
    """Boundary type."""

    description: str
    """How the boundary was entered (e.g. "iframe#iframeId")."""


class BrowsingContext(BaseModel):
    """Immutable path from the top-level document to the active context.

    Entering a nested context returns a new value with one more segment.
    Returning to the top level drops every segment.
    """

    model_config = ConfigDict(frozen=True)

    segments: tuple[ContextSegment, ...] = ()

    @property
    def is_top_level(self) -> bool:
        return not self.segments

    @property
    def depth(self) -> int:
        return len(self.segments)

    @property
    def in_frame(self) -> bool:
        return any(segment.kind == "frame" for segment in self.segments)

    @property
    def in_shadow(self) -> bool:
        return bool(self.segments) and self.segments[-1].kind == "shadow"

    def push(self, kind: Literal["frame", "shadow"], description: str) -> "BrowsingContext":
        return BrowsingContext(
            segments=self.segments + (ContextSegment(kind=kind, description=description),)
        )

    def describe(self) -> str:
        if self.is_top_level:
            return "top-level document"
        return " > ".join(segment.description for segment in self.segments)

    def __str__(self) -> str:
        return self.describe()


TOP_LEVEL = BrowsingContext()
