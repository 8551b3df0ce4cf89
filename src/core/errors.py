"""Exception hierarchy for artifact resolution.

Absence (missing archive entry, local cache miss) is never an exception; only
failures that make one coordinate unusable are raised from here.
"""

from __future__ import annotations

from core.domain.models import Coordinate

__all__ = [
    "FractionDocsError",
    "ResolutionFailed",
    "SnapshotMetadataError",
]


class FractionDocsError(RuntimeError):
    """Base exception for artifact resolution and page generation."""


class ResolutionFailed(FractionDocsError):
    """Raised when a single coordinate cannot be turned into a local artifact."""

    def __init__(
        self,
        message: str,
        *,
        coordinate: Coordinate | None = None,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.coordinate = coordinate
        self.url = url
        self.status_code = status_code


class SnapshotMetadataError(ResolutionFailed):
    """Raised when `maven-metadata.xml` lacks the timestamp or build number."""

    def __init__(self, message: str, *, missing_field: str, url: str | None = None) -> None:
        super().__init__(message, url=url)
        self.missing_field = missing_field
