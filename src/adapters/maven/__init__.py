"""Adaptadores de repositorios Maven (cache local + remotos release/snapshot)."""

from adapters.maven.fetchers import fetch_artifact, fetch_metadata
from adapters.maven.locator import MavenArtifactLocator
from adapters.maven.snapshot import parse_snapshot_metadata, resolve_snapshot_path

__all__ = [
    "MavenArtifactLocator",
    "fetch_artifact",
    "fetch_metadata",
    "parse_snapshot_metadata",
    "resolve_snapshot_path",
]
