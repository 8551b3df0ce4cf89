"""Localizador de artefactos Maven.

Orden estricto:
1) cache local (`~/.m2/repository`), sin red
2) SNAPSHOT: metadata del repositorio snapshot y luego descarga
3) release: descarga directa del repositorio release
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import httpx

from adapters.http_client import build_async_client
from adapters.maven.fetchers import fetch_artifact, scratch_path_for
from adapters.maven.snapshot import resolve_snapshot_path
from core.config import AppSettings
from core.domain.models import Coordinate
from core.errors import ResolutionFailed
from core.interfaces.locator import ArtifactLocator

logger = logging.getLogger(__name__)


class MavenArtifactLocator(ArtifactLocator):
    """Resuelve coordenadas contra la cache local y los repositorios remotos.

    Las descargas de una misma coordenada se serializan con un `asyncio.Lock`
    por coordenada, de modo que dos páginas concurrentes no descargan dos veces
    ni leen un fichero parcial. Los locks se descartan al quedar libres.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport
        self._locks: dict[Coordinate, asyncio.Lock] = {}
        self._lock_users: dict[Coordinate, int] = {}

    def local_path(self, coordinate: Coordinate) -> Path:
        return Path(self._settings.local_repository) / coordinate.repository_path

    async def locate(self, coordinate: Coordinate) -> Path:
        local = self.local_path(coordinate)
        if local.is_file():
            logger.debug("local cache hit %s", local)
            return local

        lock = self._acquire_lock(coordinate)
        try:
            async with lock:
                return await self._locate_remote(coordinate)
        except ResolutionFailed as exc:
            if exc.coordinate is None:
                exc.coordinate = coordinate
            raise
        finally:
            self._release_lock(coordinate)

    def _acquire_lock(self, coordinate: Coordinate) -> asyncio.Lock:
        if coordinate not in self._locks:
            self._locks[coordinate] = asyncio.Lock()
        self._lock_users[coordinate] = self._lock_users.get(coordinate, 0) + 1
        return self._locks[coordinate]

    def _release_lock(self, coordinate: Coordinate) -> None:
        # El lock se descarta cuando no queda nadie esperándolo ni usándolo.
        self._lock_users[coordinate] -= 1
        if not self._lock_users[coordinate]:
            del self._lock_users[coordinate]
            del self._locks[coordinate]

    @property
    def pending_locks(self) -> int:
        return len(self._locks)

    async def _locate_remote(self, coordinate: Coordinate) -> Path:
        settings = self._settings
        maven_path = coordinate.repository_path
        scratch_dir = Path(settings.scratch_dir)

        async with build_async_client(settings, transport=self._transport) as client:
            if coordinate.is_snapshot:
                repo_url = settings.snapshot_repo_url
                remote_path = await resolve_snapshot_path(client, repo_url, maven_path)
            else:
                repo_url = settings.release_repo_url
                remote_path = maven_path

            cached = scratch_path_for(scratch_dir, remote_path)
            if cached.is_file():
                logger.debug("scratch cache hit %s", cached)
                return cached

            return await fetch_artifact(client, repo_url, remote_path, scratch_dir)
