"""Fetchers HTTP contra repositorios Maven.

- `fetch_metadata`: texto completo (los `maven-metadata.xml` son pequeños).
- `fetch_artifact`: streaming a disco dentro del directorio scratch.

Política de transporte: fail fast. Cualquier error de red o status distinto
de 200 se convierte en `ResolutionFailed`; no hay reintentos.
"""

from __future__ import annotations

import logging
import posixpath
from pathlib import Path, PurePosixPath

import httpx

from adapters.http_client import force_https, join_url
from core.errors import ResolutionFailed

logger = logging.getLogger(__name__)

METADATA_FILENAME = "maven-metadata.xml"


def metadata_path_for(maven_path: str) -> str:
    return f"{posixpath.dirname(maven_path)}/{METADATA_FILENAME}"


def scratch_path_for(scratch_dir: Path, maven_path: str) -> Path:
    return scratch_dir.joinpath(*PurePosixPath(maven_path).parts)


async def fetch_metadata(client: httpx.AsyncClient, repo_base_url: str, maven_path: str) -> str:
    """Descarga el `maven-metadata.xml` del directorio de `maven_path`."""

    url = join_url(repo_base_url, metadata_path_for(maven_path))
    logger.debug("fetching metadata %s", url)
    try:
        response = await client.get(url)
    except httpx.HTTPError as exc:
        raise ResolutionFailed(f"metadata request failed for {url}: {exc}", url=url) from exc

    if response.status_code != 200:
        raise ResolutionFailed(
            f"metadata request for {url} returned HTTP {response.status_code}",
            url=url,
            status_code=response.status_code,
        )
    return response.text


async def fetch_artifact(
    client: httpx.AsyncClient,
    repo_base_url: str,
    maven_path: str,
    scratch_dir: Path,
) -> Path:
    """Descarga `maven_path` a `<scratch_dir>/<maven_path>` y devuelve el path.

    El layout Maven completo se conserva en scratch: dos coordenadas con el
    mismo artifactId y versión pero distinto groupId no comparten fichero.
    Se escribe primero en `<nombre>.part` y se renombra al terminar, así
    nadie lee un fichero a medio escribir.
    """

    url = force_https(join_url(repo_base_url, maven_path))
    out_path = scratch_path_for(scratch_dir, maven_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    part_path = out_path.with_name(out_path.name + ".part")

    logger.info("downloading %s", url)
    completed = False
    try:
        try:
            async with client.stream("GET", url) as response:
                if response.status_code != 200:
                    raise ResolutionFailed(
                        f"artifact request for {url} returned HTTP {response.status_code}",
                        url=url,
                        status_code=response.status_code,
                    )
                with part_path.open("wb") as handle:
                    async for chunk in response.aiter_bytes():
                        handle.write(chunk)
        except httpx.HTTPError as exc:
            raise ResolutionFailed(f"artifact request failed for {url}: {exc}", url=url) from exc
        part_path.replace(out_path)
        completed = True
    finally:
        # Cubre también OSError al escribir y la cancelación de la tarea.
        if not completed:
            part_path.unlink(missing_ok=True)
    return out_path
