"""Resolución de SNAPSHOTs vía `maven-metadata.xml`.

El metadata se parsea como XML (ElementTree). Si el documento no es XML bien
formado se cae a extracción por patrón de las dos etiquetas que importan.
"""

from __future__ import annotations

import posixpath
import re
import xml.etree.ElementTree as ET

import httpx

from adapters.http_client import join_url
from adapters.maven.fetchers import fetch_metadata, metadata_path_for
from core.domain.models import SNAPSHOT_MARKER, SnapshotVersion
from core.errors import SnapshotMetadataError

_TAG_PATTERNS = {
    "timestamp": re.compile(r"<timestamp>\s*([0-9.]+)\s*</timestamp>"),
    "buildNumber": re.compile(r"<buildNumber>\s*([0-9]+)\s*</buildNumber>"),
}


def _first_text(root: ET.Element, tag: str) -> str | None:
    for element in root.iter():
        # Ignora namespaces: `{ns}timestamp` -> `timestamp`.
        if element.tag.rsplit("}", 1)[-1] == tag:
            text = (element.text or "").strip()
            if text:
                return text
    return None


def _extract_fields(content: str) -> dict[str, str | None]:
    try:
        root = ET.fromstring(content)
    except ET.ParseError:
        out: dict[str, str | None] = {}
        for tag, pattern in _TAG_PATTERNS.items():
            match = pattern.search(content)
            out[tag] = match.group(1) if match else None
        return out
    return {tag: _first_text(root, tag) for tag in _TAG_PATTERNS}


def parse_snapshot_metadata(content: str, *, url: str | None = None) -> SnapshotVersion:
    """Extrae el primer `<timestamp>` y el primer `<buildNumber>`.

    Lanza `SnapshotMetadataError` si falta cualquiera de los dos.
    """

    fields = _extract_fields(content)
    for tag in ("timestamp", "buildNumber"):
        if not fields.get(tag):
            raise SnapshotMetadataError(
                f"snapshot metadata{' at ' + url if url else ''} has no <{tag}>",
                missing_field=tag,
                url=url,
            )
    return SnapshotVersion(timestamp=str(fields["timestamp"]), build_number=str(fields["buildNumber"]))


def apply_snapshot_version(maven_path: str, snapshot: SnapshotVersion) -> str:
    """Sustituye `SNAPSHOT` en el nombre de fichero por `<timestamp>-<buildNumber>`."""

    dirname = posixpath.dirname(maven_path)
    filename = posixpath.basename(maven_path).replace(SNAPSHOT_MARKER, snapshot.qualifier, 1)
    return f"{dirname}/{filename}"


async def resolve_snapshot_path(client: httpx.AsyncClient, repo_base_url: str, maven_path: str) -> str:
    """Devuelve el path concreto (timestamped) de un SNAPSHOT en `repo_base_url`."""

    content = await fetch_metadata(client, repo_base_url, maven_path)
    url = join_url(repo_base_url, metadata_path_for(maven_path))
    return apply_snapshot_version(maven_path, parse_snapshot_metadata(content, url=url))
