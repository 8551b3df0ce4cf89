from __future__ import annotations

import httpx
import pytest

from adapters.maven.snapshot import apply_snapshot_version, parse_snapshot_metadata, resolve_snapshot_path
from core.domain.models import SnapshotVersion
from core.errors import ResolutionFailed, SnapshotMetadataError

METADATA = """<?xml version="1.0" encoding="UTF-8"?>
<metadata modelVersion="1.1.0">
  <groupId>org.wildfly.swarm</groupId>
  <artifactId>undertow</artifactId>
  <version>1.0.0-SNAPSHOT</version>
  <versioning>
    <snapshot>
      <timestamp>20170412.101512</timestamp>
      <buildNumber>42</buildNumber>
    </snapshot>
    <lastUpdated>20170412101512</lastUpdated>
    <snapshotVersions>
      <snapshotVersion>
        <extension>jar</extension>
        <value>1.0.0-20170412.101512-42</value>
      </snapshotVersion>
    </snapshotVersions>
  </versioning>
</metadata>
"""

MAVEN_PATH = "org/wildfly/swarm/undertow/1.0.0-SNAPSHOT/undertow-1.0.0-SNAPSHOT.jar"


def test_parse_snapshot_metadata_reads_first_values():
    snapshot = parse_snapshot_metadata(METADATA)

    assert snapshot == SnapshotVersion(timestamp="20170412.101512", build_number="42")
    assert snapshot.qualifier == "20170412.101512-42"


def test_parse_snapshot_metadata_ignores_namespaces():
    namespaced = METADATA.replace(
        '<metadata modelVersion="1.1.0">',
        '<metadata xmlns="http://maven.apache.org/METADATA/1.1.0" modelVersion="1.1.0">',
    )

    assert parse_snapshot_metadata(namespaced).build_number == "42"


def test_parse_snapshot_metadata_falls_back_on_broken_xml():
    broken = "<metadata><timestamp>20170412.101512</timestamp><buildNumber>7</buildNumber>"

    assert parse_snapshot_metadata(broken).qualifier == "20170412.101512-7"


def test_missing_build_number_is_reported():
    content = METADATA.replace("<buildNumber>42</buildNumber>", "")

    with pytest.raises(SnapshotMetadataError) as excinfo:
        parse_snapshot_metadata(content)

    assert excinfo.value.missing_field == "buildNumber"
    assert isinstance(excinfo.value, ResolutionFailed)


def test_missing_timestamp_is_reported():
    content = METADATA.replace("<timestamp>20170412.101512</timestamp>", "")

    with pytest.raises(SnapshotMetadataError) as excinfo:
        parse_snapshot_metadata(content)

    assert excinfo.value.missing_field == "timestamp"


def test_apply_snapshot_version_only_touches_the_filename():
    resolved = apply_snapshot_version(MAVEN_PATH, SnapshotVersion("20170412.101512", "42"))

    assert resolved == "org/wildfly/swarm/undertow/1.0.0-SNAPSHOT/undertow-1.0.0-20170412.101512-42.jar"


@pytest.mark.asyncio
async def test_resolve_snapshot_path_fetches_directory_metadata():
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, text=METADATA)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        resolved = await resolve_snapshot_path(client, "https://snapshots.example.org/repo/", MAVEN_PATH)

    assert seen == [
        "https://snapshots.example.org/repo/org/wildfly/swarm/undertow/1.0.0-SNAPSHOT/maven-metadata.xml"
    ]
    assert resolved.endswith("undertow-1.0.0-20170412.101512-42.jar")


@pytest.mark.asyncio
async def test_resolve_snapshot_path_fails_on_http_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(ResolutionFailed) as excinfo:
            await resolve_snapshot_path(client, "https://snapshots.example.org/repo", MAVEN_PATH)

    assert excinfo.value.status_code == 404
