"""Fraction documentation generation.

Resolves the artifact behind a documentation page, pulls three optional
metadata files out of the JAR in one pass and appends the composed
sections to the page content. Failures are contained per page: the
generator logs them and hands the page back untouched, so one broken
artifact never stops the rest of the book.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from adapters.archive_reader import read_entry, scan_archive
from core.config import AppSettings
from core.domain.models import Coordinate, FractionManifest, Page
from core.interfaces.locator import ArtifactLocator
from core.services.page_fragments import (
    compose_page_body,
    page_header,
    parse_config_docs,
    parse_fraction_manifest,
    render_config_fragment,
    render_coordinates_fragment,
)

logger = logging.getLogger(__name__)

CONFIGURATION_ENTRY = "META-INF/configuration-meta.properties"
README_ENTRY = "META-INF/README.adoc"
MANIFEST_ENTRY = "META-INF/fraction-manifest.yaml"


@dataclass
class ExtractedMetadata:
    """Fragments pulled from one artifact; absent entries keep neutral values."""

    configuration: str = ""
    readme: str = ""
    manifest: FractionManifest | None = None


async def extract_metadata(archive_path: Path) -> ExtractedMetadata:
    """Extract the configuration, README and manifest entries in one archive pass.

    The blocking scan runs off the event loop; results are keyed by entry
    name, so the order entries appear in the archive never matters.
    """

    entries = await asyncio.to_thread(
        scan_archive,
        archive_path,
        [CONFIGURATION_ENTRY, README_ENTRY, MANIFEST_ENTRY],
    )
    config_text = read_entry(entries[CONFIGURATION_ENTRY])
    readme = read_entry(entries[README_ENTRY])
    manifest_text = read_entry(entries[MANIFEST_ENTRY])
    return ExtractedMetadata(
        configuration=render_config_fragment(parse_config_docs(config_text)) if config_text else "",
        readme=readme,
        manifest=parse_fraction_manifest(manifest_text),
    )


class FractionDocsGenerator:
    """Builds fraction pages for one book version.

    The version is fixed at construction time and threaded into every
    coordinate, so resolution never depends on ambient state.
    """

    def __init__(
        self,
        *,
        version: str,
        locator: ArtifactLocator,
        settings: AppSettings | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._version = version
        self._locator = locator

    @property
    def version(self) -> str:
        return self._version

    def coordinate_for(self, page: Page) -> Coordinate:
        group_id = page.group_id or self._settings.default_group_id
        artifact_id = page.artifact_id or self.artifact_id_from_path(page.path)
        return Coordinate(group_id=group_id, artifact_id=artifact_id, version=self._version)

    def artifact_id_from_path(self, path: str) -> str:
        name = Path(path).name
        suffix = self._settings.page_suffix
        if suffix and name.endswith(suffix) and name != suffix:
            name = name[: -len(suffix)]
        return name

    async def generate(self, page: Page) -> Page:
        """Append the generated sections to `page.content`; never raises."""

        logger.info("processing %s (%s, %s)", page.title, page.group_id, page.artifact_id)
        try:
            coordinate = self.coordinate_for(page)
            archive_path = await self._locator.locate(coordinate)
            metadata = await extract_metadata(archive_path)
            body = compose_page_body(
                header=page_header(page, metadata.readme, metadata.manifest or FractionManifest()),
                coordinates=render_coordinates_fragment(coordinate.group_id, coordinate.artifact_id),
                configuration=metadata.configuration,
            )
        except Exception as exc:
            logger.error("problem generating %s: %s", page.title, exc)
            return page

        page.content += body
        return page


async def generate_pages(generator: FractionDocsGenerator, pages: list[Page]) -> list[Page]:
    """Generate pages one after another, as the book host does."""

    out: list[Page] = []
    for page in pages:
        out.append(await generator.generate(page))
    return out
