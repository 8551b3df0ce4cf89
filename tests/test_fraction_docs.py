from __future__ import annotations

import logging
import zipfile

import pytest

from core.domain.models import Page
from core.errors import ResolutionFailed
from core.services.fraction_docs import FractionDocsGenerator, extract_metadata, generate_pages
from tests.helpers import FailingLocator, RecordingLocator, corrupt_entry_data, make_jar

README = "META-INF/README.adoc"
MANIFEST = "META-INF/fraction-manifest.yaml"
CONFIG = "META-INF/configuration-meta.properties"


def _generator(settings, locator) -> FractionDocsGenerator:
    return FractionDocsGenerator(version="1.0.0", locator=locator, settings=settings)


@pytest.mark.asyncio
async def test_readme_title_badge_and_sections_in_order(settings, tmp_path):
    jar = make_jar(
        tmp_path / "foo.jar",
        {README: "# Custom Title\nBody text", MANIFEST: "stability:\n  level: stable\n"},
    )
    locator = RecordingLocator(jar)
    page = Page(title="Foo", path="fractions/foo.adoc")

    result = await _generator(settings, locator).generate(page)

    content = result.content
    markers = [
        "# Custom Title",
        "stable.svg[stable]",
        "Body text",
        "## Coordinates",
        "<groupId>org.wildfly.swarm</groupId>",
        "<artifactId>foo</artifactId>",
        "## Configuration",
        "This fraction has no configuration.",
    ]
    positions = [content.index(marker) for marker in markers]
    assert positions == sorted(positions)
    assert "# Foo" not in content
    assert str(locator.requested[0]) == "org.wildfly.swarm:foo:1.0.0:jar"


@pytest.mark.asyncio
async def test_missing_readme_and_manifest_fall_back(settings, tmp_path):
    jar = make_jar(tmp_path / "foo.jar", {})
    page = Page(title="Foo", path="fractions/foo.adoc")

    result = await _generator(settings, RecordingLocator(jar)).generate(page)

    assert result.content == (
        "\n# Foo\n\n\n"
        "image::http://badges.github.io/stability-badges/dist/unstable.svg[UNSTABLE]"
        "\n\n## Coordinates\n\n"
        "[source,xml]\n----\n<dependency>\n"
        "  <groupId>org.wildfly.swarm</groupId>\n"
        "  <artifactId>foo</artifactId>\n"
        "</dependency>\n----\n"
        "\n\n## Configuration\n\n"
        "This fraction has no configuration."
    )


@pytest.mark.asyncio
async def test_configuration_is_listed_by_key(settings, tmp_path):
    jar = make_jar(tmp_path / "foo.jar", {CONFIG: "b.key=desc2\na.key=desc1"})
    page = Page(title="Foo", path="fractions/foo.adoc")

    result = await _generator(settings, RecordingLocator(jar)).generate(page)

    assert result.content.endswith("## Configuration\n\na.key:: desc1\nb.key:: desc2\n")


@pytest.mark.asyncio
async def test_page_overrides_group_and_artifact(settings, tmp_path):
    locator = RecordingLocator(make_jar(tmp_path / "x.jar", {}))
    page = Page(title="X", path="fractions/ignored.adoc", group_id="org.acme", artifact_id="widget")

    result = await _generator(settings, locator).generate(page)

    assert str(locator.requested[0]) == "org.acme:widget:1.0.0:jar"
    assert "<groupId>org.acme</groupId>" in result.content


@pytest.mark.asyncio
async def test_content_is_appended_not_replaced(settings, tmp_path):
    page = Page(title="Foo", path="fractions/foo.adoc", content="= Existing\n")

    result = await _generator(settings, RecordingLocator(make_jar(tmp_path / "f.jar", {}))).generate(page)

    assert result.content.startswith("= Existing\n\n# Foo\n")


@pytest.mark.asyncio
async def test_unreadable_artifact_still_produces_a_page(settings, tmp_path):
    bogus = tmp_path / "bogus.jar"
    bogus.write_bytes(b"not a zip")

    result = await _generator(settings, RecordingLocator(bogus)).generate(Page(title="Foo", path="fractions/foo.adoc"))

    assert "# Foo" in result.content
    assert "unstable.svg[UNSTABLE]" in result.content


@pytest.mark.asyncio
async def test_resolution_failure_is_logged_and_page_returned(settings, caplog):
    page = Page(title="Broken", path="fractions/broken.adoc", content="original")
    locator = FailingLocator(ResolutionFailed("HTTP 404"))
    caplog.set_level(logging.ERROR, logger="core.services.fraction_docs")

    result = await _generator(settings, locator).generate(page)

    assert result is page
    assert result.content == "original"
    assert any("Broken" in r.getMessage() and "HTTP 404" in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
async def test_malformed_manifest_fails_only_that_page(settings, tmp_path):
    broken = make_jar(tmp_path / "broken.jar", {MANIFEST: "stability: [unclosed"})
    good = make_jar(tmp_path / "good.jar", {})

    class ByArtifact:
        async def locate(self, coordinate):
            return broken if coordinate.artifact_id == "broken" else good

    pages = [
        Page(title="Broken", path="fractions/broken.adoc"),
        Page(title="Good", path="fractions/good.adoc"),
    ]

    results = await generate_pages(_generator(settings, ByArtifact()), pages)

    assert results[0].content == ""
    assert "# Good" in results[1].content


@pytest.mark.asyncio
async def test_extract_metadata_neutral_values(tmp_path):
    metadata = await extract_metadata(make_jar(tmp_path / "empty.jar", {}))

    assert metadata.configuration == ""
    assert metadata.readme == ""
    assert metadata.manifest.stability_level is None


def test_artifact_id_from_path(settings):
    generator = _generator(settings, RecordingLocator(None))

    assert generator.artifact_id_from_path("fractions/undertow.adoc") == "undertow"
    assert generator.artifact_id_from_path("fractions/jaxrs-jsonp.adoc") == "jaxrs-jsonp"
    assert generator.artifact_id_from_path("fractions/notes.txt") == "notes.txt"


@pytest.mark.asyncio
async def test_corrupted_readme_keeps_the_other_sections(settings, tmp_path):
    jar = make_jar(
        tmp_path / "foo.jar",
        {README: "# Custom Title\n" + "Body text\n" * 200, CONFIG: "a.key=desc1\n"},
        compression=zipfile.ZIP_DEFLATED,
    )
    corrupt_entry_data(jar, README)
    page = Page(title="Foo", path="fractions/foo.adoc")

    result = await _generator(settings, RecordingLocator(jar)).generate(page)

    assert result.content.startswith("\n# Foo\n")
    assert "Custom Title" not in result.content
    assert result.content.endswith("## Configuration\n\na.key:: desc1\n")
