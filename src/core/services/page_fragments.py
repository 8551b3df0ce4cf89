"""Pure formatting helpers for fraction documentation pages.

Everything here is synchronous and side-effect free: parsing the
configuration properties and the fraction manifest, and rendering the
AsciiDoc fragments that end up in the page body.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

import yaml

from core.domain.models import ConfigDocEntry, FractionManifest, Page

RESERVED_CONFIG_KEY = "fraction"
WILDCARD_PLACEHOLDER = "_KEY_"
NO_CONFIGURATION_NOTICE = "This fraction has no configuration."

BADGE_BASE_URL = "http://badges.github.io/stability-badges/dist/"
DEFAULT_BADGE = f"image::{BADGE_BASE_URL}unstable.svg[UNSTABLE]"

_README_TITLE = re.compile(r"^(# [^\n]*)\n")


def parse_config_docs(text: str) -> list[ConfigDocEntry]:
    """Parse `configuration-meta.properties` into entries sorted by key.

    Discarded lines:
    - keys starting with `#`
    - the reserved `fraction` key
    - lines without a description
    """

    entries: list[ConfigDocEntry] = []
    for raw_line in text.split("\n"):
        line = raw_line.rstrip("\r")
        key, _, description = line.partition("=")
        if not key or key.startswith("#") or key == RESERVED_CONFIG_KEY or not description:
            continue
        entries.append(ConfigDocEntry(key=key, description=description))

    # Codepoint ordering; `sorted` is stable for duplicate keys.
    return sorted(entries, key=lambda entry: entry.key)


def render_config_fragment(entries: Iterable[ConfigDocEntry]) -> str:
    """Render entries as an AsciiDoc definition list (`key:: description`)."""

    content = ""
    for entry in entries:
        key = entry.key.replace("*", WILDCARD_PLACEHOLDER)
        content += f"{key}:: {entry.description}\n"
    return content


def render_coordinates_fragment(group_id: str, artifact_id: str) -> str:
    return (
        "[source,xml]\n"
        "----\n"
        "<dependency>\n"
        f"  <groupId>{group_id}</groupId>\n"
        f"  <artifactId>{artifact_id}</artifactId>\n"
        "</dependency>\n"
        "----\n"
    )


def parse_fraction_manifest(text: str) -> FractionManifest:
    """Parse `fraction-manifest.yaml`; an empty document yields an empty manifest."""

    if not text.strip():
        return FractionManifest()
    return FractionManifest.from_document(yaml.safe_load(text))


def stability_badge(manifest: FractionManifest) -> str:
    level = manifest.stability_level
    if not level:
        return DEFAULT_BADGE
    return f"image::{BADGE_BASE_URL}{level.lower()}.svg[{level}]"


def page_header(page: Page, readme: str, manifest: FractionManifest) -> str:
    """Build the title line, stability badge and README body.

    A README that opens with a `# ` line (followed by more text) keeps that
    line as the page title; otherwise the title comes from the page itself and
    the whole README becomes the body.
    """

    readme = readme.strip()
    rest_of_readme = ""

    if not readme:
        header = f"# {page.title}\n"
    else:
        match = _README_TITLE.match(readme)
        if match:
            header = match.group(1)
            rest_of_readme = readme[len(match.group(1)):]
        else:
            header = f"# {page.title}\n"
            rest_of_readme = readme

    header += "\n\n"
    header += stability_badge(manifest)
    # Blank line so the badge macro is not glued to an untitled README body.
    if rest_of_readme and not rest_of_readme.startswith("\n"):
        header += "\n\n"
    header += rest_of_readme
    return header


def compose_page_body(
    *,
    header: str,
    coordinates: str,
    configuration: str,
) -> str:
    """Fixed section order: header, Coordinates, Configuration."""

    body = "\n"
    body += header
    body += "\n\n"
    body += "## Coordinates\n\n"
    body += coordinates
    body += "\n\n"
    body += "## Configuration\n\n"
    body += configuration or NO_CONFIGURATION_NOTICE
    return body
