"""Integración con el host de documentación (libro de páginas).

El host llama a `init` una vez con la configuración del libro y a
`page_before` por cada página, en secuencia. Solo las páginas bajo
`page_prefix` (por defecto `fractions/`) se generan; el resto pasa tal cual.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from adapters.maven import MavenArtifactLocator
from core.config import AppSettings
from core.domain.models import Page
from core.interfaces.locator import ArtifactLocator
from core.services.fraction_docs import FractionDocsGenerator

logger = logging.getLogger(__name__)


def load_book_config(path: Path) -> dict[str, Any]:
    raw = path.read_text(encoding="utf-8")
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError(f"book config {path} is not a JSON object")
    return data


def version_from_book_config(config: dict[str, Any]) -> str:
    """Lee `variables.versions.swarm` (acepta también el envoltorio `values`)."""

    values = config.get("values", config)
    try:
        version = values["variables"]["versions"]["swarm"]
    except (KeyError, TypeError) as exc:
        raise ValueError("book config has no variables.versions.swarm") from exc
    if not isinstance(version, str) or not version.strip():
        raise ValueError("book config variables.versions.swarm is empty")
    return version.strip()


class BookHooks:
    """Hooks `init` / `page:before` del libro."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        locator: ArtifactLocator | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._locator = locator or MavenArtifactLocator(self._settings)
        self._generator: FractionDocsGenerator | None = None

    @property
    def version(self) -> str | None:
        return self._generator.version if self._generator else None

    def init(self, config: dict[str, Any]) -> None:
        self.set_version(version_from_book_config(config))

    def set_version(self, version: str) -> None:
        self._generator = FractionDocsGenerator(
            version=version,
            locator=self._locator,
            settings=self._settings,
        )

    def handles(self, page: Page) -> bool:
        return page.path.startswith(self._settings.page_prefix)

    async def page_before(self, page: Page) -> Page:
        if not self.handles(page):
            logger.info("verbatim %s", page.path)
            return page
        if self._generator is None:
            raise RuntimeError("BookHooks.init() must run before page_before()")
        return await self._generator.generate(page)
