"""Contrato del localizador de artefactos.

Cualquier objeto con un `locate` asíncrono sirve: el locator Maven real, o un
doble de test que devuelve un JAR construido en `tmp_path`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from core.domain.models import Coordinate


@runtime_checkable
class ArtifactLocator(Protocol):
    """Contrato mínimo para resolver una coordenada a un fichero local.

    Reglas de diseño:
    - `locate` es asíncrono porque puede hacer I/O (HTTP).
    - Devuelve un path utilizable o lanza `ResolutionFailed`.
    """

    async def locate(self, coordinate: Coordinate) -> Path:
        """Resuelve `coordinate` y devuelve el path local del artefacto."""

        ...
