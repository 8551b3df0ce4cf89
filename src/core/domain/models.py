"""Modelos del dominio (Pydantic v2).

Nota:
- Estos modelos describen *qué* es la información (coordenadas, entradas de
  archivo, manifiestos, páginas), no *cómo* se obtiene.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

SNAPSHOT_MARKER = "SNAPSHOT"


class Coordinate(BaseModel):
    """Coordenada Maven de un artefacto.

    La versión viaja en la coordenada: no existe estado global de versión.
    """

    model_config = ConfigDict(frozen=True)

    group_id: str = Field(..., min_length=1, description="groupId Maven (p.ej. 'org.wildfly.swarm').")
    artifact_id: str = Field(..., min_length=1, description="artifactId Maven.")
    version: str = Field(..., min_length=1, description="Versión (release o '*-SNAPSHOT').")
    extension: str = Field(default="jar", min_length=1, description="Extensión del artefacto.")

    @classmethod
    def parse(cls, value: str, *, version: str | None = None, extension: str = "jar") -> "Coordinate":
        """Parsea `group:artifact[:version[:extension]]`.

        `version` se usa cuando el texto no la incluye.
        """

        parts = [p.strip() for p in value.strip().split(":")]
        if len(parts) < 2 or not all(parts):
            raise ValueError(f"invalid coordinate {value!r}, expected group:artifact[:version[:extension]]")
        group_id, artifact_id = parts[0], parts[1]
        if len(parts) > 2:
            version = parts[2]
        if len(parts) > 3:
            extension = parts[3]
        if not version:
            raise ValueError(f"no version given for coordinate {value!r}")
        return cls(group_id=group_id, artifact_id=artifact_id, version=version, extension=extension)

    @property
    def filename(self) -> str:
        return f"{self.artifact_id}-{self.version}.{self.extension}"

    @property
    def repository_path(self) -> str:
        """Path relativo en layout Maven (función pura de la coordenada)."""

        group_path = self.group_id.replace(".", "/")
        return f"{group_path}/{self.artifact_id}/{self.version}/{self.filename}"

    @property
    def is_snapshot(self) -> bool:
        return SNAPSHOT_MARKER in self.repository_path

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}:{self.extension}"


@dataclass(frozen=True)
class ArchiveEntry:
    """Entrada encontrada dentro de un ZIP/JAR.

    La ausencia de una entrada se representa con `None`, nunca con excepción.
    """

    name: str
    size: int
    data: bytes

    def text(self) -> str:
        return self.data.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class SnapshotVersion:
    """Valores extraídos de `maven-metadata.xml` para un SNAPSHOT."""

    timestamp: str
    build_number: str

    @property
    def qualifier(self) -> str:
        return f"{self.timestamp}-{self.build_number}"


class ConfigDocEntry(BaseModel):
    """Una clave configurable documentada en `configuration-meta.properties`."""

    key: str = Field(..., min_length=1, description="Clave de configuración (puede contener '*').")
    description: str = Field(..., min_length=1, description="Texto de documentación de la clave.")


class Stability(BaseModel):
    model_config = ConfigDict(extra="allow")

    level: str | None = Field(default=None, description="Nivel de estabilidad (p.ej. 'stable').")


class FractionManifest(BaseModel):
    """Manifiesto de la fracción (`fraction-manifest.yaml`).

    Se trata como documento opaco salvo `stability.level`.
    """

    model_config = ConfigDict(extra="allow")

    stability: Stability | None = Field(default=None, description="Bloque de estabilidad, si existe.")

    @classmethod
    def from_document(cls, document: Any) -> "FractionManifest":
        """Construye el manifiesto desde el YAML ya parseado, de forma tolerante."""

        if not isinstance(document, dict):
            return cls()
        data = {str(k): v for k, v in document.items()}
        stability = data.get("stability")
        if not isinstance(stability, dict):
            data.pop("stability", None)
        else:
            level = stability.get("level")
            data["stability"] = {**stability, "level": str(level) if level else None}
        return cls.model_validate(data)

    @property
    def stability_level(self) -> str | None:
        if self.stability and self.stability.level:
            return self.stability.level
        return None


class Page(BaseModel):
    """Página de documentación entregada por el host.

    `content` solo se extiende (append), nunca se reescribe.
    """

    title: str = Field(..., description="Título de la página.")
    path: str = Field(..., min_length=1, description="Path de la página dentro del libro.")
    group_id: str | None = Field(default=None, description="groupId explícito (opcional).")
    artifact_id: str | None = Field(default=None, description="artifactId explícito (opcional).")
    content: str = Field(default="", description="Contenido acumulado de la página.")
