"""Configuración del Core.

Centraliza variables de entorno (pydantic-settings) para que el locator,
los fetchers y el composer lean la misma configuración.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "fraction-docs"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "fraction-docs"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "fraction-docs"
    return Path.home() / ".config" / "fraction-docs"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def default_local_repository() -> Path:
    """Layout estándar de Maven: `${HOME}/.m2/repository`."""

    return Path.home() / ".m2" / "repository"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Orden de lectura:
    - variables `FRACTION_DOCS_*`
    - `.env` del proyecto
    - `.env` global del usuario
    """

    model_config = SettingsConfigDict(
        env_prefix="FRACTION_DOCS_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="fraction-docs/0.1",
        min_length=1,
        description="User-Agent para peticiones a los repositorios.",
    )

    release_repo_url: str = Field(
        default="https://repo.maven.apache.org/maven2",
        min_length=8,
        description="Repositorio remoto para coordenadas release.",
    )
    snapshot_repo_url: str = Field(
        default="https://oss.sonatype.org/content/repositories/snapshots/",
        min_length=8,
        description="Repositorio remoto para coordenadas SNAPSHOT.",
    )
    local_repository: Path = Field(
        default_factory=default_local_repository,
        description="Cache local de Maven (solo lectura).",
    )
    scratch_dir: Path = Field(
        default=Path("_tmp"),
        description="Directorio donde se escriben los artefactos descargados.",
    )

    default_group_id: str = Field(
        default="org.wildfly.swarm",
        min_length=1,
        description="groupId usado cuando la página no declara uno.",
    )
    page_prefix: str = Field(
        default="fractions/",
        description="Solo las páginas bajo este prefijo se generan.",
    )
    page_suffix: str = Field(
        default=".adoc",
        description="Extensión que se elimina del path para derivar el artifactId.",
    )

    log_level: str = Field(
        default="INFO",
        description="Nivel de logging para la CLI.",
    )
