"""Lectura de entradas concretas dentro de un ZIP/JAR sin extraerlo entero.

Reglas:
- El lector recorre todas las entradas una sola vez, en orden de archivo; la
  primera entrada con el nombre pedido gana.
- Un fichero inexistente, un ZIP corrupto o un error de I/O equivalen a
  "entrada ausente" (`None`): los artefactos omiten metadata opcional a menudo.
"""

from __future__ import annotations

import logging
import zipfile
import zlib
from collections.abc import Iterable, Iterator
from pathlib import Path

from core.domain.models import ArchiveEntry

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024

# zlib.error sale de entradas DEFLATE corruptas; BadZipFile de CRC inválido.
_READ_ERRORS = (
    OSError,
    zipfile.BadZipFile,
    zipfile.LargeZipFile,
    zlib.error,
    EOFError,
    RuntimeError,
    ValueError,
)


def iter_archive_entries(archive_path: Path) -> Iterator[zipfile.ZipInfo]:
    """Itera las entradas del archivo en orden (incluye directorios)."""

    with zipfile.ZipFile(archive_path) as archive:
        yield from archive.infolist()


def _read_member(archive: zipfile.ZipFile, info: zipfile.ZipInfo) -> bytes:
    chunks: list[bytes] = []
    with archive.open(info) as stream:
        while True:
            chunk = stream.read(_CHUNK_SIZE)
            if not chunk:
                break
            chunks.append(chunk)
    return b"".join(chunks)


def scan_archive(archive_path: Path, names: Iterable[str]) -> dict[str, ArchiveEntry | None]:
    """Busca varias entradas en una sola pasada.

    Devuelve un dict con una clave por nombre pedido; `None` si no está.
    Una entrada corrupta queda como `None` sin afectar a las demás; un
    archivo ilegible deja todas en `None`.
    """

    wanted = list(dict.fromkeys(names))
    found: dict[str, ArchiveEntry | None] = {name: None for name in wanted}
    seen: set[str] = set()
    try:
        with zipfile.ZipFile(archive_path) as archive:
            for info in archive.infolist():
                if info.is_dir() or info.filename not in found or info.filename in seen:
                    continue
                seen.add(info.filename)
                try:
                    data = _read_member(archive, info)
                except _READ_ERRORS as exc:
                    logger.debug("cannot read %s from %s: %s", info.filename, archive_path, exc)
                    continue
                found[info.filename] = ArchiveEntry(name=info.filename, size=info.file_size, data=data)
    except _READ_ERRORS as exc:
        logger.debug("cannot open %s: %s", archive_path, exc)
        return {name: None for name in wanted}
    return found


def extract_entry(archive_path: Path, entry_name: str) -> ArchiveEntry | None:
    """Devuelve la entrada `entry_name` de `archive_path` o `None`."""

    return scan_archive(archive_path, [entry_name])[entry_name]


def read_entry(entry: ArchiveEntry | None) -> str:
    """Cuerpo completo de la entrada como texto (vacío si está ausente)."""

    if entry is None:
        return ""
    return entry.text()
