"""Test doubles and archive builders shared across the suite."""

from __future__ import annotations

import struct
import zipfile
from pathlib import Path

from core.domain.models import Coordinate

_LOCAL_HEADER_SIZE = 30


def make_jar(
    path: Path,
    entries: dict[str, str | bytes],
    *,
    compression: int = zipfile.ZIP_STORED,
) -> Path:
    """Write a ZIP archive with the given entries, in insertion order."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w", compression=compression) as archive:
        archive.writestr("META-INF/", b"")
        for name, data in entries.items():
            archive.writestr(name, data)
    return path


def corrupt_entry_data(path: Path, entry_name: str, length: int = 8) -> None:
    """Overwrite the first bytes of an entry's stored data with 0xFF.

    For a DEFLATE entry this turns the first block header into an invalid
    block type, so decompression fails while the central directory stays valid.
    """

    with zipfile.ZipFile(path) as archive:
        info = archive.getinfo(entry_name)
    raw = bytearray(path.read_bytes())
    offset = info.header_offset
    name_len, extra_len = struct.unpack("<HH", raw[offset + 26 : offset + 30])
    data_start = offset + _LOCAL_HEADER_SIZE + name_len + extra_len
    length = min(length, info.compress_size)
    raw[data_start : data_start + length] = b"\xff" * length
    path.write_bytes(bytes(raw))


class RecordingLocator:
    """Locator double that always returns the same archive and records requests."""

    def __init__(self, archive_path: Path) -> None:
        self.archive_path = archive_path
        self.requested: list[Coordinate] = []

    async def locate(self, coordinate: Coordinate) -> Path:
        self.requested.append(coordinate)
        return self.archive_path


class FailingLocator:
    def __init__(self, exc: Exception) -> None:
        self.exc = exc

    async def locate(self, coordinate: Coordinate) -> Path:
        raise self.exc
