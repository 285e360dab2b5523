"""ZIP container helpers for OMEX archives given as paths or raw bytes."""

from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Any, Mapping, Union
from zipfile import ZIP_DEFLATED, BadZipFile, ZipFile

ArchiveSource = Union[str, Path, bytes]


@dataclass(slots=True)
class ArchiveError(Exception):
    """Domain error for unreadable archive containers."""

    source: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} (source={self.source})"


@dataclass(frozen=True, slots=True)
class ZipEntryInfo:
    name: str
    size: int
    compressed_size: int
    is_directory: bool
    last_modified: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "size": self.size,
            "compressed_size": self.compressed_size,
            "is_directory": self.is_directory,
            "last_modified": self.last_modified,
        }


def describe_source(source: ArchiveSource) -> str:
    """Human-readable label for provenance and error messages."""
    if isinstance(source, bytes):
        return "<bytes>"
    return str(source)


def _format_dos_timestamp(date_time: tuple[int, int, int, int, int, int]) -> str:
    # Some writers leave the DOS date zeroed, e.g. (1980, 0, 0, ...); keep the fields as stored.
    return "%04d-%02d-%02dT%02d:%02d:%02d" % date_time


def open_archive(source: ArchiveSource) -> ZipFile:
    try:
        if isinstance(source, bytes):
            return ZipFile(BytesIO(source), "r")
        return ZipFile(source, "r")
    except (OSError, BadZipFile) as exc:
        raise ArchiveError(describe_source(source), f"Cannot open archive: {exc}") from exc


def list_zip_entries(source: ArchiveSource) -> list[ZipEntryInfo]:
    with open_archive(source) as archive:
        return [
            ZipEntryInfo(
                name=info.filename,
                size=info.file_size,
                compressed_size=info.compress_size,
                is_directory=info.is_dir(),
                last_modified=_format_dos_timestamp(info.date_time),
            )
            for info in archive.infolist()
        ]


def extract_entry(source: ArchiveSource, entry_name: str) -> bytes | None:
    """Return the bytes of *entry_name*, or ``None`` when the archive lacks it."""
    with open_archive(source) as archive:
        try:
            return archive.read(entry_name)
        except KeyError:
            return None


def read_zip_to_memory(source: ArchiveSource) -> dict[str, bytes]:
    with open_archive(source) as archive:
        return {
            info.filename: archive.read(info.filename)
            for info in archive.infolist()
            if not info.is_dir()
        }


def write_zip_from_memory(entries: Mapping[str, bytes]) -> bytes:
    buffer = BytesIO()
    with ZipFile(buffer, "w", compression=ZIP_DEFLATED) as archive:
        for name, payload in entries.items():
            archive.writestr(name, payload)
    return buffer.getvalue()
