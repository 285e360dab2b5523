"""Parsing of the OMEX ``manifest.xml`` content listing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from lxml import etree

from omexrdf.archive.container import ArchiveError, ArchiveSource, describe_source, extract_entry
from omexrdf.extraction.results import Err, ErrorStage, ExtractionOutcome, Ok

MANIFEST_ENTRY = "manifest.xml"

RDF_METADATA_FORMATS = frozenset(
    {
        "http://identifiers.org/combine.specifications/omex-metadata",
        "https://identifiers.org/combine.specifications/omex-metadata",
        "application/rdf+xml",
    }
)


@dataclass(frozen=True, slots=True)
class ManifestEntry:
    location: str | None
    format: str | None

    def to_dict(self) -> dict[str, Any]:
        return {"location": self.location, "format": self.format}


def parse_manifest(manifest_bytes: bytes) -> list[ManifestEntry]:
    """Return one entry per ``<content>`` element of the manifest."""
    parser = etree.XMLParser(resolve_entities=False, no_network=True, load_dtd=False, huge_tree=False)
    root = etree.fromstring(manifest_bytes, parser=parser)
    return [
        ManifestEntry(location=element.get("location"), format=element.get("format"))
        for element in root.xpath("./*[local-name()='content']")
    ]


def read_manifest(source: ArchiveSource) -> list[ManifestEntry]:
    manifest_bytes = extract_entry(source, MANIFEST_ENTRY)
    if manifest_bytes is None:
        raise ArchiveError(describe_source(source), "Archive has no manifest.xml")
    return parse_manifest(manifest_bytes)


def safe_read_manifest(source: ArchiveSource) -> ExtractionOutcome[list[ManifestEntry]]:
    try:
        return Ok(read_manifest(source))
    except Exception as exc:
        return Err(
            stage=ErrorStage.MANIFEST,
            message=str(exc),
            details={"source": describe_source(source)},
            cause_kind=type(exc).__name__,
        )


def metadata_entries(manifest: Iterable[ManifestEntry]) -> list[ManifestEntry]:
    """Keep the entries whose format marks them as RDF metadata."""
    return [entry for entry in manifest if entry.format in RDF_METADATA_FORMATS]
