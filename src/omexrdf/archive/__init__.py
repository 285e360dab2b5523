"""OMEX container, manifest and metadata-graph loading."""

from .container import (
    ArchiveError,
    ZipEntryInfo,
    extract_entry,
    list_zip_entries,
    read_zip_to_memory,
    write_zip_from_memory,
)
from .loader import (
    LoadedGraphs,
    aggregate_annotations,
    archive_annotations,
    guess_rdf_format,
    load_metadata_graphs,
    normalize_entry_path,
    parse_rdf,
)
from .manifest import ManifestEntry, metadata_entries, parse_manifest, read_manifest, safe_read_manifest

__all__ = [
    "ArchiveError",
    "LoadedGraphs",
    "ManifestEntry",
    "ZipEntryInfo",
    "aggregate_annotations",
    "archive_annotations",
    "extract_entry",
    "guess_rdf_format",
    "list_zip_entries",
    "load_metadata_graphs",
    "metadata_entries",
    "normalize_entry_path",
    "parse_manifest",
    "parse_rdf",
    "read_manifest",
    "read_zip_to_memory",
    "safe_read_manifest",
    "write_zip_from_memory",
]
