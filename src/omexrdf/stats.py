"""Statistics over single OMEX archives and directories of archives."""

from __future__ import annotations

from collections import Counter
import logging
from pathlib import Path
from typing import Any, Sequence

from omexrdf.archive.container import ArchiveError, ArchiveSource, describe_source, list_zip_entries
from omexrdf.archive.loader import archive_annotations
from omexrdf.archive.manifest import metadata_entries, safe_read_manifest
from omexrdf.config import ExtractionSettings
from omexrdf.extraction.aggregate import GraphAnnotations, map_ordered, merge_opb_terms
from omexrdf.extraction.results import Err

logger = logging.getLogger(__name__)

ARCHIVE_TOP_OPB = 10
AGGREGATE_TOP_OPB = 20


def _top_terms(counts: dict[str, int], limit: int) -> dict[str, int]:
    return dict(Counter(counts).most_common(limit))


def archive_basic_stats(source: ArchiveSource, settings: ExtractionSettings | None = None) -> dict[str, Any]:
    """Container sizes, manifest counts and annotation counts for one archive."""
    try:
        entries = list_zip_entries(source)
    except ArchiveError as exc:
        logger.warning("Skipping unreadable archive %s: %s", describe_source(source), exc)
        entries = []

    manifest_outcome = safe_read_manifest(source)
    manifest = [] if isinstance(manifest_outcome, Err) else manifest_outcome.data
    meta_entries = metadata_entries(manifest)

    annotations: list[GraphAnnotations] = []
    result = archive_annotations(source, settings)
    if isinstance(result, Err):
        errors = [result.error_dict()]
    else:
        annotations = list(result.data.data)
        errors = [error.error_dict() for error in result.data.errors]

    return {
        "source": describe_source(source),
        "entry_count": len(entries),
        "total_size": sum(entry.size for entry in entries),
        "total_compressed": sum(entry.compressed_size for entry in entries),
        "manifest_entries": len(manifest),
        "metadata_entries": len(meta_entries),
        "num_singular_annotations": sum(len(item.singular_annotations) for item in annotations),
        "num_composite_annotations": sum(len(item.composite_annotations) for item in annotations),
        "num_process_annotations": sum(len(item.process_annotations) for item in annotations),
        "num_energy_differentials": sum(len(item.energy_differentials) for item in annotations),
        "top_opb_terms": _top_terms(merge_opb_terms(item.opb_terms for item in annotations), ARCHIVE_TOP_OPB),
        "annotation_extraction_errors": errors,
    }


def omex_files_in_dir(dir_path: str | Path) -> list[str]:
    """Absolute paths of ``.omex`` files under *dir_path*, sorted."""
    root = Path(dir_path)
    return sorted(str(path.resolve()) for path in root.rglob("*.omex") if path.is_file())


_SUMMED_FIELDS: tuple[tuple[str, str], ...] = (
    ("total_entries", "entry_count"),
    ("total_size", "total_size"),
    ("total_compressed", "total_compressed"),
    ("total_manifest_entries", "manifest_entries"),
    ("total_metadata_entries", "metadata_entries"),
    ("total_singular_annotations", "num_singular_annotations"),
    ("total_composite_annotations", "num_composite_annotations"),
    ("total_process_annotations", "num_process_annotations"),
    ("total_energy_differentials", "num_energy_differentials"),
)


def aggregate_stats(paths: Sequence[str | Path], settings: ExtractionSettings | None = None) -> dict[str, Any]:
    """Per-archive stats for every path plus their sums.

    Archives are processed independently (on ``settings.workers`` threads)
    and merged only after all of them finish.
    """
    settings = settings or ExtractionSettings()
    per_archive = map_ordered(lambda path: archive_basic_stats(path, settings), list(paths), settings.workers)
    logger.info("Computed stats for %d archive(s)", len(per_archive))

    summary: dict[str, Any] = {"archive_count": len(per_archive)}
    for total_key, field_key in _SUMMED_FIELDS:
        summary[total_key] = sum(stats[field_key] for stats in per_archive)
    summary["aggregate_opb_terms"] = _top_terms(
        merge_opb_terms(stats["top_opb_terms"] for stats in per_archive),
        AGGREGATE_TOP_OPB,
    )
    summary["per_archive"] = per_archive
    return summary
