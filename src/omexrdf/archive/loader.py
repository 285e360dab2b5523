"""Load the RDF metadata graphs listed in an archive manifest."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Iterable, Sequence

from rdflib import Graph

from omexrdf.archive.container import ArchiveSource, describe_source, extract_entry
from omexrdf.archive.manifest import metadata_entries, safe_read_manifest
from omexrdf.config import ExtractionSettings
from omexrdf.extraction.aggregate import ArchiveAnnotations, GraphAnnotations, annotate_graphs, map_ordered
from omexrdf.extraction.results import Err, ErrorStage, ExtractionOutcome, Ok

logger = logging.getLogger(__name__)

_EXTENSION_FORMATS: tuple[tuple[str, str], ...] = (
    (".ttl", "turtle"),
    (".n3", "n3"),
    (".nt", "nt"),
    (".jsonld", "json-ld"),
)


@dataclass(frozen=True, slots=True)
class LoadedGraphs:
    """Parsed graphs keyed by entry location, plus per-entry loading errors."""

    graphs: tuple[tuple[str, Graph], ...] = ()
    errors: tuple[Err, ...] = ()


def normalize_entry_path(path: str | None) -> str | None:
    """Strip leading ``./`` segments and one leading ``/`` from a manifest location."""
    if path is None:
        return None
    while path.startswith("./"):
        path = path[2:]
    if path.startswith("/"):
        path = path[1:]
    return path


def guess_rdf_format(location: str | None, format_name: str | None) -> str:
    """Pick an rdflib parser name from the manifest format or the file extension."""
    if format_name and "turtle" in format_name:
        return "turtle"
    lowered = (location or "").lower()
    for extension, parser_name in _EXTENSION_FORMATS:
        if lowered.endswith(extension):
            return parser_name
    return "xml"


def parse_rdf(payload: bytes, rdf_format: str = "xml") -> Graph:
    """Parse one metadata entry. Relative references (``./model.xml#x``) are kept archive-relative."""
    graph = Graph()
    graph.parse(data=payload, format=rdf_format)
    return graph


def load_metadata_graphs(source: ArchiveSource) -> ExtractionOutcome[LoadedGraphs]:
    """Parse every metadata entry; entry-level failures are collected, not raised."""
    manifest = safe_read_manifest(source)
    if isinstance(manifest, Err):
        return manifest

    graphs: list[tuple[str, Graph]] = []
    errors: list[Err] = []
    for entry in metadata_entries(manifest.data):
        location = normalize_entry_path(entry.location)
        if not location:
            errors.append(Err(stage=ErrorStage.EXTRACT, message="Manifest entry has no location"))
            continue

        try:
            payload = extract_entry(source, location)
        except Exception as exc:
            errors.append(
                Err(
                    stage=ErrorStage.EXTRACT,
                    message=f"Failed to read {location}: {exc}",
                    details={"location": location},
                    cause_kind=type(exc).__name__,
                )
            )
            continue
        if payload is None:
            errors.append(
                Err(
                    stage=ErrorStage.EXTRACT,
                    message=f"Entry not found in archive: {location}",
                    details={"location": location},
                )
            )
            continue

        rdf_format = guess_rdf_format(entry.location, entry.format)
        try:
            graph = parse_rdf(payload, rdf_format)
        except Exception as exc:
            logger.warning("Failed to parse %s as %s: %s", location, rdf_format, exc)
            errors.append(
                Err(
                    stage=ErrorStage.RDF_PARSE,
                    message=f"Failed to parse {location}: {exc}",
                    details={"location": location, "format": rdf_format},
                    cause_kind=type(exc).__name__,
                )
            )
            continue

        logger.debug("Loaded %s (%d triples) from %s", location, len(graph), describe_source(source))
        graphs.append((location, graph))

    return Ok(LoadedGraphs(graphs=tuple(graphs), errors=tuple(errors)))


def archive_annotations(
    source: ArchiveSource, settings: ExtractionSettings | None = None
) -> ExtractionOutcome[ArchiveAnnotations]:
    """Extract annotations from every metadata graph of one archive.

    Only a manifest failure yields ``Err``; everything else is reported in the
    ``errors`` of the returned :class:`ArchiveAnnotations`.
    """
    loaded = load_metadata_graphs(source)
    if isinstance(loaded, Err):
        return loaded
    result = annotate_graphs(loaded.data.graphs, settings, loading_errors=loaded.data.errors)
    logger.info(
        "Extracted annotations from %d model(s) in %s with %d error(s)",
        result.model_count,
        describe_source(source),
        len(result.errors),
    )
    return Ok(result)


def _distinct(values: Iterable[str | None]) -> list[str]:
    return list(dict.fromkeys(value for value in values if value is not None))


def aggregate_annotations(
    paths: Sequence[ArchiveSource], settings: ExtractionSettings | None = None
) -> dict[str, Any]:
    """Collect distinct creators and BioModels references across many archives.

    ``metadata_files`` counts the graphs that were extracted. Archives whose
    manifest cannot be read are listed under ``errors`` and contribute nothing
    else. Every list keeps first-seen order.
    """
    settings = settings or ExtractionSettings()
    sources = list(paths)
    outcomes = map_ordered(lambda source: archive_annotations(source, settings), sources, settings.workers)

    graphs: list[GraphAnnotations] = []
    errors: list[dict[str, Any]] = []
    for source, outcome in zip(sources, outcomes):
        if isinstance(outcome, Err):
            errors.append({"source": describe_source(source), **outcome.error_dict()})
            continue
        graphs.extend(outcome.data.data)

    return {
        "archive_count": len(sources),
        "metadata_files": len(graphs),
        "dc_creators": _distinct(creator for item in graphs for creator in item.dc.get("creator") or ()),
        "bqbiol_references": _distinct(uri for item in graphs for uris in item.bqbiol.values() for uri in uris),
        "bqmodel_references": _distinct(uri for item in graphs for uris in item.bqmodel.values() for uri in uris),
        "errors": errors,
    }
