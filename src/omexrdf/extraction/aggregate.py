"""Per-graph and per-archive aggregation of extractor outcomes."""

from __future__ import annotations

from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
import logging
from typing import Any, Callable, Iterable, Sequence, TypeVar

from rdflib import Graph

from omexrdf.config import ExtractionSettings
from omexrdf.extraction.extractors import (
    extract_composite_annotations,
    extract_energy_differentials,
    extract_opb_terms,
    extract_process_annotations,
    extract_singular_annotations,
)
from omexrdf.extraction.guard import check_triple_limit
from omexrdf.extraction.models import (
    EnergyDifferential,
    EntityComposite,
    ProcessAnnotation,
    Provenance,
    SingularAnnotation,
)
from omexrdf.extraction.results import Err, ErrorStage, ExtractionOutcome, Ok, run_stage
from omexrdf.extraction.summaries import (
    extract_bqbiol_annotations,
    extract_bqmodel_annotations,
    extract_dc_metadata,
)
from omexrdf.rdf.graph import TripleGraph, as_triple_graph

logger = logging.getLogger(__name__)

T = TypeVar("T")
D = TypeVar("D")


@dataclass(frozen=True, slots=True)
class GraphAnnotations:
    """Everything extracted from one metadata graph."""

    singular_annotations: tuple[SingularAnnotation, ...] = ()
    composite_annotations: tuple[EntityComposite, ...] = ()
    process_annotations: tuple[ProcessAnnotation, ...] = ()
    energy_differentials: tuple[EnergyDifferential, ...] = ()
    opb_terms: dict[str, int] = field(default_factory=dict)
    dc: dict[str, Any] = field(default_factory=dict)
    bqbiol: dict[str, list[str]] = field(default_factory=dict)
    bqmodel: dict[str, list[str]] = field(default_factory=dict)
    provenance: Provenance = field(default_factory=Provenance)
    extraction_errors: tuple[Err, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "singular_annotations": [record.to_dict() for record in self.singular_annotations],
            "composite_annotations": [record.to_dict() for record in self.composite_annotations],
            "process_annotations": [record.to_dict() for record in self.process_annotations],
            "energy_differentials": [record.to_dict() for record in self.energy_differentials],
            "opb_terms": dict(self.opb_terms),
            "dc": dict(self.dc),
            "bqbiol": {key: list(values) for key, values in self.bqbiol.items()},
            "bqmodel": {key: list(values) for key, values in self.bqmodel.items()},
            "provenance": self.provenance.to_dict(),
            "extraction_errors": [error.error_dict() for error in self.extraction_errors],
        }


@dataclass(frozen=True, slots=True)
class ArchiveAnnotations:
    """Combined per-graph results for one archive.

    ``model_count`` counts every parsed graph, including ones the guard
    rejected; those contribute an error instead of an entry in ``data``.
    """

    data: tuple[GraphAnnotations, ...] = ()
    model_count: int = 0
    errors: tuple[Err, ...] = ()

    @property
    def opb_terms(self) -> dict[str, int]:
        return merge_opb_terms(item.opb_terms for item in self.data)

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": [item.to_dict() for item in self.data],
            "model_count": self.model_count,
            "errors": [error.error_dict() for error in self.errors],
        }


def merge_opb_terms(maps: Iterable[dict[str, int]]) -> dict[str, int]:
    """Sum OPB frequency maps once every per-graph result is in."""
    total: Counter[str] = Counter()
    for counts in maps:
        total.update(counts)
    return dict(total)


def _unwrap(outcome: ExtractionOutcome[T], default: D, errors: list[Err]) -> T | D:
    if isinstance(outcome, Err):
        errors.append(outcome)
        return default
    return outcome.data


def extract_all_annotations(
    graph: TripleGraph | Graph,
    source: str | None = None,
    settings: ExtractionSettings | None = None,
) -> ExtractionOutcome[GraphAnnotations]:
    """Run the guard and then every extractor over one graph.

    A guard rejection is returned as-is and no extractor runs.  Individual
    extractor failures are collected in ``extraction_errors`` and the result
    is still ``Ok``.
    """
    settings = settings or ExtractionSettings()
    facade = as_triple_graph(graph)

    guard = check_triple_limit(facade, settings.max_triples)
    if isinstance(guard, Err):
        return guard

    errors: list[Err] = []
    singular = _unwrap(extract_singular_annotations(facade, source), [], errors)
    composite = _unwrap(extract_composite_annotations(facade, source), [], errors)
    process = _unwrap(extract_process_annotations(facade, source), [], errors)
    energy = _unwrap(extract_energy_differentials(facade, source), [], errors)
    opb_terms = _unwrap(run_stage(ErrorStage.OPB_EXTRACT, extract_opb_terms, facade), {}, errors)
    dc = _unwrap(run_stage(ErrorStage.SINGULAR_EXTRACT, extract_dc_metadata, facade), {}, errors)
    bqbiol = _unwrap(run_stage(ErrorStage.SINGULAR_EXTRACT, extract_bqbiol_annotations, facade), {}, errors)
    bqmodel = _unwrap(run_stage(ErrorStage.SINGULAR_EXTRACT, extract_bqmodel_annotations, facade), {}, errors)

    if errors:
        logger.info("Extraction for %s finished with %d stage error(s)", source, len(errors))

    return Ok(
        GraphAnnotations(
            singular_annotations=tuple(singular),
            composite_annotations=tuple(composite),
            process_annotations=tuple(process),
            energy_differentials=tuple(energy),
            opb_terms=opb_terms,
            dc=dc,
            bqbiol=bqbiol,
            bqmodel=bqmodel,
            provenance=Provenance(source),
            extraction_errors=tuple(errors),
        )
    )


def map_ordered(func: Callable[[T], D], items: Sequence[T], workers: int = 1) -> list[D]:
    """Apply *func* to each item, on a thread pool when ``workers > 1``; keeps input order."""
    if workers <= 1 or len(items) <= 1:
        return [func(item) for item in items]
    with ThreadPoolExecutor(max_workers=min(workers, len(items))) as executor:
        return list(executor.map(func, items))


def annotate_graphs(
    graphs: Sequence[tuple[str | None, TripleGraph | Graph]],
    settings: ExtractionSettings | None = None,
    loading_errors: Iterable[Err] = (),
) -> ArchiveAnnotations:
    """Extract every ``(source, graph)`` pair and merge them into one result.

    Graph-loading errors come first in ``errors``, followed by guard
    rejections and per-extractor errors in graph order.
    """
    settings = settings or ExtractionSettings()

    def _extract(item: tuple[str | None, TripleGraph | Graph]) -> ExtractionOutcome[GraphAnnotations]:
        source, graph = item
        return extract_all_annotations(graph, source, settings)

    items = list(graphs)
    outcomes = map_ordered(_extract, items, settings.workers)

    data: list[GraphAnnotations] = []
    errors: list[Err] = list(loading_errors)
    for outcome in outcomes:
        if isinstance(outcome, Err):
            errors.append(outcome)
            continue
        data.append(outcome.data)
        errors.extend(outcome.data.extraction_errors)

    return ArchiveAnnotations(data=tuple(data), model_count=len(items), errors=tuple(errors))
