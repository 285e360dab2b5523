"""Pattern extractors for singular, composite, process and energy annotations.

Each public extractor takes a graph plus an optional source identifier and
returns an :data:`ExtractionOutcome`.  Failures inside the graph library are
converted to a stage-tagged ``Err`` at the extractor boundary and never
propagate further.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, TypeVar

from rdflib import Graph

from omexrdf.extraction.models import (
    EnergyDifferential,
    EntityComposite,
    ProcessAnnotation,
    Provenance,
    SingularAnnotation,
)
from omexrdf.extraction.results import ErrorStage, ExtractionOutcome, run_stage
from omexrdf.rdf.graph import Node, TripleGraph, as_triple_graph, object_terms, to_term
from omexrdf.rdf.namespaces import (
    BQBIOL_NS,
    BQMODEL_NS,
    DC_NS,
    DCTERMS_NS,
    OPB_NAMESPACES,
    RO,
    SEMSIM,
)
from omexrdf.rdf.terms import UriTerm

R = TypeVar("R")

# (namespace, local name, result key); emission follows this order.
SINGULAR_PREDICATES: tuple[tuple[str, str, str], ...] = (
    (DC_NS, "creator", "dc:creator"),
    (DC_NS, "description", "dc:description"),
    (DCTERMS_NS, "creator", "dcterms:creator"),
    (DCTERMS_NS, "description", "dcterms:description"),
    (BQBIOL_NS, "is", "bqbiol:is"),
    (BQBIOL_NS, "isVersionOf", "bqbiol:isVersionOf"),
    (BQBIOL_NS, "isPropertyOf", "bqbiol:isPropertyOf"),
    (BQBIOL_NS, "hasTaxon", "bqbiol:hasTaxon"),
    (BQBIOL_NS, "isPartOf", "bqbiol:isPartOf"),
    (BQBIOL_NS, "isDescribedBy", "bqbiol:isDescribedBy"),
    (BQMODEL_NS, "is", "bqmodel:is"),
    (BQMODEL_NS, "isDescribedBy", "bqmodel:isDescribedBy"),
)

HAS_PHYSICAL_ENTITY = str(SEMSIM["hasPhysicalEntity"])
HAS_PHYSICAL_PROPERTY = str(SEMSIM["hasPhysicalProperty"])
HAS_PHYSICAL_ENTITY_REFERENCE = str(SEMSIM["hasPhysicalEntityReference"])
HAS_MULTIPLIER = str(SEMSIM["hasMultiplier"])
HAS_SOURCE_PARTICIPANT = str(SEMSIM["hasSourceParticipant"])
HAS_SINK_PARTICIPANT = str(SEMSIM["hasSinkParticipant"])
HAS_MEDIATOR_PARTICIPANT = str(SEMSIM["hasMediatorParticipant"])
PART_OF = str(RO["part_of"])


def _dedupe(records: Iterable[R]) -> list[R]:
    """Drop value-equal duplicates, keeping first-seen order."""
    seen: set[R] = set()
    unique: list[R] = []
    for record in records:
        if record in seen:
            continue
        seen.add(record)
        unique.append(record)
    return unique


def _subjects_with(graph: TripleGraph, predicates: Iterable[str]) -> list[Node]:
    seen: set[Node] = set()
    ordered: list[Node] = []
    for predicate in predicates:
        for subject, _, _ in graph.triples(None, predicate, None):
            if subject in seen:
                continue
            seen.add(subject)
            ordered.append(subject)
    return ordered


# ---------------------------------------------------------------------------
# Singular annotations
# ---------------------------------------------------------------------------

def _collect_singular(graph: TripleGraph, source: str | None) -> list[SingularAnnotation]:
    provenance = Provenance(source)
    records: list[SingularAnnotation] = []
    for namespace, local_name, key in SINGULAR_PREDICATES:
        predicate_uri = namespace + local_name
        for subject, _, obj in graph.triples(None, predicate_uri, None):
            records.append(
                SingularAnnotation(
                    subject=to_term(subject, source),
                    predicate_key=key,
                    predicate_uri=predicate_uri,
                    object=to_term(obj, source),
                    provenance=provenance,
                )
            )
    return records


def extract_singular_annotations(
    graph: TripleGraph | Graph, source: str | None = None
) -> ExtractionOutcome[list[SingularAnnotation]]:
    """Emit one record per statement matching the singular predicate table.

    Repeated identical statements yield repeated records.
    """
    return run_stage(ErrorStage.SINGULAR_EXTRACT, _collect_singular, as_triple_graph(graph), source)


# ---------------------------------------------------------------------------
# Entity composites
# ---------------------------------------------------------------------------

def _collect_composites(graph: TripleGraph, source: str | None) -> list[EntityComposite]:
    provenance = Provenance(source)
    records: list[EntityComposite] = []
    for subject in _subjects_with(graph, [HAS_PHYSICAL_ENTITY]):
        records.append(
            EntityComposite(
                subject=to_term(subject, source),
                entities=object_terms(graph, subject, HAS_PHYSICAL_ENTITY, source),
                properties=object_terms(graph, subject, HAS_PHYSICAL_PROPERTY, source),
                entity_references=object_terms(graph, subject, HAS_PHYSICAL_ENTITY_REFERENCE, source),
                multipliers=object_terms(graph, subject, HAS_MULTIPLIER, source),
                part_of=object_terms(graph, subject, PART_OF, source),
                provenance=provenance,
            )
        )
    return _dedupe(records)


def extract_composite_annotations(
    graph: TripleGraph | Graph, source: str | None = None
) -> ExtractionOutcome[list[EntityComposite]]:
    """Collect entity/property composites for every subject with a physical entity."""
    return run_stage(ErrorStage.COMPOSITE_EXTRACT, _collect_composites, as_triple_graph(graph), source)


# ---------------------------------------------------------------------------
# Processes
# ---------------------------------------------------------------------------

def _collect_processes(graph: TripleGraph, source: str | None) -> list[ProcessAnnotation]:
    provenance = Provenance(source)
    participants = [HAS_SOURCE_PARTICIPANT, HAS_SINK_PARTICIPANT, HAS_MEDIATOR_PARTICIPANT]
    records: list[ProcessAnnotation] = []
    for subject in _subjects_with(graph, participants):
        records.append(
            ProcessAnnotation(
                subject=to_term(subject, source),
                sources=object_terms(graph, subject, HAS_SOURCE_PARTICIPANT, source),
                sinks=object_terms(graph, subject, HAS_SINK_PARTICIPANT, source),
                mediators=object_terms(graph, subject, HAS_MEDIATOR_PARTICIPANT, source),
                provenance=provenance,
            )
        )
    return _dedupe(records)


def extract_process_annotations(
    graph: TripleGraph | Graph, source: str | None = None
) -> ExtractionOutcome[list[ProcessAnnotation]]:
    return run_stage(ErrorStage.PROCESS_EXTRACT, _collect_processes, as_triple_graph(graph), source)


# ---------------------------------------------------------------------------
# Energy differentials
# ---------------------------------------------------------------------------

def _collect_energy_differentials(graph: TripleGraph, source: str | None) -> list[EnergyDifferential]:
    provenance = Provenance(source)
    records: list[EnergyDifferential] = []
    for subject, _, source_node in graph.triples(None, HAS_SOURCE_PARTICIPANT, None):
        sinks = object_terms(graph, subject, HAS_SINK_PARTICIPANT, source)
        if not sinks:
            continue
        records.append(
            EnergyDifferential(
                subject=to_term(subject, source),
                source=to_term(source_node, source),
                sinks=sinks,
                properties=object_terms(graph, subject, HAS_PHYSICAL_PROPERTY, source),
                provenance=provenance,
            )
        )
    return _dedupe(records)


def extract_energy_differentials(
    graph: TripleGraph | Graph, source: str | None = None
) -> ExtractionOutcome[list[EnergyDifferential]]:
    """Emit one record per source participant whose subject also has a sink.

    Detection is driven from the source side only; sink-only subjects are
    skipped.
    """
    return run_stage(ErrorStage.ENERGY_EXTRACT, _collect_energy_differentials, as_triple_graph(graph), source)


# ---------------------------------------------------------------------------
# OPB term frequencies
# ---------------------------------------------------------------------------

def extract_opb_terms(graph: TripleGraph | Graph) -> dict[str, int]:
    """Count canonical OPB references appearing as statement objects."""
    counts: Counter[str] = Counter()
    for _, _, obj in as_triple_graph(graph).triples():
        term = to_term(obj)
        if isinstance(term, UriTerm) and term.value.startswith(OPB_NAMESPACES):
            counts[term.value] += 1
    return dict(counts)
