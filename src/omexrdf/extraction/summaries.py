"""Per-graph summary maps for Dublin Core metadata and BioModels qualifiers."""

from __future__ import annotations

from typing import Any

from rdflib import Graph

from omexrdf.rdf.graph import TripleGraph, as_triple_graph, to_term
from omexrdf.rdf.namespaces import BQBIOL_NS, BQMODEL_NS, DC_NS, DCTERMS_NS
from omexrdf.rdf.terms import LiteralTerm, UriTerm

BQBIOL_QUALIFIERS: tuple[str, ...] = (
    "is", "hasPart", "isPartOf", "isVersionOf", "hasVersion",
    "isHomologTo", "isDescribedBy", "isEncodedBy", "encodes",
    "occursIn", "hasProperty", "isPropertyOf", "hasTaxon",
)

BQMODEL_QUALIFIERS: tuple[str, ...] = (
    "is", "isDerivedFrom", "isDescribedBy", "isInstanceOf", "hasInstance",
)

# field -> predicates tried in order; only ``creator`` keeps every value.
_DC_FIELDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("title", (DC_NS + "title", DCTERMS_NS + "title")),
    ("creator", (DC_NS + "creator", DCTERMS_NS + "creator")),
    ("description", (DC_NS + "description", DCTERMS_NS + "description")),
    ("date", (DCTERMS_NS + "created", DC_NS + "date")),
    ("source", (DC_NS + "source", DCTERMS_NS + "source")),
)


def _literal_values(graph: TripleGraph, predicate: str) -> list[str]:
    values: list[str] = []
    for _, _, obj in graph.triples(None, predicate, None):
        term = to_term(obj)
        if isinstance(term, LiteralTerm):
            values.append(term.value)
    return values


def extract_dc_metadata(graph: TripleGraph | Graph) -> dict[str, Any]:
    """Return ``title``, ``creator`` (list), ``description``, ``date`` and ``source``."""
    facade = as_triple_graph(graph)
    metadata: dict[str, Any] = {}
    for field_name, predicates in _DC_FIELDS:
        values = [value for predicate in predicates for value in _literal_values(facade, predicate)]
        if field_name == "creator":
            metadata[field_name] = values
        else:
            metadata[field_name] = values[0] if values else None
    return metadata


def _qualifier_map(graph: TripleGraph, namespace: str, qualifiers: tuple[str, ...]) -> dict[str, list[str]]:
    result: dict[str, list[str]] = {}
    for qualifier in qualifiers:
        for _, _, obj in graph.triples(None, namespace + qualifier, None):
            term = to_term(obj)
            if isinstance(term, UriTerm):
                result.setdefault(qualifier, []).append(term.value)
    return result


def extract_bqbiol_annotations(graph: TripleGraph | Graph) -> dict[str, list[str]]:
    """Map each biology qualifier in use to the canonical URIs it points at."""
    return _qualifier_map(as_triple_graph(graph), BQBIOL_NS, BQBIOL_QUALIFIERS)


def extract_bqmodel_annotations(graph: TripleGraph | Graph) -> dict[str, list[str]]:
    return _qualifier_map(as_triple_graph(graph), BQMODEL_NS, BQMODEL_QUALIFIERS)
