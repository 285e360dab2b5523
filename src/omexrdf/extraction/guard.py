"""Triple-count ceiling checked before any extractor touches a graph."""

from __future__ import annotations

import logging

from rdflib import Graph

from omexrdf.extraction.results import Err, ErrorStage, ExtractionOutcome, Ok
from omexrdf.rdf.graph import TripleGraph, as_triple_graph

logger = logging.getLogger(__name__)


def check_triple_limit(graph: TripleGraph | Graph, max_triples: int | None = None) -> ExtractionOutcome[None]:
    """Return ``Ok(None)`` when the graph is within *max_triples* (``None`` = unlimited)."""
    if max_triples is None:
        return Ok(None)

    try:
        triple_count = len(as_triple_graph(graph))
    except Exception as exc:
        return Err(
            stage=ErrorStage.RDF_PARSE,
            message=f"Could not count statements: {exc}",
            cause_kind=type(exc).__name__,
        )

    if triple_count > max_triples:
        logger.warning("Rejecting graph with %d triples (limit %d)", triple_count, max_triples)
        return Err(
            stage=ErrorStage.RDF_PARSE,
            message=f"Model exceeds max-triples limit ({triple_count} > {max_triples})",
            details={"triple_count": triple_count, "limit": max_triples},
        )
    return Ok(None)
