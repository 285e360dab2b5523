from __future__ import annotations

import json

from rdflib import Graph, Literal, URIRef

from omexrdf.config import ExtractionSettings
from omexrdf.extraction import aggregate
from omexrdf.extraction.aggregate import annotate_graphs, extract_all_annotations, merge_opb_terms
from omexrdf.extraction.extractors import HAS_PHYSICAL_ENTITY
from omexrdf.extraction.guard import check_triple_limit
from omexrdf.extraction.results import Err, ErrorStage, Ok
from omexrdf.rdf.graph import RdflibGraph


class CompositeBreakingGraph(RdflibGraph):
    """Fails only when the composite extractor asks for physical entities."""

    def triples(self, subject=None, predicate=None, obj=None):
        if predicate == HAS_PHYSICAL_ENTITY:
            raise ValueError("malformed entity lookup")
        return super().triples(subject, predicate, obj)

    def objects(self, subject, predicate):
        if predicate == HAS_PHYSICAL_ENTITY:
            raise ValueError("malformed entity lookup")
        return super().objects(subject, predicate)


def _large_graph(size: int) -> Graph:
    graph = Graph()
    predicate = URIRef("http://example.org/value")
    for index in range(size):
        graph.add((URIRef(f"http://example.org/item/{index}"), predicate, Literal(index)))
    return graph


def test_guard_allows_unlimited_and_small_graphs(singular_graph: Graph) -> None:
    assert check_triple_limit(singular_graph, None) == Ok(None)
    assert check_triple_limit(singular_graph, 1000) == Ok(None)


def test_guard_rejects_oversized_graph_before_extractors_run(monkeypatch) -> None:
    calls: list[str] = []

    def _spy(*args, **kwargs):
        calls.append("called")
        raise AssertionError("extractor must not run")

    for name in (
        "extract_singular_annotations",
        "extract_composite_annotations",
        "extract_process_annotations",
        "extract_energy_differentials",
        "extract_opb_terms",
    ):
        monkeypatch.setattr(aggregate, name, _spy)

    outcome = extract_all_annotations(_large_graph(15000), "big.rdf", ExtractionSettings(max_triples=10000))

    assert isinstance(outcome, Err)
    assert outcome.stage is ErrorStage.RDF_PARSE
    assert outcome.details == {"triple_count": 15000, "limit": 10000}
    assert outcome.message == "Model exceeds max-triples limit (15000 > 10000)"
    assert calls == []


def test_all_annotations_for_mixed_graph(mixed_graph: Graph) -> None:
    outcome = extract_all_annotations(mixed_graph, "metadata.ttl")

    assert isinstance(outcome, Ok)
    result = outcome.data
    assert len(result.singular_annotations) == 6
    assert len(result.composite_annotations) == 2
    assert len(result.process_annotations) == 1
    assert len(result.energy_differentials) == 1
    assert result.opb_terms["https://identifiers.org/opb/OPB_00340"] == 2
    assert result.dc["creator"] == ["Jane Doe"]
    assert result.dc["title"] == "Test model"
    assert result.bqbiol["is"] == ["https://identifiers.org/chebi/CHEBI:17234"]
    assert result.bqmodel["isDescribedBy"] == ["https://identifiers.org/pubmed/12345"]
    assert result.provenance.source == "metadata.ttl"
    assert result.extraction_errors == ()


def test_partial_failure_keeps_other_extractors(mixed_graph: Graph) -> None:
    outcome = extract_all_annotations(CompositeBreakingGraph(mixed_graph), "metadata.ttl")

    assert isinstance(outcome, Ok)
    result = outcome.data
    assert result.singular_annotations
    assert result.process_annotations
    assert result.composite_annotations == ()
    assert len(result.extraction_errors) == 1
    error = result.extraction_errors[0]
    assert error.stage is ErrorStage.COMPOSITE_EXTRACT
    assert error.cause_kind == "ValueError"


def test_graph_annotations_are_json_serializable(mixed_graph: Graph) -> None:
    outcome = extract_all_annotations(CompositeBreakingGraph(mixed_graph), "metadata.ttl")
    payload = json.loads(json.dumps(outcome.to_dict()))

    assert payload["ok"] is True
    data = payload["data"]
    assert data["singular_annotations"][0]["type"] == "singular"
    assert data["singular_annotations"][0]["subject"]["type"] == "uri"
    assert data["process_annotations"][0]["type"] == "process"
    assert data["extraction_errors"][0]["stage"] == "composite-extract"


def test_annotate_graphs_merges_errors_in_order(mixed_graph: Graph, process_graph: Graph) -> None:
    loading_error = Err(stage=ErrorStage.EXTRACT, message="Entry not found in archive: missing.rdf")
    settings = ExtractionSettings(max_triples=20, workers=2)

    result = annotate_graphs(
        [("metadata.ttl", mixed_graph), ("processes.ttl", process_graph)],
        settings,
        loading_errors=[loading_error],
    )

    assert result.model_count == 2
    assert [item.provenance.source for item in result.data] == ["processes.ttl"]
    assert result.errors[0] is loading_error
    assert result.errors[1].stage is ErrorStage.RDF_PARSE
    assert result.errors[1].details["limit"] == 20


def test_annotate_graphs_is_order_stable_with_workers(mixed_graph: Graph, process_graph: Graph) -> None:
    graphs = [(f"g{index}.ttl", mixed_graph if index % 2 else process_graph) for index in range(6)]

    serial = annotate_graphs(graphs, ExtractionSettings(workers=1))
    parallel = annotate_graphs(graphs, ExtractionSettings(workers=4))

    assert [item.provenance.source for item in parallel.data] == [item.provenance.source for item in serial.data]
    assert parallel.to_dict() == serial.to_dict()
    assert parallel.opb_terms == merge_opb_terms(item.opb_terms for item in serial.data)
