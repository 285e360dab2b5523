from __future__ import annotations

from rdflib import BNode, Graph, Literal, URIRef
from rdflib.namespace import XSD
import pytest

from omexrdf.rdf.graph import RdflibGraph, TripleGraph, as_triple_graph, to_term
from omexrdf.rdf.terms import BlankNodeTerm, LiteralTerm, UriTerm


def test_uri_terms_are_always_canonical() -> None:
    assert UriTerm("http://identifiers.org/go/GO:1/").value == "https://identifiers.org/go/GO:1"
    assert UriTerm("http://identifiers.org/go/GO:1") == UriTerm("https://identifiers.org/go/GO:1")


def test_to_term_classifies_node_kinds() -> None:
    uri = to_term(URIRef("http://identifiers.org/opb/OPB_00340"))
    literal = to_term(Literal("2.0", datatype=XSD.double))
    plain = to_term(Literal("Jane Doe"))
    blank = to_term(BNode("b0"), "metadata.rdf")

    assert uri == UriTerm("https://identifiers.org/opb/OPB_00340")
    assert isinstance(literal, LiteralTerm)
    assert literal.datatype == str(XSD.double)
    assert plain.to_dict() == {"type": "literal", "value": "Jane Doe", "datatype": None}
    assert isinstance(blank, BlankNodeTerm)
    assert blank.value.startswith("_:b")
    assert blank.value.endswith("_b0")


def test_to_term_without_source_keeps_blank_label() -> None:
    assert to_term(BNode("n1")) == BlankNodeTerm("n1")


def test_to_term_rejects_unknown_nodes() -> None:
    with pytest.raises(TypeError):
        to_term(object())


def test_rdflib_graph_facade() -> None:
    graph = Graph()
    subject = URIRef("http://example.org/s")
    predicate = URIRef("http://example.org/p")
    graph.add((subject, predicate, Literal("a")))
    graph.add((subject, predicate, Literal("b")))
    graph.add((URIRef("http://example.org/t"), predicate, subject))

    facade = as_triple_graph(graph)

    assert isinstance(facade, RdflibGraph)
    assert isinstance(facade, TripleGraph)
    assert len(facade) == 3
    assert sorted(str(node) for node in facade.subjects()) == ["http://example.org/s", "http://example.org/t"]
    assert sorted(str(node) for node in facade.objects(subject, str(predicate))) == ["a", "b"]
    assert len(list(facade.triples(None, str(predicate), None))) == 3
    assert as_triple_graph(facade) is facade
