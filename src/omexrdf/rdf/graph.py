"""Query facade over an already-parsed triple graph.

The extractors only ever talk to :class:`TripleGraph`.  Raw nodes are turned
into :data:`~omexrdf.rdf.terms.Term` values exactly once, by :func:`to_term`.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Protocol, runtime_checkable

from rdflib import BNode, Graph, Literal, URIRef

from omexrdf.rdf.terms import BlankNodeTerm, LiteralTerm, Term, UriTerm
from omexrdf.rdf.uris import normalize_blank_node

Node = Any
Statement = tuple[Node, Node, Node]


@runtime_checkable
class TripleGraph(Protocol):
    """Operations the extraction core needs from a triple graph."""

    def subjects(self) -> Iterable[Node]:
        """Enumerate distinct subjects."""

    def objects(self, subject: Node, predicate: str) -> Iterable[Node]:
        """List objects of statements matching *subject* and *predicate*."""

    def triples(
        self,
        subject: Node | None = None,
        predicate: str | None = None,
        obj: Node | None = None,
    ) -> Iterable[Statement]:
        """List statements matching the given pattern (``None`` is a wildcard)."""

    def __len__(self) -> int:
        """Total number of statements."""


class RdflibGraph:
    """:class:`TripleGraph` backed by an :class:`rdflib.Graph`."""

    def __init__(self, graph: Graph) -> None:
        self._graph = graph

    @property
    def graph(self) -> Graph:
        return self._graph

    def subjects(self) -> Iterator[Node]:
        seen: set[Node] = set()
        for subject in self._graph.subjects():
            if subject in seen:
                continue
            seen.add(subject)
            yield subject

    def objects(self, subject: Node, predicate: str) -> Iterator[Node]:
        return self._graph.objects(subject, URIRef(predicate))

    def triples(
        self,
        subject: Node | None = None,
        predicate: str | None = None,
        obj: Node | None = None,
    ) -> Iterator[Statement]:
        pred = URIRef(predicate) if predicate is not None else None
        return self._graph.triples((subject, pred, obj))

    def __len__(self) -> int:
        return len(self._graph)


def as_triple_graph(graph: TripleGraph | Graph) -> TripleGraph:
    """Wrap a bare rdflib graph; facade implementations pass through."""
    if isinstance(graph, Graph):
        return RdflibGraph(graph)
    return graph


def to_term(node: Node, source: str | None = None) -> Term:
    """Classify a raw graph node into the closed :data:`Term` union."""
    if isinstance(node, URIRef):
        return UriTerm(str(node))
    if isinstance(node, Literal):
        datatype = str(node.datatype) if node.datatype is not None else None
        return LiteralTerm(str(node), datatype)
    if isinstance(node, BNode):
        return BlankNodeTerm(normalize_blank_node(source, str(node)))
    raise TypeError(f"Unsupported graph node type: {type(node).__name__}")


def object_terms(graph: TripleGraph, subject: Node, predicate: str, source: str | None = None) -> tuple[Term, ...]:
    return tuple(to_term(node, source) for node in graph.objects(subject, predicate))
