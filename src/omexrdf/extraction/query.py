"""Minimal SELECT/OPTIONAL evaluator for ad hoc extraction patterns.

Queries are conjunctions of triple patterns evaluated as nested-loop joins,
plus optional groups that leave their variables unbound instead of dropping
the row.  Rows keep the order in which bindings were discovered.

A small SPARQL-like text form is accepted as well::

    PREFIX ex: <http://example.org/>
    SELECT ?s ?label WHERE {
        ?s a ex:Thing .
        OPTIONAL { ?s ex:label ?label }
    } LIMIT 10
"""

from __future__ import annotations

from dataclasses import dataclass, field
import re
from typing import Iterator, Union

from rdflib import Graph

from omexrdf.extraction.results import ErrorStage, ExtractionOutcome, run_stage
from omexrdf.rdf.curie import DEFAULT_REGISTRY, CurieRegistry
from omexrdf.rdf.graph import Node, TripleGraph, as_triple_graph, to_term
from omexrdf.rdf.namespaces import RDF_TYPE
from omexrdf.rdf.terms import LiteralTerm, Term, UriTerm

Row = dict[str, Union[str, None]]


@dataclass(slots=True)
class QuerySyntaxError(Exception):
    """Raised for queries that cannot be parsed or resolved."""

    message: str
    position: int | None = None

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at offset {self.position})"


@dataclass(frozen=True, slots=True)
class TriplePattern:
    """Triple pattern; each slot is ``?var``, ``<iri>``, a CURIE or ``"literal"``."""

    subject: str
    predicate: str
    object: str


@dataclass(frozen=True, slots=True)
class SelectQuery:
    projection: tuple[str, ...]
    where: tuple[TriplePattern, ...]
    optional: tuple[tuple[TriplePattern, ...], ...] = ()
    limit: int | None = None
    prefixes: dict[str, str] = field(default_factory=dict, compare=False)


@dataclass(frozen=True, slots=True)
class _Var:
    name: str


@dataclass(frozen=True, slots=True)
class _Fixed:
    raw: str
    term: Term


_Slot = Union[_Var, _Fixed]
_ResolvedPattern = tuple[_Slot, _Slot, _Slot]


# ---------------------------------------------------------------------------
# Text form
# ---------------------------------------------------------------------------

_TOKEN_RE = re.compile(
    r"""\s*(?:
        (?P<var>[?$][A-Za-z_]\w*)
      | (?P<iri><[^<>\s]*>)
      | (?P<literal>"(?:[^"\\]|\\.)*")
      | (?P<punct>[{}.*])
      | (?P<pname>[A-Za-z_][\w.\-]*:[^\s{}<>"]*)
      | (?P<word>[A-Za-z_]\w*|\d+)
    )""",
    re.VERBOSE,
)


def _tokenize(text: str) -> list[tuple[str, str, int]]:
    tokens: list[tuple[str, str, int]] = []
    pos = 0
    while pos < len(text):
        if not text[pos:].strip():
            break
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise QuerySyntaxError("Unexpected character in query", pos)
        kind = match.lastgroup or ""
        value = match.group(kind)
        if kind == "pname" and value.endswith("."):
            tokens.append((kind, value[:-1], match.start(kind)))
            tokens.append(("punct", ".", match.end(kind) - 1))
        else:
            tokens.append((kind, value, match.start(kind)))
        pos = match.end()
    return tokens


class _Parser:
    def __init__(self, text: str) -> None:
        self._tokens = _tokenize(text)
        self._index = 0
        self._prefixes: dict[str, str] = {}

    def _peek(self) -> tuple[str, str, int] | None:
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        return None

    def _next(self, expected: str) -> tuple[str, str, int]:
        token = self._peek()
        if token is None:
            raise QuerySyntaxError(f"Unexpected end of query, expected {expected}")
        self._index += 1
        return token

    def _keyword(self, word: str) -> bool:
        token = self._peek()
        if token is not None and token[0] == "word" and token[1].upper() == word:
            self._index += 1
            return True
        return False

    def _punct(self, symbol: str) -> bool:
        token = self._peek()
        if token is not None and token[0] == "punct" and token[1] == symbol:
            self._index += 1
            return True
        return False

    def _expect_punct(self, symbol: str) -> None:
        kind, value, pos = self._next(repr(symbol))
        if kind != "punct" or value != symbol:
            raise QuerySyntaxError(f"Expected {symbol!r}, found {value!r}", pos)

    def parse(self) -> SelectQuery:
        while self._keyword("PREFIX"):
            kind, value, pos = self._next("prefix name")
            if kind != "pname" or not value.endswith(":"):
                raise QuerySyntaxError("PREFIX expects a name ending in ':'", pos)
            iri_kind, iri, iri_pos = self._next("namespace IRI")
            if iri_kind != "iri":
                raise QuerySyntaxError("PREFIX expects an <IRI>", iri_pos)
            self._prefixes[value[:-1]] = iri[1:-1]

        if not self._keyword("SELECT"):
            raise QuerySyntaxError("Query must start with SELECT")

        projection: list[str] = []
        select_all = self._punct("*")
        if not select_all:
            while (token := self._peek()) is not None and token[0] == "var":
                projection.append(token[1][1:])
                self._index += 1
            if not projection:
                raise QuerySyntaxError("SELECT needs '*' or at least one variable")

        self._keyword("WHERE")
        self._expect_punct("{")
        where: list[TriplePattern] = []
        optional: list[tuple[TriplePattern, ...]] = []
        while not self._punct("}"):
            if self._keyword("OPTIONAL"):
                self._expect_punct("{")
                group: list[TriplePattern] = []
                while not self._punct("}"):
                    group.append(self._triple())
                if not group:
                    raise QuerySyntaxError("OPTIONAL block cannot be empty")
                optional.append(tuple(group))
                self._punct(".")
            else:
                where.append(self._triple())

        limit: int | None = None
        if self._keyword("LIMIT"):
            kind, value, pos = self._next("LIMIT value")
            if kind != "word" or not value.isdigit():
                raise QuerySyntaxError("LIMIT expects a non-negative integer", pos)
            limit = int(value)

        trailing = self._peek()
        if trailing is not None:
            raise QuerySyntaxError(f"Unexpected trailing token {trailing[1]!r}", trailing[2])

        if select_all:
            projection = _variables_in(where, optional)

        return SelectQuery(
            projection=tuple(projection),
            where=tuple(where),
            optional=tuple(optional),
            limit=limit,
            prefixes=dict(self._prefixes),
        )

    def _triple(self) -> TriplePattern:
        slots = [self._slot() for _ in range(3)]
        self._punct(".")
        return TriplePattern(*slots)

    def _slot(self) -> str:
        kind, value, pos = self._next("a term")
        if kind in {"var", "iri", "literal", "pname"}:
            return value
        if kind == "word" and value == "a":
            return f"<{RDF_TYPE}>"
        raise QuerySyntaxError(f"Unexpected token {value!r}", pos)


def _variables_in(
    where: list[TriplePattern], optional: list[tuple[TriplePattern, ...]]
) -> list[str]:
    names: list[str] = []
    patterns = list(where) + [pattern for group in optional for pattern in group]
    for pattern in patterns:
        for slot in (pattern.subject, pattern.predicate, pattern.object):
            if slot[:1] in {"?", "$"} and slot[1:] not in names:
                names.append(slot[1:])
    return names


def parse_select(text: str) -> SelectQuery:
    """Parse the SPARQL-like text form into a :class:`SelectQuery`."""
    return _Parser(text).parse()


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------

def _unescape_literal(raw: str) -> str:
    return re.sub(r"\\(.)", r"\1", raw[1:-1])


def _resolve_slot(slot: str, registry: CurieRegistry) -> _Slot:
    if not slot:
        raise QuerySyntaxError("Empty term in triple pattern")
    if slot[0] in "?$":
        if len(slot) < 2:
            raise QuerySyntaxError(f"Invalid variable {slot!r}")
        return _Var(slot[1:])
    if slot.startswith('"'):
        if len(slot) < 2 or not slot.endswith('"'):
            raise QuerySyntaxError(f"Unterminated literal {slot!r}")
        return _Fixed(slot, LiteralTerm(_unescape_literal(slot)))
    if slot.startswith("<"):
        if not slot.endswith(">"):
            raise QuerySyntaxError(f"Unterminated IRI {slot!r}")
        raw = slot[1:-1]
    else:
        raw = registry.expand(slot)
        if raw == slot and ":" not in slot:
            raise QuerySyntaxError(f"Cannot resolve term {slot!r}")
    return _Fixed(raw, UriTerm(raw))


def _resolve(pattern: TriplePattern, registry: CurieRegistry) -> _ResolvedPattern:
    return (
        _resolve_slot(pattern.subject, registry),
        _resolve_slot(pattern.predicate, registry),
        _resolve_slot(pattern.object, registry),
    )


def _fixed_matches(node: Node, fixed: _Fixed, source: str | None) -> bool:
    term = to_term(node, source)
    if isinstance(fixed.term, LiteralTerm):
        return isinstance(term, LiteralTerm) and term.value == fixed.term.value
    return term == fixed.term


def _bound(slot: _Slot, binding: dict[str, Node]) -> Node | None:
    if isinstance(slot, _Var):
        return binding.get(slot.name)
    return None


def _match_pattern(
    graph: TripleGraph,
    pattern: _ResolvedPattern,
    binding: dict[str, Node],
    source: str | None,
) -> Iterator[dict[str, Node]]:
    subject_slot, predicate_slot, object_slot = pattern

    # Fixed predicates are matched canonically below, like fixed subjects and objects.
    predicate: str | None = None
    if isinstance(predicate_slot, _Var) and predicate_slot.name in binding:
        predicate = str(binding[predicate_slot.name])

    statements = graph.triples(_bound(subject_slot, binding), predicate, _bound(object_slot, binding))
    for statement in statements:
        extended = dict(binding)
        matched = True
        for slot, node in zip(pattern, statement):
            if isinstance(slot, _Fixed):
                if not _fixed_matches(node, slot, source):
                    matched = False
                    break
            elif slot.name in extended:
                if extended[slot.name] != node:
                    matched = False
                    break
            else:
                extended[slot.name] = node
        if matched:
            yield extended


def _join(
    graph: TripleGraph,
    patterns: list[_ResolvedPattern],
    rows: list[dict[str, Node]],
    source: str | None,
) -> list[dict[str, Node]]:
    for pattern in patterns:
        rows = [extended for row in rows for extended in _match_pattern(graph, pattern, row, source)]
    return rows


def _evaluate(graph: TripleGraph, query: SelectQuery | str, source: str | None) -> list[Row]:
    if isinstance(query, str):
        query = parse_select(query)
    if not query.where:
        raise QuerySyntaxError("Query needs at least one required triple pattern")

    registry = DEFAULT_REGISTRY
    if query.prefixes:
        registry = CurieRegistry({**DEFAULT_REGISTRY.prefixes, **query.prefixes})

    required = [_resolve(pattern, registry) for pattern in query.where]
    optional_groups = [[_resolve(pattern, registry) for pattern in group] for group in query.optional]
    projection = [name.lstrip("?$") for name in query.projection]

    rows = _join(graph, required, [{}], source)
    for group in optional_groups:
        next_rows: list[dict[str, Node]] = []
        for row in rows:
            extended = _join(graph, group, [row], source)
            next_rows.extend(extended if extended else [row])
        rows = next_rows

    if query.limit is not None:
        rows = rows[: query.limit]

    results: list[Row] = []
    for row in rows:
        results.append(
            {name: (to_term(row[name], source).value if name in row else None) for name in projection}
        )
    return results


def select(
    graph: TripleGraph | Graph, query: SelectQuery | str, source: str | None = None
) -> ExtractionOutcome[list[Row]]:
    """Evaluate *query* against *graph*; any failure becomes ``Err(stage=sparql)``."""
    return run_stage(ErrorStage.SPARQL, _evaluate, as_triple_graph(graph), query, source)
