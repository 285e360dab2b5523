"""Closed term model for graph nodes seen by the extractors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from omexrdf.rdf.uris import canonicalize_uri


@dataclass(frozen=True, slots=True)
class UriTerm:
    """A URI resource; the value is always in canonical form."""

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", canonicalize_uri(self.value))

    @property
    def kind(self) -> str:
        return "uri"

    def to_dict(self) -> dict[str, Any]:
        return {"type": "uri", "value": self.value}


@dataclass(frozen=True, slots=True)
class LiteralTerm:
    """A literal value with an optional datatype URI."""

    value: str
    datatype: str | None = None

    @property
    def kind(self) -> str:
        return "literal"

    def to_dict(self) -> dict[str, Any]:
        return {"type": "literal", "value": self.value, "datatype": self.datatype}


@dataclass(frozen=True, slots=True)
class BlankNodeTerm:
    """An anonymous node, identified by its source-scoped normalized label."""

    value: str

    @property
    def kind(self) -> str:
        return "bnode"

    def to_dict(self) -> dict[str, Any]:
        return {"type": "bnode", "value": self.value}


Term = Union[UriTerm, LiteralTerm, BlankNodeTerm]


def terms_to_dicts(terms: tuple[Term, ...] | list[Term]) -> list[dict[str, Any]]:
    return [term.to_dict() for term in terms]
