"""Annotation record types emitted by the pattern extractors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from omexrdf.rdf.terms import Term, terms_to_dicts


@dataclass(frozen=True, slots=True)
class Provenance:
    """Where an extracted record came from."""

    source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"source": self.source}


@dataclass(frozen=True, slots=True)
class SingularAnnotation:
    subject: Term
    predicate_key: str
    predicate_uri: str
    object: Term
    provenance: Provenance

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "singular",
            "subject": self.subject.to_dict(),
            "predicate": self.predicate_key,
            "predicate_uri": self.predicate_uri,
            "object": self.object.to_dict(),
            "provenance": self.provenance.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class EntityComposite:
    subject: Term
    entities: tuple[Term, ...]
    properties: tuple[Term, ...]
    entity_references: tuple[Term, ...]
    multipliers: tuple[Term, ...]
    part_of: tuple[Term, ...]
    provenance: Provenance

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "entity-composite",
            "subject": self.subject.to_dict(),
            "entities": terms_to_dicts(self.entities),
            "properties": terms_to_dicts(self.properties),
            "entity_references": terms_to_dicts(self.entity_references),
            "multipliers": terms_to_dicts(self.multipliers),
            "part_of": terms_to_dicts(self.part_of),
            "provenance": self.provenance.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class ProcessAnnotation:
    subject: Term
    sources: tuple[Term, ...]
    sinks: tuple[Term, ...]
    mediators: tuple[Term, ...]
    provenance: Provenance

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "process",
            "subject": self.subject.to_dict(),
            "sources": terms_to_dicts(self.sources),
            "sinks": terms_to_dicts(self.sinks),
            "mediators": terms_to_dicts(self.mediators),
            "provenance": self.provenance.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class EnergyDifferential:
    subject: Term
    source: Term
    sinks: tuple[Term, ...]
    properties: tuple[Term, ...]
    provenance: Provenance

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "energy-differential",
            "subject": self.subject.to_dict(),
            "source": self.source.to_dict(),
            "sinks": terms_to_dicts(self.sinks),
            "properties": terms_to_dicts(self.properties),
            "provenance": self.provenance.to_dict(),
        }


AnnotationRecord = Union[SingularAnnotation, EntityComposite, ProcessAnnotation, EnergyDifferential]
