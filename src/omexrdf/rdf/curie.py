"""Bidirectional CURIE <-> URI mapping over a fixed prefix registry."""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping

from omexrdf.rdf.namespaces import (
    BQBIOL_NS,
    BQMODEL_NS,
    DC_NS,
    DCTERMS_NS,
    OPB_NS,
    RDF_NS,
    RO_NS,
    SEMSIM_NS,
)

# Tokens that always denote an absolute URI and can never be used as prefixes.
URI_SCHEME_TOKENS = frozenset({"http", "https", "urn", "file"})

_CURIE_RE = re.compile(r"^([A-Za-z_][A-Za-z0-9_.\-]*):(.*)$", re.DOTALL)

DEFAULT_PREFIXES: dict[str, str] = {
    "bqbiol": BQBIOL_NS,
    "bqmodel": BQMODEL_NS,
    "semsim": SEMSIM_NS,
    "ro": RO_NS,
    "dc": DC_NS,
    "dcterms": DCTERMS_NS,
    "rdf": RDF_NS,
    "rdfs": "http://www.w3.org/2000/01/rdf-schema#",
    "owl": "http://www.w3.org/2002/07/owl#",
    "xsd": "http://www.w3.org/2001/XMLSchema#",
    "foaf": "http://xmlns.com/foaf/0.1/",
    "identifiers": "http://identifiers.org/",
    "opb": OPB_NS,
    "go": "http://identifiers.org/go/",
    "chebi": "http://identifiers.org/chebi/",
    "fma": "http://identifiers.org/fma/",
    "uniprot": "http://identifiers.org/uniprot/",
    "taxonomy": "http://identifiers.org/taxonomy/",
    "pubmed": "http://identifiers.org/pubmed/",
    "cl": "http://identifiers.org/cl/",
    "orcid": "https://orcid.org/",
}


class CurieRegistry:
    """Immutable prefix -> namespace registry with longest-match compaction."""

    def __init__(self, prefixes: Mapping[str, str]) -> None:
        for prefix, namespace in prefixes.items():
            if not prefix:
                raise ValueError("CURIE prefix cannot be empty")
            if prefix.lower() in URI_SCHEME_TOKENS:
                raise ValueError(f"CURIE prefix collides with a URI scheme: {prefix}")
            if not namespace:
                raise ValueError(f"Namespace for prefix {prefix!r} cannot be empty")
        self._prefixes: Mapping[str, str] = MappingProxyType(dict(prefixes))
        # Longest namespace first so the most specific prefix wins.
        self._by_namespace: tuple[tuple[str, str], ...] = tuple(
            sorted(
                ((namespace, prefix) for prefix, namespace in self._prefixes.items()),
                key=lambda item: len(item[0]),
                reverse=True,
            )
        )

    @property
    def prefixes(self) -> Mapping[str, str]:
        return self._prefixes

    def expand(self, curie: str) -> str:
        """Expand ``prefix:local`` when *prefix* is registered; otherwise echo input."""
        match = _CURIE_RE.match(curie)
        if not match:
            return curie
        prefix, local = match.group(1), match.group(2)
        if prefix.lower() in URI_SCHEME_TOKENS:
            return curie
        namespace = self._prefixes.get(prefix)
        if namespace is None:
            return curie
        return namespace + local

    def compact(self, uri: str) -> str:
        """Replace the longest registered namespace prefix of *uri* with ``prefix:``."""
        for namespace, prefix in self._by_namespace:
            if uri.startswith(namespace):
                return f"{prefix}:{uri[len(namespace):]}"
        return uri


DEFAULT_REGISTRY = CurieRegistry(DEFAULT_PREFIXES)


def expand_curie(curie: str) -> str:
    return DEFAULT_REGISTRY.expand(curie)


def compact_uri(uri: str) -> str:
    return DEFAULT_REGISTRY.compact(uri)
