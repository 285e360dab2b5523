"""Term model, identifier normalization and graph facade."""

from .curie import DEFAULT_REGISTRY, CurieRegistry, compact_uri, expand_curie
from .graph import RdflibGraph, TripleGraph, as_triple_graph, to_term
from .terms import BlankNodeTerm, LiteralTerm, Term, UriTerm
from .uris import canonicalize_uri, is_local_uri, normalize_blank_node

__all__ = [
    "BlankNodeTerm",
    "CurieRegistry",
    "DEFAULT_REGISTRY",
    "LiteralTerm",
    "RdflibGraph",
    "Term",
    "TripleGraph",
    "UriTerm",
    "as_triple_graph",
    "canonicalize_uri",
    "compact_uri",
    "expand_curie",
    "is_local_uri",
    "normalize_blank_node",
    "to_term",
]
