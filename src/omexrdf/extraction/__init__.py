"""Annotation extractors, query evaluator and result envelope."""

from .aggregate import ArchiveAnnotations, GraphAnnotations, annotate_graphs, extract_all_annotations
from .extractors import (
    extract_composite_annotations,
    extract_energy_differentials,
    extract_opb_terms,
    extract_process_annotations,
    extract_singular_annotations,
)
from .guard import check_triple_limit
from .query import QuerySyntaxError, SelectQuery, TriplePattern, parse_select, select
from .results import Err, ErrorStage, ExtractionOutcome, Ok, run_stage

__all__ = [
    "ArchiveAnnotations",
    "Err",
    "ErrorStage",
    "ExtractionOutcome",
    "GraphAnnotations",
    "Ok",
    "QuerySyntaxError",
    "SelectQuery",
    "TriplePattern",
    "annotate_graphs",
    "check_triple_limit",
    "extract_all_annotations",
    "extract_composite_annotations",
    "extract_energy_differentials",
    "extract_opb_terms",
    "extract_process_annotations",
    "extract_singular_annotations",
    "parse_select",
    "run_stage",
    "select",
]
