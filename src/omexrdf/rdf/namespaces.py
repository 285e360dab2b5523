"""Namespace URIs for the annotation vocabularies found in OMEX metadata."""

from __future__ import annotations

from rdflib import Namespace

BQBIOL_NS = "http://biomodels.net/biology-qualifiers/"
BQMODEL_NS = "http://biomodels.net/model-qualifiers/"
SEMSIM_NS = "http://www.bhi.washington.edu/semsim#"
RO_NS = "http://www.obofoundry.org/ro/ro.owl#"
DC_NS = "http://purl.org/dc/elements/1.1/"
DCTERMS_NS = "http://purl.org/dc/terms/"
RDF_NS = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
OPB_NS = "http://identifiers.org/opb/"

# Canonical forms of OPB references; objects are compared after canonicalization.
OPB_NAMESPACES: tuple[str, ...] = (
    "https://identifiers.org/opb/",
    "http://bhi.washington.edu/OPB#",
)

BQBIOL = Namespace(BQBIOL_NS)
BQMODEL = Namespace(BQMODEL_NS)
SEMSIM = Namespace(SEMSIM_NS)
RO = Namespace(RO_NS)

RDF_TYPE = RDF_NS + "type"

__all__ = [
    "BQBIOL_NS",
    "BQMODEL_NS",
    "SEMSIM_NS",
    "RO_NS",
    "DC_NS",
    "DCTERMS_NS",
    "RDF_NS",
    "OPB_NS",
    "OPB_NAMESPACES",
    "BQBIOL",
    "BQMODEL",
    "SEMSIM",
    "RO",
    "RDF_TYPE",
]
