"""Pytest fixtures: Turtle metadata graphs and in-memory OMEX archives."""

from __future__ import annotations

from pathlib import Path
from zipfile import ZipFile

import pytest
from rdflib import Graph

PREFIXES = """
@prefix semsim: <http://www.bhi.washington.edu/semsim#> .
@prefix bqbiol: <http://biomodels.net/biology-qualifiers/> .
@prefix bqmodel: <http://biomodels.net/model-qualifiers/> .
@prefix dc: <http://purl.org/dc/elements/1.1/> .
@prefix dcterms: <http://purl.org/dc/terms/> .
@prefix ro: <http://www.obofoundry.org/ro/ro.owl#> .
@prefix opb: <http://identifiers.org/opb/> .
@prefix xsd: <http://www.w3.org/2001/XMLSchema#> .
@prefix local: <http://omex-library.org/model.rdf#> .
@prefix model: <http://omex-library.org/model.cellml#> .
"""

SINGULAR_TTL = PREFIXES + """
<http://omex-library.org/model.omex> dc:creator "Jane Doe" ;
    dc:description "A test model" ;
    dcterms:title "Test model" ;
    bqmodel:isDescribedBy <http://identifiers.org/pubmed/12345> .

model:glucose bqbiol:is <http://identifiers.org/chebi/CHEBI:17234> ;
    bqbiol:isPartOf <http://identifiers.org/fma/FMA:9670/> .

model:cell bqbiol:hasTaxon <http://identifiers.org/taxonomy/9606> .
"""

COMPOSITE_TTL = PREFIXES + """
model:volume semsim:hasPhysicalProperty opb:OPB_00154 ;
    semsim:hasPhysicalEntity local:entity_0 ;
    semsim:hasMultiplier "2.0"^^xsd:double .

local:entity_0 semsim:hasPhysicalEntityReference <http://identifiers.org/fma/FMA:9670> ;
    ro:part_of local:entity_1 .

model:concentration semsim:hasPhysicalProperty opb:OPB_00340 ;
    semsim:hasPhysicalEntity <http://identifiers.org/chebi/CHEBI:17234> ;
    ro:part_of local:entity_1 .

local:entity_1 semsim:hasPhysicalEntityReference <http://identifiers.org/fma/FMA:63877> .

model:pressure semsim:hasPhysicalProperty opb:OPB_00340 .
"""

PROCESS_TTL = PREFIXES + """
local:process_0 semsim:hasSourceParticipant local:source_0 ;
    semsim:hasSinkParticipant local:sink_0 ;
    semsim:hasMediatorParticipant local:mediator_0 .

local:source_0 semsim:hasPhysicalEntityReference local:entity_a .
local:sink_0 semsim:hasPhysicalEntityReference local:entity_b .
local:mediator_0 semsim:hasPhysicalEntityReference local:entity_c .
"""

ENERGY_TTL = PREFIXES + """
local:diff_0 semsim:hasSourceParticipant local:source_0 ;
    semsim:hasSinkParticipant local:sink_0 ;
    semsim:hasPhysicalProperty opb:OPB_01058 .

local:diff_1 semsim:hasSourceParticipant local:source_1, local:source_2 ;
    semsim:hasSinkParticipant local:sink_1 .

local:source_only semsim:hasSourceParticipant local:source_3 .

local:sink_only semsim:hasSinkParticipant local:sink_4 .
"""


def _load_turtle(text: str) -> Graph:
    graph = Graph()
    graph.parse(data=text, format="turtle")
    return graph


MANIFEST_XML = """<?xml version="1.0" encoding="UTF-8"?>
<omexManifest xmlns="http://identifiers.org/combine.specifications/omex-manifest">
  <content location="." format="http://identifiers.org/combine.specifications/omex"/>
  <content location="./manifest.xml" format="http://identifiers.org/combine.specifications/omex-manifest"/>
  <content location="./model.cellml" format="http://identifiers.org/combine.specifications/cellml"/>
  <content location="./metadata.ttl" format="http://identifiers.org/combine.specifications/omex-metadata"/>
  <content location="./processes.rdf" format="application/rdf+xml"/>
  <content location="./missing.rdf" format="application/rdf+xml"/>
</omexManifest>
"""

PROCESS_RDFXML = """<?xml version="1.0" encoding="UTF-8"?>
<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
         xmlns:semsim="http://www.bhi.washington.edu/semsim#">
  <rdf:Description rdf:about="http://omex-library.org/model.rdf#process_0">
    <semsim:hasSourceParticipant rdf:resource="http://omex-library.org/model.rdf#source_0"/>
    <semsim:hasSinkParticipant rdf:resource="http://omex-library.org/model.rdf#sink_0"/>
    <semsim:hasMediatorParticipant rdf:resource="http://omex-library.org/model.rdf#mediator_0"/>
  </rdf:Description>
</rdf:RDF>
"""


@pytest.fixture
def singular_graph() -> Graph:
    return _load_turtle(SINGULAR_TTL)


@pytest.fixture
def composite_graph() -> Graph:
    return _load_turtle(COMPOSITE_TTL)


@pytest.fixture
def process_graph() -> Graph:
    return _load_turtle(PROCESS_TTL)


@pytest.fixture
def energy_graph() -> Graph:
    return _load_turtle(ENERGY_TTL)


@pytest.fixture
def mixed_graph() -> Graph:
    return _load_turtle(SINGULAR_TTL + COMPOSITE_TTL.replace(PREFIXES, "") + PROCESS_TTL.replace(PREFIXES, ""))


@pytest.fixture
def archive_entries() -> dict[str, bytes]:
    """Entries of a small OMEX archive with one missing metadata file."""
    return {
        "manifest.xml": MANIFEST_XML.encode("utf-8"),
        "model.cellml": b"<model xmlns='http://www.cellml.org/cellml/1.1#' name='m'/>",
        "metadata.ttl": (SINGULAR_TTL + COMPOSITE_TTL.replace(PREFIXES, "")).encode("utf-8"),
        "processes.rdf": PROCESS_RDFXML.encode("utf-8"),
    }


@pytest.fixture
def omex_archive(tmp_path: Path, archive_entries: dict[str, bytes]) -> Path:
    path = tmp_path / "model.omex"
    with ZipFile(path, "w") as archive:
        for name, payload in archive_entries.items():
            archive.writestr(name, payload)
    return path
