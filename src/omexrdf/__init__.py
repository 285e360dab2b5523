"""Annotation extraction and identifier normalization for OMEX metadata graphs."""

__version__ = "0.1.0"
