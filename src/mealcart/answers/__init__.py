"""Reconciliation of raw model answers into presentation modes."""

from .dispatcher import render_extraction, render_response
from .exporter import export_as_text, export_filename
from .extractor import extract, find_fenced_block
from .shapes import DEFAULT_REGISTRY, ShapeEntry, ShapeRegistry, classify, normalize

__all__ = [
    "DEFAULT_REGISTRY",
    "ShapeEntry",
    "ShapeRegistry",
    "classify",
    "export_as_text",
    "export_filename",
    "extract",
    "find_fenced_block",
    "normalize",
    "render_extraction",
    "render_response",
]
