"""Export GIS&T Body of Knowledge content as a Living Textbook graph document."""

from .assembler import ExportGraph, ExportOptions, GraphAssembler
from .serializer import build_document

__all__ = ["ExportGraph", "ExportOptions", "GraphAssembler", "build_document"]
