"""Pipeline phases for assembling and writing the export document."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

from .assembler import ExportGraph, ExportOptions, GraphAssembler
from .config import ExportSettings
from .pipeline.base import PhaseResult, PipelineContext, PipelinePhase
from .serializer import build_document
from .writer import write_document


def build_report(
    graph: ExportGraph,
    document: Dict[str, Any],
    options: ExportOptions,
    settings: ExportSettings,
) -> Dict[str, Any]:
    statistics = dict(graph.statistics)
    statistics.update(
        {
            "nodes": len(document["nodes"]),
            "links": len(document["links"]),
            "learning_outcomes": len(document["learning_outcomes"]),
            "keywords": len(document["keywords"]),
            "external_resources": len(document["external_resources"]),
        }
    )
    return {
        "statistics": statistics,
        "configuration": {
            "limit": options.limit,
            "strip": options.strip,
            "ka": options.category_id,
            "taxonomy_id": settings.taxonomy_id,
        },
    }


@dataclass(slots=True)
class ExportPhase(PipelinePhase):
    """Assemble the graph from the repository and serialize it."""

    options: ExportOptions = field(default_factory=ExportOptions)
    name: str = "export"

    def run(self, context: PipelineContext) -> PhaseResult:
        if not context.settings:
            raise ValueError("settings missing from pipeline context")
        if context.repository is None:
            raise ValueError("repository missing from pipeline context")
        assembler = GraphAssembler(context.repository, context.settings, self.options)
        graph = assembler.assemble()
        document = build_document(
            graph,
            strip=self.options.strip,
            label_max_length=context.settings.label_max_length,
        )
        report = build_report(graph, document, self.options, context.settings)
        context.extra.setdefault("export", {}).update({"document": document, "report": report})
        return PhaseResult(name=self.name, succeeded=True, details={"report": report})


@dataclass(slots=True)
class WritePhase(PipelinePhase):
    """Write the document produced by ``ExportPhase`` to ``output_path``."""

    output_path: Path
    name: str = "write"

    def run(self, context: PipelineContext) -> PhaseResult:
        document = context.extra.get("export", {}).get("document")
        if document is None:
            return PhaseResult(
                name=self.name,
                succeeded=False,
                error="no export document in pipeline context",
            )
        result = write_document(document, self.output_path)
        return PhaseResult(
            name=self.name,
            succeeded=True,
            details={"path": str(result.path), "bytes_written": result.bytes_written},
            error=result.error,
        )


__all__ = ["ExportPhase", "WritePhase", "build_report"]
