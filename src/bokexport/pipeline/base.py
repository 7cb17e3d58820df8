"""Sequential phase runner for the export pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence

from ..config import ExportSettings
from ..repository import ContentRepository

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class PipelineContext:
    """Settings, repository and the hand-off area shared by export phases."""

    settings: Optional[ExportSettings] = None
    repository: Optional[ContentRepository] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class PhaseResult:
    """Outcome of one phase.

    ``error`` carries a non-fatal problem (e.g. an encoding failure while
    writing) for a phase that still succeeded; a failed phase stops the run.
    """

    name: str
    succeeded: bool
    details: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None


class PipelinePhase(Protocol):
    name: str

    def run(self, context: PipelineContext) -> PhaseResult:
        ...


class PipelineRunner:
    """Run phases in order against one context, stopping at the first failure."""

    def __init__(
        self,
        phases: Sequence[PipelinePhase],
        context: PipelineContext,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._phases = list(phases)
        self._context = context
        self._logger = logger or _LOGGER
        self._results: Dict[str, PhaseResult] = {}

    @property
    def results(self) -> List[PhaseResult]:
        return list(self._results.values())

    @property
    def errors(self) -> Dict[str, str]:
        """Non-fatal errors reported by completed phases, keyed by phase name."""

        return {name: result.error for name, result in self._results.items() if result.error}

    def result(self, name: str) -> PhaseResult:
        """Return the result of phase ``name``; raise if it did not complete."""

        result = self._results.get(name)
        if result is None or not result.succeeded:
            raise RuntimeError(f"{name.capitalize()} phase failed")
        return result

    def run(self) -> List[PhaseResult]:
        self._results.clear()
        for phase in self._phases:
            self._logger.info("Running %s phase", phase.name)
            result = phase.run(self._context)
            self._results[result.name] = result
            if result.error:
                self._logger.warning("%s phase reported: %s", result.name, result.error)
            if not result.succeeded:
                self._logger.error("%s phase failed; skipping remaining phases", result.name)
                break
        return self.results


__all__ = [
    "PhaseResult",
    "PipelineContext",
    "PipelinePhase",
    "PipelineRunner",
]
