from __future__ import annotations

from pathlib import Path
from typing import Any, Awaitable, Callable, Iterable, Protocol, TypeVar

from .domain.models import AnalysisOutcome, AnalysisRequest, OptionsSnapshot


T = TypeVar("T")


class CoordinationContextPort(Protocol):
    """Port for the single execution context host UI work must run on.

    Mirrors a UI thread affinity: every step that touches the host UI is
    scheduled through ``run_on``.
    """

    async def run_on(self, step: Callable[[], Awaitable[T]]) -> T:
        """Run ``step`` on the coordination context and return its result.

        Entering the context while already on it runs the step inline.

        Raises:
            ContextClosedError: If the context has been stopped
        """
        ...


class OptionsViewModelPort(Protocol):
    """Port for the host's analysis options view model."""

    async def update(self) -> None:
        """Refresh selection state. Idempotent; must be awaited before ``snapshot``."""
        ...

    def snapshot(self) -> OptionsSnapshot:
        """Return an immutable copy of the current selection state."""
        ...


class OutputWindowPort(Protocol):
    """Port for the host output surface."""

    async def show(self) -> None:
        ...

    def write_line(self, text: str) -> None:
        ...


class ReportViewerPort(Protocol):
    """Port for displaying generated reports."""

    async def view(self, paths: Iterable[Path]) -> None:
        ...


class ReportWriterPort(Protocol):
    """Port for persisting report content produced by the engine."""

    async def write_report(
        self,
        content: bytes,
        *,
        directory: Path,
        file_name: str,
        extension: str,
        overwrite: bool = False,
    ) -> Path:
        """Write a report and return the path actually used."""
        ...


class AnalysisEnginePort(Protocol):
    """Port for the external portability analysis engine."""

    async def analyze(
        self,
        request: AnalysisRequest,
        *,
        include_json: bool,
        writer: ReportWriterPort,
    ) -> AnalysisOutcome:
        """Analyze and write reports.

        Problems that prevent a report from being produced are recorded on
        the diagnostics log and signalled by an outcome with no paths.
        Anything else is raised.
        """
        ...


class DiagnosticsLogPort(Protocol):
    """Read side of the process-wide diagnostics log."""

    def __len__(self) -> int:
        ...

    def slice(self, start: int, stop: int) -> list[str]:
        ...


class IssueReporterPort(Protocol):
    """Write side of the diagnostics log, used by engines."""

    def report_issue(self, text: str) -> None:
        ...


class LoggerPort(Protocol):
    """Port for structured logging.

    Extra keyword fields are attached to the record as structured data.
    """

    def debug(self, message: str, **fields: Any) -> None:
        ...

    def info(self, message: str, **fields: Any) -> None:
        ...

    def warning(self, message: str, **fields: Any) -> None:
        ...

    def error(self, message: str, exc_info: bool = False, **fields: Any) -> None:
        ...

    def exception(self, message: str, **fields: Any) -> None:
        ...
