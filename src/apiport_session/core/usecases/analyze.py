from __future__ import annotations

from typing import Iterable

from ..ports import ReportWriterPort
from ..services import AnalysisOrchestrator


class AnalyzeUseCase:
    """Use case for running an analyze-and-report session.

    Thin layer that delegates to AnalysisOrchestrator.
    """

    def __init__(
        self,
        *,
        orchestrator: AnalysisOrchestrator,
    ) -> None:
        self._orchestrator = orchestrator

    async def execute(
        self,
        *,
        entrypoint: str,
        assembly_paths: Iterable[str],
        report_writer: ReportWriterPort,
        installed_packages: Iterable[str] | None = None,
        include_json: bool = False,
    ) -> object:
        return await self._orchestrator.run_session(
            entrypoint=entrypoint,
            assembly_paths=assembly_paths,
            installed_packages=installed_packages,
            report_writer=report_writer,
            include_json=include_json,
        )
