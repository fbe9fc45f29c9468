from __future__ import annotations

from typing import Iterable

from ..domain import messages
from ..ports import (
    AnalysisEnginePort,
    CoordinationContextPort,
    LoggerPort,
    OptionsViewModelPort,
    OutputWindowPort,
    ReportViewerPort,
    ReportWriterPort,
)
from .diagnostics_relay import DiagnosticsRelay
from .request_options_builder import RequestOptionsBuilder


class AnalysisOrchestrator:
    """Orchestrates one analyze-and-report session.

    Activates the host output surface, builds the request from the current
    options, runs the external engine and hands the reports to the viewer.
    When no report comes back, the issues the engine recorded during this
    session are echoed to the output surface.
    """

    def __init__(
        self,
        *,
        context: CoordinationContextPort,
        view_model: OptionsViewModelPort,
        output: OutputWindowPort,
        viewer: ReportViewerPort,
        engine: AnalysisEnginePort,
        relay: DiagnosticsRelay,
        options_builder: RequestOptionsBuilder,
        logger: LoggerPort,
    ) -> None:
        self._context = context
        self._view_model = view_model
        self._output = output
        self._viewer = viewer
        self._engine = engine
        self._relay = relay
        self._options_builder = options_builder
        self._logger = logger

    async def run_session(
        self,
        *,
        entrypoint: str,
        assembly_paths: Iterable[str],
        installed_packages: Iterable[str] | None,
        report_writer: ReportWriterPort,
        include_json: bool,
    ) -> object:
        """Execute a complete session.

        Args:
            entrypoint: Root artifact to analyze
            assembly_paths: Input artifact paths
            installed_packages: Package identifiers referenced by the inputs
            report_writer: Writer the engine uses for report files
            include_json: Also request a JSON report

        Returns:
            The engine's structured analysis result
        """
        assembly_paths = list(assembly_paths)
        self._logger.info(
            "session_started",
            type="session_started",
            entrypoint=entrypoint,
            assembly_count=len(assembly_paths),
            include_json=include_json,
        )

        async def _steps() -> object:
            # 1) Surface the output pane and refresh the options
            await self._output.show()
            await self._view_model.update()

            snapshot = self._view_model.snapshot()

            # 2) Compose the request
            request = await self._options_builder.build(
                entrypoint=entrypoint,
                assembly_paths=assembly_paths,
                formats=snapshot.selected_format_names,
                referenced_packages=installed_packages,
                output_file_name=snapshot.output_path,
            )
            self._logger.info(
                "request_built",
                type="request_built",
                targets=list(request.targets),
                formats=list(request.output_formats),
                output_file_name=request.output_file_name,
                flags=request.request_flags.value,
            )

            # 3) Run the engine
            issues_before = self._relay.mark()
            outcome = await self._engine.analyze(request, include_json=include_json, writer=report_writer)
            self._logger.info(
                "engine_completed",
                type="engine_completed",
                paths=[str(p) for p in outcome.paths],
            )

            # 4) Echo this session's issues when nothing was produced
            if not outcome.paths:
                issues = self._relay.issues_since(issues_before)
                self._logger.warning("no_reports_produced", type="no_reports_produced", issues=issues)
                for issue in issues:
                    self._output.write_line(messages.format_list_item(issue))

            # 5) Show whatever was produced
            await self._viewer.view(outcome.paths)

            return outcome.result

        try:
            result = await self._context.run_on(_steps)
        except Exception:
            self._logger.exception("session_failed", type="session_failed", entrypoint=entrypoint)
            raise

        self._logger.info("session_finished", type="session_finished", entrypoint=entrypoint)
        return result
