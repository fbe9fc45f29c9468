from __future__ import annotations

from dependency_injector import containers, providers

from .config import AppConfig
from ..core.services import AnalysisOrchestrator, DiagnosticsRelay, RequestOptionsBuilder
from ..core.usecases.analyze import AnalyzeUseCase
from ..infra.coordination import CoordinationContextResource
from ..infra.diagnostics_log import InMemoryDiagnosticsLog
from ..infra.engine import HttpAnalysisEngine
from ..infra.logging import SessionLogger
from ..infra.options_view_model import OptionsViewModel
from ..infra.output_window import ConsoleOutputWindow
from ..infra.report_viewer import ReportViewer
from ..infra.report_writer import FileReportWriter


class Container(containers.DeclarativeContainer):
    """DI container with Pydantic BaseSettings support."""

    config = providers.Configuration(pydantic_settings=[AppConfig()])

    # Overridden by the facade with AppConfig.report_directory
    report_directory = providers.Object(None)

    # Resources: initialized by init_resources(), released by shutdown_resources()
    logger = providers.Resource(
        SessionLogger,
        session_id=config.logging.session_id,
        logs_dir=config.directories.logs_dir,
        logger_name=config.logging.logger_name,
        console_output=config.logging.console_output,
        level=config.logging.level,
    )

    context = providers.Resource(CoordinationContextResource)

    # Process-wide diagnostics log shared by every session
    diagnostics_log = providers.Singleton(InMemoryDiagnosticsLog)

    # Host collaborators
    view_model = providers.Singleton(
        OptionsViewModel,
        output_directory=report_directory,
        default_output_name=config.options.default_output_name,
        formats=config.options.formats,
        save_metadata=config.options.save_metadata,
        options_file=config.options.options_file,
    )

    output_window = providers.Singleton(ConsoleOutputWindow)

    viewer = providers.Singleton(
        ReportViewer,
        logger=logger,
        open_reports=config.options.open_reports,
    )

    report_writer = providers.Factory(FileReportWriter, logger=logger)

    engine = providers.Singleton(
        HttpAnalysisEngine,
        endpoint=config.engine.endpoint,
        issues=diagnostics_log,
        logger=logger,
        timeout=config.engine.timeout,
        api_key=config.engine.api_key,
    )

    # Domain services
    relay = providers.Factory(DiagnosticsRelay, log=diagnostics_log)

    options_builder = providers.Factory(
        RequestOptionsBuilder,
        view_model=view_model,
        output=output_window,
        context=context,
        logger=logger,
    )

    analysis_orchestrator = providers.Factory(
        AnalysisOrchestrator,
        context=context,
        view_model=view_model,
        output=output_window,
        viewer=viewer,
        engine=engine,
        relay=relay,
        options_builder=options_builder,
        logger=logger,
    )

    # Use cases
    analyze_uc = providers.Factory(
        AnalyzeUseCase,
        orchestrator=analysis_orchestrator,
    )
