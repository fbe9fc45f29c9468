"""Tests for AnalyzeUseCase."""
from pathlib import Path

import pytest

from apiport_session.core.domain.models import AnalysisOutcome
from apiport_session.core.services import AnalysisOrchestrator, DiagnosticsRelay, RequestOptionsBuilder
from apiport_session.core.usecases.analyze import AnalyzeUseCase

from fakes import (
    FakeContext,
    FakeDiagnosticsLog,
    FakeEngine,
    FakeLogger,
    FakeOutput,
    FakeViewer,
    FakeViewModel,
    FakeWriter,
    make_snapshot,
    platform,
)


@pytest.mark.asyncio
async def test_analyze_usecase_executes_full_flow():
    """AnalyzeUseCase delegates to the orchestrator."""
    context = FakeContext()
    view_model = FakeViewModel(make_snapshot(targets=(platform(".NET Core", ["3.1"]),)))
    output = FakeOutput()
    viewer = FakeViewer()
    engine = FakeEngine(AnalysisOutcome(paths=(Path("/r/a.html"),), result="done"))
    logger = FakeLogger()

    orchestrator = AnalysisOrchestrator(
        context=context,
        view_model=view_model,
        output=output,
        viewer=viewer,
        engine=engine,
        relay=DiagnosticsRelay(log=FakeDiagnosticsLog()),
        options_builder=RequestOptionsBuilder(view_model=view_model, output=output, context=context, logger=logger),
        logger=logger,
    )
    uc = AnalyzeUseCase(orchestrator=orchestrator)

    result = await uc.execute(entrypoint="app.dll", assembly_paths=["app.dll"], report_writer=FakeWriter())

    assert result == "done"
    assert engine.calls[0][1] is False
    assert engine.calls[0][0].referenced_packages == frozenset()
    assert viewer.viewed == [(Path("/r/a.html"),)]
    assert logger.messages()[0] == "session_started"
    assert logger.messages()[-1] == "session_finished"
