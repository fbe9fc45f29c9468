from __future__ import annotations

from .diagnostics_relay import DiagnosticsRelay
from .request_options_builder import ComposedRequest, RequestOptionsBuilder, compose_request, flatten_targets
from .analysis_orchestrator import AnalysisOrchestrator

__all__ = [
    "DiagnosticsRelay",
    "ComposedRequest",
    "RequestOptionsBuilder",
    "compose_request",
    "flatten_targets",
    "AnalysisOrchestrator",
]
