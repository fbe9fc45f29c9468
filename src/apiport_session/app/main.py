from __future__ import annotations

import asyncio
from typing import Iterable

from dependency_injector import providers

from .config import AppConfig
from .container import Container
from ..core.domain.models import OptionsSnapshot


def _create_container(config: AppConfig | None = None) -> Container:
    """Create and initialize a container.

    Args:
        config: Optional config. If None, loads from environment variables.

    Returns:
        Initialized container instance
    """
    container = Container()

    if config is None:
        config = AppConfig()

    container.config.from_pydantic(config)
    container.report_directory.override(providers.Object(config.report_directory))
    container.init_resources()

    return container


def analyze(
    entrypoint: str,
    assembly_paths: Iterable[str],
    *,
    installed_packages: Iterable[str] | None = None,
    include_json: bool = False,
    config: AppConfig | None = None,
) -> object:
    """Run one analyze-and-report session.

    Args:
        entrypoint: Root artifact to analyze (e.g., app.dll)
        assembly_paths: Input artifact paths
        installed_packages: Package identifiers referenced by the inputs
        include_json: Also produce a JSON report
        config: Optional config for testing. If None, loads from env vars.

    Returns:
        The analysis result returned by the engine
    """
    container = _create_container(config)
    try:
        uc = container.analyze_uc()
        return asyncio.run(
            uc.execute(
                entrypoint=entrypoint,
                assembly_paths=list(assembly_paths),
                installed_packages=list(installed_packages or ()),
                report_writer=container.report_writer(),
                include_json=include_json,
            )
        )
    finally:
        container.shutdown_resources()


def resolve_options(config: AppConfig | None = None) -> OptionsSnapshot:
    """Refresh the options view model and return its snapshot."""
    container = _create_container(config)
    try:
        view_model = container.view_model()
        asyncio.run(view_model.update())
        return view_model.snapshot()
    finally:
        container.shutdown_resources()
