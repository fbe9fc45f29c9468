from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..domain import messages
from ..domain.models import (
    AnalysisRequest,
    AnalyzeRequestFlags,
    InputAssembly,
    OptionsSnapshot,
)
from ..ports import (
    CoordinationContextPort,
    LoggerPort,
    OptionsViewModelPort,
    OutputWindowPort,
)


@dataclass(frozen=True)
class ComposedRequest:
    request: AnalysisRequest
    advisories: tuple[str, ...]


def flatten_targets(snapshot: OptionsSnapshot) -> tuple[str, ...]:
    """Selected versions of every platform, platforms then versions in display order."""
    return tuple(
        str(version)
        for platform in snapshot.targets
        for version in platform.versions
        if version.selected
    )


def compose_request(
    snapshot: OptionsSnapshot,
    *,
    entrypoint: str,
    assembly_paths: Iterable[str],
    formats: Iterable[str],
    referenced_packages: Iterable[str] | None,
    output_file_name: str,
) -> ComposedRequest:
    """Build an AnalysisRequest from a snapshot of the options.

    Pure: the advisory lines are returned rather than written so callers
    decide where they go.
    """
    advisories: list[str] = []

    for platform in snapshot.invalid_targets:
        if platform.has_selection:
            advisories.append(messages.format_invalid_platform(platform.name))

    targets = flatten_targets(snapshot)
    if not targets:
        advisories.append(messages.USING_DEFAULT_TARGETS)
        advisories.append(messages.TARGET_SELECTION_GUIDANCE)

    flags = AnalyzeRequestFlags.SHOW_NON_PORTABLE_APIS
    if not snapshot.save_metadata:
        flags |= AnalyzeRequestFlags.NO_TELEMETRY

    request = AnalysisRequest(
        entrypoint=entrypoint,
        input_assemblies=frozenset(InputAssembly(path=str(p), flag=False) for p in assembly_paths),
        targets=targets,
        output_formats=tuple(formats),
        output_file_name=output_file_name,
        request_flags=flags,
        referenced_packages=frozenset(referenced_packages or ()),
    )
    return ComposedRequest(request=request, advisories=tuple(advisories))


class RequestOptionsBuilder:
    """Turns the current options selection into an immutable AnalysisRequest."""

    def __init__(
        self,
        *,
        view_model: OptionsViewModelPort,
        output: OutputWindowPort,
        context: CoordinationContextPort,
        logger: LoggerPort,
    ) -> None:
        self._view_model = view_model
        self._output = output
        self._context = context
        self._logger = logger

    async def build(
        self,
        *,
        entrypoint: str,
        assembly_paths: Iterable[str],
        formats: Iterable[str],
        referenced_packages: Iterable[str] | None,
        output_file_name: str,
    ) -> AnalysisRequest:
        """Refresh the options, compose the request and write any advisories.

        Args:
            entrypoint: Root artifact to analyze
            assembly_paths: Input artifact paths
            formats: Output format names
            referenced_packages: Package identifiers referenced by the inputs
            output_file_name: Destination base path for reports

        Returns:
            The composed request
        """
        await self._view_model.update()

        async def _compose() -> AnalysisRequest:
            composed = compose_request(
                self._view_model.snapshot(),
                entrypoint=entrypoint,
                assembly_paths=assembly_paths,
                formats=formats,
                referenced_packages=referenced_packages,
                output_file_name=output_file_name,
            )
            for line in composed.advisories:
                self._output.write_line(line)
                self._logger.warning("request_advisory", type="request_advisory", text=line)
            return composed.request

        return await self._context.run_on(_compose)
