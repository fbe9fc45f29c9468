from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from pathlib import Path


class AnalyzeRequestFlags(enum.Flag):
    """Flags sent to the analysis engine alongside a request."""
    NONE = 0
    NO_TELEMETRY = enum.auto()
    SHOW_NON_PORTABLE_APIS = enum.auto()
    SHOW_BREAKING_CHANGES = enum.auto()


@dataclass(frozen=True)
class InputAssembly:
    """Input artifact reference.

    ``flag`` is carried to the engine as-is and always built as False.
    """
    path: str
    flag: bool = False


@dataclass(frozen=True)
class TargetVersion:
    platform: str
    version: str
    selected: bool = False

    def __str__(self) -> str:
        return f"{self.platform}, Version={self.version}"


@dataclass(frozen=True)
class TargetPlatform:
    """A selectable target platform with its versions in display order."""
    name: str
    versions: tuple[TargetVersion, ...] = ()

    @property
    def has_selection(self) -> bool:
        return any(v.selected for v in self.versions)


@dataclass(frozen=True)
class OutputFormat:
    name: str
    selected: bool = False


@dataclass(frozen=True)
class OptionsSnapshot:
    """Point-in-time copy of the options view model.

    Taken after the view model was refreshed so services never read live UI
    state directly.
    """
    targets: tuple[TargetPlatform, ...] = ()
    invalid_targets: tuple[TargetPlatform, ...] = ()
    formats: tuple[OutputFormat, ...] = ()
    output_directory: str = ""
    default_output_name: str = ""
    save_metadata: bool = True

    @property
    def selected_format_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.formats if f.selected)

    @property
    def output_path(self) -> str:
        return os.path.join(self.output_directory, self.default_output_name)


@dataclass(frozen=True)
class AnalysisRequest:
    """Immutable description of one analysis: inputs, targets, formats, flags."""
    entrypoint: str
    input_assemblies: frozenset[InputAssembly]
    targets: tuple[str, ...]
    output_formats: tuple[str, ...]
    output_file_name: str
    request_flags: AnalyzeRequestFlags
    referenced_packages: frozenset[str] = field(default_factory=frozenset)
    ignored_assembly_files: frozenset[str] = field(default_factory=frozenset)
    breaking_change_suppressions: frozenset[str] = field(default_factory=frozenset)
    invalid_input_files: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class ReportingResult:
    """Structured result returned by the portability service."""
    submission_id: str | None = None
    targets: tuple[str, ...] = ()
    missing_dependencies: tuple[str, ...] = ()
    unresolved_user_assemblies: tuple[str, ...] = ()
    raw: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class AnalysisOutcome:
    """What the engine hands back: written report paths plus its result.

    An empty ``paths`` means no report could be produced.
    """
    paths: tuple[Path, ...]
    result: object = None
