"""CLI output formatting utilities for human-readable display."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass

from ..core.domain.models import OptionsSnapshot, ReportingResult


def format_reporting_result(result: object) -> str:
    """Format an analysis result for human-readable CLI output."""
    lines = []
    lines.append("=" * 80)
    lines.append("ANALYSIS RESULT")
    lines.append("=" * 80)

    if result is None:
        lines.append("\nNo result was returned by the analysis service.")
        lines.append("=" * 80)
        return "\n".join(lines)

    if not isinstance(result, ReportingResult):
        lines.append(f"\n{result}")
        lines.append("=" * 80)
        return "\n".join(lines)

    if result.submission_id:
        lines.append(f"\nSubmission: {result.submission_id}")

    if result.targets:
        lines.append("\nTargets:")
        for target in result.targets:
            lines.append(f"  - {target}")

    if result.missing_dependencies:
        lines.append(f"\nMissing dependencies ({len(result.missing_dependencies)}):")
        for dep in result.missing_dependencies:
            lines.append(f"  - {dep}")

    if result.unresolved_user_assemblies:
        lines.append(f"\nUnresolved assemblies ({len(result.unresolved_user_assemblies)}):")
        for asm in result.unresolved_user_assemblies:
            lines.append(f"  - {asm}")

    lines.append("\n" + "=" * 80)
    return "\n".join(lines)


def format_options(snapshot: OptionsSnapshot) -> str:
    """Format the resolved options for display."""
    lines = [f"Output: {snapshot.output_path}"]
    lines.append(f"Formats: {', '.join(snapshot.selected_format_names) or '(none)'}")
    lines.append(f"Save metadata: {'yes' if snapshot.save_metadata else 'no'}")

    lines.append("Targets:")
    if not snapshot.targets:
        lines.append("  (none)")
    for platform in snapshot.targets:
        selected = [v.version for v in platform.versions if v.selected]
        lines.append(f"  {platform.name}: {', '.join(selected) or '-'}")

    if snapshot.invalid_targets:
        lines.append("Unsupported platforms:")
        for platform in snapshot.invalid_targets:
            lines.append(f"  {platform.name}")

    return "\n".join(lines)


def result_to_dict(result: object) -> object:
    if is_dataclass(result) and not isinstance(result, type):
        return asdict(result)
    return result
