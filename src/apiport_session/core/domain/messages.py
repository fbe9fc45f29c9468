"""User-facing text written to the output surface during a session."""

from __future__ import annotations


LIST_ITEM = "- {issue}"

INVALID_PLATFORM_SELECTED = (
    "The platform '{name}' is no longer supported by the analysis service "
    "and will be ignored. Please update your target selection."
)

USING_DEFAULT_TARGETS = "No target platforms were selected. The default targets will be used."

TARGET_SELECTION_GUIDANCE = (
    "To choose target platforms, open the portability analyzer options "
    "and select one or more platform versions."
)


def format_list_item(issue: str) -> str:
    return LIST_ITEM.format(issue=issue)


def format_invalid_platform(name: str) -> str:
    return INVALID_PLATFORM_SELECTED.format(name=name)
