from __future__ import annotations

from ..ports import DiagnosticsLogPort


class DiagnosticsRelay:
    """Reads the slice of the diagnostics log produced since a mark.

    The log is shared by every session in the process. Sessions running
    concurrently can see each other's issues in their slice.
    """

    def __init__(self, *, log: DiagnosticsLogPort) -> None:
        self._log = log

    def mark(self) -> int:
        return len(self._log)

    def issues_since(self, before: int) -> list[str]:
        if before < 0:
            raise ValueError(f"before must be non-negative, got {before}")
        return self._log.slice(before, len(self._log))
