from __future__ import annotations

import threading


class InMemoryDiagnosticsLog:
    """Process-wide, append-only list of issue messages.

    Engines append through ``report_issue``; sessions read by index. Nothing
    here ever removes an entry.
    """

    def __init__(self) -> None:
        self._issues: list[str] = []
        self._lock = threading.Lock()

    def report_issue(self, text: str) -> None:
        with self._lock:
            self._issues.append(text)

    def __len__(self) -> int:
        with self._lock:
            return len(self._issues)

    def slice(self, start: int, stop: int) -> list[str]:
        with self._lock:
            return self._issues[start:stop]

    @property
    def issues(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._issues)
