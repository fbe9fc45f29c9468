from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Iterable

import typer

from ..core.ports import LoggerPort


class ReportViewer:
    """Lists generated reports and optionally opens them with the system handler."""

    def __init__(self, *, logger: LoggerPort, open_reports: bool = False) -> None:
        self._logger = logger
        self._open_reports = open_reports

    async def view(self, paths: Iterable[Path]) -> None:
        paths = tuple(Path(p) for p in paths)
        self._logger.info("reports_viewed", type="reports_viewed", paths=[str(p) for p in paths])

        if not paths:
            typer.echo("No reports were generated.")
            return

        typer.echo("Reports:")
        for path in paths:
            typer.echo(f"  {path}")
            if self._open_reports:
                await asyncio.to_thread(typer.launch, str(path))
