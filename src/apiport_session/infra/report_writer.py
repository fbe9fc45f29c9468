from __future__ import annotations

import asyncio
from pathlib import Path

from ..core.ports import LoggerPort


def unique_report_path(directory: Path, file_name: str, extension: str) -> Path:
    """First free path among ``name.ext``, ``name (1).ext``, ``name (2).ext`` ..."""
    extension = extension.lstrip(".")
    candidate = directory / f"{file_name}.{extension}"
    counter = 1
    while candidate.exists():
        candidate = directory / f"{file_name} ({counter}).{extension}"
        counter += 1
    return candidate


class FileReportWriter:
    """Writes report content to disk without blocking the event loop."""

    def __init__(self, *, logger: LoggerPort) -> None:
        self._logger = logger

    async def write_report(
        self,
        content: bytes,
        *,
        directory: Path,
        file_name: str,
        extension: str,
        overwrite: bool = False,
    ) -> Path:
        path = await asyncio.to_thread(self._write, content, Path(directory), file_name, extension, overwrite)
        self._logger.info("report_written", type="report_written", path=str(path), size=len(content))
        return path

    def _write(self, content: bytes, directory: Path, file_name: str, extension: str, overwrite: bool) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        if overwrite:
            path = directory / f"{file_name}.{extension.lstrip('.')}"
        else:
            path = unique_report_path(directory, file_name, extension)
        path.write_bytes(content)
        return path
