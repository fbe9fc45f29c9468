from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from dependency_injector.resources import Resource

from .handlers import build_json_file_handler, build_human_console_handler


class SessionLogger(Resource):
    """Structured logger for analysis sessions.

    Writes one JSONL file per session id when one is given, and optionally
    mirrors records to the console in a human-readable format.
    """

    def init(
        self,
        *,
        session_id: str | None = None,
        logs_dir: Path,
        logger_name: str = "apiport_session",
        console_output: bool = False,
        level: str = "INFO",
    ) -> "SessionLogger":
        """Attach handlers to the named logger.

        Args:
            session_id: Session identifier; when set, logs go to ``{logs_dir}/{session_id}.jsonl``
            logs_dir: Directory to store log files
            logger_name: Logger name
            console_output: Whether to enable console output
            level: Logging level (DEBUG, INFO, WARNING, ERROR)

        Returns:
            Self for dependency_injector Resource pattern
        """
        numeric_level = getattr(logging, level.upper())
        self._logger = logging.getLogger(logger_name)
        self._logger.setLevel(numeric_level)
        self._logger.propagate = False

        self._logger.handlers.clear()
        self._handlers: list[logging.Handler] = []

        if session_id:
            file_handler = build_json_file_handler(logs_dir / f"{session_id}.jsonl", level=numeric_level)
            self._logger.addHandler(file_handler)
            self._handlers.append(file_handler)

        if console_output:
            console_handler = build_human_console_handler(level=numeric_level)
            self._logger.addHandler(console_handler)
            self._handlers.append(console_handler)

        return self

    def shutdown(self, resource: "SessionLogger") -> None:
        """Flush and close every handler this logger opened."""
        for handler in self._handlers:
            handler.flush()
            handler.close()

        self._logger.handlers.clear()

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs, exc_info=exc_info)

    def exception(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs, exc_info=True)

    def _log(self, level: int, message: str, fields: dict[str, Any], exc_info: bool = False) -> None:
        if fields:
            self._logger.log(level, message, extra=fields, exc_info=exc_info)
        else:
            self._logger.log(level, message, exc_info=exc_info)
