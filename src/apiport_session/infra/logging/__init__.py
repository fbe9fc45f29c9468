from __future__ import annotations

from .logger import SessionLogger
from .handlers import build_json_file_handler, build_human_console_handler
from .formatters import JSONFormatter

__all__ = [
    "SessionLogger",
    "build_json_file_handler",
    "build_human_console_handler",
    "JSONFormatter",
]
