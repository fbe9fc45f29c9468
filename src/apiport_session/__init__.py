from .app.main import analyze, resolve_options

__all__ = [
    "analyze",
    "resolve_options",
]

# stdlib logging defaults: attach NullHandler to prevent 'No handler' warnings
import logging
_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())
