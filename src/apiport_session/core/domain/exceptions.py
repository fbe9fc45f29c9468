"""Domain exceptions for apiport_session."""

from __future__ import annotations


class ApiPortSessionError(Exception):
    """Base class for errors raised by apiport_session itself."""


class EngineRequestError(ApiPortSessionError):
    """Raised when the analysis service answers with a payload we cannot read.

    HTTP status failures are reported as issues instead; this is reserved for
    responses that claim success but are malformed.
    """

    def __init__(self, endpoint: str, message: str | None = None) -> None:
        self.endpoint = endpoint
        if message is None:
            message = f"Malformed response from analysis service: {endpoint}"
        super().__init__(message)


class OptionsDocumentError(ApiPortSessionError):
    """Raised when the options document cannot be parsed or validated."""

    def __init__(self, path: str, message: str | None = None) -> None:
        self.path = path
        if message is None:
            message = f"Invalid options document: {path}"
        super().__init__(message)


class ContextClosedError(ApiPortSessionError):
    """Raised when work is scheduled on a coordination context that has stopped."""

    def __init__(self, message: str = "Coordination context is not running") -> None:
        super().__init__(message)
