from typing import Any, Optional


class MindLinkError(RuntimeError):
    """Base class for errors raised by the MindLink service."""


class MissingParameterError(MindLinkError):
    """Raised when a required request parameter is absent or empty."""

    def __init__(self, name: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"Missing required parameter: {name}")
        self.name = name


class FetchError(MindLinkError):
    """Raised when an upstream page cannot be retrieved.

    ``status`` and ``data`` carry the upstream response status and body when
    a response was received; both are ``None`` for transport failures.
    """

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        data: Any = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.data = data
