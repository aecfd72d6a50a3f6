"""Custom exceptions raised by framekit."""

from __future__ import annotations

from typing import Any, Optional


class FramekitError(Exception):
    """Base exception for all framekit specific failures."""


class NetworkError(FramekitError):
    """Raised when the API cannot be reached at all."""


class HttpError(FramekitError):
    """Raised when the API returns a non-successful response."""

    def __init__(self, message: str, status_code: int, response: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response

    def __str__(self) -> str:  # pragma: no cover - repr helper
        return f"{self.status_code}: {self.message}"


class AuthenticationError(HttpError):
    """Raised when an API key is rejected by the server."""

    def __init__(self, message: str, response: Optional[Any] = None):
        super().__init__(message, 401, response)


class NotAuthenticated(FramekitError):
    """Raised when no API key is configured."""


class AuthError(FramekitError):
    """Raised when a device authorization request ends without a key."""


class AuthExpired(AuthError):
    pass


class AuthConsumed(AuthError):
    pass


class AuthUnknownStatus(AuthError):
    def __init__(self, status: str):
        super().__init__(f"Received an unknown polling status {status}.")
        self.status = status


class UnresolvedPlaceholder(FramekitError):
    """Raised when a template references a variable missing from the context."""

    def __init__(self, key: str):
        super().__init__(f"no template variable {key}")
        self.key = key


class PathInvalid(FramekitError):
    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class ChildProcessFailed(FramekitError):
    """Raised when an install or git command exits unsuccessfully."""

    def __init__(self, command: str, returncode: int | None, output: str = ""):
        message = f"Command `{command}` failed"
        if returncode is not None:
            message += f" with exit code {returncode}"
        if output:
            message += f":\n{output.strip()}"
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.output = output


class PromptCancelled(FramekitError):
    """Raised when the user cancels an interactive prompt."""
