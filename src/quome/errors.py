"""Error taxonomy shared by the Quome CLI core.

Every failure the core can report is a subclass of :class:`QuomeError`.
Commands never catch these; they propagate to the error boundary in
:func:`quome.cli.main.run`, which renders the message and exits non-zero.
"""

from __future__ import annotations
from pathlib import Path


class QuomeError(RuntimeError):
    """Base class for every error surfaced by the CLI."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        """Store the user-facing message with an optional follow-up hint."""
        super().__init__(message)
        self.message = message
        self.hint = hint


class NotLoggedInError(QuomeError):
    """Raised when no API token can be resolved."""

    def __init__(self) -> None:
        """Initialise the error with the login hint."""
        super().__init__("Not logged in.", hint="Run `quome login` first.")


class NoLinkedOrgError(QuomeError):
    """Raised when no organization can be resolved for the invocation."""

    def __init__(self) -> None:
        """Initialise the error with the link hint."""
        super().__init__(
            "No linked organization.",
            hint="Run `quome link` or pass --org to select one.",
        )


class NoLinkedAppError(QuomeError):
    """Raised when no application can be resolved for the invocation."""

    def __init__(self) -> None:
        """Initialise the error with the link hint."""
        super().__init__(
            "No linked application.",
            hint="Run `quome link` or pass --app to select one.",
        )


class UnauthorizedError(QuomeError):
    """Raised when the API rejects the credential with HTTP 401."""

    def __init__(self) -> None:
        """Initialise the error with the re-authentication hint."""
        super().__init__(
            "Unauthorized. Your session may have expired.",
            hint="Run `quome login` to authenticate again.",
        )


class NotFoundError(QuomeError):
    """Raised when the requested resource does not exist."""

    def __init__(self, detail: str) -> None:
        """Keep the server supplied detail for display."""
        super().__init__(f"Not found: {detail}")
        self.detail = detail


class RateLimitedError(QuomeError):
    """Raised when the API answers with HTTP 429."""

    def __init__(self) -> None:
        """Initialise the error with a wait hint."""
        super().__init__(
            "Rate limited.", hint="Please wait a moment and try again."
        )


class InvalidInputError(QuomeError):
    """Raised when local input is rejected before any network call."""

    def __init__(self, detail: str) -> None:
        """Keep the validation detail for display."""
        super().__init__(f"Invalid input: {detail}")
        self.detail = detail


class ApiError(QuomeError):
    """Raised for any other non-2xx API response."""

    def __init__(self, detail: str, *, status_code: int | None = None) -> None:
        """Store the detail along with the HTTP status code."""
        super().__init__(f"API error: {detail}")
        self.detail = detail
        self.status_code = status_code


class CorruptStateError(QuomeError):
    """Raised when the persisted config exists but cannot be parsed."""

    def __init__(self, path: Path, reason: str | None = None) -> None:
        """Record which file failed to parse."""
        message = f"Config file {path} is corrupt"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message, hint=f"Fix or remove {path} and run `quome login` again."
        )
        self.path = path


class TransportError(QuomeError):
    """Raised when the HTTP exchange itself fails."""


class TransportTimeoutError(TransportError):
    """Raised when a request exceeds the configured timeout."""


class InvalidResponseError(TransportError):
    """Raised when a successful response body cannot be decoded."""


__all__ = [
    "ApiError",
    "CorruptStateError",
    "InvalidInputError",
    "InvalidResponseError",
    "NoLinkedAppError",
    "NoLinkedOrgError",
    "NotFoundError",
    "NotLoggedInError",
    "QuomeError",
    "RateLimitedError",
    "TransportError",
    "TransportTimeoutError",
    "UnauthorizedError",
]
