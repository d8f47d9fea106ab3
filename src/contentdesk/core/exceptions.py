"""Domain-specific exceptions.

All exceptions in the contentdesk system inherit from ContentDeskError,
making it easy to catch all system errors while still being able
to handle specific error types.

Errors that should reach an HTTP client derive from AppError, which
carries the status code the central exception handler renders.
"""

from __future__ import annotations


class ContentDeskError(Exception):
    """Base exception for all contentdesk errors."""

    pass


class ConfigurationError(ContentDeskError):
    """Unsafe or incomplete configuration detected at startup.

    Raised by Settings.validate() when the process would otherwise run
    with hardcoded JWT secrets outside a development environment.
    """

    pass


class AppError(ContentDeskError):
    """Application error carrying an HTTP status.

    Every rejection in the authorization chain and every handled failure
    in the services is raised as an AppError so that a single handler can
    format the JSON error body uniformly.

    Attributes:
        message: Client-facing error message.
        status_code: HTTP status to respond with.
    """

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize AppError.

        Args:
            message: Client-facing error message.
            status_code: HTTP status, defaults to the class status.
        """
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(AppError):
    """Conflict or validation failure (400)."""

    status_code = 400


class UnauthorizedError(AppError):
    """Caller could not be authenticated (401)."""

    status_code = 401


class ForbiddenError(AppError):
    """Caller is authenticated but not allowed (403)."""

    status_code = 403


class NotFoundError(AppError):
    """Resource id with no matching record (404)."""

    status_code = 404
