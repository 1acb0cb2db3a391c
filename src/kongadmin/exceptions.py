"""Exception hierarchy for kongadmin.

All exceptions inherit from :class:`KongAdminError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`kongadmin.exit_codes`.
The CLI entry point catches ``KongAdminError`` and exits with the matching
code; library callers catch the subclasses they care about.

Subclass hierarchy::

    KongAdminError (exit 1)
    +-- InvalidArgumentError  (exit 2)
    +-- TransportError        (exit 5)
    |   +-- BadRequestError   (exit 2)
    |   +-- AuthError         (exit 3)
    |   +-- NotFoundError     (exit 4)
    |   +-- ConflictError     (exit 5)
    |   +-- ServerError       (exit 5)
    |   +-- ConnectionError_  (exit 6)
    +-- DecodeError           (exit 7)
    +-- ConfigError           (exit 1)
"""

from __future__ import annotations

from typing import Optional

from kongadmin.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_DECODE_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_SERVER_ERROR,
)


class KongAdminError(Exception):
    """Base exception for all kongadmin errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidArgumentError(KongAdminError):
    """Raised when a required identifier is empty, before any request is sent."""

    exit_code = EXIT_INVALID_USAGE


class TransportError(KongAdminError):
    """Raised when a request cannot be completed or the server answers with an error status.

    Args:
        message: Human-readable error description.
        status_code: HTTP status of the failing response, or ``None`` when
            no response was received.
    """

    exit_code = EXIT_SERVER_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class BadRequestError(TransportError):
    """Raised on HTTP 400, typically a schema violation reported by the gateway."""

    exit_code = EXIT_INVALID_USAGE


class AuthError(TransportError):
    """Raised on HTTP 401 / 403 (missing or rejected admin token)."""

    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(TransportError):
    """Raised when the Admin API returns HTTP 404."""

    exit_code = EXIT_NOT_FOUND


class ConflictError(TransportError):
    """Raised on HTTP 409, e.g. a plugin of the same type already exists on the entity."""


class ServerError(TransportError):
    """Raised for HTTP 5xx and any other unclassified error status."""


class ConnectionError_(TransportError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class DecodeError(KongAdminError):
    """Raised when a response body or list item does not decode into the expected model."""

    exit_code = EXIT_DECODE_ERROR


class ConfigError(KongAdminError):
    """Raised for configuration problems (missing profiles, invalid JSON, bad credential sources)."""

    exit_code = EXIT_GENERIC_FAILURE
